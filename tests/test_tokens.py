"""Tests for muscle token normalization and focus token tables."""

import pytest

from app.ml.planning import ExerciseRecord
from app.ml.planning.constants import MuscleTokens
from app.ml.planning.tokens import (
    exercise_text,
    exercise_token,
    focus_target_tokens,
    is_core_exercise,
    normalize_token,
    tokens_needed_for,
)


class TestNormalizeToken:
    """Test normalize_token rule ordering and fallbacks."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("abs", "core"),
            ("Abdominals", "core"),
            ("Obliques", "core"),
            ("pectorals", "pectorals"),
            ("Chest", "pectorals"),
            ("lats", "back"),
            ("upper back", "back"),
            ("traps", "back"),
            ("delts", "deltoids"),
            ("Shoulders", "deltoids"),
            ("biceps", "biceps"),
            ("triceps", "triceps"),
            ("quads", "legs"),
            ("glutes", "legs"),
            ("calves", "legs"),
            ("cardiovascular system", "cardio"),
        ],
    )
    def test_catalog_values(self, text, expected):
        """Test catalog target values map to canonical tokens."""
        assert normalize_token(text) == expected

    def test_leg_adductors_win_over_core(self):
        """Test abductor/adductor/hamstring map to legs even though they contain 'ab'."""
        assert normalize_token("abductors") == "legs"
        assert normalize_token("adductors") == "legs"
        assert normalize_token("hamstrings") == "legs"

    def test_unmapped_text_is_stripped(self):
        """Test unmapped text is lowercased with non-alphanumerics removed."""
        assert normalize_token("Serratus Anterior") == "serratusanterior"
        assert normalize_token("forearms") == "forearms"

    def test_empty_input(self):
        """Test None and empty strings yield an empty token."""
        assert normalize_token(None) == ""
        assert normalize_token("") == ""

    def test_canonical_outputs_are_closed(self):
        """Test every catalog target maps into the canonical set or stays unmapped."""
        mapped = {normalize_token(t) for t in MuscleTokens.CATALOG_TARGETS}
        unmapped = mapped - MuscleTokens.CANONICAL
        assert unmapped == {"forearms", "levatorscapulae", "serratusanterior"}


class TestExerciseToken:
    """Test exercise_token field precedence."""

    def test_target_first(self):
        """Test target wins over muscle group."""
        exercise = ExerciseRecord(id=1, name="Cable Fly", muscle_group="arms", target="pectorals")
        assert exercise_token(exercise) == "pectorals"

    def test_falls_back_to_muscle_group(self):
        """Test muscle group is used when target is missing."""
        exercise = ExerciseRecord(id=1, name="Mystery", muscle_group="shoulders")
        assert exercise_token(exercise) == "deltoids"

    def test_falls_back_to_name(self):
        """Test name is used when no muscle fields are set."""
        exercise = ExerciseRecord(id=1, name="Front Plank")
        assert exercise_token(exercise) == "frontplank"

    def test_exercise_text_is_lowercase(self):
        """Test searchable text joins all fields lowercased."""
        exercise = ExerciseRecord(
            id=1, name="Hip Thrust", muscle_group="Legs", target="Glutes", secondary_muscles="Hamstrings"
        )
        assert exercise_text(exercise) == "glutes legs hamstrings hip thrust"


class TestFocusTargetTokens:
    """Test focus label → target token lookup."""

    def test_core_focus(self):
        """Test Core & Abs resolves to core tokens."""
        assert "abs" in focus_target_tokens("Core & Abs")

    def test_push_resolves_through_chest(self):
        """Test Push label resolves via its chest fragment."""
        assert focus_target_tokens("Push (Chest/Shoulders/Triceps)") == ("pectorals", "chest", "pec")

    def test_unknown_label(self):
        """Test generic labels yield no tokens."""
        assert focus_target_tokens("Day 9") == ()
        assert focus_target_tokens(None) == ()

    def test_tokens_needed_intersects_catalog_vocabulary(self):
        """Test needed tokens keep only catalog target values in first-seen order."""
        needed = tokens_needed_for(["Push (Chest/Shoulders/Triceps)", "Pull (Back/Biceps)", "Legs"])
        assert needed == ["pectorals", "lats", "hamstrings", "glutes", "calves", "adductors", "abductors"]

    def test_tokens_needed_deduplicates(self):
        """Test repeated focuses do not repeat tokens."""
        assert tokens_needed_for(["Chest", "Chest"]) == ["pectorals"]


class TestIsCoreExercise:
    """Test core exercise detection."""

    def test_core_token(self):
        assert is_core_exercise("Hanging Knee Raise", "core")

    def test_name_hints(self):
        """Test plank and crunch names count as core regardless of token."""
        assert is_core_exercise("Side Plank", "serratusanterior")
        assert is_core_exercise("Cable Crunch", "")

    def test_not_core(self):
        assert not is_core_exercise("Barbell Curl", "biceps")
