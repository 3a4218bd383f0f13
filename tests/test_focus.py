"""Tests for the weekly split planner, focus resolution and plan naming."""

import pytest

from app.ml.planning import ExerciseRecord, Focus, build_plan_name, planned_focuses, resolve_focus


class TestPlannedFocuses:
    """Test the days-per-week split table."""

    def test_one_day(self):
        assert planned_focuses(1) == ["Full Body"]

    def test_two_days(self):
        assert planned_focuses(2) == ["Upper Body", "Lower Body"]

    def test_three_days(self):
        assert planned_focuses(3) == [
            "Push (Chest/Shoulders/Triceps)",
            "Pull (Back/Biceps)",
            "Legs",
        ]

    def test_splits_grow_incrementally(self):
        """Test 5-7 day splits extend the 4-day split in order."""
        four = planned_focuses(4)
        assert four == ["Chest", "Back", "Legs", "Shoulders"]
        assert planned_focuses(5) == four + ["Arms"]
        assert planned_focuses(6) == four + ["Arms", "Core & Abs"]
        assert planned_focuses(7) == four + ["Arms", "Core & Abs", "Cardio & Conditioning"]

    def test_more_than_seven_days(self):
        """Test frequencies above 7 fall back to generic labels."""
        assert planned_focuses(9) == [f"Day {i}" for i in range(1, 10)]

    @pytest.mark.parametrize("value", [0, -3, None, "abc"])
    def test_invalid_input_defaults_to_one_day(self, value):
        assert planned_focuses(value) == ["Full Body"]

    def test_every_split_label_is_allowed(self):
        """Test 1-7 day splits only use allowed focus labels."""
        for days in range(1, 8):
            assert set(planned_focuses(days)) <= Focus.labels()


class TestResolveFocus:
    """Test focus label resolution for generic day labels."""

    def test_allowed_label_kept(self):
        assert resolve_focus("Pull (Back/Biceps)") == "Pull (Back/Biceps)"

    def test_generic_label_inferred_from_muscle_groups(self):
        """Test the most common muscle group decides the focus."""
        exercises = [
            ExerciseRecord(id=1, name="A", muscle_group="chest"),
            ExerciseRecord(id=2, name="B", muscle_group="chest"),
            ExerciseRecord(id=3, name="C", muscle_group="legs"),
        ]
        assert resolve_focus("Day 8", exercises) == "Chest"

    def test_generic_label_defaults_to_full_body(self):
        assert resolve_focus("Day 8", []) == "Full Body"


class TestBuildPlanName:
    """Test deterministic plan naming."""

    def test_fixed_names(self):
        assert build_plan_name(1, "strength", []) == "1-Day Full Body Routine"
        assert build_plan_name(2, "strength", []) == "2-Day Upper/Lower Split"
        assert build_plan_name(3, None, []) == "3-Day Push/Pull/Legs Program"

    def test_four_day_split_from_focuses(self):
        name = build_plan_name(4, "strength", ["Chest", "Back", "Legs", "Shoulders"])
        assert name == "4-Day Chest/Back/Legs/Shoulders Split"

    def test_five_day_split_deduplicates(self):
        """Test duplicate focuses are listed once."""
        name = build_plan_name(5, None, ["Chest", "Chest", "Back", "Legs", "Arms"])
        assert name == "5-Day Chest/Back/Legs/Arms Split"

    def test_ampersand_spacing_normalized(self):
        name = build_plan_name(4, None, ["Core  &  Abs", "Back"])
        assert name == "4-Day Core & Abs/Back Split"

    def test_fallback_when_focuses_missing(self):
        """Test fewer than two distinct focuses use the fixed fallback."""
        assert build_plan_name(4, None, ["Chest"]) == "4-Day Targeted Muscle Split"
        assert build_plan_name(5, None, [None, ""]) == "5-Day Strength & Conditioning"

    def test_six_plus_days_use_goal(self):
        assert build_plan_name(6, "endurance", []) == "6-Day Endurance Program"
        assert build_plan_name(7, "", []) == "7-Day Training Program"
        assert build_plan_name(10, None, []) == "10-Day Training Program"
