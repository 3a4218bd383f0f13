"""Token normalization for free-text muscle and target strings.

Every function here is pure and total: ``None`` or empty input yields an
empty string or empty tuple, never an exception.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from app.ml.planning.constants import FocusTables, MuscleTokens

if TYPE_CHECKING:
    from app.ml.planning.types import ExerciseRecord

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def normalize_token(text: str | None) -> str:
    """Map free text to a canonical muscle token.

    Applies ``MuscleTokens.NORMALIZATION_RULES`` in order; the first rule
    with a synonym contained in the lowercased text wins. Unmapped text is
    returned lowercased with non-alphanumeric characters stripped, which is
    not guaranteed to be canonical.

    Examples:
        >>> normalize_token("Abdominals")
        'core'
        >>> normalize_token("upper back")
        'back'
        >>> normalize_token("Serratus Anterior")
        'serratusanterior'
    """
    if not text:
        return ""
    lowered = str(text).lower()
    for token, synonyms in MuscleTokens.NORMALIZATION_RULES:
        if any(synonym in lowered for synonym in synonyms):
            return token
    return _NON_ALNUM.sub("", lowered)


def exercise_token(exercise: "ExerciseRecord") -> str:
    """Return the canonical token an exercise realizes.

    Uses the first non-empty field among target, muscle group, secondary
    muscles and name.
    """
    source = (
        exercise.target
        or exercise.muscle_group
        or exercise.secondary_muscles
        or exercise.name
    )
    return normalize_token(source)


def exercise_text(exercise: "ExerciseRecord") -> str:
    """Concatenate the searchable fields of an exercise, lowercased."""
    return " ".join(
        [
            exercise.target or "",
            exercise.muscle_group or "",
            exercise.secondary_muscles or "",
            exercise.name or "",
        ]
    ).lower()


def focus_target_tokens(focus: str | None) -> tuple[str, ...]:
    """Return the target tokens associated with a focus label.

    Labels are matched by fragment in ``FocusTables.TARGET_TOKENS`` order,
    so ``"Core & Abs"`` yields the core tokens and an unknown label such as
    ``"Day 9"`` yields an empty tuple.
    """
    label = (focus or "").lower()
    if not label:
        return ()
    for fragments, tokens in FocusTables.TARGET_TOKENS:
        if any(fragment in label for fragment in fragments):
            return tokens
    return ()


def tokens_needed_for(focuses: list[str]) -> list[str]:
    """Collect target tokens implied by ``focuses`` that exist in the catalog vocabulary.

    Order follows first appearance so sampling is deterministic.
    """
    needed: list[str] = []
    vocabulary = set(MuscleTokens.CATALOG_TARGETS)
    for focus in focuses:
        for token in focus_target_tokens(focus):
            lowered = token.lower()
            if lowered in vocabulary and lowered not in needed:
                needed.append(lowered)
    return needed


def is_core_exercise(name: str | None, token: str) -> bool:
    """Check whether an exercise counts toward a core day's minimum."""
    lowered = (name or "").lower()
    return token == MuscleTokens.CORE or any(hint in lowered for hint in FocusTables.CORE_NAME_HINTS)
