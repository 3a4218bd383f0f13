"""Focus matching strategies for the day allocator.

Each matcher answers one question: does this exercise satisfy this focus?
The allocator tries them as an ordered list of tiers, so a new tier can be
added without touching the allocation loop.

Tiers, strictest first:
- ExactTargetMatcher: the exercise ``target`` contains a focus target token
- KeywordMatcher: focus keywords found in target/muscle group/secondary/name
- LooseMatcher: broad synonyms or any focus word of 3+ characters
"""

from __future__ import annotations

import re
from typing import Protocol

from app.ml.planning.constants import FocusTables
from app.ml.planning.tokens import (
    exercise_text,
    exercise_token,
    focus_target_tokens,
    normalize_token,
)
from app.ml.planning.types import ExerciseRecord

_WORD_SPLIT = re.compile(r"[^a-z0-9]+")


class FocusMatcher(Protocol):
    """Predicate deciding whether an exercise fits a day's focus."""

    name: str

    def matches(self, exercise: ExerciseRecord, focus: str) -> bool:
        ...


class ExactTargetMatcher:
    """Matches when the exercise ``target`` field contains a focus target token."""

    name = "exact_target"

    def matched_token(self, exercise: ExerciseRecord, focus: str) -> str | None:
        """Return the first focus target token found in the exercise target."""
        target = (exercise.target or "").lower()
        if not target:
            return None
        for token in focus_target_tokens(focus):
            if token in target:
                return token
        return None

    def matches(self, exercise: ExerciseRecord, focus: str) -> bool:
        return self.matched_token(exercise, focus) is not None


class KeywordMatcher:
    """Matches on focus keywords across all searchable exercise fields.

    A normalized ``target`` that is a direct hit for the focus (for example
    ``pectorals`` on a Chest day) short-circuits to a match.
    """

    name = "keyword"

    @staticmethod
    def keywords_for(focus: str) -> tuple[str, ...]:
        label = (focus or "").lower()
        for fragment, keywords in FocusTables.KEYWORDS.items():
            if fragment in label:
                return keywords
        return ()

    def matches(self, exercise: ExerciseRecord, focus: str) -> bool:
        label = (focus or "").lower()
        if not label:
            return False

        target_token = normalize_token(exercise.target)
        if target_token:
            for fragment, hits in FocusTables.DIRECT_TARGET_HITS:
                if fragment in label and target_token in hits:
                    return True

        text = exercise_text(exercise)
        return any(keyword in text for keyword in self.keywords_for(label))


class LooseMatcher:
    """Broad matching used before arbitrary fill."""

    name = "loose"

    MIN_WORD_LENGTH = 3

    def matches(self, exercise: ExerciseRecord, focus: str) -> bool:
        label = (focus or "").lower()
        if not label:
            return False
        text = exercise_text(exercise)

        for fragments, synonyms in FocusTables.LOOSE_SYNONYMS:
            if any(fragment in label for fragment in fragments):
                if any(synonym in text for synonym in synonyms):
                    return True

        for word in _WORD_SPLIT.split(label):
            if len(word) >= self.MIN_WORD_LENGTH and word in text:
                return True
        return False


class AnyMatcher:
    """Accepts every exercise; the arbitrary-fill tier."""

    name = "any"

    def matches(self, exercise: ExerciseRecord, focus: str) -> bool:
        return True


def is_strong_mismatch(exercise: ExerciseRecord, focus: str) -> bool:
    """Check whether an exercise is a poor fit that should be deprioritized.

    Currently only Core days reject biceps/triceps/forearm exercises.
    """
    token = exercise_token(exercise)
    if not token:
        return False
    label = (focus or "").lower()
    for fragment, tokens in FocusTables.STRONG_MISMATCHES.items():
        if fragment in label and token in tokens:
            return True
    return False


DEFAULT_MATCH_TIERS: tuple[FocusMatcher, ...] = (ExactTargetMatcher(), KeywordMatcher())
