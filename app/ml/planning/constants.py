"""Constants for weekly workout-plan synthesis.

This module centralizes the closed vocabularies, lookup tables and limits
used by the planning engine. Tables here define the split convention and the
muscle vocabulary, so naming, matching and coverage logic all line up.

Constants are organized by functional area:
- Vocabularies: catalog target values, canonical tokens, required coverage
- Focus: display labels and the days-per-week split table
- Matching: focus → target tokens, focus → keywords, loose synonyms
- Limits: per-day bounds, sampling and safety bounds
"""

from __future__ import annotations

from enum import Enum


# =============================================================================
# Vocabularies
# =============================================================================

class MuscleTokens:
    """Muscle vocabularies used by the normalizer and coverage checks.

    ``CATALOG_TARGETS`` mirrors the values stored in ``exercises.target``.
    ``CANONICAL`` is the closed set produced by the token normalizer, and
    ``REQUIRED`` is the subset every weekly plan must realize at least once.
    """

    CATALOG_TARGETS: tuple[str, ...] = (
        "abductors",
        "abs",
        "adductors",
        "biceps",
        "calves",
        "cardiovascular system",
        "delts",
        "forearms",
        "glutes",
        "hamstrings",
        "lats",
        "levator scapulae",
        "pectorals",
        "quads",
        "serratus anterior",
        "traps",
        "triceps",
        "upper back",
    )

    CORE = "core"
    PECTORALS = "pectorals"
    BACK = "back"
    DELTOIDS = "deltoids"
    BICEPS = "biceps"
    TRICEPS = "triceps"
    LEGS = "legs"
    CARDIO = "cardio"

    CANONICAL = frozenset({CORE, PECTORALS, BACK, DELTOIDS, BICEPS, TRICEPS, LEGS, CARDIO})

    # Ordered so that plan warnings list gaps deterministically
    REQUIRED: tuple[str, ...] = (LEGS, PECTORALS, BACK, DELTOIDS, BICEPS, TRICEPS, CORE)

    # Ordered (token, synonyms) rules; the first rule with a synonym found in
    # the lowercased text wins.
    NORMALIZATION_RULES: tuple[tuple[str, tuple[str, ...]], ...] = (
        (LEGS, ("abductor", "adductor", "hamstring")),
        (CORE, ("ab", "core", "abdom", "oblique")),
        (PECTORALS, ("pect", "chest")),
        (BACK, ("lat", "back", "trap", "rhomboid")),
        (DELTOIDS, ("shoulder", "deltoid", "delt")),
        (BICEPS, ("bice",)),
        (TRICEPS, ("trice",)),
        (LEGS, ("leg", "quad", "glute", "calf", "calv")),
        (CARDIO, ("cardio", "run", "bike", "row")),
    )


# =============================================================================
# Focus Labels
# =============================================================================

class Focus(str, Enum):
    """Display labels a plan day may carry."""

    FULL_BODY = "Full Body"
    UPPER_BODY = "Upper Body"
    LOWER_BODY = "Lower Body"
    PUSH = "Push (Chest/Shoulders/Triceps)"
    PULL = "Pull (Back/Biceps)"
    LEGS = "Legs"
    CHEST = "Chest"
    BACK = "Back"
    SHOULDERS = "Shoulders"
    ARMS = "Arms"
    CORE = "Core & Abs"
    CARDIO = "Cardio & Conditioning"
    MOBILITY = "Mobility & Recovery"

    @classmethod
    def labels(cls) -> frozenset[str]:
        """Return every allowed label string."""
        return frozenset(member.value for member in cls)


# Split convention keyed by days per week. Days above 7 fall back to
# generic "Day N" labels.
FOCUS_SPLITS: dict[int, tuple[Focus, ...]] = {
    1: (Focus.FULL_BODY,),
    2: (Focus.UPPER_BODY, Focus.LOWER_BODY),
    3: (Focus.PUSH, Focus.PULL, Focus.LEGS),
    4: (Focus.CHEST, Focus.BACK, Focus.LEGS, Focus.SHOULDERS),
    5: (Focus.CHEST, Focus.BACK, Focus.LEGS, Focus.SHOULDERS, Focus.ARMS),
    6: (Focus.CHEST, Focus.BACK, Focus.LEGS, Focus.SHOULDERS, Focus.ARMS, Focus.CORE),
    7: (
        Focus.CHEST,
        Focus.BACK,
        Focus.LEGS,
        Focus.SHOULDERS,
        Focus.ARMS,
        Focus.CORE,
        Focus.CARDIO,
    ),
}


# =============================================================================
# Matching Tables
# =============================================================================

class FocusTables:
    """Lookup tables used by the matching tiers.

    Keys are lowercase fragments looked up inside a focus label, so
    ``"Push (Chest/Shoulders/Triceps)"`` resolves through ``"push"``. Order
    matters; the first key found in the label wins (see ``tokens`` and
    ``matchers``).
    """

    LEG_TARGETS: tuple[str, ...] = (
        "quadriceps",
        "hamstrings",
        "glutes",
        "calves",
        "adductors",
        "abductors",
        "legs",
    )

    # (label fragments, target tokens) in resolution order
    TARGET_TOKENS: tuple[tuple[tuple[str, ...], tuple[str, ...]], ...] = (
        (("core", "abs"), ("core", "abdominals", "abs", "rectus", "transverse", "oblique", "obliques")),
        (("upper",), ("pectorals", "back", "deltoids", "delts", "lats", "biceps", "triceps")),
        (("lower", "leg"), LEG_TARGETS),
        (("chest",), ("pectorals", "chest", "pec")),
        (("back",), ("back", "lat", "lats", "trapezius", "rhomboid")),
        (("shoulder",), ("deltoids", "deltoid", "delts", "shoulder")),
        (("arm", "bice", "trice"), ("biceps", "triceps", "forearms")),
        (("quad",), LEG_TARGETS),
        (("full",), ("core", "pectorals", "back", "quadriceps", "hamstrings", "deltoids", "biceps", "triceps")),
        (("cardio", "conditioning"), ("cardio", "conditioning", "hiit", "row", "run", "bike")),
        (("push",), ("pectorals", "deltoids", "delts", "triceps")),
        (("pull",), ("back", "biceps", "rear deltoid")),
    )

    KEYWORDS: dict[str, tuple[str, ...]] = {
        "full": ("chest", "back", "leg", "shoulder", "arm", "core"),
        "upper": ("chest", "back", "shoulder", "arm", "bice", "trice"),
        "lower": ("leg", "quad", "hamstring", "glute", "calf"),
        "push": ("chest", "shoulder", "trice"),
        "pull": ("back", "bice", "rear deltoid", "rear deltoids"),
        "chest": ("chest", "pector"),
        "back": ("back", "lat", "lats", "trapezius", "trap", "rhomboid"),
        "leg": ("leg", "quad", "hamstring", "glute", "calf", "adductor"),
        "shoulder": ("shoulder", "deltoid", "delts"),
        "arm": ("bice", "trice", "arm", "forearm", "wrist"),
        "core": (
            "core",
            "ab",
            "abs",
            "abdom",
            "abdominal",
            "rectus",
            "transverse",
            "oblique",
            "obliques",
            "hip flexor",
            "stability",
            "stabilizer",
            "stabilizers",
        ),
        "cardio": ("run", "bike", "row", "cardio", "conditioning", "treadmill"),
    }

    # Canonical tokens that count as a direct hit for a focus fragment.
    DIRECT_TARGET_HITS: tuple[tuple[str, frozenset[str]], ...] = (
        ("core", frozenset({MuscleTokens.CORE})),
        ("chest", frozenset({MuscleTokens.PECTORALS})),
        ("back", frozenset({MuscleTokens.BACK})),
        ("shoulder", frozenset({MuscleTokens.DELTOIDS})),
        ("arm", frozenset({MuscleTokens.BICEPS, MuscleTokens.TRICEPS, "forearms"})),
        ("leg", frozenset({MuscleTokens.LEGS})),
        ("cardio", frozenset({MuscleTokens.CARDIO})),
    )

    LOOSE_SYNONYMS: tuple[tuple[tuple[str, ...], tuple[str, ...]], ...] = (
        (
            ("core", "abs"),
            ("core", "ab", "abs", "abdom", "abdominal", "rectus", "transverse", "oblique", "hip flexor", "stability"),
        ),
        (("full",), ("full", "total", "whole body", "entire body")),
        (("cardio", "conditioning"), ("cardio", "conditioning", "hiit", "row", "run", "bike", "treadmill")),
    )

    # Focus fragment → tokens that are a poor fit and get pushed to the back
    # of the fill queue.
    STRONG_MISMATCHES: dict[str, frozenset[str]] = {
        "core": frozenset({MuscleTokens.BICEPS, MuscleTokens.TRICEPS, "forearms"}),
    }

    CORE_NAME_HINTS: tuple[str, ...] = ("plank", "crunch")


# =============================================================================
# Limits
# =============================================================================

class PlanLimits:
    """Bounds for plan shape, sampling and loop safety."""

    MIN_EXERCISES_PER_DAY = 4
    MAX_EXERCISES_PER_DAY = 8
    DEFAULT_EXERCISES_PER_DAY = 6

    MIN_POOL_SIZE = 5
    MAX_POOL_SIZE = 100
    DEFAULT_POOL_SIZE = 30

    DEFAULT_PREFERRED_SHARE = 0.7
    DEFAULT_SAMPLE_PER_TOKEN_CAP = 4
    SAMPLE_PER_CATALOG_TARGET = 1

    DEFAULT_FILL_MAX_ITERATIONS = 1000

    DEFAULT_CORE_MIN_EXERCISES = 2
    DEFAULT_CORE_MAX_SWAPS = 4

    ITEM_OVERHEAD_SECONDS = 15
    MIN_SECONDS_PER_SET = 20
    SECONDS_PER_REP = 3
    MINUTE_ROUNDING = 5

    @staticmethod
    def clamp(value: int, low: int, high: int) -> int:
        """Clamp ``value`` into ``[low, high]``."""
        return max(low, min(high, value))
