"""
Shared fixtures for planning engine and API tests.

Provides:
- Catalog builders with a fixed layout per required muscle token
- A catalog using every stored target value
- Seeded and identity shuffles for reproducible plans
"""
import random
from typing import Callable

import pytest

from app.ml.planning import ExerciseRecord, identity_shuffle


# (muscle_group, catalog targets cycled per exercise, name stem, difficulty)
CATALOG_LAYOUT: list[tuple[str, tuple[str, ...], str, str]] = [
    ("legs", ("quads", "hamstrings", "glutes", "calves"), "Squat Variation", "intermediate"),
    ("chest", ("pectorals",), "Bench Press Variation", "intermediate"),
    ("back", ("lats", "upper back", "traps"), "Pulldown Variation", "intermediate"),
    ("shoulders", ("delts",), "Overhead Press Variation", "beginner"),
    ("arms", ("biceps",), "Curl Variation", "beginner"),
    ("arms", ("triceps",), "Pushdown Variation", "beginner"),
    ("core", ("abs",), "Plank Variation", "beginner"),
]


def build_catalog(per_token: int = 7, cardio: int = 1) -> list[ExerciseRecord]:
    """Build a catalog with ``per_token`` exercises for each required token.

    Ids are assigned in layout order starting at 1.
    """
    exercises: list[ExerciseRecord] = []
    next_id = 1
    for muscle_group, targets, stem, difficulty in CATALOG_LAYOUT:
        for i in range(per_token):
            exercises.append(
                ExerciseRecord(
                    id=next_id,
                    name=f"{stem} {i + 1}",
                    muscle_group=muscle_group,
                    target=targets[i % len(targets)],
                    secondary_muscles=None,
                    equipment="dumbbell",
                    difficulty=difficulty,
                    external_id=f"ext-{next_id:04d}",
                )
            )
            next_id += 1
    for i in range(cardio):
        exercises.append(
            ExerciseRecord(
                id=next_id,
                name=f"Bike Sprint {i + 1}",
                muscle_group="cardio",
                target="cardiovascular system",
                equipment="stationary bike",
                difficulty="intermediate",
                duration_min=10,
            )
        )
        next_id += 1
    return exercises


# Catalog target -> (muscle_group, name stem), one entry per stored target value
FULL_TARGET_LAYOUT: dict[str, tuple[str, str]] = {
    "abductors": ("legs", "Hip Abduction"),
    "abs": ("core", "Crunch"),
    "adductors": ("legs", "Hip Adduction"),
    "biceps": ("arms", "Curl"),
    "calves": ("legs", "Calf Raise"),
    "cardiovascular system": ("cardio", "Rower Interval"),
    "delts": ("shoulders", "Lateral Raise"),
    "forearms": ("arms", "Wrist Curl"),
    "glutes": ("legs", "Hip Thrust"),
    "hamstrings": ("legs", "Leg Curl"),
    "lats": ("back", "Pulldown"),
    "levator scapulae": ("neck", "Neck Side Bend"),
    "pectorals": ("chest", "Bench Press"),
    "quads": ("legs", "Leg Extension"),
    "serratus anterior": ("chest", "Scapular Push-up"),
    "traps": ("back", "Shrug"),
    "triceps": ("arms", "Pushdown"),
    "upper back": ("back", "Seated Row"),
}


def build_full_catalog(per_target: int = 8) -> list[ExerciseRecord]:
    """Build a catalog with ``per_target`` exercises for every stored target value.

    Targets appear in alphabetical blocks; ids start at 1.
    """
    exercises: list[ExerciseRecord] = []
    for target, (muscle_group, stem) in FULL_TARGET_LAYOUT.items():
        for i in range(per_target):
            exercises.append(
                ExerciseRecord(
                    id=len(exercises) + 1,
                    name=f"{stem} {i + 1}",
                    muscle_group=muscle_group,
                    target=target,
                    equipment="cable",
                    difficulty="intermediate",
                )
            )
    return exercises


@pytest.fixture
def catalog() -> list[ExerciseRecord]:
    """Catalog of 50 exercises: 7 per required token plus one cardio."""
    return build_catalog(per_token=7, cardio=1)


@pytest.fixture
def large_catalog() -> list[ExerciseRecord]:
    """Catalog with 8 exercises per required token."""
    return build_catalog(per_token=8, cardio=2)


@pytest.fixture
def full_catalog() -> list[ExerciseRecord]:
    """Catalog of 144 exercises: 8 for each of the 18 stored target values."""
    return build_full_catalog(per_target=8)


@pytest.fixture
def catalog_builder() -> Callable[..., list[ExerciseRecord]]:
    return build_catalog


@pytest.fixture
def seeded_shuffle() -> Callable[[list], None]:
    return random.Random(1234).shuffle


@pytest.fixture
def no_shuffle() -> Callable[[list], None]:
    return identity_shuffle
