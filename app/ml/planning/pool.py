"""Candidate pool construction and the shared remaining-pool arena.

The sampler turns the full catalog into a bounded working pool that has at
least one representative per catalog target, then tops it up with preferred
and shuffled exercises. When the week needs more slots than the pool holds,
a rotation of reshuffled copies allows controlled repeats.

``ExercisePool`` is the arena every day draws from: a fixed list of slots
plus an explicit set of available slot indices. Assigning marks a slot
consumed, a repair swap marks it available again.
"""

from __future__ import annotations

import logging
import math
import random
from typing import Any, Callable, Iterable, Sequence

from app.ml.planning.constants import MuscleTokens, PlanLimits
from app.ml.planning.tokens import tokens_needed_for
from app.ml.planning.types import ExerciseRecord, PlanningOptions

logger = logging.getLogger(__name__)

# In-place shuffle, e.g. ``random.Random(7).shuffle`` in tests.
Shuffle = Callable[[list[Any]], None]


def identity_shuffle(items: list[Any]) -> None:
    """Leave ``items`` in their original order."""
    return None


class ExercisePool:
    """Arena of exercise slots shared by all days of one planning run.

    Example:
        >>> pool = ExercisePool(exercises)
        >>> slot = pool.available_slots(reverse=True)[0]
        >>> exercise = pool.take(slot)
        >>> pool.release(slot)  # hand it back during a repair swap
    """

    def __init__(self, slots: Iterable[ExerciseRecord]) -> None:
        self._slots: list[ExerciseRecord] = list(slots)
        self._available: set[int] = set(range(len(self._slots)))

    def __len__(self) -> int:
        return len(self._available)

    @property
    def capacity(self) -> int:
        """Total number of slots, consumed or not."""
        return len(self._slots)

    @property
    def distinct_ids(self) -> set[int]:
        return {exercise.id for exercise in self._slots}

    def get(self, slot: int) -> ExerciseRecord:
        return self._slots[slot]

    def is_available(self, slot: int) -> bool:
        return slot in self._available

    def available_slots(self, reverse: bool = False) -> list[int]:
        """Return available slot indices in arena order (or reversed)."""
        return sorted(self._available, reverse=reverse)

    def take(self, slot: int) -> ExerciseRecord:
        """Mark ``slot`` consumed and return its exercise."""
        if slot not in self._available:
            raise KeyError(f"Pool slot {slot} is not available")
        self._available.discard(slot)
        return self._slots[slot]

    def release(self, slot: int) -> None:
        """Mark ``slot`` available again."""
        if 0 <= slot < len(self._slots):
            self._available.add(slot)

    def add(self, exercise: ExerciseRecord) -> int:
        """Append a new available slot and return its index."""
        self._slots.append(exercise)
        slot = len(self._slots) - 1
        self._available.add(slot)
        return slot

    def find(
        self,
        predicate: Callable[[ExerciseRecord], bool],
        exclude_ids: Iterable[int] = (),
        reverse: bool = False,
    ) -> int | None:
        """Return the first available slot whose exercise satisfies ``predicate``."""
        excluded = set(exclude_ids)
        for slot in self.available_slots(reverse=reverse):
            exercise = self._slots[slot]
            if exercise.id in excluded:
                continue
            if predicate(exercise):
                return slot
        return None


class PoolSampler:
    """Builds the working candidate pool from the full exercise catalog."""

    def __init__(self, shuffle: Shuffle | None = None) -> None:
        self._shuffle = shuffle or random.shuffle

    def sample(
        self,
        catalog: Sequence[ExerciseRecord],
        focuses: list[str],
        options: PlanningOptions,
    ) -> list[ExerciseRecord]:
        """Draw a bounded, diversity-biased working pool from ``catalog``.

        Steps:
        1. One exercise per catalog target token, needed or not
        2. A few exercises per target token implied by the planned focuses
        3. Up to ``preferred_share`` of the pool from preferred-target matches
        4. Fill from the shuffled non-matching remainder

        The result is deduplicated by id and never exceeds ``max_exercises``.
        Steps run in priority order and each only uses the room left by the
        previous ones, so the per-target representatives are always kept.
        """
        max_exercises = options.max_exercises
        tokens_needed = tokens_needed_for(focuses)
        per_token = max(
            1,
            math.floor(min(options.sample_per_token_cap, max_exercises / max(1, len(tokens_needed)))),
        )

        selected: list[ExerciseRecord] = []
        seen: set[int] = set()

        def _add(exercises: Iterable[ExerciseRecord], limit: int = max_exercises) -> None:
            for exercise in exercises:
                if len(selected) >= min(limit, max_exercises):
                    return
                if exercise.id not in seen:
                    seen.add(exercise.id)
                    selected.append(exercise)

        for token in MuscleTokens.CATALOG_TARGETS:
            _add(self._by_target(catalog, token, PlanLimits.SAMPLE_PER_CATALOG_TARGET))
        representatives = len(selected)
        for token in tokens_needed:
            _add(self._by_target(catalog, token, per_token))

        matching, non_matching = self._partition(catalog, options.preferred_targets)
        self._shuffle(non_matching)

        take_from_matching = math.ceil(max_exercises * options.preferred_share)
        _add(matching, limit=len(selected) + take_from_matching)
        _add(e for e in non_matching if e.id not in seen)

        logger.debug(
            f"Sampled pool of {len(selected)} exercises from catalog of {len(catalog)} "
            f"({representatives} target representatives, {len(tokens_needed)} needed tokens, "
            f"{per_token} per token, {len(matching)} preferred matches)"
        )
        return selected

    def build_rotation(
        self,
        pool: Sequence[ExerciseRecord],
        total_needed: int,
    ) -> list[ExerciseRecord]:
        """Return the slot list the week is allocated from.

        When the pool already covers ``total_needed`` slots it is used as is.
        Otherwise the rotation holds exactly as many reshuffled copies of the
        pool as it takes to cover demand.
        """
        if not pool:
            return []
        if total_needed <= len(pool):
            return list(pool)

        passes = math.ceil(total_needed / len(pool))
        rotation: list[ExerciseRecord] = []
        for _ in range(passes):
            batch = list(pool)
            self._shuffle(batch)
            rotation.extend(batch)

        logger.info(
            f"Pool of {len(pool)} exercises is smaller than {total_needed} weekly slots; "
            f"built rotation of {passes} passes ({len(rotation)} entries)"
        )
        return rotation

    @staticmethod
    def _by_target(catalog: Sequence[ExerciseRecord], token: str, limit: int) -> list[ExerciseRecord]:
        rows: list[ExerciseRecord] = []
        for exercise in catalog:
            if (exercise.target or "").strip().lower() == token:
                rows.append(exercise)
                if len(rows) >= limit:
                    break
        return rows

    @staticmethod
    def _partition(
        catalog: Sequence[ExerciseRecord], preferred_targets: tuple[str, ...]
    ) -> tuple[list[ExerciseRecord], list[ExerciseRecord]]:
        if not preferred_targets:
            return [], list(catalog)
        matching: list[ExerciseRecord] = []
        non_matching: list[ExerciseRecord] = []
        for exercise in catalog:
            haystacks = (
                (exercise.muscle_group or "").lower(),
                (exercise.target or "").lower(),
                (exercise.name or "").lower(),
            )
            if any(t in h for t in preferred_targets for h in haystacks):
                matching.append(exercise)
            else:
                non_matching.append(exercise)
        return matching, non_matching
