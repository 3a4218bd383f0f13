from __future__ import annotations

from time import perf_counter

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.metrics import track_db_query
from app.ml.planning.types import ExerciseRecord
from app.models.exercise import Exercise


class ExerciseRepository:
    def __init__(self, session: AsyncSession):
        self._session = session

    async def list_catalog(self, limit: int | None = None) -> list[ExerciseRecord]:
        """Load catalog exercises ordered by id.

        Args:
            limit: Maximum number of rows to load; no limit when None

        Returns:
            Immutable records detached from the session
        """
        query = select(Exercise).order_by(Exercise.id)
        if limit is not None:
            query = query.limit(limit)

        start = perf_counter()
        result = await self._session.execute(query)
        rows = result.scalars().all()
        track_db_query("select", Exercise.__tablename__, perf_counter() - start)

        return [row.to_record() for row in rows]
