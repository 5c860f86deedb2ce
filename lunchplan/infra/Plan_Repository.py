"""Plan repository: one row per (user, date) holding the ordered meal ids for that day.

Dates are ISO ``YYYY-MM-DD`` strings, so lexicographic order is calendar order
and range queries can compare the strings directly. Date validation happens at
the caller boundary (lunchplan.logic.planning).
"""
import asyncio
import logging
from typing import List, Optional

from lunchplan.domain.PlanDay import PlanDay
from lunchplan.infra.Storage import PLAN_DAYS, StorageBackend
from lunchplan.utilities.timestamps import now_ms

logger = logging.getLogger(__name__)


def _key(user_id: str, date: str):
    return {"userId": user_id, "date": date}


class PlanRepository:
    def __init__(self, storage: StorageBackend):
        self.storage = storage

    async def set_day(self, user_id: str, date: str, meals: List[str]) -> PlanDay:
        """Create the day or replace its whole meal list."""
        day = PlanDay(user_id, date, meals, updated_at=now_ms())
        await self.storage.put(PLAN_DAYS, day.to_dict())
        return day

    async def get_day(self, user_id: str, date: str) -> Optional[PlanDay]:
        item = await self.storage.get(PLAN_DAYS, _key(user_id, date))
        return PlanDay.from_dict(item) if item else None

    async def get_range(self, user_id: str, start_date: str, end_date: str) -> List[PlanDay]:
        """Days with start_date <= date <= end_date, ascending."""
        items = await self.storage.query(PLAN_DAYS, {"userId": user_id}, between=(start_date, end_date))
        return [PlanDay.from_dict(i) for i in items]

    async def get_all(self, user_id: str) -> List[PlanDay]:
        items = await self.storage.query(PLAN_DAYS, {"userId": user_id})
        return [PlanDay.from_dict(i) for i in items]

    async def delete_day(self, user_id: str, date: str) -> None:
        await self.storage.delete(PLAN_DAYS, _key(user_id, date))

    async def clear_all(self, user_id: str) -> int:
        """Delete every day of the user's plan; returns the number of days removed.

        Deletes run concurrently and are not atomic: if one fails, the error is
        raised once all deletes have finished and the days already removed stay
        removed.
        """
        days = await self.get_all(user_id)
        results = await asyncio.gather(
            *(self.delete_day(user_id, day.date) for day in days),
            return_exceptions=True,
        )
        failures = [r for r in results if isinstance(r, BaseException)]
        if failures:
            logger.error(f"Clearing plan of {user_id}: {len(failures)} of {len(days)} deletes failed")
            raise failures[0]
        logger.info(f"Cleared {len(days)} plan days of user {user_id}")
        return len(days)
