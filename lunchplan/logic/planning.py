"""Plan operations at the caller boundary.

Validates dates and meal references before PlanRepository is touched, and
synthesizes the empty day for dates without a stored row.
"""
import asyncio
import logging
from typing import Any, List, Optional

from lunchplan.domain.PlanDay import PlanDay
from lunchplan.domain.errors import InvalidArgument
from lunchplan.infra.Meal_Repository import MealRepository
from lunchplan.infra.Plan_Repository import PlanRepository
from lunchplan.logic.validation import validate_date, validate_plan_day

logger = logging.getLogger(__name__)


async def ensure_meals_owned(meals: MealRepository, user_id: str, meal_ids: List[str]) -> None:
    """Reject unless every id resolves to a meal owned by user_id. Lookups run concurrently."""
    found = await asyncio.gather(*(meals.get_by_id(mid) for mid in meal_ids))
    for meal_id, meal in zip(meal_ids, found):
        if meal is None or meal.user_id != user_id:
            logger.warning(f"Plan update by {user_id} references unusable meal {meal_id}")
            raise InvalidArgument("One or more meal IDs are invalid or not accessible")


async def set_plan_day(plans: PlanRepository, meals: MealRepository, user_id: str,
                       date: str, payload: Any) -> PlanDay:
    """Replace the meals of one day from a `{meals: [mealId]}` body."""
    validate_date(date)
    meal_ids = validate_plan_day(payload)
    if meal_ids:
        await ensure_meals_owned(meals, user_id, meal_ids)
    return await plans.set_day(user_id, date, meal_ids)


async def get_plan_day(plans: PlanRepository, user_id: str, date: str) -> PlanDay:
    validate_date(date)
    day = await plans.get_day(user_id, date)
    return day if day is not None else PlanDay.empty(user_id, date)


async def list_plan_days(plans: PlanRepository, user_id: str,
                         start_date: Optional[str] = None,
                         end_date: Optional[str] = None) -> List[PlanDay]:
    """Range when both bounds are given, otherwise the whole plan."""
    if start_date and end_date:
        return await plans.get_range(user_id, validate_date(start_date, "startDate"),
                                     validate_date(end_date, "endDate"))
    return await plans.get_all(user_id)


async def delete_plan_day(plans: PlanRepository, user_id: str, date: str) -> None:
    validate_date(date)
    await plans.delete_day(user_id, date)
