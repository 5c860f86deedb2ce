"""Shopping list builder.

Provides build_shopping_list(plans, meals, user_id, start_date=None, end_date=None).
"""
from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Dict, List, Optional

from lunchplan.domain.ShoppingList import ShoppingListItem

if TYPE_CHECKING:
    from lunchplan.infra.Meal_Repository import MealRepository
    from lunchplan.infra.Plan_Repository import PlanRepository

logger = logging.getLogger(__name__)


async def build_shopping_list(plans: PlanRepository, meals: MealRepository, user_id: str,
                              start_date: Optional[str] = None,
                              end_date: Optional[str] = None) -> List[ShoppingListItem]:
    """Aggregate the ingredients of every meal planned in a date range.

    Args:
        plans: plan day repository.
        meals: meal repository.
        user_id: owner of the plan.
        start_date, end_date: inclusive ISO bounds; the whole plan is used unless both are given.

    Returns:
        One ShoppingListItem per distinct ingredientId. Rows, and the quantities
        inside a row, follow insertion order of first sight while walking the
        distinct meal ids in the order they first appear across the plan days.
        No stronger ordering is promised.
    """
    if start_date and end_date:
        days = await plans.get_range(user_id, start_date, end_date)
    else:
        days = await plans.get_all(user_id)
    if not days:
        return []

    # dict keeps first-sight order while collapsing repeats
    meal_ids = list(dict.fromkeys(mid for day in days for mid in day.meals))
    fetched = await asyncio.gather(*(meals.get_by_id(mid) for mid in meal_ids))

    required: Dict[str, ShoppingListItem] = {}
    for meal_id, meal in zip(meal_ids, fetched):
        if meal is None:
            logger.info(f"Skipping dangling meal reference {meal_id} in plan of {user_id}")
            continue
        for ing in meal.ingredients:
            item = required.get(ing.ingredient_id)
            if item is None:
                item = required[ing.ingredient_id] = ShoppingListItem(ing.ingredient_id, ing.name)
            item.add_quantity(ing.quantity)

    return list(required.values())


__all__ = ['build_shopping_list']
