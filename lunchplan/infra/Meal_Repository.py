"""Meal repository: CRUD over meals; each meal embeds ingredient references with quantities.

Payloads reaching create/update are expected to be validated already
(see lunchplan.logic.validation.validate_meal).
"""
import logging
from typing import Any, Dict, List, Optional
from uuid import uuid4

from lunchplan.domain.Meal import Meal, MealIngredient
from lunchplan.infra.Storage import MEALS, StorageBackend
from lunchplan.logic.authorization import authorize
from lunchplan.utilities.constants import USER_ID_INDEX
from lunchplan.utilities.timestamps import now_ms

logger = logging.getLogger(__name__)


def _entries(ingredients) -> List[Dict[str, str]]:
    return [MealIngredient.from_dict(i).to_dict() for i in ingredients or []]


class MealRepository:
    def __init__(self, storage: StorageBackend):
        self.storage = storage

    async def create(self, user_id: str, data: Dict[str, Any]) -> Meal:
        ts = now_ms()
        meal = Meal.from_dict({
            "mealId": str(uuid4()),
            "userId": user_id,
            "title": data.get("title", ""),
            "ingredients": _entries(data.get("ingredients")),
            "createdAt": ts,
            "updatedAt": ts,
        })
        await self.storage.put(MEALS, meal.to_dict())
        logger.info(f"Created meal {meal.meal_id} ({len(meal.ingredients)} ingredients) for user {user_id}")
        return meal

    async def get_by_id(self, meal_id: str) -> Optional[Meal]:
        item = await self.storage.get(MEALS, {"mealId": meal_id})
        return Meal.from_dict(item) if item else None

    async def get_owned(self, meal_id: str, user_id: str) -> Meal:
        return authorize(await self.get_by_id(meal_id), user_id, "Meal")

    async def list_by_owner(self, user_id: str) -> List[Meal]:
        items = await self.storage.query(MEALS, {"userId": user_id}, index=USER_ID_INDEX)
        return [Meal.from_dict(i) for i in items]

    async def update(self, meal_id: str, user_id: str, changes: Dict[str, Any]) -> Meal:
        '''Replace title and/or the whole ingredient list; anything else in changes is ignored.'''
        await self.get_owned(meal_id, user_id)
        attributes = {k: v for k, v in changes.items() if k in Meal.MUTABLE_FIELDS}
        if "ingredients" in attributes:
            attributes["ingredients"] = _entries(attributes["ingredients"])
        attributes["updatedAt"] = now_ms()
        item = await self.storage.update(MEALS, {"mealId": meal_id}, attributes)
        return Meal.from_dict(item)

    async def delete(self, meal_id: str, user_id: str) -> None:
        # Plan days referencing this meal keep the id; the shopping list skips it.
        await self.get_owned(meal_id, user_id)
        await self.storage.delete(MEALS, {"mealId": meal_id})
        logger.info(f"Deleted meal {meal_id} of user {user_id}")
