"""Ingredient repository: CRUD over one user's ingredient catalog."""
import logging
from typing import Any, Dict, List, Optional
from uuid import uuid4

from lunchplan.domain.Ingredient import Ingredient
from lunchplan.infra.Storage import INGREDIENTS, StorageBackend
from lunchplan.logic.authorization import authorize
from lunchplan.utilities.constants import USER_ID_INDEX
from lunchplan.utilities.timestamps import now_ms

logger = logging.getLogger(__name__)


class IngredientRepository:
    def __init__(self, storage: StorageBackend):
        self.storage = storage

    async def create(self, user_id: str, name: str) -> Ingredient:
        ts = now_ms()
        ingredient = Ingredient(str(uuid4()), user_id, name, created_at=ts, updated_at=ts)
        await self.storage.put(INGREDIENTS, ingredient.to_dict())
        logger.info(f"Created ingredient {ingredient.ingredient_id} for user {user_id}")
        return ingredient

    async def get_by_id(self, ingredient_id: str) -> Optional[Ingredient]:
        item = await self.storage.get(INGREDIENTS, {"ingredientId": ingredient_id})
        return Ingredient.from_dict(item) if item else None

    async def get_owned(self, ingredient_id: str, user_id: str) -> Ingredient:
        return authorize(await self.get_by_id(ingredient_id), user_id, "Ingredient")

    async def list_by_owner(self, user_id: str) -> List[Ingredient]:
        items = await self.storage.query(INGREDIENTS, {"userId": user_id}, index=USER_ID_INDEX)
        return [Ingredient.from_dict(i) for i in items]

    async def update(self, ingredient_id: str, user_id: str, changes: Dict[str, Any]) -> Ingredient:
        '''Replace the supplied mutable fields; ids, owner and unknown keys are ignored.'''
        await self.get_owned(ingredient_id, user_id)
        attributes = {k: v for k, v in changes.items() if k in Ingredient.MUTABLE_FIELDS}
        attributes["updatedAt"] = now_ms()
        item = await self.storage.update(INGREDIENTS, {"ingredientId": ingredient_id}, attributes)
        return Ingredient.from_dict(item)

    async def delete(self, ingredient_id: str, user_id: str) -> None:
        await self.get_owned(ingredient_id, user_id)
        await self.storage.delete(INGREDIENTS, {"ingredientId": ingredient_id})
        logger.info(f"Deleted ingredient {ingredient_id} of user {user_id}")
