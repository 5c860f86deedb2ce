"""FastAPI dependencies: storage, repositories and the caller identity.

Authentication happens upstream; by the time a request gets here its verified
identity travels in the X-User-Id / X-User-Email headers.
"""
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header, Request

from lunchplan.domain.errors import Unauthorized
from lunchplan.infra.Ingredient_Repository import IngredientRepository
from lunchplan.infra.Meal_Repository import MealRepository
from lunchplan.infra.Plan_Repository import PlanRepository
from lunchplan.infra.Storage import StorageBackend
from lunchplan.infra.User_Repository import UserRepository


@dataclass(frozen=True)
class Identity:
    user_id: str
    email: Optional[str] = None


def get_identity(
    x_user_id: Optional[str] = Header(None, alias="X-User-Id"),
    x_user_email: Optional[str] = Header(None, alias="X-User-Email"),
) -> Identity:
    """Identity of the caller as asserted by the gateway in front of this service.

    The service issues no tokens. The gateway authenticates the caller (for example
    against POST /api/auth/login) and must set X-User-Id, and optionally X-User-Email,
    on every forwarded request; clients must not be able to set these headers directly.
    """
    if not x_user_id or not x_user_id.strip():
        raise Unauthorized("Access denied. No identity provided")
    return Identity(x_user_id.strip(), x_user_email)


def get_storage(request: Request) -> StorageBackend:
    return request.app.state.storage


def get_users(storage: StorageBackend = Depends(get_storage)) -> UserRepository:
    return UserRepository(storage)


def get_ingredients(storage: StorageBackend = Depends(get_storage)) -> IngredientRepository:
    return IngredientRepository(storage)


def get_meals(storage: StorageBackend = Depends(get_storage)) -> MealRepository:
    return MealRepository(storage)


def get_plans(storage: StorageBackend = Depends(get_storage)) -> PlanRepository:
    return PlanRepository(storage)
