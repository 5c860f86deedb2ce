from fastapi import APIRouter, Body, Depends

from lunchplan.api.deps import Identity, get_identity, get_meals
from lunchplan.infra.Meal_Repository import MealRepository
from lunchplan.logic.validation import validate_meal

router = APIRouter(prefix="/api/meals", tags=["meals"])


@router.get("")
async def list_meals(identity: Identity = Depends(get_identity),
                     repo: MealRepository = Depends(get_meals)):
    meals = await repo.list_by_owner(identity.user_id)
    return {"meals": [m.to_dict() for m in meals]}


@router.post("", status_code=201)
async def create_meal(payload: dict = Body(...),
                      identity: Identity = Depends(get_identity),
                      repo: MealRepository = Depends(get_meals)):
    meal = await repo.create(identity.user_id, validate_meal(payload))
    return {"message": "Meal created successfully", "meal": meal.to_dict()}


@router.get("/{meal_id}")
async def get_meal(meal_id: str,
                   identity: Identity = Depends(get_identity),
                   repo: MealRepository = Depends(get_meals)):
    meal = await repo.get_owned(meal_id, identity.user_id)
    return {"meal": meal.to_dict()}


@router.put("/{meal_id}")
async def update_meal(meal_id: str, payload: dict = Body(...),
                      identity: Identity = Depends(get_identity),
                      repo: MealRepository = Depends(get_meals)):
    meal = await repo.update(meal_id, identity.user_id, validate_meal(payload))
    return {"message": "Meal updated successfully", "meal": meal.to_dict()}


@router.delete("/{meal_id}")
async def delete_meal(meal_id: str,
                      identity: Identity = Depends(get_identity),
                      repo: MealRepository = Depends(get_meals)):
    await repo.delete(meal_id, identity.user_id)
    return {"message": "Meal deleted successfully"}
