from fastapi import APIRouter, Body, Depends

from lunchplan.api.deps import Identity, get_identity, get_ingredients
from lunchplan.infra.Ingredient_Repository import IngredientRepository
from lunchplan.logic.validation import validate_ingredient

router = APIRouter(prefix="/api/ingredients", tags=["ingredients"])


@router.get("")
async def list_ingredients(identity: Identity = Depends(get_identity),
                           repo: IngredientRepository = Depends(get_ingredients)):
    ingredients = await repo.list_by_owner(identity.user_id)
    return {"ingredients": [i.to_dict() for i in ingredients]}


@router.post("", status_code=201)
async def create_ingredient(payload: dict = Body(...),
                            identity: Identity = Depends(get_identity),
                            repo: IngredientRepository = Depends(get_ingredients)):
    data = validate_ingredient(payload)
    ingredient = await repo.create(identity.user_id, data["name"])
    return {"message": "Ingredient created successfully", "ingredient": ingredient.to_dict()}


@router.get("/{ingredient_id}")
async def get_ingredient(ingredient_id: str,
                         identity: Identity = Depends(get_identity),
                         repo: IngredientRepository = Depends(get_ingredients)):
    ingredient = await repo.get_owned(ingredient_id, identity.user_id)
    return {"ingredient": ingredient.to_dict()}


@router.put("/{ingredient_id}")
async def update_ingredient(ingredient_id: str, payload: dict = Body(...),
                            identity: Identity = Depends(get_identity),
                            repo: IngredientRepository = Depends(get_ingredients)):
    data = validate_ingredient(payload)
    ingredient = await repo.update(ingredient_id, identity.user_id, data)
    return {"message": "Ingredient updated successfully", "ingredient": ingredient.to_dict()}


@router.delete("/{ingredient_id}")
async def delete_ingredient(ingredient_id: str,
                            identity: Identity = Depends(get_identity),
                            repo: IngredientRepository = Depends(get_ingredients)):
    await repo.delete(ingredient_id, identity.user_id)
    return {"message": "Ingredient deleted successfully"}
