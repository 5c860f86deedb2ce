from fastapi import APIRouter, Body, Depends

from lunchplan.api.deps import Identity, get_identity, get_users
from lunchplan.domain.errors import NotFound
from lunchplan.infra.User_Repository import UserRepository
from lunchplan.logic.validation import parse
from lunchplan.utilities.validators import ProfileInput

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/profile")
async def get_profile(identity: Identity = Depends(get_identity),
                      users: UserRepository = Depends(get_users)):
    user = await users.get_by_id(identity.user_id)
    if user is None:
        raise NotFound("User not found")
    return {"user": user.to_dict()}


@router.put("/profile")
async def update_profile(payload: dict = Body(...),
                         identity: Identity = Depends(get_identity),
                         users: UserRepository = Depends(get_users)):
    data = parse(ProfileInput, payload)
    user = await users.update(identity.user_id, data.model_dump())
    return {"message": "Profile updated successfully", "user": user.to_dict()}


@router.delete("/account")
async def delete_account(identity: Identity = Depends(get_identity),
                         users: UserRepository = Depends(get_users)):
    # Ingredients, meals and plan days of the account are left in place.
    await users.delete(identity.user_id)
    return {"message": "Account deleted successfully"}
