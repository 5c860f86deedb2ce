from fastapi import APIRouter, Body, Depends

from lunchplan.api.deps import Identity, get_identity, get_users
from lunchplan.domain.errors import NotFound, Unauthorized
from lunchplan.infra.User_Repository import UserRepository
from lunchplan.logic.validation import parse
from lunchplan.utilities.validators import ChangePasswordInput, LoginInput, RegisterInput

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", status_code=201)
async def register(payload: dict = Body(...), users: UserRepository = Depends(get_users)):
    data = parse(RegisterInput, payload)
    user = await users.create(data.email, data.password, data.name)
    return {"message": "User registered successfully", "user": user.to_dict()}


@router.post("/login")
async def login(payload: dict = Body(...), users: UserRepository = Depends(get_users)):
    """Check credentials and return the account.

    No token is issued here. The gateway that calls this endpoint is responsible
    for the session, and must forward the returned userId (and email) as the
    X-User-Id / X-User-Email headers on later requests; see deps.get_identity.
    """
    data = parse(LoginInput, payload)
    user = await users.authenticate(data.email, data.password)
    if user is None:
        raise Unauthorized("Invalid email or password")
    return {"message": "Login successful", "user": user.to_dict()}


@router.get("/me")
async def current_user(identity: Identity = Depends(get_identity),
                       users: UserRepository = Depends(get_users)):
    user = await users.get_by_id(identity.user_id)
    if user is None:
        raise NotFound("User not found")
    return {"user": user.to_dict()}


@router.post("/change-password")
async def change_password(payload: dict = Body(...),
                          identity: Identity = Depends(get_identity),
                          users: UserRepository = Depends(get_users)):
    data = parse(ChangePasswordInput, payload)
    await users.update_password(identity.user_id, data.current_password, data.new_password)
    return {"message": "Password changed successfully"}
