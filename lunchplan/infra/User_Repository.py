"""User repository: accounts, email uniqueness and the stored password hash.

The hash never leaves this module except through get_by_email, which exists
for the authentication boundary.
"""
import logging
from typing import Any, Dict, Optional
from uuid import uuid4

from lunchplan.domain.User import User
from lunchplan.domain.errors import Conflict, Forbidden, NotFound
from lunchplan.infra.Storage import USERS, StorageBackend
from lunchplan.utilities.constants import EMAIL_INDEX
from lunchplan.utilities.passwords import hash_password, verify_password
from lunchplan.utilities.timestamps import now_ms

logger = logging.getLogger(__name__)


class UserRepository:
    def __init__(self, storage: StorageBackend):
        self.storage = storage

    async def create(self, email: str, password: str, name: Optional[str] = None) -> User:
        if await self.get_by_email(email):
            raise Conflict("User with this email already exists")
        ts = now_ms()
        user = User(str(uuid4()), email, name, created_at=ts, updated_at=ts)
        record = {**user.to_dict(), "passwordHash": hash_password(password)}
        await self.storage.put(USERS, record)
        logger.info(f"Registered user {user.user_id}")
        return user

    async def get_by_id(self, user_id: str) -> Optional[User]:
        item = await self.storage.get(USERS, {"userId": user_id})
        return User.from_dict(item) if item else None

    async def get_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        """Raw record including passwordHash, or None."""
        items = await self.storage.query(USERS, {"email": email}, index=EMAIL_INDEX)
        return items[0] if items else None

    async def authenticate(self, email: str, password: str) -> Optional[User]:
        record = await self.get_by_email(email)
        if not record or not verify_password(password, record.get("passwordHash", "")):
            return None
        return User.from_dict(record)

    async def update(self, user_id: str, changes: Dict[str, Any]) -> User:
        '''Only the profile name is mutable here; email and password have their own paths.'''
        if await self.get_by_id(user_id) is None:
            raise NotFound("User not found")
        attributes = {k: v for k, v in changes.items() if k in User.MUTABLE_FIELDS}
        attributes["updatedAt"] = now_ms()
        item = await self.storage.update(USERS, {"userId": user_id}, attributes)
        return User.from_dict(item)

    async def update_password(self, user_id: str, current_password: str, new_password: str) -> None:
        item = await self.storage.get(USERS, {"userId": user_id})
        if item is None:
            raise NotFound("User not found")
        if not verify_password(current_password, item.get("passwordHash", "")):
            raise Forbidden("Current password is incorrect")
        await self.storage.update(USERS, {"userId": user_id},
                                  {"passwordHash": hash_password(new_password), "updatedAt": now_ms()})
        logger.info(f"Password changed for user {user_id}")

    async def delete(self, user_id: str) -> None:
        await self.storage.delete(USERS, {"userId": user_id})
        logger.info(f"Deleted user {user_id}")
