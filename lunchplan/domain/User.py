"""User domain entity. The password hash stays in storage and is never carried here."""
from typing import Optional


class User:
    MUTABLE_FIELDS = ("name",)

    def __init__(self, user_id: str = "", email: str = "", name: Optional[str] = None,
                 created_at: int = 0, updated_at: Optional[int] = None):
        self.user_id = user_id
        self.email = email
        self.name = name
        self.created_at = created_at
        self.updated_at = created_at if updated_at is None else updated_at

    def __repr__(self) -> str:
        return f"User({self.user_id!r}, {self.email!r})"

    @staticmethod
    def from_dict(data):
        '''Builds a User from a stored record; passwordHash is dropped.'''
        d = dict(data) if isinstance(data, dict) else {}
        return User(
            user_id=d.get("userId", ""),
            email=d.get("email", ""),
            name=d.get("name"),
            created_at=d.get("createdAt", 0),
            updated_at=d.get("updatedAt"),
        )

    def to_dict(self):
        return {
            "userId": self.user_id,
            "email": self.email,
            "name": self.name,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
