"""Ingredient domain entity: a named item in one user's catalog."""
from typing import Optional


class Ingredient:
    MUTABLE_FIELDS = ("name",)

    def __init__(self, ingredient_id: str = "", user_id: str = "", name: str = "",
                 created_at: int = 0, updated_at: Optional[int] = None):
        self.ingredient_id = ingredient_id
        self.user_id = user_id
        self.name = name
        self.created_at = created_at
        self.updated_at = created_at if updated_at is None else updated_at

    def __str__(self) -> str:
        return f"{self.name} ({self.ingredient_id})"

    __repr__ = __str__

    def __eq__(self, other) -> bool:
        return isinstance(other, Ingredient) and self.to_dict() == other.to_dict()

    @staticmethod
    def from_dict(data):
        '''Creates an Ingredient from a stored record. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        return Ingredient(
            ingredient_id=d.get("ingredientId", ""),
            user_id=d.get("userId", ""),
            name=d.get("name", ""),
            created_at=d.get("createdAt", 0),
            updated_at=d.get("updatedAt"),
        )

    def to_dict(self):
        return {
            "ingredientId": self.ingredient_id,
            "userId": self.user_id,
            "name": self.name,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
