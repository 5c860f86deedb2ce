"""Meal domain entity: a titled, ordered list of ingredient references with free-text quantities."""
from typing import Dict, List, Optional


class MealIngredient:
    """Weak reference to an Ingredient by id; the ingredient may no longer exist."""

    def __init__(self, ingredient_id: str, quantity: str, name: Optional[str] = None):
        self.ingredient_id = ingredient_id
        self.quantity = quantity
        self.name = name

    def __repr__(self) -> str:
        return f"MealIngredient({self.ingredient_id!r}, {self.quantity!r})"

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return MealIngredient(d.get("ingredientId", ""), d.get("quantity", ""), d.get("name"))

    def to_dict(self) -> Dict[str, str]:
        entry = {"ingredientId": self.ingredient_id, "quantity": self.quantity}
        if self.name is not None:
            entry["name"] = self.name
        return entry


class Meal:
    MUTABLE_FIELDS = ("title", "ingredients")

    def __init__(self, meal_id: str = "", user_id: str = "", title: str = "",
                 ingredients: Optional[List[MealIngredient]] = None,
                 created_at: int = 0, updated_at: Optional[int] = None):
        self.meal_id = meal_id
        self.user_id = user_id
        self.title = title
        self.ingredients = ingredients[:] if ingredients else []
        self.created_at = created_at
        self.updated_at = created_at if updated_at is None else updated_at

    def __str__(self) -> str:
        return f"{self.title} - {len(self.ingredients)} ingredients"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return Meal(
            meal_id=d.get("mealId", ""),
            user_id=d.get("userId", ""),
            title=d.get("title", ""),
            ingredients=[MealIngredient.from_dict(i) for i in d.get("ingredients") or []],
            created_at=d.get("createdAt", 0),
            updated_at=d.get("updatedAt"),
        )

    def to_dict(self):
        return {
            "mealId": self.meal_id,
            "userId": self.user_id,
            "title": self.title,
            "ingredients": [i.to_dict() for i in self.ingredients],
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
