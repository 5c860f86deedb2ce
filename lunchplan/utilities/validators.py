"""
Input validation schemas using Pydantic for better data integrity.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional


def _strip(v):
    if isinstance(v, str):
        return v.strip()
    return v


class IngredientInput(BaseModel):
    """Schema for ingredient create/update validation."""
    name: str = Field(..., min_length=1, max_length=100)

    @field_validator('name', mode='before')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        return _strip(v)


class MealIngredientInput(BaseModel):
    """One ingredient reference inside a meal; quantity is free text ("200g", "2 cups")."""
    model_config = ConfigDict(populate_by_name=True)

    ingredient_id: str = Field(..., alias='ingredientId', min_length=1)
    quantity: str = Field(..., min_length=1, max_length=100)
    name: Optional[str] = Field(None, max_length=100)

    @field_validator('ingredient_id', 'quantity', 'name', mode='before')
    @classmethod
    def strip_whitespace(cls, v):
        return _strip(v)

    def to_dict(self):
        entry = {"ingredientId": self.ingredient_id, "quantity": self.quantity}
        if self.name:
            entry["name"] = self.name
        return entry


class MealInput(BaseModel):
    """Schema for meal create/update validation."""
    title: str = Field(..., min_length=1, max_length=200)
    ingredients: List[MealIngredientInput]

    @field_validator('title', mode='before')
    @classmethod
    def validate_title(cls, v):
        return _strip(v)

    @field_validator('ingredients')
    @classmethod
    def validate_ingredients(cls, v):
        """Ensure meal has at least one ingredient."""
        if not v:
            raise ValueError('Meal must have at least one ingredient')
        return v


class PlanDayInput(BaseModel):
    """Schema for plan day update validation."""
    meals: List[str]


class RegisterInput(BaseModel):
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=1)
    name: Optional[str] = Field(None, max_length=100)

    @field_validator('email', mode='before')
    @classmethod
    def normalize_email(cls, v):
        v = _strip(v)
        if isinstance(v, str) and '@' not in v:
            raise ValueError('Invalid email address')
        return v


class LoginInput(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class ProfileInput(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)

    @field_validator('name', mode='before')
    @classmethod
    def strip_whitespace(cls, v):
        return _strip(v)


class ChangePasswordInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_password: str = Field(..., alias='currentPassword', min_length=1)
    new_password: str = Field(..., alias='newPassword', min_length=1)
