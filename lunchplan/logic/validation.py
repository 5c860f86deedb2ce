"""Caller-boundary validation: turns pydantic failures into InvalidArgument."""
import logging
from datetime import date as _date
from typing import Any, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from lunchplan.domain.errors import InvalidArgument
from lunchplan.utilities.constants import DATE_FORMAT, DATE_PATTERN
from lunchplan.utilities.validators import IngredientInput, MealInput, PlanDayInput

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def _first_error(exc: ValidationError) -> str:
    err = exc.errors()[0]
    loc = ".".join(str(p) for p in err.get("loc", ()))
    msg = err.get("msg", "Invalid value")
    return f"{loc}: {msg}" if loc else msg


def parse(schema: Type[M], payload: Any) -> M:
    """Validate payload against schema; the first offending field rejects the whole payload."""
    if not isinstance(payload, dict):
        raise InvalidArgument("Request body must be a JSON object")
    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        message = _first_error(e)
        logger.warning(f"Rejected {schema.__name__} payload: {message}")
        raise InvalidArgument(message) from e


def validate_ingredient(payload: Any) -> dict:
    return parse(IngredientInput, payload).model_dump()


def validate_meal(payload: Any) -> dict:
    """Title non-empty, at least one ingredient, every entry with ingredientId and quantity."""
    meal = parse(MealInput, payload)
    return {"title": meal.title, "ingredients": [i.to_dict() for i in meal.ingredients]}


def validate_plan_day(payload: Any) -> List[str]:
    """Return the meal ids of a plan day body; meals must be a list of strings."""
    return parse(PlanDayInput, payload).meals


def validate_date(value: Optional[str], field: str = "date") -> str:
    if not isinstance(value, str) or not DATE_PATTERN.match(value):
        raise InvalidArgument(f"Invalid {field} format. Use YYYY-MM-DD")
    try:
        _date.fromisoformat(value)
    except ValueError:
        raise InvalidArgument(f"Invalid {field}: {value} is not a calendar date ({DATE_FORMAT})") from None
    return value
