"""Ownership guard applied by every id-scoped read, update and delete."""
import logging
from typing import Optional, TypeVar

from lunchplan.domain.errors import Forbidden, NotFound

logger = logging.getLogger(__name__)

T = TypeVar("T")


def authorize(record: Optional[T], user_id: str, kind: str = "Resource") -> T:
    """Return record if user_id owns it.

    Raises NotFound when the record does not exist and Forbidden when it exists
    but belongs to someone else. Absence is checked first, so a missing record
    is reported the same way regardless of who asks.
    """
    if record is None:
        raise NotFound(f"{kind} not found")
    if getattr(record, "user_id", None) != user_id:
        logger.warning(f"Ownership check failed: {kind} {record!r} requested by {user_id}")
        raise Forbidden(f"Not authorized to access this {kind.lower()}")
    return record
