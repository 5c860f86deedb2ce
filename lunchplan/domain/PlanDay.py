"""PlanDay domain entity: the meals one user assigned to one calendar date."""
from typing import List, Optional


class PlanDay:
    def __init__(self, user_id: str, date: str, meals: Optional[List[str]] = None,
                 updated_at: Optional[int] = None):
        self.user_id = user_id
        self.date = date  # ISO YYYY-MM-DD
        self.meals = meals[:] if meals else []
        self.updated_at = updated_at

    def __repr__(self) -> str:
        return f"PlanDay({self.user_id!r}, {self.date!r}, meals={self.meals!r})"

    @staticmethod
    def empty(user_id: str, date: str) -> "PlanDay":
        '''Externally visible default for a date with no stored row.'''
        return PlanDay(user_id, date, [])

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return PlanDay(d.get("userId", ""), d.get("date", ""), d.get("meals") or [], d.get("updatedAt"))

    def to_dict(self):
        d = {"userId": self.user_id, "date": self.date, "meals": list(self.meals)}
        if self.updated_at is not None:
            d["updatedAt"] = self.updated_at
        return d
