"""ShoppingList rows: one per distinct ingredient, quantities kept as display strings."""
from typing import List, Optional

from lunchplan.utilities.constants import QUANTITY_SEPARATOR


class ShoppingListItem:
    def __init__(self, ingredient_id: str, name: Optional[str] = None,
                 quantities: Optional[List[str]] = None):
        self.ingredient_id = ingredient_id
        self.name = name
        self.quantities = quantities[:] if quantities else []

    def add_quantity(self, quantity: str):
        self.quantities.append(quantity)

    @property
    def quantity(self) -> str:
        # No unit math: quantities are opaque strings.
        return QUANTITY_SEPARATOR.join(self.quantities)

    def __str__(self) -> str:
        return f"{self.name or self.ingredient_id}: {self.quantity}"

    __repr__ = __str__

    def to_dict(self):
        return {
            "ingredientId": self.ingredient_id,
            "name": self.name,
            "quantities": list(self.quantities),
            "quantity": self.quantity,
        }
