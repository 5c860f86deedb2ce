import unittest

from lunchplan.domain.ShoppingList import ShoppingListItem
from lunchplan.infra.pdf_utils import generate_pdf_for_shopping_list


class TestShoppingListPdf(unittest.TestCase):

    def test_pdf_bytes(self):
        items = [
            ShoppingListItem("A", "Rice", ["200g", "1 cup"]),
            ShoppingListItem("B", None, ["3"]),
        ]
        pdf = generate_pdf_for_shopping_list(items, "2024-06-01", "2024-06-07")
        self.assertTrue(pdf.startswith(b"%PDF"))

    def test_empty_list_still_renders(self):
        pdf = generate_pdf_for_shopping_list([])
        self.assertTrue(pdf.startswith(b"%PDF"))
