import io
from typing import List, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from lunchplan.domain.ShoppingList import ShoppingListItem


def generate_pdf_for_shopping_list(items: List[ShoppingListItem], start_date: Optional[str] = None,
                                   end_date: Optional[str] = None) -> bytes:
    """Render a two-column PDF table (Ingredient / Quantity) for an aggregated shopping list."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=A4,
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )

    styles = getSampleStyleSheet()
    period = f"{start_date} to {end_date}" if start_date and end_date else "Whole plan"
    elements = [
        Paragraph("Shopping List", styles["Title"]),
        Paragraph(period, styles["Normal"]),
        Spacer(1, 16),
    ]

    data = [["Ingredient", "Quantity"]]
    for item in items:
        data.append([
            Paragraph(escape(item.name or item.ingredient_id), styles["Normal"]),
            Paragraph(escape(item.quantity), styles["Normal"]),
        ])
    if not items:
        data.append(["-", "-"])

    table = Table(data, repeatRows=1, colWidths=[260, 270])
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#4CAF50")),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, 0), 12),
        ("BOTTOMPADDING", (0, 0), (-1, 0), 10),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
    ]))

    elements.append(table)
    doc.build(elements)
    return buf.getvalue()
