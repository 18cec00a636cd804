import io
from reportlab.lib.pagesizes import A4, landscape
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

from mealwise.utilities.constants import DAY_NAMES, PLANNED_SLOTS

_HEADER_STYLE = [
    ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#4CAF50")),
    ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
    ("FONTSIZE", (0, 0), (-1, 0), 12),
    ("BOTTOMPADDING", (0, 0), (-1, 0), 10),
    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
]


def _build(title: str, data, pagesize, align="CENTER") -> bytes:
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=pagesize,
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )
    styles = getSampleStyleSheet()
    table = Table(data, repeatRows=1)
    table.setStyle(TableStyle(_HEADER_STYLE + [("ALIGN", (0, 0), (-1, -1), align)]))
    doc.build([Paragraph(title, styles["Title"]), Spacer(1, 16), table])
    return buf.getvalue()


def generate_pdf_for_week(plan, meals):
    """Table of Day / Breakfast / Lunch / Dinner for a plan; meals is a list of (Meal, Recipe)."""
    cells = {}
    for meal, recipe in meals:
        if recipe is None or meal.meal_type not in PLANNED_SLOTS:
            continue
        cells.setdefault((meal.day_of_week, meal.meal_type), []).append(recipe.title)

    data = [["Day", "Breakfast", "Lunch", "Dinner"]]
    for i, day in enumerate(DAY_NAMES):
        data.append([f"{day} ({plan.date_for(i).strftime('%m/%d')})"] +
                    [", ".join(cells.get((i, slot), [])) or "-" for slot in PLANNED_SLOTS])

    start = plan.week_starting
    return _build(f"Meal Plan – Week of {start.month}/{start.day}/{start.year}", data, landscape(A4))


def generate_pdf_for_shopping_list(shopping_list, items):
    """Checklist table grouped by category."""
    data = [["", "Item", "Quantity", "Category", "For"]]
    for item in sorted(items, key=lambda i: (i.category, i.name.lower())):
        quantity = f"{item.quantity or ''} {item.unit or ''}".strip() or "-"
        data.append(["[x]" if item.is_checked else "[ ]", item.name, quantity, item.category,
                     item.added_from or ""])
    return _build(shopping_list.name, data, A4, align="LEFT")
