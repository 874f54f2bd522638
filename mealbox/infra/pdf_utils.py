import io
from xml.sax.saxutils import escape
from reportlab.lib.pagesizes import A4, landscape
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

from mealbox.utilities.constants import MEAL_SLOTS, SLOT_LABELS


def generate_pdf_for_box(box):
    """Generate a PDF table: Day / one column per slot (dish + kcal) for the provided weekly box."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=landscape(A4),
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )

    styles = getSampleStyleSheet()
    elements = [
        Paragraph(escape(f"Semaine {box.week} : {box.title}"), styles["Title"]),
        Paragraph(escape(f"{box.theme}. {box.description}"), styles["Normal"]),
        Spacer(1, 16),
    ]

    data = [["Jour"] + [SLOT_LABELS[s] for s in MEAL_SLOTS] + ["kcal"]]
    for day in box.days:
        by_slot = {m.slot: m for m in day.meals}
        row = [day.label]
        for slot in MEAL_SLOTS:
            meal = by_slot.get(slot)
            row.append(Paragraph(f"{escape(meal.name)}<br/>{meal.calories} kcal" if meal else "-", styles["BodyText"]))
        row.append(str(day.total_calories()))
        data.append(row)

    table = Table(data, repeatRows=1)
    table.setStyle(TableStyle([
        ("BACKGROUND", (0,0), (-1,0), colors.HexColor("#4CAF50")),
        ("TEXTCOLOR", (0,0), (-1,0), colors.whitesmoke),
        ("ALIGN", (0,0), (-1,-1), "CENTER"),
        ("VALIGN", (0,0), (-1,-1), "MIDDLE"),
        ("FONTNAME", (0,0), (-1,0), "Helvetica-Bold"),
        ("FONTSIZE", (0,0), (-1,0), 12),
        ("BOTTOMPADDING", (0,0), (-1,0), 10),
        ("GRID", (0,0), (-1,-1), 0.5, colors.grey),
    ]))

    elements.append(table)
    doc.build(elements)
    return buf.getvalue()
