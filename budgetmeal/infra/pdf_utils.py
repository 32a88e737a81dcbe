import io
from xml.sax.saxutils import escape
from reportlab.lib.pagesizes import A4
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet


def generate_pdf_for_plan(plan: dict):
    """Generate a simple PDF table: Meal / Dish / Cost / Calories for a stored plan document."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=A4,
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )

    styles = getSampleStyleSheet()
    day = (plan.get("date") or "")[:10]
    elements = [
        Paragraph(f"Meal Plan - {day}", styles["Title"]),
        Spacer(1, 16),
    ]

    data = [["Meal", "Dish", "Cost (ETB)", "Calories"]]
    for meal in plan.get("meals", []):
        data.append([
            meal.get("type", ""),
            meal.get("name", "-"),
            f"{meal.get('cost', 0):.2f}",
            str(meal.get("calories", 0)),
        ])
    data.append([
        "Total", "",
        f"{plan.get('total_estimated_cost', 0):.2f}",
        str(plan.get("total_calories", sum(m.get("calories", 0) for m in plan.get("meals", [])))),
    ])

    table = Table(data, repeatRows=1)
    table.setStyle(TableStyle([
        ("BACKGROUND", (0,0), (-1,0), colors.HexColor("#10B981")),
        ("TEXTCOLOR", (0,0), (-1,0), colors.whitesmoke),
        ("ALIGN", (0,0), (-1,-1), "CENTER"),
        ("FONTNAME", (0,0), (-1,0), "Helvetica-Bold"),
        ("FONTNAME", (0,-1), (-1,-1), "Helvetica-Bold"),
        ("FONTSIZE", (0,0), (-1,0), 12),
        ("BOTTOMPADDING", (0,0), (-1,0), 10),
        ("GRID", (0,0), (-1,-1), 0.5, colors.grey),
    ]))
    elements.append(table)

    analysis = plan.get("aiAnalysis")
    if analysis:
        elements.append(Spacer(1, 12))
        elements.append(Paragraph(f"Score: {analysis.get('score')}/10 - {escape(str(analysis.get('summary', '')))}", styles["Normal"]))
    if plan.get("notes"):
        elements.append(Spacer(1, 12))
        elements.append(Paragraph(f"Notes: {escape(plan['notes'])}", styles["Normal"]))

    doc.build(elements)
    return buf.getvalue()
