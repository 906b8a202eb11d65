from pathlib import Path
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib import colors
from reportlab.platypus import (
    SimpleDocTemplate,
    Paragraph,
    Spacer,
    Table,
    TableStyle,
    Image,
)
from reportlab.lib.styles import getSampleStyleSheet

from core.reporting.contexts import PdfReportContext

_TABLE_STYLE = [
    ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
    ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
]


def _money(value: float | None) -> str:
    if value is None:
        return "-"
    return f"{value:,.2f}"


class PdfReportRenderer:
    def render(self, ctx: PdfReportContext, output_path: Path) -> Path:
        doc = SimpleDocTemplate(
            str(output_path),
            pagesize=landscape(A4),
            leftMargin=40,
            rightMargin=40,
            topMargin=40,
            bottomMargin=40,
        )

        styles = getSampleStyleSheet()
        story = []

        # ---------------- Title ----------------
        story.append(Paragraph(ctx.title, styles["Title"]))
        story.append(Spacer(1, 12))

        # ---------------- Summary ----------------
        dash = ctx.dashboard
        info = [
            f"As of: {ctx.as_of.isoformat()}",
            f"Total budget: {_money(dash.total_budget)}",
            f"Consumption: {_money(dash.total_consumption)}",
            f"Available: {_money(dash.total_available)}",
            f"Savings: {_money(dash.total_savings)} ({dash.savings_efficiency_percent:.1f}%)",
            f"Orders: {dash.orders_total}",
        ]
        for line in info:
            story.append(Paragraph(line, styles["Normal"]))

        story.append(Spacer(1, 16))

        # ---------------- Chart ----------------
        if ctx.chart_png_path:
            story.append(Paragraph("Chapter Budget", styles["Heading2"]))
            story.append(Spacer(1, 8))
            img = Image(ctx.chart_png_path)
            img._restrictSize(720, 280)
            story.append(img)
            story.append(Spacer(1, 16))

        # ---------------- Chapters ----------------
        if ctx.chapters:
            story.append(Paragraph("Chapters", styles["Heading2"]))
            story.append(Spacer(1, 8))

            data = [["Chapter", "Budget", "Committed", "Contracted", "Spent", "Available", "Used %"]]
            for c in ctx.chapters:
                data.append([
                    c.chapter,
                    _money(c.total_budget),
                    _money(c.committed),
                    _money(c.contracted),
                    _money(c.spent),
                    _money(c.available),
                    f"{c.utilization_percent:.1f}",
                ])

            table = Table(data, colWidths=[160, 95, 95, 95, 95, 95, 60])
            style = list(_TABLE_STYLE)
            for index, c in enumerate(ctx.chapters, start=1):
                if c.available < 0:
                    style.append(("TEXTCOLOR", (5, index), (5, index), colors.red))
            table.setStyle(TableStyle(style))
            story.append(table)
            story.append(Spacer(1, 16))

        # ---------------- Orders ----------------
        if ctx.orders:
            story.append(Paragraph("Work Orders", styles["Heading2"]))
            story.append(Spacer(1, 8))

            data = [["Order", "Status", "Chapter", "Current cost", "Savings", "Chapter residual"]]
            for o in ctx.orders:
                data.append([
                    o.order_number,
                    o.status,
                    o.chapter or "-",
                    _money(o.active_cost),
                    _money(o.savings),
                    _money(o.chapter_residual),
                ])

            table = Table(data, colWidths=[150, 100, 140, 100, 100, 110])
            table.setStyle(TableStyle(_TABLE_STYLE))
            story.append(table)

        doc.build(story)
        return output_path
