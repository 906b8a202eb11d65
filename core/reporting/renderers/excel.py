from pathlib import Path
from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill, Border, Side

from core.reporting.contexts import ExcelReportContext


class ExcelReportRenderer:
    def render(self, ctx: ExcelReportContext, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb = Workbook()

        header_font = Font(bold=True)
        title_font = Font(bold=True, size=14)
        center = Alignment(horizontal="center")
        thin_border = Border(
            left=Side(style="thin"),
            right=Side(style="thin"),
            top=Side(style="thin"),
            bottom=Side(style="thin"),
        )
        header_fill = PatternFill("solid", fgColor="DDDDDD")
        over_fill = PatternFill("solid", fgColor="FECDD3")

        def header_row(sheet, headers):
            for col_index, h in enumerate(headers, start=1):
                cell = sheet.cell(row=1, column=col_index, value=h)
                cell.font = header_font
                cell.alignment = center
                cell.fill = header_fill
                cell.border = thin_border

        # ---------------- Overview ----------------
        ws = wb.active
        ws.title = "Overview"

        ws["A1"] = ctx.title
        ws["A1"].font = title_font

        row = 3

        def kv(key, value):
            nonlocal row
            ws[f"A{row}"] = key
            ws[f"B{row}"] = value
            ws[f"A{row}"].font = header_font
            ws[f"A{row}"].border = thin_border
            ws[f"B{row}"].border = thin_border
            row += 1

        dash = ctx.dashboard
        kv("As of", ctx.as_of.isoformat())
        kv("Total budget", dash.total_budget)
        kv("Consumption", dash.total_consumption)
        kv("Available", dash.total_available)
        kv("Savings", dash.total_savings)
        kv("Savings efficiency (%)", round(dash.savings_efficiency_percent, 2))

        row += 1
        kv("Orders - total", dash.orders_total)
        for status, count in dash.count_by_status.items():
            kv(f"Orders - {status.lower()}", count)

        ws.column_dimensions["A"].width = 30
        ws.column_dimensions["B"].width = 20

        # ---------------- Chapters ----------------
        ws_ch = wb.create_sheet("Chapters")
        header_row(ws_ch, ["Chapter", "Budget", "Committed", "Contracted", "Spent", "Available", "Used %"])

        for r, c in enumerate(ctx.chapters, start=2):
            values = [
                c.chapter,
                c.total_budget,
                c.committed,
                c.contracted,
                c.spent,
                c.available,
                round(c.utilization_percent, 2),
            ]
            for col, v in enumerate(values, 1):
                cell = ws_ch.cell(r, col, v)
                cell.border = thin_border
                if c.utilization_level == "over":
                    cell.fill = over_fill

        ws_ch.column_dimensions["A"].width = 24
        for col_letter in ("B", "C", "D", "E", "F", "G"):
            ws_ch.column_dimensions[col_letter].width = 15

        # ---------------- Orders ----------------
        ws_o = wb.create_sheet("Orders")
        header_row(ws_o, [
            "Order", "Description", "Status", "Chapter", "Estimated",
            "Current cost", "Savings", "Chapter residual", "Created",
        ])

        for r, o in enumerate(ctx.orders, start=2):
            values = [
                o.order_number,
                o.description,
                o.status,
                o.chapter or "",
                o.estimated_value,
                o.active_cost,
                o.savings,
                "" if o.chapter_residual is None else o.chapter_residual,
                o.created_at.isoformat(sep=" ", timespec="seconds") if o.created_at else "",
            ]
            for col, v in enumerate(values, 1):
                ws_o.cell(r, col, v).border = thin_border

        ws_o.column_dimensions["A"].width = 18
        ws_o.column_dimensions["B"].width = 40
        for col_letter in ("C", "D", "E", "F", "G", "H", "I"):
            ws_o.column_dimensions[col_letter].width = 16

        # ---------------- Instruments ----------------
        if ctx.instruments:
            ws_i = wb.create_sheet("Instruments")
            header_row(ws_i, ["Instrument", "Code", "Chapter", "Amount", "Drawn", "Residual"])

            for r, inst in enumerate(ctx.instruments, start=2):
                values = [inst.instrument_id, inst.code, inst.chapter, inst.amount, inst.drawn, inst.residual]
                for col, v in enumerate(values, 1):
                    ws_i.cell(r, col, v).border = thin_border

            ws_i.column_dimensions["A"].width = 38
            for col_letter in ("B", "C", "D", "E", "F"):
                ws_i.column_dimensions[col_letter].width = 15

        wb.save(output_path)
        return output_path
