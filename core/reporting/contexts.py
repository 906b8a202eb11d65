from dataclasses import dataclass
from datetime import date
from typing import List

from core.services.allocation import ChapterTotals
from core.services.ledger import CatalogRow, DashboardSummary, InstrumentBalanceRow


@dataclass
class ReportExportContext:
    title: str
    dashboard: DashboardSummary
    chapters: List[ChapterTotals]
    orders: List[CatalogRow]
    instruments: List[InstrumentBalanceRow]
    as_of: date


@dataclass
class ExcelReportContext(ReportExportContext):
    pass


@dataclass
class PdfReportContext(ReportExportContext):
    chart_png_path: str
