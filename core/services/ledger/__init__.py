from .models import CatalogRow, DashboardSummary, InstrumentBalanceRow
from .service import LedgerService

__all__ = ["LedgerService", "CatalogRow", "DashboardSummary", "InstrumentBalanceRow"]
