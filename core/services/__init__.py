from .funding import FundingService
from .insights import InsightService
from .ledger import LedgerService
from .work_order import WorkOrderService
