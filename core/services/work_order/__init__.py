from .service import WorkOrderService

__all__ = ["WorkOrderService"]
