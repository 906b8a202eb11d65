""" Notify listeners (catalog, summaries, exports) that funding or orders changed"""
from core.events.signal import Signal


class DomainEvents:
    def __init__(self) -> None:
        self.funding_changed: Signal[str] = Signal()  # chapter
        self.orders_changed: Signal[str] = Signal()   # order_id


# SINGLE global instance
domain_events = DomainEvents()
