from .service import FundingService

__all__ = ["FundingService"]
