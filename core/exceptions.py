# core/exceptions.py
from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """Base class for ledger errors; ``code`` is a stable identifier callers can branch on."""

    def __init__(self, message: str, *, code: str | None = None):
        super().__init__(message)
        self.code = code or self.__class__.__name__


class ValidationError(DomainError):
    """Order or instrument input rejected before anything is read or written."""


class NotFoundError(DomainError):
    pass


class BusinessRuleError(DomainError):
    """A save that would break a ledger rule (status order, instrument still in use)."""


class FundingShortfallError(BusinessRuleError):
    """
    Linked instruments cannot absorb the order's cost.
    ``preview`` is the coverage preview that was refused.
    """

    def __init__(self, message: str, *, preview: Any, code: str = "FUNDS_INSUFFICIENT"):
        super().__init__(message, code=code)
        self.preview = preview

    @property
    def uncovered(self) -> float:
        return float(getattr(self.preview, "uncovered", 0.0) or 0.0)
