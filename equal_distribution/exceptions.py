# -*- coding: utf-8 -*-
"""
Custom Exceptions
Exception classes for equal distribution error handling
"""

from typing import Any, Dict, Hashable, List, Optional


class EqualDistributionError(Exception):
    """
    Base exception for all equal distribution errors.
    """

    def __init__(
        self,
        message: str,
        code: str = "EQUAL_DISTRIBUTION_ERROR",
        details: Optional[List[Dict[str, Any]]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or []
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary"""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details
        }


# Bin Set Exceptions

class EmptyBinSetError(EqualDistributionError):
    """Raised when an operation needs at least one bin but none were given"""

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message=message or "At least one bin is required",
            code="EMPTY_BIN_SET"
        )


class DuplicateBinError(EqualDistributionError):
    """Raised when two bin count records share the same identifier"""

    def __init__(self, identifier: Hashable):
        super().__init__(
            message=f"Duplicate bin identifier: {identifier!r}",
            code="DUPLICATE_BIN",
            details=[{"field": "identifier", "value": repr(identifier)}]
        )
        self.identifier = identifier


class UnknownBinError(EqualDistributionError):
    """Raised when a placement policy names a bin that does not exist"""

    def __init__(self, identifier: Hashable):
        super().__init__(
            message=f"Unknown bin identifier: {identifier!r}",
            code="UNKNOWN_BIN",
            details=[{"field": "identifier", "value": repr(identifier)}]
        )
        self.identifier = identifier


# Rebalancing Exceptions

class InconsistentBinStateError(EqualDistributionError):
    """
    Raised when a bin is out of bounds but the computed transfer amount is 0.

    Counts that are internally consistent never reach this state; it means
    the records were changed behind the rebalancer's back.
    """

    def __init__(
        self,
        identifier: Hashable,
        count: int,
        low: int,
        high: int,
        counterpart: Hashable
    ):
        super().__init__(
            message=(
                f"Nothing can be moved: bin {identifier!r} holds {count} items "
                f"(bounds {low}..{high}), counterpart {counterpart!r} has no room"
            ),
            code="INCONSISTENT_BIN_STATE",
            details=[
                {"field": "identifier", "value": repr(identifier)},
                {"field": "count", "value": count},
                {"field": "low", "value": low},
                {"field": "high", "value": high},
                {"field": "counterpart", "value": repr(counterpart)},
            ]
        )
        self.identifier = identifier


class TransferContractError(EqualDistributionError):
    """Raised when a transfer operation reports an impossible result"""

    def __init__(self, requested: int, reported: Any, message: Optional[str] = None):
        super().__init__(
            message=message or f"Transfer reported {reported!r} moved items for a request of {requested}",
            code="TRANSFER_CONTRACT_VIOLATION",
            details=[
                {"field": "requested", "value": requested},
                {"field": "reported", "value": repr(reported)},
            ]
        )
        self.requested = requested
        self.reported = reported


class TransferTimeoutError(EqualDistributionError):
    """Raised when a transfer operation does not finish in time"""

    def __init__(self, source: Hashable, target: Hashable, timeout_sec: float):
        super().__init__(
            message=f"Transfer from {source!r} to {target!r} timed out after {timeout_sec}s",
            code="TRANSFER_TIMEOUT",
            details=[{"field": "timeout_sec", "value": timeout_sec}]
        )
        self.source = source
        self.target = target
        self.timeout_sec = timeout_sec
