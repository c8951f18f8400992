"""
Exception hierarchy for Partograf.

Validators raise these errors; the observation store catches them at its
boundary and reports them to the caller as a rejected mutation, so none of
them ever escapes an add/update/delete call.
"""

from __future__ import annotations

from typing import Any, Optional

from partograf.config import MESSAGES


class PartografError(Exception):
    """Base exception for engine errors."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class ValidationError(PartografError):
    """Raised when an entry is rejected before reaching a store."""
    pass


class RangeViolation(ValidationError):
    """Raised when a field lies outside its documented domain."""

    def __init__(
        self,
        field: str,
        value: Any,
        low: Any = None,
        high: Any = None
    ) -> None:
        if low is None and high is None:
            message = MESSAGES.INVALID_CHOICE.format(
                field=MESSAGES.label(field), value=value
            )
        else:
            message = MESSAGES.INVALID_RANGE.format(
                field=MESSAGES.label(field), low=low, high=high
            )
        super().__init__(message, field=field)
        self.value = value
        self.low = low
        self.high = high


class MissingRequiredField(ValidationError):
    """Raised when a required field is absent or empty."""

    def __init__(self, field: str) -> None:
        super().__init__(
            MESSAGES.MISSING_FIELD.format(field=MESSAGES.label(field)),
            field=field
        )


class IndexOutOfRange(PartografError):
    """Raised when an update or delete targets an index that no longer exists."""

    def __init__(self, index: int, length: int) -> None:
        super().__init__(MESSAGES.INDEX_OUT_OF_RANGE.format(index=index))
        self.index = index
        self.length = length


__all__ = [
    'PartografError',
    'ValidationError',
    'RangeViolation',
    'MissingRequiredField',
    'IndexOutOfRange',
]
