"""Error hierarchy for nightlist.

Every public error class inherits from NightlistError. Each carries a
machine-readable ``code`` (from :class:`ErrorCode`), a human-readable
``message``, an optional structured ``context`` dict, and an optional
``cause`` (chained exception).

Error codes are defined as a :class:`str` enum so that they serialise
naturally to JSON and can be matched with simple ``==`` comparisons.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Error code enum
# ---------------------------------------------------------------------------

class ErrorCode(str, Enum):
    """Machine-readable error codes for every error the library can raise."""

    DUPLICATE_IDENTITY = "DUPLICATE_IDENTITY"
    INVALID_RANGE = "INVALID_RANGE"
    INVALID_QUALITY = "INVALID_QUALITY"
    NIGHT_NOT_FOUND = "NIGHT_NOT_FOUND"


# ---------------------------------------------------------------------------
# Base error
# ---------------------------------------------------------------------------

class NightlistError(Exception):
    """Base exception for all nightlist errors.

    Parameters
    ----------
    code:
        A value from :class:`ErrorCode` (or any string) identifying the
        error category.
    message:
        A developer-friendly description of what went wrong.
    context:
        Arbitrary structured data providing extra diagnostic detail.
        Keys and expected types are documented per subclass.
    cause:
        The underlying exception, if this error wraps another.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        self.cause: Exception | None = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


# ---------------------------------------------------------------------------
# Reconciliation errors
# ---------------------------------------------------------------------------

class DuplicateIdentityError(NightlistError):
    """The identity function returned the same key twice within one snapshot.

    This is a caller error; the reconciler cannot pick which of the two
    items is "the" entity.

    Context keys: ``snapshot`` (``"old"`` or ``"new"``), ``key``,
    ``positions``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_IDENTITY,
            message=message,
            context=context,
            cause=cause,
        )


class InvalidRangeError(NightlistError, AssertionError):
    """An edit position fell outside the list bounds during application.

    Raised when replaying an edit script produced by the reconciler
    indicates an algorithm defect, or when a hand-built script is applied
    to a list it does not fit.  Subclasses :class:`AssertionError` so it
    surfaces like any other broken invariant.

    Context keys: ``op``, ``index``, ``position``, ``length``, and for
    replay mismatches ``expected_keys`` / ``actual_keys``.  When a verify
    replay goes out of range, ``key`` (the key the op addressed, or
    ``None``), ``old_keys`` and ``new_keys`` are added.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.INVALID_RANGE,
            message=message,
            context=context,
            cause=cause,
        )


# ---------------------------------------------------------------------------
# Sleep tracker errors
# ---------------------------------------------------------------------------

class InvalidQualityError(NightlistError):
    """A sleep quality outside the 0-5 scale was submitted.

    Context keys: ``night_id``, ``quality``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.INVALID_QUALITY,
            message=message,
            context=context,
            cause=cause,
        )


class NightNotFoundError(NightlistError):
    """The store holds no night with the requested id.

    Context keys: ``night_id``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.NIGHT_NOT_FOUND,
            message=message,
            context=context,
            cause=cause,
        )
