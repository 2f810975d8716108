"""
Error handling for libmat.

Every failure in this package is a precondition violation: a dimension
mismatch, an out-of-range index or view, a read-only destination, or a
malformed argument. Each kind carries an integer code (kept stable so
callers can switch on it) and maps to an exception subclass that also
derives from the matching builtin, so ``except IndexError`` keeps working.
"""

from __future__ import annotations

import numbers
from typing import Dict, Optional, Type


# =============================================================================
# Error Codes
# =============================================================================

# Success
LIBMAT_OK = 0

# General errors (1-9)
LIBMAT_ERROR_UNKNOWN = 1

# Argument errors (10-19)
LIBMAT_ERROR_INVALID_ARGUMENT = 10
LIBMAT_ERROR_DIMENSION_MISMATCH = 11
LIBMAT_ERROR_INDEX_OUT_OF_BOUNDS = 14

# Access errors (20-29)
LIBMAT_ERROR_READ_ONLY = 22


_ERROR_MESSAGES = {
    LIBMAT_OK: "Success",
    LIBMAT_ERROR_UNKNOWN: "Unknown error",
    LIBMAT_ERROR_INVALID_ARGUMENT: "Invalid argument",
    LIBMAT_ERROR_DIMENSION_MISMATCH: "Dimension mismatch",
    LIBMAT_ERROR_INDEX_OUT_OF_BOUNDS: "Index out of bounds",
    LIBMAT_ERROR_READ_ONLY: "Read-only matrix",
}


# =============================================================================
# Exception Classes
# =============================================================================

class LibmatError(Exception):
    """
    Base exception for all libmat errors.

    Attributes:
        code: One of the ``LIBMAT_ERROR_*`` constants
        message: Human readable message, including the failing context
    """

    OK = LIBMAT_OK
    ERROR_UNKNOWN = LIBMAT_ERROR_UNKNOWN
    ERROR_INVALID_ARGUMENT = LIBMAT_ERROR_INVALID_ARGUMENT
    ERROR_DIMENSION_MISMATCH = LIBMAT_ERROR_DIMENSION_MISMATCH
    ERROR_INDEX_OUT_OF_BOUNDS = LIBMAT_ERROR_INDEX_OUT_OF_BOUNDS
    ERROR_READ_ONLY = LIBMAT_ERROR_READ_ONLY

    def __init__(self, code: int, message: Optional[str] = None):
        self.code = code
        if message is None:
            message = _ERROR_MESSAGES.get(code, f"Unknown error (code={code})")
        self.message = message
        super().__init__(f"libmat error {code}: {message}")

    @classmethod
    def from_code(cls, code: int, context: str = "") -> "LibmatError":
        """Create the exception subclass registered for ``code``."""
        base_msg = _ERROR_MESSAGES.get(code, "Unknown error")
        msg = f"{context}: {base_msg}" if context else base_msg
        exc_type = _EXCEPTION_TYPES.get(code, LibmatError)
        return exc_type(code, msg)


class InvalidArgumentError(LibmatError, ValueError):
    """Malformed argument (negative size, bad selection, ...)."""


class DimensionMismatchError(LibmatError, ValueError):
    """Operand shapes are incompatible for the requested operation."""


class IndexOutOfBoundsError(LibmatError, IndexError):
    """Element, row, column or view outside the matrix."""


class ReadOnlyError(LibmatError, TypeError):
    """A mutating operation was handed a read-only matrix."""


_EXCEPTION_TYPES: Dict[int, Type[LibmatError]] = {
    LIBMAT_ERROR_INVALID_ARGUMENT: InvalidArgumentError,
    LIBMAT_ERROR_DIMENSION_MISMATCH: DimensionMismatchError,
    LIBMAT_ERROR_INDEX_OUT_OF_BOUNDS: IndexOutOfBoundsError,
    LIBMAT_ERROR_READ_ONLY: ReadOnlyError,
}


# =============================================================================
# Error Checking Functions
# =============================================================================

def check_error(ok: bool, code: int, context: str = "") -> None:
    """
    Raise the exception registered for ``code`` unless ``ok`` holds.

    Args:
        ok: Result of the precondition test
        code: Error code to report on failure
        context: Operation name and offending values

    Raises:
        LibmatError: Subclass mapped from ``code``
    """
    if ok:
        return
    raise LibmatError.from_code(code, context)


def check_shape(op: str, a, b) -> None:
    """Require two matrix-concept operands of identical shape."""
    check_error(
        a.rows == b.rows and a.cols == b.cols,
        LIBMAT_ERROR_DIMENSION_MISMATCH,
        f"{op}: {a.rows}x{a.cols} vs {b.rows}x{b.cols}",
    )


def check_int(op: str, what: str, index) -> None:
    """Require a plain integer index (bools are rejected)."""
    check_error(
        isinstance(index, numbers.Integral) and not isinstance(index, bool),
        LIBMAT_ERROR_INVALID_ARGUMENT,
        f"{op}: {what} must be an int, got {index!r}",
    )


def check_index(op: str, what: str, index: int, bound: int) -> None:
    """Require an int with ``0 <= index < bound``."""
    check_int(op, what, index)
    check_error(
        0 <= index < bound,
        LIBMAT_ERROR_INDEX_OUT_OF_BOUNDS,
        f"{op}: {what} {index} not in [0, {bound})",
    )


def check_mutable(op: str, mat) -> None:
    """Reject read-only destinations."""
    check_error(
        not getattr(mat, "read_only", False),
        LIBMAT_ERROR_READ_ONLY,
        f"{op}: destination {type(mat).__name__} cannot be modified",
    )
