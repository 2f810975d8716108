"""
Global configuration for libmat.

Provides:
- Element access bounds checking (on by default)
- Field width used by the diagnostic matrix printer

The initial bounds checking state can be set with the
``LIBMAT_BOUNDS_CHECK`` environment variable (``0``, ``false`` or ``no``
disables it).
"""

from __future__ import annotations

import os
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from ._errors import check_error, LIBMAT_ERROR_INVALID_ARGUMENT

logger = logging.getLogger("libmat.config")


def _env_bounds_check() -> bool:
    """Read the default bounds checking state from the environment."""
    return os.environ.get('LIBMAT_BOUNDS_CHECK', '').lower() not in ('0', 'false', 'no')


# =============================================================================
# Global Configuration State
# =============================================================================

class _Config:
    """
    Global configuration singleton.

    Attributes are read on every element access, so they are plain
    instance attributes behind light property validation.
    """

    def __init__(self):
        self._bounds_check = _env_bounds_check()
        self._print_width = 13

    @property
    def bounds_check(self) -> bool:
        """Whether ``M[i, j]`` validates its indices."""
        return self._bounds_check

    @bounds_check.setter
    def bounds_check(self, value: bool):
        self._bounds_check = bool(value)

    @property
    def print_width(self) -> int:
        """Field width of one element in ``format_matrix``."""
        return self._print_width

    @print_width.setter
    def print_width(self, value: int):
        check_error(
            isinstance(value, int) and value >= 1,
            LIBMAT_ERROR_INVALID_ARGUMENT,
            f"print_width must be a positive int, got {value!r}",
        )
        self._print_width = value

    def as_dict(self) -> Dict[str, Any]:
        return {
            'bounds_check': self._bounds_check,
            'print_width': self._print_width,
        }


# Global config instance
_config = _Config()


# =============================================================================
# Public API
# =============================================================================

def get_config() -> _Config:
    """Get global configuration instance."""
    return _config


def set_options(
    bounds_check: Optional[bool] = None,
    print_width: Optional[int] = None,
) -> None:
    """
    Set global options. Arguments left as None are unchanged.

    Args:
        bounds_check: Validate indices on element access
        print_width: Field width for ``format_matrix``

    Example:
        >>> import libmat
        >>> libmat.set_options(bounds_check=False)
    """
    if bounds_check is not None:
        _config.bounds_check = bounds_check
    if print_width is not None:
        _config.print_width = print_width
    logger.debug("options set: %s", _config.as_dict())


def get_options() -> Dict[str, Any]:
    """Get a snapshot of the current options."""
    return _config.as_dict()


@contextmanager
def options(**kwargs) -> Iterator[Dict[str, Any]]:
    """
    Temporarily override options, restoring the previous values on exit.

    Example:
        >>> with libmat.options(print_width=8):
        ...     print(libmat.format_matrix(m))
    """
    saved = get_options()
    set_options(**kwargs)
    try:
        yield get_options()
    finally:
        set_options(**saved)
