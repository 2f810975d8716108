"""
Diagnostic text rendering of matrices.

Not a stable machine-readable format: one line per row, each element
right-aligned in a fixed-width ``%g`` field followed by a space.
"""

from __future__ import annotations

import sys
from typing import Optional, TextIO, TYPE_CHECKING

from ._config import get_config

if TYPE_CHECKING:
    from ._base import MatrixBase

__all__ = ['format_matrix', 'print_matrix']


def format_matrix(mat: "MatrixBase", width: Optional[int] = None) -> str:
    """
    Render ``mat`` as text.

    Args:
        mat: Any matrix-concept value
        width: Field width per element (default: ``print_width`` option)

    Example:
        >>> print(format_matrix(Matrix.from_rows([[1, 2], [3, 4]]), width=4))
           1    2
           3    4
    """
    if width is None:
        width = get_config().print_width
    lines = []
    for i in range(mat.rows):
        lines.append("".join(f"{mat[i, j]:>{width}g} " for j in range(mat.cols)))
    return "".join(line + "\n" for line in lines)


def print_matrix(mat: "MatrixBase", file: Optional[TextIO] = None) -> None:
    """Write ``format_matrix(mat)`` to ``file`` (default: stdout)."""
    if file is None:
        file = sys.stdout
    file.write(format_matrix(mat))
