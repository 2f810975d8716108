"""
Dense Column-Major Matrix Types

Matrix            owns a contiguous buffer, ld == rows
MatrixView        writable window over another matrix's buffer
MatrixConstView   read-only window over another matrix's buffer

Views never copy. A write through a MatrixView is immediately visible
through its parent, and vice versa:

    >>> m = Matrix(4, 4)
    >>> v = MatrixView(m, 1, 0, 3, 2)   # rows 1..3, cols 0..1
    >>> v[0, 0] = 7.0
    >>> m[1, 0]
    7.0
"""

from __future__ import annotations

from typing import Any, Sequence, Tuple

import numpy as np

from ._base import MatrixBase, MutableMatrixBase
from ._errors import (
    check_error,
    check_mutable,
    LIBMAT_ERROR_INVALID_ARGUMENT,
    LIBMAT_ERROR_INDEX_OUT_OF_BOUNDS,
    LIBMAT_ERROR_READ_ONLY,
)
from ._ownership import Ownership, RefChain

__all__ = ['Matrix', 'MatrixView', 'MatrixConstView']


def _check_dim(op: str, name: str, value: Any) -> int:
    check_error(
        isinstance(value, (int, np.integer)) and value >= 0,
        LIBMAT_ERROR_INVALID_ARGUMENT,
        f"{op}: {name} must be a non-negative int, got {value!r}",
    )
    return int(value)


def _sub_block(
    op: str,
    parent: MatrixBase,
    row_offset: int,
    col_offset: int,
    rows: int,
    cols: int,
) -> Tuple[int, int]:
    """Validate a sub-block of ``parent``; return (offset, ld) of the view."""
    check_error(
        isinstance(parent, MatrixBase),
        LIBMAT_ERROR_INVALID_ARGUMENT,
        f"{op}: parent must be a matrix, got {type(parent).__name__}",
    )
    row_offset = _check_dim(op, "row_offset", row_offset)
    col_offset = _check_dim(op, "col_offset", col_offset)
    rows = _check_dim(op, "rows", rows)
    cols = _check_dim(op, "cols", cols)
    check_error(
        row_offset < parent.rows and row_offset + rows <= parent.rows,
        LIBMAT_ERROR_INDEX_OUT_OF_BOUNDS,
        f"{op}: rows [{row_offset}, {row_offset + rows}) outside parent with {parent.rows} rows",
    )
    check_error(
        col_offset < parent.cols and col_offset + cols <= parent.cols,
        LIBMAT_ERROR_INDEX_OUT_OF_BOUNDS,
        f"{op}: cols [{col_offset}, {col_offset + cols}) outside parent with {parent.cols} cols",
    )
    return parent.offset + row_offset + col_offset * parent.ld, parent.ld


def _check_buffer(op: str, data: Any, offset: int, rows: int, cols: int, ld: int) -> None:
    check_error(
        isinstance(data, np.ndarray) and data.ndim == 1 and data.dtype == np.float64,
        LIBMAT_ERROR_INVALID_ARGUMENT,
        f"{op}: buffer must be a 1-D float64 ndarray",
    )
    for name, value in (("offset", offset), ("rows", rows), ("cols", cols), ("ld", ld)):
        _check_dim(op, name, value)
    check_error(
        ld >= rows,
        LIBMAT_ERROR_INVALID_ARGUMENT,
        f"{op}: ld={ld} smaller than rows={rows}",
    )
    if rows * cols > 0:
        last = offset + (rows - 1) + (cols - 1) * ld
        check_error(
            last < data.shape[0],
            LIBMAT_ERROR_INDEX_OUT_OF_BOUNDS,
            f"{op}: last element {last} outside buffer of {data.shape[0]}",
        )


# =============================================================================
# Matrix (owner)
# =============================================================================

class Matrix(MutableMatrixBase):
    """
    Dense matrix owning its storage.

    Stored in column-major order, as in Fortran and MATLAB. Dimensions
    are fixed at construction; elements start at zero.

    Args:
        rows: Number of rows
        cols: Number of columns (default: ``rows``, a square matrix)

    Example:
        >>> m = Matrix(2, 3)
        >>> m[1, 2] = 5.0
        >>> m.data[1 + 2 * m.rows]
        5.0
    """

    def __init__(self, rows: int, cols: int = None):
        if cols is None:
            cols = rows
        self._rows = _check_dim("Matrix", "rows", rows)
        self._cols = _check_dim("Matrix", "cols", cols)
        self._data = np.zeros(self._rows * self._cols, dtype=np.float64)

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def ld(self) -> int:
        return self._rows

    @property
    def offset(self) -> int:
        return 0

    @property
    def data(self) -> np.ndarray:
        return self._data

    @property
    def ownership(self) -> Ownership:
        return Ownership.OWNED

    def set_all(self, value: float) -> None:
        """Set every element in one pass over the contiguous buffer."""
        self._data.fill(value)

    # -------------------------------------------------------------------------
    # Copy Operations
    # -------------------------------------------------------------------------

    def copy(self) -> "Matrix":
        """Create a deep copy."""
        new = Matrix(self._rows, self._cols)
        new._data[:] = self._data
        return new

    def __copy__(self) -> "Matrix":
        return self.copy()

    def __deepcopy__(self, memo) -> "Matrix":
        return self.copy()

    # -------------------------------------------------------------------------
    # Factory Methods
    # -------------------------------------------------------------------------

    @classmethod
    def zeros(cls, rows: int, cols: int = None) -> "Matrix":
        return cls(rows, cols)

    @classmethod
    def full(cls, rows: int, cols: int, value: float) -> "Matrix":
        mat = cls(rows, cols)
        mat.set_all(value)
        return mat

    @classmethod
    def identity(cls, n: int) -> "Matrix":
        mat = cls(n)
        mat._data[::n + 1] = 1.0
        return mat

    @classmethod
    def from_numpy(cls, array: Any) -> "Matrix":
        """
        Copy a 1-D or 2-D array into a new column-major matrix.

        1-D input becomes a column vector.
        """
        arr = np.asarray(array, dtype=np.float64)
        if arr.ndim == 1:
            arr = arr.reshape(-1, 1)
        check_error(
            arr.ndim == 2,
            LIBMAT_ERROR_INVALID_ARGUMENT,
            f"from_numpy: expected 1D or 2D array, got {arr.ndim}D",
        )
        mat = cls(arr.shape[0], arr.shape[1])
        mat._data[:] = arr.ravel(order='F')
        return mat

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]]) -> "Matrix":
        """Build from a row-major nested sequence, e.g. ``[[1, 2], [3, 4]]``."""
        return cls.from_numpy(np.array(rows, dtype=np.float64, ndmin=2))

    @classmethod
    def from_matrix(cls, other: MatrixBase) -> "Matrix":
        """Deep copy of any matrix-concept value (owned or view)."""
        mat = cls(other.rows, other.cols)
        mat.assign(other)
        return mat


# =============================================================================
# Views
# =============================================================================

class MatrixView(MutableMatrixBase):
    """
    Writable sub-block of another matrix.

    Does not own storage: element (i, j) is ``data[offset + i + j*ld]``
    in the parent's buffer, and the parent is kept alive through the
    view's reference chain.

    Args:
        parent: Matrix or MatrixView to take the block from
        row_offset, col_offset: Position of the block's (0, 0)
        rows, cols: Block dimensions

    Raises:
        IndexOutOfBoundsError: If the block does not fit in ``parent``
        ReadOnlyError: If ``parent`` is a MatrixConstView
    """

    def __init__(self, parent: MatrixBase, row_offset: int, col_offset: int,
                 rows: int, cols: int):
        check_mutable("MatrixView", parent)
        self._offset, self._ld = _sub_block("MatrixView", parent, row_offset, col_offset, rows, cols)
        self._rows = int(rows)
        self._cols = int(cols)
        self._data = parent.data
        self._ref_chain = RefChain()
        self._ref_chain.add(parent)

    @classmethod
    def from_buffer(cls, data: np.ndarray, offset: int, rows: int, cols: int,
                    ld: int) -> "MatrixView":
        """
        Create a view directly over a float64 buffer.

        The buffer is referenced, not copied.
        """
        _check_buffer("MatrixView.from_buffer", data, offset, rows, cols, ld)
        check_error(
            data.flags.writeable,
            LIBMAT_ERROR_READ_ONLY,
            "MatrixView.from_buffer: buffer is read-only",
        )
        view = cls.__new__(cls)
        view._data = data
        view._offset, view._rows, view._cols, view._ld = int(offset), int(rows), int(cols), int(ld)
        view._ref_chain = RefChain()
        view._ref_chain.add(data)
        return view

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def ld(self) -> int:
        return self._ld

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def data(self) -> np.ndarray:
        return self._data

    @property
    def ownership(self) -> Ownership:
        return Ownership.VIEW

    def copy(self) -> Matrix:
        """Materialize the view into a new owning Matrix."""
        return Matrix.from_matrix(self)


class MatrixConstView(MatrixBase):
    """
    Read-only sub-block of another matrix.

    Exposes no mutating method. Its ``data`` is a non-writeable numpy
    view of the parent's buffer, so writes through ``to_numpy()`` or
    ``getData()`` fail as well. Changes made through the parent are
    still visible.
    """

    read_only = True

    def __init__(self, parent: MatrixBase, row_offset: int, col_offset: int,
                 rows: int, cols: int):
        self._offset, self._ld = _sub_block("MatrixConstView", parent, row_offset, col_offset, rows, cols)
        self._rows = int(rows)
        self._cols = int(cols)
        self._data = _read_only(parent.data)
        self._ref_chain = RefChain()
        self._ref_chain.add(parent)

    @classmethod
    def from_buffer(cls, data: np.ndarray, offset: int, rows: int, cols: int,
                    ld: int) -> "MatrixConstView":
        """Create a read-only view directly over a float64 buffer."""
        _check_buffer("MatrixConstView.from_buffer", data, offset, rows, cols, ld)
        view = cls.__new__(cls)
        view._data = _read_only(data)
        view._offset, view._rows, view._cols, view._ld = int(offset), int(rows), int(cols), int(ld)
        view._ref_chain = RefChain()
        view._ref_chain.add(data)
        return view

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def ld(self) -> int:
        return self._ld

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def data(self) -> np.ndarray:
        return self._data

    @property
    def ownership(self) -> Ownership:
        return Ownership.VIEW

    def copy(self) -> Matrix:
        """Materialize the view into a new owning Matrix."""
        return Matrix.from_matrix(self)


def _read_only(data: np.ndarray) -> np.ndarray:
    if not data.flags.writeable:
        return data
    ro = data.view()
    ro.flags.writeable = False
    return ro
