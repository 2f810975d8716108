"""
Matrix Concept Base Classes

This module defines the abstract base classes shared by every dense
matrix type. Generic algorithms in ``libmat.ops`` and ``libmat.indexing``
are written once against this interface and work the same on owning
matrices, writable views and read-only views.

Type Hierarchy:

    MatrixBase (ABC)                 read access ("matrix concept")
    ├── MatrixConstView
    └── MutableMatrixBase (ABC)      adds writes ("mutable matrix concept")
        ├── Matrix
        └── MatrixView

Storage Model:

    Every matrix is a window over a 1-D float64 numpy buffer in
    column-major order. Element (i, j) lives at

        data[offset + i + j*ld]

    where ``ld`` (leading dimension) is the buffer distance between two
    consecutive columns. An owning Matrix has offset 0 and ld == rows;
    a view of a sub-block keeps its parent's ld, skipping the rows it
    does not cover when stepping from one column to the next.

Concurrency:

    Nothing here is synchronized. Views that overlap the same storage
    must not be written from concurrent threads; callers serialize
    access themselves.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import List, Tuple, TYPE_CHECKING

import numpy as np
from numpy.lib.stride_tricks import as_strided

from ._config import get_config
from ._errors import check_index, check_int, check_shape
from ._format import format_matrix
from ._ownership import Ownership

if TYPE_CHECKING:
    from ._matrix import MatrixView, MatrixConstView

logger = logging.getLogger("libmat.matrix")

__all__ = ['MatrixBase', 'MutableMatrixBase', 'shares_storage']


def shares_storage(a: "MatrixBase", b: "MatrixBase") -> bool:
    """Check whether the elements of two matrices may overlap in memory."""
    if a.rows * a.cols == 0 or b.rows * b.cols == 0:
        return False
    return bool(np.may_share_memory(a.to_numpy(), b.to_numpy()))


class MatrixBase(ABC):
    """
    Abstract base class for the matrix concept.

    Required Properties (subclasses must implement):
        rows, cols: Dimensions
        ld: Leading dimension (column stride in the buffer)
        offset: Buffer position of element (0, 0)
        data: Underlying 1-D float64 buffer
        ownership: OWNED or VIEW
    """

    read_only = False

    # =========================================================================
    # Abstract Properties
    # =========================================================================

    @property
    @abstractmethod
    def rows(self) -> int:
        ...

    @property
    @abstractmethod
    def cols(self) -> int:
        ...

    @property
    @abstractmethod
    def ld(self) -> int:
        ...

    @property
    @abstractmethod
    def offset(self) -> int:
        ...

    @property
    @abstractmethod
    def data(self) -> np.ndarray:
        ...

    @property
    @abstractmethod
    def ownership(self) -> Ownership:
        ...

    # =========================================================================
    # Derived Properties
    # =========================================================================

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.rows, self.cols)

    @property
    def size(self) -> int:
        """Number of addressable elements (rows * cols)."""
        return self.rows * self.cols

    @property
    def is_contiguous(self) -> bool:
        """True when no padding separates consecutive columns."""
        return self.ld == self.rows or self.cols <= 1

    # =========================================================================
    # Element Access
    # =========================================================================

    def _addr(self, key) -> int:
        """Buffer position of element ``key = (i, j)``."""
        if not isinstance(key, tuple) or len(key) != 2:
            raise TypeError(f"Index must be (row, col) tuple, got {key!r}")
        i, j = key
        op = type(self).__name__
        if get_config().bounds_check:
            check_index(op, "row", i, self.rows)
            check_index(op, "column", j, self.cols)
        else:
            check_int(op, "row", i)
            check_int(op, "column", j)
        return self.offset + i + j * self.ld

    def __getitem__(self, key) -> float:
        return float(self.data[self._addr(key)])

    def column_slice(self, j: int) -> np.ndarray:
        """The ``rows`` contiguous buffer elements of column ``j``."""
        start = self.offset + j * self.ld
        return self.data[start:start + self.rows]

    def row_slice(self, i: int) -> np.ndarray:
        """The ``cols`` buffer elements of row ``i``, stride ``ld``."""
        if self.cols == 0:
            return self.data[0:0]
        start = self.offset + i
        return self.data[start:start + (self.cols - 1) * self.ld + 1:self.ld]

    def to_numpy(self) -> np.ndarray:
        """
        Zero-copy 2-D ndarray over the matrix elements.

        Writes through the returned array land in the matrix storage;
        for read-only matrices the array is not writeable.
        """
        itemsize = self.data.itemsize
        return as_strided(
            self.data[self.offset:],
            shape=(self.rows, self.cols),
            strides=(itemsize, itemsize * self.ld),
            writeable=not self.read_only,
        )

    def tolist(self) -> List[List[float]]:
        """Row-major nested list of the elements."""
        return self.to_numpy().tolist()

    def const_view(self, row_offset: int, col_offset: int, rows: int, cols: int) -> "MatrixConstView":
        """Read-only view of a sub-block."""
        from ._matrix import MatrixConstView
        return MatrixConstView(self, row_offset, col_offset, rows, cols)

    # =========================================================================
    # Matrix concept vocabulary
    # =========================================================================

    def getRows(self) -> int:
        return self.rows

    def getCols(self) -> int:
        return self.cols

    def getLd(self) -> int:
        return self.ld

    def getData(self) -> np.ndarray:
        """Buffer starting at element (0, 0); ``getData()[i + j*getLd()]`` is ``M[i, j]``."""
        return self.data[self.offset:]

    # =========================================================================
    # Representation
    # =========================================================================

    def __str__(self) -> str:
        return format_matrix(self)

    def __repr__(self) -> str:
        return (f"<{type(self).__name__} {self.rows}x{self.cols} "
                f"ld={self.ld} {self.ownership.value}>")


class MutableMatrixBase(MatrixBase):
    """
    Abstract base class for the mutable matrix concept.

    Adds element writes, whole-matrix fill and assignment from any
    matrix-concept value of equal dimensions.
    """

    def __setitem__(self, key, value: float) -> None:
        self.data[self._addr(key)] = value

    def set_all(self, value: float) -> None:
        """Set every element, one column block at a time."""
        for j in range(self.cols):
            self.column_slice(j)[:] = value

    def assign(self, other: MatrixBase) -> "MutableMatrixBase":
        """
        Copy ``other`` into this matrix, column by column.

        Raises:
            DimensionMismatchError: If shapes differ
        """
        check_shape("assign", self, other)
        if other is self:
            return self
        if shares_storage(self, other):
            logger.debug("assign: source overlaps destination, copying source first")
            other = other.to_numpy().copy(order='F')
            for j in range(self.cols):
                self.column_slice(j)[:] = other[:, j]
            return self
        for j in range(self.cols):
            self.column_slice(j)[:] = other.column_slice(j)
        return self

    def view(self, row_offset: int, col_offset: int, rows: int, cols: int) -> "MatrixView":
        """Writable view of a sub-block."""
        from ._matrix import MatrixView
        return MatrixView(self, row_offset, col_offset, rows, cols)

    def setAll(self, value: float) -> None:
        self.set_all(value)
