"""
Strided Vector Types

1-D counterpart of the matrix concept, used by ``get_col`` / ``get_row``.
A vector is a window ``(data, offset, size, stride)`` over a float64
numpy buffer: element ``k`` lives at ``data[offset + k*stride]``.

Type Hierarchy:

    VectorBase
    ├── VectorConstView      read-only window
    └── _MutableVector
        ├── VectorView       writable window, no ownership
        └── Vector           owns a contiguous buffer
"""

from __future__ import annotations

from typing import Any, Iterator, List, Sequence

import numpy as np
from numpy.lib.stride_tricks import as_strided

from ._config import get_config
from ._errors import (
    check_error,
    check_index,
    LIBMAT_ERROR_INVALID_ARGUMENT,
    LIBMAT_ERROR_INDEX_OUT_OF_BOUNDS,
    LIBMAT_ERROR_READ_ONLY,
)
from ._ownership import Ownership, RefChain

__all__ = ['VectorBase', 'VectorConstView', 'VectorView', 'Vector']


def _check_window(op: str, data: np.ndarray, offset: int, size: int, stride: int) -> None:
    check_error(
        isinstance(data, np.ndarray) and data.ndim == 1 and data.dtype == np.float64,
        LIBMAT_ERROR_INVALID_ARGUMENT,
        f"{op}: buffer must be a 1-D float64 ndarray",
    )
    check_error(
        offset >= 0 and size >= 0 and stride >= 1,
        LIBMAT_ERROR_INVALID_ARGUMENT,
        f"{op}: offset={offset} size={size} stride={stride}",
    )
    if size > 0:
        last = offset + (size - 1) * stride
        check_error(
            last < data.shape[0],
            LIBMAT_ERROR_INDEX_OUT_OF_BOUNDS,
            f"{op}: last element {last} outside buffer of {data.shape[0]}",
        )


class VectorBase:
    """
    Strided window over a float64 buffer.

    Attributes:
        data: Underlying 1-D float64 buffer
        offset: Buffer position of element 0
        size: Number of elements
        stride: Buffer distance between consecutive elements
    """

    read_only = False

    def __init__(self, data: np.ndarray, offset: int, size: int, stride: int = 1, source: Any = None):
        _check_window(type(self).__name__, data, offset, size, stride)
        self._data = data
        self._offset = offset
        self._size = size
        self._stride = stride
        self._ref_chain = RefChain()
        self._ref_chain.add(source)

    @property
    def data(self) -> np.ndarray:
        return self._data

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def size(self) -> int:
        return self._size

    @property
    def stride(self) -> int:
        return self._stride

    @property
    def ownership(self) -> Ownership:
        return Ownership.VIEW

    def _addr(self, k: int) -> int:
        if get_config().bounds_check:
            check_index(type(self).__name__, "index", k, self._size)
        return self._offset + k * self._stride

    def __len__(self) -> int:
        return self._size

    def __getitem__(self, k: int) -> float:
        return float(self._data[self._addr(k)])

    def __iter__(self) -> Iterator[float]:
        for k in range(self._size):
            yield float(self._data[self._offset + k * self._stride])

    def to_numpy(self) -> np.ndarray:
        """Zero-copy strided ndarray over the vector's elements."""
        itemsize = self._data.itemsize
        return as_strided(
            self._data[self._offset:],
            shape=(self._size,),
            strides=(itemsize * self._stride,),
            writeable=not self.read_only,
        )

    def tolist(self) -> List[float]:
        return list(self)

    def __repr__(self) -> str:
        values = self.tolist()
        if len(values) > 6:
            values = values[:3] + ['...'] + values[-3:]
        return f"{type(self).__name__}({values}, stride={self._stride})"


class VectorConstView(VectorBase):
    """Read-only strided window."""

    read_only = True

    def __init__(self, data: np.ndarray, offset: int, size: int, stride: int = 1, source: Any = None):
        if isinstance(data, np.ndarray) and data.flags.writeable:
            data = data.view()
            data.flags.writeable = False
        super().__init__(data, offset, size, stride, source)


class _MutableVector(VectorBase):

    def __setitem__(self, k: int, value: float) -> None:
        self._data[self._addr(k)] = value

    def set_all(self, value: float) -> None:
        self.to_numpy()[...] = value


class VectorView(_MutableVector):
    """Writable strided window; writes land in the underlying buffer."""

    def __init__(self, data: np.ndarray, offset: int, size: int, stride: int = 1, source: Any = None):
        check_error(
            not isinstance(data, np.ndarray) or data.flags.writeable,
            LIBMAT_ERROR_READ_ONLY,
            "VectorView: buffer is read-only",
        )
        super().__init__(data, offset, size, stride, source)


class Vector(_MutableVector):
    """Vector owning a contiguous, zero-initialized buffer."""

    def __init__(self, size: int):
        check_error(
            isinstance(size, (int, np.integer)) and size >= 0,
            LIBMAT_ERROR_INVALID_ARGUMENT,
            f"Vector size must be a non-negative int, got {size!r}",
        )
        super().__init__(np.zeros(int(size), dtype=np.float64), 0, int(size), 1)

    @property
    def ownership(self) -> Ownership:
        return Ownership.OWNED

    @classmethod
    def from_list(cls, values: Sequence[float]) -> "Vector":
        vec = cls(len(values))
        vec._data[:] = values
        return vec
