"""
libmat Ops - generic algorithms over the matrix concept.

Every function accepts any mix of Matrix, MatrixView and MatrixConstView
operands; destinations must be mutable. Nothing here allocates a result
matrix: results are written into the caller's destination.

Provides:
- Row/column access: get_col, get_row, col_copy, row_copy, col_set
- Structure: copy_upper_to_lower, copy_lower_to_upper, set_identity,
  transpose, repmat
- Arithmetic: add, sub, negate
- Comparison: nrminf, is_diff, is_diff_sym
"""

from __future__ import annotations

from typing import Optional, Union

import numpy as np

from ._base import MatrixBase, MutableMatrixBase
from ._errors import (
    check_error,
    check_index,
    check_mutable,
    check_shape,
    LIBMAT_ERROR_DIMENSION_MISMATCH,
    LIBMAT_ERROR_INDEX_OUT_OF_BOUNDS,
    LIBMAT_ERROR_INVALID_ARGUMENT,
)
from ._vector import VectorConstView, VectorView

__all__ = [
    'get_col', 'get_row',
    'col_copy', 'row_copy', 'col_set',
    'copy_upper_to_lower', 'copy_lower_to_upper',
    'set_identity', 'transpose',
    'add', 'sub', 'negate',
    'nrminf', 'is_diff', 'is_diff_sym',
    'repmat',
    'isDiff', 'isDiffSym',
]


def _check_row_range(op: str, what: str, mat: MatrixBase, offset: int, count: int) -> None:
    check_error(
        offset >= 0 and count >= 0 and offset + count <= mat.rows,
        LIBMAT_ERROR_INDEX_OUT_OF_BOUNDS,
        f"{op}: {what} rows [{offset}, {offset + count}) outside {mat.rows} rows",
    )


# =============================================================================
# Row / Column Access
# =============================================================================

def get_col(mat: MatrixBase, j: int) -> Union[VectorView, VectorConstView]:
    """
    Zero-copy vector over column ``j`` (stride 1, length ``rows``).

    Returns a VectorConstView for read-only matrices, VectorView otherwise.
    """
    check_index("get_col", "column", j, mat.cols)
    cls = VectorConstView if mat.read_only else VectorView
    return cls(mat.data, mat.offset + j * mat.ld, mat.rows, 1, source=mat)


def get_row(mat: MatrixBase, i: int) -> Union[VectorView, VectorConstView]:
    """Zero-copy vector over row ``i`` (stride ``ld``, length ``cols``)."""
    check_index("get_row", "row", i, mat.rows)
    cls = VectorConstView if mat.read_only else VectorView
    return cls(mat.data, mat.offset + i, mat.cols, mat.ld, source=mat)


def col_copy(
    src: MatrixBase,
    col_src: int,
    dest: MutableMatrixBase,
    col_dest: int,
    row_offset_src: int = 0,
    row_nb: Optional[int] = None,
    row_offset_dest: int = 0,
) -> None:
    """
    Copy one column (or a run of rows within it) from ``src`` to ``dest``.

    Without ``row_nb`` the whole column is copied and both matrices must
    have the same number of rows. With ``row_nb``, rows
    ``[row_offset_src, row_offset_src + row_nb)`` of the source column
    go to rows starting at ``row_offset_dest`` of the destination column.
    """
    check_mutable("col_copy", dest)
    check_index("col_copy", "source column", col_src, src.cols)
    check_index("col_copy", "destination column", col_dest, dest.cols)
    if row_nb is None:
        check_error(
            row_offset_src == 0 and row_offset_dest == 0,
            LIBMAT_ERROR_INVALID_ARGUMENT,
            "col_copy: row offsets given without row_nb",
        )
        check_error(
            src.rows == dest.rows,
            LIBMAT_ERROR_DIMENSION_MISMATCH,
            f"col_copy: {src.rows} source rows vs {dest.rows} destination rows",
        )
        row_nb = src.rows
    else:
        _check_row_range("col_copy", "source", src, row_offset_src, row_nb)
        _check_row_range("col_copy", "destination", dest, row_offset_dest, row_nb)

    s0 = src.offset + col_src * src.ld + row_offset_src
    d0 = dest.offset + col_dest * dest.ld + row_offset_dest
    dest.data[d0:d0 + row_nb] = src.data[s0:s0 + row_nb]


def row_copy(src: MatrixBase, row_src: int, dest: MutableMatrixBase, row_dest: int) -> None:
    """Copy row ``row_src`` of ``src`` into row ``row_dest`` of ``dest``."""
    check_mutable("row_copy", dest)
    check_error(
        src.cols == dest.cols,
        LIBMAT_ERROR_DIMENSION_MISMATCH,
        f"row_copy: {src.cols} source cols vs {dest.cols} destination cols",
    )
    check_index("row_copy", "source row", row_src, src.rows)
    check_index("row_copy", "destination row", row_dest, dest.rows)
    dest.row_slice(row_dest)[:] = src.row_slice(row_src)


def col_set(mat: MutableMatrixBase, col: int, row_offset: int, row_nb: int, value: float) -> None:
    """Fill rows ``[row_offset, row_offset + row_nb)`` of one column."""
    check_mutable("col_set", mat)
    check_index("col_set", "column", col, mat.cols)
    _check_row_range("col_set", "target", mat, row_offset, row_nb)
    start = mat.offset + col * mat.ld + row_offset
    mat.data[start:start + row_nb] = value


# =============================================================================
# Structure
# =============================================================================

def copy_upper_to_lower(mat: MutableMatrixBase) -> None:
    """Copy under the diagonal the elements above the diagonal."""
    check_mutable("copy_upper_to_lower", mat)
    d = min(mat.rows, mat.cols)
    a = mat.to_numpy()[:d, :d]
    lower = np.tril_indices(d, -1)
    a[lower] = a.T[lower]


def copy_lower_to_upper(mat: MutableMatrixBase) -> None:
    """Copy above the diagonal the elements under the diagonal."""
    check_mutable("copy_lower_to_upper", mat)
    d = min(mat.rows, mat.cols)
    a = mat.to_numpy()[:d, :d]
    upper = np.triu_indices(d, 1)
    a[upper] = a.T[upper]


def set_identity(mat: MutableMatrixBase) -> None:
    """Zero the matrix, then put ones on the leading diagonal."""
    check_mutable("set_identity", mat)
    mat.set_all(0.0)
    d = np.arange(min(mat.rows, mat.cols))
    mat.to_numpy()[d, d] = 1.0


def transpose(m1: MutableMatrixBase, m2: Optional[MatrixBase] = None) -> None:
    """
    Transpose.

    ``transpose(M)`` transposes a square matrix in place.
    ``transpose(M1, M2)`` computes ``M1 = M2'`` for rectangular M2.

    Raises:
        DimensionMismatchError: If M is not square, or M1 is not shaped
            like M2'
    """
    check_mutable("transpose", m1)
    if m2 is None:
        check_error(
            m1.rows == m1.cols,
            LIBMAT_ERROR_DIMENSION_MISMATCH,
            f"transpose: in-place transpose needs a square matrix, got {m1.rows}x{m1.cols}",
        )
        a = m1.to_numpy()
        a[...] = a.T.copy()
        return

    check_error(
        m1.rows == m2.cols and m1.cols == m2.rows,
        LIBMAT_ERROR_DIMENSION_MISMATCH,
        f"transpose: {m1.rows}x{m1.cols} destination for {m2.rows}x{m2.cols} source",
    )
    m1.to_numpy()[...] = m2.to_numpy().T


def repmat(a: MatrixBase, multv: int, multh: int, out: MutableMatrixBase) -> None:
    """
    Tile ``a`` into ``out`` as a ``multv x multh`` grid (Matlab repmat).

    ``out`` must already be ``multv*a.rows x multh*a.cols``.
    """
    check_mutable("repmat", out)
    check_error(
        multv >= 0 and multh >= 0,
        LIBMAT_ERROR_INVALID_ARGUMENT,
        f"repmat: replication factors must be non-negative, got {multv}x{multh}",
    )
    check_error(
        out.rows == multv * a.rows and out.cols == multh * a.cols,
        LIBMAT_ERROR_DIMENSION_MISMATCH,
        f"repmat: output {out.rows}x{out.cols} vs {multv}*{a.rows} x {multh}*{a.cols}",
    )
    tile = a.to_numpy().copy(order='F')
    dst = out.to_numpy()
    r, c = a.rows, a.cols
    for i in range(multv):
        for j in range(multh):
            dst[i * r:(i + 1) * r, j * c:(j + 1) * c] = tile


# =============================================================================
# Arithmetic
# =============================================================================

def add(m1: MutableMatrixBase, other: Union[MatrixBase, float]) -> None:
    """``m1 += other``; ``other`` is a same-shaped matrix or a scalar."""
    check_mutable("add", m1)
    a = m1.to_numpy()
    if isinstance(other, MatrixBase):
        check_shape("add", m1, other)
        a += other.to_numpy()
    else:
        a += float(other)


def sub(m1: MutableMatrixBase, other: Union[MatrixBase, float]) -> None:
    """``m1 -= other``; ``other`` is a same-shaped matrix or a scalar."""
    if not isinstance(other, MatrixBase):
        add(m1, -1.0 * float(other))
        return
    check_mutable("sub", m1)
    check_shape("sub", m1, other)
    a = m1.to_numpy()
    a -= other.to_numpy()


def negate(mat: MutableMatrixBase) -> None:
    """``mat = -mat``."""
    check_mutable("negate", mat)
    a = mat.to_numpy()
    np.negative(a, out=a)


# =============================================================================
# Comparison
# =============================================================================

def nrminf(mat: MatrixBase) -> float:
    """Largest absolute element (0.0 for an empty matrix)."""
    if mat.size == 0:
        return 0.0
    return float(np.max(np.abs(mat.to_numpy())))


def is_diff(m1: MatrixBase, m2: MatrixBase, tol: float = 0.0) -> bool:
    """True iff some pair of corresponding elements differs by more than ``tol``."""
    check_shape("is_diff", m1, m2)
    return bool(np.any(np.abs(m1.to_numpy() - m2.to_numpy()) > tol))


def is_diff_sym(m1: MatrixBase, m2: MatrixBase, tol: float = 0.0) -> bool:
    """
    ``is_diff`` restricted to the upper triangle of square matrices.

    Assumes both operands are symmetric. The triangle is traversed one
    diagonal at a time starting from the main diagonal, where the
    largest changes usually occur.
    """
    check_shape("is_diff_sym", m1, m2)
    check_error(
        m1.rows == m1.cols,
        LIBMAT_ERROR_DIMENSION_MISMATCH,
        f"is_diff_sym: operands must be square, got {m1.rows}x{m1.cols}",
    )
    a1 = m1.to_numpy()
    a2 = m2.to_numpy()
    for k in range(m1.cols):
        if np.any(np.abs(np.diagonal(a1, k) - np.diagonal(a2, k)) > tol):
            return True
    return False


# Matrix concept vocabulary
isDiff = is_diff
isDiffSym = is_diff_sym
