"""
Index-vector ("fancy indexing") assignment.

Emulates the Matlab statements

    A(:, b) = B(:, d)        reorder_columns_by_vectors
    A(a, :) = B(c, :)        reorder_rows_by_vectors
    A(a, b) = B(c, d)        assign_by_vectors

Each axis of each operand is described by a Selection: ``ALL`` stands
for the colon operator (every index of that axis, in order) and
``Subset([...])`` lists explicit indices, which may be non-contiguous
or repeated, but never empty. ``None`` and
``slice(None)`` are accepted as spellings of ``ALL``; any other
iterable of ints is wrapped in a Subset.

Example:
    >>> src = Matrix.from_rows([[1, 2], [3, 4]])
    >>> dest = Matrix(2, 2)
    >>> assign_by_vectors(dest, [1, 0], ALL, src, [0, 1], ALL)
    >>> dest.tolist()
    [[3.0, 4.0], [1.0, 2.0]]
"""

from __future__ import annotations

import logging
from collections import abc
from typing import Any, Iterable, Tuple, Union

import numpy as np

from ._base import MatrixBase, MutableMatrixBase
from ._errors import (
    check_error,
    check_mutable,
    LIBMAT_ERROR_DIMENSION_MISMATCH,
    LIBMAT_ERROR_INDEX_OUT_OF_BOUNDS,
    LIBMAT_ERROR_INVALID_ARGUMENT,
)

logger = logging.getLogger("libmat.indexing")

__all__ = [
    'Selection', 'AllIndices', 'Subset', 'ALL', 'NULL_VEC', 'as_selection',
    'reorder_columns_by_vectors', 'reorder_rows_by_vectors', 'assign_by_vectors',
    'reorderColumnsByVectors', 'reorderRowsByVectors', 'assignByVectors',
]


# =============================================================================
# Selections
# =============================================================================

class Selection:
    """Indices picked along one axis of one operand."""

    is_all = False

    def expand(self, count: int, op: str, what: str) -> np.ndarray:
        """Concrete index array for an axis of length ``count``."""
        raise NotImplementedError


class AllIndices(Selection):
    """Every index of the axis, in order (Matlab ``:``)."""

    is_all = True
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def expand(self, count: int, op: str, what: str) -> np.ndarray:
        return np.arange(count, dtype=np.intp)

    def __repr__(self) -> str:
        return "ALL"


class Subset(Selection):
    """
    Explicit list of indices.

    Args:
        indices: Iterable of non-negative ints
    """

    def __init__(self, indices: Iterable[int]):
        check_error(
            isinstance(indices, abc.Iterable) and not isinstance(indices, (str, bytes)),
            LIBMAT_ERROR_INVALID_ARGUMENT,
            f"Subset: expected an iterable of ints, got {indices!r}",
        )
        items = tuple(indices)
        for k in items:
            check_error(
                isinstance(k, (int, np.integer)) and not isinstance(k, bool) and k >= 0,
                LIBMAT_ERROR_INVALID_ARGUMENT,
                f"Subset: indices must be non-negative ints, got {k!r}",
            )
        self.indices: Tuple[int, ...] = tuple(int(k) for k in items)

    def __len__(self) -> int:
        return len(self.indices)

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Subset) and other.indices == self.indices

    def __hash__(self) -> int:
        return hash(self.indices)

    def expand(self, count: int, op: str, what: str) -> np.ndarray:
        for k in self.indices:
            check_error(
                k < count,
                LIBMAT_ERROR_INDEX_OUT_OF_BOUNDS,
                f"{op}: {what} index {k} not in [0, {count})",
            )
        return np.asarray(self.indices, dtype=np.intp)

    def __repr__(self) -> str:
        return f"Subset({list(self.indices)})"


ALL = AllIndices()

# Matlab-port spelling of the colon proxy
NULL_VEC = ALL

SelectionLike = Union[Selection, Iterable[int], slice, None]


def as_selection(sel: SelectionLike) -> Selection:
    """Normalize user input into a Selection."""
    if isinstance(sel, Selection):
        return sel
    if sel is None:
        return ALL
    if isinstance(sel, slice):
        check_error(
            sel == slice(None),
            LIBMAT_ERROR_INVALID_ARGUMENT,
            f"only the full slice ':' is accepted as a selection, got {sel!r}",
        )
        return ALL
    return Subset(sel)


def _pair(op: str, axis: str, count_dest: int, sel_dest: Selection,
          count_src: int, sel_src: Selection) -> Tuple[np.ndarray, np.ndarray]:
    """Expand a destination/source selection pair and check cardinalities."""
    for sel, side in ((sel_dest, "destination"), (sel_src, "source")):
        check_error(
            sel.is_all or len(sel) > 0,
            LIBMAT_ERROR_INVALID_ARGUMENT,
            f"{op}: empty {side} {axis} selection (use ALL for every {axis})",
        )
    to = sel_dest.expand(count_dest, op, f"destination {axis}")
    frm = sel_src.expand(count_src, op, f"source {axis}")
    check_error(
        to.shape[0] == frm.shape[0],
        LIBMAT_ERROR_DIMENSION_MISMATCH,
        f"{op}: {to.shape[0]} destination {axis}s vs {frm.shape[0]} source {axis}s",
    )
    return to, frm


# =============================================================================
# Assignment
# =============================================================================

def reorder_columns_by_vectors(
    dest: MutableMatrixBase,
    dest_cols: SelectionLike,
    src: MatrixBase,
    src_cols: SelectionLike,
) -> None:
    """
    ``dest(:, dest_cols) = src(:, src_cols)``.

    Raises:
        DimensionMismatchError: If row counts differ, or the selections
            have different lengths (or shapes differ when both are ALL)
        InvalidArgumentError: If a Subset selection is empty
        IndexOutOfBoundsError: If an index exceeds its matrix
    """
    op = "reorder_columns_by_vectors"
    check_mutable(op, dest)
    dest_sel, src_sel = as_selection(dest_cols), as_selection(src_cols)
    check_error(
        dest.rows == src.rows,
        LIBMAT_ERROR_DIMENSION_MISMATCH,
        f"{op}: {dest.rows} destination rows vs {src.rows} source rows",
    )
    if dest_sel.is_all and src_sel.is_all:
        dest.assign(src)
        return

    to, frm = _pair(op, "column", dest.cols, dest_sel, src.cols, src_sel)
    # fancy indexing gathers into a temporary, so aliased operands are safe
    dest.to_numpy()[:, to] = src.to_numpy()[:, frm]


def reorder_rows_by_vectors(
    dest: MutableMatrixBase,
    dest_rows: SelectionLike,
    src: MatrixBase,
    src_rows: SelectionLike,
) -> None:
    """``dest(dest_rows, :) = src(src_rows, :)``."""
    op = "reorder_rows_by_vectors"
    check_mutable(op, dest)
    dest_sel, src_sel = as_selection(dest_rows), as_selection(src_rows)
    check_error(
        dest.cols == src.cols,
        LIBMAT_ERROR_DIMENSION_MISMATCH,
        f"{op}: {dest.cols} destination cols vs {src.cols} source cols",
    )
    if dest_sel.is_all and src_sel.is_all:
        dest.assign(src)
        return

    to, frm = _pair(op, "row", dest.rows, dest_sel, src.rows, src_sel)
    dest.to_numpy()[to, :] = src.to_numpy()[frm, :]


def assign_by_vectors(
    dest: MutableMatrixBase,
    dest_rows: SelectionLike,
    dest_cols: SelectionLike,
    src: MatrixBase,
    src_rows: SelectionLike,
    src_cols: SelectionLike,
) -> None:
    """
    ``dest(dest_rows, dest_cols) = src(src_rows, src_cols)``.

    When both row selections (or both column selections) are ALL the
    call reduces to a single-axis reorder, and the reduced call's
    preconditions apply. Otherwise every ``(i, j)`` of the cross product
    is assigned ``dest[dest_rows[i], dest_cols[j]] =
    src[src_rows[i], src_cols[j]]``.
    """
    op = "assign_by_vectors"
    check_mutable(op, dest)
    to_r, to_c = as_selection(dest_rows), as_selection(dest_cols)
    fr_r, fr_c = as_selection(src_rows), as_selection(src_cols)

    rows_all = to_r.is_all and fr_r.is_all
    cols_all = to_c.is_all and fr_c.is_all
    if rows_all and cols_all:
        logger.debug("%s: full copy %dx%d", op, src.rows, src.cols)
        dest.assign(src)
        return
    if rows_all:
        logger.debug("%s: reducing to column reorder", op)
        reorder_columns_by_vectors(dest, to_c, src, fr_c)
        return
    if cols_all:
        logger.debug("%s: reducing to row reorder", op)
        reorder_rows_by_vectors(dest, to_r, src, fr_r)
        return

    rows_to, rows_from = _pair(op, "row", dest.rows, to_r, src.rows, fr_r)
    cols_to, cols_from = _pair(op, "column", dest.cols, to_c, src.cols, fr_c)
    block = src.to_numpy()[np.ix_(rows_from, cols_from)]
    dest.to_numpy()[np.ix_(rows_to, cols_to)] = block


# Matrix concept vocabulary
reorderColumnsByVectors = reorder_columns_by_vectors
reorderRowsByVectors = reorder_rows_by_vectors
assignByVectors = assign_by_vectors
