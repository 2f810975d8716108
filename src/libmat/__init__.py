"""
libmat - Dense column-major matrices and zero-copy views

Features:
- Owning matrices over contiguous column-major float64 storage
- Zero-copy writable and read-only sub-block views
- Generic algorithms that accept owned matrices and views alike
- Matlab-style index-vector assignment (``A(a,b) = B(c,d)``)

Modules:
- ops: copies, arithmetic, symmetry, transposition, norms, tiling
- indexing: selection-based reordering and assignment

Architecture:
    ┌──────────────────────────────────────────────┐
    │   Matrix  |  MatrixView  |  MatrixConstView  │
    ├──────────────────────────────────────────────┤
    │  Concept: MatrixBase / MutableMatrixBase     │
    │  Ownership: OWNED | VIEW                     │
    │  Storage: data[offset + i + j*ld]            │
    └──────────────────────────────────────────────┘

Example:
    >>> import libmat
    >>> from libmat import Matrix, MatrixView
    >>>
    >>> m = Matrix(4, 4)
    >>> block = MatrixView(m, 1, 1, 2, 2)
    >>> libmat.ops.set_identity(block)   # writes into m
    >>> m[2, 2]
    1.0
"""

__version__ = '0.1.0'

from . import ops
from . import indexing

from ._errors import (
    LibmatError,
    InvalidArgumentError,
    DimensionMismatchError,
    IndexOutOfBoundsError,
    ReadOnlyError,
    check_error,
    LIBMAT_OK,
    LIBMAT_ERROR_UNKNOWN,
    LIBMAT_ERROR_INVALID_ARGUMENT,
    LIBMAT_ERROR_DIMENSION_MISMATCH,
    LIBMAT_ERROR_INDEX_OUT_OF_BOUNDS,
    LIBMAT_ERROR_READ_ONLY,
)

from ._config import (
    get_config,
    set_options,
    get_options,
    options,
)

from ._ownership import Ownership, RefChain
from ._vector import Vector, VectorView, VectorConstView
from ._base import MatrixBase, MutableMatrixBase, shares_storage
from ._matrix import Matrix, MatrixView, MatrixConstView
from ._format import format_matrix, print_matrix

from .indexing import (
    ALL,
    NULL_VEC,
    Selection,
    AllIndices,
    Subset,
    as_selection,
    reorder_columns_by_vectors,
    reorder_rows_by_vectors,
    assign_by_vectors,
    reorderColumnsByVectors,
    reorderRowsByVectors,
    assignByVectors,
)

__all__ = [
    # Version
    '__version__',

    # Modules
    'ops',
    'indexing',

    # Core classes
    'Matrix',
    'MatrixView',
    'MatrixConstView',
    'MatrixBase',
    'MutableMatrixBase',
    'Vector',
    'VectorView',
    'VectorConstView',
    'Ownership',
    'RefChain',
    'shares_storage',

    # Errors
    'LibmatError',
    'InvalidArgumentError',
    'DimensionMismatchError',
    'IndexOutOfBoundsError',
    'ReadOnlyError',
    'check_error',
    'LIBMAT_OK',
    'LIBMAT_ERROR_UNKNOWN',
    'LIBMAT_ERROR_INVALID_ARGUMENT',
    'LIBMAT_ERROR_DIMENSION_MISMATCH',
    'LIBMAT_ERROR_INDEX_OUT_OF_BOUNDS',
    'LIBMAT_ERROR_READ_ONLY',

    # Configuration
    'get_config',
    'set_options',
    'get_options',
    'options',

    # Output
    'format_matrix',
    'print_matrix',

    # Indexing
    'ALL',
    'NULL_VEC',
    'Selection',
    'AllIndices',
    'Subset',
    'as_selection',
    'reorder_columns_by_vectors',
    'reorder_rows_by_vectors',
    'assign_by_vectors',
    'reorderColumnsByVectors',
    'reorderRowsByVectors',
    'assignByVectors',
]
