"""Ownership and Reference Management.

A view never owns storage. Instead of a raw pointer into its parent's
buffer it keeps strong references to every object it was derived from,
so the storage stays alive for as long as any view of it exists.

Key Concepts:
    - Reference Chain: When view B is derived from A, B holds a
      reference to A (and to everything A holds).
    - Automatic Flattening: Nested chains are flattened, so a view of
      a view of a matrix references the matrix directly.

Safety Model:
    1. OWNED data: ``Matrix`` allocates and owns its buffer
    2. VIEW data: ``MatrixView`` / ``MatrixConstView`` and vector views
       borrow the buffer and keep its owners alive
"""

from enum import Enum
from typing import Any, List
from dataclasses import dataclass, field

__all__ = [
    'Ownership',
    'RefChain',
]


class Ownership(Enum):
    """Data ownership model.

    Attributes:
        OWNED: The object allocated its buffer. Created by ``Matrix(...)``,
               ``copy()``, ``from_numpy()``.
        VIEW: The object addresses storage owned by something else.
              Created by ``MatrixView``, ``MatrixConstView``,
              ``get_col``, ``get_row``.
    """
    OWNED = "owned"
    VIEW = "view"


# =============================================================================
# Reference Chain
# =============================================================================

@dataclass
class RefChain:
    """Maintains the reference chain of a view.

    Attributes:
        _refs: Strong references to ancestors, compared by identity.

    Example:
        >>> m = Matrix(4, 4)
        >>> v1 = MatrixView(m, 1, 0, 3, 3)    # v1 refs: [m]
        >>> v2 = MatrixView(v1, 0, 0, 2, 2)   # v2 refs: [v1, m]
        >>> del m, v1                          # v2 still valid
    """
    _refs: List[Any] = field(default_factory=list)

    def _holds(self, obj: Any) -> bool:
        return any(ref is obj for ref in self._refs)

    def add(self, source: Any) -> None:
        """Add source, and everything source references, to the chain."""
        if source is None or self._holds(source):
            return

        self._refs.append(source)

        parent_chain = getattr(source, '_ref_chain', None)
        if parent_chain is not None:
            for ancestor in parent_chain._refs:
                if not self._holds(ancestor):
                    self._refs.append(ancestor)

    def refers_to(self, obj: Any) -> bool:
        """Check whether ``obj`` is kept alive by this chain."""
        return self._holds(obj)

    @property
    def count(self) -> int:
        """Number of held references."""
        return len(self._refs)

    @property
    def is_empty(self) -> bool:
        return not self._refs

    def __repr__(self) -> str:
        return f"RefChain(count={self.count})"
