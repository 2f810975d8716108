"""
Tests for MatrixView and MatrixConstView.
"""

import gc

import pytest
import numpy as np

from libmat import (
    Matrix, MatrixView, MatrixConstView, Ownership, RefChain,
    IndexOutOfBoundsError, InvalidArgumentError, ReadOnlyError,
    shares_storage,
)


class TestViewConstruction:
    """Test view geometry."""

    def test_sub_block_values(self, square4):
        """Test rows 1..3, cols 0..2 of M(i,j)=i+4j read back column-major."""
        v = MatrixView(square4, 1, 0, 3, 2)
        values = [v[i, j] for j in range(v.cols) for i in range(v.rows)]
        assert values == [1.0, 2.0, 3.0, 5.0, 6.0, 7.0]

    def test_two_by_three_block(self, square4):
        """Test the 2x3 block at row 1, col 0 reads {1,5,9} and {2,6,10} row by row."""
        v = MatrixConstView(square4, 1, 0, 2, 3)
        assert v.tolist() == [[1.0, 5.0, 9.0], [2.0, 6.0, 10.0]]
        assert v.to_numpy().ravel(order="F").tolist() == [1.0, 2.0, 5.0, 6.0, 9.0, 10.0]

    def test_geometry(self, square4):
        """Test offset and ld are derived from the parent."""
        v = MatrixView(square4, 1, 2, 2, 2)
        assert v.ld == 4
        assert v.offset == 1 + 2 * 4
        assert v.shape == (2, 2)
        assert not v.is_contiguous
        assert v.ownership == Ownership.VIEW

    @pytest.mark.parametrize("cls", [MatrixView, MatrixConstView])
    def test_get_data_addressing(self, square4, cls):
        """Test getData()[i + j*getLd()] == M[i, j] on a view."""
        v = cls(square4, 1, 0, 3, 2)
        data = v.getData()
        assert data[0] == 1.0
        for i in range(v.getRows()):
            for j in range(v.getCols()):
                assert data[i + j * v.getLd()] == v[i, j]

    def test_get_data_zero_copy(self, square4):
        """Test getData() of a view writes through to the parent."""
        v = MatrixView(square4, 2, 1, 2, 2)
        v.getData()[1 + 1 * v.getLd()] = -7.0
        assert square4[3, 2] == -7.0

    def test_view_of_view(self, square4):
        """Test nested views compose offsets."""
        outer = MatrixView(square4, 1, 1, 3, 3)
        inner = MatrixView(outer, 1, 1, 2, 2)
        assert inner.offset == 2 + 2 * 4
        assert inner[0, 0] == square4[2, 2]
        assert inner[1, 1] == square4[3, 3]

    @pytest.mark.parametrize("args", [
        (4, 0, 1, 1),   # row_offset == rows
        (3, 0, 2, 1),   # row_offset + rows > parent rows
        (0, 4, 1, 1),   # col_offset == cols
        (0, 2, 1, 3),   # col_offset + cols > parent cols
    ])
    def test_out_of_bounds(self, square4, args):
        """Test blocks outside the parent are rejected."""
        with pytest.raises(IndexOutOfBoundsError):
            MatrixView(square4, *args)
        with pytest.raises(IndexOutOfBoundsError):
            MatrixConstView(square4, *args)

    def test_non_matrix_parent(self):
        """Test parent must be a matrix."""
        with pytest.raises(InvalidArgumentError):
            MatrixView([[1.0]], 0, 0, 1, 1)

    def test_convenience_methods(self, square4):
        """Test view() and const_view() helpers."""
        assert isinstance(square4.view(0, 0, 2, 2), MatrixView)
        assert isinstance(square4.const_view(0, 0, 2, 2), MatrixConstView)

    def test_element_bounds(self, square4):
        """Test element access is checked against the view, not the parent."""
        v = MatrixView(square4, 0, 0, 2, 2)
        with pytest.raises(IndexOutOfBoundsError):
            _ = v[2, 0]


class TestViewAliasing:
    """Test views share storage with their parent."""

    def test_write_through_view(self, square4):
        """Test view writes are visible through the parent."""
        v = MatrixView(square4, 1, 1, 2, 2)
        v[0, 1] = -3.0
        assert square4[1, 2] == -3.0

    def test_write_through_parent(self, square4):
        """Test parent writes are visible through views."""
        v = MatrixView(square4, 1, 1, 2, 2)
        c = MatrixConstView(square4, 1, 1, 2, 2)
        square4[2, 2] = 42.0
        assert v[1, 1] == 42.0
        assert c[1, 1] == 42.0

    def test_set_all_respects_padding(self, square4):
        """Test set_all only touches in-view elements."""
        v = MatrixView(square4, 1, 1, 2, 2)
        v.set_all(-1.0)
        expected = np.arange(16, dtype=float).reshape(4, 4, order='F')
        expected[1:3, 1:3] = -1.0
        np.testing.assert_array_equal(square4.to_numpy(), expected)

    def test_assign_into_view(self, square4):
        """Test assigning a matrix into a sub-block."""
        v = MatrixView(square4, 2, 2, 2, 2)
        v.assign(Matrix.from_rows([[1, 2], [3, 4]]))
        assert square4[2, 2] == 1.0
        assert square4[2, 3] == 2.0
        assert square4[3, 2] == 3.0
        assert square4[3, 3] == 4.0
        assert square4[1, 2] == 9.0

    def test_to_numpy_strided(self, square4):
        """Test to_numpy of a view is a strided window."""
        v = MatrixView(square4, 1, 1, 2, 3)
        arr = v.to_numpy()
        np.testing.assert_array_equal(arr, square4.to_numpy()[1:3, 1:4])
        arr[0, 0] = 77.0
        assert square4[1, 1] == 77.0

    def test_shares_storage(self, square4):
        """Test overlap detection between views."""
        a = MatrixView(square4, 0, 0, 2, 2)
        b = MatrixView(square4, 1, 1, 2, 2)
        c = MatrixView(square4, 2, 2, 2, 2)
        assert shares_storage(a, b)
        assert shares_storage(square4, c)
        assert not shares_storage(a, Matrix(2, 2))

    def test_copy_materializes(self, square4):
        """Test copy() of a view returns an owning matrix."""
        v = MatrixView(square4, 1, 1, 2, 2)
        c = v.copy()
        assert isinstance(c, Matrix)
        assert c.ownership == Ownership.OWNED
        c[0, 0] = 0.0
        assert square4[1, 1] == 5.0


class TestConstView:
    """Test read-only views."""

    def test_no_mutators(self, square4):
        """Test the const view exposes no mutating methods."""
        c = MatrixConstView(square4, 0, 0, 2, 2)
        assert not hasattr(c, 'set_all')
        assert not hasattr(c, 'assign')
        with pytest.raises(TypeError):
            c[0, 0] = 1.0

    def test_read_only_buffer(self, square4):
        """Test writes through numpy are rejected."""
        c = MatrixConstView(square4, 0, 0, 2, 2)
        with pytest.raises(ValueError):
            c.to_numpy()[0, 0] = 1.0
        with pytest.raises(ValueError):
            c.getData()[0] = 1.0
        assert square4[0, 0] == 0.0

    def test_mutable_view_of_const_view(self, square4):
        """Test a writable view cannot be derived from a read-only one."""
        c = MatrixConstView(square4, 0, 0, 3, 3)
        with pytest.raises(ReadOnlyError):
            MatrixView(c, 0, 0, 2, 2)

    def test_const_view_of_const_view(self, square4):
        """Test read-only views nest."""
        c = MatrixConstView(square4, 1, 1, 3, 3)
        cc = MatrixConstView(c, 1, 0, 2, 2)
        assert cc[0, 0] == square4[2, 1]

    def test_repr(self, square4):
        """Test repr summary."""
        c = MatrixConstView(square4, 0, 0, 2, 3)
        assert repr(c) == "<MatrixConstView 2x3 ld=4 view>"


class TestFromBuffer:
    """Test views built directly over a buffer."""

    def test_pointer_rows_cols_ld(self):
        """Test a padded buffer window."""
        buf = np.arange(12, dtype=np.float64)
        v = MatrixView.from_buffer(buf, 1, 2, 3, 4)
        assert v.tolist() == [[1.0, 5.0, 9.0], [2.0, 6.0, 10.0]]
        v[1, 2] = -1.0
        assert buf[10] == -1.0

    def test_buffer_too_small(self):
        """Test windows past the end of the buffer are rejected."""
        buf = np.zeros(10)
        with pytest.raises(IndexOutOfBoundsError):
            MatrixConstView.from_buffer(buf, 0, 3, 4, 3)

    def test_ld_smaller_than_rows(self):
        """Test ld < rows is rejected."""
        with pytest.raises(InvalidArgumentError):
            MatrixView.from_buffer(np.zeros(10), 0, 3, 2, 2)

    def test_wrong_dtype(self):
        """Test only float64 buffers are accepted."""
        with pytest.raises(InvalidArgumentError):
            MatrixView.from_buffer(np.zeros(4, dtype=np.float32), 0, 2, 2, 2)

    def test_read_only_buffer(self):
        """Test writable views need a writable buffer."""
        buf = np.zeros(4)
        buf.flags.writeable = False
        with pytest.raises(ReadOnlyError):
            MatrixView.from_buffer(buf, 0, 2, 2, 2)
        assert MatrixConstView.from_buffer(buf, 0, 2, 2, 2)[1, 1] == 0.0


class TestOwnership:
    """Test views keep their storage alive."""

    def test_view_outlives_parent(self):
        """Test dropping the parent does not invalidate the view."""
        m = Matrix.from_rows([[1, 2], [3, 4]])
        v = MatrixView(m, 0, 1, 2, 1)
        del m
        gc.collect()
        assert v.tolist() == [[2.0], [4.0]]

    def test_ref_chain_flattened(self, square4):
        """Test nested views reference the root matrix directly."""
        outer = MatrixView(square4, 0, 0, 3, 3)
        inner = MatrixView(outer, 0, 0, 2, 2)
        assert inner._ref_chain.refers_to(outer)
        assert inner._ref_chain.refers_to(square4)
        assert inner._ref_chain.count == 2

    def test_ref_chain_dedup(self):
        """Test the same source is only held once."""
        chain = RefChain()
        m = Matrix(1)
        chain.add(m)
        chain.add(m)
        chain.add(None)
        assert chain.count == 1
        assert not chain.is_empty
