"""
Tests for the strided vector types.
"""

import pytest
import numpy as np

from libmat import (
    Vector, VectorView, VectorConstView, Ownership,
    IndexOutOfBoundsError, InvalidArgumentError, ReadOnlyError,
)


class TestVector:
    """Test the owning vector."""

    def test_creation(self):
        """Test zero-initialized allocation."""
        v = Vector(5)
        assert len(v) == 5
        assert v.size == 5
        assert v.stride == 1
        assert v.tolist() == [0.0] * 5
        assert v.ownership == Ownership.OWNED

    def test_from_list(self):
        """Test construction from values."""
        v = Vector.from_list([1.0, 2.0, 3.0])
        assert v[1] == 2.0
        v[2] = 9.0
        assert list(v) == [1.0, 2.0, 9.0]

    def test_negative_size(self):
        """Test negative sizes are rejected."""
        with pytest.raises(InvalidArgumentError):
            Vector(-1)

    def test_bounds(self):
        """Test out-of-range indices raise."""
        v = Vector(3)
        with pytest.raises(IndexOutOfBoundsError):
            _ = v[3]
        with pytest.raises(IndexError):
            v[-1] = 0.0


class TestVectorViews:
    """Test strided windows over an existing buffer."""

    def test_strided_read(self):
        """Test element k is data[offset + k*stride]."""
        buf = np.arange(10, dtype=np.float64)
        v = VectorConstView(buf, 1, 3, 4)
        assert v.tolist() == [1.0, 5.0, 9.0]
        assert v.ownership == Ownership.VIEW

    def test_view_writes_through(self):
        """Test VectorView writes land in the buffer."""
        buf = np.zeros(6)
        v = VectorView(buf, 0, 3, 2)
        v[1] = 4.0
        assert buf[2] == 4.0
        v.set_all(1.0)
        assert buf.tolist() == [1.0, 0.0, 1.0, 0.0, 1.0, 0.0]

    def test_const_view_read_only(self):
        """Test the const view cannot be written."""
        buf = np.zeros(4)
        v = VectorConstView(buf, 0, 4, 1)
        assert not hasattr(v, '__setitem__')
        with pytest.raises(ValueError):
            v.to_numpy()[0] = 1.0
        buf[0] = 3.0
        assert v[0] == 3.0

    def test_window_past_end(self):
        """Test windows beyond the buffer are rejected."""
        with pytest.raises(IndexOutOfBoundsError):
            VectorView(np.zeros(5), 1, 3, 2)

    def test_bad_stride(self):
        """Test stride must be positive."""
        with pytest.raises(InvalidArgumentError):
            VectorView(np.zeros(5), 0, 2, 0)

    def test_view_on_read_only_buffer(self):
        """Test a writable view needs a writable buffer."""
        buf = np.zeros(3)
        buf.flags.writeable = False
        with pytest.raises(ReadOnlyError):
            VectorView(buf, 0, 3, 1)

    def test_to_numpy(self):
        """Test to_numpy is a strided zero-copy window."""
        buf = np.arange(8, dtype=np.float64)
        v = VectorView(buf, 1, 4, 2)
        arr = v.to_numpy()
        np.testing.assert_array_equal(arr, [1.0, 3.0, 5.0, 7.0])
        arr[3] = 0.0
        assert buf[7] == 0.0

    def test_repr_truncates(self):
        """Test long vectors are abbreviated."""
        v = Vector(10)
        assert "..." in repr(v)
