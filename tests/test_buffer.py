"""Tests for PixelBuffer storage and scoped PixelAccessor."""

import numpy as np
import pytest

from pixpro import (
    ArgumentRangeError,
    BoundsViolationError,
    Color,
    PixelBuffer,
    Rectangle,
    ResourceAcquisitionError,
)


@pytest.fixture
def buffer():
    """4x3 buffer of mid grey."""
    return PixelBuffer.filled(4, 3, Color(0.5, 0.5, 0.5, 1.0))


class TestPixelBuffer:
    """Test buffer construction and copies."""

    def test_default_is_transparent_black(self):
        """Test default pixels are zero."""
        buf = PixelBuffer(2, 2)

        assert buf.to_array().shape == (2, 2, 4)
        assert buf.to_array().dtype == np.float32
        assert np.all(buf.to_array() == 0.0)

    def test_filled(self, buffer):
        """Test filled() sets every pixel."""
        data = buffer.to_array()

        assert data.shape == (3, 4, 4)
        np.testing.assert_allclose(data[..., :3], 0.5)
        np.testing.assert_allclose(data[..., 3], 1.0)

    def test_bounds(self, buffer):
        """Test bounds is the full extent at the origin."""
        assert buffer.bounds == Rectangle(0, 0, 4, 3)

    def test_negative_size_rejected(self):
        """Test negative dimensions raise."""
        with pytest.raises(ArgumentRangeError):
            PixelBuffer(-1, 2)

    def test_shape_mismatch_rejected(self):
        """Test adopted pixels must match the declared size."""
        with pytest.raises(ValueError, match="pixels must be"):
            PixelBuffer(2, 2, np.zeros((3, 2, 4), dtype=np.float32))

    @pytest.mark.parametrize("dtype", [np.uint8, np.int32, np.float64])
    def test_dtype_mismatch_rejected(self, dtype):
        """Test adopted pixels must already be float32."""
        with pytest.raises(ValueError, match="float32"):
            PixelBuffer(2, 2, np.zeros((2, 2, 4), dtype=dtype))

    def test_float32_pixels_adopted(self):
        """Test float32 pixels are adopted without a copy."""
        pixels = np.zeros((2, 3, 4), dtype=np.float32)
        buf = PixelBuffer(3, 2, pixels)
        pixels[0, 0, 0] = 0.75

        assert buf.to_array()[0, 0, 0] == 0.75

    def test_from_array_uint8_rgb(self):
        """Test uint8 RGB input is normalized and given opaque alpha."""
        rgb = np.zeros((2, 3, 3), dtype=np.uint8)
        rgb[0, 1] = (255, 0, 51)
        buf = PixelBuffer.from_array(rgb)

        assert (buf.width, buf.height) == (3, 2)
        data = buf.to_array()
        np.testing.assert_allclose(data[0, 1], (1.0, 0.0, 0.2, 1.0), atol=1e-6)
        assert np.all(data[..., 3] == 1.0)

    def test_from_array_float_rgba_is_copied(self):
        """Test float input is copied, not adopted."""
        rgba = np.full((2, 2, 4), 0.25, dtype=np.float64)
        buf = PixelBuffer.from_array(rgba)
        rgba[...] = 0.0

        assert np.all(buf.to_array() == 0.25)

    def test_from_array_bad_shape(self):
        """Test non-image arrays are rejected."""
        with pytest.raises(ValueError):
            PixelBuffer.from_array(np.zeros((4, 4)))

    def test_copy_is_independent(self, buffer):
        """Test copy() does not share storage."""
        clone = buffer.copy()
        with clone.lock() as pixels:
            pixels[0, 0] = Color(1.0, 0.0, 0.0)

        assert buffer.to_array()[0, 0, 0] == 0.5


class TestLocking:
    """Test exclusive scoped acquisition."""

    def test_lock_and_release(self, buffer):
        """Test lock state follows the accessor."""
        accessor = buffer.lock()
        assert buffer.is_locked

        accessor.release()
        assert not buffer.is_locked
        assert accessor.released

    def test_release_idempotent(self, buffer):
        """Test double release does not fail or unlock twice."""
        accessor = buffer.lock()
        accessor.release()
        accessor.release()

        with buffer.lock():
            assert buffer.is_locked

    def test_double_lock_raises(self, buffer):
        """Test a second lock fails immediately."""
        with buffer.lock():
            with pytest.raises(ResourceAcquisitionError, match="already locked"):
                buffer.lock()

    def test_context_manager_releases_on_error(self, buffer):
        """Test release happens when the scope raises."""
        with pytest.raises(ZeroDivisionError):
            with buffer.lock():
                1 / 0

        assert not buffer.is_locked

    def test_use_after_release_raises(self, buffer):
        """Test released accessors refuse access."""
        with buffer.lock() as pixels:
            pass

        with pytest.raises(ResourceAcquisitionError):
            pixels[0, 0]

        with pytest.raises(ResourceAcquisitionError):
            pixels.row(0, 0, 2)


class TestAccessor:
    """Test indexed pixel access."""

    def test_read_write(self, buffer):
        """Test accessor[x, y] reads and writes Colors."""
        with buffer.lock() as pixels:
            pixels[3, 2] = Color(0.1, 0.2, 0.3, 0.4)
            result = pixels[3, 2]

        np.testing.assert_allclose(result.to_tuple(), (0.1, 0.2, 0.3, 0.4), atol=1e-7)
        # x is the column, y the row
        np.testing.assert_allclose(buffer.to_array()[2, 3], (0.1, 0.2, 0.3, 0.4), atol=1e-7)

    @pytest.mark.parametrize("xy", [(4, 0), (0, 3), (-1, 0), (0, -1), (10, 10)])
    def test_out_of_bounds(self, buffer, xy):
        """Test every out-of-range coordinate raises, including negatives."""
        with buffer.lock() as pixels:
            with pytest.raises(BoundsViolationError) as exc_info:
                pixels[xy]

            with pytest.raises(IndexError):
                pixels[xy] = Color(0, 0, 0)

        assert exc_info.value.width == 4
        assert exc_info.value.height == 3

    def test_row_view_writes_through(self, buffer):
        """Test row() returns a live view of the span."""
        with buffer.lock() as pixels:
            row = pixels.row(1, 1, 3)
            assert row.shape == (2, 4)
            row[:, 0] = 1.0

        data = buffer.to_array()
        assert np.all(data[1, 1:3, 0] == 1.0)
        assert data[1, 0, 0] == 0.5
        assert data[1, 3, 0] == 0.5

    @pytest.mark.parametrize("span", [(3, 0, 2), (1, 2, 5), (1, -1, 2), (-1, 0, 2)])
    def test_row_out_of_bounds(self, buffer, span):
        """Test row spans outside the buffer raise."""
        with buffer.lock() as pixels:
            with pytest.raises(BoundsViolationError):
                pixels.row(*span)

    def test_empty_row_span(self, buffer):
        """Test zero-length span on a valid row is allowed."""
        with buffer.lock() as pixels:
            assert pixels.row(0, 2, 2).shape == (0, 4)
