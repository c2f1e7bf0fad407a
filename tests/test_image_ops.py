"""
Tests for the OpenCV image primitives.
"""

import numpy as np
import pytest

from imaging.opencv_ops import OpenCVImageOps
from models.errors import ProcessingError


@pytest.fixture
def ops():
    return OpenCVImageOps()


class TestOpenCVImageOps:
    def test_threshold_is_strict(self, ops):
        img = np.array([[24, 25, 26, 200]], dtype=np.uint8)
        assert ops.threshold(img, 25, 255).tolist() == [[0, 0, 255, 255]]

    def test_abs_diff_is_symmetric(self, ops):
        a = np.array([[10, 200]], dtype=np.uint8)
        b = np.array([[30, 50]], dtype=np.uint8)
        assert ops.abs_diff(a, b).tolist() == [[20, 150]]
        assert ops.abs_diff(b, a).tolist() == [[20, 150]]

    def test_dilate_grows_by_one_pixel(self, ops):
        img = np.zeros((9, 9), dtype=np.uint8)
        img[4, 4] = 255
        out = ops.dilate(img, 3, 1)
        assert np.count_nonzero(out) == 9
        assert np.all(out[3:6, 3:6] == 255)

    def test_external_contours_ignore_holes(self, ops):
        img = np.zeros((50, 50), dtype=np.uint8)
        img[10:40, 10:40] = 255
        img[20:30, 20:30] = 0
        contours = ops.find_external_contours(img)
        assert len(contours) == 1
        assert ops.bounding_rect(contours[0]) == (10, 10, 30, 30)

    def test_contour_area(self, ops):
        img = np.zeros((50, 50), dtype=np.uint8)
        img[10:21, 10:31] = 255
        (contour,) = ops.find_external_contours(img)
        assert ops.contour_area(contour) == pytest.approx(10 * 20)

    def test_to_gray_passes_single_channel_through(self, ops):
        gray = np.zeros((4, 4), dtype=np.uint8)
        assert ops.to_gray(gray) is gray

    def test_cv_error_becomes_processing_error(self, ops):
        a = np.zeros((2, 2), dtype=np.uint8)
        b = np.zeros((3, 3), dtype=np.uint8)
        with pytest.raises(ProcessingError, match="absdiff"):
            ops.abs_diff(a, b)

    def test_even_blur_kernel_fails(self, ops):
        with pytest.raises(ProcessingError):
            ops.blur(np.zeros((10, 10), dtype=np.uint8), 4)
