"""Tests for the framebuffer and display conversion."""

import numpy as np
import pytest

from pathtrace.core import Vector3
from pathtrace.renderer import Framebuffer
from pathtrace.renderer.tone_mapping import gamma_correct, quantize, sanitize


def filled(width, height, value):
    fb = Framebuffer(width, height)
    for j in range(height):
        fb.write_row(j, np.full((width, 3), value))
    return fb


class TestFramebuffer:
    """Row writes."""

    def test_starts_black_and_incomplete(self):
        fb = Framebuffer(3, 2)
        assert fb.pixels.shape == (2, 3, 3)
        assert not fb.pixels.any()
        assert not fb.is_complete()

    def test_write_rows(self):
        fb = Framebuffer(2, 2)
        fb.write_row(1, [[0.1, 0.2, 0.3], [0.4, 0.5, 0.6]])
        assert fb.pixel(1, 1) == Vector3(0.4, 0.5, 0.6)
        assert not fb.is_complete()
        fb.write_row(0, np.zeros((2, 3)))
        assert fb.is_complete()

    def test_row_written_once(self):
        fb = Framebuffer(2, 2)
        fb.write_row(0, np.zeros((2, 3)))
        with pytest.raises(ValueError):
            fb.write_row(0, np.zeros((2, 3)))

    def test_wrong_row_shape(self):
        fb = Framebuffer(2, 2)
        with pytest.raises(ValueError):
            fb.write_row(0, np.zeros((3, 3)))

    def test_bad_dimensions(self):
        with pytest.raises(ValueError):
            Framebuffer(0, 4)


class TestDisplayConversion:
    """Gamma, quantization and tone mapping."""

    def test_square_root_gamma(self):
        rgb = filled(2, 2, 0.25).to_rgb8()
        assert rgb.dtype == np.uint8
        assert rgb.shape == (2, 2, 3)
        assert np.all(rgb == 128)

    def test_full_white_is_255(self):
        assert np.all(filled(1, 1, 1.0).to_rgb8() == 255)

    def test_over_range_is_clamped(self):
        assert np.all(filled(1, 1, 40.0).to_rgb8() == 255)

    def test_non_finite_and_negative_become_black(self):
        fb = Framebuffer(4, 1)
        fb.write_row(0, [[np.nan] * 3, [np.inf] * 3, [-1.0] * 3, [-np.inf] * 3])
        assert not fb.to_rgb8().any()

    def test_reinhard(self):
        rgb = filled(1, 1, 1.0).to_rgb8("reinhard")
        # 1 / (1 + 1) = 0.5, then sqrt(0.5) * 256.
        assert np.all(rgb == 181)

    def test_auto_exposure_maps_mid_grey(self):
        rgb = filled(2, 2, 0.18).to_rgb8("auto")
        # Exposure brings the average to 0.18, then 0.18 / 1.18 goes through sqrt.
        assert np.all(rgb == rgb[0, 0])
        assert rgb[0, 0, 0] == int((0.18 / 1.18) ** 0.5 * 256)

    def test_unknown_tone_map(self):
        with pytest.raises(ValueError):
            filled(1, 1, 0.5).to_rgb8("filmic")

    def test_to_image(self):
        image = filled(5, 3, 0.25).to_image()
        assert image.size == (5, 3)
        assert image.mode == "RGB"
        assert image.getpixel((4, 2)) == (128, 128, 128)

    def test_helpers(self):
        assert np.array_equal(sanitize(np.array([np.nan, -2.0, 3.0])), [0.0, 0.0, 3.0])
        assert gamma_correct(np.array([0.0, 1.0 / 8]), gamma=3.0)[1] == pytest.approx(0.5)
        assert np.array_equal(quantize(np.array([0.0, 0.5, 2.0])), [0, 128, 255])
