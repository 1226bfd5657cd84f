"""
Tests for the frame normalization decision table and resizing.
"""

import numpy as np
import pytest

from models.frame import ResizeDecision
from pipeline.stages.normalize import FrameNormalizer, decide, target_size


def make_frame(width, height, value=0):
    return np.full((height, width, 3), value, dtype=np.uint8)


class TestDecide:
    @pytest.mark.parametrize("width,height", [
        (1280, 720),   # landscape
        (720, 1280),   # portrait
        (601, 600),    # just over on the long edge
    ])
    def test_non_square_oversized_scales_by_long_edge(self, width, height):
        assert decide(width, height) is ResizeDecision.SCALE_BY_LONG_EDGE

    def test_square_oversized_scales_to_square(self):
        assert decide(800, 800) is ResizeDecision.SCALE_TO_SQUARE

    @pytest.mark.parametrize("width,height", [
        (600, 600),
        (600, 400),
        (100, 100),
        (600, 599),
        (1, 1),
    ])
    def test_within_cap_no_resize(self, width, height):
        assert decide(width, height) is ResizeDecision.NO_RESIZE

    def test_custom_cap(self):
        assert decide(400, 300, max_edge=320) is ResizeDecision.SCALE_BY_LONG_EDGE
        assert decide(300, 200, max_edge=320) is ResizeDecision.NO_RESIZE


class TestTargetSize:
    def test_landscape(self):
        assert target_size(1280, 720) == (600, 337)

    def test_portrait(self):
        assert target_size(720, 1280) == (337, 600)

    def test_square(self):
        assert target_size(1000, 1000) == (600, 600)

    def test_unchanged(self):
        assert target_size(320, 240) == (320, 240)

    @pytest.mark.parametrize("width,height,expected", [
        (1300, 1, (600, 1)),
        (1, 1300, (1, 600)),
    ])
    def test_extreme_aspect_keeps_one_pixel(self, width, height, expected):
        assert target_size(width, height) == expected



class TestFrameNormalizer:
    def test_small_frame_untouched(self):
        """Frames within the cap are passed through as the same buffer."""
        frame = make_frame(320, 240)
        nf = FrameNormalizer().normalize(frame)

        assert nf.decision is ResizeDecision.NO_RESIZE
        assert nf.network_input is frame
        assert nf.original is frame
        assert nf.original_size == (320, 240)

    def test_aspect_preserved(self):
        frame = make_frame(1280, 720)
        nf = FrameNormalizer().normalize(frame)

        h, w = nf.network_input.shape[:2]
        assert w == 600
        assert abs(w * 720 / 1280 - h) <= 1
        assert nf.original_size == (1280, 720)

    def test_original_is_independent_copy(self):
        frame = make_frame(1280, 720, value=7)
        nf = FrameNormalizer().normalize(frame)

        assert nf.original is not frame
        assert nf.original.shape == (720, 1280, 3)
        frame[:] = 0
        assert nf.original[0, 0, 0] == 7

    def test_square_resized_to_cap(self):
        frame = make_frame(900, 900)
        nf = FrameNormalizer().normalize(frame)

        assert nf.decision is ResizeDecision.SCALE_TO_SQUARE
        assert nf.network_input.shape[:2] == (600, 600)
        assert nf.original_size == (900, 900)

    def test_portrait_long_edge(self):
        frame = make_frame(480, 1000)
        nf = FrameNormalizer().normalize(frame)

        assert nf.network_input.shape[:2] == (600, 288)
        assert nf.original_size == (480, 1000)

    def test_thin_strip_resized(self):
        frame = make_frame(1300, 1)
        nf = FrameNormalizer().normalize(frame)

        assert nf.decision is ResizeDecision.SCALE_BY_LONG_EDGE
        assert nf.network_input.shape[:2] == (1, 600)
        assert nf.original_size == (1300, 1)
