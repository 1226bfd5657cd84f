"""
Tests for box, label and FPS rendering.
"""

import cv2
import numpy as np
import pytest

from models.detection import BoundingBox
from pipeline.stages.render import (
    COLOR_BOX,
    Renderer,
    draw_fps,
    format_fps,
    label_rect,
    label_scale,
)


def blank(width=400, height=300):
    return np.zeros((height, width, 3), dtype=np.uint8)


class TestLabelScale:
    def test_small_box_clamps_to_one(self):
        # Raw scale 0.01
        assert label_scale(5, 50) == 1.0

    def test_large_box_clamps_to_three(self):
        # Raw scale 10
        assert label_scale(1000, 10) == 3.0

    def test_in_range_passes_through(self):
        assert label_scale(400, 20) == pytest.approx(2.0)

    def test_negative_height_clamps_to_one(self):
        assert label_scale(-200, 20) == 1.0

    def test_zero_label_height(self):
        assert label_scale(100, 0) == 1.0


class TestLabelRect:
    def test_sits_on_box_top(self):
        box = BoundingBox(50, 100, 80, 60)
        pt1, pt2 = label_rect(box, (40, 20), baseline=5, scale=2.0)

        assert pt1 == (50, 100 - 45)
        assert pt2 == (50 + 80, 100)

    def test_not_clamped_to_frame(self):
        box = BoundingBox(10, 5, 80, 60)
        pt1, _ = label_rect(box, (40, 20), baseline=5, scale=1.0)

        assert pt1[1] < 0


class TestRenderer:
    def test_draws_accepted_only(self):
        frame = blank()
        boxes = [BoundingBox(20, 60, 100, 100), BoundingBox(250, 60, 100, 100)]
        labels = ["Person:0.90", "Car:0.80"]

        Renderer().render(frame, boxes, [0], labels)

        # Left edge of the accepted box is green
        assert tuple(frame[110, 20]) == COLOR_BOX
        # Second box untouched
        assert not frame[60:161, 250:351].any()

    def test_label_background_above_box(self):
        frame = blank()
        box = BoundingBox(20, 100, 150, 100)
        Renderer().render(frame, [box], [0], ["Dog:0.75"])

        (_, th), baseline = cv2.getTextSize("Dog:0.75", cv2.FONT_HERSHEY_SIMPLEX, 1.0, 2)
        # Just above the box's left corner is filled label background or text
        above = frame[100 - th - baseline:100, 20:30]
        assert above.any()

    def test_in_place(self):
        frame = blank()
        result = Renderer().render(frame, [BoundingBox(10, 50, 50, 50)], [0], ["A:0.50"])

        assert result is None
        assert frame.any()

    def test_degenerate_box_does_not_raise(self):
        frame = blank()
        Renderer().render(frame, [BoundingBox(100, 100, -30, -20)], [0], ["Cat:0.60"])

    def test_label_off_frame_does_not_raise(self):
        frame = blank()
        Renderer().render(frame, [BoundingBox(10, 0, 50, 50)], [0], ["Cat:0.60"])

    def test_no_accepted_leaves_frame(self):
        frame = blank()
        Renderer().render(frame, [BoundingBox(10, 10, 50, 50)], [], ["Cat:0.60"])

        assert not frame.any()


class TestFpsOverlay:
    def test_format(self):
        assert format_fps(0.0) == "FPS: 0.000"
        assert format_fps(29.97) == "FPS: 29.97"
        assert format_fps(123.456) == "FPS: 123.4"

    def test_draws_in_top_left(self):
        frame = blank()
        draw_fps(frame, 30.0)

        assert frame[:60, :200].any()
        assert not frame[100:, :].any()
        # Blue channel only
        assert not frame[..., 1].any()
        assert not frame[..., 2].any()

    def test_renderer_delegates(self):
        a, b = blank(), blank()
        draw_fps(a, 12.5)
        Renderer().draw_fps(b, 12.5)

        assert np.array_equal(a, b)
