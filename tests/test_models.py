"""
Smoke tests for typed models and adapters.
"""

import numpy as np
import pytest

from models.detection import BoundingBox, Candidate, candidates_to_arrays
from models.errors import ClassIndexOutOfRangeError, DetectorError
from models.frame import FrameData, NormalizedFrame, ResizeDecision


class TestBoundingBox:
    def test_properties(self):
        bbox = BoundingBox(left=100, top=100, width=100, height=50)
        assert bbox.right == 200
        assert bbox.bottom == 150
        assert bbox.area == 5000
        assert not bbox.is_degenerate

    def test_from_xyxy(self):
        bbox = BoundingBox.from_xyxy(64, 96, 320, 288)
        assert bbox.as_xywh() == (64, 96, 256, 192)
        assert bbox.as_xyxy() == (64, 96, 320, 288)

    def test_negative_size_kept(self):
        bbox = BoundingBox.from_xyxy(50, 50, 40, 60)
        assert bbox.width == -10
        assert bbox.is_degenerate

    def test_zero_area_is_degenerate(self):
        assert BoundingBox(10, 10, 0, 20).is_degenerate


class TestCandidate:
    def test_frozen(self):
        cand = Candidate(1, "person", 0.9, BoundingBox(0, 0, 10, 10), "Person:0.90")
        with pytest.raises(Exception):
            cand.label = "other"

    def test_candidates_to_arrays(self):
        cands = [
            Candidate(1, "person", 0.9, BoundingBox(0, 0, 10, 10), "Person:0.90"),
            Candidate(3, "car", 0.7, BoundingBox(5, 5, 10, 10), "Car:0.70"),
        ]
        boxes, confidences, labels = candidates_to_arrays(cands)
        assert boxes == [cands[0].box, cands[1].box]
        assert confidences == [0.9, 0.7]
        assert labels == ["Person:0.90", "Car:0.70"]


class TestFrameData:
    def test_from_numpy(self):
        frame = np.zeros((480, 640, 3), dtype=np.uint8)
        fd = FrameData.from_numpy(frame, timestamp=1.0, frame_index=3, source="cam")
        assert fd.size == (640, 480)
        assert fd.shape == (480, 640, 3)
        assert fd.frame_index == 3


class TestNormalizedFrame:
    def test_resized_flag(self):
        frame = np.zeros((10, 10, 3), dtype=np.uint8)
        nf = NormalizedFrame(frame, frame, 10, 10, ResizeDecision.NO_RESIZE)
        assert nf.resized is False
        assert nf.original_size == (10, 10)


class TestErrors:
    def test_class_index_error(self):
        err = ClassIndexOutOfRangeError(91, 80)
        assert isinstance(err, DetectorError)
        assert isinstance(err, IndexError)
        assert err.class_id == 91
        assert "91" in str(err)
