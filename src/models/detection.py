"""
Detection models for object detection results.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple



@dataclass(frozen=True)
class BoundingBox:
    """
    An axis-aligned box in original-frame pixel coordinates.

    Width and height may be negative when the network emits a degenerate
    box; nothing here clamps them.

    Attributes:
        left: Left edge x coordinate.
        top: Top edge y coordinate.
        width: Box width (right - left).
        height: Box height (bottom - top).
    """
    left: int
    top: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.left + self.width

    @property
    def bottom(self) -> int:
        return self.top + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def is_degenerate(self) -> bool:
        """True when the box has no positive area."""
        return self.width <= 0 or self.height <= 0

    def as_xywh(self) -> Tuple[int, int, int, int]:
        """Return as (left, top, width, height) tuple."""
        return (self.left, self.top, self.width, self.height)

    def as_xyxy(self) -> Tuple[int, int, int, int]:
        """Return as (left, top, right, bottom) tuple."""
        return (self.left, self.top, self.right, self.bottom)

    @classmethod
    def from_xyxy(cls, left: int, top: int, right: int, bottom: int) -> "BoundingBox":
        """Create from (left, top, right, bottom) corners."""
        return cls(left=left, top=top, width=right - left, height=bottom - top)


@dataclass(frozen=True)
class Candidate:
    """
    A single decoded detection, before suppression.

    Attributes:
        class_id: Index into the class-name list.
        class_name: Class name as read from the label file.
        confidence: Detection confidence score (0-1).
        box: Bounding box in original-frame pixel coordinates.
        label: Display label, e.g. "Person:0.87".
    """
    class_id: int
    class_name: str
    confidence: float
    box: BoundingBox
    label: str


def candidates_to_arrays(candidates: List[Candidate]) -> Tuple[List[BoundingBox], List[float], List[str]]:
    """
    Adapter: split candidates into the parallel lists used by suppression and rendering.

    Returns:
        (boxes, confidences, labels), index-aligned with candidates.
    """
    boxes = [c.box for c in candidates]
    confidences = [c.confidence for c in candidates]
    labels = [c.label for c in candidates]
    return boxes, confidences, labels

