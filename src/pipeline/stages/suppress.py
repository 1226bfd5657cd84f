"""
Suppress stage: confidence filtering and greedy non-maximum suppression.
"""

from __future__ import annotations

from typing import List, Sequence

from models.detection import BoundingBox

DEFAULT_NMS_THRESHOLD = 0.4


def iou(a: BoundingBox, b: BoundingBox) -> float:
    """
    Calculate Intersection over Union (IoU) between two boxes.

    Boxes with zero or negative area have an IoU of 0 with everything.

    Returns:
        IoU value between 0 and 1
    """
    if a.is_degenerate or b.is_degenerate:
        return 0.0

    # Calculate intersection
    x1_i = max(a.left, b.left)
    y1_i = max(a.top, b.top)
    x2_i = min(a.right, b.right)
    y2_i = min(a.bottom, b.bottom)

    if x2_i <= x1_i or y2_i <= y1_i:
        return 0.0

    intersection = (x2_i - x1_i) * (y2_i - y1_i)
    union = a.area + b.area - intersection
    if union <= 0:
        return 0.0
    return intersection / union


def suppress(
    boxes: Sequence[BoundingBox],
    confidences: Sequence[float],
    conf_threshold: float,
    nms_threshold: float,
) -> List[int]:
    """
    Greedy NMS over candidate boxes.

    Candidates are visited by descending confidence; ties keep their input
    order. Each accepted box discards every remaining box whose IoU with it
    is >= nms_threshold. Degenerate boxes are never suppressed and never
    suppress others.

    Returns:
        Indices into boxes, in acceptance order.
    """
    if len(boxes) != len(confidences):
        raise ValueError(f"Got {len(boxes)} boxes but {len(confidences)} confidences")

    order = sorted(
        (i for i, c in enumerate(confidences) if c >= conf_threshold),
        key=lambda i: -confidences[i],
    )

    accepted: List[int] = []
    suppressed = set()
    for pos, i in enumerate(order):
        if i in suppressed:
            continue
        accepted.append(i)
        if boxes[i].is_degenerate:
            continue
        for j in order[pos + 1:]:
            if j in suppressed or boxes[j].is_degenerate:
                continue
            if iou(boxes[i], boxes[j]) >= nms_threshold:
                suppressed.add(j)

    return accepted


class SuppressionStage:
    """Holds the thresholds used by suppress() for a pipeline."""

    def __init__(self, conf_threshold: float, nms_threshold: float = DEFAULT_NMS_THRESHOLD):
        self.conf_threshold = conf_threshold
        self.nms_threshold = nms_threshold

    def process(self, boxes: Sequence[BoundingBox], confidences: Sequence[float]) -> List[int]:
        return suppress(boxes, confidences, self.conf_threshold, self.nms_threshold)
