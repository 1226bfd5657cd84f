"""
Render stage: draw accepted detections and the FPS overlay.

All drawing happens in place on the original-resolution frame.
"""

from __future__ import annotations

from typing import Sequence, Tuple

import cv2
import numpy as np

from models.detection import BoundingBox

# Colors (BGR)
COLOR_BOX = (0, 255, 0)  # Green
COLOR_LABEL_TEXT = (0, 0, 0)  # Black
COLOR_FPS = (255, 0, 0)  # Blue

FONT = cv2.FONT_HERSHEY_SIMPLEX
BOX_THICKNESS = 2
TEXT_THICKNESS = 2

MIN_LABEL_SCALE = 1.0
MAX_LABEL_SCALE = 3.0
LABEL_HEIGHT_RATIO = 0.1


def label_scale(box_height: float, label_height: float) -> float:
    """
    Font scale for a label so it is about a tenth of the box height.

    Clamped to [1, 3]: never smaller than the baseline font, never more
    than three times it.
    """
    if label_height <= 0:
        return MIN_LABEL_SCALE
    scale = (box_height * LABEL_HEIGHT_RATIO) / label_height
    return min(max(scale, MIN_LABEL_SCALE), MAX_LABEL_SCALE)


def label_rect(box: BoundingBox, text_size: Tuple[int, int], baseline: int, scale: float) -> Tuple[Tuple[int, int], Tuple[int, int]]:
    """
    Corners of the filled label background, sitting on the box's top edge.

    Labels near the top of the frame are not moved down and may clip.
    """
    tw, th = text_size
    rect_h = int(th * scale + baseline)
    rect_w = int(tw * scale)
    top_left = (box.left, box.top - rect_h)
    return top_left, (top_left[0] + rect_w, top_left[1] + rect_h)


class Renderer:
    """Draws boxes with adaptively scaled labels onto a frame."""

    def render(
        self,
        frame: np.ndarray,
        boxes: Sequence[BoundingBox],
        accepted_indices: Sequence[int],
        labels: Sequence[str],
    ) -> None:
        for index in accepted_indices:
            box = boxes[index]
            label = labels[index]

            cv2.rectangle(frame, (box.left, box.top), (box.right, box.bottom), COLOR_BOX, BOX_THICKNESS)

            (tw, th), baseline = cv2.getTextSize(label, FONT, 1.0, TEXT_THICKNESS)
            scale = label_scale(box.height, th)

            pt1, pt2 = label_rect(box, (tw, th), baseline, scale)
            cv2.rectangle(frame, pt1, pt2, COLOR_BOX, cv2.FILLED)
            cv2.putText(
                frame, label, (box.left, box.top - baseline),
                FONT, scale, COLOR_LABEL_TEXT, TEXT_THICKNESS, cv2.LINE_AA,
            )

    def draw_fps(self, frame: np.ndarray, fps: float) -> None:
        draw_fps(frame, fps)


def format_fps(fps: float) -> str:
    return "FPS: " + f"{fps:f}"[:5]


def draw_fps(frame: np.ndarray, fps: float) -> None:
    """Overlay the FPS figure in the top-left corner."""
    text = format_fps(fps)
    (_, th), _ = cv2.getTextSize(text, FONT, 1.0, TEXT_THICKNESS)
    cv2.putText(frame, text, (10, th + 10), FONT, 1.0, COLOR_FPS, TEXT_THICKNESS)
