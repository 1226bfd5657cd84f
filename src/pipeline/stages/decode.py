"""
Decode stage: turn the raw detection grid into candidates.

Each row of the network output is
[batch_id, class_id, confidence, left, top, right, bottom], with the box
normalized to the original frame. Coordinates are projected back onto the
original frame here, so every candidate box is in original-frame pixels.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

import numpy as np

from models.detection import BoundingBox, Candidate
from models.errors import ClassIndexOutOfRangeError

DEFAULT_CONF_THRESHOLD = 0.5

# Columns of a detection row.
COL_CLASS = 1
COL_CONFIDENCE = 2
COL_LEFT = 3
COL_TOP = 4
COL_RIGHT = 5
COL_BOTTOM = 6
MIN_COLUMNS = 7


def format_confidence(confidence: float) -> str:
    """First four characters of the confidence in fixed notation, e.g. 0.87 -> "0.87"."""
    return f"{confidence:f}"[:4]


def make_label(class_name: str, confidence: float) -> str:
    """Build the display label: capitalized first letter, then ":" and the confidence."""
    return f"{class_name[:1].upper()}{class_name[1:]}:{format_confidence(confidence)}"


class DetectionDecoder:
    """
    Converts raw network output into Candidate objects.

    Rows below the confidence threshold are dropped (the threshold itself is
    kept). Degenerate boxes are passed through unclamped.
    """

    def __init__(self, conf_threshold: float = DEFAULT_CONF_THRESHOLD):
        self.conf_threshold = conf_threshold

    def decode(
        self,
        raw_output: np.ndarray,
        original_width: int,
        original_height: int,
        class_names: Sequence[str],
    ) -> List[Candidate]:
        """
        Decode detections for one frame.

        Args:
            raw_output: Array of shape (N, >=7).
            original_width: Width of the frame the boxes are projected onto.
            original_height: Height of the frame the boxes are projected onto.
            class_names: Labels, index-aligned with the network's classes.

        Raises:
            ClassIndexOutOfRangeError: If a kept row names an unknown class.
        """
        rows = np.asarray(raw_output, dtype=np.float64)
        if rows.size == 0:
            return []
        if rows.ndim != 2 or rows.shape[1] < MIN_COLUMNS:
            raise ValueError(
                f"Expected detection rows with at least {MIN_COLUMNS} columns, got shape {rows.shape}"
            )

        candidates: List[Candidate] = []
        for row in rows:
            confidence = float(row[COL_CONFIDENCE])
            if confidence < self.conf_threshold:
                continue

            left = int(float(row[COL_LEFT]) * original_width)
            top = int(float(row[COL_TOP]) * original_height)
            right = int(float(row[COL_RIGHT]) * original_width)
            bottom = int(float(row[COL_BOTTOM]) * original_height)

            class_id = int(row[COL_CLASS])
            if class_id < 0 or class_id >= len(class_names):
                raise ClassIndexOutOfRangeError(class_id, len(class_names))
            class_name = class_names[class_id]

            candidates.append(
                Candidate(
                    class_id=class_id,
                    class_name=class_name,
                    confidence=confidence,
                    box=BoundingBox.from_xyxy(left, top, right, bottom),
                    label=make_label(class_name, confidence),
                )
            )

        logging.debug(f"Decoded {len(candidates)}/{len(rows)} rows above conf={self.conf_threshold}")
        return candidates
