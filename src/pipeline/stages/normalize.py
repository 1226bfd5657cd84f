"""
Normalize stage: cap the frame's long edge before inference.

The resize rule is a three-way decision table:

    (w > cap and w > h) or (h > cap and h > w)  -> SCALE_BY_LONG_EDGE
    h > cap and h == w                          -> SCALE_TO_SQUARE
    anything else                               -> NO_RESIZE

When a resize happens the untouched frame is kept as an independent copy so
detections can be drawn at full resolution. With NO_RESIZE the original and
the network input are the same buffer.
"""

from __future__ import annotations

import logging

import cv2
import numpy as np

from models.frame import NormalizedFrame, ResizeDecision

DEFAULT_MAX_EDGE = 600


def decide(width: int, height: int, max_edge: int = DEFAULT_MAX_EDGE) -> ResizeDecision:
    """Pick the resize rule for a frame of the given size."""
    if (width > max_edge and width > height) or (height > max_edge and height > width):
        return ResizeDecision.SCALE_BY_LONG_EDGE
    if height > max_edge and height == width:
        return ResizeDecision.SCALE_TO_SQUARE
    return ResizeDecision.NO_RESIZE


def target_size(width: int, height: int, max_edge: int = DEFAULT_MAX_EDGE) -> tuple[int, int]:
    """
    Return the (width, height) the frame will be resized to.

    The long edge becomes max_edge and the short edge is scaled by the same
    ratio, truncated to whole pixels but never below one.
    """
    decision = decide(width, height, max_edge)
    if decision is ResizeDecision.SCALE_BY_LONG_EDGE:
        if width > height:
            return max_edge, max(1, int(max_edge * height / width))
        return max(1, int(max_edge * width / height)), max_edge
    if decision is ResizeDecision.SCALE_TO_SQUARE:
        return max_edge, max_edge
    return width, height


class FrameNormalizer:
    """
    Resizes incoming frames to the network's working size.

    Example:
        normalizer = FrameNormalizer(max_edge=600)
        nf = normalizer.normalize(frame)
        output = backend.infer(nf.network_input)
    """

    def __init__(self, max_edge: int = DEFAULT_MAX_EDGE):
        self.max_edge = max_edge

    def normalize(self, frame: np.ndarray) -> NormalizedFrame:
        height, width = frame.shape[:2]
        decision = decide(width, height, self.max_edge)

        if decision is ResizeDecision.NO_RESIZE:
            return NormalizedFrame(
                network_input=frame,
                original=frame,
                original_width=width,
                original_height=height,
                decision=decision,
            )

        original = frame.copy()
        new_w, new_h = target_size(width, height, self.max_edge)
        resized = cv2.resize(frame, (new_w, new_h), interpolation=cv2.INTER_LINEAR)
        logging.debug(f"Resized frame {width}x{height} -> {new_w}x{new_h} ({decision.value})")

        return NormalizedFrame(
            network_input=resized,
            original=original,
            original_width=width,
            original_height=height,
            decision=decision,
        )
