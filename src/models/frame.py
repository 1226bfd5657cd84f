"""
Frame models for captured and normalized video frames.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import numpy as np


@dataclass
class FrameData:
    """
    Metadata and payload for a frame read from a media source.

    Attributes:
        frame: The raw frame data as a numpy array (BGR format).
        width: Frame width in pixels.
        height: Frame height in pixels.
        timestamp: Unix timestamp when frame was read.
        frame_index: Sequential frame number since the source was opened.
        source: Identifier for the image/video source.
    """
    frame: np.ndarray
    width: int
    height: int
    timestamp: float
    frame_index: int = 0
    source: Optional[str] = None

    @classmethod
    def from_numpy(
        cls,
        frame: np.ndarray,
        timestamp: float,
        frame_index: int = 0,
        source: Optional[str] = None,
    ) -> "FrameData":
        """Create FrameData from a numpy array."""
        h, w = frame.shape[:2]
        return cls(
            frame=frame,
            width=w,
            height=h,
            timestamp=timestamp,
            frame_index=frame_index,
            source=source,
        )

    @property
    def shape(self) -> Tuple[int, int, int]:
        """Return (height, width, channels)."""
        return self.frame.shape

    @property
    def size(self) -> Tuple[int, int]:
        """Return (width, height)."""
        return (self.width, self.height)


class ResizeDecision(str, Enum):
    """Outcome of the frame normalization decision table."""
    SCALE_BY_LONG_EDGE = "scale_by_long_edge"
    SCALE_TO_SQUARE = "scale_to_square"
    NO_RESIZE = "no_resize"


@dataclass
class NormalizedFrame:
    """
    A frame prepared for the network, plus the original it came from.

    Attributes:
        network_input: Frame fed to the inference backend.
        original: Original-resolution frame used for rendering. Same buffer
            as network_input when no resize was performed.
        original_width: Width of the original frame in pixels.
        original_height: Height of the original frame in pixels.
        decision: Which resize rule was applied.
    """
    network_input: np.ndarray
    original: np.ndarray
    original_width: int
    original_height: int
    decision: ResizeDecision

    @property
    def resized(self) -> bool:
        return self.decision is not ResizeDecision.NO_RESIZE

    @property
    def original_size(self) -> Tuple[int, int]:
        """Return (width, height) of the original frame."""
        return (self.original_width, self.original_height)
