"""
Typed models for the object detector.

Frames, decoded detections, configuration and the error taxonomy shared by
every layer of the application.
"""

from .frame import FrameData, NormalizedFrame, ResizeDecision
from .detection import BoundingBox, Candidate
from .errors import (
    DetectorError,
    ModelLoadError,
    LabelResourceError,
    EmptyFrameError,
    ClassIndexOutOfRangeError,
)
from .config import (
    Config,
    ModelConfig,
    DetectionConfig,
    IOConfig,
    DisplayConfig,
)

__all__ = [
    # Frame
    "FrameData",
    "NormalizedFrame",
    "ResizeDecision",
    # Detection
    "BoundingBox",
    "Candidate",
    # Errors
    "DetectorError",
    "ModelLoadError",
    "LabelResourceError",
    "EmptyFrameError",
    "ClassIndexOutOfRangeError",
    # Config
    "Config",
    "ModelConfig",
    "DetectionConfig",
    "IOConfig",
    "DisplayConfig",
]
