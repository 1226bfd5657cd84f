"""
Pipeline stages for the object detector.

Each stage handles one step of per-frame processing:
- normalize: Long-edge resize before inference
- decode: Raw network output to candidates
- suppress: Confidence filtering and NMS
- render: Boxes, labels and the FPS overlay
- rate: Rolling FPS estimate
"""

from .normalize import FrameNormalizer
from .decode import DetectionDecoder
from .suppress import SuppressionStage, iou, suppress
from .render import Renderer, label_scale
from .rate import RateEstimator

__all__ = [
    "FrameNormalizer",
    "DetectionDecoder",
    "SuppressionStage",
    "iou",
    "suppress",
    "Renderer",
    "label_scale",
    "RateEstimator",
]
