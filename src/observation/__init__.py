"""
Observation layer for media inputs.

This layer abstracts where frames come from (a still image or a video file)
from the detection loop. Each source implements the ObservationSource
interface and returns FrameData objects.
"""

from .base import ObservationSource, ObservationConfig
from .image_source import ImageSource
from .opencv_source import VideoFileSource, VideoFileSourceConfig

__all__ = [
    "ObservationSource",
    "ObservationConfig",
    "ImageSource",
    "VideoFileSource",
    "VideoFileSourceConfig",
]
