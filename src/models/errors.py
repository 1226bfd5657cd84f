"""
Exceptions raised by the detection pipeline and its collaborators.
"""

from __future__ import annotations


class DetectorError(Exception):
    """Base class for all object detector errors."""


class ModelLoadError(DetectorError):
    """The network topology or weights file is missing or corrupt."""


class LabelResourceError(DetectorError):
    """The class-label file could not be read."""


class EmptyFrameError(DetectorError):
    """A frame was empty or could not be decoded."""


class ClassIndexOutOfRangeError(DetectorError, IndexError):
    """The network produced a class index with no matching label."""

    def __init__(self, class_id: int, num_classes: int):
        super().__init__(
            f"Class index {class_id} out of range for {num_classes} class names"
        )
        self.class_id = class_id
        self.num_classes = num_classes
