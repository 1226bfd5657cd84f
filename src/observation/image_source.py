"""
Single still-image source.
"""

from __future__ import annotations

import logging
import time
from typing import Optional

import cv2

from models.errors import EmptyFrameError
from models.frame import FrameData
from .base import ObservationConfig, ObservationSource


class ImageSource(ObservationSource):
    """
    Yields one frame read with cv2.imread, then end of stream.

    An image that cannot be decoded raises EmptyFrameError from read():
    for a single image that is the run's failure, not an end of stream.
    """

    single_frame = True

    def __init__(self, config: ObservationConfig):
        super().__init__(config)
        self._consumed = False

    @classmethod
    def for_path(cls, path: str, source_id: Optional[str] = None) -> "ImageSource":
        return cls(ObservationConfig(source_id=source_id or path, path=path))

    @property
    def path(self) -> Optional[str]:
        return self._config.path

    def open(self) -> None:
        self._is_open = True
        self._consumed = False
        self._frame_index = 0

    def read(self) -> Optional[FrameData]:
        if not self._is_open or self._consumed:
            return None
        self._consumed = True

        frame = cv2.imread(self.path) if self.path else None
        if frame is None or frame.size == 0:
            raise EmptyFrameError(f"Could not read image {self.path}")

        self._frame_index += 1
        logging.info(f"Image read: {self.path} ({frame.shape[1]}x{frame.shape[0]})")
        return FrameData.from_numpy(
            frame,
            timestamp=time.time(),
            frame_index=self._frame_index,
            source=self.source_id,
        )

    def close(self) -> None:
        self._is_open = False
