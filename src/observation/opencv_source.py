"""
OpenCV-based video source.

Wraps cv2.VideoCapture for video files. Reading stops at the first empty
frame, which is how OpenCV reports the end of a file.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional

import cv2

from models.frame import FrameData
from .base import ObservationConfig, ObservationSource


@dataclass
class VideoFileSourceConfig(ObservationConfig):
    """Configuration for video file sources."""

    @classmethod
    def for_path(cls, path: str, source_id: Optional[str] = None) -> "VideoFileSourceConfig":
        return cls(source_id=source_id or path, path=path)


class VideoFileSource(ObservationSource):
    """
    Reads frames from a video file until it is exhausted.

    Example:
        with VideoFileSource(VideoFileSourceConfig.for_path("in/Office.mp4")) as source:
            for frame_data in source:
                process(frame_data.frame)
    """

    def __init__(self, config: VideoFileSourceConfig):
        super().__init__(config)
        self._video_config = config
        self._cap: Optional[cv2.VideoCapture] = None

    @property
    def path(self) -> Optional[str]:
        return self._video_config.path

    def open(self) -> None:
        if self._is_open:
            return

        self._cap = cv2.VideoCapture(self.path)
        if not self._cap.isOpened():
            self._cap.release()
            self._cap = None
            raise RuntimeError(f"Failed to open video {self.path}")

        self._is_open = True
        self._frame_index = 0
        logging.info(f"VideoFileSource opened: source_id={self.source_id}, path={self.path}")

    def read(self) -> Optional[FrameData]:
        if not self._is_open or self._cap is None:
            return None

        ret, frame = self._cap.read()
        if not ret or frame is None or frame.size == 0:
            logging.info("End of video file reached")
            return None

        self._frame_index += 1
        return FrameData.from_numpy(
            frame,
            timestamp=time.time(),
            frame_index=self._frame_index,
            source=self.source_id,
        )

    def close(self) -> None:
        if self._cap is not None:
            self._cap.release()
            self._cap = None
        if self._is_open:
            logging.info(f"VideoFileSource closed: source_id={self.source_id}")
        self._is_open = False

