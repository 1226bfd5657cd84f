"""
Media sinks for annotated frames.
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from typing import Optional

import cv2
import numpy as np


def _ensure_parent_dir(path: str) -> None:
    out_dir = os.path.dirname(path)
    if out_dir and not os.path.exists(out_dir):
        os.makedirs(out_dir)


class MediaSink(ABC):
    """Accepts annotated frames at original resolution and persists them."""

    def __init__(self, output_path: str):
        self.output_path = output_path
        self.frames_written = 0

    @abstractmethod
    def write(self, frame: np.ndarray) -> None:
        ...

    def close(self) -> None:
        pass

    def __enter__(self) -> "MediaSink":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class ImageSink(MediaSink):
    """Writes the annotated frame as a single image file."""

    def write(self, frame: np.ndarray) -> None:
        _ensure_parent_dir(self.output_path)
        if not cv2.imwrite(self.output_path, frame):
            raise RuntimeError(f"Failed to write image {self.output_path}")
        self.frames_written += 1
        logging.info(f"Image saved: {self.output_path}")


class VideoSink(MediaSink):
    """
    Writes annotated frames to a video file.

    The writer is opened on the first frame, sized to that frame, at a fixed
    frame rate.
    """

    def __init__(self, output_path: str, fps: float = 25.0, fourcc: str = "mp4v"):
        super().__init__(output_path)
        self.fps = fps
        self.fourcc = fourcc
        self._writer: Optional[cv2.VideoWriter] = None

    @property
    def is_open(self) -> bool:
        return self._writer is not None

    def _open(self, frame: np.ndarray) -> None:
        _ensure_parent_dir(self.output_path)
        h, w = frame.shape[:2]
        code = cv2.VideoWriter_fourcc(*self.fourcc)
        self._writer = cv2.VideoWriter(self.output_path, code, self.fps, (w, h), True)
        if not self._writer.isOpened():
            self._writer = None
            raise RuntimeError(f"Failed to open video writer {self.output_path}")
        logging.info(f"Video recording started: {self.output_path} ({w}x{h} @ {self.fps} fps)")

    def write(self, frame: np.ndarray) -> None:
        if self._writer is None:
            self._open(frame)
        self._writer.write(frame)
        self.frames_written += 1

    def close(self) -> None:
        if self._writer is not None:
            self._writer.release()
            self._writer = None
            logging.info(f"Video saved: {self.output_path} ({self.frames_written} frames)")
