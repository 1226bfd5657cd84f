"""
ObservationSource interface for media inputs.

A source hands the detection loop one FrameData at a time, whether it wraps
a single still image or a video file.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator, Optional

from models.frame import FrameData


@dataclass
class ObservationConfig:
    """
    Base configuration for media sources.

    Attributes:
        source_id: Identifier used in logs and on FrameData (e.g. the file name).
        path: Path of the image or video file.
    """
    source_id: str = "default"
    path: Optional[str] = None


class ObservationSource(ABC):
    """
    Abstract base class for media sources.

    Lifecycle:
        1. Create instance with config
        2. Call open() to initialize the source
        3. Call read() until it returns None (end of stream)
        4. Call close() to release resources

    Can also be used as a context manager:
        with VideoFileSource(config) as source:
            for frame_data in source:
                process(frame_data)
    """

    # True when the source yields exactly one frame (a still image).
    single_frame: bool = False

    def __init__(self, config: ObservationConfig):
        self._config = config
        self._is_open = False
        self._frame_index = 0

    @property
    def source_id(self) -> str:
        return self._config.source_id

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def frame_index(self) -> int:
        """Number of frames read since open."""
        return self._frame_index

    @abstractmethod
    def open(self) -> None:
        """
        Open the source. Must be called before read().

        Raises:
            RuntimeError: If the source cannot be opened.
        """

    @abstractmethod
    def read(self) -> Optional[FrameData]:
        """
        Read the next frame.

        Returns:
            FrameData, or None at end of stream.
        """

    @abstractmethod
    def close(self) -> None:
        """Release the source. Safe to call multiple times."""

    def __enter__(self) -> "ObservationSource":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __iter__(self) -> Iterator[FrameData]:
        if not self._is_open:
            raise RuntimeError("Source must be open before iterating")

        while True:
            frame_data = self.read()
            if frame_data is None:
                break
            yield frame_data
