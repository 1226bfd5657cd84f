"""
Media loop for the object detector.

Reads frames from an ObservationSource, runs each through the
FrameDetectionPipeline, writes the annotated result to a MediaSink and
optionally shows it in a window. Early exit is a cancellation token checked
between frames; nothing inside the pipeline is interrupted.
"""

from __future__ import annotations

import logging
import os
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

import cv2

from models.config import DisplayConfig, IOConfig
from models.errors import EmptyFrameError
from models.frame import FrameData
from observation import ImageSource, ObservationSource, VideoFileSource, VideoFileSourceConfig
from pipeline.frame_pipeline import FrameDetectionPipeline, FrameResult
from pipeline.sinks import ImageSink, MediaSink, VideoSink

KEY_ESC = 27


@dataclass
class EngineConfig:
    """
    Configuration for the detection engine.

    Attributes:
        display: Show each annotated frame in a window.
        window_name: Title of the display window.
        stats_log_interval: Seconds between progress log messages.
    """
    display: bool = False
    window_name: str = "Result Window"
    stats_log_interval: float = 10.0

    @classmethod
    def from_display_config(cls, cfg: DisplayConfig) -> "EngineConfig":
        return cls(display=cfg.enabled, window_name=cfg.window_name)


@dataclass
class EngineStats:
    """Runtime statistics for one run."""
    frame_count: int = 0
    processing_seconds: float = 0.0
    start_time: float = field(default_factory=time.time)
    end_time: Optional[float] = None
    last_stats_log_time: float = field(default_factory=time.time)
    cancelled: bool = False

    @property
    def elapsed_seconds(self) -> float:
        end = self.end_time if self.end_time is not None else time.time()
        return end - self.start_time

    @property
    def processing_fps(self) -> float:
        """Frames per second of pipeline time, excluding I/O and display."""
        if self.processing_seconds <= 0:
            return 0.0
        return self.frame_count / self.processing_seconds


class DetectionEngine:
    """
    Drives a source through the detection pipeline into a sink.

    Example:
        source = VideoFileSource(VideoFileSourceConfig.for_path("in/Office.mp4"))
        sink = VideoSink("out/Office.mp4")
        engine = DetectionEngine(source, pipeline, sink, EngineConfig(display=True))
        stats = engine.run()
    """

    def __init__(
        self,
        source: ObservationSource,
        pipeline: FrameDetectionPipeline,
        sink: Optional[MediaSink] = None,
        config: Optional[EngineConfig] = None,
        cancel_event: Optional[threading.Event] = None,
    ):
        self.source = source
        self.pipeline = pipeline
        self.sink = sink
        self.config = config or EngineConfig()
        self.cancel_event = cancel_event or threading.Event()
        self.stats = EngineStats()
        self._callbacks: List[Callable[[FrameData, FrameResult], None]] = []

    def add_callback(self, callback: Callable[[FrameData, FrameResult], None]) -> None:
        """
        Add a callback to be called after each frame is processed.

        Args:
            callback: Function taking (frame_data, result) as arguments.
        """
        self._callbacks.append(callback)

    def stop(self) -> None:
        """Signal the loop to stop before the next frame."""
        self.cancel_event.set()

    def run(self) -> EngineStats:
        """
        Process frames until the source is exhausted or the run is cancelled.

        Raises:
            EmptyFrameError: If a single-image source yields no usable frame.
        """
        self.stats = EngineStats()

        try:
            self.source.open()
            logging.info(f"Detection started: source={self.source.source_id}")

            while not self.cancel_event.is_set():
                frame_data = self.source.read()
                if frame_data is None:
                    break

                try:
                    result = self._process_frame(frame_data)
                except EmptyFrameError as e:
                    if self.source.single_frame:
                        raise
                    logging.warning(f"Empty frame at index {frame_data.frame_index}, ending stream: {e}")
                    break

                for callback in self._callbacks:
                    try:
                        callback(frame_data, result)
                    except Exception as e:
                        logging.warning(f"Callback error: {e}")

                if self.config.display:
                    self._handle_display(result)

                self._handle_periodic_tasks()

                if self.source.single_frame:
                    break

            if self.cancel_event.is_set():
                self.stats.cancelled = True
                logging.info("Detection cancelled by user")
        finally:
            self._cleanup()

        logging.info(
            f"Detection finished: frames={self.stats.frame_count}, "
            f"elapsed={self.stats.elapsed_seconds:.2f}s, FPS: {self.stats.processing_fps:.2f}"
        )
        return self.stats

    def _process_frame(self, frame_data: FrameData) -> FrameResult:
        started = time.perf_counter()
        result = self.pipeline.process(frame_data.frame)
        self.stats.processing_seconds += time.perf_counter() - started
        self.stats.frame_count += 1

        frame_data.frame = result.frame
        if self.sink is not None:
            self.sink.write(result.frame)

        for det in result.detections:
            logging.debug(
                f"[DETECT] frame={frame_data.frame_index} {det.label} box={det.box.as_xywh()}"
            )
        return result

    def _handle_display(self, result: FrameResult) -> None:
        """Show the frame; ESC cancels the run. A still image waits for any key."""
        cv2.imshow(self.config.window_name, result.frame)
        if self.source.single_frame:
            cv2.waitKey(0)
            return
        key = cv2.waitKey(1) & 0xFF
        if key == KEY_ESC:
            self.cancel_event.set()

    def _handle_periodic_tasks(self) -> None:
        now = time.time()
        if now - self.stats.last_stats_log_time >= self.config.stats_log_interval:
            logging.info(
                f"Detection stats: frames={self.stats.frame_count}, "
                f"fps={self.pipeline.rate.fps:.2f}"
            )
            self.stats.last_stats_log_time = now

    def _cleanup(self) -> None:
        self.stats.end_time = time.time()

        try:
            self.source.close()
        except Exception as e:
            logging.warning(f"Error closing source: {e}")

        if self.sink is not None:
            self.sink.close()

        if self.config.display:
            cv2.destroyAllWindows()


class SourceType(str, Enum):
    IMAGE = "image"
    VIDEO = "video"

    @classmethod
    def from_path(cls, path: str) -> "SourceType":
        ext = os.path.splitext(path)[1].lower()
        return cls.IMAGE if ext in IMAGE_EXTENSIONS else cls.VIDEO


IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".bmp", ".tif", ".tiff", ".webp"}


def create_engine_for_file(
    file_name: str,
    source_type: Optional[SourceType],
    pipeline: FrameDetectionPipeline,
    io_config: IOConfig,
    display: Optional[DisplayConfig] = None,
) -> DetectionEngine:
    """
    Factory: build an engine for a file in the configured input directory.

    The annotated output keeps the input's file name and goes to the
    configured output directory.

    Args:
        file_name: File name relative to io_config.input_dir.
        source_type: IMAGE or VIDEO. None picks one from the file extension.
        pipeline: Pipeline that processes each frame.
        io_config: Input/output directories and video writer settings.
        display: Preview window settings.
    """
    input_path = os.path.join(io_config.input_dir, file_name)
    output_path = os.path.join(io_config.output_dir, file_name)
    if source_type is None:
        source_type = SourceType.from_path(file_name)

    source: ObservationSource
    sink: MediaSink
    if source_type is SourceType.IMAGE:
        source = ImageSource.for_path(input_path, source_id=file_name)
        sink = ImageSink(output_path)
    else:
        source = VideoFileSource(VideoFileSourceConfig.for_path(input_path, source_id=file_name))
        sink = VideoSink(output_path, fps=io_config.video_fps, fourcc=io_config.fourcc)

    engine_config = EngineConfig.from_display_config(display or DisplayConfig())
    return DetectionEngine(source, pipeline, sink, engine_config)
