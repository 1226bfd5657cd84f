"""
Pipeline module for the object detector.

The pipeline orchestrates the full processing flow:
- Per-frame detection (normalize, infer, decode, suppress, render)
- Rolling FPS estimation and overlay
- The media loop feeding sources into sinks
"""

from .frame_pipeline import FrameDetectionPipeline, FrameResult, PipelineState
from .engine import DetectionEngine, EngineConfig, EngineStats, SourceType, create_engine_for_file
from .sinks import MediaSink, ImageSink, VideoSink

__all__ = [
    "FrameDetectionPipeline",
    "FrameResult",
    "PipelineState",
    "DetectionEngine",
    "EngineConfig",
    "EngineStats",
    "SourceType",
    "create_engine_for_file",
    "MediaSink",
    "ImageSink",
    "VideoSink",
]
