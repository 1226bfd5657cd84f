"""
Per-frame detection pipeline.

Runs one frame through normalize -> infer -> decode -> suppress -> render,
then updates the session's FPS estimate and overlays it. The media loop
(pipeline.engine) calls process() once per frame.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

import numpy as np

from inference.backend import InferenceBackend
from models.config import DetectionConfig
from models.detection import Candidate, candidates_to_arrays
from models.errors import EmptyFrameError
from models.frame import ResizeDecision
from pipeline.stages.decode import DetectionDecoder
from pipeline.stages.normalize import FrameNormalizer
from pipeline.stages.rate import RateEstimator
from pipeline.stages.render import Renderer
from pipeline.stages.suppress import SuppressionStage


class PipelineState(str, Enum):
    IDLE = "idle"
    NORMALIZING = "normalizing"
    INFERRING = "inferring"
    DECODING = "decoding"
    SUPPRESSING = "suppressing"
    RENDERING = "rendering"
    DONE = "done"


@dataclass
class FrameResult:
    """
    Output of one pipeline invocation.

    Attributes:
        frame: Annotated frame at original resolution.
        candidates: Every decoded candidate above the confidence threshold.
        accepted: Indices into candidates that survived NMS.
        fps: Rolling FPS after this frame.
        decision: Resize rule applied to the input.
    """
    frame: np.ndarray
    candidates: List[Candidate] = field(default_factory=list)
    accepted: List[int] = field(default_factory=list)
    fps: float = 0.0
    decision: ResizeDecision = ResizeDecision.NO_RESIZE

    @property
    def detections(self) -> List[Candidate]:
        """Accepted candidates, in acceptance order."""
        return [self.candidates[i] for i in self.accepted]


class FrameDetectionPipeline:
    """
    Detects and annotates objects in single frames.

    Example:
        pipeline = FrameDetectionPipeline(backend, class_names, DetectionConfig())
        result = pipeline.process(frame)
        sink.write(result.frame)
    """

    def __init__(
        self,
        backend: InferenceBackend,
        class_names: Sequence[str],
        config: Optional[DetectionConfig] = None,
        rate_estimator: Optional[RateEstimator] = None,
        renderer: Optional[Renderer] = None,
    ):
        self.backend = backend
        self.class_names = list(class_names)
        self.config = config or DetectionConfig()
        self.rate = rate_estimator or RateEstimator()
        self.renderer = renderer or Renderer()

        self.normalizer = FrameNormalizer(max_edge=self.config.max_edge)
        self.decoder = DetectionDecoder(conf_threshold=self.config.conf_threshold)
        self.suppressor = SuppressionStage(
            conf_threshold=self.config.conf_threshold,
            nms_threshold=self.config.nms_threshold,
        )
        self.state = PipelineState.IDLE

    def process(self, frame: Optional[np.ndarray]) -> FrameResult:
        """
        Run one frame through the pipeline.

        Raises:
            EmptyFrameError: If the frame is None or has no pixels.
        """
        self.state = PipelineState.IDLE
        if frame is None or frame.size == 0:
            raise EmptyFrameError("Cannot process an empty frame")

        self.state = PipelineState.NORMALIZING
        normalized = self.normalizer.normalize(frame)

        self.state = PipelineState.INFERRING
        raw_output = self.backend.infer(normalized.network_input)

        self.state = PipelineState.DECODING
        candidates = self.decoder.decode(
            raw_output,
            normalized.original_width,
            normalized.original_height,
            self.class_names,
        )
        boxes, confidences, labels = candidates_to_arrays(candidates)

        self.state = PipelineState.SUPPRESSING
        accepted = self.suppressor.process(boxes, confidences)

        self.state = PipelineState.RENDERING
        output = normalized.original
        self.renderer.render(output, boxes, accepted, labels)
        fps = self.rate.tick()
        self.renderer.draw_fps(output, fps)

        self.state = PipelineState.DONE
        logging.debug(
            f"Frame processed: candidates={len(candidates)}, accepted={len(accepted)}, fps={fps:.2f}"
        )
        return FrameResult(
            frame=output,
            candidates=candidates,
            accepted=accepted,
            fps=fps,
            decision=normalized.decision,
        )
