"""
Typed configuration models matching the YAML config structure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class ModelConfig:
    """Network and class-label file locations."""
    architecture_path: str = "models/ssd_mobilenet_v3/frozen_inference_graph.pbtxt"
    weights_path: str = "models/ssd_mobilenet_v3/frozen_inference_graph.pb"
    classes_path: str = "models/ssd_mobilenet_v3/classes.txt"
    use_gpu: bool = False

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ModelConfig":
        """Adapter: Create from config dictionary."""
        defaults = cls()
        return cls(
            architecture_path=d.get("architecture_path", defaults.architecture_path),
            weights_path=d.get("weights_path", defaults.weights_path),
            classes_path=d.get("classes_path", defaults.classes_path),
            use_gpu=d.get("use_gpu", False),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "architecture_path": self.architecture_path,
            "weights_path": self.weights_path,
            "classes_path": self.classes_path,
            "use_gpu": self.use_gpu,
        }


@dataclass
class DetectionConfig:
    """Per-frame detection thresholds and the normalization edge cap."""
    conf_threshold: float = 0.5
    nms_threshold: float = 0.4
    max_edge: int = 600

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "DetectionConfig":
        return cls(
            conf_threshold=d.get("conf_threshold", 0.5),
            nms_threshold=d.get("nms_threshold", 0.4),
            max_edge=d.get("max_edge", 600),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "conf_threshold": self.conf_threshold,
            "nms_threshold": self.nms_threshold,
            "max_edge": self.max_edge,
        }


@dataclass
class IOConfig:
    """Input/output directories and video writer settings."""
    input_dir: str = "input"
    output_dir: str = "output"
    video_fps: float = 25.0
    fourcc: str = "mp4v"

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "IOConfig":
        return cls(
            input_dir=d.get("input_dir", "input"),
            output_dir=d.get("output_dir", "output"),
            video_fps=d.get("video_fps", 25.0),
            fourcc=d.get("fourcc", "mp4v"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "input_dir": self.input_dir,
            "output_dir": self.output_dir,
            "video_fps": self.video_fps,
            "fourcc": self.fourcc,
        }


@dataclass
class DisplayConfig:
    """Preview window settings."""
    enabled: bool = False
    window_name: str = "Result Window"

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "DisplayConfig":
        return cls(
            enabled=d.get("enabled", False),
            window_name=d.get("window_name", "Result Window"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "enabled": self.enabled,
            "window_name": self.window_name,
        }


@dataclass
class Config:
    """
    Complete application configuration.

    This is a typed representation of the YAML config structure.
    """
    model: ModelConfig = field(default_factory=ModelConfig)
    detection: DetectionConfig = field(default_factory=DetectionConfig)
    io: IOConfig = field(default_factory=IOConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    log_path: str = "logs/object_detector.log"
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Config":
        """Adapter: Create Config from raw dictionary (e.g., from load_config)."""
        return cls(
            model=ModelConfig.from_dict(d.get("model", {}) or {}),
            detection=DetectionConfig.from_dict(d.get("detection", {}) or {}),
            io=IOConfig.from_dict(d.get("io", {}) or {}),
            display=DisplayConfig.from_dict(d.get("display", {}) or {}),
            log_path=d.get("log_path", "logs/object_detector.log"),
            log_level=d.get("log_level", "INFO"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to dictionary."""
        return {
            "model": self.model.to_dict(),
            "detection": self.detection.to_dict(),
            "io": self.io.to_dict(),
            "display": self.display.to_dict(),
            "log_path": self.log_path,
            "log_level": self.log_level,
        }
