"""
Object detector: annotate an image or video with SSD MobileNet detections.

Loads the network and class list, runs every frame of the input through the
detection pipeline and writes the annotated result to the output directory.

Usage:
    python src/main.py --input Office.mp4 --display
    python src/main.py --input street.jpg --gpu
    python src/main.py --input Office.mp4 --compare-backends

Arguments:
    --config: Path to configuration file
    --input: File name inside io.input_dir
    --type: image or video (default: from the file extension)
    --gpu / --cpu: Select the inference backend
    --display: Show annotated frames while processing
    --compare-backends: Run on CPU then GPU and report both timings
"""

import argparse
import logging
import os
import sys
import time
from typing import Any, Dict, List, Optional, Tuple

import yaml

from inference.labels import load_class_names
from inference.opencv_backend import DnnConfig, OpenCvDnnBackend
from models.config import Config
from models.errors import EmptyFrameError, LabelResourceError, ModelLoadError
from ops.logging import setup_console_logging, setup_logging
from pipeline.engine import EngineStats, SourceType, create_engine_for_file
from pipeline.frame_pipeline import FrameDetectionPipeline

# Frame rate assumed for the throughput estimate reported after each run.
ASSUMED_VIDEO_FPS = 25


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into base and return base."""
    for k, v in (override or {}).items():
        if isinstance(v, dict) and isinstance(base.get(k), dict):
            _deep_merge(base[k], v)
        else:
            base[k] = v
    return base


def _read_yaml(path: str) -> Dict[str, Any]:
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


def load_config(config_path: str) -> Dict[str, Any]:
    """
    Load configuration with layering:
    - `config/default.yaml` (checked in)
    - `config/config.yaml` (local overrides)
    - plus any explicitly provided `--config` path (treated as overrides)

    Raises:
        OSError, yaml.YAMLError: If a present file cannot be read or parsed.
    """
    config_dir = os.path.dirname(config_path)
    base_path = os.path.join(config_dir, "default.yaml")
    local_overrides_path = os.path.join(config_dir, "config.yaml")

    merged: Dict[str, Any] = {}
    if os.path.exists(base_path):
        merged = _read_yaml(base_path)
    if os.path.exists(local_overrides_path):
        merged = _deep_merge(merged, _read_yaml(local_overrides_path))

    # Finally apply explicit config_path if it's not one of the files above
    explicit = os.path.abspath(config_path)
    if os.path.exists(config_path) and explicit not in (
        os.path.abspath(base_path),
        os.path.abspath(local_overrides_path),
    ):
        merged = _deep_merge(merged, _read_yaml(config_path))

    return merged


def validate_config(config: Dict[str, Any]) -> Tuple[bool, Optional[str]]:
    """
    Validate configuration structure and values.

    Returns:
        Tuple of (is_valid, error_message)
    """
    required_sections = ["model", "detection", "io", "log_path", "log_level"]
    for section in required_sections:
        if section not in config:
            return False, f"Missing required configuration section: {section}"

    model = config.get("model") or {}
    for key in ("architecture_path", "weights_path", "classes_path"):
        if not isinstance(model.get(key), str) or not model.get(key):
            return False, f"model.{key} must be a non-empty string"
    if "use_gpu" in model and not isinstance(model["use_gpu"], bool):
        return False, "model.use_gpu must be true or false"

    detection = config.get("detection") or {}
    for key in ("conf_threshold", "nms_threshold"):
        if key in detection:
            value = detection[key]
            if not isinstance(value, (int, float)) or not (0 <= value <= 1):
                return False, f"detection.{key} must be between 0 and 1"
    if "max_edge" in detection:
        if not isinstance(detection["max_edge"], int) or detection["max_edge"] <= 0:
            return False, "detection.max_edge must be a positive integer"

    io = config.get("io") or {}
    for key in ("input_dir", "output_dir"):
        if key in io and not isinstance(io[key], str):
            return False, f"io.{key} must be a string"
    if "video_fps" in io:
        if not isinstance(io["video_fps"], (int, float)) or io["video_fps"] <= 0:
            return False, "io.video_fps must be a positive number"
    if "fourcc" in io:
        if not isinstance(io["fourcc"], str) or len(io["fourcc"]) != 4:
            return False, "io.fourcc must be a 4-character code"

    valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    if config["log_level"] not in valid_log_levels:
        return False, f"log_level must be one of: {', '.join(valid_log_levels)}"

    return True, None


def run_detection(
    cfg: Config,
    backend: OpenCvDnnBackend,
    class_names: List[str],
    file_name: str,
    source_type: Optional[SourceType],
) -> EngineStats:
    """Process one input file with the given backend and return run statistics."""
    pipeline = FrameDetectionPipeline(backend, class_names, cfg.detection)
    engine = create_engine_for_file(file_name, source_type, pipeline, cfg.io, cfg.display)
    return engine.run()


def report(label: str, elapsed: float, stats: EngineStats) -> None:
    logging.info(f"[{label}] Time: {elapsed:.3f} seconds")
    if elapsed > 0:
        logging.info(f"[{label}] Estimated FPS: {(1.0 / elapsed) * ASSUMED_VIDEO_FPS:.2f}")
    logging.info(
        f"[{label}] Frames: {stats.frame_count}, processing FPS: {stats.processing_fps:.2f}"
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main application function. Returns the process exit code."""
    parser = argparse.ArgumentParser(description="Object Detector - SSD MobileNet V3")
    parser.add_argument("--config", type=str, default="config/config.yaml",
                        help="Path to configuration file")
    parser.add_argument("--input", type=str, required=True,
                        help="File name inside io.input_dir")
    parser.add_argument("--type", type=str, choices=[t.value for t in SourceType], default=None,
                        help="Input type (default: from the file extension)")
    backend_group = parser.add_mutually_exclusive_group()
    backend_group.add_argument("--gpu", dest="use_gpu", action="store_true", default=None,
                               help="Run inference on CUDA")
    backend_group.add_argument("--cpu", dest="use_gpu", action="store_false", default=None,
                               help="Run inference on the CPU")
    parser.add_argument("--display", action="store_true",
                        help="Show annotated frames while processing")
    parser.add_argument("--compare-backends", action="store_true",
                        help="Run on CPU, then GPU, and report both timings")
    args = parser.parse_args(argv)

    setup_console_logging()

    try:
        raw_config = load_config(args.config)
    except (OSError, yaml.YAMLError) as e:
        logging.error(f"Failed to load configuration: {e}")
        return 1

    is_valid, error_msg = validate_config(raw_config)
    if not is_valid:
        logging.error(f"Configuration validation failed: {error_msg}")
        return 1

    cfg = Config.from_dict(raw_config)
    if args.display:
        cfg.display.enabled = True
    if args.use_gpu is not None:
        cfg.model.use_gpu = args.use_gpu

    setup_logging(cfg.log_path, cfg.log_level)
    logging.info("Starting Object Detector")

    try:
        backend = OpenCvDnnBackend.from_config(
            DnnConfig(
                architecture_path=cfg.model.architecture_path,
                weights_path=cfg.model.weights_path,
                use_gpu=cfg.model.use_gpu,
            )
        )
        class_names = load_class_names(cfg.model.classes_path)
    except ModelLoadError as e:
        logging.error(f"Error loading network: {e}")
        return 1
    except LabelResourceError as e:
        logging.error(f"Error loading class names: {e}")
        return 1

    source_type = SourceType(args.type) if args.type else None
    runs = [False, True] if args.compare_backends else [cfg.model.use_gpu]

    for use_gpu in runs:
        label = "GPU" if use_gpu else "CPU"
        backend.configure_backend(use_gpu)
        started = time.perf_counter()
        try:
            stats = run_detection(cfg, backend, class_names, args.input, source_type)
        except EmptyFrameError as e:
            logging.error(f"[{label}] {e}")
            return 1
        except RuntimeError as e:
            logging.error(f"[{label}] Could not process {args.input}: {e}")
            return 1
        report(label, time.perf_counter() - started, stats)

    return 0


if __name__ == "__main__":
    sys.exit(main())
