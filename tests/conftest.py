"""
Pytest configuration and shared fixtures.
"""

import os
import sys

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))


@pytest.fixture
def class_names():
    return ["background", "person", "bicycle", "car", "dog"]


@pytest.fixture
def temp_config_dir(tmp_path):
    """Create a temporary config directory with default.yaml."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()

    default_yaml = config_dir / "default.yaml"
    default_yaml.write_text("""
model:
  architecture_path: "models/graph.pbtxt"
  weights_path: "models/graph.pb"
  classes_path: "models/classes.txt"
  use_gpu: false

detection:
  conf_threshold: 0.5
  nms_threshold: 0.4
  max_edge: 600

io:
  input_dir: "input"
  output_dir: "output"

log_path: "logs/test.log"
log_level: "INFO"
""")

    return config_dir


@pytest.fixture
def valid_config():
    """Return a valid configuration dictionary."""
    return {
        "model": {
            "architecture_path": "models/graph.pbtxt",
            "weights_path": "models/graph.pb",
            "classes_path": "models/classes.txt",
            "use_gpu": False,
        },
        "detection": {
            "conf_threshold": 0.5,
            "nms_threshold": 0.4,
            "max_edge": 600,
        },
        "io": {
            "input_dir": "input",
            "output_dir": "output",
            "video_fps": 25,
            "fourcc": "mp4v",
        },
        "log_path": "logs/test.log",
        "log_level": "INFO",
    }
