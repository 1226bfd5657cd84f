"""
Smoke tests for configuration loading and validation.
"""

import pytest

from main import load_config, validate_config
from models.config import Config, DetectionConfig, IOConfig, ModelConfig


class TestValidateConfig:
    """Tests for validate_config function."""

    def test_valid_config_passes(self, valid_config):
        """A complete valid config passes validation."""
        is_valid, error = validate_config(valid_config)

        assert is_valid is True
        assert error is None

    @pytest.mark.parametrize("section", ["model", "detection", "io", "log_path", "log_level"])
    def test_missing_section(self, valid_config, section):
        """Each required section is reported when missing."""
        del valid_config[section]

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert section in error

    def test_missing_weights_path(self, valid_config):
        del valid_config["model"]["weights_path"]

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "weights_path" in error

    def test_use_gpu_must_be_bool(self, valid_config):
        valid_config["model"]["use_gpu"] = "yes"

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "use_gpu" in error

    def test_conf_threshold_out_of_range(self, valid_config):
        valid_config["detection"]["conf_threshold"] = 1.5

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "conf_threshold" in error

    def test_nms_threshold_must_be_number(self, valid_config):
        valid_config["detection"]["nms_threshold"] = "high"

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "nms_threshold" in error

    def test_max_edge_positive(self, valid_config):
        valid_config["detection"]["max_edge"] = 0

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "max_edge" in error

    def test_fourcc_length(self, valid_config):
        valid_config["io"]["fourcc"] = "mp4"

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "fourcc" in error

    def test_invalid_log_level(self, valid_config):
        valid_config["log_level"] = "VERBOSE"

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "log_level" in error


class TestLoadConfig:
    """Tests for layered config loading."""

    def test_loads_default(self, temp_config_dir):
        config = load_config(str(temp_config_dir / "config.yaml"))

        assert config["detection"]["conf_threshold"] == 0.5
        assert config["io"]["output_dir"] == "output"

    def test_local_overrides_merge(self, temp_config_dir):
        (temp_config_dir / "config.yaml").write_text("""
detection:
  conf_threshold: 0.3
model:
  use_gpu: true
""")
        config = load_config(str(temp_config_dir / "config.yaml"))

        assert config["detection"]["conf_threshold"] == 0.3
        # Untouched keys survive the merge
        assert config["detection"]["nms_threshold"] == 0.4
        assert config["model"]["use_gpu"] is True
        assert config["model"]["weights_path"] == "models/graph.pb"

    def test_explicit_path_applied_last(self, temp_config_dir):
        (temp_config_dir / "config.yaml").write_text("log_level: DEBUG\n")
        explicit = temp_config_dir / "bench.yaml"
        explicit.write_text("log_level: WARNING\nio:\n  output_dir: bench\n")

        config = load_config(str(explicit))

        assert config["log_level"] == "WARNING"
        assert config["io"]["output_dir"] == "bench"
        assert config["io"]["input_dir"] == "input"

    def test_default_config_is_valid(self, temp_config_dir):
        config = load_config(str(temp_config_dir / "config.yaml"))

        is_valid, error = validate_config(config)

        assert is_valid is True, error


class TestTypedConfig:
    def test_from_dict(self, valid_config):
        cfg = Config.from_dict(valid_config)

        assert cfg.model.weights_path == "models/graph.pb"
        assert cfg.detection.conf_threshold == 0.5
        assert cfg.io.video_fps == 25
        assert cfg.display.enabled is False

    def test_defaults(self):
        cfg = Config.from_dict({})

        assert cfg.detection == DetectionConfig()
        assert cfg.detection.max_edge == 600
        assert cfg.io == IOConfig()
        assert cfg.model == ModelConfig()

    def test_roundtrip(self, valid_config):
        cfg = Config.from_dict(valid_config)

        assert Config.from_dict(cfg.to_dict()) == cfg
