"""Tests for configuration system."""

import os
import tempfile
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from pxl2000.utils.config import (
    Pxl2000Config, FilterConfig, SchedulerConfig, SourceConfig,
    DEFAULT_BLUR_KERNEL, load_config, _apply_overrides
)


def test_default_config():
    """Test loading default configuration."""
    config = Pxl2000Config()

    assert config.project_name == "PXL-2000"
    assert config.debug_mode is False
    assert config.filter.border_size == 0.125
    assert config.filter.border_color == 0xFF000000
    assert config.filter.sharpen_amount == 0.7
    assert config.filter.posterize_levels == 90
    assert config.filter.dynamic_range_compression == 1.2
    assert config.filter.palette_levels == 7
    assert config.filter.blur_kernel == DEFAULT_BLUR_KERNEL
    assert config.scheduler.max_workers is None


def test_config_from_dict():
    """Test creating config from dictionary."""
    config = Pxl2000Config(**{
        "debug_mode": True,
        "filter": {"sharpen_amount": 0.3},
        "scheduler": {"max_workers": 2},
    })

    assert config.debug_mode is True
    assert config.filter.sharpen_amount == 0.3
    assert config.scheduler.max_workers == 2


def test_load_config_from_yaml():
    """Test loading config from YAML file."""
    with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
        yaml.dump({
            "project_name": "YAML Test",
            "filter": {"posterize_levels": 32},
        }, f)
        temp_path = f.name

    try:
        config = load_config(temp_path)
        assert config.project_name == "YAML Test"
        assert config.filter.posterize_levels == 32
    finally:
        os.unlink(temp_path)


def test_missing_config_file_uses_defaults(tmp_path):
    config = load_config(str(tmp_path / "nope.yaml"))
    assert config == Pxl2000Config()


def test_config_overrides():
    """Test applying overrides to config."""
    config_dict = {"scheduler": {"max_workers": 4}}

    result = _apply_overrides(config_dict, {
        "scheduler.max_workers": 1,
        "source.kind": "file",
        "debug_mode": True,
    })

    assert result["scheduler"]["max_workers"] == 1
    assert result["source"]["kind"] == "file"
    assert result["debug_mode"] is True


def test_default_yaml_matches_defaults():
    """The shipped default.yaml describes the built-in constants."""
    repo_root = Path(__file__).parent.parent.parent
    default_path = repo_root / "config" / "default.yaml"

    if not default_path.exists():
        pytest.skip("default.yaml not found")

    config = load_config(str(default_path), overrides={"scheduler.max_workers": 1})
    assert config.filter == FilterConfig()
    assert config.scheduler.max_workers == 1
    assert config.source.kind == "webcam"


class TestValidation:
    def test_kernel_needs_nine_weights(self):
        with pytest.raises(ValidationError):
            FilterConfig(blur_kernel=[0.5, 0.5])

    def test_kernel_must_sum_to_one(self):
        with pytest.raises(ValidationError):
            FilterConfig(blur_kernel=[0.2] * 9)

    @pytest.mark.parametrize("size", [-0.1, 0.5, 0.9])
    def test_border_size_range(self, size):
        with pytest.raises(ValidationError):
            FilterConfig(border_size=size)

    def test_light_levels_ordered(self):
        with pytest.raises(ValidationError):
            FilterConfig(light_floor=200.0, light_ceiling=100.0)

    def test_posterize_levels_positive(self):
        with pytest.raises(ValidationError):
            FilterConfig(posterize_levels=0)

    def test_palette_levels(self):
        with pytest.raises(ValidationError):
            FilterConfig(palette_levels=1)

    def test_border_color_range(self):
        with pytest.raises(ValidationError):
            FilterConfig(border_color=0x1FFFFFFFF)

    def test_max_workers_positive(self):
        with pytest.raises(ValidationError):
            SchedulerConfig(max_workers=0)

    def test_unknown_source_kind(self):
        with pytest.raises(ValidationError):
            SourceConfig(kind="screen")
