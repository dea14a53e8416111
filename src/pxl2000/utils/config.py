"""Configuration management for the PXL-2000 effect."""

import logging
from pathlib import Path
from typing import Optional, Dict, Any, List, Union

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator


logger = logging.getLogger(__name__)


# Separable 3x3 Gaussian, weights sum to 1
DEFAULT_BLUR_KERNEL = [
    0.0947416, 0.118317, 0.0947416,
    0.1183180, 0.147761, 0.1183180,
    0.0947416, 0.118317, 0.0947416,
]


class FilterConfig(BaseModel):
    """Tuning constants of the PXL-2000 effect."""
    border_size: float = 0.125  # Fraction of the width painted as border
    border_color: int = 0xFF000000  # Opaque black
    blur_kernel: List[float] = Field(
        default_factory=lambda: list(DEFAULT_BLUR_KERNEL)
    )
    sharpen_amount: float = 0.7  # Unsharp mask strength
    posterize_levels: float = 90.0  # Levels of luma depth
    dynamic_range_compression: float = 1.2
    light_floor: float = 12.75  # 5% light level
    light_ceiling: float = 242.25  # 95% light level
    palette_levels: int = 7  # Grey levels of the display palette

    @field_validator("border_size")
    @classmethod
    def validate_border_size(cls, v: float) -> float:
        if not 0.0 <= v < 0.5:
            raise ValueError(f"border_size must be in [0, 0.5), got {v}")
        return v

    @field_validator("border_color")
    @classmethod
    def validate_border_color(cls, v: int) -> int:
        if not 0 <= v <= 0xFFFFFFFF:
            raise ValueError(f"border_color must be a packed 32-bit color, got {v:#x}")
        return v

    @field_validator("blur_kernel")
    @classmethod
    def validate_blur_kernel(cls, v: List[float]) -> List[float]:
        if len(v) != 9:
            raise ValueError(f"blur_kernel needs 9 weights, got {len(v)}")
        if abs(sum(v) - 1.0) > 1e-3:
            raise ValueError(f"blur_kernel weights must sum to 1, got {sum(v):.6f}")
        return v

    @field_validator("posterize_levels")
    @classmethod
    def validate_posterize_levels(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"posterize_levels must be positive, got {v}")
        return v

    @field_validator("palette_levels")
    @classmethod
    def validate_palette_levels(cls, v: int) -> int:
        if v < 2:
            raise ValueError(f"palette_levels must be at least 2, got {v}")
        return v

    @model_validator(mode="after")
    def validate_light_levels(self) -> "FilterConfig":
        if not 0.0 <= self.light_floor < self.light_ceiling <= 255.0:
            raise ValueError(
                f"Light levels must satisfy 0 <= floor < ceiling <= 255, "
                f"got {self.light_floor} / {self.light_ceiling}"
            )
        return self


class SchedulerConfig(BaseModel):
    """Configuration for the row scheduler."""
    max_workers: Optional[int] = None  # None = one per CPU, 1 = serial
    min_rows_per_chunk: int = 8

    @field_validator("max_workers")
    @classmethod
    def validate_max_workers(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 1:
            raise ValueError(f"max_workers must be at least 1, got {v}")
        return v


class SourceConfig(BaseModel):
    """Configuration for the frame source feeding the filter."""
    kind: str = "webcam"  # webcam or file
    device: Union[int, str] = 0
    path: Optional[str] = None
    fps: float = 30.0
    width: Optional[int] = None
    height: Optional[int] = None
    frame_skip: int = 1
    max_frames: Optional[int] = None
    loop: bool = False

    @field_validator("kind")
    @classmethod
    def validate_kind(cls, v: str) -> str:
        if v not in ("webcam", "file"):
            raise ValueError(f"Unknown source kind: {v}")
        return v


class LoggingConfig(BaseModel):
    """Configuration for logging."""
    level: str = "INFO"
    log_to_file: bool = False
    log_directory: str = "logs"
    max_log_size_mb: int = 10
    backup_count: int = 3


class Pxl2000Config(BaseModel):
    """Root configuration."""

    # System settings
    project_name: str = "PXL-2000"
    version: str = "0.1.0"
    debug_mode: bool = False

    # Sub-configurations
    filter: FilterConfig = Field(default_factory=FilterConfig)
    scheduler: SchedulerConfig = Field(default_factory=SchedulerConfig)
    source: SourceConfig = Field(default_factory=SourceConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def setup_logging(self) -> None:
        """Configure logging based on config."""
        level_name = "DEBUG" if self.debug_mode else self.logging.level.upper()
        log_level = getattr(logging, level_name)

        handlers = []

        # Console handler
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level)
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

        # File handler
        if self.logging.log_to_file:
            log_dir = Path(self.logging.log_directory)
            log_dir.mkdir(exist_ok=True, parents=True)

            from logging.handlers import RotatingFileHandler
            file_handler = RotatingFileHandler(
                log_dir / "pxl2000.log",
                maxBytes=self.logging.max_log_size_mb * 1024 * 1024,
                backupCount=self.logging.backup_count
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            handlers.append(file_handler)

        logging.basicConfig(
            level=log_level,
            handlers=handlers,
            force=True
        )

        logger.info("Logging configured: level=%s", level_name)


def load_config(
    config_path: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None
) -> Pxl2000Config:
    """Load configuration from YAML file with optional overrides.

    Args:
        config_path: Path to YAML config file. If None, uses default.yaml
        overrides: Dictionary of config overrides (nested keys with dots)

    Returns:
        Validated Pxl2000Config instance

    Example:
        >>> config = load_config("config/default.yaml")
        >>> config = load_config(overrides={"filter.sharpen_amount": 0.5})
    """
    if config_path is None:
        repo_root = Path(__file__).parent.parent.parent.parent
        config_path = repo_root / "config" / "default.yaml"
    else:
        config_path = Path(config_path)

    config_dict = {}
    if config_path.exists():
        logger.info("Loading config from %s", config_path)
        with open(config_path) as f:
            config_dict = yaml.safe_load(f) or {}
    else:
        logger.warning("Config file not found: %s, using defaults", config_path)

    if overrides:
        config_dict = _apply_overrides(config_dict, overrides)

    config = Pxl2000Config(**config_dict)
    config.setup_logging()

    return config


def _apply_overrides(
    config_dict: Dict[str, Any],
    overrides: Dict[str, Any]
) -> Dict[str, Any]:
    """Apply nested overrides to config dictionary.

    Example:
        overrides = {"scheduler.max_workers": 1}
        -> config_dict["scheduler"]["max_workers"] = 1
    """
    for key, value in overrides.items():
        keys = key.split(".")
        d = config_dict
        for k in keys[:-1]:
            d = d.setdefault(k, {})
        d[keys[-1]] = value
    return config_dict
