"""
Slopes Configuration
====================

This module handles configuration loading for the generator and service.

Configuration Sources (in order of precedence):
    1. Environment variables (highest priority)
    2. config.yaml file
    3. Default values (lowest priority)

Environment Variable Mapping:
    SLOPES_WIDTH            -> generation.width
    SLOPES_HEIGHT           -> generation.height
    SLOPES_SAMPLES_PER_ROW  -> generation.samples_per_row
    SLOPES_NUM_ROWS         -> generation.num_rows
    SLOPES_PERLIN_RATIO     -> generation.perlin_ratio
    SLOPES_NOISE_SEED       -> generation.noise_seed
    SLOPES_JITTER_SEED      -> generation.jitter_seed
    SLOPES_CONFIG           -> path of the YAML file to load
    SLOPES_PORT             -> server.port
    SLOPES_LOG_LEVEL        -> logging.level
    PORT                    -> server.port (Cloud Run)

Example:
    from slopes.config import settings

    print(settings.generation.samples_per_row)
    config = settings.generation.to_generation_config()
"""

import os
import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from slopes.errors import InvalidConfigurationError
from slopes.geometry.polylines import DEFAULT_GROUPING_TOLERANCE
from slopes.models.config import (
    DEFAULT_NUM_ROWS,
    DEFAULT_ROW_HEIGHT_RATIO,
    DEFAULT_SAMPLES_PER_ROW,
    GenerationConfig,
)
from slopes.noise.oracle import DEFAULT_NOISE_SEED


logger = logging.getLogger(__name__)


# =============================================================================
# Configuration Models
# =============================================================================

class ServiceConfig(BaseModel):
    """Service identification configuration."""

    name: str = Field(default="slopes-generator", description="Service name")
    version: str = Field(default="v0.1.0", description="Service version")


class GenerationSettings(BaseModel):
    """Default drawing parameters."""

    model_config = ConfigDict(allow_inf_nan=False)

    width: float = Field(default=552.0, gt=0, description="Page width")
    height: float = Field(default=736.0, gt=0, description="Page height")
    vertical_margin: float = Field(default=60.0, ge=0, description="Top/bottom margin")
    horizontal_margin: float = Field(default=50.0, ge=0, description="Left/right margin")
    distance_between_rows: float = Field(
        default=9.0,
        gt=0,
        description="Vertical distance between row baselines",
    )
    perlin_ratio: float = Field(
        default=0.8,
        ge=0,
        le=1.0,
        description="Noise vs. jitter mix (1.0 = pure noise)",
    )
    samples_per_row: int = Field(
        default=DEFAULT_SAMPLES_PER_ROW,
        ge=1,
        description="Horizontal resolution of every row",
    )
    num_rows: int = Field(default=DEFAULT_NUM_ROWS, ge=1, description="Number of rows")
    row_height_ratio: float = Field(
        default=DEFAULT_ROW_HEIGHT_RATIO,
        gt=0,
        description="Peak row amplitude as a fraction of page height",
    )
    noise_seed: int = Field(default=DEFAULT_NOISE_SEED, description="Noise seed")
    jitter_seed: Optional[int] = Field(
        default=None,
        description="Jitter seed (None = system entropy, non-reproducible)",
    )

    def to_generation_config(self) -> GenerationConfig:
        """
        Build the immutable per-run config.

        Raises:
            InvalidConfigurationError: If the combined values are not drawable
        """
        try:
            return GenerationConfig(
                width=self.width,
                height=self.height,
                margins=(self.vertical_margin, self.horizontal_margin),
                distance_between_rows=self.distance_between_rows,
                perlin_ratio=self.perlin_ratio,
                samples_per_row=self.samples_per_row,
                num_rows=self.num_rows,
                row_height_ratio=self.row_height_ratio,
            )
        except ValidationError as e:
            raise InvalidConfigurationError(f"Invalid generation config: {e}") from e


class PostProcessConfig(BaseModel):
    """Post-processing configuration."""

    grouping_tolerance: float = Field(
        default=DEFAULT_GROUPING_TOLERANCE,
        gt=0,
        description="Endpoint distance under which segments are chained",
    )


class ExportConfig(BaseModel):
    """SVG export configuration."""

    stroke_width: float = Field(default=1.0, gt=0, description="Stroke width")
    stroke_color: str = Field(default="black", description="Stroke colour")


class ServerConfig(BaseModel):
    """Server configuration."""

    host: str = Field(default="0.0.0.0", description="Bind host")
    port: int = Field(default=8001, ge=1, le=65535, description="Bind port")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="text", description="Log format: json or text")


class Settings(BaseModel):
    """
    Main settings class for the Slopes generator.

    Loads configuration from YAML file and environment variables.
    Environment variables take precedence over file values.
    """

    service: ServiceConfig = Field(default_factory=ServiceConfig)
    generation: GenerationSettings = Field(default_factory=GenerationSettings)
    postprocess: PostProcessConfig = Field(default_factory=PostProcessConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# =============================================================================
# Configuration Loading
# =============================================================================

def load_config(config_path: Optional[str] = None) -> Settings:
    """
    Load configuration from YAML file and environment variables.

    Priority (highest to lowest):
        1. Environment variables
        2. YAML config file
        3. Default values

    Args:
        config_path: Path to config.yaml. If None, searches common locations.

    Returns:
        Settings: Loaded configuration
    """
    # Find config file
    if config_path is None:
        config_path = os.environ.get("SLOPES_CONFIG")
    if config_path is None:
        search_paths = [
            Path("config.yaml"),
            Path("config.yml"),
            Path("/app/config.yaml"),
            Path(__file__).parent.parent.parent / "config.yaml",
        ]
        for path in search_paths:
            if path.exists():
                config_path = str(path)
                break

    # Load from YAML if exists
    config_data = {}
    if config_path and Path(config_path).exists():
        logger.info(f"Loading config from: {config_path}")
        with open(config_path, "r") as f:
            config_data = yaml.safe_load(f) or {}
    elif config_path:
        logger.warning(
            f"Config file not found: {config_path}, "
            f"using defaults and environment variables"
        )
    else:
        logger.warning("No config file found, using defaults and environment variables")

    # Apply environment variable overrides
    _apply_env_overrides(config_data)

    return Settings.model_validate(config_data)


def _apply_env_overrides(config_data: dict) -> None:
    """Apply environment variable overrides to config data."""

    # Generation settings
    generation = {}
    if env_width := os.environ.get("SLOPES_WIDTH"):
        generation["width"] = float(env_width)
    if env_height := os.environ.get("SLOPES_HEIGHT"):
        generation["height"] = float(env_height)
    if env_samples := os.environ.get("SLOPES_SAMPLES_PER_ROW"):
        generation["samples_per_row"] = int(env_samples)
    if env_rows := os.environ.get("SLOPES_NUM_ROWS"):
        generation["num_rows"] = int(env_rows)
    if env_ratio := os.environ.get("SLOPES_PERLIN_RATIO"):
        generation["perlin_ratio"] = float(env_ratio)
    if env_noise_seed := os.environ.get("SLOPES_NOISE_SEED"):
        generation["noise_seed"] = int(env_noise_seed)
    if env_jitter_seed := os.environ.get("SLOPES_JITTER_SEED"):
        generation["jitter_seed"] = int(env_jitter_seed)
    if generation:
        config_data.setdefault("generation", {}).update(generation)

    # Server settings (Cloud Run uses PORT env var)
    if env_port := os.environ.get("PORT"):
        config_data.setdefault("server", {})["port"] = int(env_port)
    elif env_port := os.environ.get("SLOPES_PORT"):
        config_data.setdefault("server", {})["port"] = int(env_port)

    # Logging settings
    if env_log := os.environ.get("SLOPES_LOG_LEVEL"):
        config_data.setdefault("logging", {})["level"] = env_log


def setup_logging(settings: Settings) -> None:
    """Configure logging based on settings."""
    log_level = getattr(logging, settings.logging.level.upper(), logging.INFO)

    if settings.logging.format == "json":
        log_format = '{"time": "%(asctime)s", "level": "%(levelname)s", "module": "%(name)s", "message": "%(message)s"}'
    else:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
    )


# =============================================================================
# Global Settings Instance
# =============================================================================

# Global settings instance - loaded on import. Logging is configured by the
# entry points (cli, main).
settings = load_config()
