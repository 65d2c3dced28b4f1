"""Configuration Management for capacity-ratio

Scoring settings are loaded once at scheduler startup with Pydantic settings
and are immutable afterwards. build_priority() is the composition root that
turns a configuration into a ready-to-use scoring entry point; there is no
process-wide configuration or curve instance.
"""

import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

if TYPE_CHECKING:
    from .priorities import RequestedToCapacityRatioPriority
    from .shape import Domain, Shape

VALID_DOMAINS = ("normalized", "integer")


class ScoringSettings(BaseSettings):
    """Immutable scoring configuration, read from CAPACITY_RATIO_* variables."""

    max_priority: int = Field(default=10, description="Highest score a node can receive")
    scoring_function_shape: Optional[str] = Field(
        default=None,
        description="Shape descriptor 'x1=y1,x2=y2,...'; unset selects the default curve",
    )
    shape_domain: str = Field(
        default="normalized", description="Domain the descriptor is written in"
    )

    @field_validator("max_priority")
    @classmethod
    def validate_max_priority(cls, v):
        if v < 1 or v > 100:
            raise ValueError("max_priority must be between 1 and 100")
        return v

    @field_validator("shape_domain")
    @classmethod
    def validate_shape_domain(cls, v):
        if v not in VALID_DOMAINS:
            raise ValueError(f"shape_domain must be one of {list(VALID_DOMAINS)}")
        return v

    model_config = {"env_prefix": "CAPACITY_RATIO_", "frozen": True}


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    log_level: str = "INFO"
    log_format: str = "console"

    def __post_init__(self):
        """Validate logging configuration."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.log_level not in valid_levels:
            raise ValueError(f"Invalid log level: {self.log_level}")

        valid_formats = ["console", "json"]
        if self.log_format not in valid_formats:
            raise ValueError(f"Invalid log format: {self.log_format}")


@dataclass
class CapacityRatioConfig:
    """Main configuration class for capacity-ratio."""

    scoring: ScoringSettings = field(default_factory=ScoringSettings)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "CapacityRatioConfig":
        """Load configuration from environment variables (and an optional .env file)."""
        if env_file:
            scoring = ScoringSettings(_env_file=env_file)
        else:
            scoring = ScoringSettings()

        logging = LoggingConfig(
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_format=os.getenv("LOG_FORMAT", "console").lower(),
        )

        return cls(scoring=scoring, logging=logging)

    def domain(self) -> "Domain":
        """Domain the configured descriptor is interpreted in."""
        from .shape import Domain

        if self.scoring.shape_domain == "integer":
            return Domain.integer(self.scoring.max_priority)
        return Domain.normalized()

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "scoring": {
                "max_priority": self.scoring.max_priority,
                "scoring_function_shape": self.scoring.scoring_function_shape,
                "shape_domain": self.scoring.shape_domain,
            },
            "logging": {
                "log_level": self.logging.log_level,
                "log_format": self.logging.log_format,
            },
        }

    def __str__(self) -> str:
        shape = self.scoring.scoring_function_shape or "default"
        return f"CapacityRatioConfig(shape={shape}, max_priority={self.scoring.max_priority})"


def build_shape(config: CapacityRatioConfig) -> "Shape":
    """Build the scoring curve for a configuration.

    Raises:
        ShapeParseError: If the configured descriptor is malformed or invalid.
            This is a startup failure, not something to recover from.
    """
    from .parser import parse_shape
    from .shape import default_shape

    descriptor = config.scoring.scoring_function_shape
    if descriptor is None:
        return default_shape(config.scoring.max_priority)
    return parse_shape(descriptor, config.domain())


def build_priority(config: Optional[CapacityRatioConfig] = None) -> "RequestedToCapacityRatioPriority":
    """Composition root: configuration in, immutable scoring entry point out."""
    from .priorities import RequestedToCapacityRatioPriority

    if config is None:
        config = CapacityRatioConfig.from_env()

    return RequestedToCapacityRatioPriority(
        build_shape(config), max_priority=config.scoring.max_priority
    )
