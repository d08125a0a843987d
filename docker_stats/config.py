"""
Configuration for docker-stats
"""
import os
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def _optional_float(name: str) -> Optional[float]:
    value = os.getenv(name)
    return float(value) if value else None


class StatsConfig(BaseModel):
    """Runtime settings, defaulting from DOCKER_STATS_* environment variables"""

    model_config = ConfigDict(validate_default=True)

    # Docker daemon; None lets the SDK read DOCKER_HOST
    docker_host: Optional[str] = Field(
        default_factory=lambda: os.getenv('DOCKER_STATS_DOCKER_HOST') or None
    )
    timeout: Optional[float] = Field(
        default_factory=lambda: _optional_float('DOCKER_STATS_TIMEOUT')
    )

    # Prometheus endpoint, 0 = disabled
    metrics_port: int = Field(
        default_factory=lambda: int(os.getenv('DOCKER_STATS_METRICS_PORT', '0')),
        ge=0,
        le=65535
    )

    log_level: str = Field(
        default_factory=lambda: os.getenv('DOCKER_STATS_LOG_LEVEL', 'WARNING')
    )

    @field_validator('log_level')
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return value

    @field_validator('timeout')
    @classmethod
    def _check_timeout(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and value <= 0:
            raise ValueError("timeout must be positive")
        return value


def load_config(**overrides) -> StatsConfig:
    """
    Load configuration from the environment and a .env file in the working directory.

    Args:
        **overrides: Values that take precedence over the environment;
            None values are ignored.

    Returns:
        Validated StatsConfig.
    """
    load_dotenv(find_dotenv(usecwd=True))
    return StatsConfig(**{k: v for k, v in overrides.items() if v is not None})
