"""
Configuration management with environment variable support and validation.

Design principles:
- Environment-specific configs (dev, staging, prod)
- Validation at startup (fail fast)
- Type safety with Pydantic
- Logging set up once from config, not at import time
"""

import logging
import os
from datetime import datetime
from functools import lru_cache
from typing import Any, Literal, cast

import structlog
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator, model_validator

# Load environment variables from .env file
load_dotenv()

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class SubjectConfig(BaseModel):
    """The infant being monitored."""

    name: str = Field(default="Baby", description="Display name")
    birth_date: datetime = Field(
        default_factory=datetime.now, description="Birth timestamp used to pick the age bracket"
    )

    @field_validator("name")
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("subject name must not be blank")
        return v.strip()


class SimulationConfig(BaseModel):
    """Demo driver that stands in for the sensor transport."""

    tick_interval_seconds: float = Field(
        default=1.0, gt=0.0, description="Interval between heartbeat ticks"
    )


class BaselineConfig(BaseModel):
    """Where reference ranges come from."""

    table_path: str | None = Field(
        default=None, description="JSON baseline table; built-in prototype ranges when unset"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(default="INFO", description="Logging level")
    format: Literal["json", "console"] = Field(default="json", description="Logging format")


class AppConfig(BaseModel):
    """Main application configuration combining all subsystems."""

    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Environment"
    )
    debug: bool = Field(default=False, description="Enable debug mode")

    subject: SubjectConfig
    simulation: SimulationConfig
    baselines: BaselineConfig
    logging: LoggingConfig

    @model_validator(mode="after")
    def debug_only_in_dev(self) -> "AppConfig":
        """Ensure debug mode is only allowed in development environment."""
        if self.debug and self.environment != "development":
            raise ValueError("debug mode is only allowed in development environment")
        return self


def load_config_from_env() -> AppConfig:
    """Load configuration from environment variables with validation."""

    def _env_to_literal(val: str) -> Literal["development", "staging", "production"]:
        v = val.strip().lower()
        if v in {"dev", "development"}:
            return "development"
        if v in {"stage", "staging"}:
            return "staging"
        return "production"

    def _level_to_literal(val: str) -> LogLevel:
        v = val.strip().upper()
        return cast(
            LogLevel, v if v in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} else "INFO"
        )

    environment = _env_to_literal(os.getenv("ENVIRONMENT", "development"))
    debug = environment == "development"

    subject_fields: dict[str, Any] = {"name": os.getenv("SUBJECT_NAME", "Baby")}
    birth_date = os.getenv("SUBJECT_BIRTH_DATE")
    if birth_date:
        subject_fields["birth_date"] = birth_date

    simulation_config = SimulationConfig(
        tick_interval_seconds=float(os.getenv("SIMULATION_TICK_SECONDS", "1.0")),
    )

    baseline_config = BaselineConfig(table_path=os.getenv("BASELINE_TABLE_PATH") or None)

    logging_config = LoggingConfig(
        level=_level_to_literal(os.getenv("LOG_LEVEL", "INFO")),
        format="console" if debug else "json",
    )

    return AppConfig(
        environment=environment,
        debug=debug,
        subject=SubjectConfig(**subject_fields),
        simulation=simulation_config,
        baselines=baseline_config,
        logging=logging_config,
    )


@lru_cache
def get_config() -> AppConfig:
    """Get cached application configuration."""
    return load_config_from_env()


def configure_logging(config: LoggingConfig) -> None:
    """Install the structlog processor chain for the configured format and level."""
    logging.basicConfig(format="%(message)s", level=getattr(logging, config.level))
    logging.getLogger().setLevel(getattr(logging, config.level))

    renderer: Any = (
        structlog.dev.ConsoleRenderer()
        if config.format == "console"
        else structlog.processors.JSONRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def validate_config() -> None:
    """Validate configuration at startup."""
    try:
        config = get_config()
        print(f"Configuration loaded for {config.environment} environment")
        if config.baselines.table_path:
            print(f"Baseline table: {config.baselines.table_path}")
    except Exception as e:
        print(f"Configuration validation failed: {e}")
        raise


def print_config_summary() -> None:
    """Print configuration summary for debugging."""
    config = get_config()

    print("\nCONFIGURATION SUMMARY")
    print(f"Environment: {config.environment}")
    print(f"Debug Mode: {config.debug}")
    print(f"Log Level: {config.logging.level}")

    print("\nSUBJECT")
    print(f"Name: {config.subject.name}")
    print(f"Born: {config.subject.birth_date.isoformat()}")

    print("\nSIMULATION")
    print(f"Tick Interval: {config.simulation.tick_interval_seconds}s")


if __name__ == "__main__":
    validate_config()
    print_config_summary()
