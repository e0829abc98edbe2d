"""Application configuration via pydantic-settings.

All config is sourced from environment variables. Never use os.getenv() directly.
"""

import json

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SimulationSettings(BaseSettings):
    """Mock backend timings and limits."""

    model_config = SettingsConfigDict(env_prefix="")

    # Simulated latencies (seconds)
    connect_latency: float = 1.2
    schema_latency: float = 0.3
    query_latency: float = 0.4

    # Probability that a valid, non-demo handshake times out
    connect_failure_probability: float = 0.05

    # Hard cap on synthesized rows per query
    query_row_limit: int = 100
    default_page_size: int = 100

    @field_validator("connect_failure_probability")
    @classmethod
    def validate_probability(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError("CONNECT_FAILURE_PROBABILITY must be between 0 and 1")
        return v

    @field_validator("connect_latency", "schema_latency", "query_latency")
    @classmethod
    def validate_latency(cls, v: float, info) -> float:
        if v < 0:
            raise ValueError(f"{info.field_name.upper()} must not be negative")
        return v


class Settings(BaseSettings):
    """DBScope application settings.

    Environment variables are the single source of truth.
    Defaults are development-safe values only.
    """

    model_config = SettingsConfigDict(env_file=".env")

    app_env: str = "development"

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "Settings":
        """Refuse to start with a zero-latency simulation outside development."""
        is_prod = self.app_env != "development"
        sim = self.simulation
        if is_prod and sim.query_latency == 0 and sim.connect_latency == 0:
            raise ValueError(
                f"Simulated latencies must be non-zero when APP_ENV={self.app_env!r}."
            )
        return self

    simulation: SimulationSettings = SimulationSettings()

    # CORS
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    metrics_enabled: bool = True

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | list[str]) -> list[str]:
        if isinstance(v, str):
            return json.loads(v)
        return v


settings = Settings()
