"""Runtime configuration for nsd-metrics."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven runtime settings."""

    model_config = SettingsConfigDict(env_prefix="NSD_METRICS_", env_file=".env", extra="ignore")

    app_name: str = "nsd-metrics"
    log_level: str = "INFO"
    stats_writer: Literal["log", "jsonl"] = Field(
        default="log",
        description="Backend for platform stats writes: structured logs or a JSONL file.",
    )
    stats_log_path: str = Field(
        default="nsd_stats.jsonl",
        description="Path of the JSONL stats log when stats_writer is 'jsonl'.",
    )


settings = Settings()
