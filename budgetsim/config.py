"""Runtime settings for the API and the CLI."""

from __future__ import annotations

import os
from typing import List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

ENV_PREFIX = "BUDGETSIM_"


class Settings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"]
    )
    default_days: int = Field(default=30, ge=1)
    max_days: int = Field(default=3660, ge=1)
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value}")
        return level

    @model_validator(mode="after")
    def ensure_validity(self) -> "Settings":
        if self.default_days > self.max_days:
            raise ValueError("default_days must not exceed max_days")
        return self

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from ``BUDGETSIM_*`` environment variables."""
        env = os.environ if environ is None else environ
        values: dict = {}
        origins = env.get(f"{ENV_PREFIX}CORS_ORIGINS")
        if origins:
            values["cors_origins"] = [origin.strip() for origin in origins.split(",") if origin.strip()]
        for key in ("default_days", "max_days", "log_level"):
            raw = env.get(f"{ENV_PREFIX}{key.upper()}")
            if raw is not None:
                values[key] = raw
        return cls.model_validate(values)
