# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
GMS Filter — Application Configuration
All settings are loaded from environment variables with the grid and
threshold defaults of the GMS paper setup. Override via .env or environment.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ─── Grid Voting ─────────────────────────────────────────────────────────
    # N×N cells per image per phase — 10 gives 100 cells
    grid_size: int = Field(10, ge=1)
    # Scales the sqrt margin of the inlier threshold (alpha = factor × N)
    threshold_factor: float = Field(0.15, ge=0.0)

    # ─── Correspondence Generation (ORB) ─────────────────────────────────────
    orb_n_features: int = Field(10000, ge=1)
    orb_fast_threshold: int = Field(20, ge=0)

    # ─── Request Limits ──────────────────────────────────────────────────────
    max_keypoints: int = Field(200_000, ge=1)

    # ─── Logging ─────────────────────────────────────────────────────────────
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # ─── Server ──────────────────────────────────────────────────────────────
    host: str = "0.0.0.0"
    port: int = 8000

    # ─── Derived helpers ─────────────────────────────────────────────────────
    @property
    def n_cells(self) -> int:
        return self.grid_size * self.grid_size


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached singleton Settings instance."""
    return Settings()
