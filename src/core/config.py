"""Configuration models and YAML loader for the matching engine."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, model_validator

from src.scoring.rules import SIMILARITY_CUTOFF


class EngineConfig(BaseModel):
    """Worker pool bounds for per-record scoring."""

    max_workers: int = Field(default=4, ge=1, le=64)
    parallel_threshold: int = Field(default=64, ge=1)


class SimilarityConfig(BaseModel):
    """Cutoff and result-size bounds for posting similarity."""

    cutoff: int = Field(default=SIMILARITY_CUTOFF, ge=0, le=100)
    default_limit: int = Field(default=10, ge=1)
    max_limit: int = Field(default=50, ge=1)

    @model_validator(mode="after")
    def default_within_max(self) -> "SimilarityConfig":
        if self.default_limit > self.max_limit:
            msg = "default_limit must not exceed max_limit"
            raise ValueError(msg)
        return self


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    engine: EngineConfig = Field(default_factory=EngineConfig)
    similarity: SimilarityConfig = Field(default_factory=SimilarityConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)
