"""Configuration utilities for dynwarp.

This module defines a hierarchical configuration schema using Pydantic models.
The :class:`Settings` container groups the warping parameters, the band-pass
options used by the multi-band estimator, regression and logging controls and
plotting defaults.  Instances can be populated from environment variables or
from YAML/JSON files with matching nested keys.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .types import ContractViolation, Direction, Norm

try:  # pragma: no cover - optional dependency
    import yaml  # type: ignore
except Exception:  # pragma: no cover
    yaml = None


class SectionModel(BaseModel):
    """Base model for configuration subsections that ignores unknown fields."""

    model_config = ConfigDict(extra="ignore")


# ---------------------------------------------------------------------------
# Settings schema
# ---------------------------------------------------------------------------


class WarpSettings(SectionModel):
    """Parameters of the constrained dynamic time warping."""

    norm: Norm = Norm.L2
    max_lag: int = Field(default=80, ge=0)
    b: int = Field(default=1, ge=1)
    direction: Direction = Direction.FORWARD

    @field_validator("norm", mode="before")
    @classmethod
    def _coerce_norm(cls, value: Any) -> Any:
        try:
            return Norm.coerce(value)
        except ContractViolation as exc:
            raise ValueError(str(exc)) from None

    @field_validator("direction", mode="before")
    @classmethod
    def _coerce_direction(cls, value: Any) -> Any:
        try:
            return Direction.coerce(value)
        except ContractViolation as exc:
            raise ValueError(str(exc)) from None


class BandSettings(SectionModel):
    """Options for the per-band warping loop."""

    bandpass: str = "butterworth"
    order: int = Field(default=4, ge=1)
    normalize: bool = True


class RegressionSettings(SectionModel):
    """Controls for the dv/v regression."""

    percent: bool = True


class LoggingSettings(SectionModel):
    """Logging verbosity and format."""

    level: str = "INFO"
    format: str = "%(levelname)s:%(name)s:%(message)s"


class VizSettings(SectionModel):
    """Configuration for the plotting helpers."""

    title: str = "Distance surface"
    save: str | None = None


class Settings(BaseSettings):
    """Container for all runtime configuration sections."""

    warp: WarpSettings = Field(default_factory=WarpSettings)
    bands: BandSettings = Field(default_factory=BandSettings)
    regression: RegressionSettings = Field(default_factory=RegressionSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    viz: VizSettings = Field(default_factory=VizSettings)

    model_config = SettingsConfigDict(
        env_prefix="DYNWARP_",
        env_nested_delimiter="__",
        extra="ignore",
    )


# ---------------------------------------------------------------------------
# Loading utilities
# ---------------------------------------------------------------------------


def load_settings(path: str | Path) -> Settings:
    """Load settings from a JSON or YAML file."""

    p = Path(path)
    text = p.read_text()
    if p.suffix.lower() in {".yaml", ".yml"}:
        if yaml is None:
            raise RuntimeError("PyYAML is required to load YAML files")
        data = yaml.safe_load(text) or {}
    else:
        data = json.loads(text)
    if not isinstance(data, dict):
        raise TypeError("Configuration file must define a mapping")
    return Settings.model_validate(data)
