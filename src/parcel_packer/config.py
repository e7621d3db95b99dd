"""Settings from the environment; loads .env locally via python-dotenv."""

from __future__ import annotations

import logging
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from parcel_packer.models import ParcelPackingConfiguration
from parcel_packer.units import Weight

ENV_PREFIX = "PARCEL_PACKER_"


class Settings(BaseModel):
    """Default packing configuration and logging level."""

    max_parcel_weight_kg: Optional[float] = Field(
        default=31.5,
        gt=0,
        description="Default maximum parcel weight in kg, None for unlimited")
    filler_weight_kg: float = Field(default=0.0, ge=0, description="Absolute filler weight per parcel in kg")
    filler_weight_relative: float = Field(default=0.0, ge=0, description="Filler weight relative to item weight")
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level '{value}'")
        return level

    def packing_configuration(self) -> ParcelPackingConfiguration:
        return ParcelPackingConfiguration(
            max_parcel_weight=(
                Weight.of(self.max_parcel_weight_kg, "kg") if self.max_parcel_weight_kg is not None else None
            ),
            filler_weight_per_parcel=Weight.of(self.filler_weight_kg, "kg"),
            filler_weight_relative=self.filler_weight_relative,
        )


def load_settings() -> Settings:
    """Read PARCEL_PACKER_* variables; a local .env never overrides the real environment."""
    load_dotenv()
    values: dict[str, Optional[str]] = {}
    for name in Settings.model_fields:
        raw = os.getenv(ENV_PREFIX + name.upper())
        if raw is None:
            continue
        # An empty or "none" weight limit disables repacking
        if name == "max_parcel_weight_kg" and raw.strip().lower() in ("", "none"):
            values[name] = None
        else:
            values[name] = raw
    return Settings(**values)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
