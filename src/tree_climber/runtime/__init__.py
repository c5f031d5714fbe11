"""Runtime services: telemetry and configuration."""

from . import telemetry
from .config import ClimberConfig

__all__ = ["telemetry", "ClimberConfig"]
