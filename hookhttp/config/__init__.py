"""Configuration module for hookhttp."""

from .http import HTTPSettings
from .logging import LoggingSettings
from .settings import Settings


__all__ = ["HTTPSettings", "LoggingSettings", "Settings"]
