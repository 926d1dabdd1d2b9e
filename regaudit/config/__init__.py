"""Configuration module for regaudit."""

from .detection import DetectionSettings
from .logging import LoggingSettings
from .settings import Settings, get_settings


__all__ = [
    "DetectionSettings",
    "LoggingSettings",
    "Settings",
    "get_settings",
]
