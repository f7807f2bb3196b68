"""Configuration module for the stage."""

from .loader import ConfigLoader
from .models import (
    DetectionConfig,
    DirectoriesConfig,
    GradioConfig,
    HuggingFaceConfig,
    LoggingConfig,
    ModelsConfig,
    RewriterConfig,
    StageConfig,
)

__all__ = [
    "ConfigLoader",
    "DetectionConfig",
    "DirectoriesConfig",
    "GradioConfig",
    "HuggingFaceConfig",
    "LoggingConfig",
    "ModelsConfig",
    "RewriterConfig",
    "StageConfig",
]
