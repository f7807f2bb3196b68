"""Configuration data models using Pydantic."""

from __future__ import annotations

import os
import re
from typing import Any, List

from pydantic import BaseModel, Field, field_validator


def resolve_env_vars(value: str) -> str:
    pattern = r'\$\{(\w+)(?::([^}]*))?\}'

    def replacer(match):
        var_name = match.group(1)
        default_value = match.group(2) or ""
        return os.environ.get(var_name, default_value)

    return re.sub(pattern, replacer, value)


class DetectionConfig(BaseModel):
    candidate_labels: List[str] = Field(
        default_factory=lambda: ["rock", "paper", "scissors", "nothing"]
    )
    hypothesis_template: str = "{{user}} is playing {}."
    multi_label: bool = True


class RewriterConfig(BaseModel):
    marker: str = "System:"
    separator: str = "---"


class DirectoriesConfig(BaseModel):
    storage_dir: str = "stage_storage"


class LoggingConfig(BaseModel):
    level: str = "WARNING"
    quiet_loggers: List[str] = Field(default_factory=lambda: ["httpx", "httpcore"])


class StageConfig(BaseModel):
    detection: DetectionConfig = Field(default_factory=DetectionConfig)
    rewriter: RewriterConfig = Field(default_factory=RewriterConfig)
    directories: DirectoriesConfig = Field(default_factory=DirectoriesConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class GradioConfig(BaseModel):
    base_url: str = "https://ravenok-statosphere-backend.hf.space/gradio_api"
    api_name: str = "predict"
    api_key: str = ""  # Optional: HF token for private spaces
    timeout: float = 30.0

    @field_validator("base_url", "api_key", mode="before")
    @classmethod
    def resolve_env(cls, v: Any) -> str:
        if isinstance(v, str):
            return resolve_env_vars(v)
        return v


class HuggingFaceConfig(BaseModel):
    base_url: str = "https://api-inference.huggingface.co/models"
    model_name: str = "facebook/bart-large-mnli"
    api_key: str = ""
    timeout: float = 30.0

    @field_validator("base_url", "api_key", mode="before")
    @classmethod
    def resolve_env(cls, v: Any) -> str:
        if isinstance(v, str):
            return resolve_env_vars(v)
        return v


class ModelsConfig(BaseModel):
    provider: str = "gradio"
    gradio: GradioConfig = Field(default_factory=GradioConfig)
    huggingface: HuggingFaceConfig = Field(default_factory=HuggingFaceConfig)

    def get_active_config(self) -> GradioConfig | HuggingFaceConfig:
        if self.provider == "gradio":
            return self.gradio
        return self.huggingface
