"""Configuration loader for YAML configuration files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import yaml

from .models import ModelsConfig, StageConfig

logger = logging.getLogger(__name__)


class ConfigLoader:
    def __init__(self, config_dir: Optional[str | Path] = None):
        if config_dir is None:
            self._config_dir = Path(__file__).parent.parent.parent / "config"
        else:
            self._config_dir = Path(config_dir)

        self._stage_config: Optional[StageConfig] = None
        self._models_config: Optional[ModelsConfig] = None

    @property
    def config_dir(self) -> Path:
        return self._config_dir

    def _load_yaml(self, filename: str) -> dict:
        filepath = self._config_dir / filename
        if not filepath.exists():
            logger.warning("Config file not found: %s, using defaults", filepath)
            return {}

        with open(filepath, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

        return data or {}

    def load_stage_config(self, force_reload: bool = False) -> StageConfig:
        if self._stage_config is not None and not force_reload:
            return self._stage_config

        data = self._load_yaml("stage.yaml")
        self._stage_config = StageConfig(**data)
        logger.info("Loaded stage config from %s", self._config_dir / "stage.yaml")
        return self._stage_config

    def load_models_config(self, force_reload: bool = False) -> ModelsConfig:
        if self._models_config is not None and not force_reload:
            return self._models_config

        data = self._load_yaml("models.yaml")
        self._models_config = ModelsConfig(**data)
        logger.info("Loaded models config from %s", self._config_dir / "models.yaml")
        return self._models_config

    def load_all(self, force_reload: bool = False) -> tuple[StageConfig, ModelsConfig]:
        return (
            self.load_stage_config(force_reload),
            self.load_models_config(force_reload),
        )

    @property
    def stage(self) -> StageConfig:
        return self.load_stage_config()

    @property
    def models(self) -> ModelsConfig:
        return self.load_models_config()
