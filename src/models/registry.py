"""Classifier provider registry."""

from __future__ import annotations

import logging
from typing import Optional

from config import ConfigLoader, ModelsConfig
from models.base import ClassifierClient
from models.gradio_client import GradioClassifierClient
from models.huggingface_client import HuggingFaceClassifierClient

logger = logging.getLogger(__name__)


class ClassifierRegistry:
    def __init__(self, config: Optional[ModelsConfig] = None):
        if config is None:
            loader = ConfigLoader()
            config = loader.load_models_config()
        self._config = config
        self._client: Optional[ClassifierClient] = None

    @property
    def provider(self) -> str:
        return self._config.provider

    def get_classifier_client(self) -> ClassifierClient:
        if self._client is not None:
            return self._client

        if self._config.provider == "gradio":
            cfg = self._config.gradio
            self._client = GradioClassifierClient(
                base_url=cfg.base_url,
                api_name=cfg.api_name,
                api_key=cfg.api_key,
                timeout=cfg.timeout,
            )
            target = f"{cfg.base_url}/call/{cfg.api_name}"
        elif self._config.provider == "huggingface":
            cfg = self._config.huggingface
            self._client = HuggingFaceClassifierClient(
                base_url=cfg.base_url,
                model_name=cfg.model_name,
                api_key=cfg.api_key,
                timeout=cfg.timeout,
            )
            target = cfg.model_name
        else:
            raise ValueError(f"Unknown classifier provider: {self._config.provider}")

        logger.info(
            "Initialized classifier client: provider=%s, target=%s",
            self._config.provider,
            target,
        )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
