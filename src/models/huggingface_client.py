"""Hugging Face Inference API client for zero-shot classification."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from .base import ClassificationRequest, ClassificationResult, ClassifierClient

logger = logging.getLogger(__name__)


class HuggingFaceClassifierClient(ClassifierClient):
    def __init__(
        self,
        base_url: str = "https://api-inference.huggingface.co/models",
        model_name: str = "facebook/bart-large-mnli",
        api_key: str = "",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.model_name = model_name
        self.api_key = api_key
        self.timeout = timeout
        self._client = httpx.AsyncClient(
            timeout=timeout,
            headers=self._get_headers(),
            transport=transport,
        )

    def _get_headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def aclassify(self, request: ClassificationRequest) -> ClassificationResult:
        response = await self._client.post(
            f"{self.base_url}/{self.model_name}",
            json={
                "inputs": request.sequence,
                "parameters": {
                    "candidate_labels": request.candidate_labels,
                    "hypothesis_template": request.hypothesis_template,
                    "multi_label": request.multi_label,
                },
            },
        )
        response.raise_for_status()
        data = response.json()
        # Batched inputs come back as a list of results.
        if isinstance(data, list):
            if not data:
                return ClassificationResult()
            data = data[0]
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected inference payload: {data!r}")
        return ClassificationResult.model_validate(data)

    async def aclose(self) -> None:
        await self._client.aclose()
