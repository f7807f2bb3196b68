"""Gradio space client for a zero-shot classification backend.

The space exposes a single endpoint taking a JSON string with the
request fields and returning a JSON string with ``labels`` and ``scores``.
Calls go through the Gradio REST queue: a POST returns an event id and a
GET on that id streams server-sent events until ``complete`` or ``error``.
"""

from __future__ import annotations

import json
import logging
from typing import Any, List, Optional

import httpx

from .base import ClassificationRequest, ClassificationResult, ClassifierClient, ClassifierError

logger = logging.getLogger(__name__)


class GradioClassifierClient(ClassifierClient):
    def __init__(
        self,
        base_url: str,
        api_name: str = "predict",
        api_key: str = "",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_name = api_name.strip("/")
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

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/call/{self.api_name}"

    async def aclassify(self, request: ClassificationRequest) -> ClassificationResult:
        response = await self._client.post(
            self.endpoint,
            json={"data": [json.dumps(request.to_payload())]},
        )
        response.raise_for_status()
        body = response.json()
        if not isinstance(body, dict):
            raise ClassifierError(f"Unexpected Gradio queue response: {body!r}")
        event_id = body.get("event_id")
        logger.debug("Gradio queued event %s", event_id)
        if not event_id:
            raise ClassifierError("Gradio response carried no event_id")

        async with self._client.stream("GET", f"{self.endpoint}/{event_id}") as stream:
            stream.raise_for_status()
            data = await self._read_complete_event(stream)

        return self._parse_output(data)

    async def _read_complete_event(self, stream: httpx.Response) -> List[Any]:
        event = None
        async for line in stream.aiter_lines():
            if line.startswith("event:"):
                event = line[len("event:"):].strip()
            elif line.startswith("data:"):
                payload = line[len("data:"):].strip()
                if event == "complete":
                    return json.loads(payload)
                if event == "error":
                    raise ClassifierError(f"Gradio reported an error: {payload}")
        raise ClassifierError("Gradio stream ended before completion")

    @staticmethod
    def _parse_output(data: Any) -> ClassificationResult:
        if not isinstance(data, list) or not data:
            raise ValueError(f"Unexpected Gradio output: {data!r}")
        first = data[0]
        parsed = json.loads(first) if isinstance(first, str) else first
        if not isinstance(parsed, dict):
            raise ValueError(f"Unexpected classifier payload: {parsed!r}")
        return ClassificationResult.model_validate(parsed)

    async def aclose(self) -> None:
        await self._client.aclose()
