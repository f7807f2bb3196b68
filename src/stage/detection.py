"""Play detection over free-text chat content."""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional

import httpx

from config.models import DetectionConfig
from models.base import ClassificationRequest, ClassifierClient, ClassifierError
from stage.domain.entities import Play

logger = logging.getLogger(__name__)

TAG_PATTERN = re.compile(r"\{\{([A-Za-z0-9]*)\}\}")

NO_PLAY_LABEL = "nothing"


def replace_tags(source: str, replacements: Dict[str, str]) -> str:
    """Substitute ``{{name}}`` tokens; names without a mapping become empty."""
    return TAG_PATTERN.sub(lambda match: replacements.get(match.group(1), ""), source)


def label_to_play(label: Optional[str]) -> Optional[Play]:
    if not label or label == NO_PLAY_LABEL:
        return None
    try:
        return Play(label.strip().lower())
    except ValueError:
        logger.warning("Classifier returned an unknown label: %s", label)
        return None


class PlayDetector:
    def __init__(
        self,
        client: Optional[ClassifierClient] = None,
        config: Optional[DetectionConfig] = None,
    ):
        self._client = client
        self._config = config or DetectionConfig()

    @property
    def client(self) -> Optional[ClassifierClient]:
        return self._client

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    @property
    def candidate_labels(self) -> List[str]:
        return list(self._config.candidate_labels)

    def with_client(self, client: Optional[ClassifierClient]) -> "PlayDetector":
        return PlayDetector(client=client, config=self._config)

    def build_request(
        self,
        content: str,
        replacements: Optional[Dict[str, str]] = None,
    ) -> ClassificationRequest:
        replacements = replacements or {}
        return ClassificationRequest(
            sequence=replace_tags(content, replacements),
            candidate_labels=self.candidate_labels,
            hypothesis_template=self._config.hypothesis_template,
            multi_label=self._config.multi_label,
        )

    async def detect(self, content: Optional[str], replacements: Dict[str, str]) -> Optional[Play]:
        if not content:
            return None

        if self._client is None:
            logger.warning("Disconnected from classifier; no play detected")
            return None

        request = self.build_request(content, replacements)

        try:
            result = await self._client.aclassify(request)
        except (httpx.HTTPError, ClassifierError, ValueError) as exc:
            logger.warning("Play classification failed: %s", exc)
            return None

        logger.debug(
            "Classified %r with template %r: %s",
            request.sequence,
            request.hypothesis_template,
            result.ranked(),
        )

        if result.is_empty:
            logger.warning("Classifier returned no labels")
            return None

        play = label_to_play(result.top_label)
        logger.info("Play detected: %s", play.value if play else None)
        return play
