"""Tests for placeholder substitution and play detection."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from config.models import DetectionConfig
from models.base import ClassificationResult, ClassifierClient, ClassifierError
from models.gradio_client import GradioClassifierClient
from stage.detection import PlayDetector, label_to_play, replace_tags
from stage.domain.entities import Play


def make_client(result=None, error=None):
    client = MagicMock(spec=ClassifierClient)
    if error is not None:
        client.aclassify = AsyncMock(side_effect=error)
    else:
        client.aclassify = AsyncMock(return_value=result)
    return client


REPLACEMENTS = {"user": "Ann", "char": "Bo"}


class TestReplaceTags:
    def test_known_placeholders(self):
        assert replace_tags("{{user}} attacks {{char}}", REPLACEMENTS) == "Ann attacks Bo"

    def test_unmapped_placeholder_becomes_empty(self):
        # Unknown names are dropped rather than left literal.
        assert replace_tags("{{foo}}", REPLACEMENTS) == ""
        assert replace_tags("hello {{foo}}!", REPLACEMENTS) == "hello !"

    def test_repeated_placeholders(self):
        assert replace_tags("{{user}}, {{user}}!", REPLACEMENTS) == "Ann, Ann!"

    def test_non_alphanumeric_names_untouched(self):
        assert replace_tags("{{not-a-tag}}", REPLACEMENTS) == "{{not-a-tag}}"

    def test_single_braces_untouched(self):
        assert replace_tags("{user} plays {}", REPLACEMENTS) == "{user} plays {}"

    def test_no_placeholders(self):
        assert replace_tags("plain text", REPLACEMENTS) == "plain text"


class TestLabelToPlay:
    @pytest.mark.parametrize("label, play", [
        ("rock", Play.ROCK),
        ("paper", Play.PAPER),
        ("scissors", Play.SCISSORS),
        ("Rock", Play.ROCK),
    ])
    def test_play_labels(self, label, play):
        assert label_to_play(label) is play

    @pytest.mark.parametrize("label", ["nothing", "", None, "lizard"])
    def test_non_play_labels(self, label):
        assert label_to_play(label) is None


class TestPlayDetector:
    @pytest.mark.asyncio
    async def test_detects_top_label(self):
        client = make_client(ClassificationResult(
            labels=["scissors", "rock", "nothing", "paper"],
            scores=[0.91, 0.3, 0.1, 0.02],
        ))
        detector = PlayDetector(client=client)

        play = await detector.detect("{{user}} snips at {{char}}", REPLACEMENTS)

        assert play is Play.SCISSORS
        request = client.aclassify.call_args.args[0]
        assert request.sequence == "Ann snips at Bo"
        assert request.candidate_labels == ["rock", "paper", "scissors", "nothing"]
        assert request.hypothesis_template == "{{user}} is playing {}."
        assert request.multi_label is True

    @pytest.mark.asyncio
    async def test_nothing_label_is_no_play(self):
        client = make_client(ClassificationResult(labels=["nothing", "rock"], scores=[0.8, 0.1]))
        assert await PlayDetector(client=client).detect("hello there", REPLACEMENTS) is None

    @pytest.mark.asyncio
    async def test_empty_result_is_no_play(self):
        client = make_client(ClassificationResult())
        assert await PlayDetector(client=client).detect("hello", REPLACEMENTS) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        httpx.ConnectError("unreachable"),
        httpx.ReadTimeout("too slow"),
        ClassifierError("queue error"),
        ValueError("malformed payload"),
    ])
    async def test_classifier_failures_degrade(self, error):
        client = make_client(error=error)
        assert await PlayDetector(client=client).detect("rock!", REPLACEMENTS) is None
        client.aclassify.assert_awaited_once()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [["not", "an", "object"], "queued", 42])
    async def test_malformed_gradio_queue_response_is_no_play(self, body):
        client = GradioClassifierClient(
            base_url="http://space.local",
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json=body)),
        )
        assert await PlayDetector(client=client).detect("rock!", REPLACEMENTS) is None
        await client.aclose()

    @pytest.mark.asyncio
    async def test_disconnected_detector(self):
        detector = PlayDetector(client=None)
        assert not detector.is_connected
        assert await detector.detect("rock!", REPLACEMENTS) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", None])
    async def test_empty_content_skips_call(self, content):
        client = make_client(ClassificationResult(labels=["rock"], scores=[1.0]))
        assert await PlayDetector(client=client).detect(content, REPLACEMENTS) is None
        client.aclassify.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_custom_config(self):
        client = make_client(ClassificationResult(labels=["paper"], scores=[0.7]))
        config = DetectionConfig(hypothesis_template="{{user}} throws {}.", multi_label=False)
        detector = PlayDetector(client=client, config=config)

        assert await detector.detect("flat hand", REPLACEMENTS) is Play.PAPER
        request = client.aclassify.call_args.args[0]
        assert request.hypothesis_template == "{{user}} throws {}."
        assert request.multi_label is False

    def test_with_client_keeps_config(self):
        config = DetectionConfig(hypothesis_template="x {}")
        detector = PlayDetector(config=config)
        client = make_client()
        connected = detector.with_client(client)
        assert connected.client is client
        assert connected.build_request("s").hypothesis_template == "x {}"
        assert detector.client is None
