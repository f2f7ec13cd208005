"""Unit tests for the OpenAI moderation adapter."""

import json

import httpx
import pytest

from contentmod.domain.shared.error import ConfigurationError, ProviderError
from contentmod.infrastructure.classifier.openai import (
    OPENAI_MODERATION_URL,
    OpenAIModerationProvider,
    normalize_classification,
)


def make_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def classification(flagged: bool = False, **scores: float) -> dict:
    return {
        "flagged": flagged,
        "categories": {k: flagged for k in scores},
        "category_scores": scores,
    }


class TestNormalizeClassification:
    def test_score_is_highest_category(self):
        result = normalize_classification(classification(hate=0.2, violence=0.35), 0.5)

        assert result.score == pytest.approx(0.35)
        assert result.flagged is False
        assert result.reason == ""
        assert result.provider == "openai"

    def test_category_over_threshold_flags(self):
        result = normalize_classification(classification(hate=0.7, violence=0.1), 0.5)

        assert result.flagged is True
        assert result.reason == "Content flagged for: hate"

    def test_native_flag_is_respected(self):
        result = normalize_classification(classification(flagged=True, hate=0.1), 0.9)

        assert result.flagged is True
        assert result.reason == ""

    def test_empty_scores(self):
        result = normalize_classification(classification(), 0.5)
        assert result.score == 0.0

    def test_malformed_entry(self):
        with pytest.raises(ProviderError):
            normalize_classification({"flagged": False}, 0.5)

    @pytest.mark.parametrize("bad", [float("nan"), float("inf")])
    def test_non_finite_category_score(self, bad):
        """A NaN score would otherwise fail every threshold test and read as approved."""
        with pytest.raises(ProviderError):
            normalize_classification(classification(hate=bad, violence=0.1), 0.5)


class TestOpenAIModerationProvider:
    @pytest.mark.asyncio
    async def test_posts_text_with_bearer_key(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"results": [classification(hate=0.9)]})

        async with make_client(handler) as client:
            provider = OpenAIModerationProvider(client=client, api_key="sk-test")
            result = await provider.moderate("some text", 0.5)

        assert result.flagged is True
        [request] = seen
        assert str(request.url) == OPENAI_MODERATION_URL
        assert request.headers["Authorization"] == "Bearer sk-test"
        assert json.loads(request.content) == {"input": "some text"}

    @pytest.mark.asyncio
    async def test_missing_key(self):
        async with make_client(lambda request: httpx.Response(200)) as client:
            provider = OpenAIModerationProvider(client=client, api_key="")
            with pytest.raises(ConfigurationError):
                await provider.moderate("text", 0.5)

    @pytest.mark.asyncio
    async def test_http_error_status(self):
        async with make_client(lambda request: httpx.Response(429, text="slow down")) as client:
            provider = OpenAIModerationProvider(client=client, api_key="sk-test")
            with pytest.raises(ProviderError) as exc_info:
                await provider.moderate("text", 0.5)

        assert "429" in exc_info.value.message
        assert exc_info.value.provider == "openai"

    @pytest.mark.asyncio
    async def test_transport_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with make_client(handler) as client:
            provider = OpenAIModerationProvider(client=client, api_key="sk-test")
            with pytest.raises(ProviderError):
                await provider.moderate("text", 0.5)

    @pytest.mark.asyncio
    async def test_nan_in_response_body(self):
        body = (
            b'{"results": [{"flagged": false, "categories": {},'
            b' "category_scores": {"hate": NaN}}]}'
        )

        async with make_client(lambda request: httpx.Response(200, content=body)) as client:
            provider = OpenAIModerationProvider(client=client, api_key="sk-test")
            with pytest.raises(ProviderError):
                await provider.moderate("text", 0.5)

    @pytest.mark.asyncio
    async def test_missing_results(self):
        async with make_client(lambda request: httpx.Response(200, json={})) as client:
            provider = OpenAIModerationProvider(client=client, api_key="sk-test")
            with pytest.raises(ProviderError):
                await provider.moderate("text", 0.5)
