"""OpenAI moderation endpoint adapter for the ModerationProvider port."""

import logging
import math
from typing import Any

import httpx

from contentmod.domain.moderation.model.value import ModerationResult
from contentmod.domain.moderation.port.provider import ModerationProvider
from contentmod.domain.shared.error import ConfigurationError, ProviderError

logger = logging.getLogger(__name__)

OPENAI_MODERATION_URL = "https://api.openai.com/v1/moderations"


def normalize_classification(result: dict[str, Any], sensitivity: float) -> ModerationResult:
    """Map one entry of the moderation response onto a ModerationResult.

    The overall score is the highest category score. Content is flagged when
    the classifier flagged it or any category reaches the sensitivity.

    Raises:
        ProviderError: If the entry lacks category scores or they are not numeric.
    """
    try:
        category_scores = {str(k): float(v) for k, v in result["category_scores"].items()}
        categories = {str(k): bool(v) for k, v in (result.get("categories") or {}).items()}
    except (KeyError, AttributeError, TypeError, ValueError) as e:
        raise ProviderError(f"Malformed OpenAI classification: {e}", provider="openai") from e
    if not all(math.isfinite(s) for s in category_scores.values()):
        raise ProviderError("Malformed OpenAI classification: non-finite score", provider="openai")

    flagged_categories = [c for c, s in category_scores.items() if s >= sensitivity]
    flagged = bool(flagged_categories) or bool(result.get("flagged"))

    reason = ""
    if flagged and flagged_categories:
        reason = f"Content flagged for: {', '.join(flagged_categories)}"

    score = max(category_scores.values(), default=0.0)
    return ModerationResult(
        flagged=flagged,
        score=min(max(score, 0.0), 1.0),
        categories=categories,
        category_scores=category_scores,
        provider="openai",
        reason=reason,
    )


class OpenAIModerationProvider(ModerationProvider):
    """Scores text with the OpenAI moderation endpoint using httpx."""

    name = "openai"

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        url: str = OPENAI_MODERATION_URL,
    ) -> None:
        self._client = client
        self._api_key = api_key
        self._url = url

    async def moderate(self, text: str, sensitivity: float) -> ModerationResult:
        if not self._api_key:
            raise ConfigurationError("OpenAI API key is required")

        try:
            response = await self._client.post(
                self._url,
                headers={"Authorization": f"Bearer {self._api_key}"},
                json={"input": text},
            )
        except httpx.HTTPError as e:
            raise ProviderError(f"OpenAI request failed: {e}", provider=self.name) from e

        if response.is_error:
            raise ProviderError(
                f"OpenAI API error: {response.status_code} - {response.text}",
                provider=self.name,
            )

        try:
            result = response.json()["results"][0]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ProviderError(f"Malformed OpenAI response: {e}", provider=self.name) from e

        return normalize_classification(result, sensitivity)
