"""Gemini adapter for the ModerationProvider port.

Gemini has no moderation endpoint, so the text is sent inside a fixed
instruction prompt asking for a strict JSON verdict, which is then parsed and
held to the same threshold rule as the other backends.
"""

import json
import logging
import math
import re
from typing import Any

import httpx

from contentmod.domain.moderation.model.value import ModerationResult
from contentmod.domain.moderation.port.provider import ModerationProvider
from contentmod.domain.shared.error import ConfigurationError, ProviderError

logger = logging.getLogger(__name__)

GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta"

MODERATION_PROMPT = '''You are a content moderation system. Analyze the following text and return a JSON object with your assessment.

Evaluate for these categories:
- hate: Content expressing hatred toward groups based on identity
- harassment: Content that harasses or bullies individuals
- violence: Content promoting or depicting violence
- sexual: Explicit sexual content
- self_harm: Content promoting self-harm
- dangerous: Content promoting dangerous activities

Return ONLY a valid JSON object in this exact format:
{
  "flagged": boolean,
  "score": number between 0.0 and 1.0 representing overall toxicity,
  "categories": {
    "hate": boolean,
    "harassment": boolean,
    "violence": boolean,
    "sexual": boolean,
    "self_harm": boolean,
    "dangerous": boolean
  },
  "categoryScores": {
    "hate": number,
    "harassment": number,
    "violence": number,
    "sexual": number,
    "self_harm": number,
    "dangerous": number
  },
  "reason": "brief explanation if flagged, empty string if not"
}

Text to analyze:
"""
{TEXT}
"""'''

# ```json ... ``` or a bare ``` ... ``` fence, tag optional
_FENCE_RE = re.compile(r"```[\w-]*\s*([\s\S]*?)```")


def build_prompt(text: str) -> str:
    return MODERATION_PROMPT.replace("{TEXT}", text)


def extract_json(reply: str) -> str:
    """Strip an optional code fence around the model's reply."""
    match = _FENCE_RE.search(reply)
    if match:
        return match.group(1).strip()
    return reply.strip()


def parse_reply(reply: str, sensitivity: float) -> ModerationResult:
    """Parse the model's verdict into a ModerationResult.

    Raises:
        ProviderError: If the reply is not a JSON object with numeric scores.
    """
    try:
        parsed = json.loads(extract_json(reply))
    except json.JSONDecodeError as e:
        raise ProviderError(f"Unparseable Gemini reply: {e}", provider="gemini") from e
    if not isinstance(parsed, dict):
        raise ProviderError("Gemini reply is not a JSON object", provider="gemini")

    try:
        category_scores = {
            str(k): float(v) for k, v in (parsed.get("categoryScores") or {}).items()
        }
        categories = {str(k): bool(v) for k, v in (parsed.get("categories") or {}).items()}
        score = float(parsed.get("score") or 0.0)
    except (AttributeError, TypeError, ValueError) as e:
        raise ProviderError(f"Malformed Gemini verdict: {e}", provider="gemini") from e
    if not all(math.isfinite(s) for s in (score, *category_scores.values())):
        raise ProviderError("Malformed Gemini verdict: non-finite score", provider="gemini")

    flagged_categories = [c for c, s in category_scores.items() if s >= sensitivity]
    for category in flagged_categories:
        categories[category] = True

    flagged = bool(flagged_categories) or parsed.get("flagged") is True

    reason = ""
    if flagged:
        reason = str(parsed.get("reason") or "")
        if not reason:
            reason = f"Content flagged for: {', '.join(flagged_categories)}"

    return ModerationResult(
        flagged=flagged,
        score=min(max(score, 0.0), 1.0),
        categories=categories,
        category_scores=category_scores,
        provider="gemini",
        reason=reason,
    )


def _reply_text(body: Any) -> str:
    return body["candidates"][0]["content"]["parts"][0]["text"]


class GeminiModerationProvider(ModerationProvider):
    """Scores text by prompting a Gemini model over the REST API using httpx."""

    name = "gemini"

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        model: str = "gemini-1.5-flash",
        base_url: str = GEMINI_API_BASE,
    ) -> None:
        self._client = client
        self._api_key = api_key
        self._model = model
        self._base_url = base_url

    @property
    def url(self) -> str:
        return f"{self._base_url}/models/{self._model}:generateContent"

    async def moderate(self, text: str, sensitivity: float) -> ModerationResult:
        if not self._api_key:
            raise ConfigurationError("Gemini API key is required")

        try:
            response = await self._client.post(
                self.url,
                headers={"x-goog-api-key": self._api_key},
                json={"contents": [{"parts": [{"text": build_prompt(text)}]}]},
            )
        except httpx.HTTPError as e:
            raise ProviderError(f"Gemini request failed: {e}", provider=self.name) from e

        if response.is_error:
            raise ProviderError(
                f"Gemini API error: {response.status_code} - {response.text}",
                provider=self.name,
            )

        try:
            reply = _reply_text(response.json())
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ProviderError(f"Malformed Gemini response: {e}", provider=self.name) from e

        logger.debug(f"Gemini reply: {reply[:200]}")
        return parse_reply(reply, sensitivity)
