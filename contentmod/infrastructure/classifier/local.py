"""Local rule-based ModerationProvider - no network, deterministic."""

import re

from contentmod.domain.moderation.model.value import ModerationResult
from contentmod.domain.moderation.port.provider import ModerationProvider

_UPPERCASE_RE = re.compile(r"[A-Z]")
_REPEATED_CHAR_RE = re.compile(r"(.)\1{4,}")

CAPS_RATIO = 0.7
CAPS_MIN_LENGTH = 10


def parse_blocklist(blocklist: str) -> list[str]:
    """Split a comma-separated blocklist into lower-cased, non-empty terms."""
    return [w for w in (part.strip().lower() for part in blocklist.split(",")) if w]


def score_text(text: str, blocklist: list[str], sensitivity: float) -> ModerationResult:
    """Score text against the blocklist, capitalization and spam heuristics."""
    normalized = text.lower()
    matches = [term for term in blocklist if term in normalized]

    caps_ratio = len(_UPPERCASE_RE.findall(text)) / max(len(text), 1)
    excessive_caps = len(text) > CAPS_MIN_LENGTH and caps_ratio > CAPS_RATIO

    repeated_chars = _REPEATED_CHAR_RE.search(text) is not None

    categories = {
        "blocklist": bool(matches),
        "excessive_caps": excessive_caps,
        "spam_patterns": repeated_chars,
    }

    score = 0.0
    if matches:
        score += 0.6
    if excessive_caps:
        score += 0.2
    if repeated_chars:
        score += 0.2
    score = min(round(score, 6), 1.0)

    return ModerationResult(
        flagged=score >= sensitivity,
        score=score,
        categories=categories,
        category_scores={
            "blocklist": 0.8 if matches else 0.0,
            "excessive_caps": 0.4 if excessive_caps else 0.0,
            "spam_patterns": 0.3 if repeated_chars else 0.0,
        },
        provider="local",
        reason=", ".join(name for name, hit in categories.items() if hit),
    )


class LocalModerationProvider(ModerationProvider):
    name = "local"

    def __init__(self, blocklist: str = "") -> None:
        self._blocklist = parse_blocklist(blocklist)

    @property
    def blocklist(self) -> list[str]:
        return list(self._blocklist)

    async def moderate(self, text: str, sensitivity: float) -> ModerationResult:
        return score_text(text, self._blocklist, sensitivity)
