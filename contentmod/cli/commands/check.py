"""Score text with the local rule engine."""

import asyncio

import cyclopts

from contentmod.cli.console import Console
from contentmod.infrastructure.classifier.local import LocalModerationProvider

app = cyclopts.App(name="check", help="Score text locally (no network, no store)")


@app.default
def check(text: str, /, blocklist: str = "", sensitivity: float = 0.5) -> None:
    """Run the local rule engine on TEXT.

    Args:
        text: Text to score.
        blocklist: Comma-separated blocked terms.
        sensitivity: Flagging threshold between 0 and 1.
    """
    console = Console()
    if not 0.0 <= sensitivity <= 1.0:
        console.error("Sensitivity must be between 0 and 1")
        raise SystemExit(2)

    provider = LocalModerationProvider(blocklist=blocklist)
    result = asyncio.run(provider.moderate(text, sensitivity))
    console.moderation_result(result)
