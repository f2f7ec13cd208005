"""Main CLI application using Cyclopts."""

import cyclopts

from contentmod.cli.commands import backfill, check, records

app = cyclopts.App(
    name="contentmod",
    help="contentmod - asynchronous text moderation for document stores",
)

app.command(check.app, name="check")
app.command(records.app, name="records")
app.command(backfill.app, name="backfill")


def main() -> None:
    app()
