"""Command line entry point: ``linkstash process``."""

from __future__ import annotations

from pathlib import Path

import asyncclick as click

from linkstash.core.config import settings
from linkstash.core.errors import LinkStashError
from linkstash.core.logging import configure_logging
from linkstash.models.link.schemas import BatchResult, ItemOutcome, OutcomeStatus
from linkstash.repositories.inputs.repository import InputRepository
from linkstash.repositories.links.repository import LinkRepository
from linkstash.services.links.service import LinkService
from linkstash.workers.fetcher import close_http_client, get_http_client


def format_outcome(outcome: ItemOutcome) -> str:
    if outcome.status is OutcomeStatus.ADDED:
        return f"Added: {outcome.url}"
    if outcome.status is OutcomeStatus.SKIPPED:
        return f"Skipped: {outcome.url} ({outcome.reason})"
    return f"Failed: {outcome.url} - {outcome.reason}"


def _report(result: BatchResult) -> None:
    for outcome in result.outcomes:
        click.echo(format_outcome(outcome), err=outcome.status is OutcomeStatus.FAILED)
    click.echo(f"\nSummary: {result.summary}")


@click.group()
@click.option("--log-level", default=None, help="Override LINKSTASH_LOG_LEVEL.")
def cli(log_level: str | None) -> None:
    """LinkStash: collect link metadata into a JSON file."""
    configure_logging(log_level)


@cli.command()
@click.option(
    "--input",
    "input_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Batch file, one URL per line (default: LINKSTASH_INPUT_PATH).",
)
@click.option(
    "--links",
    "links_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="JSON collection to append to (default: LINKSTASH_LINKS_PATH).",
)
async def process(input_path: Path | None, links_path: Path | None) -> None:
    """Fetch metadata for every URL in the input file and store new links."""
    service = LinkService(
        LinkRepository(links_path or settings.links_path),
        InputRepository(input_path or settings.input_path),
        get_http_client(),
    )
    try:
        result = await service.process()
    except LinkStashError as exc:
        click.echo(f"Fatal error: {exc}", err=True)
        raise click.exceptions.Exit(1)
    finally:
        await close_http_client()

    if not result.outcomes:
        click.echo("No URLs to process")
        return

    _report(result)
    if result.failed > 0:
        raise click.exceptions.Exit(1)


if __name__ == "__main__":
    cli()
