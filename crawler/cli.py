"""
Simple CLI to run the feed fetch manually.
"""
from __future__ import annotations

import json
import sys

import click

from technews import SETTINGS
from technews.errors import FetchError
from technews.fetcher import FeedFetcher
from technews.params import parse_limit, parse_since


@click.group()
def cli():
    pass


@cli.command()
@click.option("--limit", default=None, help="Number of articles (1-50, default 20).")
@click.option("--since", default=None, help="ISO timestamp or YYYY-MM-DD (UTC+8 midnight).")
@click.option("--url", default=None, help="Alternate feed; must be allow-listed.")
def latest(limit, since, url):
    fetcher = FeedFetcher(SETTINGS)
    try:
        result = fetcher.fetch(source_url=url, limit=parse_limit(limit), since=parse_since(since))
    except FetchError as exc:
        click.echo(json.dumps(exc.to_response().model_dump(), ensure_ascii=False, indent=2))
        sys.exit(1)
    click.echo(json.dumps(result.model_dump(), ensure_ascii=False, indent=2))


if __name__ == "__main__":  # pragma: no cover
    cli()
