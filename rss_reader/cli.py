"""
Command-line interface for the RSS reader.

Uses Typer as a thin transport over the AggregationService: every command
performs one service operation and prints its JSON response envelope.
Supports loading .env files for API key configuration.
"""

from __future__ import annotations

import json
from pathlib import Path

from dotenv import load_dotenv
import typer
from rich.console import Console

from .config import AppConfig, load_config
from .core.types import ApiResponse
from .logging_utils import setup_logging
from .service import AggregationService
from .store import FeedStore

app = typer.Typer(add_completion=False, help="Personal RSS feed aggregator.")
feeds_app = typer.Typer(help="Manage feed subscriptions.")
read_later_app = typer.Typer(help="Manage the read-later queue.")
app.add_typer(feeds_app, name="feeds")
app.add_typer(read_later_app, name="read-later")

console = Console()


@app.callback()
def main(
    ctx: typer.Context,
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, readable=True),
    state_file: Path | None = typer.Option(
        None, "--state-file", "-s", help="Override the JSON state file path."
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_dir: Path | None = typer.Option(
        None, "--log-dir", help="Directory for the log file; enables file logging."
    ),
):
    """Load configuration and open the state file.

    Args:
        config: Optional path to YAML config file
        state_file: Override for the state file location
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_dir: Directory for the JSONL log file
    """
    load_dotenv()

    cfg = load_config(str(config) if config else None)
    if state_file is not None:
        cfg.store.path = str(state_file)
    if log_level:
        cfg.logging.level = log_level
    if log_dir is not None:
        cfg.logging.file = True

    setup_logging(cfg.logging, log_dir)
    ctx.obj = _build_service(cfg)


def _build_service(cfg: AppConfig) -> AggregationService:
    store = FeedStore.open(Path(cfg.store.path))
    return AggregationService(store, cfg)


def _emit(response: ApiResponse) -> None:
    console.print_json(json.dumps(response.to_dict(), ensure_ascii=False))
    if not response.success:
        raise typer.Exit(code=1)


@feeds_app.command("list")
def feeds_list(ctx: typer.Context):
    """List subscribed feed URLs."""
    _emit(ctx.obj.list_feeds())


@feeds_app.command("add")
def feeds_add(ctx: typer.Context, url: str = typer.Argument(..., help="Feed URL.")):
    """Subscribe to a feed."""
    _emit(ctx.obj.add_feed(url))


@feeds_app.command("remove")
def feeds_remove(ctx: typer.Context, index: int = typer.Argument(..., help="Feed position.")):
    """Unsubscribe the feed at INDEX; later feeds shift down by one."""
    _emit(ctx.obj.remove_feed(index))


@feeds_app.command("fetch")
def feeds_fetch(ctx: typer.Context, index: int = typer.Argument(..., help="Feed position.")):
    """Fetch and parse the feed at INDEX."""
    _emit(ctx.obj.fetch_feed(index))


@app.command()
def content(
    ctx: typer.Context,
    feed_index: int = typer.Argument(..., help="Feed position."),
    entry_index: int = typer.Argument(..., help="Entry position within the fetched feed."),
):
    """Extract the article text of one feed entry."""
    _emit(ctx.obj.fetch_entry_content(feed_index, entry_index))


@read_later_app.command("list")
def read_later_list(ctx: typer.Context):
    """List the read-later queue."""
    _emit(ctx.obj.list_read_later())


@read_later_app.command("add")
def read_later_add(
    ctx: typer.Context,
    title: str | None = typer.Option(None, "--title", help="Title of a custom link."),
    url: str | None = typer.Option(None, "--url", help="URL of a custom link."),
    item_json: str | None = typer.Option(
        None, "--item-json", help="Feed entry as JSON with title, link, comments, description."
    ),
):
    """Save a feed entry (--item-json) or a custom link (--title and --url)."""
    item = None
    if item_json is not None:
        try:
            item = json.loads(item_json)
        except json.JSONDecodeError as exc:
            raise typer.BadParameter(f"Invalid JSON: {exc}", param_hint="--item-json")
    _emit(ctx.obj.add_read_later(item=item, title=title, url=url))


@read_later_app.command("remove")
def read_later_remove(
    ctx: typer.Context, index: int = typer.Argument(..., help="Read-later position.")
):
    """Remove the read-later item at INDEX."""
    _emit(ctx.obj.remove_read_later(index))


@app.command()
def summarize(
    ctx: typer.Context,
    text: str | None = typer.Argument(None, help="Text to summarize."),
    file: Path | None = typer.Option(None, "--file", "-f", exists=True, readable=True),
):
    """Summarize TEXT, or the contents of --file, with the configured LLM."""
    if file is not None:
        text = file.read_text(encoding="utf-8")
    _emit(ctx.obj.summarize(text or ""))


if __name__ == "__main__":
    app()
