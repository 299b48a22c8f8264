"""ProLingo CLI: review commands, speech scoring, server and config."""

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Annotated

import typer

from prolingo.application.config import resolve_config
from prolingo.domain.exceptions import ProLingoError
from prolingo.interface._common import _resolve_with_overrides, item_to_json, stats_to_json

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="prolingo: spaced-repetition review engine for language learners.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

config_app = typer.Typer(help="Manage prolingo configuration.")
app.add_typer(config_app, name="config")


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    store: Annotated[
        Path | None,
        typer.Option("--store", help="Review store file. Defaults to 'store_path' in config."),
    ] = None,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
):
    """Global settings for prolingo."""
    ctx.ensure_object(dict)
    ctx.obj["store_path"] = store
    ctx.obj["verbose_bonus"] = verbose


def _service(ctx: typer.Context):
    from prolingo.application.factory import get_review_service

    config = _resolve_with_overrides(
        store_path=ctx.obj.get("store_path"),
        verbose=1 + ctx.obj.get("verbose_bonus", 0),
    )
    return config, get_review_service(config)


def _run(coro):
    """Run a coroutine, turning domain errors into a clean exit."""
    try:
        return asyncio.run(coro)
    except ProLingoError as e:
        typer.secho(f"Error: {e}", fg="red", err=True)
        raise typer.Exit(1) from e


def _echo_json(data) -> None:
    typer.echo(json.dumps(data, indent=2))


# ---------------------------------------------------------------------------
# Review commands
# ---------------------------------------------------------------------------


@app.command()
def add(
    ctx: typer.Context,
    item_ids: Annotated[
        list[str] | None,
        typer.Argument(help="IDs of the learnable units. A fresh ID is generated if omitted."),
    ] = None,
):
    """[bold green]Add[/bold green] items to the review store."""
    _, service = _service(ctx)

    async def run():
        if not item_ids:
            return [await service.add_item()]
        return [await service.add_item(item_id) for item_id in item_ids]

    items = _run(run())
    _echo_json([item_to_json(i) for i in items])


@app.command()
def review(
    ctx: typer.Context,
    item_id: Annotated[str, typer.Argument(help="ID of the reviewed item.")],
    remembered: Annotated[
        bool,
        typer.Option("--remembered/--forgot", help="Whether the learner recalled the item."),
    ] = False,
    quality: Annotated[
        int, typer.Option("--quality", "-q", help="Recall quality from 0 (blackout) to 5 (perfect).")
    ] = 3,
):
    """Record the outcome of a flashcard review and reschedule the item."""
    _, service = _service(ctx)
    updated = _run(service.record_review(item_id, remembered, quality))
    _echo_json(item_to_json(updated))


@app.command()
def due(ctx: typer.Context):
    """List items whose review time has passed."""
    _, service = _service(ctx)
    items = _run(service.get_due())
    logger.info(f"{len(items)} items due")
    _echo_json([item_to_json(i) for i in items])


@app.command("queue")
def queue(
    ctx: typer.Context,
    limit: Annotated[
        int | None, typer.Option(help="Maximum queue size. Defaults to 'queue_limit' in config.")
    ] = None,
    include_all: Annotated[
        bool, typer.Option("--all", help="Also include items that are not due yet.")
    ] = False,
):
    """Show the prioritized study queue.

    Overdue items come first, then harder items (lower ease factor), then
    items with shorter intervals.
    """
    config, service = _service(ctx)
    result = _run(service.get_queue(limit=limit or config.queue_limit, include_not_due=include_all))

    logger.info(
        f"Queue: {len(result.items)} items ({result.due_count} due, "
        f"{result.skipped_count} skipped by limit)"
    )
    _echo_json([item_to_json(i) for i in result.items])


@app.command()
def stats(ctx: typer.Context):
    """Print aggregate review statistics."""
    _, service = _service(ctx)
    _echo_json(stats_to_json(_run(service.get_stats())))


# ---------------------------------------------------------------------------
# Speech practice
# ---------------------------------------------------------------------------


@app.command()
def pronounce(
    recognized: Annotated[str, typer.Argument(help="Transcript from speech recognition.")],
    target: Annotated[str, typer.Argument(help="Phrase the learner tried to say.")],
    threshold: Annotated[
        float | None, typer.Option(help="Pass threshold (0-1). Defaults to config.")
    ] = None,
):
    """Score a pronunciation attempt against the target phrase."""
    from prolingo.application.pronunciation import score_pronunciation

    config = resolve_config()
    result = score_pronunciation(
        recognized, target, threshold if threshold is not None else config.pronunciation_threshold
    )
    _echo_json({"success": result.success, "accuracy": round(result.accuracy, 2)})
    if not result.success:
        raise typer.Exit(1)


# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------


@app.command()
def serve(
    host: Annotated[str | None, typer.Option(help="Bind address.")] = None,
    port: Annotated[int | None, typer.Option(help="Port to listen on.")] = None,
    reload: Annotated[bool, typer.Option("--reload", help="Auto-reload on code changes.")] = False,
):
    """Start the HTTP API server."""
    import uvicorn

    config = resolve_config({"server_host": host, "server_port": port})
    logger.info(f"Starting server on {config.server_host}:{config.server_port}")
    uvicorn.run(
        "prolingo.server:app",
        host=config.server_host,
        port=config.server_port,
        reload=reload,
    )


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show():
    """Display the resolved configuration as JSON."""
    config = resolve_config()
    _echo_json(config.model_dump(mode="json"))
