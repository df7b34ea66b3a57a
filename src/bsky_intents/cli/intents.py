"""CLI: bsky-intents parse, dispatch, watch"""

import asyncio
import json
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from bsky_intents.capabilities import AppCapabilities
from bsky_intents.config import IntentSettings
from bsky_intents.driver import IncomingLinkSource, SubscriptionDriver
from bsky_intents.errors import IntentsError
from bsky_intents.handler import IntentHandler
from bsky_intents.links import normalize_url
from bsky_intents.models.compose import ComposerOpts
from bsky_intents.models.intent import PipelineState

console = Console()

# Slack on top of the dispatch delay before giving up on the composer opening.
WAIT_MARGIN_S = 1.0


def _get_settings(**overrides) -> IntentSettings:
    from bsky_intents.cli.main import _get_settings
    return _get_settings(**overrides)


def _run(coro):
    from bsky_intents.cli.main import _run
    return _run(coro)


def _console_capabilities(settings: IntentSettings, opened: Optional[asyncio.Queue] = None) -> AppCapabilities:
    """Capabilities that print what the app would do."""

    def close_all() -> None:
        console.print("[dim]Closing active elements[/dim]")

    def open_composer(opts: ComposerOpts) -> None:
        console.print(f"[green]Open composer:[/green] {escape(json.dumps(opts.to_dict()))}", soft_wrap=True)
        if opened is not None:
            opened.put_nowait(opts)

    return AppCapabilities(
        has_session=lambda: settings.handle is not None,
        close_all_active_elements=close_all,
        open_composer=open_composer,
        is_native=settings.native,
    )


def _print_state(url: str, state: str) -> None:
    if state == PipelineState.NO_INTENT:
        console.print(f"[yellow]Not an intent:[/yellow] {escape(url)}", soft_wrap=True)
    elif state == PipelineState.DROPPED:
        console.print("[yellow]Dropped: not logged in.[/yellow]")
    elif state == PipelineState.SCHEDULED:
        console.print("[dim]Scheduled[/dim]")


@click.command("parse")
@click.argument("url")
@click.option("--json-output", "--json", is_flag=True)
def parse_cmd(url: str, json_output: bool):
    """Show what URL resolves to, without dispatching."""
    settings = _get_settings()
    handler = IntentHandler.from_settings(_console_capabilities(settings), settings)
    try:
        intent = handler.parse(url)
    except IntentsError as e:
        console.print(f"[red]{escape(str(e))}[/red]", soft_wrap=True)
        raise SystemExit(1)

    payload = None
    if intent is not None:
        payload = handler.registry.get(intent.kind).validator(intent.raw_params)

    if json_output:
        click.echo(json.dumps({
            "normalized": normalize_url(url, settings.scheme),
            "kind": intent.kind.value if intent else None,
            "params": intent.raw_params if intent else None,
            "payload": payload.model_dump() if payload is not None else None,
        }, indent=2))
        return
    if intent is None:
        console.print(f"[yellow]Not an intent:[/yellow] {escape(url)}", soft_wrap=True)
        return

    table = Table(title=f"Intent: {intent.kind.value}")
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("normalized", escape(normalize_url(url, settings.scheme)))
    for key, value in intent.raw_params.items():
        table.add_row(escape(f"param:{key}"), escape(value))
    for key, value in payload.model_dump().items():
        table.add_row(key, escape(json.dumps(value)))
    console.print(table)


@click.command("dispatch")
@click.argument("url")
@click.option("--native/--web", default=None, help="Override platform image-attachment support")
@click.option("--delay-ms", type=int, default=None, help="Override the teardown delay")
def dispatch_cmd(url: str, native: Optional[bool], delay_ms: Optional[int]):
    """Run URL through the full pipeline."""
    settings = _get_settings(native=native, delay_ms=delay_ms)

    async def _dispatch():
        opened: asyncio.Queue[ComposerOpts] = asyncio.Queue()
        handler = IntentHandler.from_settings(_console_capabilities(settings, opened), settings)
        state = handler.handle_url(url)
        _print_state(url, state)
        if state != PipelineState.SCHEDULED:
            return
        try:
            await asyncio.wait_for(opened.get(), timeout=settings.delay_s + WAIT_MARGIN_S)
        except asyncio.TimeoutError:
            console.print("[red]Timed out waiting for the composer to open[/red]")
            raise SystemExit(1)

    try:
        _run(_dispatch())
    except IntentsError as e:
        console.print(f"[red]{escape(str(e))}[/red]", soft_wrap=True)
        raise SystemExit(1)


@click.command("watch")
def watch_cmd():
    """Dispatch links read line by line from stdin until EOF."""
    settings = _get_settings()
    stdin = click.get_text_stream("stdin")

    async def _watch():
        handler = IntentHandler.from_settings(_console_capabilities(settings), settings)
        source = IncomingLinkSource()
        driver = SubscriptionDriver(source, handler, on_state=_print_state)
        driver.start()
        loop = asyncio.get_running_loop()
        try:
            while True:
                line = await loop.run_in_executor(None, stdin.readline)
                if not line:
                    break
                url = line.strip()
                if not url:
                    continue
                if url == driver.last_url:
                    console.print(f"[dim]Already handled: {escape(url)}[/dim]", soft_wrap=True)
                    continue
                try:
                    source.set(url)
                except IntentsError as e:
                    console.print(f"[red]{escape(str(e))}[/red]", soft_wrap=True)
            # Let the last scheduled dispatch fire before the loop closes.
            await asyncio.sleep(settings.delay_s + 0.05)
        finally:
            driver.stop()

    _run(_watch())
