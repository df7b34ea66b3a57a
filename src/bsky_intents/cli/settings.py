"""CLI: bsky-intents config show|set"""

import json

import click
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from bsky_intents.config import IntentSettings

console = Console()

SETTABLE = ("scheme", "delay_ms", "native")


def _load_config() -> dict:
    from bsky_intents.cli.main import _load_config
    return _load_config()


def _save_config(cfg: dict) -> None:
    from bsky_intents.cli.main import _save_config
    _save_config(cfg)


def _get_settings() -> IntentSettings:
    from bsky_intents.cli.main import _get_settings
    return _get_settings()


@click.group()
def config():
    """Settings management."""


@config.command("show")
@click.option("--json-output", "--json", is_flag=True)
def config_show(json_output: bool):
    """Show effective settings."""
    settings = _get_settings()
    if json_output:
        click.echo(json.dumps(settings.model_dump(), indent=2))
        return
    table = Table(title="Settings")
    table.add_column("Key", style="bold")
    table.add_column("Value")
    for key, value in settings.model_dump().items():
        table.add_row(key, "" if value is None else str(value))
    console.print(table)


@config.command("set")
@click.argument("key", type=click.Choice(SETTABLE))
@click.argument("value")
def config_set(key: str, value: str):
    """Change a setting."""
    cfg = {**_load_config(), key: value}
    try:
        settings = IntentSettings.model_validate(cfg)
    except ValidationError as e:
        console.print(f"[red]Invalid value for {key}: {e.errors()[0]['msg']}[/red]")
        raise SystemExit(1)
    cfg[key] = getattr(settings, key)
    _save_config(cfg)
    console.print(f"[green]{key} = {cfg[key]}[/green]")
