"""CLI: bsky-intents auth login|status|logout

The pipeline only asks whether a session exists, so "login" just records a
handle in the config file.
"""

import click
from rich.console import Console

console = Console()


def _load_config() -> dict:
    from bsky_intents.cli.main import _load_config
    return _load_config()


def _save_config(cfg: dict) -> None:
    from bsky_intents.cli.main import _save_config
    _save_config(cfg)


@click.group()
def auth():
    """Session commands."""


@auth.command("login")
@click.argument("handle")
def auth_login(handle: str):
    """Mark HANDLE as the signed-in account."""
    handle = handle.lstrip("@")
    _save_config({**_load_config(), "handle": handle})
    console.print(f"[green]Logged in as @{handle}[/green]")


@auth.command("status")
def auth_status():
    """Show current session status."""
    cfg = _load_config()
    if cfg.get("handle"):
        console.print(f"[green]Logged in[/green] as @{cfg['handle']}")
    else:
        console.print("[yellow]Not logged in. Intents will be dropped. Run `bsky-intents auth login`.[/yellow]")


@auth.command("logout")
def auth_logout():
    """Clear the saved session."""
    cfg = _load_config()
    cfg.pop("handle", None)
    _save_config(cfg)
    console.print("[green]Logged out.[/green]")
