"""
bsky-intents CLI: `bsky-intents` command.

Commands:
  bsky-intents auth <cmd>          Simulated session (login|status|logout)
  bsky-intents config <cmd>        Show or change settings
  bsky-intents parse <url>         Show what a link resolves to
  bsky-intents dispatch <url>      Run a link through the full pipeline
  bsky-intents watch               Dispatch links read from stdin
"""

import asyncio
import logging

try:
    import click
    from rich.console import Console
    from rich.logging import RichHandler
except ImportError:
    raise SystemExit("CLI requires extras: pip install bsky-intents[cli]")

from bsky_intents import __version__
from bsky_intents.config import CONFIG_FILE, IntentSettings, load_raw_config, load_settings, save_raw_config
from bsky_intents.errors import IntentsError

console = Console()


def _load_config() -> dict:
    return load_raw_config(CONFIG_FILE)


def _save_config(cfg: dict) -> None:
    save_raw_config(cfg, CONFIG_FILE)


def _get_settings(**overrides) -> IntentSettings:
    try:
        return load_settings(CONFIG_FILE, **overrides)
    except IntentsError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)


def _run(coro):
    return asyncio.run(coro)


def _configure_logging(verbose: bool) -> None:
    logger = logging.getLogger("bsky_intents")
    logger.handlers.clear()
    if verbose:
        logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.WARNING)


@click.group()
@click.version_option(__version__)
@click.option("-v", "--verbose", is_flag=True, help="Log every pipeline step to stderr")
def main(verbose: bool):
    """bsky-intents: inspect and dispatch Bluesky intent links."""
    _configure_logging(verbose)


# Register subcommands from separate modules
from bsky_intents.cli.auth import auth
from bsky_intents.cli.settings import config
from bsky_intents.cli.intents import parse_cmd, dispatch_cmd, watch_cmd

main.add_command(auth)
main.add_command(config)
main.add_command(parse_cmd)
main.add_command(dispatch_cmd)
main.add_command(watch_cmd)


if __name__ == "__main__":
    main()
