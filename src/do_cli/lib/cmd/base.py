"""
Shared helpers for command implementations
"""
import logging
from contextlib import contextmanager
from typing import Iterator

import typer
from rich.console import Console

from ..errors import AuthenticationError, ConfigError, DigitalOceanError

console = Console()
logger = logging.getLogger("do_cli.lib.cmd.base")

CONFIG_HINT = "Please run 'do-cli config set token <TOKEN>' or set DIGITALOCEAN_TOKEN."


@contextmanager
def api_errors(action: str) -> Iterator[None]:
    """
    Turn client errors into a console message and exit status 1

    Args:
        action: What was being attempted, e.g. "list droplets"
    """
    try:
        yield
    except (AuthenticationError, ConfigError) as e:
        logger.debug(f"{action} failed: {e.kind.value}", exc_info=True)
        console.print(f"[bold red]Failed to {action}: {str(e)}")
        console.print(CONFIG_HINT)
        raise typer.Exit(code=1)
    except DigitalOceanError as e:
        logger.debug(f"{action} failed: {e.kind.value}", exc_info=True)
        console.print(f"[bold red]Failed to {action}: {str(e)}")
        raise typer.Exit(code=1)
