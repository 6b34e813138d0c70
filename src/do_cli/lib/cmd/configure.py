"""
Config commands implementation for do-cli (set and get)
"""
from typing import Optional

from ..config import Config
from .base import api_errors, console


def config_set_command(key: str, value: str) -> None:
    """Set a configuration value and save it"""
    with api_errors("update config"):
        config = Config.load(env=False)
        config.set(key, value)
        path = config.save()

    shown = config.get(key)
    console.print(f"[bold green]✓ Configuration updated: {key} = {shown}")
    console.print(f"Saved to {path}")


def config_get_command(key: Optional[str] = None) -> None:
    """Show configuration values, token masked"""
    with api_errors("read config"):
        config = Config.load()
        if key is not None:
            console.print(f"{key}: {config.get(key)}")
            return

    console.print("[bold]Configuration:")
    console.print(f"  token: {config.get('token')}")
    console.print(f"  base-url: {config.get('base-url')}")
    console.print(f"  timeout: {config.get('timeout')}")
