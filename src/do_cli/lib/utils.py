"""
Utility functions for do-cli
"""
import json
import logging
import os
from dataclasses import asdict, is_dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"


class OutputFormat(str, Enum):
    """Output formats for read commands"""
    table = "table"
    json = "json"
    yaml = "yaml"


def ensure_permissions(path: Path, mode: int = 0o600) -> None:
    """
    Ensure file has correct permissions

    Args:
        path: Path to file
        mode: Permission mode
    """
    if os.name != 'nt':  # Skip on Windows
        path.chmod(mode)


def to_serializable(value: Any) -> Any:
    """Convert entities into plain JSON/YAML friendly structures"""
    if is_dataclass(value) and not isinstance(value, type):
        return to_serializable(asdict(value))
    if isinstance(value, dict):
        return {key: to_serializable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_serializable(item) for item in value]
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def render_document(value: Any, output: OutputFormat) -> str:
    """
    Render entities as a JSON or YAML document

    Args:
        value: Entity, list of entities or plain data
        output: json or yaml

    Returns:
        Document text
    """
    data = to_serializable(value)
    if output == OutputFormat.yaml:
        return yaml.safe_dump(data, sort_keys=False, default_flow_style=False)
    if output == OutputFormat.json:
        return json.dumps(data, indent=2)
    raise ValueError(f"Not a document format: {output}")


def or_na(value: Optional[Any]) -> str:
    """Display value, or N/A if unset"""
    if value is None or value == "":
        return NOT_AVAILABLE
    return str(value)


def format_date(value: Optional[datetime]) -> str:
    """Format a timestamp as YYYY-MM-DD"""
    return value.strftime("%Y-%m-%d") if value else NOT_AVAILABLE


def format_datetime(value: Optional[datetime]) -> str:
    """Format a timestamp as YYYY-MM-DD HH:MM:SS with its zone"""
    return value.strftime("%Y-%m-%d %H:%M:%S %Z").strip() if value else NOT_AVAILABLE


def parse_droplet_id(value: str) -> int:
    """Parse a droplet ID argument; 0 or anything non-numeric is rejected"""
    try:
        droplet_id = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid droplet ID: {value}")
    if droplet_id <= 0:
        raise ValueError(f"Invalid droplet ID: {value}")
    return droplet_id
