"""
Core library for do-cli
"""

from .config import Config, mask_token
from .errors import (
    ErrorKind,
    DigitalOceanError,
    InvalidParameterError,
    ResourceExhaustedError,
    TransportError,
    APIError,
    MalformedResponseError,
    AuthenticationError,
    ConfigError,
    NotFoundError,
    RateLimitedError
)
from .api import DigitalOceanClient, Transport, ResponseBuffer

# Import utils module, not individual functions
import do_cli.lib.utils as utils

__version__ = "0.1.0"

__all__ = [
    "Config",
    "mask_token",
    "ErrorKind",
    "DigitalOceanError",
    "InvalidParameterError",
    "ResourceExhaustedError",
    "TransportError",
    "APIError",
    "MalformedResponseError",
    "AuthenticationError",
    "ConfigError",
    "NotFoundError",
    "RateLimitedError",
    "DigitalOceanClient",
    "Transport",
    "ResponseBuffer",
    "utils"
]
