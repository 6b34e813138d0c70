"""
DigitalOcean API core: transport, codec and typed client
"""

from .buffer import ResponseBuffer
from .client import DigitalOceanClient
from .transport import HTTPResponse, Transport, build_auth_header, build_url
from .types import (
    Account,
    CreateDropletRequest,
    Droplet,
    Image,
    Kernel,
    Networks,
    NetworkV4,
    NetworkV6,
    Region,
    Size,
    Team,
)

__all__ = [
    "ResponseBuffer",
    "DigitalOceanClient",
    "HTTPResponse",
    "Transport",
    "build_auth_header",
    "build_url",
    "Account",
    "CreateDropletRequest",
    "Droplet",
    "Image",
    "Kernel",
    "Networks",
    "NetworkV4",
    "NetworkV6",
    "Region",
    "Size",
    "Team",
]
