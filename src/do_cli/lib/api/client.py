"""
DigitalOcean API client
"""
import logging
from pathlib import Path
from typing import Any, Callable, List, Optional, TypeVar

from ..config import Config
from ..errors import (
    APIError,
    AuthenticationError,
    InvalidParameterError,
    NotFoundError,
    RateLimitedError,
)
from . import codec
from .transport import HTTPResponse, Transport, build_auth_header, build_url
from .types import Account, CreateDropletRequest, Droplet

logger = logging.getLogger("do_cli.lib.api.client")

T = TypeVar("T")

ACCOUNT_ENDPOINT = "/v2/account"
DROPLETS_ENDPOINT = "/v2/droplets"


def _droplet_endpoint(droplet_id: int) -> str:
    if isinstance(droplet_id, bool) or not isinstance(droplet_id, int) or droplet_id <= 0:
        raise InvalidParameterError(f"Invalid droplet ID: {droplet_id}")
    return f"{DROPLETS_ENDPOINT}/{droplet_id}"


class DigitalOceanClient:
    """Typed operations over the DigitalOcean REST API"""

    def __init__(self, config: Config, transport: Optional[Transport] = None):
        """
        Initialize the client

        Args:
            config: Configuration with token and base URL
            transport: Transport to use (built from config.timeout if omitted)

        Raises:
            AuthenticationError: If the token is missing or empty
            ConfigError: If the base URL is missing or empty
        """
        config.validate()
        self.config = config
        self.transport = transport if transport is not None else Transport(timeout=config.timeout)
        self.auth_header = build_auth_header(config.token)
        logger.debug(f"Client ready for {config.base_url}")

    @classmethod
    def from_config(cls, path: Optional[Path] = None,
                    transport: Optional[Transport] = None) -> 'DigitalOceanClient':
        """Load configuration from file and environment, then build a client"""
        return cls(Config.load(path), transport=transport)

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> 'DigitalOceanClient':
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _url(self, endpoint: str) -> str:
        return build_url(self.config.base_url, endpoint)

    def _check_status(self, response: HTTPResponse) -> None:
        """Map a non-success HTTP status to an error"""
        if response.ok:
            return
        message = codec.parse_error_message(response.body)
        status = response.status_code
        logger.debug(f"API returned {status}: {message}")
        if status in (401, 403):
            raise AuthenticationError(message or "Authentication failed")
        if status == 404:
            raise NotFoundError(message or "Resource not found")
        if status == 429:
            raise RateLimitedError(
                message or "Rate limit exceeded",
                retry_after=response.headers.get("Retry-After"),
            )
        raise APIError(status, message)

    def _decode(self, response: HTTPResponse, decoder: Callable[[Any], T]) -> T:
        self._check_status(response)
        return decoder(codec.parse_json(response.body))

    def get_account(self) -> Account:
        """Get account information"""
        response = self.transport.get(self._url(ACCOUNT_ENDPOINT), self.auth_header)
        return self._decode(response, codec.decode_account_envelope)

    def list_droplets(self) -> List[Droplet]:
        """List droplets in the order the API returns them"""
        response = self.transport.get(self._url(DROPLETS_ENDPOINT), self.auth_header)
        droplets = self._decode(response, codec.decode_droplets_envelope)
        logger.info(f"Found {len(droplets)} droplets")
        return droplets

    def get_droplet(self, droplet_id: int) -> Droplet:
        """
        Get a droplet by ID

        Raises:
            InvalidParameterError: If droplet_id is not a positive integer
        """
        endpoint = _droplet_endpoint(droplet_id)
        response = self.transport.get(self._url(endpoint), self.auth_header)
        return self._decode(response, codec.decode_droplet_envelope)

    def create_droplet(self, request: CreateDropletRequest) -> Droplet:
        """
        Create a droplet

        Args:
            request: Creation parameters; name, region, size and image are required

        Returns:
            The droplet as reported by the API

        Raises:
            InvalidParameterError: If a required field is empty
        """
        if request is None:
            raise InvalidParameterError("Create request is required")
        missing = request.missing_fields()
        if missing:
            raise InvalidParameterError(f"Missing required fields: {', '.join(missing)}")

        body = codec.dumps(codec.encode_create_droplet(request))
        logger.info(f"Creating droplet {request.name} in {request.region}")
        response = self.transport.post(self._url(DROPLETS_ENDPOINT), self.auth_header, body)
        return self._decode(response, codec.decode_droplet_envelope)

    def delete_droplet(self, droplet_id: int) -> None:
        """
        Delete a droplet by ID

        The response body is not parsed.
        """
        endpoint = _droplet_endpoint(droplet_id)
        response = self.transport.delete(self._url(endpoint), self.auth_header)
        self._check_status(response)
        logger.info(f"Deleted droplet {droplet_id}")
