"""
HTTP transport for the DigitalOcean API
"""
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

import requests
from requests.exceptions import ConnectionError as RequestsConnectionError
from requests.exceptions import RequestException, Timeout
from requests.structures import CaseInsensitiveDict

from .buffer import ResponseBuffer
from ..errors import InvalidParameterError, ResourceExhaustedError, TransportError

logger = logging.getLogger("do_cli.lib.api.transport")

DEFAULT_TIMEOUT = 30
DEFAULT_USER_AGENT = "do-cli/0.1.0"
CHUNK_SIZE = 8192


@dataclass
class HTTPResponse:
    """Completed HTTP exchange, whatever the status code"""
    status_code: int
    body: bytes = b""
    headers: Mapping[str, str] = field(default_factory=CaseInsensitiveDict)

    def __post_init__(self):
        if not isinstance(self.headers, CaseInsensitiveDict):
            self.headers = CaseInsensitiveDict(self.headers)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def json(self) -> Any:
        return json.loads(self.body)


def build_auth_header(token: str) -> str:
    """Format the Authorization header line for a bearer token"""
    if not token:
        raise InvalidParameterError("Token is required to build an auth header")
    return f"Authorization: Bearer {token}"


def build_url(base_url: str, endpoint: str) -> str:
    """Join the API origin and an endpoint path"""
    if not base_url or not endpoint:
        raise InvalidParameterError("Base URL and endpoint are required")
    return f"{base_url.rstrip('/')}/{endpoint.lstrip('/')}"


class Transport:
    """
    Single-attempt HTTP client with bearer auth, timeout and TLS verification

    The timeout is handed to requests as-is, so it bounds the connect and
    each socket read separately. A slow body that keeps trickling in can
    take longer than the timeout in total.
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT,
                 user_agent: str = DEFAULT_USER_AGENT,
                 session: Optional[requests.Session] = None):
        if timeout is None or timeout <= 0:
            raise InvalidParameterError(f"Timeout must be positive, got {timeout}")
        self.timeout = timeout
        self.user_agent = user_agent
        self.session = session if session is not None else requests.Session()

    def get(self, url: str, auth_header: Optional[str] = None) -> HTTPResponse:
        return self._perform("GET", url, auth_header)

    def post(self, url: str, auth_header: Optional[str] = None,
             body: Optional[str] = None) -> HTTPResponse:
        return self._perform("POST", url, auth_header, body)

    def delete(self, url: str, auth_header: Optional[str] = None) -> HTTPResponse:
        return self._perform("DELETE", url, auth_header)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "Transport":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _headers(self, auth_header: Optional[str]) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "User-Agent": self.user_agent,
        }
        if auth_header:
            name, sep, value = auth_header.partition(":")
            if not sep or not name.strip():
                raise InvalidParameterError("Auth header must look like 'Name: value'")
            headers[name.strip()] = value.strip()
        return headers

    def _perform(self, method: str, url: str, auth_header: Optional[str],
                 body: Optional[str] = None) -> HTTPResponse:
        """
        Execute one request and capture the full body

        Args:
            method: HTTP method
            url: Absolute request URL
            auth_header: Preformatted header line, sent verbatim
            body: Optional JSON request body

        Returns:
            HTTPResponse for any status code

        Raises:
            InvalidParameterError: If the URL is missing
            TransportError: On connection, DNS, timeout or other network faults
            ResourceExhaustedError: If the body could not be buffered
        """
        if not url:
            raise InvalidParameterError("URL is required")

        headers = self._headers(auth_header)
        data = body.encode("utf-8") if body is not None else None
        logger.debug(f"{method} {url}")

        buffer = ResponseBuffer()
        try:
            with self.session.request(
                method,
                url,
                headers=headers,
                data=data,
                timeout=self.timeout,
                verify=True,
                allow_redirects=True,
                stream=True,
            ) as response:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        buffer.append(chunk)
                status_code = response.status_code
                response_headers = CaseInsensitiveDict(response.headers)
        except Timeout as e:
            logger.error(f"{method} {url} timed out after {self.timeout}s")
            raise TransportError(f"Request timed out after {self.timeout} seconds") from e
        except RequestsConnectionError as e:
            logger.error(f"{method} {url} failed to connect: {str(e)}")
            raise TransportError(f"Connection failed: {str(e)}") from e
        except RequestException as e:
            logger.error(f"{method} {url} failed: {str(e)}")
            raise TransportError(f"HTTP request failed: {str(e)}") from e
        except MemoryError as e:
            buffer.release()
            raise ResourceExhaustedError("Out of memory while reading response body") from e

        logger.debug(f"{method} {url} -> {status_code} ({buffer.size} bytes)")
        content = buffer.getvalue()
        buffer.release()
        return HTTPResponse(status_code=status_code, body=content, headers=response_headers)
