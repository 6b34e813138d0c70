"""
Error taxonomy for the DigitalOcean API client
"""
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Kinds of failure surfaced by the client"""
    INVALID_PARAMETER = "invalid_parameter"
    RESOURCE_EXHAUSTED = "resource_exhausted"
    TRANSPORT_FAILURE = "transport_failure"
    MALFORMED_RESPONSE = "malformed_response"
    AUTHENTICATION = "authentication_error"
    CONFIGURATION = "configuration_error"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"


DEFAULT_MESSAGES = {
    ErrorKind.INVALID_PARAMETER: "Invalid parameter",
    ErrorKind.RESOURCE_EXHAUSTED: "Memory allocation failed",
    ErrorKind.TRANSPORT_FAILURE: "HTTP request failed",
    ErrorKind.MALFORMED_RESPONSE: "JSON parsing failed",
    ErrorKind.AUTHENTICATION: "Authentication failed",
    ErrorKind.CONFIGURATION: "Configuration error",
    ErrorKind.NOT_FOUND: "Resource not found",
    ErrorKind.RATE_LIMITED: "Rate limit exceeded",
}


class DigitalOceanError(Exception):
    """Base exception for all client operations"""
    kind: ErrorKind = ErrorKind.TRANSPORT_FAILURE

    def __init__(self, message: Optional[str] = None):
        self.message = message or DEFAULT_MESSAGES[self.kind]
        super().__init__(self.message)


class InvalidParameterError(DigitalOceanError, ValueError):
    """A caller-supplied argument was rejected before any request"""
    kind = ErrorKind.INVALID_PARAMETER


class ResourceExhaustedError(DigitalOceanError):
    """Response body could not be buffered"""
    kind = ErrorKind.RESOURCE_EXHAUSTED


class TransportError(DigitalOceanError):
    """Connection, DNS, timeout or other network fault"""
    kind = ErrorKind.TRANSPORT_FAILURE


class APIError(TransportError):
    """Non-success HTTP status without a more specific kind"""

    def __init__(self, status_code: int, message: Optional[str] = None):
        self.status_code = status_code
        super().__init__(f"API error ({status_code}): {message or 'Unknown error'}")


class MalformedResponseError(DigitalOceanError):
    """Body was not JSON or lacked the expected envelope"""
    kind = ErrorKind.MALFORMED_RESPONSE


class AuthenticationError(DigitalOceanError):
    """Missing, empty or rejected API token"""
    kind = ErrorKind.AUTHENTICATION


class ConfigError(DigitalOceanError):
    """Configuration error"""
    kind = ErrorKind.CONFIGURATION


class NotFoundError(DigitalOceanError):
    """Requested resource does not exist"""
    kind = ErrorKind.NOT_FOUND


class RateLimitedError(DigitalOceanError):
    """API rate limit exceeded"""
    kind = ErrorKind.RATE_LIMITED

    def __init__(self, message: Optional[str] = None, retry_after: Optional[str] = None):
        self.retry_after = retry_after
        super().__init__(message)
