"""
Tests for the DigitalOcean API client
"""
import json

import pytest
from unittest.mock import Mock

from do_cli.lib.api.client import DigitalOceanClient
from do_cli.lib.api.transport import HTTPResponse
from do_cli.lib.api.types import CreateDropletRequest
from do_cli.lib.config import Config
from do_cli.lib.errors import (
    APIError,
    AuthenticationError,
    ConfigError,
    ErrorKind,
    InvalidParameterError,
    MalformedResponseError,
    NotFoundError,
    RateLimitedError,
    TransportError,
)

AUTH = "Authorization: Bearer test-token"


def response(status_code=200, document=None, body=None, headers=None):
    """Build an HTTPResponse from a JSON document or raw body"""
    if body is None:
        body = json.dumps(document).encode("utf-8") if document is not None else b""
    return HTTPResponse(status_code=status_code, body=body, headers=headers or {})


@pytest.fixture
def config():
    """Test configuration"""
    return Config(token="test-token", base_url="https://api.example.com")


@pytest.fixture
def transport():
    """Mock transport"""
    return Mock()


@pytest.fixture
def client(config, transport):
    """Client wired to the mock transport"""
    return DigitalOceanClient(config, transport=transport)


def test_init_requires_token(transport):
    """Test missing token is an authentication error"""
    with pytest.raises(AuthenticationError):
        DigitalOceanClient(Config(token=""), transport=transport)


def test_init_requires_base_url(transport):
    """Test empty base URL is a configuration error"""
    with pytest.raises(ConfigError):
        DigitalOceanClient(Config(token="tok", base_url=""), transport=transport)


def test_get_account(client, transport):
    """Test account retrieval"""
    transport.get.return_value = response(document={
        "account": {"email": "sammy@example.com", "droplet_limit": 25, "status": "active"}
    })

    account = client.get_account()

    transport.get.assert_called_once_with("https://api.example.com/v2/account", AUTH)
    assert account.email == "sammy@example.com"
    assert account.droplet_limit == 25


def test_list_droplets(client, transport):
    """Test droplet listing"""
    transport.get.return_value = response(document={
        "droplets": [
            {"id": 1, "name": "web-1", "networks": {"v4": [{"ip_address": "1.2.3.4", "type": "public"}]}},
            {"id": 2, "name": "web-2"},
        ]
    })

    droplets = client.list_droplets()

    transport.get.assert_called_once_with("https://api.example.com/v2/droplets", AUTH)
    assert [d.name for d in droplets] == ["web-1", "web-2"]
    assert droplets[0].public_ipv4 == "1.2.3.4"


def test_list_droplets_empty(client, transport):
    """Test no droplets is an empty list"""
    transport.get.return_value = response(document={"droplets": []})
    assert client.list_droplets() == []


def test_list_droplets_missing_key(client, transport):
    """Test success status with wrong envelope"""
    transport.get.return_value = response(document={"droplet": {}})
    with pytest.raises(MalformedResponseError):
        client.list_droplets()


def test_get_droplet(client, transport):
    """Test single droplet retrieval"""
    transport.get.return_value = response(document={"droplet": {"id": 42, "name": "db"}})

    droplet = client.get_droplet(42)

    transport.get.assert_called_once_with("https://api.example.com/v2/droplets/42", AUTH)
    assert droplet.id == 42


@pytest.mark.parametrize("droplet_id", [0, -1, True, "42", None])
def test_get_droplet_invalid_id(client, transport, droplet_id):
    """Test invalid IDs fail before any request"""
    with pytest.raises(InvalidParameterError) as exc_info:
        client.get_droplet(droplet_id)
    assert exc_info.value.kind == ErrorKind.INVALID_PARAMETER
    transport.get.assert_not_called()


def test_create_droplet(client, transport):
    """Test create sends the encoded request"""
    transport.post.return_value = response(202, {"droplet": {"id": 99, "name": "web-1", "status": "new"}})
    request = CreateDropletRequest(
        name="web-1", region="nyc3", size="s-1vcpu-1gb", image="ubuntu-22-04-x64", tags=("a", "b")
    )

    droplet = client.create_droplet(request)

    url, auth, body = transport.post.call_args[0]
    assert url == "https://api.example.com/v2/droplets"
    assert auth == AUTH
    assert json.loads(body) == {
        "name": "web-1",
        "region": "nyc3",
        "size": "s-1vcpu-1gb",
        "image": "ubuntu-22-04-x64",
        "tags": ["a", "b"],
    }
    assert droplet.id == 99
    assert droplet.status == "new"


@pytest.mark.parametrize("field", ["name", "region", "size", "image"])
def test_create_droplet_missing_field(client, transport, field):
    """Test required fields are checked before any request"""
    values = {"name": "web-1", "region": "nyc3", "size": "s-1vcpu-1gb", "image": "ubuntu"}
    values[field] = ""

    with pytest.raises(InvalidParameterError, match=field):
        client.create_droplet(CreateDropletRequest(**values))

    transport.post.assert_not_called()


def test_create_droplet_none_request(client, transport):
    """Test missing request"""
    with pytest.raises(InvalidParameterError):
        client.create_droplet(None)
    transport.post.assert_not_called()


def test_delete_droplet(client, transport):
    """Test delete with 204 No Content"""
    transport.delete.return_value = response(204)

    assert client.delete_droplet(42) is None
    transport.delete.assert_called_once_with("https://api.example.com/v2/droplets/42", AUTH)


def test_delete_droplet_ignores_body(client, transport):
    """Test the delete response body is never parsed"""
    transport.delete.return_value = response(204, body=b"not json")
    client.delete_droplet(42)


def test_delete_droplet_invalid_id(client, transport):
    """Test delete with ID 0"""
    with pytest.raises(InvalidParameterError):
        client.delete_droplet(0)
    transport.delete.assert_not_called()


def test_delete_droplet_not_found(client, transport):
    """Test delete of a missing droplet"""
    transport.delete.return_value = response(404, {"id": "not_found", "message": "The resource you were accessing could not be found."})
    with pytest.raises(NotFoundError, match="could not be found"):
        client.delete_droplet(42)


@pytest.mark.parametrize("status_code,error", [
    (401, AuthenticationError),
    (403, AuthenticationError),
    (404, NotFoundError),
    (429, RateLimitedError),
    (500, APIError),
    (503, APIError),
])
def test_status_mapping(client, transport, status_code, error):
    """Test non-success statuses map to error kinds"""
    transport.get.return_value = response(status_code, {"id": "error", "message": "nope"})
    with pytest.raises(error):
        client.get_droplet(1)


def test_api_error_carries_status(client, transport):
    """Test generic API errors"""
    transport.get.return_value = response(500, {"id": "server_error", "message": "Server was unable to give you a response."})

    with pytest.raises(APIError) as exc_info:
        client.get_account()

    assert exc_info.value.status_code == 500
    assert "Server was unable" in str(exc_info.value)
    assert isinstance(exc_info.value, TransportError)


def test_rate_limit_retry_after(client, transport):
    """Test Retry-After is surfaced"""
    transport.get.return_value = response(429, {"message": "Too many requests"}, headers={"Retry-After": "60"})

    with pytest.raises(RateLimitedError) as exc_info:
        client.list_droplets()

    assert exc_info.value.retry_after == "60"
    assert exc_info.value.kind == ErrorKind.RATE_LIMITED


def test_transport_error_propagates_after_one_attempt(client, transport):
    """Test transport failures are not retried"""
    transport.get.side_effect = TransportError("Request timed out after 30 seconds")

    with pytest.raises(TransportError):
        client.get_account()

    assert transport.get.call_count == 1


def test_non_json_success_body(client, transport):
    """Test a 200 with a non-JSON body"""
    transport.get.return_value = response(200, body=b"<html></html>")
    with pytest.raises(MalformedResponseError):
        client.get_account()


def test_from_config_reads_environment(monkeypatch, tmp_path, transport):
    """Test environment configuration"""
    monkeypatch.setenv("DIGITALOCEAN_TOKEN", "env-token")
    monkeypatch.setenv("DIGITALOCEAN_BASE_URL", "https://do.internal")
    monkeypatch.delenv("DIGITALOCEAN_TIMEOUT", raising=False)

    client = DigitalOceanClient.from_config(tmp_path / "missing.ini", transport=transport)

    assert client.auth_header == "Authorization: Bearer env-token"
    assert client.config.base_url == "https://do.internal"


def test_from_config_without_token(monkeypatch, tmp_path, transport):
    """Test no token anywhere"""
    monkeypatch.delenv("DIGITALOCEAN_TOKEN", raising=False)

    with pytest.raises(AuthenticationError):
        DigitalOceanClient.from_config(tmp_path / "missing.ini", transport=transport)


def test_context_manager_closes_transport(config, transport):
    """Test transport cleanup"""
    with DigitalOceanClient(config, transport=transport):
        pass
    transport.close.assert_called_once()


def test_non_finite_numbers_do_not_escape(client, transport):
    """Test NaN in an id array still yields a typed result"""
    transport.get.return_value = response(200, body=b'{"droplet": {"id": 1, "backup_ids": [NaN]}}')

    droplet = client.get_droplet(1)

    assert droplet.backup_ids == ()


def test_deeply_nested_response_is_malformed(client, transport):
    """Test recursion limits surface as a malformed response"""
    depth = 100000
    transport.get.return_value = response(200, body=b'{"droplet": ' + b"[" * depth + b"]" * depth + b"}")

    with pytest.raises(MalformedResponseError):
        client.get_droplet(1)


def test_rate_limit_retry_after_any_case(client, transport):
    """Test Retry-After lookup ignores header case"""
    transport.get.return_value = response(429, {"message": "slow down"}, headers={"RETRY-AFTER": "30"})

    with pytest.raises(RateLimitedError) as exc_info:
        client.get_account()

    assert exc_info.value.retry_after == "30"
