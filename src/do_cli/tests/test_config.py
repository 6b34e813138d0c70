"""
Tests for configuration management
"""
import os
import stat

import pytest

from do_cli.lib import config as config_module
from do_cli.lib.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, Config, mask_token
from do_cli.lib.errors import AuthenticationError, ConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove DigitalOcean variables from the environment"""
    for name in ("DIGITALOCEAN_TOKEN", "DIGITALOCEAN_BASE_URL", "DIGITALOCEAN_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    """Point the default config file at a temp dir"""
    path = tmp_path / "do-cli" / "config.ini"
    monkeypatch.setattr(config_module, "CONFIG_FILE", path)
    return path


def test_defaults(config_file):
    """Test missing file gives defaults"""
    config = Config.load()
    assert config.token == ""
    assert config.base_url == DEFAULT_BASE_URL
    assert config.timeout == DEFAULT_TIMEOUT


def test_load_from_file(config_file):
    """Test values from the config file"""
    config_file.parent.mkdir(parents=True)
    config_file.write_text(
        "# DigitalOcean CLI Configuration\n"
        "token=file-token\n"
        "base_url=https://file.example.com\n"
        "timeout=12\n"
    )

    config = Config.load()

    assert config.token == "file-token"
    assert config.base_url == "https://file.example.com"
    assert config.timeout == 12.0


def test_environment_overrides_file(config_file, monkeypatch):
    """Test precedence of environment over file"""
    config_file.parent.mkdir(parents=True)
    config_file.write_text("token=file-token\nbase_url=https://file.example.com\n")
    monkeypatch.setenv("DIGITALOCEAN_TOKEN", "env-token")
    monkeypatch.setenv("DIGITALOCEAN_TIMEOUT", "5")

    config = Config.load()

    assert config.token == "env-token"
    assert config.base_url == "https://file.example.com"
    assert config.timeout == 5.0


def test_load_without_environment(config_file, monkeypatch):
    """Test env=False reads the file only"""
    monkeypatch.setenv("DIGITALOCEAN_TOKEN", "env-token")
    assert Config.load(env=False).token == ""


def test_invalid_timeout(config_file, monkeypatch):
    """Test unparseable timeout"""
    monkeypatch.setenv("DIGITALOCEAN_TIMEOUT", "soon")
    with pytest.raises(ConfigError, match="Invalid timeout"):
        Config.load()


def test_unreadable_path(tmp_path):
    """Test a directory in place of the config file"""
    path = tmp_path / "config.ini"
    path.mkdir()
    with pytest.raises(ConfigError, match="not a file"):
        Config.load(path)


def test_save_and_load(tmp_path):
    """Test save writes a private file that loads back"""
    path = tmp_path / "nested" / "config.ini"
    config = Config(token="saved-token-123456", timeout=45)

    assert config.save(path) == path

    loaded = Config.load(path, env=False)
    assert loaded == config
    if os.name != 'nt':
        assert stat.S_IMODE(path.stat().st_mode) == 0o600


def test_save_omits_default_timeout(tmp_path):
    """Test default timeout is not written"""
    path = tmp_path / "config.ini"
    Config(token="tok").save(path)
    content = path.read_text()
    assert "token=tok" in content
    assert f"base_url={DEFAULT_BASE_URL}" in content
    assert "timeout" not in content


@pytest.mark.parametrize("token,expected", [
    ("", "<not set>"),
    (None, "<not set>"),
    ("short", "***"),
    ("12345678", "***"),
    ("dop_v1_abcdefghijklmnop", "dop_...mnop"),
])
def test_mask_token(token, expected):
    """Test token masking"""
    assert mask_token(token) == expected


def test_set_and_get():
    """Test key based access"""
    config = Config()
    config.set("token", "dop_v1_secret_value")
    config.set("base-url", "https://other.example.com")
    config.set("timeout", "10")

    assert config.get("token") == "dop_...alue"
    assert config.get("token", masked=False) == "dop_v1_secret_value"
    assert config.get("base-url") == "https://other.example.com"
    assert config.get("base_url") == "https://other.example.com"
    assert config.get("timeout") == "10"


def test_unknown_key():
    """Test unknown keys are rejected"""
    config = Config()
    with pytest.raises(ConfigError, match="Unknown config key"):
        config.set("region", "nyc3")
    with pytest.raises(ConfigError):
        config.get("region")


def test_set_invalid_timeout():
    """Test timeout must be positive"""
    with pytest.raises(ConfigError):
        Config().set("timeout", "0")


def test_validate():
    """Test client readiness checks"""
    with pytest.raises(AuthenticationError):
        Config(token="   ").validate()
    with pytest.raises(ConfigError):
        Config(token="tok", base_url="").validate()
    Config(token="tok").validate()
