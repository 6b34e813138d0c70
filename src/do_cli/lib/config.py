"""
Configuration management for do-cli
"""
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from dotenv import dotenv_values

from .errors import AuthenticationError, ConfigError
from .utils import ensure_permissions

logger = logging.getLogger("do_cli.lib.config")

CONFIG_DIR = Path("~/.config/do-cli").expanduser()
CONFIG_FILE = CONFIG_DIR / "config.ini"

DEFAULT_BASE_URL = "https://api.digitalocean.com"
DEFAULT_TIMEOUT = 30.0

ENV_TOKEN = "DIGITALOCEAN_TOKEN"
ENV_BASE_URL = "DIGITALOCEAN_BASE_URL"
ENV_TIMEOUT = "DIGITALOCEAN_TIMEOUT"

# CLI key -> attribute
SETTABLE_KEYS = {
    "token": "token",
    "base-url": "base_url",
    "base_url": "base_url",
    "timeout": "timeout",
}


def _parse_timeout(value: str, source: str) -> float:
    try:
        timeout = float(value)
    except ValueError:
        raise ConfigError(f"Invalid timeout {value!r} in {source}")
    if timeout <= 0:
        raise ConfigError(f"Timeout must be positive, got {value!r} in {source}")
    return timeout


def mask_token(token: Optional[str]) -> str:
    """Mask a token for display"""
    if not token:
        return "<not set>"
    if len(token) <= 8:
        return "***"
    return f"{token[:4]}...{token[-4:]}"


@dataclass
class Config:
    """Configuration data"""
    token: str = ""
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def load(cls, path: Optional[Path] = None, env: bool = True) -> 'Config':
        """
        Load configuration from file and environment

        Environment variables take precedence over the config file. A missing
        file or missing values are not errors; validation happens when a
        client is created.

        Args:
            path: Config file to read (defaults to CONFIG_FILE)
            env: Apply environment overrides

        Returns:
            Config object

        Raises:
            ConfigError: If the file exists but cannot be read or parsed
        """
        config_file = Path(path) if path is not None else CONFIG_FILE
        config = cls()

        if config_file.exists():
            data = cls._read_file(config_file)
            if data.get("token"):
                config.token = data["token"]
            if data.get("base_url"):
                config.base_url = data["base_url"]
            if data.get("timeout"):
                config.timeout = _parse_timeout(data["timeout"], str(config_file))
        else:
            logger.debug(f"No config file at {config_file}")

        if not env:
            return config

        env_token = os.getenv(ENV_TOKEN)
        env_base_url = os.getenv(ENV_BASE_URL)
        env_timeout = os.getenv(ENV_TIMEOUT)

        if env_token:
            config.token = env_token
        if env_base_url:
            config.base_url = env_base_url
        if env_timeout:
            config.timeout = _parse_timeout(env_timeout, ENV_TIMEOUT)

        return config

    @staticmethod
    def _read_file(config_file: Path) -> Dict[str, str]:
        if not config_file.is_file():
            raise ConfigError(f"Config path {config_file} is not a file")
        try:
            with open(config_file, encoding="utf-8") as f:
                values = dotenv_values(stream=f)
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Failed to read config file {config_file}: {str(e)}")
        return {key.strip(): value.strip() for key, value in values.items() if value is not None}

    def save(self, path: Optional[Path] = None) -> Path:
        """
        Save configuration to file

        Returns:
            Path written

        Raises:
            ConfigError: If the config store is not writable
        """
        config_file = Path(path) if path is not None else CONFIG_FILE
        lines = ["# DigitalOcean CLI Configuration"]
        if self.token:
            lines.append(f"token={self.token}")
        if self.base_url:
            lines.append(f"base_url={self.base_url}")
        if self.timeout != DEFAULT_TIMEOUT:
            lines.append(f"timeout={self.timeout:g}")

        try:
            config_file.parent.mkdir(parents=True, exist_ok=True)
            with open(config_file, "w", encoding="utf-8") as f:
                f.write("\n".join(lines) + "\n")
            ensure_permissions(config_file, 0o600)
        except OSError as e:
            raise ConfigError(f"Failed to save config to {config_file}: {str(e)}")

        logger.debug(f"Saved configuration to {config_file}")
        return config_file

    def set(self, key: str, value: str) -> None:
        """Set a value by its CLI key name"""
        attribute = SETTABLE_KEYS.get(key)
        if attribute is None:
            raise ConfigError(f"Unknown config key: {key}")
        if attribute == "timeout":
            self.timeout = _parse_timeout(value, key)
        else:
            setattr(self, attribute, value)

    def get(self, key: str, masked: bool = True) -> str:
        """Get a value by its CLI key name, masking the token by default"""
        attribute = SETTABLE_KEYS.get(key)
        if attribute is None:
            raise ConfigError(f"Unknown config key: {key}")
        if attribute == "token":
            return mask_token(self.token) if masked else self.token
        if attribute == "timeout":
            return f"{self.timeout:g}"
        return getattr(self, attribute)

    def validate(self) -> None:
        """
        Check the configuration is usable by a client

        Raises:
            AuthenticationError: If the token is missing or empty
            ConfigError: If the base URL is missing or empty
        """
        if not self.token or not self.token.strip():
            raise AuthenticationError(
                f"API token is not set. Set {ENV_TOKEN} or run 'do-cli config set token <TOKEN>'"
            )
        if not self.base_url or not self.base_url.strip():
            raise ConfigError("Base URL is not set")
