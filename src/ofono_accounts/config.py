"""Configuration loader for ofono-accounts.

Settings come from an optional YAML file and are then overridden by the
environment variables the Mission Control plugin has always honoured:

  FORCE_RIL_NUM_MODEMS  modem count, bypasses property discovery
  MCP_OFONO_MODEM_PREFIX  modem object path prefix (default "ril_")
  MCP_OFONO_ACCOUNT_PREFIX  account name prefix (default "account")
"""

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

import yaml

from ofono_accounts.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "~/.config/ofono-accounts/config.yaml"
DEFAULT_MODEM_PREFIX = "ril_"
DEFAULT_ACCOUNT_PREFIX = "account"
DEFAULT_GETPROP_PATH = "/usr/bin/getprop"

ENV_MODEM_COUNT = "FORCE_RIL_NUM_MODEMS"
ENV_MODEM_PREFIX = "MCP_OFONO_MODEM_PREFIX"
ENV_ACCOUNT_PREFIX = "MCP_OFONO_ACCOUNT_PREFIX"


def parse_modem_count(raw) -> Optional[int]:
    """Parse a modem count override.

    Unparsable values are treated as absent so that property discovery
    still runs. Negative values are kept and simply produce no accounts.
    """
    if raw is None:
        return None
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    try:
        return int(str(raw).strip())
    except ValueError:
        logger.warning("Ignoring unparsable modem count override: %r", raw)
        return None


@dataclass
class AccountsConfig:
    """Top-level configuration for modem discovery and the inspection tools."""
    modem_count: Optional[int] = None                     # None = discover
    modem_prefix: str = DEFAULT_MODEM_PREFIX
    account_prefix: str = DEFAULT_ACCOUNT_PREFIX
    getprop_path: str = DEFAULT_GETPROP_PATH
    query_timeout: float = 5.0                            # seconds, per external call
    property_backend: str = "getprop"                     # "getprop" or "none"
    directory_backend: str = "accountsservice"            # "accountsservice" or "none"
    server_host: str = "127.0.0.1"
    server_port: int = 8000
    log_level: str = "INFO"

    def __post_init__(self):
        # An empty prefix falls back to the literal default
        if not self.modem_prefix:
            self.modem_prefix = DEFAULT_MODEM_PREFIX
        if not self.account_prefix:
            self.account_prefix = DEFAULT_ACCOUNT_PREFIX

    def apply_env(self, environ: Optional[Mapping[str, str]] = None) -> "AccountsConfig":
        """Override settings from the environment. Returns self."""
        if environ is None:
            environ = os.environ

        if ENV_MODEM_COUNT in environ:
            count = parse_modem_count(environ[ENV_MODEM_COUNT])
            if count is not None:
                self.modem_count = count
        self.modem_prefix = environ.get(ENV_MODEM_PREFIX) or self.modem_prefix
        self.account_prefix = environ.get(ENV_ACCOUNT_PREFIX) or self.account_prefix
        return self

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AccountsConfig":
        """Build a config from defaults plus environment overrides."""
        return cls().apply_env(environ)

    @classmethod
    def from_yaml(
        cls,
        path: str = DEFAULT_CONFIG_PATH,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "AccountsConfig":
        """Load config from YAML file, with environment variable expansion.

        Environment variables in the format ${VAR_NAME} are expanded. The
        plugin's own environment overrides are applied last.
        """
        if environ is None:
            environ = os.environ

        config_path = Path(path).expanduser()
        if not config_path.exists():
            return cls.from_env(environ)

        try:
            with open(config_path) as f:
                raw = f.read()
        except OSError as e:
            raise ConfigError(f"Failed to read config from {config_path}: {e}") from e

        # Expand ${ENV_VAR} references
        def expand_env(match):
            var_name = match.group(1)
            return environ.get(var_name, match.group(0))

        raw = re.sub(r'\$\{(\w+)\}', expand_env, raw)
        try:
            data = yaml.safe_load(raw) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config root in {config_path} must be a mapping")

        try:
            config = cls(
                modem_count=parse_modem_count(data.get("modem_count")),
                modem_prefix=str(data.get("modem_prefix") or DEFAULT_MODEM_PREFIX),
                account_prefix=str(data.get("account_prefix") or DEFAULT_ACCOUNT_PREFIX),
                getprop_path=data.get("getprop_path", DEFAULT_GETPROP_PATH),
                query_timeout=float(data.get("query_timeout", 5.0)),
                property_backend=data.get("property_backend", "getprop"),
                directory_backend=data.get("directory_backend", "accountsservice"),
                server_host=data.get("server_host", "127.0.0.1"),
                server_port=int(data.get("server_port", 8000)),
                log_level=data.get("log_level", "INFO"),
            )
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid value in {config_path}: {e}") from e

        logger.debug("Loaded config from %s", config_path)
        return config.apply_env(environ)
