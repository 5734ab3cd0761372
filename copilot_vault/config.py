# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Client options and loading them from the environment."""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .exceptions import InvalidConfigurationError
from .log import Logger
from .tokener import Tokener, create_tokener

DEFAULT_TIMEOUT_SECONDS = 10.0


@dataclass
class ClientOptions:
    """Options fixed at client construction.

    Attributes:
        servers: Server base addresses, tried in this order
        timeout: Per-request timeout in seconds; None or 0 disables it
        skip_tls_verification: Disable TLS certificate verification
        logger: Logger for failover diagnostics; a SilentLogger if None
    """

    servers: list[str] = field(default_factory=list)
    timeout: Optional[float] = DEFAULT_TIMEOUT_SECONDS
    skip_tls_verification: bool = False
    logger: Optional[Logger] = None

    def validate(self) -> None:
        """Check the options before any network activity.

        Raises:
            InvalidConfigurationError: If there are no servers, a server
                address is blank, or the timeout is negative
        """
        if not self.servers:
            raise InvalidConfigurationError("At least one server address is required")

        for server in self.servers:
            if not server or not server.strip():
                raise InvalidConfigurationError("Server addresses must not be blank")

        if self.timeout is not None and self.timeout < 0:
            raise InvalidConfigurationError(f"Timeout must not be negative: {self.timeout}")

    @property
    def effective_timeout(self) -> Optional[float]:
        """Timeout as httpx expects it (None means wait forever)."""
        return self.timeout or None


class EnvConfigProvider:
    """Configuration provider that reads from environment variables."""

    def __init__(self, environ: Optional[Dict[str, str]] = None):
        self._environ = environ if environ is not None else os.environ

    def get(self, key: str, default: Any = None) -> Any:
        return self._environ.get(key, default)

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self._environ.get(key)
        if value is None:
            return default

        value_lower = value.lower()
        if value_lower in ("true", "1", "yes", "on"):
            return True
        if value_lower in ("false", "0", "no", "off"):
            return False
        return default

    def get_float(self, key: str, default: Optional[float] = None) -> Optional[float]:
        value = self._environ.get(key)
        if value is None or value == "":
            return default
        try:
            return float(value)
        except ValueError as e:
            raise InvalidConfigurationError(f"{key} must be a number, got {value!r}") from e

    def get_list(self, key: str) -> list[str]:
        """Split a comma-separated value, dropping empty items."""
        value = self._environ.get(key, "")
        return [item.strip() for item in value.split(",") if item.strip()]


def load_client_options(
    provider: Optional[EnvConfigProvider] = None,
    logger: Optional[Logger] = None,
) -> ClientOptions:
    """Build ClientOptions from VAULT_ADDRS, VAULT_TIMEOUT and VAULT_SKIP_VERIFY.

    Raises:
        InvalidConfigurationError: If the resulting options are invalid
    """
    provider = provider or EnvConfigProvider()
    options = ClientOptions(
        servers=provider.get_list("VAULT_ADDRS"),
        timeout=provider.get_float("VAULT_TIMEOUT", DEFAULT_TIMEOUT_SECONDS),
        skip_tls_verification=provider.get_bool("VAULT_SKIP_VERIFY", False),
        logger=logger,
    )
    options.validate()
    return options


def load_tokener(provider: Optional[EnvConfigProvider] = None) -> Tokener:
    """Build a Tokener from VAULT_TOKEN_FILE, falling back to VAULT_TOKEN.

    A token file takes precedence so that rotated tokens are picked up.

    Raises:
        InvalidConfigurationError: If neither variable is set
    """
    provider = provider or EnvConfigProvider()

    token_file = provider.get("VAULT_TOKEN_FILE")
    if token_file:
        return create_tokener("file", filename=token_file)

    token = provider.get("VAULT_TOKEN")
    if token:
        return create_tokener("static", token=token)

    raise InvalidConfigurationError("Set VAULT_TOKEN_FILE or VAULT_TOKEN to authenticate with vault")
