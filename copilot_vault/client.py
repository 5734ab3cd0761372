# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""The vault client: every capability group over one failover dispatcher."""

import httpx

from .auth import AuthClient
from .config import ClientOptions
from .dispatcher import Dispatcher
from .kv import KVClient
from .log import SilentLogger
from .system import SysClient
from .tokener import Tokener
from .transport import Transport


class VaultClient(AuthClient, KVClient, SysClient):
    """Client for the vault HTTP API.

    Implements the Auth, KV and Sys interfaces. Each client owns its own
    httpx connection pool; close it with ``close()`` or use the client as a
    context manager.

    Example:
        >>> options = ClientOptions(servers=["https://vault-1:8200", "https://vault-2:8200"])
        >>> with VaultClient(options, StaticTokener("s.abcdef")) as client:
        ...     client.put("/app/db/password", "hunter2")
        ...     client.get("/app/db/password")
        'hunter2'
    """

    def __init__(
        self,
        options: ClientOptions,
        tokener: Tokener,
        http_transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            options: Servers, timeout, TLS and logging options
            tokener: Source of the token sent with every request
            http_transport: Optional httpx transport, e.g. a MockTransport in tests

        Raises:
            InvalidConfigurationError: If options are invalid; nothing is
                sent over the network in that case
        """
        options.validate()
        self.options = options
        self.logger = options.logger or SilentLogger()

        self._http_client = httpx.Client(
            timeout=options.effective_timeout,
            verify=not options.skip_tls_verification,
            transport=http_transport,
        )
        transport = Transport(self._http_client, tokener)
        super().__init__(Dispatcher(options.servers, transport, self.logger))

    def close(self) -> None:
        """Release pooled connections."""
        self._http_client.close()

    def __enter__(self) -> "VaultClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def create_client(options: ClientOptions, tokener: Tokener) -> VaultClient:
    """Factory function to create a vault client.

    Example:
        >>> client = create_client(load_client_options(), load_tokener())
    """
    return VaultClient(options, tokener)
