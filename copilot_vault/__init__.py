# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Client library for the vault secret-management HTTP API.

Requests are sent to a list of servers in order; the first server that
answers wins. A 404 is reported as PathNotFoundError and is never masked by
trying another server.

Example:
    >>> from copilot_vault import ClientOptions, FileTokener, create_client
    >>> client = create_client(
    ...     ClientOptions(servers=["https://vault-1:8200", "https://vault-2:8200"]),
    ...     FileTokener("/run/secrets/vault_token"),
    ... )
    >>> client.put("/app/api_key", "s3cr3t")
    >>> client.keys("/app/")
    ['api_key']
    >>> client.delete("/app/")
"""

from .auth import Auth, AuthClient
from .client import VaultClient, create_client
from .config import ClientOptions, EnvConfigProvider, load_client_options, load_tokener
from .dispatcher import Dispatcher
from .exceptions import (
    AllAttemptsFailedError,
    DecodeError,
    InvalidConfigurationError,
    PathNotFoundError,
    RequestFailedError,
    TokenUnavailableError,
    VaultError,
)
from .kv import KV, KVClient
from .models import (
    CreatedToken,
    Health,
    Leader,
    Lease,
    LookedUpToken,
    Mount,
    SealStatus,
    TokenOptions,
    TokenRole,
    TokenRoleOptions,
)
from .request import Method, RequestDescriptor
from .system import Sys, SysClient
from .tokener import FileTokener, StaticTokener, Tokener, create_tokener
from .transport import Transport

__all__ = [
    # Client
    "VaultClient",
    "create_client",
    "ClientOptions",
    "EnvConfigProvider",
    "load_client_options",
    "load_tokener",
    # Capability groups
    "Auth",
    "AuthClient",
    "KV",
    "KVClient",
    "Sys",
    "SysClient",
    # Dispatch
    "Dispatcher",
    "Transport",
    "Method",
    "RequestDescriptor",
    # Tokens
    "Tokener",
    "StaticTokener",
    "FileTokener",
    "create_tokener",
    # Models
    "CreatedToken",
    "Health",
    "Leader",
    "Lease",
    "LookedUpToken",
    "Mount",
    "SealStatus",
    "TokenOptions",
    "TokenRole",
    "TokenRoleOptions",
    # Errors
    "VaultError",
    "InvalidConfigurationError",
    "TokenUnavailableError",
    "PathNotFoundError",
    "RequestFailedError",
    "AllAttemptsFailedError",
    "DecodeError",
]

__version__ = "0.1.0"
