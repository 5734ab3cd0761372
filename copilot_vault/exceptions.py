# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Exceptions for the vault client."""

from typing import Sequence


class VaultError(Exception):
    """Base exception for vault client errors."""
    pass


class InvalidConfigurationError(VaultError):
    """Raised when client options are invalid (empty server list, negative timeout)."""
    pass


class TokenUnavailableError(VaultError):
    """Raised when the token source fails to produce a credential."""
    pass


class PathNotFoundError(VaultError):
    """Raised when the server answers 404 for a path.

    This is an authoritative answer from the server and is never retried
    against another address.
    """

    def __init__(self, address: str, path: str):
        self.address = address
        self.path = path
        super().__init__(f"path not found: {path} (server {address})")


class RequestFailedError(VaultError):
    """Raised when a single exchange against one server fails.

    Attributes:
        address: Server address the request was sent to
        path: Remote path of the request
        status_code: HTTP status code, or None if no response was received
    """

    def __init__(self, address: str, path: str, status_code: int | None, message: str):
        self.address = address
        self.path = path
        self.status_code = status_code
        super().__init__(message)


class AllAttemptsFailedError(RequestFailedError):
    """Raised when every configured server failed for one request."""

    def __init__(self, method: str, path: str, servers: Sequence[str], failures: Sequence[RequestFailedError]):
        self.method = method
        self.servers = list(servers)
        self.failures = list(failures)
        last_status = self.failures[-1].status_code if self.failures else None
        super().__init__(
            address=", ".join(self.servers),
            path=path,
            status_code=last_status,
            message=f"[{method.lower()}] all requests failed to: {self.servers}",
        )


class DecodeError(VaultError):
    """Raised when a response body does not match the expected shape."""
    pass
