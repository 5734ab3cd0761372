# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Token sources used to authenticate requests against vault.

A Tokener is consulted once per HTTP exchange. Implementations must be safe
to call from several threads at once and must not cache values that can
change underneath them.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, cast

from .exceptions import InvalidConfigurationError, TokenUnavailableError


class Tokener(ABC):
    """Abstract base class for token sources."""

    @abstractmethod
    def token(self) -> str:
        """Return the token to send with the next request.

        Raises:
            TokenUnavailableError: If the token cannot be obtained
        """
        pass


class StaticTokener(Tokener):
    """Tokener that always returns the value it was created with.

    Example:
        >>> tokener = StaticTokener("s.abcdef")
        >>> tokener.token()
        's.abcdef'
    """

    def __init__(self, token: str):
        self._token = token

    def token(self) -> str:
        return self._token

    def __repr__(self) -> str:
        return "StaticTokener(token=***)"


class FileTokener(Tokener):
    """Tokener that re-reads the token file on every call.

    Rotating the file contents is picked up by the next request without
    rebuilding the client. Surrounding whitespace (a trailing newline from
    ``vault token create > file``) is stripped.
    """

    def __init__(self, filename: str):
        self.filename = Path(filename)

    def token(self) -> str:
        try:
            content = self.filename.read_text(encoding="utf-8")
        except OSError as e:
            raise TokenUnavailableError(f"Failed to read token file {self.filename}: {e}") from e
        return content.strip()


def create_tokener(tokener_type: str, **kwargs: Any) -> Tokener:
    """Factory function to create token sources.

    Args:
        tokener_type: Type of tokener to create ("static" or "file")
        **kwargs: Tokener-specific arguments (``token`` or ``filename``)

    Returns:
        Tokener instance

    Raises:
        InvalidConfigurationError: If tokener_type is unknown

    Example:
        >>> tokener = create_tokener("file", filename="/run/secrets/vault_token")
    """
    tokeners: dict[str, type] = {
        "static": StaticTokener,
        "file": FileTokener,
    }

    if tokener_type not in tokeners:
        raise InvalidConfigurationError(
            f"Unknown tokener type: {tokener_type}. "
            f"Available: {', '.join(tokeners.keys())}"
        )

    return cast(Tokener, tokeners[tokener_type](**kwargs))
