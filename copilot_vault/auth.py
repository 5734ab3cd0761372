# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Token auth backend: creating, inspecting and renewing tokens and roles."""

from abc import ABC, abstractmethod
from datetime import timedelta

from .dispatcher import APIGroup
from .exceptions import DecodeError
from .models import (
    AuthEnvelope,
    CreatedToken,
    DataEnvelope,
    KeyList,
    LookedUpToken,
    TokenOptions,
    TokenRole,
    TokenRoleOptions,
    duration_string,
)
from .paths import normalize_path

TOKEN_PREFIX = "/v1/auth/token"


class Auth(ABC):
    """Operations on the token auth backend."""

    @abstractmethod
    def list_accessors(self) -> list[str]:
        """Return the sorted accessors of all tokens."""
        pass

    @abstractmethod
    def create_token(self, opts: TokenOptions) -> CreatedToken:
        """Create a token with the given options."""
        pass

    @abstractmethod
    def lookup_token(self, token: str) -> LookedUpToken:
        """Return properties of another token."""
        pass

    @abstractmethod
    def lookup_self_token(self) -> LookedUpToken:
        """Return properties of the token the client authenticates with."""
        pass

    @abstractmethod
    def renew_token(self, token: str, increment: timedelta) -> CreatedToken:
        """Renew another token's lease by ``increment``."""
        pass

    @abstractmethod
    def renew_self_token(self, increment: timedelta) -> CreatedToken:
        """Renew the client's own token lease by ``increment``."""
        pass

    @abstractmethod
    def create_token_role(self, opts: TokenRoleOptions) -> None:
        """Create or update a token role."""
        pass

    @abstractmethod
    def lookup_token_role(self, name: str) -> TokenRole:
        """Return a token role.

        Raises:
            PathNotFoundError: If the role does not exist
        """
        pass

    @abstractmethod
    def delete_token_role(self, name: str) -> None:
        """Delete a token role."""
        pass


class AuthClient(APIGroup, Auth):
    """Auth implementation on top of a Dispatcher.

    Token values are only ever sent in request bodies, never in URLs or
    error messages.
    """

    def list_accessors(self) -> list[str]:
        envelope = self.dispatcher.list(normalize_path(TOKEN_PREFIX, "accessors"), DataEnvelope[KeyList])
        return sorted(envelope.data.keys)

    def create_token(self, opts: TokenOptions) -> CreatedToken:
        body = opts.to_request()
        self.dispatcher.logger.debug(
            "Creating token",
            policies=body.get("policies"),
            display_name=body.get("display_name"),
        )

        envelope = self.dispatcher.post(
            normalize_path(TOKEN_PREFIX, "create"), body=body, response_type=AuthEnvelope[CreatedToken]
        )
        if not envelope.auth.id:
            raise DecodeError("Create token returned an empty token id")
        return envelope.auth

    def lookup_token(self, token: str) -> LookedUpToken:
        envelope = self.dispatcher.post(
            normalize_path(TOKEN_PREFIX, "lookup"),
            body={"token": token},
            response_type=DataEnvelope[LookedUpToken],
        )
        return envelope.data

    def lookup_self_token(self) -> LookedUpToken:
        envelope = self.dispatcher.get(normalize_path(TOKEN_PREFIX, "lookup-self"), DataEnvelope[LookedUpToken])
        return envelope.data

    def renew_token(self, token: str, increment: timedelta) -> CreatedToken:
        envelope = self.dispatcher.post(
            normalize_path(TOKEN_PREFIX, "renew"),
            body={"token": token, "increment": duration_string(increment)},
            response_type=AuthEnvelope[CreatedToken],
        )
        return envelope.auth

    def renew_self_token(self, increment: timedelta) -> CreatedToken:
        envelope = self.dispatcher.post(
            normalize_path(TOKEN_PREFIX, "renew-self"),
            body={"increment": duration_string(increment)},
            response_type=AuthEnvelope[CreatedToken],
        )
        return envelope.auth

    def create_token_role(self, opts: TokenRoleOptions) -> None:
        self.dispatcher.post(normalize_path(TOKEN_PREFIX, f"roles/{opts.name}"), body=opts.to_request())

    def lookup_token_role(self, name: str) -> TokenRole:
        envelope = self.dispatcher.get(normalize_path(TOKEN_PREFIX, f"roles/{name}"), DataEnvelope[TokenRole])
        return envelope.data

    def delete_token_role(self, name: str) -> None:
        self.dispatcher.delete(normalize_path(TOKEN_PREFIX, f"roles/{name}"))
