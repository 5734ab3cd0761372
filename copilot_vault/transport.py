# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Single-server HTTP exchange."""

import json
from functools import lru_cache
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from .exceptions import (
    DecodeError,
    PathNotFoundError,
    RequestFailedError,
    TokenUnavailableError,
)
from .paths import build_url
from .request import RequestDescriptor
from .tokener import Tokener

TOKEN_HEADER = "X-Vault-Token"


@lru_cache(maxsize=None)
def _adapter(response_type: Any) -> TypeAdapter:
    return TypeAdapter(response_type)


def _error_detail(raw: bytes) -> str:
    """Extract vault's ``{"errors": [...]}`` messages from a response body."""
    try:
        payload = json.loads(raw)
    except ValueError:
        return ""
    if isinstance(payload, dict) and isinstance(payload.get("errors"), list):
        return "; ".join(str(error) for error in payload["errors"])
    return ""


class Transport:
    """Performs exactly one HTTP exchange against one server and classifies it.

    Outcomes:
        - 404: raises PathNotFoundError
        - any other status >= 400, or no response at all: raises RequestFailedError
        - anything else: success; the body is decoded if the request asks for it

    The response body is always read to the end before the connection is
    released, whatever the outcome.

    Attributes:
        http_client: The httpx client used for every exchange
        tokener: Source of the token sent with each request
    """

    def __init__(self, http_client: httpx.Client, tokener: Tokener):
        self.http_client = http_client
        self.tokener = tokener

    def _fetch_token(self) -> str:
        try:
            return self.tokener.token()
        except TokenUnavailableError:
            raise
        except Exception as e:
            raise TokenUnavailableError(f"Token source failed: {e}") from e

    def _headers(self, request: RequestDescriptor, token: str) -> dict[str, str]:
        content_type = "application/json" if request.body is not None else "text/plain"
        return {TOKEN_HEADER: token, "Content-Type": content_type}

    def execute(self, address: str, request: RequestDescriptor) -> Any:
        """Send ``request`` to ``address``.

        Args:
            address: Server base address (scheme, host and port)
            request: The request to send

        Returns:
            The decoded response if ``request.expects_response``, else None

        Raises:
            TokenUnavailableError: If no token could be obtained
            PathNotFoundError: If the server answered 404
            RequestFailedError: If the exchange failed or returned another error status
            DecodeError: If the body does not match ``request.response_type``
        """
        token = self._fetch_token()
        url = build_url(address, request.path, request.params)
        content = json.dumps(request.body) if request.body is not None else None

        try:
            with self.http_client.stream(
                request.method.value,
                url,
                headers=self._headers(request, token),
                content=content,
            ) as response:
                raw = response.read()
                status_code = response.status_code
        except httpx.HTTPError as e:
            raise RequestFailedError(
                address, request.path, None, f"{request.method.value} {request.path} on {address} failed: {e}"
            ) from e

        if status_code == 404:
            raise PathNotFoundError(address, request.path)

        if status_code >= 400:
            message = f"bad status code: {status_code} for {request.method.value} {request.path} on {address}"
            detail = _error_detail(raw)
            if detail:
                message = f"{message}: {detail}"
            raise RequestFailedError(address, request.path, status_code, message)

        if not request.expects_response:
            return None

        try:
            return _adapter(request.response_type).validate_json(raw)
        except ValidationError as e:
            raise DecodeError(
                f"Unexpected response for {request.method.value} {request.path} from {address}: {e}"
            ) from e
