# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Test fixtures for copilot_vault.

``FakeVault`` is an in-memory stand-in for the generic secret backend that
plugs into the client through ``httpx.MockTransport``, so tests exercise the
real transport, dispatcher and path handling without any network access.
"""

from __future__ import annotations

import json
import threading

import httpx
import pytest

from copilot_vault import ClientOptions, StaticTokener, VaultClient
from copilot_vault.log import SilentLogger

SECRET_PREFIX = "/v1/secret/"


class FakeVault:
    """In-memory generic secret backend speaking vault's HTTP dialect."""

    def __init__(self) -> None:
        self.secrets: dict[str, str] = {}
        self.requests: list[httpx.Request] = []
        self.lock = threading.Lock()

    def methods(self) -> list[str]:
        return [request.method for request in self.requests]

    def _children(self, prefix: str) -> list[str]:
        children = set()
        for key in self.secrets:
            if not key.startswith(prefix):
                continue
            head, sep, _ = key[len(prefix):].partition("/")
            children.add(head + sep)
        return sorted(children)

    def handler(self, request: httpx.Request) -> httpx.Response:
        with self.lock:
            return self._handle(request)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if not path.startswith(SECRET_PREFIX):
            return httpx.Response(404, json={"errors": []})
        key = path[len(SECRET_PREFIX):]

        if request.method == "GET":
            if key not in self.secrets:
                return httpx.Response(404, json={"errors": []})
            return httpx.Response(200, json={"data": {"value": self.secrets[key]}})

        if request.method == "POST":
            self.secrets[key] = json.loads(request.content)["value"]
            return httpx.Response(204)

        if request.method == "DELETE":
            self.secrets.pop(key, None)
            return httpx.Response(204)

        if request.method == "LIST":
            prefix = key if key == "" or key.endswith("/") else key + "/"
            children = self._children(prefix)
            if not children:
                return httpx.Response(404, json={"errors": []})
            return httpx.Response(200, json={"data": {"keys": children}})

        return httpx.Response(405, json={"errors": ["unsupported method"]})


@pytest.fixture
def silent_logger() -> SilentLogger:
    return SilentLogger()


@pytest.fixture
def fake_vault() -> FakeVault:
    return FakeVault()


@pytest.fixture
def make_client(silent_logger):
    """Build clients whose HTTP exchanges are answered by ``handler``."""
    clients: list[VaultClient] = []

    def _make(handler, servers=None, token="root-token", tokener=None) -> VaultClient:
        options = ClientOptions(
            servers=servers or ["http://vault-1:8200"],
            timeout=5,
            logger=silent_logger,
        )
        client = VaultClient(
            options,
            tokener or StaticTokener(token),
            http_transport=httpx.MockTransport(handler),
        )
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.close()


@pytest.fixture
def client(make_client, fake_vault) -> VaultClient:
    return make_client(fake_vault.handler)
