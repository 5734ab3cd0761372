# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Tests for single-server exchanges."""

import json
from unittest.mock import MagicMock

import httpx
import pytest

from copilot_vault import (
    DecodeError,
    FileTokener,
    Method,
    PathNotFoundError,
    RequestDescriptor,
    RequestFailedError,
    StaticTokener,
    TokenUnavailableError,
    Transport,
)
from copilot_vault.models import DataEnvelope, SecretValue

ADDRESS = "http://vault-1:8200"


class Recorder:
    """MockTransport handler returning a fixed response and keeping requests."""

    def __init__(self, response: httpx.Response | None = None):
        self.response = response or httpx.Response(200, json={})
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def make_transport():
    clients = []

    def _make(handler, tokener=None) -> Transport:
        http_client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(http_client)
        return Transport(http_client, tokener or StaticTokener("root-token"))

    yield _make

    for http_client in clients:
        http_client.close()


class TestRequestShape:
    """Tests for what goes out on the wire."""

    def test_token_header_is_set(self, recorder, make_transport):
        """Test that the token is sent in the vault token header."""
        transport = make_transport(recorder, StaticTokener("s.123"))
        transport.execute(ADDRESS, RequestDescriptor(Method.DELETE, "/v1/secret/k"))

        assert recorder.requests[0].headers["X-Vault-Token"] == "s.123"

    def test_list_is_its_own_verb(self, recorder, make_transport):
        """Test that LIST is sent as the request method, not as GET."""
        transport = make_transport(recorder)
        transport.execute(ADDRESS, RequestDescriptor(Method.LIST, "/v1/secret/dir/"))

        request = recorder.requests[0]
        assert request.method == "LIST"
        assert str(request.url) == "http://vault-1:8200/v1/secret/dir/"

    def test_json_body_sets_json_content_type(self, recorder, make_transport):
        """Test that structured bodies are sent as JSON."""
        transport = make_transport(recorder)
        transport.execute(ADDRESS, RequestDescriptor(Method.POST, "/v1/secret/k", body={"value": "ünï"}))

        request = recorder.requests[0]
        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.content) == {"value": "ünï"}

    def test_parameter_only_get_uses_plain_text(self, recorder, make_transport):
        """Test that bodiless requests are sent as plain text."""
        transport = make_transport(recorder)
        transport.execute(ADDRESS, RequestDescriptor(Method.GET, "/v1/sys/health", params={"standbyok": "true"}))

        request = recorder.requests[0]
        assert request.headers["Content-Type"] == "text/plain"
        assert request.url.params["standbyok"] == "true"

    def test_empty_params_are_omitted(self, recorder, make_transport):
        """Test that parameters with empty values are not sent at all."""
        transport = make_transport(recorder)
        transport.execute(
            ADDRESS,
            RequestDescriptor(Method.GET, "/v1/sys/health", params={"standbyok": "", "perfstandbyok": "true"}),
        )

        url = recorder.requests[0].url
        assert "standbyok" not in url.params
        assert url.query == b"perfstandbyok=true"

    def test_trailing_slash_on_address_is_ignored(self, recorder, make_transport):
        """Test that an address ending in a slash does not double the separator."""
        transport = make_transport(recorder)
        transport.execute("http://vault-1:8200/", RequestDescriptor(Method.DELETE, "/v1/secret/k"))

        assert str(recorder.requests[0].url) == "http://vault-1:8200/v1/secret/k"


class TestTokens:
    """Tests for token acquisition per exchange."""

    def test_token_is_fetched_for_every_exchange(self, recorder, make_transport, tmp_path):
        """Test that a rotated token file is picked up by the next request."""
        token_file = tmp_path / "token"
        token_file.write_text("first\n")
        transport = make_transport(recorder, FileTokener(str(token_file)))
        request = RequestDescriptor(Method.DELETE, "/v1/secret/k")

        transport.execute(ADDRESS, request)
        token_file.write_text("second\n")
        transport.execute(ADDRESS, request)

        assert [r.headers["X-Vault-Token"] for r in recorder.requests] == ["first", "second"]

    def test_token_failure_sends_nothing(self, recorder, make_transport, tmp_path):
        """Test that a missing token file fails before any request is sent."""
        transport = make_transport(recorder, FileTokener(str(tmp_path / "missing")))

        with pytest.raises(TokenUnavailableError):
            transport.execute(ADDRESS, RequestDescriptor(Method.GET, "/v1/secret/k", response_type=dict))

        assert recorder.requests == []

    def test_unexpected_tokener_errors_are_wrapped(self, recorder, make_transport):
        """Test that arbitrary token source errors become TokenUnavailableError."""
        tokener = MagicMock()
        tokener.token.side_effect = RuntimeError("agent socket closed")
        transport = make_transport(recorder, tokener)

        with pytest.raises(TokenUnavailableError, match="agent socket closed"):
            transport.execute(ADDRESS, RequestDescriptor(Method.DELETE, "/v1/secret/k"))


class TestClassification:
    """Tests for status code classification and decoding."""

    @pytest.mark.parametrize("body", [b"", b'{"errors": []}', b'{"data": {"value": "x"}}'])
    def test_404_is_not_found_whatever_the_body(self, make_transport, body):
        """Test that 404 means not found regardless of content."""
        transport = make_transport(Recorder(httpx.Response(404, content=body)))

        with pytest.raises(PathNotFoundError) as exc_info:
            transport.execute(ADDRESS, RequestDescriptor(Method.GET, "/v1/secret/k", response_type=dict))

        assert exc_info.value.address == ADDRESS
        assert exc_info.value.path == "/v1/secret/k"

    @pytest.mark.parametrize("status", [400, 403, 405, 429, 500, 503])
    def test_error_statuses_are_failures(self, make_transport, status):
        """Test that other error statuses carry status and address."""
        transport = make_transport(Recorder(httpx.Response(status, json={"errors": ["permission denied"]})))

        with pytest.raises(RequestFailedError) as exc_info:
            transport.execute(ADDRESS, RequestDescriptor(Method.GET, "/v1/secret/k", response_type=dict))

        error = exc_info.value
        assert error.status_code == status
        assert error.address == ADDRESS
        assert "permission denied" in str(error)

    def test_connection_error_is_a_failure(self, make_transport):
        """Test that a transport-level error is a failure without a status."""

        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        transport = make_transport(refuse)

        with pytest.raises(RequestFailedError) as exc_info:
            transport.execute(ADDRESS, RequestDescriptor(Method.GET, "/v1/secret/k", response_type=dict))

        assert exc_info.value.status_code is None
        assert exc_info.value.address == ADDRESS

    def test_success_is_decoded_into_declared_shape(self, make_transport):
        """Test that a successful body is decoded into the response type."""
        transport = make_transport(Recorder(httpx.Response(200, json={"data": {"value": "x"}})))

        result = transport.execute(
            ADDRESS, RequestDescriptor(Method.GET, "/v1/secret/k", response_type=DataEnvelope[SecretValue])
        )

        assert result.data.value == "x"

    @pytest.mark.parametrize(
        "content",
        [b"", b"not json", b'{"data": {}}', b'{"data": {"value": 5}}'],
    )
    def test_shape_mismatch_is_decode_error(self, make_transport, content):
        """Test that bodies not matching the declared shape raise DecodeError."""
        transport = make_transport(Recorder(httpx.Response(200, content=content)))

        with pytest.raises(DecodeError):
            transport.execute(
                ADDRESS, RequestDescriptor(Method.GET, "/v1/secret/k", response_type=DataEnvelope[SecretValue])
            )

    def test_body_is_discarded_when_no_response_expected(self, make_transport):
        """Test that an unexpected body is ignored rather than decoded."""
        transport = make_transport(Recorder(httpx.Response(200, content=b"garbage")))

        assert transport.execute(ADDRESS, RequestDescriptor(Method.DELETE, "/v1/secret/k")) is None

    def test_response_is_drained_and_closed(self, make_transport):
        """Test that the body stream is fully read and released on error paths."""
        responses = []

        def handler(request):
            response = httpx.Response(500, content=iter([b"x" * 4096, b"y" * 4096]))
            responses.append(response)
            return response

        transport = make_transport(handler)

        with pytest.raises(RequestFailedError):
            transport.execute(ADDRESS, RequestDescriptor(Method.GET, "/v1/secret/k", response_type=dict))

        assert responses[0].is_stream_consumed
        assert responses[0].is_closed
