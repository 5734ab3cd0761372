# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Failover across the configured vault servers."""

from typing import Any, Mapping, Sequence

from .exceptions import AllAttemptsFailedError, InvalidConfigurationError, RequestFailedError
from .log import Logger, SilentLogger
from .request import Method, RequestDescriptor
from .transport import Transport


class Dispatcher:
    """Sends each request to the configured servers in order until one answers.

    - The first successful server wins; later servers are not contacted.
    - A 404 (PathNotFoundError) is the server's answer about the path and is
      raised straight away, without trying other servers.
    - Token and decode errors are raised straight away as well.
    - Any other failure is logged and the next server is tried. If every
      server fails, AllAttemptsFailedError names all of them.

    The dispatcher holds no per-call state and can be shared between threads.
    """

    def __init__(self, servers: Sequence[str], transport: Transport, logger: Logger | None = None):
        if not servers:
            raise InvalidConfigurationError("At least one server address is required")
        self.servers = tuple(servers)
        self.transport = transport
        self.logger = logger or SilentLogger()

    def dispatch(self, request: RequestDescriptor) -> Any:
        """Execute ``request`` with first-success-wins failover.

        Returns:
            Whatever the transport returned for the first successful server
        """
        failures: list[RequestFailedError] = []
        for address in self.servers:
            try:
                return self.transport.execute(address, request)
            except RequestFailedError as e:
                failures.append(e)
                self.logger.warning(
                    "Vault request failed, trying next server",
                    method=request.method.value,
                    path=request.path,
                    address=address,
                    status_code=e.status_code,
                    error=str(e),
                )

        raise AllAttemptsFailedError(request.method.value, request.path, self.servers, failures)

    def get(self, path: str, response_type: Any, params: Mapping[str, str] | None = None) -> Any:
        return self.dispatch(
            RequestDescriptor(Method.GET, path, params=params or {}, response_type=response_type)
        )

    def list(self, path: str, response_type: Any) -> Any:
        return self.dispatch(RequestDescriptor(Method.LIST, path, response_type=response_type))

    def post(self, path: str, body: Any = None, response_type: Any = None) -> Any:
        return self.dispatch(RequestDescriptor(Method.POST, path, body=body, response_type=response_type))

    def put(self, path: str, body: Any = None, response_type: Any = None) -> Any:
        return self.dispatch(RequestDescriptor(Method.PUT, path, body=body, response_type=response_type))

    def delete(self, path: str) -> None:
        self.dispatch(RequestDescriptor(Method.DELETE, path))


class APIGroup:
    """Base for a group of vault operations sent through a Dispatcher."""

    def __init__(self, dispatcher: Dispatcher):
        self.dispatcher = dispatcher
