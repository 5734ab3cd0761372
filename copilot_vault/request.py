# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Description of a single logical request."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping


class Method(str, Enum):
    """HTTP methods understood by vault.

    LIST is its own verb on the wire, not a GET variant.
    """

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    LIST = "LIST"


@dataclass(frozen=True)
class RequestDescriptor:
    """Everything needed to send one request to any server.

    Attributes:
        method: HTTP method
        path: Normalized remote path (see ``paths.normalize_path``)
        params: Query parameters; empty values are omitted from the URL
        body: JSON-serializable request body, or None
        response_type: Shape to decode the response into, or None to discard it
    """

    method: Method
    path: str
    params: Mapping[str, str] = field(default_factory=dict)
    body: Any = None
    response_type: Any = None

    @property
    def expects_response(self) -> bool:
        return self.response_type is not None
