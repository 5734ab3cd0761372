# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Path building and client-side recursive delete over the key namespace.

Vault keys form a slash-delimited hierarchy. A path ending in ``/`` is a
collection (it can be listed); anything else is a leaf holding a value.
There is no schema: a collection exists only as long as a LIST on it
succeeds.
"""

import re
from typing import Callable, Iterable, Mapping
from urllib.parse import quote, urlencode

from .exceptions import DecodeError, PathNotFoundError

SEPARATOR = "/"

_DOT_SEGMENTS = (".", "..")

_REPEATED_SEPARATORS = re.compile(r"/{2,}")


def is_collection(path: str) -> bool:
    """Return True if ``path`` names a collection rather than a leaf."""
    return path.endswith(SEPARATOR)


def normalize_path(prefix: str, path: str) -> str:
    """Turn a logical path into the remote path under ``prefix``.

    - Adds a leading separator if missing.
    - Collapses repeated separators.
    - Keeps a trailing separator, since it marks a collection.
    - Percent-encodes everything except the separator.
    - Rejects "." and ".." segments, which the URL layer would resolve
      to a different key than the one named.

    Example:
        >>> normalize_path("/v1/secret", "foo//bar baz/")
        '/v1/secret/foo/bar%20baz/'

    Raises:
        ValueError: If the path contains a "." or ".." segment
    """
    if any(segment in _DOT_SEGMENTS for segment in path.split(SEPARATOR)):
        raise ValueError(f'Path must not contain "." or ".." segments: {path!r}')
    if not path.startswith(SEPARATOR):
        path = SEPARATOR + path
    path = _REPEATED_SEPARATORS.sub(SEPARATOR, path)
    return prefix.rstrip(SEPARATOR) + quote(path, safe=SEPARATOR)


def encode_params(params: Mapping[str, str]) -> str:
    """Encode query parameters, leaving out any with an empty value."""
    return urlencode([(key, value) for key, value in params.items() if value])


def build_url(address: str, path: str, params: Mapping[str, str] | None = None) -> str:
    """Join a server address, a normalized path and query parameters."""
    url = address.rstrip(SEPARATOR) + path
    query = encode_params(params or {})
    if query:
        url += "?" + query
    return url


def _check_child(parent: str, child: str) -> None:
    """Reject listed names that would not name a direct child of ``parent``."""
    name = child[:-1] if is_collection(child) else child
    if name in _DOT_SEGMENTS or SEPARATOR in name:
        raise DecodeError(f"Listing of {parent!r} returned an invalid child name: {child!r}")


def delete_tree(
    root: str,
    list_keys: Callable[[str], Iterable[str]],
    delete_key: Callable[[str], None],
) -> None:
    """Delete ``root`` and, if it is a collection, everything below it.

    Leaves are deleted with a single ``delete_key`` call. Collections are
    listed with ``list_keys`` and their children visited in ascending order,
    depth first, using an explicit stack so that a deep remote namespace
    cannot exhaust the Python call stack. A collection that lists as not
    found is already gone and counts as deleted. The first error raised by
    either callable stops the walk and propagates.

    Every listed name must be a single segment, optionally followed by
    ``/``, so each step strictly extends the path it came from.

    Args:
        root: Logical path to delete
        list_keys: Returns the immediate child names of a collection path
        delete_key: Deletes a single leaf path

    Raises:
        DecodeError: If a listing contains a name that is not a direct child
    """
    pending = [root]
    while pending:
        path = pending.pop()
        if not is_collection(path):
            delete_key(path)
            continue

        try:
            children = sorted(list_keys(path))
        except PathNotFoundError:
            continue

        for child in children:
            if child:
                _check_child(path, child)

        # Empty names would not extend the path and would be listed forever
        pending.extend(path + child for child in reversed(children) if child)
