# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Key-value secret storage."""

from abc import ABC, abstractmethod

from .dispatcher import APIGroup
from .exceptions import PathNotFoundError
from .models import DataEnvelope, KeyList, SecretValue
from .paths import delete_tree, normalize_path

KV_PREFIX = "/v1/secret"


class KV(ABC):
    """Key-value operations on the generic secret backend.

    Paths are slash-delimited. A path ending in ``/`` names a collection.
    """

    @abstractmethod
    def get(self, path: str) -> str:
        """Return the value stored at ``path``.

        Raises:
            PathNotFoundError: If nothing is stored at ``path``
        """
        pass

    @abstractmethod
    def put(self, path: str, value: str) -> None:
        """Store ``value`` at ``path``."""
        pass

    @abstractmethod
    def delete(self, path: str) -> None:
        """Delete ``path``; a collection path is deleted recursively."""
        pass

    @abstractmethod
    def keys(self, path: str) -> list[str]:
        """Return the sorted names directly under the collection ``path``.

        Child collections are returned with a trailing ``/``.

        Raises:
            PathNotFoundError: If the collection is empty or absent
        """
        pass

    @abstractmethod
    def collection_exists(self, path: str) -> bool:
        """Return True if the collection ``path`` currently has children."""
        pass


class KVClient(APIGroup, KV):
    """KV implementation on top of a Dispatcher."""

    def get(self, path: str) -> str:
        envelope = self.dispatcher.get(normalize_path(KV_PREFIX, path), DataEnvelope[SecretValue])
        return envelope.data.value

    def put(self, path: str, value: str) -> None:
        self.dispatcher.post(normalize_path(KV_PREFIX, path), body={"value": value})

    def delete(self, path: str) -> None:
        delete_tree(path, list_keys=self.keys, delete_key=self._delete_one)

    def _delete_one(self, path: str) -> None:
        self.dispatcher.delete(normalize_path(KV_PREFIX, path))

    def keys(self, path: str) -> list[str]:
        envelope = self.dispatcher.list(normalize_path(KV_PREFIX, path), DataEnvelope[KeyList])
        return sorted(envelope.data.keys)

    def collection_exists(self, path: str) -> bool:
        try:
            self.keys(path)
        except PathNotFoundError:
            return False
        return True
