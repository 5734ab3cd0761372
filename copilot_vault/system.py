# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""System backend: capabilities, leases, policies and server status.

See https://www.vaultproject.io/api/system/index.html.
"""

from abc import ABC, abstractmethod

from .dispatcher import APIGroup
from .models import (
    Capabilities,
    DataEnvelope,
    Health,
    Leader,
    Lease,
    Mount,
    Policy,
    PolicyList,
    SealStatus,
)
from .paths import normalize_path

SYS_PREFIX = "/v1/sys"


class Sys(ABC):
    """Operations on the vault system backend."""

    # Capabilities
    @abstractmethod
    def token_capabilities(self, path: str, token: str) -> list[str]:
        """Return the sorted capabilities ``token`` has on ``path``."""
        pass

    @abstractmethod
    def accessor_capabilities(self, path: str, accessor: str) -> list[str]:
        """Return the sorted capabilities of the token behind ``accessor`` on ``path``."""
        pass

    @abstractmethod
    def self_capabilities(self, path: str) -> list[str]:
        """Return the sorted capabilities of the calling token on ``path``."""
        pass

    # Leases
    @abstractmethod
    def lookup_lease(self, lease_id: str) -> Lease:
        """Return the metadata of the lease ``lease_id``."""
        pass

    # Policies
    @abstractmethod
    def list_policies(self) -> list[str]:
        """Return the names of all ACL policies."""
        pass

    @abstractmethod
    def get_policy(self, name: str) -> str:
        """Return the rules text of the policy ``name``.

        Raises:
            PathNotFoundError: If no policy with that name exists
        """
        pass

    @abstractmethod
    def set_policy(self, name: str, rules: str) -> None:
        """Create or replace the policy ``name`` with ``rules``."""
        pass

    @abstractmethod
    def delete_policy(self, name: str) -> None:
        """Delete the policy ``name``."""
        pass

    # Status
    @abstractmethod
    def health(self, standby_ok: bool = False) -> Health:
        """Return the health of the server, treating standbys as healthy if ``standby_ok``."""
        pass

    @abstractmethod
    def leader(self) -> Leader:
        """Return the high-availability leader as seen by the server."""
        pass

    @abstractmethod
    def step_down(self) -> None:
        """Ask the active node to give up leadership."""
        pass

    @abstractmethod
    def seal_status(self) -> SealStatus:
        """Return the seal state of the server."""
        pass

    @abstractmethod
    def list_mounts(self) -> dict[str, Mount]:
        """Return the mounted secret backends keyed by mount path."""
        pass


class SysClient(APIGroup, Sys):
    """Sys implementation on top of a Dispatcher."""

    def _capabilities(self, endpoint: str, body: dict) -> list[str]:
        caps = self.dispatcher.post(normalize_path(SYS_PREFIX, endpoint), body=body, response_type=Capabilities)
        return sorted(caps.capabilities)

    def token_capabilities(self, path: str, token: str) -> list[str]:
        return self._capabilities("capabilities", {"path": path, "token": token})

    def accessor_capabilities(self, path: str, accessor: str) -> list[str]:
        return self._capabilities("capabilities-accessor", {"path": path, "accessor": accessor})

    def self_capabilities(self, path: str) -> list[str]:
        return self._capabilities("capabilities-self", {"path": path})

    def lookup_lease(self, lease_id: str) -> Lease:
        envelope = self.dispatcher.put(
            normalize_path(SYS_PREFIX, "leases/lookup"),
            body={"lease_id": lease_id},
            response_type=DataEnvelope[Lease],
        )
        return envelope.data

    def list_policies(self) -> list[str]:
        policies = self.dispatcher.get(normalize_path(SYS_PREFIX, "policy"), PolicyList)
        return sorted(policies.policies)

    def get_policy(self, name: str) -> str:
        policy = self.dispatcher.get(normalize_path(SYS_PREFIX, f"policy/{name}"), Policy)
        return policy.rules

    def set_policy(self, name: str, rules: str) -> None:
        self.dispatcher.put(normalize_path(SYS_PREFIX, f"policy/{name}"), body=Policy(rules=rules).model_dump())

    def delete_policy(self, name: str) -> None:
        self.dispatcher.delete(normalize_path(SYS_PREFIX, f"policy/{name}"))

    def health(self, standby_ok: bool = False) -> Health:
        params = {"standbyok": "true" if standby_ok else ""}
        return self.dispatcher.get(normalize_path(SYS_PREFIX, "health"), Health, params=params)

    def leader(self) -> Leader:
        return self.dispatcher.get(normalize_path(SYS_PREFIX, "leader"), Leader)

    def step_down(self) -> None:
        self.dispatcher.put(normalize_path(SYS_PREFIX, "step-down"))

    def seal_status(self) -> SealStatus:
        return self.dispatcher.get(normalize_path(SYS_PREFIX, "seal-status"), SealStatus)

    def list_mounts(self) -> dict[str, Mount]:
        # mount information lives under "data", not at the top level
        envelope = self.dispatcher.get(normalize_path(SYS_PREFIX, "mounts"), DataEnvelope[dict[str, Mount]])
        return envelope.data
