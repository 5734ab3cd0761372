# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Request and response shapes for the vault HTTP API.

These are plain data-transfer models. Unknown fields in responses are
ignored so that newer vault versions keep decoding.
"""

from datetime import timedelta
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_serializer

T = TypeVar("T")


def duration_string(value: timedelta) -> str:
    """Render a duration the way vault accepts it, in whole seconds ("90s")."""
    return f"{int(value.total_seconds())}s"


class DataEnvelope(BaseModel, Generic[T]):
    """Responses that wrap their payload in a ``data`` field."""

    data: T


class AuthEnvelope(BaseModel, Generic[T]):
    """Responses that wrap their payload in an ``auth`` field."""

    auth: T


# ------------------------
# Key-value
# ------------------------
class SecretValue(BaseModel):
    value: str


class KeyList(BaseModel):
    keys: list[str] = Field(default_factory=list)


# ------------------------
# Tokens
# ------------------------
class TokenOptions(BaseModel):
    """Options for creating a token. Unset options are not sent."""

    model_config = ConfigDict(populate_by_name=True)

    policies: Optional[list[str]] = None
    no_default_policy: bool = False
    orphan: bool = Field(default=False, alias="no_parent")
    renewable: Optional[bool] = None
    display_name: Optional[str] = None
    max_uses: int = Field(default=0, alias="num_uses")
    ttl: Optional[timedelta] = None
    max_ttl: Optional[timedelta] = Field(default=None, alias="explicit_max_ttl")
    period: Optional[timedelta] = None

    @field_serializer("ttl", "max_ttl", "period")
    def _serialize_duration(self, value: Optional[timedelta]) -> Optional[str]:
        return duration_string(value) if value is not None else None

    def to_request(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_defaults=True)


class CreatedToken(BaseModel):
    """A token as returned under ``auth`` by create and renew calls."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="client_token")
    accessor: str = ""
    policies: list[str] = Field(default_factory=list)
    metadata: Optional[dict[str, str]] = None
    lease_duration: int = 0
    renewable: bool = False


class LookedUpToken(BaseModel):
    """Token properties as returned by the lookup calls."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = ""
    accessor: str = ""
    path: str = ""
    policies: list[str] = Field(default_factory=list)
    display_name: str = ""
    meta: Optional[dict[str, str]] = None
    num_uses: int = 0
    orphan: bool = False
    renewable: bool = False
    ttl: int = 0
    max_ttl: int = Field(default=0, alias="explicit_max_ttl")
    creation_ttl: int = 0
    expire_time: Optional[str] = None


class TokenRoleOptions(BaseModel):
    """Options for creating or updating a token role.

    ``name`` goes into the request path; everything else is the body.
    """

    name: str
    allowed_policies: str = ""
    disallowed_policies: str = ""
    orphan: bool = False
    period: str = ""
    renewable: bool = False
    explicit_max_ttl: int = 0
    path_suffix: str = ""
    bound_cidrs: list[str] = Field(default_factory=list)

    def to_request(self) -> dict:
        return self.model_dump(mode="json", exclude={"name"}, exclude_defaults=True)


class TokenRole(BaseModel):
    name: str = ""
    allowed_policies: list[str] = Field(default_factory=list)
    disallowed_policies: list[str] = Field(default_factory=list)
    explicit_max_ttl: int = 0
    orphan: bool = False
    path_suffix: str = ""
    period: int = 0
    renewable: bool = False


# ------------------------
# System backend
# ------------------------
class Capabilities(BaseModel):
    capabilities: list[str] = Field(default_factory=list)


class Lease(BaseModel):
    """Metadata about something in vault that may expire, such as a token."""

    id: str
    issue_time: str = ""
    expire_time: Optional[str] = None
    last_renewal_time: Optional[str] = None
    renewable: bool = False
    ttl: int = 0


class Health(BaseModel):
    initialized: bool = False
    sealed: bool = False
    standby: bool = False
    server_time_utc: int = 0
    version: str = ""
    cluster_name: str = ""
    cluster_id: str = ""


class Leader(BaseModel):
    ha_enabled: bool = False
    is_self: bool = False
    leader_address: str = ""


class SealStatus(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    sealed: bool
    threshold: int = Field(default=0, alias="t")
    shares: int = Field(default=0, alias="n")
    progress: int = 0
    version: str = ""
    cluster_name: str = ""
    cluster_id: str = ""


class MountConfig(BaseModel):
    default_lease_ttl: int = 0
    max_lease_ttl: int = 0
    force_no_cache: bool = False


class Mount(BaseModel):
    type: str
    description: str = ""
    config: MountConfig = Field(default_factory=MountConfig)


class PolicyList(BaseModel):
    policies: list[str] = Field(default_factory=list)


class Policy(BaseModel):
    rules: str
