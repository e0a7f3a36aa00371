"""Value types returned by container, object and account operations."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ContainerInfo:
    """Consolidated result of a container metadata fetch and CDN probe."""

    bytes_used: int
    object_count: int
    cdn_enabled: bool
    cdn_ttl: int | None = None
    cdn_uri: str | None = None


@dataclass(frozen=True, slots=True)
class ObjectDetail:
    """One entry of a detailed object listing.

    ``bytes`` is kept exactly as the listing returned it.
    """

    name: str
    bytes: str
    hash: str | None
    content_type: str | None
    last_modified: str | None


@dataclass(frozen=True, slots=True)
class ContainerDetail:
    """One entry of a detailed container listing."""

    name: str
    count: str
    bytes: str


@dataclass(frozen=True, slots=True)
class AccountInfo:
    """Account totals from a HEAD on the storage root."""

    bytes_used: int
    container_count: int
