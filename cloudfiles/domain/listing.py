"""Parsers for container and account listing bodies.

Plain listings are UTF-8 text with one name per line. Detailed listings
(``format=xml``) wrap one element per entry whose children carry the
entry's fields.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

from cloudfiles.domain.errors import InvalidResponse
from cloudfiles.domain.models import ContainerDetail, ObjectDetail


def parse_names(text: str | None) -> list[str]:
    """Return the non-empty lines of a plain listing in server order."""
    if not text:
        return []
    lines = (line.rstrip("\r") for line in text.split("\n"))
    return [line for line in lines if line.strip()]


def _parse_entries(text: str | None, tag: str) -> list[dict[str, str | None]]:
    if not text or not text.strip():
        return []
    try:
        root = ET.fromstring(text.strip())
    except ET.ParseError as exc:
        raise InvalidResponse(f"Unreadable listing: {exc}") from exc

    entries = []
    for element in root.iter(tag):
        entries.append({child.tag: child.text for child in element})
    return entries


def parse_object_details(text: str | None) -> dict[str, ObjectDetail]:
    """Parse an XML object listing into ``{name: ObjectDetail}``."""
    details: dict[str, ObjectDetail] = {}
    for entry in _parse_entries(text, "object"):
        name = entry.get("name")
        if not name:
            continue
        details[name] = ObjectDetail(
            name=name,
            bytes=entry.get("bytes") or "0",
            hash=entry.get("hash"),
            content_type=entry.get("content_type"),
            last_modified=entry.get("last_modified"),
        )
    return details


def parse_container_details(text: str | None) -> dict[str, ContainerDetail]:
    """Parse an XML account listing into ``{name: ContainerDetail}``."""
    details: dict[str, ContainerDetail] = {}
    for entry in _parse_entries(text, "container"):
        name = entry.get("name")
        if not name:
            continue
        details[name] = ContainerDetail(
            name=name,
            count=entry.get("count") or "0",
            bytes=entry.get("bytes") or "0",
        )
    return details
