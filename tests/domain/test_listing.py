"""Tests for listing body parsers."""

from __future__ import annotations

import pytest

from cloudfiles.domain.errors import InvalidResponse
from cloudfiles.domain.listing import (
    parse_container_details,
    parse_names,
    parse_object_details,
)
from cloudfiles.domain.models import ObjectDetail


class TestParseNames:
    def test_preserves_server_order(self):
        assert parse_names("zeta\nalpha\nmid") == ["zeta", "alpha", "mid"]

    def test_drops_blank_lines(self):
        assert parse_names("a\n\n \nb\n") == ["a", "b"]

    @pytest.mark.parametrize("text", [None, "", "\n"])
    def test_empty(self, text):
        assert parse_names(text) == []

    def test_keeps_inner_spaces(self):
        assert parse_names("my file.txt\n") == ["my file.txt"]

    def test_crlf_line_endings(self):
        assert parse_names("foo\r\nbar\r\n\r\n") == ["foo", "bar"]


class TestParseObjectDetails:
    def test_leading_whitespace_before_declaration(self):
        body = (
            '\n  <?xml version="1.0" encoding="UTF-8"?>\n'
            '<container name="docs"><object><name>a.txt</name><hash>h</hash>'
            "<bytes>3</bytes><content_type>text/plain</content_type>"
            "<last_modified>2009-01-01T00:00:00</last_modified></object></container>"
        )

        assert parse_object_details(body) == {
            "a.txt": ObjectDetail(
                name="a.txt",
                bytes="3",
                hash="h",
                content_type="text/plain",
                last_modified="2009-01-01T00:00:00",
            )
        }

    def test_missing_fields_are_none(self):
        body = "<container><object><name>a</name></object></container>"

        detail = parse_object_details(body)["a"]

        assert detail.bytes == "0"
        assert detail.hash is None
        assert detail.content_type is None

    def test_duplicate_names_keep_last(self):
        body = (
            "<container>"
            "<object><name>a</name><bytes>1</bytes></object>"
            "<object><name>a</name><bytes>2</bytes></object>"
            "</container>"
        )

        assert parse_object_details(body)["a"].bytes == "2"

    def test_entries_without_name_are_skipped(self):
        body = "<container><object><bytes>1</bytes></object></container>"

        assert parse_object_details(body) == {}

    def test_no_objects(self):
        assert parse_object_details('<container name="empty"></container>') == {}

    def test_malformed(self):
        with pytest.raises(InvalidResponse, match="Unreadable listing"):
            parse_object_details("<container>")


class TestParseContainerDetails:
    def test_parses_account_listing(self):
        body = (
            "<account name='AUTH_x'>"
            "<container><name>a</name><count>1</count><bytes>10</bytes></container>"
            "<container><name>b</name><count>0</count><bytes>0</bytes></container>"
            "</account>"
        )

        details = parse_container_details(body)

        assert list(details) == ["a", "b"]
        assert details["a"].count == "1"
        assert details["b"].bytes == "0"
