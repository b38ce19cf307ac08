"""Tests for label selector parsing and comparison."""

from __future__ import annotations

import pytest

from devctl.domain.errors import ParseError
from devctl.domain.selectors import format_selectors, parse_selectors, selectors_equal


class TestParseSelectors:
    def test_empty_string_is_empty_selector(self) -> None:
        assert parse_selectors("") == {}

    def test_single_pair(self) -> None:
        assert parse_selectors("app=web") == {"app": "web"}

    def test_multiple_pairs(self) -> None:
        assert parse_selectors("app=web,tier=frontend") == {"app": "web", "tier": "frontend"}

    def test_last_duplicate_wins(self) -> None:
        assert parse_selectors("app=a,app=b") == {"app": "b"}

    def test_second_equals_in_token_fails(self) -> None:
        with pytest.raises(ParseError, match="malformed selector token") as exc_info:
            parse_selectors("a=b=c")
        assert exc_info.value.detail == {"token": "a=b=c"}

    def test_empty_value_allowed(self) -> None:
        assert parse_selectors("app=") == {"app": ""}

    @pytest.mark.parametrize("text", ["app", "app=web,tier", ",", "app=web,expr=a=b", "=="])
    def test_token_without_single_equals_fails(self, text: str) -> None:
        with pytest.raises(ParseError, match="malformed selector token"):
            parse_selectors(text)

    def test_error_code(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_selectors("oops")
        assert exc_info.value.code == "PARSE_ERROR"
        assert exc_info.value.detail == {"token": "oops"}


class TestFormatSelectors:
    def test_sorted_by_key(self) -> None:
        assert format_selectors({"tier": "frontend", "app": "web"}) == "app=web,tier=frontend"

    def test_empty_and_none(self) -> None:
        assert format_selectors({}) == ""
        assert format_selectors(None) == ""

    @pytest.mark.parametrize(
        "text",
        ["a=1,b=2", "b=2,a=1", "release=devspace", "app=web,tier=frontend,env=dev"],
    )
    def test_parse_format_parse_is_stable(self, text: str) -> None:
        parsed = parse_selectors(text)
        assert parse_selectors(format_selectors(parsed)) == parsed


class TestSelectorsEqual:
    def test_order_independent(self) -> None:
        assert selectors_equal({"a": "1", "b": "2"}, {"b": "2", "a": "1"})

    def test_different_value(self) -> None:
        assert not selectors_equal({"a": "1"}, {"a": "2"})

    def test_subset_is_not_equal(self) -> None:
        assert not selectors_equal({"app": "a"}, {"app": "a", "tier": "web"})
        assert not selectors_equal({"app": "a", "tier": "web"}, {"app": "a"})

    def test_none_equals_empty(self) -> None:
        assert selectors_equal(None, {})
        assert selectors_equal({}, None)
        assert not selectors_equal(None, {"app": "a"})
