"""Tests for bluejacket.routing.pattern — path pattern compiler."""

import re

import pytest

from bluejacket.errors import ConfigurationError
from bluejacket.routing.pattern import MATCH_ALL, compile_pattern, parse_pattern
from bluejacket.routing.rule import ParamKey


class TestParsePattern:
    def test_static(self) -> None:
        assert parse_pattern("/users") == ["/users"]

    def test_named_param(self) -> None:
        tokens = parse_pattern("/users/:id")
        assert tokens[0] == "/users"
        key = tokens[1]
        assert isinstance(key, ParamKey)
        assert key.name == "id"
        assert key.prefix == "/"
        assert key.optional is False
        assert key.repeat is False

    def test_unnamed_groups_are_numbered(self) -> None:
        tokens = parse_pattern("/:a/(x|y)/(z)")
        names = [t.name for t in tokens if isinstance(t, ParamKey)]
        assert names == ["a", "0", "1"]

    def test_modifiers(self) -> None:
        optional, star, plus = (
            t for t in parse_pattern("/:a?/:b*/:c+") if isinstance(t, ParamKey)
        )
        assert (optional.optional, optional.repeat) == (True, False)
        assert (star.optional, star.repeat) == (True, True)
        assert (plus.optional, plus.repeat) == (False, True)

    def test_custom_pattern(self) -> None:
        key = parse_pattern("/:id(\\d+)")[0]
        assert isinstance(key, ParamKey)
        assert key.pattern == "\\d+"

    def test_asterisk(self) -> None:
        key = parse_pattern("/assets/*")[1]
        assert isinstance(key, ParamKey)
        assert key.asterisk is True
        assert key.name == "0"

    def test_escaped_colon_is_literal(self) -> None:
        assert parse_pattern("/a\\:b") == ["/a:b"]


class TestCompileStatic:
    def test_exact(self) -> None:
        compiled = compile_pattern("/test")
        assert compiled.match("/test") == ()

    def test_no_partial_match(self) -> None:
        compiled = compile_pattern("/test")
        assert compiled.match("/test/more") is None
        assert compiled.match("/testing") is None

    def test_trailing_slash_allowed_by_default(self) -> None:
        assert compile_pattern("/test").match("/test/") == ()

    def test_strict_rejects_trailing_slash(self) -> None:
        compiled = compile_pattern("/test", strict=True)
        assert compiled.match("/test") == ()
        assert compiled.match("/test/") is None

    def test_case_insensitive_by_default(self) -> None:
        assert compile_pattern("/test").match("/TEST") == ()

    def test_case_sensitive(self) -> None:
        compiled = compile_pattern("/test", case_sensitive=True)
        assert compiled.match("/TEST") is None
        assert compiled.match("/test") == ()

    def test_root(self) -> None:
        compiled = compile_pattern("/")
        assert compiled.match("/") == ()
        assert compiled.match("/x") is None

    def test_source_kept(self) -> None:
        assert compile_pattern("/users/:id").source == "/users/:id"


class TestCompileParams:
    def test_named(self) -> None:
        compiled = compile_pattern("/users/:id")
        assert compiled.match("/users/42") == ("42",)
        assert [k.name for k in compiled.keys] == ["id"]

    def test_named_requires_segment(self) -> None:
        assert compile_pattern("/users/:id").match("/users/") is None

    def test_named_with_trailing_slash(self) -> None:
        assert compile_pattern("/users/:id").match("/users/42/") == ("42",)

    def test_alternation_group(self) -> None:
        compiled = compile_pattern("/test/:p1/(p2|p3)")
        assert compiled.match("/test/p1/p2") == ("p1", "p2")
        assert compiled.match("/test/p2/p3") == ("p2", "p3")
        assert compiled.match("/test/p1/p4") is None

    def test_optional(self) -> None:
        compiled = compile_pattern("/users/:id?")
        assert compiled.match("/users") == (None,)
        assert compiled.match("/users/7") == ("7",)

    def test_zero_or_more(self) -> None:
        compiled = compile_pattern("/files/:path*")
        assert compiled.match("/files") == (None,)
        assert compiled.match("/files/a/b/c") == ("a/b/c",)

    def test_one_or_more(self) -> None:
        compiled = compile_pattern("/files/:path+")
        assert compiled.match("/files") is None
        assert compiled.match("/files/a/b") == ("a/b",)

    def test_custom_pattern(self) -> None:
        compiled = compile_pattern("/users/:id(\\d+)")
        assert compiled.match("/users/42") == ("42",)
        assert compiled.match("/users/abc") is None

    def test_asterisk_matches_rest(self) -> None:
        compiled = compile_pattern("/assets/*")
        assert compiled.match("/assets/css/site.css") == ("css/site.css",)

    def test_dot_prefix(self) -> None:
        compiled = compile_pattern("/file.:ext")
        assert compiled.match("/file.json") == ("json",)

    def test_escaped_colon(self) -> None:
        compiled = compile_pattern("/a\\:b")
        assert compiled.match("/a:b") == ()
        assert compiled.keys == ()


class TestCompileRegex:
    def test_regex_used_as_is(self) -> None:
        regex = re.compile(r"^/items/(\d+)$")
        compiled = compile_pattern(regex)
        assert compiled.regex is regex
        assert compiled.match("/items/5") == ("5",)
        assert [k.name for k in compiled.keys] == ["0"]

    def test_named_groups_keep_names(self) -> None:
        compiled = compile_pattern(re.compile(r"^/items/(?P<item>\d+)/(\w+)$"))
        assert [k.name for k in compiled.keys] == ["item", "0"]

    def test_regex_searches_anywhere(self) -> None:
        assert compile_pattern(re.compile(r"admin")).match("/x/admin/y") == ()

    def test_regex_flags_not_overridden(self) -> None:
        compiled = compile_pattern(re.compile(r"^/abc$"), case_sensitive=False)
        assert compiled.match("/ABC") is None

    def test_bytes_regex_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="bytes"):
            compile_pattern(re.compile(rb"^/abc$"))  # type: ignore[arg-type]


class TestCompileErrors:
    def test_invalid_custom_pattern(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid path pattern"):
            compile_pattern("/:id(+)")

    def test_non_string_pattern(self) -> None:
        with pytest.raises(ConfigurationError, match="got int"):
            compile_pattern(42)  # type: ignore[arg-type]


class TestMatchAll:
    def test_matches_everything(self) -> None:
        assert MATCH_ALL.match("/anything") == ()
        assert MATCH_ALL.match("") == ()
        assert MATCH_ALL.keys == ()
