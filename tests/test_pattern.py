"""Tests for clover.routing.pattern — pattern parsing and regex compilation."""

import pytest

from clover.errors import ConfigurationError, PatternError
from clover.routing.pattern import compile_pattern, parse_pattern


class TestParsePattern:
    def test_literal_only(self) -> None:
        segments = parse_pattern("/about/team")
        assert len(segments) == 1
        assert segments[0].value == "/about/team"
        assert segments[0].is_param is False

    def test_placeholder(self) -> None:
        segments = parse_pattern("/users/{id}")
        assert [s.value for s in segments] == ["/users/", "{id}"]
        assert segments[1].is_param is True
        assert segments[1].param_name == "id"

    def test_multiple_placeholders(self) -> None:
        segments = parse_pattern("/users/{user_id}/posts/{post_id}")
        names = [s.param_name for s in segments if s.is_param]
        assert names == ["user_id", "post_id"]

    def test_placeholder_inside_segment(self) -> None:
        segments = parse_pattern("/posts/{year}-{slug}.txt")
        assert [s.value for s in segments] == ["/posts/", "{year}", "-", "{slug}", ".txt"]

    def test_non_word_braces_are_literal(self) -> None:
        segments = parse_pattern("/files/{not-a-name}")
        assert len(segments) == 1
        assert segments[0].is_param is False

    def test_empty_pattern(self) -> None:
        assert parse_pattern("") == ()

    def test_rejects_non_identifier_name(self) -> None:
        with pytest.raises(PatternError) as exc_info:
            parse_pattern("/items/{1st}")
        assert exc_info.value.pattern == "/items/{1st}"
        assert "{1st}" in str(exc_info.value)

    def test_rejects_duplicate_name(self) -> None:
        with pytest.raises(PatternError, match="more than once"):
            parse_pattern("/a/{id}/b/{id}")

    def test_pattern_error_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError):
            parse_pattern("/x/{9}")


class TestCompilePattern:
    def test_anchored_at_both_ends(self) -> None:
        regex = compile_pattern("/users/{id}")
        assert regex.pattern.startswith("^")
        assert regex.pattern.endswith("$")
        assert regex.fullmatch("/users/42") is not None
        assert regex.fullmatch("/api/users/42") is None
        assert regex.fullmatch("/users/42/edit") is None

    def test_placeholder_excludes_slash(self) -> None:
        regex = compile_pattern("/files/{name}")
        assert regex.fullmatch("/files/a/b") is None

    def test_placeholder_requires_one_character(self) -> None:
        regex = compile_pattern("/users/{id}")
        assert regex.fullmatch("/users/") is None

    def test_named_groups(self) -> None:
        regex = compile_pattern("/users/{user_id}/posts/{post_id}")
        m = regex.fullmatch("/users/7/posts/hello-world")
        assert m is not None
        assert m.groupdict() == {"user_id": "7", "post_id": "hello-world"}

    def test_case_preserved(self) -> None:
        m = compile_pattern("/tags/{Tag}").fullmatch("/tags/PyCon")
        assert m is not None
        assert m.groupdict() == {"Tag": "PyCon"}

    def test_mixed_segment(self) -> None:
        m = compile_pattern("/posts/{year}-{slug}").fullmatch("/posts/2024-launch")
        assert m is not None
        # [^/]+ is greedy: the first placeholder takes as much as it can
        assert m.groupdict() == {"year": "2024", "slug": "launch"}

    def test_regex_metacharacters_are_literal(self) -> None:
        regex = compile_pattern("/price/$5.00/{item}")
        assert regex.fullmatch("/price/$5.00/tea") is not None
        assert regex.fullmatch("/price/$5X00/tea") is None

    def test_no_regex_injection(self) -> None:
        regex = compile_pattern("/(.*)")
        assert regex.fullmatch("/anything") is None
        assert regex.fullmatch("/(.*)") is not None

    def test_non_word_braces_match_verbatim(self) -> None:
        regex = compile_pattern("/files/{not-a-name}")
        assert regex.fullmatch("/files/{not-a-name}") is not None
        assert regex.fullmatch("/files/readme") is None

    def test_literal_pattern(self) -> None:
        regex = compile_pattern("/about")
        assert regex.fullmatch("/about") is not None
        assert regex.fullmatch("/about/") is None
