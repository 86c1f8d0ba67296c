"""Tests for simple_sitemap.pages.tokenizer — segment tokens and path fragments."""

import pytest

from simple_sitemap.errors import ParseError
from simple_sitemap.pages.tokenizer import route_path, segment_name, tokenize
from simple_sitemap.pages.types import RouteToken, TokenType


class TestTokenize:
    def test_static(self) -> None:
        assert tokenize("about") == [RouteToken(TokenType.STATIC, "about")]

    def test_dynamic(self) -> None:
        assert tokenize("[id]") == [RouteToken(TokenType.DYNAMIC, "id")]

    def test_optional(self) -> None:
        assert tokenize("[[lang]]") == [RouteToken(TokenType.OPTIONAL, "lang")]

    def test_catchall(self) -> None:
        assert tokenize("[...slug]") == [RouteToken(TokenType.CATCHALL, "slug")]

    def test_mixed_static_and_dynamic(self) -> None:
        assert tokenize("post-[id]") == [
            RouteToken(TokenType.STATIC, "post-"),
            RouteToken(TokenType.DYNAMIC, "id"),
        ]

    def test_static_after_param(self) -> None:
        assert tokenize("[id]-edit") == [
            RouteToken(TokenType.DYNAMIC, "id"),
            RouteToken(TokenType.STATIC, "-edit"),
        ]

    def test_two_params(self) -> None:
        assert tokenize("[a]-[b]") == [
            RouteToken(TokenType.DYNAMIC, "a"),
            RouteToken(TokenType.STATIC, "-"),
            RouteToken(TokenType.DYNAMIC, "b"),
        ]

    def test_invalid_param_characters_dropped(self) -> None:
        assert tokenize("[my-id]") == [RouteToken(TokenType.DYNAMIC, "myid")]

    def test_dotted_param_name_kept(self) -> None:
        assert tokenize("[file.ext]") == [RouteToken(TokenType.DYNAMIC, "file.ext")]

    def test_empty_segment(self) -> None:
        assert tokenize("") == []


class TestTokenizeErrors:
    def test_unterminated_dynamic(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            tokenize("[unterminated")
        assert exc_info.value.reason == "Unfinished param"
        assert exc_info.value.segment == "[unterminated"

    def test_unterminated_optional(self) -> None:
        with pytest.raises(ParseError, match="Unfinished param"):
            tokenize("[[lang]")

    def test_unterminated_catchall(self) -> None:
        with pytest.raises(ParseError, match="Unfinished param"):
            tokenize("[...slug")

    def test_empty_param(self) -> None:
        with pytest.raises(ParseError, match="Empty param"):
            tokenize("[]")


class TestSegmentName:
    def test_joins_values(self) -> None:
        assert segment_name(tokenize("post-[id]")) == "post-id"

    def test_catchall_name(self) -> None:
        assert segment_name(tokenize("[...slug]")) == "slug"


class TestRoutePath:
    def test_static(self) -> None:
        assert route_path(tokenize("about")) == "/about"

    def test_dynamic(self) -> None:
        assert route_path(tokenize("[id]")) == "/:id"

    def test_optional(self) -> None:
        assert route_path(tokenize("[[lang]]")) == "/:lang?"

    def test_catchall(self) -> None:
        assert route_path(tokenize("[...slug]")) == "/:slug(.*)*"

    def test_static_is_percent_encoded(self) -> None:
        assert route_path(tokenize("hello world")) == "/hello%20world"

    def test_never_contains_brackets(self) -> None:
        for segment in ("[id]", "[[lang]]", "[...all]", "x-[y]-z"):
            path = route_path(tokenize(segment))
            assert "[" not in path
            assert "]" not in path
