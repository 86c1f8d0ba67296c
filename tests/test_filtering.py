"""Tests for simple_sitemap.filtering — include/exclude URL filters."""

import re

from simple_sitemap.filtering import create_filter


class TestCreateFilter:
    def test_no_rules_pass_everything(self) -> None:
        assert create_filter()("/anything")
        assert create_filter(include=[], exclude=[])("/anything")

    def test_exclude_pattern(self) -> None:
        url_filter = create_filter(exclude=["/private/**"])
        assert url_filter("/private/x") is False
        assert url_filter("/public") is True

    def test_include_only_rejects_unmatched(self) -> None:
        url_filter = create_filter(include=["/blog/**"])
        assert url_filter("/about") is False
        assert url_filter("/blog/post-1") is True

    def test_exclude_checked_before_include(self) -> None:
        url_filter = create_filter(include=["/blog/**"], exclude=["/blog/drafts/**"])
        assert url_filter("/blog/drafts/wip") is False
        assert url_filter("/blog/live") is True

    def test_single_segment_wildcard(self) -> None:
        url_filter = create_filter(include=["/blog/*"])
        assert url_filter("/blog/post-1") is True
        assert url_filter("/blog/2024/post") is False

    def test_named_param(self) -> None:
        assert create_filter(exclude=["/users/:id"])("/users/42") is False

    def test_regex_rules(self) -> None:
        url_filter = create_filter(exclude=[re.compile(r"/draft-")])
        assert url_filter("/blog/draft-1") is False
        assert url_filter("/blog/final-1") is True

    def test_regex_and_literal_mixed(self) -> None:
        url_filter = create_filter(include=[re.compile(r"^/docs"), "/about"])
        assert url_filter("/docs/intro") is True
        assert url_filter("/about") is True
        assert url_filter("/contact") is False

    def test_exact_literal(self) -> None:
        url_filter = create_filter(exclude=["/secret"])
        assert url_filter("/secret") is False
        assert url_filter("/secretive") is True
