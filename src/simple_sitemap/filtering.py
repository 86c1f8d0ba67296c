"""Include/exclude URL filtering.

Rules are either compiled regular expressions or route patterns
(``/blog/**``, ``/docs/:page``, ``/about``).  Exclude rules are checked
first; the first rule set that matches decides the result.  When no rule
matches, a path passes unless an include list was given.

Usage::

    url_filter = create_filter(include=["/blog/**"], exclude=[re.compile(r"/draft-")])
    url_filter("/blog/post-1")   # True
    url_filter("/about")         # False
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TypeAlias

from simple_sitemap.routing.router import Router

FilterRule: TypeAlias = str | re.Pattern[str]
UrlFilter: TypeAlias = Callable[[str], bool]


@dataclass(frozen=True, slots=True)
class _RuleSet:
    """One compiled category of rules (include or exclude)."""

    patterns: tuple[re.Pattern[str], ...]
    literals: frozenset[str]
    router: Router | None
    result: bool

    @classmethod
    def compile(cls, rules: Sequence[FilterRule], result: bool) -> _RuleSet:
        patterns = tuple(r for r in rules if isinstance(r, re.Pattern))
        literals = [r for r in rules if isinstance(r, str)]
        router: Router | None = None
        if literals:
            router = Router()
            for literal in literals:
                router.add(literal)
            router.compile()
        return cls(patterns=patterns, literals=frozenset(literals), router=router, result=result)

    def matches(self, path: str) -> bool:
        if any(pattern.search(path) for pattern in self.patterns):
            return True
        if path in self.literals:
            return True
        return self.router is not None and bool(self.router.match_all(path))


def create_filter(
    include: Sequence[FilterRule] | None = None,
    exclude: Sequence[FilterRule] | None = None,
) -> UrlFilter:
    """Build a predicate deciding whether a path belongs in the sitemap."""
    include = list(include or ())
    exclude = list(exclude or ())
    if not include and not exclude:
        return lambda path: True

    rule_sets = [
        _RuleSet.compile(exclude, result=False),
        _RuleSet.compile(include, result=True),
    ]
    default = not include

    def url_filter(path: str) -> bool:
        for rule_set in rule_sets:
            if rule_set.matches(path):
                return rule_set.result
        return default

    return url_filter
