"""Rule registry — ordered, append-only list of registered rules.

Unlike a first-match router, every rule whose pattern accepts the path is
returned, in registration order. Rules registered under the same pattern
are not merged; each ``add()`` is its own rule, so interleaved
registrations keep their relative order.
"""

import logging
from collections.abc import Iterable, Iterator

from bluejacket.handlers import build_handlers
from bluejacket.routing.pattern import MATCH_ALL, CompiledPattern, Pattern, compile_pattern
from bluejacket.routing.rule import HandlerEntry, Rule, RuleMatch

logger = logging.getLogger("bluejacket.routing")


class RuleRegistry:
    """Registered rules in registration order.

    Usage::

        registry = RuleRegistry()
        registry.add("/users/:id", [load_user])
        for match in registry.matching("/users/42"):
            ...
    """

    __slots__ = ("_case_sensitive", "_rules", "_strict")

    def __init__(self, *, case_sensitive: bool = False, strict: bool = False) -> None:
        self._rules: list[Rule] = []
        self._case_sensitive = case_sensitive
        self._strict = strict

    def add(self, pattern: Pattern | None, handlers: Iterable[object]) -> Rule:
        """Validate *handlers*, compile *pattern*, and append a new rule.

        ``None`` as the pattern matches every path. Raises
        ``ConfigurationError`` before anything is stored if a handler or
        the pattern is invalid.
        """
        built = build_handlers(handlers)
        compiled: CompiledPattern = (
            MATCH_ALL
            if pattern is None
            else compile_pattern(pattern, case_sensitive=self._case_sensitive, strict=self._strict)
        )

        rule = Rule(
            compiled=compiled,
            entries=tuple(HandlerEntry(handler=handler, keys=compiled.keys) for handler in built),
        )
        self._rules.append(rule)
        logger.debug("registered rule %r with %d handler(s)", compiled.source, len(built))
        return rule

    def matching(self, route: str) -> Iterator[RuleMatch]:
        """Yield every rule that matches *route*, in registration order."""
        for rule in self._rules:
            groups = rule.compiled.match(route)
            if groups is not None:
                yield RuleMatch(rule=rule, groups=groups)

    @property
    def rules(self) -> list[Rule]:
        """All registered rules, in registration order."""
        return list(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)
