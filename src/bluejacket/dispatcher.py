"""The dispatcher — register rules, resolve paths.

A path is run against every matching rule, in registration order. Within
a rule, handlers run one after another; a list of handlers is one step
whose members run concurrently::

    dispatcher = Dispatcher()

    dispatcher.register("/users/:id", load_user, [load_posts, load_likes], render)
    dispatcher.register(log_visit)  # no pattern: runs for every path

    context = await dispatcher.resolve("/users/42?tab=posts", {"viewer": 7})
    context.params  # {"id": "42"}
    context.route   # "/users/42?tab=posts"

A handler ends resolution early, successfully, by returning ``STOP`` or
raising ``SkipRoute``. Any other exception propagates out of ``resolve()``
unchanged.
"""

import logging
import re
from collections.abc import Callable, Iterator, Mapping
from typing import Any

from bluejacket.config import DispatcherConfig
from bluejacket.context import Context
from bluejacket.errors import TypeContractError
from bluejacket.executor import resolve_entry
from bluejacket.instances import InstanceCache
from bluejacket.outcome import Outcome
from bluejacket.routing.pattern import Pattern
from bluejacket.routing.registry import RuleRegistry
from bluejacket.routing.rule import Rule, RuleMatch

logger = logging.getLogger("bluejacket.dispatch")

_instances: InstanceCache["Dispatcher"] = InstanceCache()


def clear_instances() -> None:
    """Forget every keyed dispatcher. Intended for test isolation."""
    _instances.clear()


def find_instance(key: str) -> "Dispatcher | None":
    """The dispatcher cached under *key*, or ``None`` if none was created."""
    return _instances.get(key)


def _strip_route(path: str) -> str:
    """Drop the query string, then the fragment."""
    return path.split("?", 1)[0].split("#", 1)[0]


class Dispatcher:
    """Fan-out path dispatcher.

    Constructing with an ``instance_key`` that is already cached returns
    the cached dispatcher (its original config wins); otherwise a new
    dispatcher is created and, if keyed, cached. An empty key counts as
    no key.

    Thread safety:
        Keyed construction is safe across threads. ``register()`` and
        ``resolve()`` on the same dispatcher are not synchronized; finish
        registration before resolving concurrently.
    """

    __slots__ = ("_registry", "config")

    config: DispatcherConfig
    _registry: RuleRegistry

    def __new__(cls, config: DispatcherConfig | None = None) -> "Dispatcher":
        config = config or DispatcherConfig()
        if not config.instance_key:
            return cls._create(config)
        return _instances.get_or_create(config.instance_key, lambda: cls._create(config))

    @classmethod
    def _create(cls, config: DispatcherConfig) -> "Dispatcher":
        self = super().__new__(cls)
        self.config = config
        self._registry = RuleRegistry(
            case_sensitive=config.case_sensitive,
            strict=config.strict,
        )
        return self

    # -- Registration --

    def register(self, pattern: Pattern | Any, *handlers: Any) -> Rule:
        """Register *handlers* under *pattern*.

        If the first argument is not a ``str`` or compiled regex it is
        treated as a handler too, and the rule matches every path::

            dispatcher.register("/a", first, second)   # pattern + two handlers
            dispatcher.register(first, second)         # match-all

        Each handler is a callable taking the context, or a list (nested to
        any depth) of such callables to run concurrently.

        Raises ``ConfigurationError`` if any handler or the pattern is
        invalid; nothing is registered in that case.
        """
        if isinstance(pattern, (str, re.Pattern)):
            return self._registry.add(pattern, handlers)
        return self._registry.add(None, (pattern, *handlers))

    def route(
        self,
        pattern: Pattern | None = None,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Register a single handler via decorator.

        ::

            @dispatcher.route("/users/:id")
            async def load_user(context):
                context.user = await users.get(context.params["id"])

        Omit *pattern* to run the handler for every path.
        """

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self._registry.add(pattern, (func,))
            return func

        return decorator

    @property
    def rules(self) -> list[Rule]:
        """Registered rules in registration order."""
        return self._registry.rules

    def __len__(self) -> int:
        return len(self._registry)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._registry)

    # -- Resolution --

    def match(self, path: str) -> list[RuleMatch]:
        """Rules that *path* would run, in order, without running them."""
        if not isinstance(path, str):
            msg = f"Path to be matched must be a string, got {type(path).__name__}"
            raise TypeContractError(msg)
        return list(self._registry.matching(_strip_route(path)))

    async def resolve(self, path: str, data: Mapping[str, Any] | None = None) -> Context:
        """Run every matching rule for *path* and return the context.

        The query string and fragment are ignored for matching but kept in
        ``context.route``. *data* is exposed to handlers as ``context.data``.

        Raises ``TypeContractError`` if *path* is not a ``str``. Exceptions
        raised by handlers propagate unchanged.
        """
        if not isinstance(path, str):
            msg = f"Path to be resolved must be a string, got {type(path).__name__}"
            raise TypeContractError(msg)

        route = _strip_route(path)
        context = Context(self.config.mixins)
        context.update(route=path, data={} if data is None else data, router=self)

        matched = 0
        for match in self._registry.matching(route):
            matched += 1
            for entry in match.rule.entries:
                outcome = await resolve_entry(match.groups, entry, context)
                if outcome is Outcome.STOP:
                    logger.debug("resolution of %r stopped by %r", path, match.rule.pattern)
                    return context

        logger.debug("resolved %r through %d rule(s)", path, matched)
        return context

    def __repr__(self) -> str:
        key = self.config.instance_key
        suffix = f" key={key!r}" if key else ""
        return f"<Dispatcher rules={len(self)}{suffix}>"
