"""ParamKey, HandlerEntry, Rule, and RuleMatch frozen dataclasses."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from bluejacket.handlers import Handler, describe_handler

if TYPE_CHECKING:
    from bluejacket.routing.pattern import CompiledPattern


@dataclass(frozen=True, slots=True)
class ParamKey:
    """One capture slot of a compiled pattern.

    Named:     ``/:id``          (name="id")
    Unnamed:   ``/(a|b)``        (name="0", the unnamed-group counter)
    Optional:  ``/:id?``         (optional=True)
    Repeated:  ``/:path*``       (optional=True, repeat=True)
    Custom:    ``/:id(\\d+)``    (pattern="\\d+")
    """

    name: str
    prefix: str = ""
    delimiter: str = "/"
    optional: bool = False
    repeat: bool = False
    partial: bool = False
    asterisk: bool = False
    pattern: str = ""


@dataclass(frozen=True, slots=True)
class HandlerEntry:
    """One top-level handler of a rule, bound to the rule's param keys.

    Every entry of a rule shares the same ``keys`` tuple.
    """

    handler: Handler
    keys: tuple[ParamKey, ...]


@dataclass(frozen=True, slots=True)
class Rule:
    """A registered (pattern, handlers) unit.

    Created by ``Dispatcher.register()``. One rule per call; rules with
    identical patterns are kept separate so call order is preserved.
    """

    compiled: "CompiledPattern"
    entries: tuple[HandlerEntry, ...]

    @property
    def pattern(self) -> str:
        """The pattern source as registered."""
        return self.compiled.source

    @property
    def keys(self) -> tuple[ParamKey, ...]:
        return self.compiled.keys

    @property
    def handler_names(self) -> list[str]:
        return [describe_handler(entry.handler) for entry in self.entries]

    def describe(self) -> str:
        """One-line summary: ``/users/:id [id] load_user, [a, b]``."""
        keys = ", ".join(key.name for key in self.keys) or "-"
        handlers = ", ".join(self.handler_names) or "-"
        return f"{self.pattern} [{keys}] {handlers}"


@dataclass(frozen=True, slots=True)
class RuleMatch:
    """Result of a successful rule match: the rule plus raw capture groups."""

    rule: Rule
    groups: tuple[str | None, ...]
