"""Handler variants — what a rule runs.

A handler is either an ``Action`` (one callable taking the context, sync or
async) or a ``Chain`` (a sequence of handlers run concurrently). Callers
never build these directly; ``Dispatcher.register()`` turns plain
callables and (nested) lists of callables into the variant tree once, at
registration time::

    dispatcher.register("/users/:id", load_user, [fetch_posts, fetch_likes], render)

    # -> three entries: Action(load_user),
    #                   Chain((Action(fetch_posts), Action(fetch_likes))),
    #                   Action(render)
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, TypeAlias

from bluejacket.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class Action:
    """A single callable invoked with the context."""

    func: Callable[..., Any]


@dataclass(frozen=True, slots=True)
class Chain:
    """Handlers started together; the chain completes when all of them have."""

    handlers: tuple["Handler", ...]


Handler: TypeAlias = Action | Chain


def find_invalid(values: Iterable[object]) -> list[object]:
    """Collect every value in *values* (recursively) that is not a handler.

    Lists and tuples are walked to any depth. An empty result means every
    value can be built with ``build_handler()``.
    """
    invalid: list[object] = []
    for value in values:
        if isinstance(value, (Action, Chain)) or callable(value):
            continue
        if isinstance(value, (list, tuple)):
            invalid.extend(find_invalid(value))
            continue
        invalid.append(value)
    return invalid


def build_handler(value: object) -> Handler:
    """Turn a validated callable or (nested) list of callables into a ``Handler``."""
    if isinstance(value, (Action, Chain)):
        return value
    if isinstance(value, (list, tuple)):
        return Chain(tuple(build_handler(item) for item in value))
    if callable(value):
        return Action(value)
    msg = f"{value!r} is not a function or a list of functions."
    raise ConfigurationError(msg)


def build_handlers(values: Iterable[object]) -> tuple[Handler, ...]:
    """Validate and build top-level handler arguments.

    Raises ``ConfigurationError`` naming every offending value, before
    anything is built.
    """
    values = tuple(values)
    invalid = find_invalid(values)
    if invalid:
        bad = ", ".join(repr(value) for value in invalid)
        msg = f"{bad} is not a function or a list of functions."
        raise ConfigurationError(msg)
    return tuple(build_handler(value) for value in values)


def describe_handler(handler: Handler) -> str:
    """Human-readable name: ``load_user`` or ``[fetch_posts, fetch_likes]``."""
    match handler:
        case Action(func=func):
            return getattr(func, "__qualname__", None) or repr(func)
        case Chain(handlers=handlers):
            return "[" + ", ".join(describe_handler(h) for h in handlers) + "]"
    return repr(handler)
