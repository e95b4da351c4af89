"""Resolution context — the mutable accumulator shared by handlers.

One ``Context`` is created per ``Dispatcher.resolve()`` call and passed,
by reference, to every handler that runs for that path. Handlers read and
write arbitrary keys on it; that is the extension mechanism.

Always present:
- ``route``: the path exactly as given to ``resolve()``
- ``data``: the caller-supplied payload
- ``router``: the dispatcher running the resolution

Set once the first matching entry binds:
- ``params``: the most recently bound path parameters

Thread safety:
    None. A context belongs to one ``resolve()`` call on one event loop.
    Handlers running in a parallel group share it without locking and
    should use disjoint or append-only keys.
"""

from typing import Any


class Context(dict[str, Any]):
    """A ``dict`` that also exposes its keys as attributes.

    Usage::

        def handler(context):
            context.log = ["a"]          # same as context["log"] = ["a"]
            user_id = context.params["id"]

    Keys that collide with ``dict`` methods (``items``, ``get``, ...) are
    still stored, but must be read with subscript syntax.
    """

    __slots__ = ()

    def __getattr__(self, name: str) -> Any:
        try:
            return self[name]
        except KeyError:
            msg = f"context has no attribute {name!r}"
            raise AttributeError(msg) from None

    def __setattr__(self, name: str, value: Any) -> None:
        self[name] = value

    def __delattr__(self, name: str) -> None:
        try:
            del self[name]
        except KeyError:
            msg = f"context has no attribute {name!r}"
            raise AttributeError(msg) from None

    def __repr__(self) -> str:
        return f"Context({dict.__repr__(self)})"
