"""BlueJacket exception hierarchy.

Shared across the registry, executor, and dispatcher so every module
raises and catches the same types.

Application exceptions raised by handlers are never wrapped in any of
these; they reach the caller of ``resolve()`` unchanged.
"""


class BlueJacketError(Exception):
    """Base for all bluejacket-specific errors."""


class ConfigurationError(BlueJacketError):
    """Raised when a pattern or handler is invalid.

    Typically raised by ``Dispatcher.register()``, before the rule is
    stored, so a bad registration never reaches ``resolve()``.
    """


class TypeContractError(BlueJacketError, TypeError):
    """Raised when ``resolve()`` receives a path that is not a ``str``."""


class SkipRoute(BlueJacketError):  # noqa: N818
    """Stop resolving the current path and succeed with the context as-is.

    The exception spelling of ``Outcome.STOP``. Useful from helpers nested
    deep inside a handler where returning ``STOP`` is awkward::

        def require_user(context):
            if "user" not in context:
                raise SkipRoute

    The executor translates it to ``Outcome.STOP``; it never escapes
    ``Dispatcher.resolve()``.
    """
