"""BlueJacket — a fan-out path dispatcher.

Register handlers against path patterns, then resolve a path: every
matching rule runs, in registration order, against one shared context.

Basic usage::

    from bluejacket import Dispatcher

    dispatcher = Dispatcher()

    dispatcher.register("/users/:id", load_user, [load_posts, load_likes])
    dispatcher.register(log_visit)

    context = await dispatcher.resolve("/users/42")

ASGI integration::

    from bluejacket.asgi import DispatchMiddleware
    app = DispatchMiddleware(app, dispatcher)
"""

__version__ = "0.1.0-dev"
__all__ = [
    "CONTINUE",
    "STOP",
    "BlueJacketError",
    "ConfigurationError",
    "Context",
    "Dispatcher",
    "DispatcherConfig",
    "Outcome",
    "SkipRoute",
    "TypeContractError",
    "clear_instances",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import bluejacket`` fast while providing a clean top-level API.
    """
    if name in ("Dispatcher", "clear_instances"):
        from bluejacket import dispatcher as _dispatcher

        return getattr(_dispatcher, name)

    if name == "DispatcherConfig":
        from bluejacket.config import DispatcherConfig

        return DispatcherConfig

    if name == "Context":
        from bluejacket.context import Context

        return Context

    if name in ("Outcome", "STOP", "CONTINUE"):
        from bluejacket import outcome as _outcome

        return getattr(_outcome, name)

    if name in ("BlueJacketError", "ConfigurationError", "SkipRoute", "TypeContractError"):
        from bluejacket import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
