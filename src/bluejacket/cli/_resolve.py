"""Locate the dispatcher a CLI command operates on.

Targets take one of three forms::

    myapp.routes            # attribute ``dispatcher`` of myapp.routes
    myapp.routes:admin      # attribute ``admin`` of myapp.routes
    myapp.routes@api        # instance keyed "api", once myapp.routes is imported

An attribute may hold a ``Dispatcher`` or a keyed ``DispatcherConfig``;
the latter stands for the shared instance under its key. Nothing is
called, so importing the module must be enough to register its rules.
"""

import importlib
import sys

from bluejacket.config import DispatcherConfig
from bluejacket.dispatcher import Dispatcher, find_instance
from bluejacket.errors import ConfigurationError

DEFAULT_ATTRIBUTE = "dispatcher"


def _by_key(module_path: str, key: str) -> Dispatcher:
    importlib.import_module(module_path)
    dispatcher = find_instance(key)
    if dispatcher is None:
        msg = f"importing {module_path!r} created no dispatcher with instance key {key!r}"
        raise ConfigurationError(msg)
    return dispatcher


def _by_attribute(module_path: str, attr: str) -> Dispatcher:
    target = f"{module_path}:{attr}"
    value = getattr(importlib.import_module(module_path), attr)

    match value:
        case Dispatcher():
            return value
        case DispatcherConfig(instance_key=key) if key:
            return Dispatcher(value)
        case DispatcherConfig():
            msg = f"{target} is a DispatcherConfig without an instance_key"
        case type() if issubclass(value, Dispatcher):
            msg = f"{target} is the Dispatcher class; point at an instance"
        case _:
            msg = f"{target} is {type(value).__name__}, not a bluejacket.Dispatcher"
    raise ConfigurationError(msg)


def resolve_dispatcher(target: str) -> Dispatcher:
    """Return the dispatcher named by *target*.

    Raises:
        ImportError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        ConfigurationError: If the target names no usable dispatcher.
    """
    if "@" in target:
        module_path, _, key = target.partition("@")
        return _by_key(module_path, key)
    module_path, _, attr = target.partition(":")
    return _by_attribute(module_path, attr or DEFAULT_ATTRIBUTE)


def load_or_exit(target: str) -> Dispatcher:
    """``resolve_dispatcher`` for commands: report failures and exit 1."""
    try:
        return resolve_dispatcher(target)
    except (ImportError, AttributeError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
