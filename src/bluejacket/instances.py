"""Process-wide dispatcher instances, keyed by ``instance_key``.

Lets unrelated modules share one dispatcher without passing it around::

    # routes.py
    dispatcher = Dispatcher(DispatcherConfig(instance_key="app"))
    dispatcher.register("/users/:id", load_user)

    # elsewhere
    same = Dispatcher(DispatcherConfig(instance_key="app"))  # same object

Entries live until ``clear()`` (tests) or process exit.

Thread safety:
    All access goes through a Lock, and ``get_or_create`` holds it while
    the factory runs, so two threads constructing the same key get the
    same instance.
"""

import threading
from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")


class InstanceCache(Generic[T]):
    """A lock-guarded ``key -> instance`` mapping."""

    __slots__ = ("_instances", "_lock")

    def __init__(self) -> None:
        self._instances: dict[str, T] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> T | None:
        with self._lock:
            return self._instances.get(key)

    def get_or_create(self, key: str, factory: Callable[[], T]) -> T:
        """Return the instance cached under *key*, creating it on first use."""
        with self._lock:
            instance = self._instances.get(key)
            if instance is None:
                instance = factory()
                self._instances[key] = instance
            return instance

    def clear(self) -> None:
        """Forget every cached instance."""
        with self._lock:
            self._instances.clear()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._instances

    def __len__(self) -> int:
        with self._lock:
            return len(self._instances)
