"""Dispatcher configuration.

DispatcherConfig is a frozen dataclass, immutable after creation.
Use ``with_overrides`` to derive a variant.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any


@dataclass(frozen=True, slots=True)
class DispatcherConfig:
    """Dispatcher configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = DispatcherConfig(strict=True, instance_key="client")
    """

    # Merged into every context at the start of resolve()
    mixins: Mapping[str, Any] = field(default_factory=dict)

    # Pattern compiler flags
    strict: bool = False  # Trailing slash must match exactly
    case_sensitive: bool = False

    # Process-wide singleton key (see bluejacket.instances)
    instance_key: str | None = None

    def with_overrides(self, **changes: Any) -> "DispatcherConfig":
        """Return a copy with *changes* applied."""
        return replace(self, **changes)
