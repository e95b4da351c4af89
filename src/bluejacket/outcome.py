"""Handler outcomes — explicit control flow for resolution.

A handler tells the dispatcher whether to keep going by what it returns.
Anything other than ``STOP`` (including ``None``) means continue::

    from bluejacket import STOP

    def guard(context):
        if context.data.get("cached"):
            return STOP
"""

from enum import Enum


class Outcome(Enum):
    """Result of running one handler, entry, or parallel group."""

    CONTINUE = "continue"
    STOP = "stop"

    @classmethod
    def from_result(cls, result: object) -> "Outcome":
        """Map a handler's return value to an outcome."""
        if result is cls.STOP:
            return cls.STOP
        return cls.CONTINUE


CONTINUE = Outcome.CONTINUE
STOP = Outcome.STOP
