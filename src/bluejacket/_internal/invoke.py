"""Invoke helper — call sync or async actions uniformly.

Actions can be ``def`` or ``async def``. The executor is the only caller.

Usage::

    from bluejacket._internal.invoke import invoke

    outcome = await invoke(action.func, context)
"""

import inspect
from typing import Any

from bluejacket.errors import SkipRoute
from bluejacket.outcome import Outcome


async def invoke(func: Any, context: Any) -> Outcome:
    """Call *func* with *context*, awaiting the result if needed.

    Works with both sync and async callables::

        def tag(context):
            context.tags = ["seen"]

        async def load(context):
            context.user = await users.get(context.params["id"])

    ``SkipRoute`` raised by the action becomes ``Outcome.STOP``; any other
    exception propagates unchanged.
    """
    try:
        result = func(context)
        if inspect.isawaitable(result):
            result = await result
    except SkipRoute:
        return Outcome.STOP
    return Outcome.from_result(result)
