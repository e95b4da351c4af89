"""Handler executor — runs one rule entry against the shared context.

Execution policy:

- An ``Action`` is called with the context and awaited if async.
- A ``Chain`` starts every element concurrently (in declaration order) on
  an anyio task group and waits for all of them. Elements interleave only
  at their own suspension points; completion order is not guaranteed.
- A failing element does not cancel its siblings. Once all have finished,
  the first failure (in completion order) is re-raised unchanged; any
  further failures are logged. The raised exception is not modified, so
  a handler may safely re-raise a shared exception instance.
- A chain stops resolution if any element returned ``STOP``.
"""

import logging
from collections.abc import Sequence

import anyio

from bluejacket._internal.invoke import invoke
from bluejacket.context import Context
from bluejacket.errors import ConfigurationError
from bluejacket.handlers import Action, Chain, Handler
from bluejacket.outcome import Outcome
from bluejacket.routing.params import bind_params
from bluejacket.routing.rule import HandlerEntry

logger = logging.getLogger("bluejacket.dispatch")


async def resolve_entry(
    groups: Sequence[str | None],
    entry: HandlerEntry,
    context: Context,
) -> Outcome:
    """Bind this entry's params from *groups* and run its handler.

    Each top-level entry binds a fresh params dict, so a rule without keys
    sees ``{}`` once any rule has bound. ``params`` stays unset until the
    first binding. Handlers nested in a chain see the same dict as the
    chain itself.
    """
    if entry.keys or "params" in context:
        context["params"] = bind_params(groups, entry.keys)
    return await execute(entry.handler, context)


async def execute(handler: Handler, context: Context) -> Outcome:
    """Run *handler* against *context* and report whether to continue."""
    match handler:
        case Action(func=func):
            return await invoke(func, context)
        case Chain(handlers=handlers):
            return await _execute_chain(handlers, context)

    msg = "handler must be an action or an array of actions"
    raise ConfigurationError(msg)


async def _execute_chain(handlers: tuple[Handler, ...], context: Context) -> Outcome:
    outcomes: list[Outcome] = []
    failures: list[Exception] = []

    async def _run(handler: Handler) -> None:
        try:
            outcomes.append(await execute(handler, context))
        except Exception as exc:
            failures.append(exc)

    async with anyio.create_task_group() as tg:
        for handler in handlers:
            tg.start_soon(_run, handler)

    if failures:
        first, *others = failures
        for other in others:
            logger.warning("parallel handler also failed: %r", other, exc_info=other)
        raise first

    if Outcome.STOP in outcomes:
        return Outcome.STOP
    return Outcome.CONTINUE
