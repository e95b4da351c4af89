"""ASGI middleware — resolve every HTTP request path through a dispatcher.

Runs before the wrapped application, the way an Express ``app.use()``
hook would::

    dispatcher = Dispatcher()
    dispatcher.register("/users/:id", load_user)

    app = DispatchMiddleware(inner_app, dispatcher)

For each ``http`` request the full URL (path plus query string) is
resolved with the parsed query parameters as ``context.data``. The
resulting context is stored in ``scope["state"]["bluejacket"]`` for the
wrapped app to read. Other scope types (``lifespan``, ``websocket``) pass
straight through.

No response is produced here; a handler exception propagates to the
server like any other application error.
"""

import logging

from bluejacket._internal.asgi import ASGIApp, HTTPScope, Receive, Scope, Send
from bluejacket.dispatcher import Dispatcher

logger = logging.getLogger("bluejacket.asgi")

STATE_KEY = "bluejacket"


class DispatchMiddleware:
    """Wrap an ASGI app so each HTTP request is resolved first."""

    __slots__ = ("app", "dispatcher", "state_key")

    def __init__(self, app: ASGIApp, dispatcher: Dispatcher, *, state_key: str = STATE_KEY) -> None:
        self.app = app
        self.dispatcher = dispatcher
        self.state_key = state_key

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        http = HTTPScope.from_scope(scope)
        logger.debug("dispatching %s %s", http.method, http.url)
        context = await self.dispatcher.resolve(http.url, http.query())
        scope.setdefault("state", {})[self.state_key] = context
        await self.app(scope, receive, send)
