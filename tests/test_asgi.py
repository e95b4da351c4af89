"""Tests for bluejacket.asgi — dispatch middleware and typed scope."""

from dataclasses import fields
from typing import Any

import pytest

from bluejacket._internal.asgi import HTTPScope
from bluejacket.asgi import STATE_KEY, DispatchMiddleware
from bluejacket.context import Context
from bluejacket.dispatcher import Dispatcher


def _make_scope(**overrides: object) -> dict[str, object]:
    """Build a minimal valid ASGI HTTP scope dict."""
    base: dict[str, object] = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "path": "/",
        "raw_path": b"/",
        "query_string": b"",
        "root_path": "",
        "headers": [],
    }
    base.update(overrides)
    return base


async def _receive() -> dict[str, Any]:
    return {"type": "http.request", "body": b"", "more_body": False}


async def _send(message: Any) -> None:
    pass


class _RecordingApp:
    def __init__(self) -> None:
        self.scopes: list[Any] = []

    async def __call__(self, scope: Any, receive: Any, send: Any) -> None:
        self.scopes.append(scope)


class TestHTTPScope:
    def test_from_scope(self) -> None:
        parsed = HTTPScope.from_scope(_make_scope(method="POST", path="/users/42"))
        assert parsed.method == "POST"
        assert parsed.path == "/users/42"
        assert parsed.query_string == b""

    def test_url_without_query(self) -> None:
        assert HTTPScope.from_scope(_make_scope(path="/a")).url == "/a"

    def test_url_with_query(self) -> None:
        parsed = HTTPScope.from_scope(_make_scope(path="/a", query_string=b"x=1&y=2"))
        assert parsed.url == "/a?x=1&y=2"

    def test_root_path_not_prepended(self) -> None:
        """ASGI paths already include the mount prefix."""
        parsed = HTTPScope.from_scope(_make_scope(root_path="/api", path="/api/users/1"))
        assert parsed.url == "/api/users/1"
        assert [f.name for f in fields(HTTPScope)] == ["method", "path", "query_string"]

    def test_query_single_and_repeated(self) -> None:
        parsed = HTTPScope.from_scope(_make_scope(query_string=b"x=1&tag=a&tag=b&empty="))
        assert parsed.query() == {"x": "1", "tag": ["a", "b"], "empty": ""}


class TestDispatchMiddleware:
    @pytest.mark.asyncio
    async def test_resolves_before_app(self) -> None:
        dispatcher = Dispatcher()
        dispatcher.register("/users/:id", lambda ctx: setattr(ctx, "user_id", ctx.params["id"]))
        inner = _RecordingApp()
        app = DispatchMiddleware(inner, dispatcher)

        await app(_make_scope(path="/users/42", query_string=b"tab=posts"), _receive, _send)

        (scope,) = inner.scopes
        context = scope["state"][STATE_KEY]
        assert isinstance(context, Context)
        assert context.route == "/users/42?tab=posts"
        assert context.user_id == "42"
        assert context.data == {"tab": "posts"}

    @pytest.mark.asyncio
    async def test_custom_state_key(self) -> None:
        inner = _RecordingApp()
        app = DispatchMiddleware(inner, Dispatcher(), state_key="routing")

        await app(_make_scope(path="/x"), _receive, _send)
        assert "routing" in inner.scopes[0]["state"]

    @pytest.mark.asyncio
    async def test_existing_state_preserved(self) -> None:
        inner = _RecordingApp()
        app = DispatchMiddleware(inner, Dispatcher())

        await app(_make_scope(state={"db": "conn"}), _receive, _send)
        assert inner.scopes[0]["state"]["db"] == "conn"

    @pytest.mark.asyncio
    async def test_non_http_passthrough(self) -> None:
        dispatcher = Dispatcher()
        calls: list[str] = []
        dispatcher.register(lambda ctx: calls.append(ctx.route))
        inner = _RecordingApp()
        app = DispatchMiddleware(inner, dispatcher)

        await app({"type": "lifespan"}, _receive, _send)

        assert calls == []
        assert inner.scopes == [{"type": "lifespan"}]

    @pytest.mark.asyncio
    async def test_handler_error_propagates(self) -> None:
        dispatcher = Dispatcher()

        def handler(ctx: Context) -> None:
            raise RuntimeError("boom")

        dispatcher.register(handler)
        inner = _RecordingApp()
        app = DispatchMiddleware(inner, dispatcher)

        with pytest.raises(RuntimeError, match="boom"):
            await app(_make_scope(), _receive, _send)
        assert inner.scopes == []
