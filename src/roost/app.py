"""Roost application class.

Mutable during setup (route registration, lifecycle hooks).
Frozen at runtime when ``__call__()`` is first invoked.
"""

import threading
from collections.abc import Callable
from typing import Any

from roost._internal.asgi import Receive, Scope, Send
from roost._internal.invoke import invoke
from roost._internal.types import Handler
from roost.adapters import BoundHandler, string_handler
from roost.config import AppConfig
from roost.context import Context
from roost.data.query import QueryFn
from roost.errors import ConfigurationError
from roost.routing.route import Route
from roost.routing.router import RouteTable
from roost.server.handler import handle_request


class App:
    """The roost application: a route table plus its dependencies.

    Usage::

        app = App(query=SqliteQuery("app.db"))

        app.add_route("GET", "/test", string_handler(lambda request: "ok"))

        @app.route("GET", "/json", adapter=json_handler)
        async def data(request, ctx):
            rows = await ctx.query("SELECT 1", [])
            return {"value": rows[0][0]}

    Thread safety:
        Registration is single-threaded (module import time). The freeze
        transition uses a Lock + double-check so exactly one thread
        compiles the route table; afterwards it is only read.
    """

    __slots__ = (
        "_context",
        "_freeze_lock",
        "_frozen",
        "_routes",
        "_shutdown_hooks",
        "_startup_hooks",
        "config",
        "query",
    )

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        query: QueryFn | None = None,
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        self.query: QueryFn | None = query
        self._routes = RouteTable(method_not_allowed=self.config.method_not_allowed)
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()
        if query is None:
            self._context = Context(config=self.config)
        else:
            self._context = Context(query=query, config=self.config)

    # -- Route registration --

    def add_route(self, method: str, template: str, handler: BoundHandler) -> Route:
        """Register *handler* for *method* and *template*.

        *handler* comes from ``string_handler``, ``html_handler`` or
        ``json_handler``. Raises ``ConfigurationError`` for an unwrapped
        handler, a duplicate route, or registration after the first
        request.
        """
        self._check_not_frozen()
        if not isinstance(handler, BoundHandler):
            msg = (
                f"Route {method} {template!r}: wrap the handler with "
                "string_handler, html_handler or json_handler."
            )
            raise ConfigurationError(msg)
        return self._routes.add(Route(method=method.upper(), template=template, handler=handler))

    def route(
        self,
        method: str,
        template: str,
        *,
        adapter: Callable[[Handler], BoundHandler] = string_handler,
    ) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator.

        Args:
            method: HTTP method, e.g. ``"GET"``.
            template: Path template. Use ``:name`` for path parameters.
            adapter: ``string_handler`` (default), ``html_handler`` or
                ``json_handler``.
        """

        def decorator(func: Handler) -> Handler:
            self.add_route(method, template, adapter(func))
            return func

        return decorator

    @property
    def routes(self) -> list[Route]:
        """All registered routes, in registration order."""
        return self._routes.routes

    @property
    def context(self) -> Context:
        return self._context

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a hook run after the query capability connects.

        If a hook raises, the query capability is closed again before the
        error propagates.

        Usage::

            @app.on_startup
            async def seed():
                await query.execute_script("CREATE TABLE ...")
        """
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a hook run before the query capability closes."""
        self._shutdown_hooks.append(func)
        return func

    async def startup(self) -> None:
        """Freeze routes, connect the query capability, run startup hooks."""
        self._ensure_frozen()
        connect = getattr(self.query, "connect", None)
        if connect is not None:
            await invoke(connect)
        try:
            for hook in self._startup_hooks:
                await invoke(hook)
        except Exception:
            await self._close_query()
            raise

    async def shutdown(self) -> None:
        """Run shutdown hooks, then close the query capability even if one fails."""
        try:
            for hook in self._shutdown_hooks:
                await invoke(hook)
        finally:
            await self._close_query()

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()
        await handle_request(
            scope,
            receive,
            send,
            routes=self._routes,
            context=self._context,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol."""
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    await self.startup()
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                try:
                    await self.shutdown()
                except Exception as exc:
                    await send({"type": "lifespan.shutdown.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._routes.compile()
            self._frozen = True

    async def _close_query(self) -> None:
        close = getattr(self.query, "close", None)
        if close is not None:
            await invoke(close)

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = "Cannot register routes after the app has started serving requests."
            raise ConfigurationError(msg)
