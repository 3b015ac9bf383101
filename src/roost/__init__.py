"""Roost — a small HTTP routing and handler-adaptation layer.

Matches requests to ``:param`` path templates, hands handlers a typed
request view, and turns their return values (or errors) into text, HTML,
or JSON responses. Serves as an ASGI 3.0 application.

Basic usage::

    from roost import App, HTTPError, json_handler, string_handler

    app = App()

    app.add_route("GET", "/hello/:name", string_handler(
        lambda request: f"hello {request.params['name']}"
    ))

    @app.route("GET", "/teapot", adapter=json_handler)
    def teapot(request):
        raise HTTPError(418, "I'm a teapot")

Data access::

    from roost.data import SqliteQuery, first_value

    app = App(query=SqliteQuery("app.db"))

    @app.route("GET", "/count")
    async def count(request, ctx):
        rows = await ctx.query("SELECT COUNT(*) FROM items", [])
        return f"entries: {first_value(rows)}"
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "Context",
    "HTTPError",
    "JsonRequest",
    "MethodNotAllowed",
    "NotFound",
    "ParsedPath",
    "Request",
    "Response",
    "RoostError",
    "html_handler",
    "json_handler",
    "parse_path",
    "string_handler",
]

_LAZY: dict[str, str] = {
    "App": "roost.app",
    "AppConfig": "roost.config",
    "Context": "roost.context",
    "ConfigurationError": "roost.errors",
    "HTTPError": "roost.errors",
    "MethodNotAllowed": "roost.errors",
    "NotFound": "roost.errors",
    "RoostError": "roost.errors",
    "ParsedPath": "roost.http.path",
    "parse_path": "roost.http.path",
    "JsonRequest": "roost.http.request",
    "Request": "roost.http.request",
    "Response": "roost.http.response",
    "html_handler": "roost.adapters",
    "json_handler": "roost.adapters",
    "string_handler": "roost.adapters",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import roost`` fast while providing a clean top-level API.
    """
    module_name = _LAZY.get(name)
    if module_name is None:
        msg = f"module 'roost' has no attribute {name!r}"
        raise AttributeError(msg)
    import importlib

    return getattr(importlib.import_module(module_name), name)
