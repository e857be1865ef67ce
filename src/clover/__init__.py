"""Clover — file-system-driven view resolution for Python web apps.

Maps a request path to a static asset, a view file, a route-pattern
view, or a fallback view, in that order.

Basic usage::

    from clover import Resolver, ViewServer

    resolver = (
        Resolver({"site": "Example"})
        .set_view_root("views")
        .set_asset_root("public")
        .register_route("/users/{id}")
    )
    resolver.resolve("/users/42")
    # RenderedView(template_path='/users/{id}.html', view_data={'site': 'Example', 'id': '42'})

    app = ViewServer(resolver)  # ASGI application
"""

__version__ = "0.1.0-dev"
__all__ = [
    "CloverError",
    "ConfigurationError",
    "EngineRegistry",
    "MissingEngineError",
    "NotFound",
    "Outcome",
    "PatternError",
    "RenderError",
    "RenderedView",
    "Resolver",
    "StaticFile",
    "TemplateEngine",
    "ViewConfig",
    "ViewContext",
    "ViewServer",
]

_ERRORS = frozenset(
    {"CloverError", "ConfigurationError", "MissingEngineError", "PatternError", "RenderError"}
)
_OUTCOMES = frozenset({"NotFound", "Outcome", "RenderedView", "StaticFile"})


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import clover`` fast while providing a clean top-level API.
    """
    if name == "Resolver":
        from clover.resolver import Resolver

        return Resolver

    if name == "ViewConfig":
        from clover.config import ViewConfig

        return ViewConfig

    if name == "ViewServer":
        from clover.server.app import ViewServer

        return ViewServer

    if name in ("EngineRegistry", "TemplateEngine"):
        from clover.templating import engines

        return getattr(engines, name)

    if name == "ViewContext":
        from clover.templating.context import ViewContext

        return ViewContext

    if name in _ERRORS:
        from clover import errors

        return getattr(errors, name)

    if name in _OUTCOMES:
        from clover import outcomes

        return getattr(outcomes, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
