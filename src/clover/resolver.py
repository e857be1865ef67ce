"""The view resolver.

Maps a request path to a static asset, a view file, or nothing, trying
four tiers in a fixed order::

    1. static asset      <asset_root>/<path>
    2. direct view       <view_root>/<path><ext>
    3. pattern route     <view_root>/<pattern><ext>   e.g. views/users/{id}.html
    4. fallback view     <view_root>/<fallback_path><ext>

The first tier that finds a file wins. Within a tier, extensions are
tried in their configured order. Route views are looked up by the
pattern text itself, so the view for ``/users/{id}`` lives at
``users/{id}.html``.

Configuration happens once, before serving. ``resolve()`` only reads
state and the filesystem, so it is safe to call from many threads at
once after ``freeze()``.
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Self

from clover.config import DEFAULT_EXTENSIONS, DEFAULT_FALLBACK_PATH, ViewConfig
from clover.errors import ConfigurationError
from clover.outcomes import NotFound, Outcome, RenderedView, StaticFile
from clover.routing.table import RouteTable
from clover.static import content_type_for

logger = logging.getLogger("clover.resolver")


def _strip_separators(path: str | Path) -> str:
    text = str(path)
    stripped = text.rstrip("/\\")
    # Keep a bare filesystem root rather than reducing it to ""
    return stripped or text[:1]


def _contained_file(root: Path, relative: str) -> Path | None:
    """Return the canonical path of ``root/relative`` if it is a regular file inside *root*."""
    try:
        candidate = (root / relative.lstrip("/")).resolve()
        root = root.resolve()
    except (OSError, ValueError):
        return None
    if not candidate.is_relative_to(root):
        return None
    if not candidate.is_file():
        return None
    return candidate


def _contained_view(root: Path, relative: str) -> bool:
    """Whether ``root/relative`` is a regular file lexically inside *root*.

    ``..`` segments are collapsed without touching the filesystem, so
    symlinked directories inside the view tree still count.
    """
    base = os.path.abspath(root)
    candidate = os.path.abspath(os.path.join(base, relative.lstrip("/")))
    if candidate != base and not candidate.startswith(base.rstrip(os.sep) + os.sep):
        return False
    try:
        return Path(candidate).is_file()
    except (OSError, ValueError):
        return False


class Resolver:
    """Resolves request paths against a view tree, an asset tree, and a route table.

    Usage::

        resolver = (
            Resolver({"site": "Example"})
            .set_view_root("views")
            .set_asset_root("public")
            .register_route("/users/{id}", {"section": "users"})
            .set_fallback(True, "/index")
        )
        outcome = resolver.resolve("/users/42")

    Every configuration method returns the resolver for chaining.
    """

    __slots__ = (
        "_asset_root",
        "_extensions",
        "_fallback",
        "_fallback_path",
        "_frozen",
        "_global_data",
        "_routes",
        "_view_root",
    )

    def __init__(self, global_data: Mapping[str, Any] | None = None) -> None:
        self._global_data: dict[str, Any] = dict(global_data or {})
        self._view_root = Path(".")
        self._asset_root: Path | None = None
        self._extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
        self._routes = RouteTable()
        self._fallback = True
        self._fallback_path = DEFAULT_FALLBACK_PATH
        self._frozen = False

    @classmethod
    def from_config(cls, config: ViewConfig) -> Self:
        """Build a resolver from a ``ViewConfig``."""
        return (
            cls(config.global_data)
            .set_view_root(config.view_dir)
            .set_asset_root(config.asset_dir)
            .set_extensions(*config.extensions)
            .set_fallback(config.fallback, config.fallback_path)
        )

    # -- Configuration --

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = "Resolver configuration cannot change after freeze()."
            raise ConfigurationError(msg)

    def set_view_root(self, path: str | Path) -> Self:
        """Set the directory view templates are looked up under."""
        self._check_not_frozen()
        self._view_root = Path(_strip_separators(path))
        return self

    def set_asset_root(self, path: str | Path | None) -> Self:
        """Set the directory static files are served from.

        An empty path or ``None`` disables static serving.
        """
        self._check_not_frozen()
        if path is None or str(path) == "":
            self._asset_root = None
        else:
            self._asset_root = Path(_strip_separators(path))
        return self

    def set_extensions(self, *extensions: str) -> Self:
        """Set the recognized view extensions, in precedence order."""
        self._check_not_frozen()
        if not extensions:
            msg = "At least one view extension is required."
            raise ConfigurationError(msg)
        for ext in extensions:
            if not ext.startswith(".") or "/" in ext or "\\" in ext:
                msg = f"View extension {ext!r} must start with '.' and contain no separators."
                raise ConfigurationError(msg)
        self._extensions = tuple(extensions)
        return self

    def register_route(self, pattern: str, data: Mapping[str, Any] | None = None) -> Self:
        """Register a route pattern with optional static view data.

        Registering the same pattern again replaces its data but keeps
        its original position in the table.
        """
        self._check_not_frozen()
        self._routes.add(pattern, data)
        return self

    def set_fallback(self, enabled: bool = True, path: str = DEFAULT_FALLBACK_PATH) -> Self:
        """Resolve unmatched requests to the view at *path* instead of NotFound."""
        self._check_not_frozen()
        self._fallback = enabled
        self._fallback_path = path
        return self

    def freeze(self) -> None:
        """End the configuration phase. Idempotent."""
        self._frozen = True
        self._routes.freeze()

    # -- Introspection --

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def view_root(self) -> Path:
        return self._view_root

    @property
    def asset_root(self) -> Path | None:
        return self._asset_root

    @property
    def extensions(self) -> tuple[str, ...]:
        return self._extensions

    @property
    def routes(self) -> RouteTable:
        return self._routes

    @property
    def global_data(self) -> Mapping[str, Any]:
        return self._global_data

    @property
    def fallback(self) -> tuple[bool, str]:
        """``(enabled, path)`` of the fallback view."""
        return self._fallback, self._fallback_path

    # -- Resolution --

    def resolve(self, request_path: str) -> Outcome:
        """Resolve a normalized request path (leading ``/``, no query) to an outcome."""
        outcome = (
            self._match_static(request_path)
            or self._match_direct(request_path)
            or self._match_routes(request_path)
            or self._match_fallback()
        )
        if outcome is None:
            logger.debug("No view for %s", request_path)
            return NotFound(request_path)
        return outcome

    def _find_view(self, base: str) -> str | None:
        """Return ``base + ext`` for the first extension whose view file exists."""
        for ext in self._extensions:
            template_path = base + ext
            if _contained_view(self._view_root, template_path):
                return template_path
        return None

    def _match_static(self, request_path: str) -> StaticFile | None:
        if self._asset_root is None:
            return None
        file = _contained_file(self._asset_root, request_path)
        if file is None:
            return None
        relative = "/" + file.relative_to(self._asset_root.resolve()).as_posix()
        logger.debug("Static %s -> %s", request_path, relative)
        return StaticFile(path=relative, content_type=content_type_for(file))

    def _match_direct(self, request_path: str) -> RenderedView | None:
        template_path = self._find_view(request_path)
        if template_path is None:
            return None
        logger.debug("View %s -> %s", request_path, template_path)
        return RenderedView(template_path, dict(self._global_data))

    def _match_routes(self, request_path: str) -> RenderedView | None:
        for match in self._routes.matches(request_path):
            route = match.route
            template_path = self._find_view(route.pattern)
            if template_path is None:
                # Pattern matched but has no view file; keep looking
                continue
            logger.debug("Route %s matched %s -> %s", route.pattern, request_path, template_path)
            view_data = {**self._global_data, **match.path_params, **route.data}
            return RenderedView(template_path, view_data)
        return None

    def _match_fallback(self) -> RenderedView | None:
        if not self._fallback:
            return None
        template_path = self._find_view(self._fallback_path)
        if template_path is None:
            return None
        logger.debug("Fallback -> %s", template_path)
        return RenderedView(template_path, dict(self._global_data))
