"""Template engines and the extension registry.

The resolver only decides *which* view file to render and *with what
data*. Rendering is delegated to an engine chosen by the view file's
extension. Every engine implements one method::

    render(root, name, data) -> bytes

where ``name`` is the template path relative to ``root`` with the
extension stripped (``users/{id}`` for ``/users/{id}.kida``).

Built-in engines:

- ``IncludeEngine`` (``.html``): the file's bytes, verbatim
- ``ScriptEngine`` (``.py``): runs the file with a ``view`` binding
- ``KidaEngine`` (``.kida``): kida templates
- ``JinjaEngine`` (``.jinja``): Jinja2 templates

Engines are registered at configuration time. A view extension without
an engine is a configuration error, reported by ``require()`` at
startup or by ``render()`` when such a view is hit.
"""

import importlib.util
import threading
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Protocol, Self, runtime_checkable

from clover.errors import MissingEngineError, RenderError
from clover.templating.context import ViewContext


@runtime_checkable
class TemplateEngine(Protocol):
    """Renders one template to bytes."""

    def render(self, root: Path, name: str, data: Mapping[str, Any]) -> bytes: ...


class IncludeEngine:
    """Plain include: emit the template file's bytes unchanged."""

    __slots__ = ("suffix",)

    def __init__(self, suffix: str = ".html") -> None:
        self.suffix = suffix

    def render(self, root: Path, name: str, data: Mapping[str, Any]) -> bytes:
        return (root / (name + self.suffix)).read_bytes()


class ScriptEngine:
    """Evaluate a Python view script.

    The script runs as a fresh module whose only injected global is
    ``view``, a :class:`ViewContext`. Whatever the script writes to
    ``view`` is the rendered output.
    """

    __slots__ = ("suffix",)

    def __init__(self, suffix: str = ".py") -> None:
        self.suffix = suffix

    def render(self, root: Path, name: str, data: Mapping[str, Any]) -> bytes:
        file = root / (name + self.suffix)
        spec = importlib.util.spec_from_file_location(f"_view_{id(file)}", file)
        if spec is None or spec.loader is None:
            msg = f"Cannot load view script {file}"
            raise ImportError(msg)

        context = ViewContext(data)
        module = importlib.util.module_from_spec(spec)
        module.view = context  # type: ignore[attr-defined]
        spec.loader.exec_module(module)
        return context.output()


class _EnvironmentEngine:
    """Shared base for engines that keep one template environment per root."""

    __slots__ = ("_envs", "_lock", "options", "suffix")

    def __init__(self, suffix: str, **options: Any) -> None:
        self.suffix = suffix
        self.options = options
        self._envs: dict[Path, Any] = {}
        self._lock = threading.Lock()

    def _create_environment(self, root: Path) -> Any:
        raise NotImplementedError

    def environment(self, root: Path) -> Any:
        """Return the environment for *root*, creating it on first use."""
        with self._lock:
            env = self._envs.get(root)
            if env is None:
                env = self._create_environment(root)
                self._envs[root] = env
            return env

    def render(self, root: Path, name: str, data: Mapping[str, Any]) -> bytes:
        template = self.environment(root).get_template(name + self.suffix)
        return template.render(dict(data)).encode("utf-8")


class KidaEngine(_EnvironmentEngine):
    """Render ``.kida`` templates with kida.

    Keyword options are passed to ``kida.Environment``.
    """

    __slots__ = ()

    def __init__(self, suffix: str = ".kida", **options: Any) -> None:
        options.setdefault("autoescape", True)
        super().__init__(suffix, **options)

    def _create_environment(self, root: Path) -> Any:
        from kida import Environment, FileSystemLoader

        return Environment(loader=FileSystemLoader(str(root)), **self.options)


class JinjaEngine(_EnvironmentEngine):
    """Render ``.jinja`` templates with Jinja2.

    Keyword options are passed to ``jinja2.Environment``.
    """

    __slots__ = ()

    def __init__(self, suffix: str = ".jinja", **options: Any) -> None:
        options.setdefault("autoescape", True)
        super().__init__(suffix, **options)

    def _create_environment(self, root: Path) -> Any:
        from jinja2 import Environment, FileSystemLoader

        return Environment(loader=FileSystemLoader(str(root)), **self.options)


class EngineRegistry:
    """Maps view extensions to template engines.

    Usage::

        engines = EngineRegistry.default()
        engines.register(".md", MarkdownEngine())
        engines.require(resolver.extensions)
        body = engines.render(resolver.view_root, "/about.md", {"title": "About"})
    """

    __slots__ = ("_engines",)

    def __init__(self) -> None:
        self._engines: dict[str, TemplateEngine] = {}

    @classmethod
    def default(cls) -> Self:
        """A registry with the four built-in engines."""
        return (
            cls()
            .register(".html", IncludeEngine(".html"))
            .register(".py", ScriptEngine(".py"))
            .register(".kida", KidaEngine(".kida"))
            .register(".jinja", JinjaEngine(".jinja"))
        )

    def register(self, extension: str, engine: TemplateEngine) -> Self:
        """Register (or replace) the engine for *extension*."""
        if not isinstance(engine, TemplateEngine):
            msg = f"{engine!r} does not implement render(root, name, data)."
            raise TypeError(msg)
        self._engines[extension] = engine
        return self

    @property
    def extensions(self) -> tuple[str, ...]:
        return tuple(self._engines)

    def get(self, extension: str) -> TemplateEngine | None:
        return self._engines.get(extension)

    def match(self, template_path: str) -> tuple[str, TemplateEngine]:
        """Find the engine for a template path by its longest registered extension.

        Raises ``MissingEngineError`` if no registered extension matches.
        """
        best: str | None = None
        for ext in self._engines:
            if template_path.endswith(ext) and (best is None or len(ext) > len(best)):
                best = ext
        if best is None:
            suffix = Path(template_path).suffix or template_path
            raise MissingEngineError([suffix])
        return best, self._engines[best]

    def require(self, extensions: Iterable[str]) -> None:
        """Raise ``MissingEngineError`` listing every extension without an engine."""
        missing = [ext for ext in extensions if ext not in self._engines]
        if missing:
            raise MissingEngineError(missing)

    def render(self, root: Path, template_path: str, data: Mapping[str, Any]) -> bytes:
        """Render the view at *template_path* (relative to *root*, leading ``/``)."""
        ext, engine = self.match(template_path)
        name = template_path[: -len(ext)].lstrip("/")
        try:
            return engine.render(root, name, data)
        except Exception as exc:
            raise RenderError(template_path, exc) from exc

    def __contains__(self, extension: object) -> bool:
        return extension in self._engines

    def __len__(self) -> int:
        return len(self._engines)
