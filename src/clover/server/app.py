"""ASGI boundary for the view resolver.

Reads the path from the ASGI scope, asks the resolver for an outcome,
and turns the outcome into a response: file bytes for static assets,
engine output for views, 404 for everything else. Any ASGI server can
host it::

    resolver = Resolver({"site": "Example"}).set_view_root("views").set_asset_root("public")
    app = ViewServer(resolver)
    # uvicorn module:app, hypercorn module:app, ...
"""

import asyncio
import logging
import threading

from clover._internal.asgi import HTTPScope, Receive, Scope, Send
from clover.config import ViewConfig
from clover.errors import ConfigurationError
from clover.http.response import Response
from clover.outcomes import NotFound, Outcome, RenderedView, StaticFile
from clover.resolver import Resolver
from clover.server.sender import send_response
from clover.static import static_response
from clover.templating.engines import EngineRegistry

logger = logging.getLogger("clover.server")


class ViewServer:
    """ASGI 3.0 application serving a :class:`Resolver`.

    The resolver is frozen and the engine registry validated against
    the resolver's extensions on lifespan startup, or on the first
    request under servers without lifespan support.
    """

    __slots__ = ("_freeze_lock", "_frozen", "config", "engines", "resolver")

    def __init__(
        self,
        resolver: Resolver,
        engines: EngineRegistry | None = None,
        *,
        config: ViewConfig | None = None,
    ) -> None:
        self.resolver = resolver
        self.engines = engines if engines is not None else EngineRegistry.default()
        self.config = config or ViewConfig()
        self._frozen = False
        self._freeze_lock = threading.Lock()

    @classmethod
    def from_config(cls, config: ViewConfig, engines: EngineRegistry | None = None) -> "ViewServer":
        """Build a server and its resolver from one ``ViewConfig``."""
        return cls(Resolver.from_config(config), engines, config=config)

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        if scope["type"] != "http":
            msg = f"Unsupported ASGI scope type: {scope['type']!r}"
            raise RuntimeError(msg)

        self._ensure_frozen()

        http = HTTPScope.from_scope(scope)
        response = await self.handle(http.request_path)
        await send_response(response, send, head=http.method == "HEAD")

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol, freezing configuration at startup."""
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self._ensure_frozen()
                except ConfigurationError as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self.engines.require(self.resolver.extensions)
            self.resolver.freeze()
            self._frozen = True

    # -- Request handling --

    async def handle(self, request_path: str) -> Response:
        """Resolve *request_path* and build the response for its outcome."""
        try:
            return await asyncio.to_thread(self._serve, request_path)
        except Exception as exc:
            logger.exception("500 %s", request_path)
            detail = f"Internal Server Error: {exc}" if self.config.debug else "Internal Server Error"
            return Response(body=detail, status=500, content_type="text/plain; charset=utf-8")

    def _serve(self, request_path: str) -> Response:
        return self._respond(self.resolver.resolve(request_path))

    def _respond(self, outcome: Outcome) -> Response:
        match outcome:
            case StaticFile():
                if self.resolver.asset_root is None:
                    msg = f"Static outcome {outcome.path!r} with no asset root configured."
                    raise ConfigurationError(msg)
                return static_response(
                    self.resolver.asset_root,
                    outcome,
                    cache_control=self.config.cache_control,
                )
            case RenderedView(template_path=template_path, view_data=view_data):
                body = self.engines.render(self.resolver.view_root, template_path, view_data)
                return Response(body=body)
            case NotFound(request_path=request_path):
                logger.debug("404 %s", request_path)
                return Response(
                    body=f"Page not found: {request_path}",
                    status=404,
                    content_type="text/plain; charset=utf-8",
                )
        msg = f"Unknown outcome: {outcome!r}"
        raise TypeError(msg)
