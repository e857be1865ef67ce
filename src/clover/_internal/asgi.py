"""Typed ASGI definitions.

Replaces the standard Scope = MutableMapping[str, Any] with typed
dataclasses for internal use. Users never see these.
"""

from collections.abc import Awaitable, Callable, MutableMapping
from dataclasses import dataclass
from typing import Any, TypeAlias

# Raw ASGI types (matching the spec)
Scope: TypeAlias = MutableMapping[str, Any]
Receive: TypeAlias = Callable[[], Awaitable[MutableMapping[str, Any]]]
Send: TypeAlias = Callable[[MutableMapping[str, Any]], Awaitable[None]]


@dataclass(frozen=True, slots=True)
class HTTPScope:
    """The parts of an HTTP scope the view server reads.

    Internal only -- the resolver only ever sees the path.
    """

    method: str
    path: str

    @classmethod
    def from_scope(cls, scope: Scope) -> "HTTPScope":
        """Parse raw ASGI scope into typed object."""
        return cls(
            method=scope.get("method", "GET"),
            path=scope.get("path", "/"),
        )

    @property
    def request_path(self) -> str:
        """The path normalized for resolution: no query or fragment, leading ``/``."""
        path = self.path.split("?", 1)[0].split("#", 1)[0]
        if not path.startswith("/"):
            path = "/" + path
        return path
