"""HTTP response with chainable .with_*() transformation API.

Each transformation returns a new Response. Immutable by convention,
built incrementally by design.
"""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations.

    Construct with a body, then chain ``.with_*()`` calls to set
    status and headers. Each call returns a new ``Response``.
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/html; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()

    # -- Chainable transformations --

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    # -- Accessors --

    @property
    def body_bytes(self) -> bytes:
        """Body encoded as UTF-8 bytes."""
        if isinstance(self.body, bytes):
            return self.body
        return self.body.encode("utf-8")

    @property
    def text(self) -> str:
        """Body decoded as UTF-8 text."""
        if isinstance(self.body, str):
            return self.body
        return self.body.decode("utf-8")

    def header(self, name: str, default: str | None = None) -> str | None:
        """Return the first header value named *name* (case-insensitive)."""
        lowered = name.lower()
        for key, value in self.headers:
            if key.lower() == lowered:
                return value
        return default
