"""Resolution outcomes.

Every call to ``Resolver.resolve()`` produces exactly one of these.
Paths are relative to their root and always start with ``/``.
"""

from dataclasses import dataclass, field
from typing import Any, TypeAlias


@dataclass(frozen=True, slots=True)
class StaticFile:
    """A file under the asset root, served verbatim."""

    path: str
    content_type: str


@dataclass(frozen=True, slots=True)
class RenderedView:
    """A view template under the view root plus the data to render it with."""

    template_path: str
    view_data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class NotFound:
    """Nothing matched the request path."""

    request_path: str


Outcome: TypeAlias = StaticFile | RenderedView | NotFound
