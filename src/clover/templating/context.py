"""View context: the explicit scope handed to script views.

A ``.py`` view does not see the view data as loose globals. It gets a
single ``view`` binding: a read-only mapping of the view data with an
output buffer attached::

    # views/users/{id}.py
    view.write(f"<h1>User {view['id']}</h1>")
    if view.get("admin"):
        view.write("<p>Administrator</p>")
"""

from collections.abc import Iterator, Mapping
from io import StringIO
from types import MappingProxyType
from typing import Any


class ViewContext(Mapping[str, Any]):
    """Read-only view data plus an output buffer for one render."""

    __slots__ = ("_buffer", "_data")

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._data = MappingProxyType(dict(data or {}))
        self._buffer = StringIO()

    @property
    def data(self) -> Mapping[str, Any]:
        return self._data

    def write(self, *parts: object) -> None:
        """Append text to the rendered output. Non-strings are converted with ``str()``."""
        for part in parts:
            self._buffer.write(part if isinstance(part, str) else str(part))

    def getvalue(self) -> str:
        """Everything written so far."""
        return self._buffer.getvalue()

    def output(self) -> bytes:
        return self.getvalue().encode("utf-8")

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"ViewContext({dict(self._data)!r})"
