"""Ordered route table.

Patterns are kept in registration order and tried first to last.
Registering an existing pattern again replaces its data without
moving it.
"""

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from clover.errors import ConfigurationError
from clover.routing.pattern import compile_pattern
from clover.routing.route import RouteMatch, ViewRoute


class RouteTable:
    """Ordered mapping from route pattern to its static view data.

    Usage::

        table = RouteTable()
        table.add("/users/{id}", {"section": "users"})
        table.add("/posts/{slug}")
        table.freeze()
        for match in table.matches("/users/42"):
            ...
    """

    __slots__ = ("_frozen", "_routes")

    def __init__(self) -> None:
        self._routes: dict[str, ViewRoute] = {}
        self._frozen = False

    def add(self, pattern: str, data: Mapping[str, Any] | None = None) -> ViewRoute:
        """Register a pattern. Must be called before freeze().

        Compiles the pattern immediately so a malformed pattern fails
        at registration, not on the first request.
        """
        if self._frozen:
            msg = f"Cannot register route {pattern!r} after the route table is frozen."
            raise ConfigurationError(msg)

        route = ViewRoute(
            pattern=pattern,
            data=MappingProxyType(dict(data or {})),
            regex=compile_pattern(pattern),
        )
        # dict assignment to an existing key keeps its position
        self._routes[pattern] = route
        return route

    def freeze(self) -> None:
        """Freeze the table. No more routes can be added."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def matches(self, path: str) -> Iterator[RouteMatch]:
        """Yield a match for every route accepting *path*, first registered first."""
        for route in self._routes.values():
            m = route.regex.fullmatch(path)
            if m is not None:
                yield RouteMatch(route=route, path_params=m.groupdict())

    def __iter__(self) -> Iterator[ViewRoute]:
        return iter(self._routes.values())

    def __len__(self) -> int:
        return len(self._routes)
