"""ViewRoute and RouteMatch frozen dataclasses."""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed piece of a route pattern.

    Literal:      ``/users/``  (is_param=False)
    Placeholder:  ``{id}``     (is_param=True, param_name="id")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None


@dataclass(frozen=True, slots=True)
class ViewRoute:
    """A registered route pattern with its static view data.

    Created by ``RouteTable.add()``. ``regex`` is the compiled,
    anchored matcher for ``pattern``.
    """

    pattern: str
    data: Mapping[str, Any]
    regex: re.Pattern[str]


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful pattern match."""

    route: ViewRoute
    path_params: dict[str, str]
