"""Routing — ordered route table with anchored pattern matching.

Routes are registered during setup. Each pattern is compiled to a
single anchored regex; the first matching route wins.
"""

from clover.routing.pattern import compile_pattern, parse_pattern
from clover.routing.route import PathSegment, RouteMatch, ViewRoute
from clover.routing.table import RouteTable

__all__ = [
    "PathSegment",
    "RouteMatch",
    "RouteTable",
    "ViewRoute",
    "compile_pattern",
    "parse_pattern",
]
