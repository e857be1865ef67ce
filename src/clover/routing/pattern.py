"""Route pattern parsing and compilation.

A pattern is literal text plus ``{name}`` placeholders::

    "/users/{id}"          -> [PathSegment("/users/"), PathSegment("{id}", is_param=True)]
    "/posts/{year}-{slug}" -> literal, param, literal "-", param

Each placeholder captures one or more characters other than ``/``.
Everything else, including regex metacharacters, matches verbatim.
"""

import re

from clover.errors import PatternError
from clover.routing.route import PathSegment

# Placeholder names are word characters; anything else in braces is literal
_PLACEHOLDER_RE = re.compile(r"\{(\w+)\}")

_PARAM_REGEX = r"[^/]+"


def parse_pattern(pattern: str) -> tuple[PathSegment, ...]:
    """Split a route pattern into literal and placeholder segments.

    Raises ``PatternError`` if a placeholder name is not a valid
    identifier or appears more than once.
    """
    segments: list[PathSegment] = []
    seen: set[str] = set()
    pos = 0

    for match in _PLACEHOLDER_RE.finditer(pattern):
        name = match.group(1)
        if not name.isidentifier():
            raise PatternError(pattern, f"placeholder {{{name}}} is not a valid identifier")
        if name in seen:
            raise PatternError(pattern, f"placeholder {{{name}}} is used more than once")
        seen.add(name)

        if match.start() > pos:
            segments.append(PathSegment(value=pattern[pos : match.start()]))
        segments.append(PathSegment(value=match.group(0), is_param=True, param_name=name))
        pos = match.end()

    if pos < len(pattern):
        segments.append(PathSegment(value=pattern[pos:]))
    return tuple(segments)


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a route pattern into a single regex anchored at both ends."""
    parts = [
        f"(?P<{seg.param_name}>{_PARAM_REGEX})" if seg.is_param else re.escape(seg.value)
        for seg in parse_pattern(pattern)
    ]
    return re.compile("^" + "".join(parts) + "$")
