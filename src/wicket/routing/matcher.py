"""Compiled path matchers.

A route's path pattern is parsed once, at registration, into a
``PathMatcher``. Matching an incoming path is then a walk over a tuple of
precompiled segments, with no parsing or regex compilation per request.

Pattern syntax::

    /                    root
    /users               static segment, compared case-sensitively
    /users/{id}          any single segment
    /users/{id:int}      typed segment (see ``wicket.routing.params``)
    /files/{rest:path}   everything that remains, must be last
"""

import re
from dataclasses import dataclass
from urllib.parse import unquote

from wicket.errors import ConfigurationError
from wicket.routing.params import compile_converter

_PARAM_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Static:  ``users``     (is_param=False)
    Param:   ``{id}``      (is_param=True, param_name="id")
    Typed:   ``{id:int}``  (is_param=True, param_name="id", param_type="int")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"
    regex: re.Pattern[str] | None = None


def parse_path(pattern: str) -> tuple[PathSegment, ...]:
    """Parse a route pattern into segments.

    Raises ``ConfigurationError`` for patterns that cannot be compiled.
    """
    if not pattern.startswith("/"):
        msg = f"Route path {pattern!r} must start with '/'."
        raise ConfigurationError(msg)

    segments: list[PathSegment] = []
    parts = [p for p in pattern.split("/") if p]
    for index, part in enumerate(parts):
        if part.startswith("<") or part.startswith(":"):
            msg = (
                f"Route path {pattern!r} uses <param> or :param syntax. "
                "Wicket expects {param} segments, e.g. '/users/{id}'."
            )
            raise ConfigurationError(msg)

        if not (part.startswith("{") and part.endswith("}")):
            segments.append(PathSegment(value=unquote(part)))
            continue

        inner = part[1:-1]
        param_name, _, param_type = inner.partition(":")
        param_type = param_type or "str"
        if not _PARAM_NAME_RE.match(param_name):
            msg = f"Invalid parameter name {param_name!r} in route {pattern!r}."
            raise ConfigurationError(msg)
        if param_type == "path" and index != len(parts) - 1:
            msg = f"Path parameter {{{inner}}} must be the last segment of {pattern!r}."
            raise ConfigurationError(msg)
        segments.append(
            PathSegment(
                value=part,
                is_param=True,
                param_name=param_name,
                param_type=param_type,
                regex=compile_converter(param_type, pattern),
            )
        )

    names = [s.param_name for s in segments if s.is_param]
    if len(names) != len(set(names)):
        msg = f"Route {pattern!r} declares the same parameter name twice."
        raise ConfigurationError(msg)
    return tuple(segments)


def split_path(path: str) -> list[str]:
    """Split a raw request path into percent-decoded segments.

    Splitting happens before decoding, so ``%2F`` stays inside its segment.
    A single trailing slash is ignored.
    """
    parts = path.split("/")
    if parts and parts[0] == "":
        parts = parts[1:]
    if parts and parts[-1] == "":
        parts = parts[:-1]
    return [unquote(part) for part in parts]


class PathMatcher:
    """A route pattern compiled for repeated matching.

    ``test()`` is pure: it reads only immutable state, so a single matcher
    is shared by every in-flight request without locking.
    """

    __slots__ = ("_segments", "pattern")

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        self._segments = parse_path(pattern)

    @property
    def segments(self) -> tuple[PathSegment, ...]:
        return self._segments

    @property
    def is_static(self) -> bool:
        return not any(s.is_param for s in self._segments)

    def test(self, path: str) -> dict[str, str] | None:
        """Match *path*, returning captured parameters or ``None``."""
        parts = split_path(path)
        params: dict[str, str] = {}
        segments = self._segments

        for index, seg in enumerate(segments):
            if seg.is_param and seg.param_type == "path":
                rest = parts[index:]
                if not rest:
                    return None
                params[seg.param_name or "path"] = "/".join(rest)
                return params
            if index >= len(parts):
                return None
            part = parts[index]
            if seg.is_param:
                assert seg.regex is not None
                if not seg.regex.fullmatch(part):
                    return None
                params[seg.param_name or ""] = part
            elif part != seg.value:
                return None

        if len(parts) != len(segments):
            return None
        return params

    def __repr__(self) -> str:
        return f"PathMatcher({self.pattern!r})"
