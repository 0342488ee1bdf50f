"""Path expressions for locating values inside arbitrary JSON documents.

Supported syntax::

    data.items[0].name        dotted keys and integer indexes
    data["odd.key"]['x']      quoted keys (may contain dots and brackets)
    data.items[].value        flatten: apply the rest to every element
    $.data.items              leading ``$`` roots are ignored

Parsing and evaluation are separate so each can be tested on its own.
Neither raises; anything that cannot be parsed or followed resolves to None.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from cli.binding.lookup import RecordLookup

QUOTES = ("'", '"')


@dataclass(frozen=True)
class PathSegment:
    key: str = ""
    flatten: bool = False


FLATTEN = PathSegment(flatten=True)


def _parse_bracket(text: str, start: int) -> Optional[Tuple[PathSegment, int]]:
    """Parse the bracket group opening at ``start``.

    Returns the segment and the index just past ``]``, or None if the group
    is unterminated.
    """
    pos = start + 1
    if pos < len(text) and text[pos] in QUOTES:
        quote = text[pos]
        end = text.find(quote, pos + 1)
        if end == -1 or text[end + 1:end + 2] != "]":
            return None
        return PathSegment(text[pos + 1:end]), end + 2

    close = text.find("]", pos)
    if close == -1:
        return None
    content = text[pos:close].strip()
    if not content:
        return FLATTEN, close + 1
    return PathSegment(content), close + 1


def parse_path(expression: Any) -> List[PathSegment]:
    """Split a path expression into segments; malformed input yields []."""
    if not isinstance(expression, str):
        return []
    text = expression.strip().lstrip("$")
    if text.startswith("."):
        text = text[1:]

    segments: List[PathSegment] = []
    token: List[str] = []

    def flush() -> None:
        if token:
            segments.append(PathSegment("".join(token)))
            token.clear()

    pos = 0
    while pos < len(text):
        char = text[pos]
        if char == ".":
            flush()
            pos += 1
        elif char == "[":
            flush()
            parsed = _parse_bracket(text, pos)
            if parsed is None:
                return []
            segment, pos = parsed
            segments.append(segment)
            if pos < len(text) and text[pos] not in ".[":
                return []
        else:
            token.append(char)
            pos += 1
    flush()
    return segments


def _as_index(token: str) -> Optional[int]:
    if token.isascii() and token.isdigit():
        return int(token)
    return None


def resolve_segments(value: Any, segments: Sequence[PathSegment]) -> Any:
    """Walk ``value`` along ``segments``."""
    if value is None:
        return None
    if not segments:
        return value

    head, rest = segments[0], segments[1:]

    if isinstance(value, list):
        if head.flatten:
            results: List[Any] = []
            for item in value:
                resolved = resolve_segments(item, rest)
                if resolved is None:
                    continue
                if isinstance(resolved, list):
                    results.extend(resolved)
                else:
                    results.append(resolved)
            return results or None

        index = _as_index(head.key)
        if index is None or index >= len(value):
            return None
        return resolve_segments(value[index], rest)

    if isinstance(value, dict) and not head.flatten:
        return resolve_segments(RecordLookup(value).resolve([head.key]), rest)

    return None


def resolve_path(payload: Any, expression: Any) -> Any:
    """Resolve ``expression`` against ``payload``; None when nothing matches."""
    segments = parse_path(expression)
    if not segments:
        return None
    return resolve_segments(payload, segments)
