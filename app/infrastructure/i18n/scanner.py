"""Placeholder scanning and template assembly.

Templates are split in a single left-to-right pass into literal and
placeholder segments. A placeholder opens at the start delimiter and closes
at the first end delimiter after it; placeholders do not nest, so a start
delimiter inside an open placeholder is part of its text. A start delimiter
that is never closed leaves the rest of the template literal.

There is no escape syntax: a template cannot contain a literal start
delimiter followed later by an end delimiter without forming a placeholder.

Examples:
    >>> render("{0} and {1}", ["A", "B"])
    'A and B'
    >>> render("abc{def", ["A"])
    'abc{def'
    >>> render("{a{b}c}", {"a{b": "X"})
    'Xc}'
"""

from typing import Any, Callable, List, Optional

from infrastructure.i18n.models import BRACES, DelimiterPair, Literal, Placeholder, Segment
from infrastructure.i18n.resolvers import as_resolver
from infrastructure.logging import get_module_logger

logger = get_module_logger()


def scan(template: str, delimiters: DelimiterPair = BRACES) -> List[Segment]:
    """Split a template into ordered literal and placeholder segments.

    Every character of the template belongs to exactly one segment, so
    joining the `text` of literals and `raw` of placeholders gives the
    template back.

    Args:
        template: Template string.
        delimiters: Characters bounding placeholders.

    Returns:
        Segments in template order. Adjacent literal text is merged.
    """
    segments: List[Segment] = []
    length = len(template)
    literal_start = 0

    while literal_start < length:
        opening = template.find(delimiters.start, literal_start)
        if opening < 0:
            break
        closing = template.find(delimiters.end, opening + 1)
        if closing < 0:
            # Unterminated placeholder, the remainder stays literal
            break

        if opening > literal_start:
            segments.append(
                Literal(template[literal_start:opening], literal_start, opening)
            )
        segments.append(
            Placeholder(
                text=template[opening + 1 : closing],
                raw=template[opening : closing + 1],
                start=opening,
                end=closing + 1,
            )
        )
        literal_start = closing + 1

    if literal_start < length:
        segments.append(Literal(template[literal_start:], literal_start, length))

    return segments


def assemble(
    segments: List[Segment],
    resolve: Callable[[str], Optional[str]],
) -> str:
    """Join segments, replacing each placeholder with its resolved value.

    Resolved values are inserted as-is and never scanned again.

    Args:
        segments: Output of `scan`.
        resolve: Maps placeholder text to a replacement, or None when the
            placeholder should be rendered unchanged.

    Returns:
        The rendered string.
    """
    parts = []
    for segment in segments:
        if isinstance(segment, Literal):
            parts.append(segment.text)
            continue

        value = resolve(segment.text)
        if value is None:
            logger.debug("placeholder_unresolved", placeholder=segment.raw)
            parts.append(segment.raw)
        else:
            parts.append(value)
    return "".join(parts)


def render(
    template: str,
    resolver: Any,
    delimiters: DelimiterPair = BRACES,
) -> str:
    """Substitute the placeholders of a template.

    Args:
        template: Template string.
        resolver: A PlaceholderResolver, or a sequence (positional), mapping
            (table) or callable (function) to build one from.
        delimiters: Characters bounding placeholders.

    Returns:
        The rendered string. Unresolved placeholders are kept verbatim.
    """
    resolve = as_resolver(resolver)
    if delimiters.start not in template:
        return template
    return assemble(scan(template, delimiters), resolve)
