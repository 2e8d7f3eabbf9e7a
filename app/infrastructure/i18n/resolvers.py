"""Placeholder resolution strategies.

A resolver maps the inner text of a placeholder to its replacement, or to
None when the placeholder cannot be resolved. Unresolved placeholders are
rendered exactly as written, so resolution never fails the render.
"""

import re
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any, Callable, Optional

from infrastructure.logging import get_module_logger

logger = get_module_logger()

_INDEX_PATTERN = re.compile(r"[0-9]+")


class PlaceholderResolver(ABC):
    """Strategy resolving a placeholder's inner text to a replacement."""

    @abstractmethod
    def resolve(self, text: str) -> Optional[str]:
        """Resolve placeholder text.

        Args:
            text: Inner text of the placeholder, delimiters excluded.

        Returns:
            Replacement string, or None to leave the placeholder unresolved.
        """

    def __call__(self, text: str) -> Optional[str]:
        return self.resolve(text)


class PositionalResolver(PlaceholderResolver):
    """Resolves `{0}`, `{1}`, ... against an ordered argument list.

    The inner text must be a non-negative decimal integer. Malformed indexes,
    indexes past the end of the list and None values stay unresolved.
    """

    def __init__(self, arguments: Sequence):
        self.arguments = tuple(arguments)

    def resolve(self, text: str) -> Optional[str]:
        if not _INDEX_PATTERN.fullmatch(text):
            return None
        digits = text.lstrip("0") or "0"
        # Longer than any valid index; keeps int() within its digit limit
        if len(digits) > len(str(len(self.arguments))):
            return None
        index = int(digits)
        if index >= len(self.arguments):
            return None
        value = self.arguments[index]
        if value is None:
            return None
        return str(value)


class TableResolver(PlaceholderResolver):
    """Resolves placeholders by exact lookup in a substitution table."""

    def __init__(self, table: Mapping):
        self.table = table

    def resolve(self, text: str) -> Optional[str]:
        if text not in self.table:
            return None
        value = self.table[text]
        if value is None:
            return None
        return str(value)


class FunctionResolver(PlaceholderResolver):
    """Resolves placeholders with a caller-supplied function.

    The function returns the replacement value, or None to decline. A
    function that raises is logged and treated as declining.
    """

    def __init__(self, function: Callable[[str], Any]):
        self.function = function

    def resolve(self, text: str) -> Optional[str]:
        try:
            value = self.function(text)
        except Exception as e:
            logger.warning(
                "function_resolver_failed",
                placeholder=text,
                error=str(e),
            )
            return None
        if value is None:
            return None
        return str(value)


def as_resolver(source: Any) -> PlaceholderResolver:
    """Coerce a resolver source into a PlaceholderResolver.

    Args:
        source: A PlaceholderResolver, a mapping (table strategy), a callable
            (function strategy) or a non-string sequence (positional strategy).

    Returns:
        The matching PlaceholderResolver.

    Raises:
        TypeError: If the source matches no strategy.
    """
    if isinstance(source, PlaceholderResolver):
        return source
    if isinstance(source, Mapping):
        return TableResolver(source)
    if callable(source):
        return FunctionResolver(source)
    if isinstance(source, Sequence) and not isinstance(source, (str, bytes)):
        return PositionalResolver(source)
    raise TypeError(
        f"Cannot build a placeholder resolver from {type(source).__name__}"
    )
