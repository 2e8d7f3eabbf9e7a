"""Localization models for the i18n system.

Defines the value types shared by the placeholder engine, the language
preference store and the resource bundle resolution.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Union


class AppLanguage:
    """Well-known application language identifiers.

    Languages are plain BCP 47-like strings so applications can declare
    any custom value (e.g., "ar", "pt-BR") alongside these.
    """

    CHINESE = "zh-Hans"
    CHINESE_TRADITIONAL = "zh-Hant"
    ENGLISH = "en"

    # Pseudo-localization holding the base layout, never user selectable
    BASE = "Base"


class LanguageDirection(str, Enum):
    """Writing direction of a language."""

    LEFT_TO_RIGHT = "leftToRight"
    RIGHT_TO_LEFT = "rightToLeft"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class DelimiterPair:
    """Characters bounding a placeholder in a template.

    Attributes:
        start: Single character opening a placeholder.
        end: Single character closing a placeholder.

    Raises:
        ValueError: If either delimiter is not exactly one character.
    """

    start: str = "{"
    end: str = "}"

    def __post_init__(self) -> None:
        for name, value in (("start", self.start), ("end", self.end)):
            if not isinstance(value, str) or len(value) != 1:
                raise ValueError(
                    f"Delimiter {name} must be a single character: {value!r}"
                )


BRACES = DelimiterPair("{", "}")


@dataclass(frozen=True)
class Literal:
    """Template text copied verbatim.

    Attributes:
        text: The literal characters.
        start: Offset of the first character in the template.
        end: Offset one past the last character in the template.
    """

    text: str
    start: int
    end: int


@dataclass(frozen=True)
class Placeholder:
    """A substitution point bounded by a delimiter pair.

    Attributes:
        text: Inner text between the delimiters (may be empty).
        raw: Placeholder exactly as written in the template, delimiters included.
        start: Offset of the start delimiter in the template.
        end: Offset one past the end delimiter in the template.
    """

    text: str
    raw: str
    start: int
    end: int


Segment = Union[Literal, Placeholder]


class PreferenceState(str, Enum):
    """Lifecycle of the process-wide language preference.

    UNSET: nothing has been read yet.
    RESOLVED: the language was computed from supported and device languages.
    ACTIVE: a persisted preference overrides the computed default.
    """

    UNSET = "unset"
    RESOLVED = "resolved"
    ACTIVE = "active"


@dataclass(frozen=True)
class LanguagePreference:
    """Immutable snapshot of the language preference.

    Attributes:
        persisted: Language that will be used on the next process start.
        active: Language currently used for lookups.
        immediate_switch_enabled: Whether `set` updates `active` immediately.
        state: Lifecycle state the snapshot was produced in.
    """

    persisted: str
    active: str
    immediate_switch_enabled: bool = False
    state: PreferenceState = PreferenceState.RESOLVED

    def evolve(self, **changes) -> "LanguagePreference":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


@dataclass(frozen=True)
class ResourceBundle:
    """Handle to a container of localized string tables.

    A base bundle has no language; a language bundle is the same container
    restricted to one localization.

    Attributes:
        path: Directory holding the string tables.
        language: Localization this bundle is restricted to, or None for base.
        name: Human readable identifier used in logs.
    """

    path: Path
    language: Optional[str] = None
    name: str = field(default="main", compare=False)

    @property
    def is_base(self) -> bool:
        """True when the bundle is not restricted to a language."""
        return self.language is None

    def for_language(self, language: str) -> "ResourceBundle":
        """Return the language-restricted view of this bundle."""
        return ResourceBundle(path=self.path, language=language, name=self.name)

    def __str__(self) -> str:
        if self.language is None:
            return f"{self.name}:{self.path}"
        return f"{self.name}:{self.path}[{self.language}]"


@dataclass
class StringCatalog:
    """String tables of a single localization.

    Attributes:
        language: Localization the tables belong to ("Base" for the base one).
        tables: Nested dict structure {table: {key: template}}.
        loaded_at: Timestamp (ISO 8601) when the tables were loaded.
    """

    language: str
    tables: Dict[str, Dict[str, str]] = field(default_factory=dict)
    loaded_at: Optional[str] = None

    def get_message(self, table: str, key: str) -> Optional[str]:
        """Retrieve a template by table and key, or None if absent."""
        return self.tables.get(table, {}).get(key)

    def set_message(self, table: str, key: str, message: str) -> None:
        """Set a template in a table, creating the table if needed."""
        self.tables.setdefault(table, {})[key] = message
