"""Process-wide language preference.

The PreferenceStore holds which language is active and which one is
persisted for the next start. State lives in an immutable
LanguagePreference snapshot that is swapped under a lock, so readers never
see a partially applied change.

Lifecycle:
    UNSET -> RESOLVED: the first read intersects the supported languages with
        the device languages, defaulting to the first supported language.
    RESOLVED -> ACTIVE: a previously persisted preference overrides the
        computed language.

`set_language` always persists. With immediate switching enabled it also
updates the active language and emits a change event after the lock is
released; otherwise the active language only changes on the next start.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from threading import Lock
from typing import Callable, List, Optional, Sequence

import yaml

from infrastructure.events import Event, EventDispatcher, default_dispatcher
from infrastructure.i18n.models import LanguagePreference, PreferenceState
from infrastructure.i18n.negotiation import (
    LanguageNegotiator,
    detect_device_languages,
)
from infrastructure.logging import get_module_logger

logger = get_module_logger()

PREFERENCES_CHANGED_EVENT = "i18n.language_preferences.changed"


class PreferenceStorage(ABC):
    """Persistence for the preferred language."""

    @abstractmethod
    def load(self) -> Optional[str]:
        """Return the persisted language, or None if never set."""

    @abstractmethod
    def save(self, language: str) -> None:
        """Persist the preferred language."""


class InMemoryPreferenceStorage(PreferenceStorage):
    """Keeps the preference for the lifetime of the object only."""

    def __init__(self, language: Optional[str] = None):
        self.language = language

    def load(self) -> Optional[str]:
        return self.language

    def save(self, language: str) -> None:
        self.language = language


class YAMLPreferenceStorage(PreferenceStorage):
    """Persists the preference in a small YAML document.

    File format:
        preferred_language: zh-Hans
    """

    KEY = "preferred_language"

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> Optional[str]:
        if not self.path.exists():
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning(
                "preferences_file_unreadable", path=str(self.path), error=str(e)
            )
            return None
        if not isinstance(data, dict):
            return None
        language = data.get(self.KEY)
        return str(language) if language else None

    def save(self, language: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.safe_dump({self.KEY: language}, f, allow_unicode=True)


class PreferenceStore:
    """Thread-safe holder of the process language preference.

    Attributes:
        supported_languages: Declared languages in preference order.
        storage: Persistence backend.
        dispatcher: Channel receiving the change events.
    """

    def __init__(
        self,
        supported_languages: Sequence[str],
        storage: Optional[PreferenceStorage] = None,
        dispatcher: Optional[EventDispatcher] = None,
        device_languages: Callable[[], List[str]] = detect_device_languages,
        immediate_switch_enabled: bool = False,
    ):
        """Initialize the store. Nothing is read until first access.

        Args:
            supported_languages: Declared languages, first one is the default.
            storage: Persistence backend (default: in-memory).
            dispatcher: Event dispatcher (default: process-wide dispatcher).
            device_languages: Callable returning the device languages.
            immediate_switch_enabled: Initial switching mode.

        Raises:
            ValueError: If no supported language is declared.
        """
        if not supported_languages:
            raise ValueError("At least one supported language is required")
        self.supported_languages = list(supported_languages)
        self.storage = storage or InMemoryPreferenceStorage()
        self.dispatcher = dispatcher or default_dispatcher
        self._device_languages = device_languages
        self._initial_immediate = immediate_switch_enabled
        self._snapshot: Optional[LanguagePreference] = None
        self._lock = Lock()

    def _load_locked(self) -> LanguagePreference:
        """Compute the initial snapshot. Caller holds the lock."""
        computed = LanguageNegotiator.find_best_match(
            self._device_languages(),
            self.supported_languages,
            default=self.supported_languages[0],
        )

        stored = self.storage.load()
        persisted = (
            LanguageNegotiator.match(stored, self.supported_languages)
            if stored
            else None
        )
        if stored and persisted is None:
            logger.warning("persisted_language_unsupported", language=stored)

        if persisted is None:
            snapshot = LanguagePreference(
                persisted=computed,
                active=computed,
                immediate_switch_enabled=self._initial_immediate,
                state=PreferenceState.RESOLVED,
            )
        else:
            snapshot = LanguagePreference(
                persisted=persisted,
                active=persisted,
                immediate_switch_enabled=self._initial_immediate,
                state=PreferenceState.ACTIVE,
            )

        logger.info(
            "language_preference_loaded",
            active=snapshot.active,
            state=snapshot.state.value,
        )
        return snapshot

    @property
    def snapshot(self) -> LanguagePreference:
        """Current preference, loading it on first access."""
        snapshot = self._snapshot
        if snapshot is not None:
            return snapshot
        with self._lock:
            if self._snapshot is None:
                self._snapshot = self._load_locked()
            return self._snapshot

    @property
    def state(self) -> PreferenceState:
        """Lifecycle state; reading it does not trigger loading."""
        snapshot = self._snapshot
        return PreferenceState.UNSET if snapshot is None else snapshot.state

    @property
    def active(self) -> str:
        """Language currently used for lookups."""
        return self.snapshot.active

    @property
    def persisted(self) -> str:
        """Language that will be active after the next start."""
        return self.snapshot.persisted

    @property
    def immediate_switch_enabled(self) -> bool:
        return self.snapshot.immediate_switch_enabled

    def set_immediate_switch_enabled(self, enabled: bool) -> None:
        """Turn in-app language switching on or off.

        Does not apply a persisted language retroactively.
        """
        with self._lock:
            current = self._snapshot or self._load_locked()
            self._snapshot = current.evolve(immediate_switch_enabled=bool(enabled))
        logger.info("in_app_switching_updated", enabled=bool(enabled))

    def set_language(self, language: str) -> bool:
        """Persist a new preferred language.

        Args:
            language: Requested language. It is matched against the supported
                languages ("en-GB" selects "en").

        Returns:
            True if the preference changed and an event was emitted, False for
            unsupported languages or when it equals the persisted language.
        """
        matched = LanguageNegotiator.match(language, self.supported_languages)
        if matched is None:
            logger.warning(
                "unsupported_language",
                language=language,
                supported=self.supported_languages,
            )
            return False

        with self._lock:
            current = self._snapshot or self._load_locked()
            if matched == current.persisted:
                self._snapshot = current
                return False

            self.storage.save(matched)
            if current.immediate_switch_enabled:
                updated = current.evolve(
                    persisted=matched, active=matched, state=PreferenceState.ACTIVE
                )
            else:
                updated = current.evolve(persisted=matched)
            self._snapshot = updated

        logger.info(
            "language_preference_changed",
            persisted=updated.persisted,
            active=updated.active,
            immediate=updated.immediate_switch_enabled,
        )
        self.dispatcher.dispatch(Event(event_type=PREFERENCES_CHANGED_EVENT))
        return True
