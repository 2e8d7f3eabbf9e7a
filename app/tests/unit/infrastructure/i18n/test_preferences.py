"""Tests for infrastructure.i18n.preferences module."""

# pylint: disable=protected-access

from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock

import pytest
import yaml

from infrastructure.events import EventDispatcher
from infrastructure.i18n import (
    PREFERENCES_CHANGED_EVENT,
    InMemoryPreferenceStorage,
    PreferenceState,
    PreferenceStore,
    YAMLPreferenceStorage,
)
from tests.factories.i18n import make_preference_store

pytestmark = pytest.mark.unit


@pytest.fixture
def observer(dispatcher):
    """Mock handler subscribed to language preference changes."""
    handler = MagicMock()
    dispatcher.register(PREFERENCES_CHANGED_EVENT, handler)
    return handler


class TestPreferenceResolution:
    """Tests for the UNSET -> RESOLVED -> ACTIVE lifecycle."""

    def test_unset_until_first_read(self):
        """Nothing is computed before the first read."""
        device = MagicMock(return_value=["en"])
        store = PreferenceStore(["en"], device_languages=device)

        assert store.state == PreferenceState.UNSET
        device.assert_not_called()

        assert store.active == "en"
        assert store.state == PreferenceState.RESOLVED
        device.assert_called_once()

    def test_resolves_from_device_languages(self):
        store = make_preference_store(device_languages=["fr-FR", "zh-TW", "en"])
        assert store.active == "zh-Hant"
        assert store.persisted == "zh-Hant"

    def test_falls_back_to_first_supported(self):
        """Without an intersection the first supported language is used."""
        store = make_preference_store(
            supported_languages=["zh-Hans", "en"], device_languages=["fr", "de"]
        )
        assert store.active == "zh-Hans"

    def test_no_device_languages(self):
        store = make_preference_store(device_languages=[])
        assert store.active == "en"

    def test_persisted_preference_overrides(self):
        storage = InMemoryPreferenceStorage("zh-Hans")
        store = make_preference_store(device_languages=["en"], storage=storage)

        assert store.active == "zh-Hans"
        assert store.state == PreferenceState.ACTIVE

    def test_persisted_preference_is_negotiated(self):
        storage = InMemoryPreferenceStorage("zh_CN")
        store = make_preference_store(storage=storage)
        assert store.active == "zh-Hans"

    def test_unsupported_persisted_preference_is_ignored(self):
        """A stored language the app no longer supports is skipped."""
        storage = InMemoryPreferenceStorage("fr")
        store = make_preference_store(device_languages=["en"], storage=storage)

        assert store.active == "en"
        assert store.state == PreferenceState.RESOLVED

    def test_requires_supported_languages(self):
        with pytest.raises(ValueError):
            PreferenceStore([])


class TestSetLanguage:
    """Tests for PreferenceStore.set_language()."""

    def test_restart_required_mode(self, dispatcher, observer):
        """Without immediate switching the active language stays put."""
        storage = InMemoryPreferenceStorage()
        store = make_preference_store(storage=storage, dispatcher=dispatcher)
        assert store.active == "en"

        assert store.set_language("zh-Hans") is True

        assert store.active == "en"
        assert store.persisted == "zh-Hans"
        assert storage.language == "zh-Hans"
        observer.assert_called_once()

    def test_restart_applies_persisted_language(self):
        """A new store over the same storage picks up the persisted language."""
        storage = InMemoryPreferenceStorage()
        store = make_preference_store(storage=storage)
        store.set_language("zh-Hans")

        restarted = make_preference_store(storage=storage)
        assert restarted.active == "zh-Hans"
        assert restarted.state == PreferenceState.ACTIVE

    def test_immediate_mode(self, dispatcher, observer):
        """With immediate switching the change applies at once."""
        store = make_preference_store(
            dispatcher=dispatcher, immediate_switch_enabled=True
        )
        assert store.active == "en"

        assert store.set_language("zh-Hans") is True

        assert store.active == "zh-Hans"
        assert store.state == PreferenceState.ACTIVE
        observer.assert_called_once()

    def test_same_language_is_noop(self, dispatcher, observer):
        """Setting the persisted language again emits nothing."""
        store = make_preference_store(
            dispatcher=dispatcher, immediate_switch_enabled=True
        )
        store.set_language("zh-Hans")
        assert store.set_language("zh-Hans") is False

        observer.assert_called_once()

    def test_current_default_is_noop(self, observer):
        storage = InMemoryPreferenceStorage()
        store = make_preference_store(storage=storage)

        assert store.set_language("en") is False
        assert storage.language is None
        observer.assert_not_called()

    def test_unsupported_language_is_rejected(self, dispatcher, observer):
        storage = InMemoryPreferenceStorage()
        store = make_preference_store(storage=storage, dispatcher=dispatcher)

        assert store.set_language("fr") is False
        assert store.persisted == "en"
        assert storage.language is None
        observer.assert_not_called()

    def test_language_is_negotiated(self, dispatcher):
        store = make_preference_store(
            dispatcher=dispatcher,
            device_languages=["zh-Hans"],
            immediate_switch_enabled=True,
        )
        store.set_language("en-GB")
        assert store.active == "en"

    def test_event_has_no_payload(self, dispatcher, observer):
        store = make_preference_store(dispatcher=dispatcher)
        store.set_language("zh-Hant")

        event = observer.call_args.args[0]
        assert event.event_type == PREFERENCES_CHANGED_EVENT
        assert event.metadata == {}

    def test_event_emitted_after_lock_released(self, dispatcher):
        """Observers run without the store lock held."""
        store = make_preference_store(
            dispatcher=dispatcher, immediate_switch_enabled=True
        )
        seen = []

        def handler(event):
            seen.append(store._lock.locked())
            seen.append(store.active)

        dispatcher.register(PREFERENCES_CHANGED_EVENT, handler)
        store.set_language("zh-Hans")

        assert seen == [False, "zh-Hans"]

    def test_failing_observer_does_not_break_set(self, dispatcher, observer):
        def broken(event):
            raise RuntimeError("observer failed")

        dispatcher.register(PREFERENCES_CHANGED_EVENT, broken)
        dispatcher.register(PREFERENCES_CHANGED_EVENT, observer)
        store = make_preference_store(dispatcher=dispatcher)

        assert store.set_language("zh-Hans") is True
        assert observer.call_count == 2


class TestImmediateSwitching:
    """Tests for toggling in-app switching."""

    def test_toggle(self):
        store = make_preference_store()
        assert store.immediate_switch_enabled is False

        store.set_immediate_switch_enabled(True)
        assert store.immediate_switch_enabled is True

        store.set_immediate_switch_enabled(False)
        assert store.immediate_switch_enabled is False

    def test_enabling_does_not_apply_pending_language(self):
        store = make_preference_store()
        store.set_language("zh-Hans")

        store.set_immediate_switch_enabled(True)

        assert store.active == "en"
        assert store.persisted == "zh-Hans"

    def test_enabled_switch_applies_later_changes(self):
        store = make_preference_store()
        store.set_immediate_switch_enabled(True)
        store.set_language("zh-Hant")
        assert store.active == "zh-Hant"


class TestConcurrency:
    """Tests for concurrent access to the store."""

    def test_concurrent_reads_and_writes(self):
        dispatcher = EventDispatcher()
        events = []
        dispatcher.register(PREFERENCES_CHANGED_EVENT, events.append)
        store = make_preference_store(
            dispatcher=dispatcher, immediate_switch_enabled=True
        )
        languages = ["en", "zh-Hans", "zh-Hant"]

        def work(i):
            changed = store.set_language(languages[i % 3])
            snapshot = store.snapshot
            return changed, snapshot

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(work, range(300)))

        changes = sum(1 for changed, _ in results if changed)
        assert len(events) == changes
        for _, snapshot in results:
            assert snapshot.active in languages
            assert snapshot.active == snapshot.persisted
        assert store.active in languages


class TestYAMLPreferenceStorage:
    """Tests for YAMLPreferenceStorage."""

    def test_load_missing_file(self, tmp_path):
        assert YAMLPreferenceStorage(tmp_path / "prefs.yml").load() is None

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "nested" / "prefs.yml"
        storage = YAMLPreferenceStorage(path)
        storage.save("zh-Hans")

        assert path.exists()
        assert yaml.safe_load(path.read_text(encoding="utf-8")) == {
            "preferred_language": "zh-Hans"
        }
        assert YAMLPreferenceStorage(path).load() == "zh-Hans"

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "prefs.yml"
        path.write_text("preferred_language: [oops\n", encoding="utf-8")
        assert YAMLPreferenceStorage(path).load() is None

    def test_unexpected_document(self, tmp_path):
        path = tmp_path / "prefs.yml"
        path.write_text("- en\n", encoding="utf-8")
        assert YAMLPreferenceStorage(path).load() is None

    def test_store_round_trip_through_file(self, tmp_path):
        path = tmp_path / "prefs.yml"
        store = make_preference_store(storage=YAMLPreferenceStorage(path))
        store.set_language("zh-Hant")

        restarted = make_preference_store(storage=YAMLPreferenceStorage(path))
        assert restarted.active == "zh-Hant"
