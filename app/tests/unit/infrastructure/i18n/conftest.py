"""Feature-level fixtures for i18n system tests.

Provides string tables on disk, providers, preference stores and services.
"""

import pytest

from infrastructure.configuration import I18nSettings
from infrastructure.events import EventDispatcher
from infrastructure.i18n import (
    InMemoryPreferenceStorage,
    ResourceBundle,
    YAMLResourceProvider,
    create_localization_service,
)
from tests.factories.i18n import write_string_table


@pytest.fixture
def temp_locales_dir(tmp_path):
    """Create a temporary directory with sample YAML string tables.

    Returns a directory structure like:
    - Localizable.en.yml
    - Localizable.zh-Hans.yml
    - Localizable.ar.yml
    - Localizable.Base.yml
    - Errors.en.yml
    - Errors.zh-Hans.yml
    """
    locales = tmp_path / "locales"
    locales.mkdir()

    write_string_table(
        locales,
        "en",
        {
            "Hello, {0}!": "Hello, {0}!",
            "{0} went to {2} on {1}.": "{0} went to {2} on {1}.",
            "Language": "Language",
            "English only": "Only in English",
        },
    )
    write_string_table(
        locales,
        "zh-Hans",
        {
            "Hello, {0}!": "你好，{0}！",
            "{0} went to {2} on {1}.": "{0}在{1}去过{2}。",
            "Language": "语言",
        },
    )
    write_string_table(
        locales,
        "ar",
        {
            "Language": "اللغة",
        },
    )
    write_string_table(
        locales,
        "Base",
        {
            "Language": "Language (Base)",
            "Base only": "From Base",
        },
    )
    write_string_table(locales, "en", {"Not found": "Not found"}, table="Errors")
    write_string_table(locales, "zh-Hans", {"Not found": "未找到"}, table="Errors")

    return locales


@pytest.fixture
def base_bundle(temp_locales_dir):
    """Base bundle over the temporary string tables."""
    return ResourceBundle(path=temp_locales_dir)


@pytest.fixture
def provider():
    """YAML resource provider with English as development language."""
    return YAMLResourceProvider(development_language="en")


@pytest.fixture
def dispatcher():
    """Fresh event dispatcher isolated from the process-wide one."""
    return EventDispatcher()


@pytest.fixture
def i18n_settings(temp_locales_dir):
    """Localization settings pointing at the temporary string tables."""
    return I18nSettings(I18N_LOCALES_DIR=str(temp_locales_dir))


@pytest.fixture
def make_service(i18n_settings, dispatcher):
    """Factory building a LocalizationService over the temporary tables."""

    def _factory(device_languages=None, storage=None, config=None):
        devices = ["en-US"] if device_languages is None else device_languages
        return create_localization_service(
            config=config or i18n_settings,
            dispatcher=dispatcher,
            storage=storage or InMemoryPreferenceStorage(),
            device_languages=lambda: list(devices),
        )

    return _factory
