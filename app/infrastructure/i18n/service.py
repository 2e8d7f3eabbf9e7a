"""Localization service for dependency injection.

Provides the public surface of the i18n system as one object that can be
injected or mocked.
"""

from typing import Any, Iterable, List, Optional

from infrastructure.events import EventDispatcher
from infrastructure.events.dispatcher import EventHandler
from infrastructure.i18n.bundles import BundleResolver
from infrastructure.i18n.localizer import Localizer
from infrastructure.i18n.models import (
    BRACES,
    DelimiterPair,
    LanguageDirection,
    ResourceBundle,
)
from infrastructure.i18n.negotiation import language_direction
from infrastructure.i18n.preferences import PREFERENCES_CHANGED_EVENT, PreferenceStore
from infrastructure.i18n.scanner import render


class LocalizationService:
    """Class-based localization service.

    A thin facade: preference handling is delegated to the PreferenceStore,
    bundle mapping to the BundleResolver and lookups to the Localizer.

    Usage:
        from infrastructure.services import get_localization_service

        i18n = get_localization_service()
        i18n.set_in_app_switching_enabled(True)
        i18n.set_preferred_language("zh-Hans")
        label = i18n.localize("{0} went to {2} on {1}.", name, date, spot)
    """

    def __init__(
        self,
        preferences: PreferenceStore,
        bundle_resolver: BundleResolver,
        localizer: Localizer,
        rtl_languages: Iterable[str] = (),
    ):
        self.preferences = preferences
        self.bundle_resolver = bundle_resolver
        self.localizer = localizer
        self.rtl_languages = tuple(rtl_languages)

    @property
    def dispatcher(self) -> EventDispatcher:
        return self.preferences.dispatcher

    def get_preferred_language(self) -> str:
        """Language currently used for lookups."""
        return self.preferences.active

    def set_preferred_language(self, language: str) -> bool:
        """Persist the preferred language.

        Takes effect immediately only when in-app switching is enabled,
        otherwise on the next start.

        Returns:
            True if the preference changed.
        """
        return self.preferences.set_language(language)

    def language_direction(self, language: str) -> LanguageDirection:
        return language_direction(language, self.rtl_languages)

    def supported_languages(self) -> List[str]:
        return list(self.preferences.supported_languages)

    def get_in_app_switching_enabled(self) -> bool:
        return self.preferences.immediate_switch_enabled

    def set_in_app_switching_enabled(self, enabled: bool) -> None:
        self.preferences.set_immediate_switch_enabled(enabled)

    def resolve_bundle(self, language: str, base: Optional[ResourceBundle] = None) -> ResourceBundle:
        """Bundle holding `language` resources, or the base bundle."""
        return self.bundle_resolver.resolve(language, base or self.localizer.default_bundle)

    def render(
        self,
        template: str,
        resolver: Any,
        delimiters: DelimiterPair = BRACES,
    ) -> str:
        """Substitute placeholders using a positional, table or function strategy."""
        return render(template, resolver, delimiters)

    def localize(
        self,
        key: str,
        *args: Any,
        table: Optional[str] = None,
        bundle: Optional[ResourceBundle] = None,
        default: Optional[str] = None,
    ) -> str:
        """Localized string for `key` in the active language.

        See Localizer.localize.
        """
        return self.localizer.localize(
            key, *args, table=table, bundle=bundle, default=default
        )

    def subscribe(self, handler: EventHandler) -> EventHandler:
        """Register a handler for language preference changes."""
        return self.dispatcher.register(PREFERENCES_CHANGED_EVENT, handler)

    def unsubscribe(self, handler: EventHandler) -> bool:
        return self.dispatcher.unregister(PREFERENCES_CHANGED_EVENT, handler)
