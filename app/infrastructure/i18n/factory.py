"""Factory functions for creating i18n components.

Builds the localization object graph from settings.
"""

from pathlib import Path
from typing import Callable, List, Optional

from infrastructure.configuration import I18nSettings
from infrastructure.events import EventDispatcher
from infrastructure.i18n.bundles import BundleResolver, YAMLResourceProvider
from infrastructure.i18n.localizer import Localizer
from infrastructure.i18n.models import ResourceBundle
from infrastructure.i18n.negotiation import detect_device_languages, normalize_language_tag
from infrastructure.i18n.preferences import (
    InMemoryPreferenceStorage,
    PreferenceStorage,
    PreferenceStore,
    YAMLPreferenceStorage,
)
from infrastructure.i18n.service import LocalizationService
from infrastructure.logging import get_module_logger

logger = get_module_logger()


def resolve_supported_languages(
    config: I18nSettings,
    provider: YAMLResourceProvider,
    bundle: ResourceBundle,
) -> List[str]:
    """Ordered supported languages, development language first.

    Uses the declared list when configured, otherwise the localizations
    found in the bundle.
    """
    declared = [normalize_language_tag(lang) for lang in config.supported_languages]
    languages = [lang for lang in declared if lang] or provider.available_languages(bundle)

    development = config.development_language
    ordered = [development] if development in languages or not languages else []
    ordered.extend(lang for lang in languages if lang != development)
    return ordered


def create_localization_service(
    config: Optional[I18nSettings] = None,
    dispatcher: Optional[EventDispatcher] = None,
    storage: Optional[PreferenceStorage] = None,
    device_languages: Callable[[], List[str]] = detect_device_languages,
) -> LocalizationService:
    """Create and configure a LocalizationService.

    Args:
        config: Localization settings (default: read from the environment).
        dispatcher: Channel for change events (default: process-wide dispatcher).
        storage: Preference persistence (default: from I18N_PREFERENCES_FILE).
        device_languages: Callable returning the device languages.

    Returns:
        LocalizationService: Configured service.

    Raises:
        ValueError: If the locales directory does not exist.

    Usage:
        service = create_localization_service()
        service = create_localization_service(I18nSettings(I18N_LOCALES_DIR="/srv/locales"))
    """
    config = config or I18nSettings()
    locales_dir = Path(config.locales_dir)
    if not locales_dir.is_dir():
        raise ValueError(f"Locales directory not found: {locales_dir}")

    provider = YAMLResourceProvider(
        development_language=config.development_language,
        use_cache=config.loader_cache,
    )
    default_bundle = ResourceBundle(path=locales_dir)
    supported = resolve_supported_languages(config, provider, default_bundle)

    if storage is None:
        if config.preferences_file:
            storage = YAMLPreferenceStorage(Path(config.preferences_file))
        else:
            storage = InMemoryPreferenceStorage()

    preferences = PreferenceStore(
        supported_languages=supported,
        storage=storage,
        dispatcher=dispatcher,
        device_languages=device_languages,
        immediate_switch_enabled=config.in_app_switching,
    )
    bundle_resolver = BundleResolver(provider)
    localizer = Localizer(
        preferences=preferences,
        bundle_resolver=bundle_resolver,
        provider=provider,
        default_bundle=default_bundle,
        default_table=config.default_table,
    )

    logger.info(
        "localization_service_created",
        locales_dir=str(locales_dir),
        supported_languages=supported,
        in_app_switching=config.in_app_switching,
    )
    return LocalizationService(
        preferences=preferences,
        bundle_resolver=bundle_resolver,
        localizer=localizer,
        rtl_languages=config.rtl_languages,
    )
