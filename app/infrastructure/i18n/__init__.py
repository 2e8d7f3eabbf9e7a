"""i18n system - localized templates and application language selection.

Renders localized templates with positional placeholders and manages which
language's resources are active, optionally switching at runtime.

Main components:
- models: AppLanguage, DelimiterPair, segments, LanguagePreference, ResourceBundle
- scanner: scan/assemble/render placeholder engine
- resolvers: positional, table and function placeholder strategies
- negotiation: language matching, device languages and writing direction
- loader: YAML string tables
- bundles: ResourceProvider and BundleResolver
- preferences: PreferenceStore and its storage backends
- localizer: Localizer facade
- service: LocalizationService public surface
"""

from infrastructure.i18n.bundles import (
    BundleResolver,
    ResourceProvider,
    YAMLResourceProvider,
)
from infrastructure.i18n.factory import create_localization_service
from infrastructure.i18n.loader import StringTableLoader, YAMLStringTableLoader
from infrastructure.i18n.localizer import Localizer
from infrastructure.i18n.models import (
    BRACES,
    AppLanguage,
    DelimiterPair,
    LanguageDirection,
    LanguagePreference,
    Literal,
    Placeholder,
    PreferenceState,
    ResourceBundle,
    StringCatalog,
)
from infrastructure.i18n.negotiation import (
    LanguageNegotiator,
    detect_device_languages,
    language_direction,
    normalize_language_tag,
)
from infrastructure.i18n.preferences import (
    PREFERENCES_CHANGED_EVENT,
    InMemoryPreferenceStorage,
    PreferenceStorage,
    PreferenceStore,
    YAMLPreferenceStorage,
)
from infrastructure.i18n.resolvers import (
    FunctionResolver,
    PlaceholderResolver,
    PositionalResolver,
    TableResolver,
    as_resolver,
)
from infrastructure.i18n.scanner import assemble, render, scan
from infrastructure.i18n.service import LocalizationService

__all__ = [
    "AppLanguage",
    "BRACES",
    "BundleResolver",
    "DelimiterPair",
    "FunctionResolver",
    "InMemoryPreferenceStorage",
    "LanguageDirection",
    "LanguageNegotiator",
    "LanguagePreference",
    "Literal",
    "LocalizationService",
    "Localizer",
    "PREFERENCES_CHANGED_EVENT",
    "Placeholder",
    "PlaceholderResolver",
    "PositionalResolver",
    "PreferenceState",
    "PreferenceStorage",
    "PreferenceStore",
    "ResourceBundle",
    "ResourceProvider",
    "StringCatalog",
    "StringTableLoader",
    "TableResolver",
    "YAMLPreferenceStorage",
    "YAMLResourceProvider",
    "YAMLStringTableLoader",
    "as_resolver",
    "assemble",
    "create_localization_service",
    "detect_device_languages",
    "language_direction",
    "normalize_language_tag",
    "render",
    "scan",
]
