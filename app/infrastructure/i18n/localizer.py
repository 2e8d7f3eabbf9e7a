"""Localized string lookup with positional arguments.

Templates may reference arguments by position, so a translation can reorder
them freely:

    localizer.localize("{0}在{1}去过{2}。", name, date, spot)

with the English table containing

    "{0}在{1}去过{2}。": "{0} went to {2} on {1}."
"""

from typing import Any, Optional

from infrastructure.i18n.bundles import BundleResolver, ResourceProvider
from infrastructure.i18n.models import BRACES, DelimiterPair, ResourceBundle
from infrastructure.i18n.preferences import PreferenceStore
from infrastructure.i18n.resolvers import PositionalResolver
from infrastructure.i18n.scanner import assemble, scan


class Localizer:
    """Fetches templates for the active language and fills in arguments.

    Attributes:
        preferences: Source of the active language.
        bundle_resolver: Maps the active language to a bundle.
        provider: Reads raw templates from bundles.
        default_bundle: Bundle used when callers pass none.
        default_table: Table used when callers pass none.
        delimiters: Placeholder delimiters.
    """

    def __init__(
        self,
        preferences: PreferenceStore,
        bundle_resolver: BundleResolver,
        provider: ResourceProvider,
        default_bundle: ResourceBundle,
        default_table: str = "Localizable",
        delimiters: DelimiterPair = BRACES,
    ):
        self.preferences = preferences
        self.bundle_resolver = bundle_resolver
        self.provider = provider
        self.default_bundle = default_bundle
        self.default_table = default_table
        self.delimiters = delimiters

    def localize(
        self,
        key: str,
        *args: Any,
        table: Optional[str] = None,
        bundle: Optional[ResourceBundle] = None,
        default: Optional[str] = None,
    ) -> str:
        """Get the localized string for `key` with arguments substituted.

        Args:
            key: String key, usually the development-language text.
            *args: Positional arguments for `{0}`, `{1}`, ... placeholders.
            table: String table (default: `default_table`).
            bundle: Base bundle to read from (default: `default_bundle`).
            default: Returned when the key is missing everywhere. When None
                or empty the key itself is used.

        Returns:
            The localized string. Without arguments the raw template is
            returned untouched.
        """
        base = bundle or self.default_bundle
        resolved = self.bundle_resolver.resolve(self.preferences.active, base)
        template = self.provider.fetch(
            resolved,
            table or self.default_table,
            key,
            default or key,
        )

        if not args:
            return template
        return assemble(scan(template, self.delimiters), PositionalResolver(args))
