"""Resource bundle resolution.

A resource provider knows which localizations a bundle contains and how to
read raw templates from them. The BundleResolver maps the active language to
the bundle to read from and falls back to the base bundle when the language
has no resources.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from infrastructure.i18n.loader import YAMLStringTableLoader
from infrastructure.i18n.models import AppLanguage, ResourceBundle
from infrastructure.logging import get_module_logger

logger = get_module_logger()


class ResourceProvider(ABC):
    """Access to localized resources independent of their packaging."""

    @abstractmethod
    def lookup(self, language: str, base: ResourceBundle) -> Optional[ResourceBundle]:
        """Find the bundle holding `language` resources within `base`.

        Returns:
            The language bundle, or None when `base` has no such localization.
        """

    @abstractmethod
    def fetch(
        self,
        bundle: ResourceBundle,
        table: str,
        key: str,
        default: str,
    ) -> str:
        """Read the raw template for `key`.

        Returns:
            The template, or `default` when the key is absent at every
            fallback level.
        """

    @abstractmethod
    def available_languages(self, base: ResourceBundle) -> List[str]:
        """List the localizations contained in `base`, `Base` excluded."""


class YAMLResourceProvider(ResourceProvider):
    """Resource provider backed by directories of YAML string tables.

    A bundle is a directory; its localizations are the languages of the
    `<table>.<language>.yml` files it holds. Templates are looked up in the
    bundle's language, then in `Base`, then in the development language.

    Attributes:
        development_language: Language the keys are written in.
        use_cache: Whether loaders cache parsed tables.
    """

    def __init__(self, development_language: str = AppLanguage.ENGLISH, use_cache: bool = True):
        self.development_language = development_language
        self.use_cache = use_cache
        self._loaders: Dict[Path, YAMLStringTableLoader] = {}

    def _loader_for(self, bundle: ResourceBundle) -> Optional[YAMLStringTableLoader]:
        path = Path(bundle.path)
        loader = self._loaders.get(path)
        if loader is None:
            if not path.is_dir():
                logger.warning("bundle_directory_missing", bundle=str(bundle))
                return None
            loader = YAMLStringTableLoader(path, use_cache=self.use_cache)
            self._loaders[path] = loader
        return loader

    def available_languages(self, base: ResourceBundle) -> List[str]:
        loader = self._loader_for(base)
        if loader is None:
            return []
        return [
            language
            for language in loader.available_languages()
            if language != AppLanguage.BASE
        ]

    def lookup(self, language: str, base: ResourceBundle) -> Optional[ResourceBundle]:
        if not language or language == AppLanguage.BASE:
            return None
        wanted = language.lower()
        for candidate in self.available_languages(base):
            if candidate.lower() == wanted:
                return base.for_language(candidate)
        return None

    def fetch(
        self,
        bundle: ResourceBundle,
        table: str,
        key: str,
        default: str,
    ) -> str:
        loader = self._loader_for(bundle)
        if loader is None:
            return default

        available = loader.available_languages()
        chain = [bundle.language, AppLanguage.BASE, self.development_language]
        searched = []
        for language in chain:
            if not language or language in searched or language not in available:
                continue
            searched.append(language)
            message = loader.load(language).get_message(table, key)
            if message is not None:
                return message

        logger.debug(
            "localized_string_not_found",
            key=key,
            table=table,
            bundle=str(bundle),
            searched=searched,
        )
        return default


class BundleResolver:
    """Maps a language to the resource bundle to read from.

    Results are cached per (base bundle, language) for the lifetime of the
    resolver. Concurrent misses may compute the same entry twice, which is
    harmless since the mapping is static.
    """

    def __init__(self, provider: ResourceProvider):
        self.provider = provider
        self._cache: Dict[Tuple[ResourceBundle, str], ResourceBundle] = {}

    def resolve(self, language: str, base: ResourceBundle) -> ResourceBundle:
        """Get the bundle for `language`, or `base` itself when there is none.

        Args:
            language: Language to resolve.
            base: Bundle to search and fall back to.

        Returns:
            A language bundle or `base`; never None.
        """
        cache_key = (base, language)
        cached = self._cache.get(cache_key)
        if cached is not None:
            return cached

        bundle = self.provider.lookup(language, base)
        if bundle is None:
            logger.debug("bundle_fallback", language=language, bundle=str(base))
            bundle = base

        self._cache[cache_key] = bundle
        return bundle

    def clear_cache(self) -> None:
        """Forget every resolved bundle."""
        self._cache.clear()
