"""String table loading interface and implementations.

Defines the contract for loading localized string tables and provides the
YAML-based loader.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List

import yaml

from infrastructure.i18n.models import StringCatalog
from infrastructure.logging import get_module_logger

logger = get_module_logger()


class StringTableLoader(ABC):
    """Abstract base for string table loaders.

    Implementations define how the string tables of one localization are
    located and parsed.
    """

    @abstractmethod
    def load(self, language: str) -> StringCatalog:
        """Load every string table of a localization.

        Args:
            language: Localization to load, as returned by available_languages().

        Returns:
            StringCatalog with the loaded tables.

        Raises:
            FileNotFoundError: If no tables exist for the localization.
            ValueError: If a table cannot be parsed.
        """

    @abstractmethod
    def available_languages(self) -> List[str]:
        """List the localizations that have at least one string table."""


class YAMLStringTableLoader(StringTableLoader):
    """Loader for YAML string tables.

    Expects files named `<table>.<language>.yml` in the tables directory,
    each holding a flat mapping of key to template:

        # Localizable.en.yml
        "{0}在{1}去过{2}。": "{0} went to {2} on {1}."

    Attributes:
        tables_dir: Path to directory containing YAML files.
        cache: Loaded catalogs by language.
    """

    def __init__(
        self,
        tables_dir: Path,
        use_cache: bool = True,
    ):
        """Initialize YAML string table loader.

        Args:
            tables_dir: Directory with YAML string tables.
            use_cache: Whether to cache loaded catalogs in memory.

        Raises:
            ValueError: If the directory does not exist.
        """
        self.tables_dir = Path(tables_dir)
        self.use_cache = use_cache
        self.cache: Dict[str, StringCatalog] = {}

        if not self.tables_dir.is_dir():
            raise ValueError(f"String tables directory not found: {self.tables_dir}")

        logger.debug(
            "initialized_yaml_loader",
            tables_dir=str(self.tables_dir),
            use_cache=use_cache,
        )

    def _files_by_language(self) -> Dict[str, List[Path]]:
        files: Dict[str, List[Path]] = {}
        for yaml_file in sorted(self.tables_dir.glob("*.yml")):
            # "Localizable.zh-Hans.yml" -> table "Localizable", language "zh-Hans"
            parts = yaml_file.stem.rsplit(".", 1)
            if len(parts) != 2 or not parts[0] or not parts[1]:
                continue
            files.setdefault(parts[1], []).append(yaml_file)
        return files

    def available_languages(self) -> List[str]:
        return sorted(self._files_by_language())

    def load(self, language: str) -> StringCatalog:
        """Load the string tables of a localization from YAML files.

        Raises:
            FileNotFoundError: If no YAML files found for the language.
            ValueError: If YAML parsing fails.
        """
        if self.use_cache and language in self.cache:
            return self.cache[language]

        yaml_files = self._files_by_language().get(language)
        if not yaml_files:
            raise FileNotFoundError(
                f"No string tables found for language {language} in {self.tables_dir}"
            )

        catalog = StringCatalog(
            language=language,
            loaded_at=datetime.now(timezone.utc).isoformat(),
        )
        for yaml_file in yaml_files:
            table = yaml_file.stem.rsplit(".", 1)[0]
            try:
                with open(yaml_file, "r", encoding="utf-8") as f:
                    data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                logger.error("yaml_parse_error", file=str(yaml_file), error=str(e))
                raise ValueError(f"Failed to parse {yaml_file}: {e}") from e
            if data:
                self._merge_yaml_data(catalog, table, data, yaml_file)

        logger.info(
            "loaded_string_tables",
            language=language,
            file_count=len(yaml_files),
            table_count=len(catalog.tables),
        )

        if self.use_cache:
            self.cache[language] = catalog

        return catalog

    def _merge_yaml_data(
        self,
        catalog: StringCatalog,
        table: str,
        data: Dict,
        source_file: Path,
    ) -> None:
        """Merge one parsed table into the catalog.

        Non-string keys and values are converted with str(); nested mappings
        and null values are skipped.
        """
        if not isinstance(data, dict):
            logger.warning(
                "invalid_yaml_format", file=str(source_file), expected="dict"
            )
            return

        for key, message in data.items():
            if message is None or isinstance(message, (dict, list)):
                logger.warning(
                    "invalid_string_entry",
                    file=str(source_file),
                    key=str(key),
                )
                continue
            catalog.set_message(table, str(key), str(message))

    def clear_cache(self) -> None:
        """Clear all cached string tables."""
        self.cache.clear()
        logger.info("cleared_string_table_cache")
