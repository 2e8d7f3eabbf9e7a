"""Tests for infrastructure.i18n.loader module."""

import pytest

from infrastructure.i18n import YAMLStringTableLoader
from tests.factories.i18n import write_string_table

pytestmark = pytest.mark.unit


class TestYAMLStringTableLoader:
    """Tests for YAMLStringTableLoader."""

    def test_loader_initialization(self, temp_locales_dir):
        """YAMLStringTableLoader initializes with valid directory."""
        loader = YAMLStringTableLoader(temp_locales_dir)
        assert loader.tables_dir == temp_locales_dir
        assert loader.use_cache is True
        assert loader.cache == {}

    def test_loader_initialization_nonexistent_directory(self, tmp_path):
        """YAMLStringTableLoader raises ValueError for missing directory."""
        with pytest.raises(ValueError):
            YAMLStringTableLoader(tmp_path / "nonexistent")

    def test_available_languages(self, temp_locales_dir):
        """available_languages() lists every language with a table."""
        loader = YAMLStringTableLoader(temp_locales_dir)
        assert loader.available_languages() == ["Base", "ar", "en", "zh-Hans"]

    def test_available_languages_ignores_unrelated_files(self, tmp_path):
        """Files without a language segment are not string tables."""
        (tmp_path / "README.yml").write_text("title: readme\n", encoding="utf-8")
        (tmp_path / "notes.txt").write_text("x", encoding="utf-8")
        write_string_table(tmp_path, "en", {"a": "b"})

        loader = YAMLStringTableLoader(tmp_path)
        assert loader.available_languages() == ["en"]

    def test_load_merges_tables(self, temp_locales_dir):
        """load() reads every table of a language into one catalog."""
        loader = YAMLStringTableLoader(temp_locales_dir)
        catalog = loader.load("zh-Hans")

        assert catalog.language == "zh-Hans"
        assert catalog.loaded_at is not None
        assert catalog.get_message("Localizable", "Language") == "语言"
        assert catalog.get_message("Errors", "Not found") == "未找到"

    def test_load_keeps_placeholders(self, temp_locales_dir):
        """load() returns templates exactly as written."""
        catalog = YAMLStringTableLoader(temp_locales_dir).load("zh-Hans")
        assert catalog.get_message("Localizable", "{0} went to {2} on {1}.") == (
            "{0}在{1}去过{2}。"
        )

    def test_load_missing_language_raises_error(self, temp_locales_dir):
        """load() raises FileNotFoundError for a language without tables."""
        loader = YAMLStringTableLoader(temp_locales_dir)
        with pytest.raises(FileNotFoundError):
            loader.load("fr")

    def test_load_caches_results(self, temp_locales_dir):
        """load() returns the cached catalog on repeated calls."""
        loader = YAMLStringTableLoader(temp_locales_dir, use_cache=True)
        first = loader.load("en")
        second = loader.load("en")

        assert first is second
        assert "en" in loader.cache

    def test_load_without_cache(self, temp_locales_dir):
        """load() re-reads files when caching is disabled."""
        loader = YAMLStringTableLoader(temp_locales_dir, use_cache=False)
        first = loader.load("en")
        second = loader.load("en")

        assert first is not second
        assert first.tables == second.tables
        assert loader.cache == {}

    def test_clear_cache(self, temp_locales_dir):
        loader = YAMLStringTableLoader(temp_locales_dir)
        loader.load("en")
        loader.clear_cache()
        assert loader.cache == {}

    def test_load_invalid_yaml_raises_error(self, tmp_path):
        """load() raises ValueError for unparseable YAML."""
        (tmp_path / "Localizable.en.yml").write_text(
            "key: [unclosed\n", encoding="utf-8"
        )
        loader = YAMLStringTableLoader(tmp_path)
        with pytest.raises(ValueError):
            loader.load("en")

    def test_load_skips_non_mapping_file(self, tmp_path):
        """A table that is not a mapping is ignored."""
        (tmp_path / "Localizable.en.yml").write_text("- a\n- b\n", encoding="utf-8")
        write_string_table(tmp_path, "en", {"k": "v"}, table="Other")

        catalog = YAMLStringTableLoader(tmp_path).load("en")
        assert "Localizable" not in catalog.tables
        assert catalog.get_message("Other", "k") == "v"

    def test_load_skips_invalid_entries(self, tmp_path):
        """Null and nested values are skipped, scalars are stringified."""
        (tmp_path / "Localizable.en.yml").write_text(
            "empty:\nnested:\n  a: b\ncount: 3\nok: fine\n",
            encoding="utf-8",
        )
        catalog = YAMLStringTableLoader(tmp_path).load("en")

        assert catalog.get_message("Localizable", "ok") == "fine"
        assert catalog.get_message("Localizable", "count") == "3"
        assert catalog.get_message("Localizable", "empty") is None
        assert catalog.get_message("Localizable", "nested") is None

    def test_dotted_table_names(self, tmp_path):
        """Only the last dot separates the language from the table."""
        write_string_table(tmp_path, "en", {"k": "v"}, table="errors.auth")
        catalog = YAMLStringTableLoader(tmp_path).load("en")
        assert catalog.get_message("errors.auth", "k") == "v"
