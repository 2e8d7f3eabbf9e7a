"""Test data factories for deterministic test data generation."""

from tests.factories.i18n import (
    make_language_preference,
    make_preference_store,
    make_string_catalog,
    write_string_table,
)

__all__ = [
    "make_language_preference",
    "make_preference_store",
    "make_string_catalog",
    "write_string_table",
]
