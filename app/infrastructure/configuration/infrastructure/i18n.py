"""Localization infrastructure settings."""

import json
from pathlib import Path
from typing import Annotated, Any, List

from pydantic import Field, field_validator
from pydantic_settings import NoDecode

from infrastructure.configuration.base import InfrastructureSettings

# app/infrastructure/configuration/infrastructure/i18n.py -> app/locales
DEFAULT_LOCALES_DIR = Path(__file__).resolve().parents[3] / "locales"


class I18nSettings(InfrastructureSettings):
    """Localization configuration.

    Environment Variables:
        I18N_LOCALES_DIR: Directory holding `<table>.<language>.yml` string tables
        I18N_DEFAULT_TABLE: Table used when callers omit one (default: Localizable)
        I18N_DEVELOPMENT_LANGUAGE: Language the keys are written in (default: en)
        I18N_SUPPORTED_LANGUAGES: Ordered list of declared languages. Empty means
            discover them from the string tables.
        I18N_IN_APP_SWITCHING: Apply language changes without a restart
            (default: False)
        I18N_PREFERENCES_FILE: YAML file persisting the chosen language. Empty
            keeps the preference in memory only.
        I18N_RTL_LANGUAGES: Extra language subtags written right-to-left
        I18N_LOADER_CACHE: Cache parsed string tables in memory (default: True)

    List values accept either a JSON list or a comma-separated string.

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        if settings.i18n.in_app_switching:
            ...
        ```
    """

    locales_dir: Path = Field(
        default=DEFAULT_LOCALES_DIR,
        alias="I18N_LOCALES_DIR",
        description="Directory containing YAML string tables",
    )
    default_table: str = Field(
        default="Localizable",
        alias="I18N_DEFAULT_TABLE",
        description="String table used when no table is given",
    )
    development_language: str = Field(
        default="en",
        alias="I18N_DEVELOPMENT_LANGUAGE",
        description="Language of the source strings, last lookup fallback",
    )
    supported_languages: Annotated[List[str], NoDecode] = Field(
        default_factory=list,
        alias="I18N_SUPPORTED_LANGUAGES",
        description="Declared languages in preference order",
    )
    in_app_switching: bool = Field(
        default=False,
        alias="I18N_IN_APP_SWITCHING",
        description="Apply preferred language changes immediately",
    )
    preferences_file: str = Field(
        default="",
        alias="I18N_PREFERENCES_FILE",
        description="YAML file used to persist the preferred language",
    )
    rtl_languages: Annotated[List[str], NoDecode] = Field(
        default_factory=list,
        alias="I18N_RTL_LANGUAGES",
        description="Additional right-to-left language subtags",
    )
    loader_cache: bool = Field(
        default=True,
        alias="I18N_LOADER_CACHE",
        description="Cache parsed YAML string tables",
    )

    @field_validator("supported_languages", "rtl_languages", mode="before")
    @classmethod
    def _parse_language_list(cls, v: Any) -> Any:
        """Accept a JSON list, a comma-separated string or a native list."""
        if v is None:
            return []
        if isinstance(v, (list, tuple)):
            return [str(item).strip() for item in v if str(item).strip()]
        if isinstance(v, str):
            s = v.strip()
            if not s:
                return []
            if s.startswith("["):
                try:
                    parsed = json.loads(s)
                except json.JSONDecodeError as e:
                    raise ValueError(f"Invalid language list JSON: {e}") from e
                return cls._parse_language_list(parsed)
            return [part.strip() for part in s.split(",") if part.strip()]
        raise ValueError("Language list must be a JSON list or comma-separated string")
