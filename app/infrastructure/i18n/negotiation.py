"""Language tag negotiation.

Provides the strategies the preference store uses to match device languages
against the languages an application declares, together with writing
direction lookup and device language detection.
"""

import locale
import os
import re
from typing import Iterable, List, Mapping, Optional

from infrastructure.i18n.models import AppLanguage, LanguageDirection
from infrastructure.logging import get_module_logger

logger = get_module_logger()

_SUBTAG_PATTERN = re.compile(r"[A-Za-z0-9]{1,8}")

# Chinese regions imply a script when none is given
_CHINESE_REGION_SCRIPTS = {
    "CN": "Hans",
    "SG": "Hans",
    "TW": "Hant",
    "HK": "Hant",
    "MO": "Hant",
}

RTL_LANGUAGES = frozenset(
    {
        "ar",
        "arc",
        "ckb",
        "dv",
        "fa",
        "glk",
        "he",
        "iw",
        "ks",
        "lrc",
        "mzn",
        "nqo",
        "ps",
        "sd",
        "syr",
        "ug",
        "ur",
        "yi",
    }
)

RTL_SCRIPTS = frozenset(
    {"adlm", "arab", "hebr", "mand", "mend", "nkoo", "rohg", "samr", "syrc", "thaa"}
)

# Environment variables consulted for device languages, in priority order
LOCALE_ENV_VARS = ("LC_ALL", "LC_MESSAGES", "LANG")


def normalize_language_tag(tag: Optional[str]) -> str:
    """Normalize a POSIX locale or BCP 47 tag.

    Encoding and modifier suffixes are dropped, underscores become hyphens
    and subtags get their conventional case ("zh_cn.UTF-8" -> "zh-CN",
    "zh-hans" -> "zh-Hans").

    Args:
        tag: Raw language tag.

    Returns:
        The normalized tag, or "" for empty, "C", "POSIX" or malformed tags.
    """
    if not tag:
        return ""
    tag = tag.strip().split(".", 1)[0].split("@", 1)[0].replace("_", "-")
    if not tag or tag.upper() in ("C", "POSIX"):
        return ""
    if tag == AppLanguage.BASE:
        return tag

    subtags = tag.split("-")
    if not all(_SUBTAG_PATTERN.fullmatch(subtag) for subtag in subtags):
        return ""
    if not subtags[0].isalpha():
        return ""

    normalized = [subtags[0].lower()]
    for subtag in subtags[1:]:
        if len(subtag) == 4 and subtag.isalpha():
            normalized.append(subtag.title())
        elif len(subtag) == 2 and subtag.isalpha():
            normalized.append(subtag.upper())
        else:
            normalized.append(subtag.lower())
    return "-".join(normalized)


def _with_implied_script(tag: str) -> str:
    """Insert the script implied by a Chinese region ("zh-TW" -> "zh-Hant-TW")."""
    subtags = tag.split("-")
    if subtags[0] != "zh" or len(subtags) < 2:
        return tag
    if len(subtags[1]) == 4:
        return tag
    script = _CHINESE_REGION_SCRIPTS.get(subtags[1])
    if script is None:
        return tag
    return "-".join([subtags[0], script] + subtags[1:])


class LanguageNegotiator:
    """Matches requested language tags against available ones.

    Matching is case-insensitive and tries, in order: the longest prefix of
    the requested tag that is available ("zh-Hans-CN" -> "zh-Hans",
    "en-GB" -> "en"), then any available tag sharing the language subtag
    ("en" -> "en-US").
    """

    @staticmethod
    def matches_language(
        requested: str,
        available: str,
        strict: bool = False,
    ) -> bool:
        """Check if available language matches requested language.

        Args:
            requested: Requested language tag (e.g., "en-US").
            available: Available language tag (e.g., "en").
            strict: If True, requires exact match. If False, allows language-only match.

        Returns:
            True if languages match.
        """
        if requested.lower() == available.lower():
            return True

        if strict:
            return False

        requested_lang = requested.split("-")[0].lower()
        available_lang = available.split("-")[0].lower()
        return requested_lang == available_lang

    @staticmethod
    def match(requested: str, available: Iterable[str]) -> Optional[str]:
        """Find the available tag best matching one requested tag.

        Args:
            requested: Requested language tag.
            available: Candidate tags.

        Returns:
            The matching tag as spelled in `available`, or None.
        """
        tag = _with_implied_script(normalize_language_tag(requested))
        if not tag:
            return None

        candidates = list(available)
        lookup = {candidate.lower(): candidate for candidate in candidates}

        subtags = tag.split("-")
        while subtags:
            candidate = "-".join(subtags).lower()
            if candidate in lookup:
                return lookup[candidate]
            subtags.pop()

        for candidate in candidates:
            if LanguageNegotiator.matches_language(tag, candidate, strict=False):
                return candidate
        return None

    @staticmethod
    def find_best_match(
        requested: Iterable[str],
        available: Iterable[str],
        default: Optional[str] = None,
    ) -> Optional[str]:
        """Find best matching language from available options.

        Args:
            requested: Requested language tags in preference order.
            available: Available language tags.
            default: Default if no match found.

        Returns:
            Best matching language from available, or default if no match.
        """
        candidates = list(available)
        for req_lang in requested:
            matched = LanguageNegotiator.match(req_lang, candidates)
            if matched is not None:
                return matched
        return default


def detect_device_languages(environ: Optional[Mapping[str, str]] = None) -> List[str]:
    """Read the device's ordered language preferences.

    Consults `LANGUAGE` (colon-separated list), then `LC_ALL`, `LC_MESSAGES`
    and `LANG`, then the process locale.

    Args:
        environ: Environment mapping (default: os.environ).

    Returns:
        Normalized, de-duplicated tags in preference order. May be empty.
    """
    environ = os.environ if environ is None else environ

    raw: List[str] = []
    raw.extend(environ.get("LANGUAGE", "").split(":"))
    raw.extend(environ.get(name, "") for name in LOCALE_ENV_VARS)
    if not any(raw):
        try:
            raw.append(locale.getlocale()[0] or "")
        except ValueError:
            logger.warning("unreadable_process_locale")

    languages: List[str] = []
    for value in raw:
        tag = normalize_language_tag(value)
        if tag and tag not in languages:
            languages.append(tag)
    return languages


def language_direction(
    language: Optional[str],
    rtl_languages: Iterable[str] = (),
) -> LanguageDirection:
    """Get the writing direction of a language.

    A script subtag decides first ("az-Arab" is right-to-left, "ku-Latn" is
    left-to-right); otherwise the language subtag is looked up among the
    known right-to-left languages plus `rtl_languages`.

    Args:
        language: Language tag.
        rtl_languages: Extra language subtags declared right-to-left.

    Returns:
        The direction, or UNKNOWN for empty or malformed tags. Well-formed
        tags absent from the right-to-left tables are LEFT_TO_RIGHT.
    """
    tag = normalize_language_tag(language)
    if not tag or tag == AppLanguage.BASE:
        return LanguageDirection.UNKNOWN

    subtags = tag.split("-")
    for subtag in subtags[1:]:
        if len(subtag) == 4 and subtag.isalpha():
            if subtag.lower() in RTL_SCRIPTS:
                return LanguageDirection.RIGHT_TO_LEFT
            return LanguageDirection.LEFT_TO_RIGHT

    extra = {normalize_language_tag(lang).split("-")[0] for lang in rtl_languages}
    if subtags[0] in RTL_LANGUAGES or subtags[0] in extra:
        return LanguageDirection.RIGHT_TO_LEFT
    return LanguageDirection.LEFT_TO_RIGHT
