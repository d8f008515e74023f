"""
Supported languages and their default page texts.

Locale strings from the environment or from ``--language`` are reduced to
their primary subtag and matched against a small supported set. Anything
that cannot be matched falls back to English; malformed input never raises.
"""

import locale
import logging
import os
import re
from dataclasses import dataclass
from typing import Mapping, Optional

SUPPORTED_LANGUAGES = ("de", "en", "fr")
DEFAULT_LANGUAGE = "en"


@dataclass(frozen=True)
class TextBundle:
    """Localized defaults for the text stamped onto pages.

    Field names match the corresponding configuration fields, so a bundle
    can be copied onto a configuration field by field.
    """

    chapter_prefix: str
    running_header: str
    page_number_prefix: str
    page_count_prefix: str
    blank_page_text: str


DEFAULT_TEXTS = {
    "de": TextBundle(
        chapter_prefix="Kapitel ",
        running_header="Seite",
        page_number_prefix="Seite ",
        page_count_prefix="von",
        blank_page_text="Diese Seite bleibt absichtlich leer",
    ),
    "en": TextBundle(
        chapter_prefix="Chapter ",
        running_header="Page",
        page_number_prefix="Page ",
        page_count_prefix="of",
        blank_page_text="deliberately left blank",
    ),
    "fr": TextBundle(
        chapter_prefix="Chapitre ",
        running_header="Page",
        page_number_prefix="Page ",
        page_count_prefix="sur",
        blank_page_text="Cette page est intentionnellement laissée vide",
    ),
}

# (name in the language itself, name in English)
LANGUAGE_NAMES = {
    "de": ("Deutsch", "German"),
    "en": ("English", "English"),
    "fr": ("Français", "French"),
}

# ISO 639-2 codes that map onto a supported two-letter code
_ALIASES = {
    "deu": "de",
    "ger": "de",
    "eng": "en",
    "fra": "fr",
    "fre": "fr",
}

_TAG_RE = re.compile(r"^[A-Za-z]{2,3}(?:[-_][A-Za-z0-9]{1,8})*$")

# gettext precedence; LANGUAGE may hold a colon-separated priority list
_LOCALE_VARIABLES = ("LANGUAGE", "LC_ALL", "LC_MESSAGES", "LANG")


def parse_language_tag(value: Optional[str]) -> Optional[str]:
    """Reduce a BCP 47 or POSIX locale string to its primary language subtag.

    ``"en-US"``, ``"de_DE.UTF-8"`` and ``"fr_FR@euro"`` give ``"en"``,
    ``"de"`` and ``"fr"``. Returns None for empty, malformed or neutral
    (``C``/``POSIX``) input.
    """
    if not value:
        return None
    tag = value.strip().split(".", 1)[0].split("@", 1)[0]
    if tag.upper() in ("C", "POSIX"):
        return None
    if not _TAG_RE.match(tag):
        return None
    return tag.replace("_", "-").split("-", 1)[0].lower()


def match_language(value: Optional[str]) -> Optional[str]:
    """Best-match ``value`` against the supported languages.

    Regional variants resolve to their base entry. Returns None when there is
    no confident match.
    """
    primary = parse_language_tag(value)
    if primary is None:
        return None
    if primary in SUPPORTED_LANGUAGES:
        return primary
    return _ALIASES.get(primary)


def resolve_language(value: Optional[str]) -> str:
    """Return the supported language for ``value``, falling back to English."""
    matched = match_language(value)
    if matched is None:
        logging.debug(f"Language {value!r} not supported, falling back to {DEFAULT_LANGUAGE}")
        return DEFAULT_LANGUAGE
    return matched


def is_supported(language: Optional[str]) -> bool:
    return language in SUPPORTED_LANGUAGES


def detect_system_language(environ: Optional[Mapping[str, str]] = None) -> str:
    """Detect the user's language from the locale environment.

    Args:
        environ: Mapping to read locale variables from. Defaults to
                 ``os.environ``.

    Returns:
        A supported language code. English when nothing matches.
    """
    env = os.environ if environ is None else environ
    for variable in _LOCALE_VARIABLES:
        raw = env.get(variable)
        if not raw:
            continue
        for candidate in raw.split(":"):
            matched = match_language(candidate)
            if matched is not None:
                logging.debug(f"Detected language {matched} from {variable}={raw}")
                return matched

    if environ is None:
        try:
            system_locale = locale.getlocale()[0]
        except ValueError:
            system_locale = None
        matched = match_language(system_locale)
        if matched is not None:
            logging.debug(f"Detected language {matched} from system locale {system_locale}")
            return matched

    logging.debug(f"Failed detecting system language, falling back to {DEFAULT_LANGUAGE}")
    return DEFAULT_LANGUAGE


def text_bundle(language: str) -> TextBundle:
    """Return the default texts for ``language`` (English if unsupported)."""
    return DEFAULT_TEXTS.get(language, DEFAULT_TEXTS[DEFAULT_LANGUAGE])


def list_languages() -> list[tuple[str, str, str]]:
    """Return ``(code, native name, English name)`` for every supported language."""
    return [(code, *LANGUAGE_NAMES[code]) for code in SUPPORTED_LANGUAGES]
