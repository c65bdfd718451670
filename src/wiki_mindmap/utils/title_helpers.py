"""
Helper functions for validating and classifying Wikipedia article titles.
"""

import re
from typing import Dict, Tuple

from wiki_mindmap.exceptions import InvalidTitleError

_DIGIT_RE = re.compile(r"\d")

# Namespace prefixes of non-article pages, per language edition.
# The disambiguation marker page is matched exactly, see DISAMBIGUATION_PAGES.
EXCLUDED_NAMESPACES: Dict[str, Tuple[str, ...]] = {
    "en": (
        "Category:", "Help:", "Template:", "Portal:", "Wikipedia:", "WP:",
        "Meta:", "File:", "Image:", "Talk:", "Special:", "User:", "Module:",
        "MediaWiki:", "Draft:",
    ),
    "fr": (
        "Catégorie:", "Aide:", "Modèle:", "Portail:", "Projet:", "Wikipédia:",
        "Méta:", "Meta:", "Fichier:", "Discussion:", "Spécial:", "Utilisateur:",
        "Module:", "MediaWiki:", "Brouillon:",
    ),
}

# "User talk:", "Template talk:", "Discussion utilisateur:" and friends
TALK_NAMESPACE_PATTERNS: Dict[str, re.Pattern] = {
    "en": re.compile(r"^[^:]+ talk:"),
    "fr": re.compile(r"^Discussion [^:]+:"),
}

DISAMBIGUATION_PAGES: Dict[str, str] = {
    "en": "Disambiguation",
    "fr": "Homonymie",
}


def is_str(val) -> bool:
    """Returns whether or not the provided value is a string type."""
    return isinstance(val, str)


def validate_page_title(page_title: str):
    """Validates the provided value is a usable article title.

    Args:
      page_title: The page title to validate.

    Raises:
      InvalidTitleError: If the title is not a string or is blank.
    """
    if not is_str(page_title) or not page_title.strip():
        raise InvalidTitleError(
            f'Invalid page title "{page_title}" provided. Page title must be a non-empty string.'
        )


def has_digits(title: str) -> bool:
    """Titles with digits (years, numbered lists, films) are treated as noise."""
    return bool(_DIGIT_RE.search(title))


def title_key(title: str) -> str:
    """Key under which a title is remembered as visited."""
    return title.casefold()


def titles_match(a: str, b: str) -> bool:
    """Case-insensitive title equality."""
    return title_key(a) == title_key(b)


def is_excluded_namespace(title: str, language: str = "en") -> bool:
    """Returns True for category/help/template/... pages and the disambiguation marker.

    Unknown languages fall back to the English table.
    """
    prefixes = EXCLUDED_NAMESPACES.get(language, EXCLUDED_NAMESPACES["en"])
    if title.startswith(prefixes):
        return True
    if TALK_NAMESPACE_PATTERNS.get(language, TALK_NAMESPACE_PATTERNS["en"]).match(title):
        return True
    return title == DISAMBIGUATION_PAGES.get(language, DISAMBIGUATION_PAGES["en"])
