from .title_helpers import (
    has_digits,
    is_excluded_namespace,
    title_key,
    titles_match,
    validate_page_title,
)

__all__ = [
    "has_digits",
    "is_excluded_namespace",
    "title_key",
    "titles_match",
    "validate_page_title",
]
