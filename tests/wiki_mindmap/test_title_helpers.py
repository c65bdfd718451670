import pytest

from wiki_mindmap.exceptions import InvalidTitleError
from wiki_mindmap.utils import has_digits, is_excluded_namespace, title_key, titles_match, validate_page_title


@pytest.mark.unit
class TestTitleHelpers:

    @pytest.mark.parametrize("title,expected", [
        ("Paris", False),
        ("Paris (film 2008)", True),
        ("123", True),
        ("Apollo 11", True),
    ])
    def test_has_digits(self, title, expected):
        assert has_digits(title) is expected

    def test_titles_match_ignores_case(self):
        assert titles_match("Machine learning", "machine Learning")
        assert not titles_match("Machine learning", "Machine")

    @pytest.mark.parametrize("title", [
        "Category:Physics", "Help:Editing", "Template:Cite web", "Portal:Science",
        "Wikipedia:About", "File:Logo.svg", "Talk:Physics", "Special:Random",
        "User:Example", "Module:Arguments", "MediaWiki:Common.css", "Disambiguation",
    ])
    def test_english_excluded_namespaces(self, title):
        assert is_excluded_namespace(title, "en")

    @pytest.mark.parametrize("title", ["Physics", "Star Wars: A New Hope", "Wikipedia", "Category theory"])
    def test_articles_are_not_excluded(self, title):
        assert not is_excluded_namespace(title, "en")

    def test_unknown_language_uses_english_table(self):
        assert is_excluded_namespace("Category:Physics", "xx")

    @pytest.mark.parametrize("title", ["", "   ", None, 42])
    def test_validate_rejects_blank_and_non_strings(self, title):
        with pytest.raises(InvalidTitleError):
            validate_page_title(title)

    def test_invalid_title_is_a_value_error(self):
        with pytest.raises(ValueError):
            validate_page_title("")

    @pytest.mark.parametrize("title,language", [
        ("User talk:Example", "en"),
        ("Template talk:Infobox", "en"),
        ("Wikipedia talk:Manual of Style", "en"),
        ("Meta:About", "en"),
        ("Discussion utilisateur:Exemple", "fr"),
        ("Discussion modèle:Palette", "fr"),
    ])
    def test_talk_and_meta_namespaces_excluded(self, title, language):
        assert is_excluded_namespace(title, language)

    def test_title_key_folds_case(self):
        assert title_key("Machine Learning") == title_key("machine learning")
