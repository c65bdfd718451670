import pytest

from wiki_mindmap import SearchConfig


@pytest.mark.unit
class TestSearchConfig:

    def test_defaults(self):
        config = SearchConfig()
        assert config.base_url == "https://en.wikipedia.org/w/api.php"
        assert config.max_depth == 6
        assert config.max_links_per_node == 100
        assert config.shuffle_links is True

    def test_language_changes_endpoint(self):
        assert SearchConfig(language="fr").base_url == "https://fr.wikipedia.org/w/api.php"

    def test_api_url_override(self):
        assert SearchConfig(api_url="http://localhost:8080/api.php").base_url == "http://localhost:8080/api.php"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("WIKI_MINDMAP_LANGUAGE", "fr")
        monkeypatch.setenv("WIKI_MINDMAP_MAX_DEPTH", "3")
        monkeypatch.setenv("WIKI_MINDMAP_PAGE_DELAY", "0")
        monkeypatch.setenv("WIKI_MINDMAP_SHUFFLE_LINKS", "false")

        config = SearchConfig.from_env()

        assert config.language == "fr"
        assert config.max_depth == 3
        assert config.page_delay_seconds == 0
        assert config.shuffle_links is False

    def test_negative_delays_rejected(self):
        with pytest.raises(ValueError):
            SearchConfig(page_delay_seconds=-1)
