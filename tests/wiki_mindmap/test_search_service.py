import pytest

from wiki_mindmap import PathSearchService
from wiki_mindmap.models import SearchMode, SearchRequest


@pytest.fixture
def service_for(fast_config):
    def build(fetcher):
        return PathSearchService(fast_config, fetcher_factory=lambda config: fetcher)
    return build


@pytest.mark.unit
class TestPathSearchService:

    @pytest.mark.asyncio
    async def test_bidirectional_response(self, service_for, diamond_fetcher):
        service = service_for(diamond_fetcher)
        response = await service.find_path(SearchRequest(start_page="A", target_page="Target", max_depth=3))

        assert response.found is True
        assert response.path == ["A", "B", "D", "Target"]
        assert response.path_length == 3
        assert response.mode == SearchMode.BIDIRECTIONAL
        assert response.computation_time_ms >= 0
        assert response.nodes_visited > 0
        assert response.metadata["meeting_node"] == "Target"
        assert response.metadata["max_depth"] == 3

    @pytest.mark.asyncio
    async def test_best_first_mode(self, service_for, diamond_fetcher):
        service = service_for(diamond_fetcher)
        request = SearchRequest(start_page="D", target_page="Target", mode=SearchMode.BEST_FIRST)

        response = await service.find_path(request)

        assert response.path == ["D", "Target"]
        assert response.mode == SearchMode.BEST_FIRST

    @pytest.mark.asyncio
    async def test_not_found(self, service_for, disconnected_fetcher):
        service = service_for(disconnected_fetcher)
        response = await service.find_path(SearchRequest(start_page="A", target_page="X", max_depth=2))

        assert response.found is False
        assert response.path is None
        assert response.path_length == -1

    @pytest.mark.asyncio
    async def test_config_defaults_apply(self, service_for, diamond_fetcher, fast_config):
        service = service_for(diamond_fetcher)
        response = await service.find_path(SearchRequest(start_page="A", target_page="Target"))

        assert response.metadata["max_depth"] == fast_config.max_depth
        assert response.metadata["max_links_per_node"] == fast_config.max_links_per_node

    def test_request_validation(self):
        with pytest.raises(ValueError):
            SearchRequest(start_page="", target_page="Target")
        with pytest.raises(ValueError):
            SearchRequest(start_page="A", target_page="Target", max_depth=0)
