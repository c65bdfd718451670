import asyncio
import logging
from typing import Optional

import typer

from wiki_mindmap.config import SearchConfig
from wiki_mindmap.logging_config import setup_logging
from wiki_mindmap.models import SearchMode, SearchRequest, SearchResponse, SearchSide
from wiki_mindmap.search.service import PathSearchService

app = typer.Typer()


@app.command()
def main(
    start: str = typer.Argument(..., help="Title of the starting article."),
    target: str = typer.Argument(..., help="Title of the target article."),
    max_depth: Optional[int] = typer.Option(
        None, "--max-depth", "-d", help="Levels each side may expand (default from config)."
    ),
    max_links: Optional[int] = typer.Option(
        None, "--max-links", "-l", help="Links kept per article (default from config)."
    ),
    mode: SearchMode = typer.Option(
        SearchMode.BIDIRECTIONAL, "--mode", "-m", help="Search algorithm."
    ),
    language: Optional[str] = typer.Option(
        None, "--language", help="Wikipedia language edition, e.g. 'en' or 'fr'."
    ),
    log_level: str = typer.Option("INFO", "--log-level", help="DEBUG shows every visited node."),
):
    """
    Find a chain of links between two Wikipedia articles.
    """
    setup_logging(level=log_level)
    config = SearchConfig.from_env()
    if language:
        config = config.model_copy(update={"language": language})

    try:
        request = SearchRequest(
            start_page=start,
            target_page=target,
            max_depth=max_depth,
            max_links_per_node=max_links,
            mode=mode,
        )
        response = asyncio.run(run_search_async(request, config))
    except ValueError as e:
        typer.echo(f"Invalid search: {e}", err=True)
        raise typer.Exit(code=2)

    print_response(response)
    if not response.found:
        raise typer.Exit(code=1)


async def run_search_async(request: SearchRequest, config: SearchConfig) -> SearchResponse:
    logger = logging.getLogger(__name__)

    def log_progress(node: str, depth: int, side: SearchSide):
        logger.debug(f"[{side.value}] depth {depth}: {node}")

    service = PathSearchService(config)
    return await service.find_path(request, on_progress=log_progress)


def print_response(response: SearchResponse):
    seconds = response.computation_time_ms / 1000
    if not response.found:
        typer.echo(f"No path found from '{response.start_page}' to '{response.target_page}' after {seconds:.2f}s")
        typer.echo(f"Visited {response.nodes_visited} articles; try a larger --max-depth or --max-links.")
        return

    typer.echo(f"Path found in {seconds:.2f}s ({response.path_length} hops):")
    for i, page in enumerate(response.path):
        typer.echo(f"  {i}. {page}")


if __name__ == "__main__":
    app()
