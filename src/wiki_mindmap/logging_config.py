"""
Logging setup shared by the CLI, the API server and ad-hoc scripts.
"""

import logging
import sys
from rich.logging import RichHandler
from rich.console import Console

NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


def setup_logging(level: str = "INFO", use_rich: bool = True) -> None:
    """
    Configure the root logger for wiki_mindmap.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
        use_rich: Colored Rich output for terminals; plain lines otherwise
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Drop handlers from earlier calls so repeated setup doesn't duplicate lines
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if use_rich:
        handler = RichHandler(
            console=Console(file=sys.stderr),
            level=numeric_level,
            show_time=True,
            show_level=True,
            show_path=True,
            rich_tracebacks=True,
            markup=False,  # page titles may contain [brackets]
            log_time_format="[%H:%M:%S]",
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(
            "[%(asctime)s] %(levelname)-5s %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        ))

    handler.setLevel(numeric_level)
    root_logger.addHandler(handler)

    # The link fetcher issues one request per page; keep httpx quiet
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).debug(f"Logging configured: level={level}, rich={use_rich}")
