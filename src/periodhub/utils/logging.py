"""Logging setup shared by the web app and the CLI."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "INFO", console: Optional[Console] = None) -> None:
    """
    Configure the root logger.

    With a rich console the records go through RichHandler so they
    interleave cleanly with CLI output; otherwise plain stream logging.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    if console is not None:
        logging.basicConfig(
            level=numeric_level,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(console=console, show_path=False)],
            force=True,
        )
    else:
        logging.basicConfig(
            level=numeric_level,
            format=LOG_FORMAT,
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("httpx").setLevel(logging.WARNING)
