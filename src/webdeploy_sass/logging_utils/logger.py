from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_RICH_HANDLER: RichHandler | None = None


def configure_logging(level: int = logging.INFO) -> None:
    global _RICH_HANDLER
    if _RICH_HANDLER is None:
        console = Console(stderr=True)
        handler = RichHandler(
            console=console, show_time=False, show_path=False, rich_tracebacks=True
        )
        handler.setLevel(level)
        package_logger = logging.getLogger("webdeploy_sass")
        package_logger.addHandler(handler)
        package_logger.setLevel(level)
        _RICH_HANDLER = handler
    else:
        logging.getLogger("webdeploy_sass").setLevel(level)
        _RICH_HANDLER.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(name)
