"""Rich-handler logging preset, optionally mirrored to a log file."""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional
from rich.logging import RichHandler
from .app_config import settings

FORMAT = "%(asctime)s │ %(name)-24s │ %(levelname)-8s │ %(message)s"

def configure(verbose: bool = False, log_file: Optional[Path] = None):
    level = logging.DEBUG if verbose else getattr(logging, settings.LOG_LEVEL)
    handlers: list[logging.Handler] = [RichHandler(rich_tracebacks=True, markup=False)]
    if log_file:
        log_file.parent.mkdir(mode=0o755, parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(logging.Formatter(FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(file_handler)
    logging.basicConfig(
        level=level,
        format="%(name)-24s │ %(message)s",
        datefmt="%H:%M:%S",
        handlers=handlers,
        force=True,
    )
    logging.getLogger(__name__).info("starting")
