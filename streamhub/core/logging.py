"""Console logging for the StreamHub service.

Everything goes through one ``RichHandler`` on the root logger. Development
runs show the emitting module and local variables in tracebacks; production
keeps lines short and plain.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from .config import Settings

LOG_DATEFMT = "[%Y-%m-%d %H:%M:%S]"
CONSOLE_WIDTH = 120

# Third-party loggers and the level they are held at, keyed by app level
QUIET_LOGGERS: dict[str, tuple[int, int]] = {
    # name: (level when the app logs DEBUG, level otherwise)
    "httpx": (logging.INFO, logging.WARNING),
    "httpcore": (logging.INFO, logging.WARNING),
    "uvicorn.access": (logging.WARNING, logging.WARNING),
    "asyncio": (logging.WARNING, logging.ERROR),
}


def build_console_handler(settings: Settings) -> RichHandler:
    verbose = not settings.is_production
    handler = RichHandler(
        console=Console(force_terminal=verbose, width=CONSOLE_WIDTH),
        show_path=verbose,
        markup=verbose,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        tracebacks_width=CONSOLE_WIDTH,
        log_time_format=LOG_DATEFMT,
    )
    handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt=LOG_DATEFMT))
    return handler


def setup_logging(settings: Settings) -> None:
    """Route all logging through Rich at ``settings.log_level``."""
    level = getattr(logging, settings.log_level, logging.INFO)

    # force=True: uvicorn installs its own root handlers before the lifespan runs
    logging.basicConfig(level=level, handlers=[build_console_handler(settings)], force=True)

    for name, (debug_level, normal_level) in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(debug_level if level == logging.DEBUG else normal_level)

    logging.getLogger(__name__).info(
        f"Logging at {settings.log_level} ({settings.environment})"
    )
