import logging

from rich.console import Console
from rich.logging import RichHandler

# Library loggers and the level each is held at outside DEBUG
_QUIET_LOGGERS = {
    "twitchio.http": logging.WARNING,
    "twitchio.websockets": logging.WARNING,
    "httpx": logging.WARNING,
    "openai": logging.WARNING,
    "asyncio": logging.ERROR,
}


def setup_logging(log_level: str = "INFO") -> None:
    """Route every logger through a single RichHandler at the given level."""
    level = getattr(logging, log_level.upper(), logging.INFO)

    handler = RichHandler(
        console=Console(width=120),
        show_path=False,
        markup=True,
        rich_tracebacks=True,
        tracebacks_width=120,
    )
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%Y-%m-%d %H:%M:%S]",
        handlers=[handler],
        force=True,
    )

    if level == logging.DEBUG:
        logging.getLogger("twitchio").setLevel(logging.DEBUG)
        return

    logging.getLogger("twitchio").setLevel(logging.INFO)
    for name, quiet_level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)
