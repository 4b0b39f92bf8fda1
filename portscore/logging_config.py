"""Root logger configuration for the portscore CLI.

Library modules only create loggers; handlers are attached once here,
writing to stderr so JSON/YAML output on stdout stays parseable.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S"

_configured = False


def setup_logging(level: str = "WARNING", plain: bool = False) -> None:
    """Configure the root logger. Idempotent; later calls only change the level."""
    global _configured
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    if _configured:
        logging.getLogger().setLevel(numeric_level)
        return
    _configured = True

    handler = RichHandler(
        console=Console(stderr=True, no_color=plain),
        show_path=False,
        rich_tracebacks=False,
        log_time_format=LOG_DATEFMT,
    )
    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        handlers=[handler],
    )
