"""Logging setup for the API process."""

import logging


def setup_logging(level: str = "INFO", debug: bool = False) -> None:
    """
    Configure logging based on the configured level and debug flag.

    debug forces DEBUG regardless of level. basicConfig only installs a
    handler once, so repeated calls just adjust levels.
    """
    numeric_level = logging.DEBUG if debug else logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    logging.getLogger().setLevel(numeric_level)

    # Reduce noise from access logs (unless debug)
    if not debug:
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
