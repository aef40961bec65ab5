# MIT License (see LICENSE)
"""
Logging setup for the shared `rope_sim` logger.

Library modules log through logging.getLogger("rope_sim") and never attach
handlers themselves; applications (examples, benchmarks, a GUI front end)
call setup_logging once at start-up.
"""
from __future__ import annotations
import logging

LOGGER_NAME = "rope_sim"


def setup_logging(
    log_file: str | None = None,
    *,
    quiet: bool = False,
    debug: bool = False,
) -> logging.Logger:
    """
    Configure and return the shared `rope_sim` logger.

    Args:
        log_file: Optional path; when given, records are also written there
                  (truncated on open).
        quiet: Suppress console output.
        debug: Log at DEBUG instead of INFO.

    Calling this again replaces the handlers installed by the previous call.
    """
    logger = logging.getLogger(LOGGER_NAME)
    # Propagation stays on so pytest's caplog sees records.
    logger.propagate = True

    level = logging.DEBUG if debug else logging.INFO
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="w")
        except OSError as exc:
            logger.warning("Could not open log file '%s': %s", log_file, exc)
        else:
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger
