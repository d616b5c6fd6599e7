from mentorhub.common.environment_constants import LOG_LEVEL
import logging
import os

_logger_initialized = False


def _setup_logger():
    """
    Configure the root handler once per process.

    The level comes from LOG_LEVEL (case-insensitive, INFO when unset or
    unknown). Records carry timestamp, level, logger name and message.
    """
    global _logger_initialized
    if _logger_initialized:
        return

    level_name = os.environ.get(LOG_LEVEL, "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )
    _logger_initialized = True


def get_logger(name="mentorhub"):
    """
    Return the named logger, configuring logging on first use.

    Services receive this logger through their constructor and prefix
    messages with `[ServiceName]`.
    """
    _setup_logger()
    return logging.getLogger(name)
