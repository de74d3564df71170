import sys
from loguru import logger


def setup_logging(level="INFO", show_time=True, sink=None):
    """Configure loguru for the coefficient database tools.

    Parameters
    ----------
    level : str
        Logging level (DEBUG, INFO, SUCCESS, WARNING, ERROR, CRITICAL)
    show_time : bool
        Whether to show timestamps in the output.
    sink : file-like, optional
        Destination of log records (stderr by default).
    """
    logger.remove()

    log_format = (
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
    )
    if show_time:
        log_format = "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | " + log_format

    logger.add(sink if sink is not None else sys.stderr,
               format=log_format, level=level.upper(), colorize=sink is None)

    return logger


def setup_logging_from_config(logging_config):
    """Apply a LoggingConfig section."""
    return setup_logging(level=logging_config.level, show_time=logging_config.show_time)
