import logging
import sys

LOGGER_NAME = "ecsig"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _make_handler(level):
    # stderr, so that signatures printed on stdout stay pipeable
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return console_handler


def setup_logger():
    """
    Configure and return the package logger.

    Returns:
        A configured logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)

    # change the log level no matter if it has been set up or not based on verbosity
    level = logging.DEBUG if verbose_mode else logging.INFO
    logger.setLevel(level)

    # Only configure handlers if they haven't been set up already
    if not logger.handlers:
        logger.addHandler(_make_handler(level))
    elif logger.handlers[0].level != level:
        # replace the handler installed with the previous verbosity
        logger.removeHandler(logger.handlers[0])
        logger.addHandler(_make_handler(level))

    return logger


# Global verbose flag that can be set by the main application
verbose_mode = False


def set_verbose_mode(verbose):
    """Set the global verbose mode flag."""
    global verbose_mode
    verbose_mode = verbose


def get_logger():
    """
    Get a logger configured with the application's global verbose setting.

    Returns:
        A configured logger instance
    """
    return setup_logger()
