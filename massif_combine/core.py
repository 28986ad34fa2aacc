import logging
import os
import sys
from typing import Union

#: Type for any acceptable path
AnyPath = Union[str, os.PathLike]

#: The root logger name for all massif_combine modules
LOGGER_NAME = "massif_combine"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"

logger = logging.getLogger(__name__)


def init_massif_combine() -> None:
    """
    Initialize the massif_combine module. This method initializes the logger and
    loads the configuration environment variables. It should be called once, before
    any files are merged, by the command line entry point.
    """
    # make sure environment variables are setup
    from . import env

    logging.basicConfig(format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT, level=logging.INFO)

    if env.MASSIF_COMBINE_DEBUG:
        enable_debug_mode()


def enable_debug_mode() -> None:
    """
    Run massif_combine with debug logging enabled.
    """
    from . import env

    logging.getLogger(LOGGER_NAME).setLevel(logging.DEBUG)
    os.environ[env.MASSIF_COMBINE_DEBUG_ENV] = "1"


def enable_verbose_output() -> None:
    """
    Split massif_combine log output by severity: per-file progress and deletion
    notices (debug and info) are written to stdout, while warnings and errors, such
    as unreadable or malformed inputs, are written to stderr. Records no longer
    propagate to the root logger, so nothing is printed twice.
    """
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    progress = logging.StreamHandler(sys.stdout)
    progress.addFilter(lambda record: record.levelno < logging.WARNING)
    diagnostics = logging.StreamHandler(sys.stderr)
    diagnostics.setLevel(logging.WARNING)

    package_logger = logging.getLogger(LOGGER_NAME)
    for handler in (progress, diagnostics):
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    package_logger.propagate = False
