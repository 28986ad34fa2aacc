import glob
import logging
import os
from pathlib import Path
from typing import Iterable, List

from .core import AnyPath
from .errors import DeletionError

logger = logging.getLogger(__name__)


def expand_input_patterns(patterns: Iterable[str]) -> List[Path]:
    """
    Resolve the command line input file arguments to a list of files. An argument that
    names an existing path is used as-is, otherwise it is expanded as a glob pattern.
    Patterns that do not match anything are skipped. A path is only returned once, at
    the position of its first match.

    :param patterns: list of file paths or glob patterns
    :returns: the list of matched input files
    """
    files: List[Path] = []
    seen = set()
    for pattern in patterns:
        if os.path.exists(pattern):
            matches = [pattern]
        else:
            matches = sorted(
                match for match in glob.glob(pattern) if os.path.exists(match)
            )
            if not matches:
                logger.warning("no files match input pattern: %s", pattern)

        for match in matches:
            if match not in seen:
                seen.add(match)
                files.append(Path(match))

    return files


def delete_files(paths: Iterable[AnyPath]) -> List[DeletionError]:
    """
    Delete input files after they have been combined. A file that cannot be removed is
    logged and the remaining files are still deleted.

    :param paths: files to delete
    :returns: the list of files that could not be deleted
    """
    errors = []
    for path in paths:
        logger.debug("deleting file %s", path)
        try:
            os.remove(path)
        except OSError as err:
            error = DeletionError(path, err.strerror or str(err))
            logger.error("%s", error)
            errors.append(error)

    return errors
