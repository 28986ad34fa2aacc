import logging
from contextlib import suppress
from pathlib import Path
from typing import Iterable, List, Optional, TextIO

from .core import AnyPath
from .errors import (
    CloseError,
    EmptyOutputError,
    FileOpenError,
    MalformedInputError,
    MassifCombineError,
    WriteError,
)
from .parser import SNAPSHOT_MARK, ParseResult, Snapshot, parse_massif_file

logger = logging.getLogger(__name__)


class MassifFile:
    """
    Combines the snapshots of multiple massif output files, recorded for the same
    process, into a single massif file.

    Headers are taken from the first file that has any. Snapshots from all files are
    collected and, when written, sorted by time and renumbered starting at ``0``.

    :param paths: massif files to add
    """

    def __init__(self, paths: Optional[Iterable[AnyPath]] = None):
        self.headers: List[str] = []
        self.snapshots: List[Snapshot] = []
        if paths:
            self.add_files(paths)

    def add(self, path: AnyPath) -> int:
        """
        Add a massif file. The file's headers are only kept if no headers have been
        added yet.

        :param path: path to massif file
        :returns: the number of snapshots the file contributed
        :raises FileOpenError: the file could not be opened
        :raises MalformedInputError: the file is malformed; the headers and snapshots
            parsed before the error are still added
        """
        try:
            result = parse_massif_file(path, capture_headers=not self.headers)
        except MalformedInputError as err:
            if err.result is not None:
                self._append(err.result)
            raise

        return self._append(result)

    def add_files(self, paths: Iterable[AnyPath]) -> List[Path]:
        """
        Add multiple massif files. Files that fail to load are logged and skipped.

        :param paths: paths to massif files
        :returns: the paths that were added without error
        """
        added = []
        for path in paths:
            try:
                self.add(path)
            except MassifCombineError as err:
                logger.error("failed to add massif file: %s", err)
            else:
                added.append(Path(path))

            logger.debug("input: %s; snapshots: %d", path, len(self.snapshots))

        return added

    def write(self, path: AnyPath) -> None:
        """
        Write the combined headers and snapshots to a new massif file. Snapshots are
        sorted by time, with ties kept in the order they were added.

        :param path: new massif file path
        :raises EmptyOutputError: there are no headers and no snapshots
        :raises FileOpenError: the file could not be opened for writing
        :raises WriteError: writing to the file failed
        :raises CloseError: flushing or closing the file failed
        """
        if not self.headers and not self.snapshots:
            raise EmptyOutputError()

        self.snapshots.sort(key=lambda snapshot: snapshot.time)

        try:
            file = open(path, "w", encoding="utf-8", errors="surrogateescape")
        except OSError as err:
            raise FileOpenError(path, err.strerror or str(err)) from err

        logger.debug(
            "writing %d headers and %d snapshots to %s",
            len(self.headers),
            len(self.snapshots),
            path,
        )
        try:
            _write_lines(file, self.headers)
            for index, snapshot in enumerate(self.snapshots):
                _write_snapshot(file, index, snapshot)
        except OSError as err:
            with suppress(OSError):
                file.close()
            raise WriteError(path, err.strerror or str(err)) from err

        try:
            file.close()
        except OSError as err:
            raise CloseError(path, err.strerror or str(err)) from err

    def _append(self, result: ParseResult) -> int:
        self.headers.extend(result.headers)
        self.snapshots.extend(result.snapshots)
        return len(result.snapshots)


def _write_lines(file: TextIO, lines: Iterable[str]) -> None:
    for line in lines:
        file.write(f"{line}\n")


def _write_snapshot(file: TextIO, index: int, snapshot: Snapshot) -> None:
    """
    Write the snapshot marker block, with the new snapshot index, and the snapshot
    contents.
    """
    _write_lines(file, (SNAPSHOT_MARK, f"snapshot={index}", SNAPSHOT_MARK))
    _write_lines(file, snapshot.contents)

