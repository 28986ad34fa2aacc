"""
Massif output file parser.

A massif output file is line oriented. It starts with a small header block
(``desc:``, ``cmd:`` and ``time_unit:`` lines) followed by any number of snapshots:

.. code-block:: text

    desc: --detailed-freq=1
    cmd: ./sample
    time_unit: i
    #-----------
    snapshot=0
    #-----------
    time=0
    mem_heap_B=0
    mem_heap_extra_B=0
    mem_stacks_B=0
    heap_tree=empty

Each line is classified as a :class:`LineKind` and fed, along with the current
:class:`ParserState`, to :func:`transition`, which returns the next state and the
:class:`Action` to take on the line.
"""
import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple

from .core import AnyPath
from .errors import FileOpenError, MalformedInputError

logger = logging.getLogger(__name__)

#: The marker line that surrounds each ``snapshot=<N>`` line
SNAPSHOT_MARK = "#-----------"

HEADER_PATTERN = re.compile(r"^(desc|cmd|time_unit):")
SNAPSHOT_NAME_PATTERN = re.compile(r"snapshot=[0-9]+")
SNAPSHOT_TIME_PATTERN = re.compile(r"time=([0-9]+)")


@dataclass
class Snapshot:
    """
    A single heap profile sample.
    """

    #: the snapshot time, taken from the last ``time=<N>`` content line
    time: int = 0
    #: the snapshot content lines, without the snapshot marker and name lines
    contents: List[str] = field(default_factory=list)


@dataclass
class ParseResult:
    """
    The headers and snapshots extracted from a single massif file.
    """

    headers: List[str] = field(default_factory=list)
    snapshots: List[Snapshot] = field(default_factory=list)


class ParserState(Enum):
    """
    The kind of the last significant line that was parsed.
    """

    NONE = "none"
    HEADER = "header"
    SNAPSHOT_MARK = "snapshot_mark"
    SNAPSHOT_NAME = "snapshot_name"
    SNAPSHOT_CONTENT = "snapshot_content"


class LineKind(Enum):
    """
    Line classification.
    """

    HEADER = "header"
    MARK = "mark"
    NAME = "name"
    OTHER = "other"


class Action(Enum):
    """
    What the parser does with a line after a state transition.
    """

    IGNORE = "ignore"
    CAPTURE_HEADER = "capture_header"
    CLOSE_SNAPSHOT = "close_snapshot"
    OPEN_SNAPSHOT = "open_snapshot"
    APPEND_CONTENT = "append_content"


def classify_line(line: str) -> LineKind:
    """
    :param line: a single line, without the trailing newline
    :returns: the line classification
    """
    if HEADER_PATTERN.search(line):
        return LineKind.HEADER
    if line == SNAPSHOT_MARK:
        return LineKind.MARK
    if SNAPSHOT_NAME_PATTERN.search(line):
        return LineKind.NAME
    return LineKind.OTHER


def transition(state: ParserState, kind: LineKind) -> Tuple[ParserState, Action]:
    """
    Compute the next parser state.

    Header lines are accepted in any state, so a header block that reappears in the
    middle of a file does not break parsing. A snapshot is only opened after the full
    ``mark``, ``snapshot=<N>``, ``mark`` sequence. Lines that do not fit the current
    state are ignored.

    :param state: the current parser state
    :param kind: the classification of the next line
    :returns: the new state and the action to perform on the line
    """
    if kind is LineKind.HEADER:
        return ParserState.HEADER, Action.CAPTURE_HEADER

    if state is ParserState.SNAPSHOT_CONTENT:
        if kind is LineKind.MARK:
            return ParserState.SNAPSHOT_MARK, Action.CLOSE_SNAPSHOT
        return state, Action.APPEND_CONTENT

    if kind is LineKind.MARK:
        if state in (ParserState.NONE, ParserState.HEADER):
            return ParserState.SNAPSHOT_MARK, Action.CLOSE_SNAPSHOT
        if state is ParserState.SNAPSHOT_NAME:
            return ParserState.SNAPSHOT_CONTENT, Action.OPEN_SNAPSHOT
    elif kind is LineKind.NAME and state is ParserState.SNAPSHOT_MARK:
        return ParserState.SNAPSHOT_NAME, Action.IGNORE

    return state, Action.IGNORE


class MassifParser:
    """
    Incremental massif file parser. Lines are passed to :meth:`feed` in file order and
    :meth:`finish` must be called after the last line.

    :param capture_headers: add header lines to the result; when ``False`` header lines
        still drive the state machine but are discarded
    :param path: the file being parsed, used in error messages
    """

    def __init__(self, capture_headers: bool = True, path: AnyPath = "<input>"):
        self.capture_headers = capture_headers
        self.path = path
        self.state = ParserState.NONE
        self.snapshot: Optional[Snapshot] = None
        self.result = ParseResult()
        self.line_number = 0

    def feed(self, line: str) -> None:
        """
        Parse the next line.

        :param line: the line, without the trailing newline
        :raises MalformedInputError: a snapshot was opened while another snapshot is
            still open, or the snapshot time could not be parsed
        """
        self.line_number += 1
        self.state, action = transition(self.state, classify_line(line))

        if action is Action.CAPTURE_HEADER:
            if self.capture_headers:
                self.result.headers.append(line)
        elif action is Action.CLOSE_SNAPSHOT:
            self._close_snapshot()
        elif action is Action.OPEN_SNAPSHOT:
            if self.snapshot is not None:
                raise self._error("found new snapshot but existing another snapshot")
            self.snapshot = Snapshot()
        elif action is Action.APPEND_CONTENT:
            self._append_content(line)

    def finish(self) -> ParseResult:
        """
        Close the last snapshot, if it has content.

        :returns: the parsed headers and snapshots
        """
        self._close_snapshot()
        return self.result

    def _close_snapshot(self) -> None:
        # an empty snapshot stays open
        if self.snapshot is not None and self.snapshot.contents:
            self.result.snapshots.append(self.snapshot)
            self.snapshot = None

    def _append_content(self, line: str) -> None:
        if self.snapshot is None:  # pragma: no cover
            raise self._error("snapshot should not be empty now")

        self.snapshot.contents.append(line)
        match = SNAPSHOT_TIME_PATTERN.search(line)
        if match:
            try:
                self.snapshot.time = int(match.group(1))
            except ValueError:
                raise self._error(f"invalid snapshot time: {match.group(1)!r}")

    def _error(self, message: str) -> MalformedInputError:
        return MalformedInputError(self.path, self.line_number, message, self.result)


def _strip_line_ending(line: str) -> str:
    # a "\r" is only dropped as part of a "\r\n" ending
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n"):
        return line[:-1]
    return line


def parse_massif_file(path: AnyPath, capture_headers: bool = True) -> ParseResult:
    """
    Parse a massif output file.

    :param path: the massif file
    :param capture_headers: include the file's header lines in the result
    :returns: the file's header lines and snapshots
    :raises FileOpenError: the file could not be opened or read
    :raises MalformedInputError: the snapshot layout is invalid; ``err.result``
        holds everything parsed before the error
    """
    path = Path(path)
    parser = MassifParser(capture_headers=capture_headers, path=path)

    try:
        file = path.open("r", encoding="utf-8", errors="surrogateescape", newline="\n")
    except OSError as err:
        raise FileOpenError(path, err.strerror or str(err)) from err

    logger.debug("parsing massif file: %s", path)
    with file:
        try:
            for line in file:
                parser.feed(_strip_line_ending(line))
        except OSError as err:
            raise FileOpenError(path, err.strerror or str(err)) from err

    return parser.finish()
