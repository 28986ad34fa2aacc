from typing import TYPE_CHECKING, Optional

from .core import AnyPath

if TYPE_CHECKING:  # pragma: no cover
    from .parser import ParseResult


class MassifCombineError(Exception):
    """
    Base exception for all massif-combine errors. All errors that occur while reading,
    merging, writing, or cleaning up massif files inherit from this base class.
    """


class FileOpenError(MassifCombineError):
    """
    Exception raised when an input file cannot be opened for reading or the output
    file cannot be opened for writing.
    """

    def __init__(self, path: AnyPath, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(path, reason)

    def __str__(self) -> str:
        return f"failed to open file: {self.path}: {self.reason}"


class MalformedInputError(MassifCombineError):
    """
    Exception raised when a massif file does not follow the expected snapshot layout.
    Parsing of the file stops at the offending line. Anything that was successfully
    parsed before the failure is available in the ``result`` attribute.
    """

    def __init__(
        self,
        path: AnyPath,
        line_number: int,
        message: str,
        result: Optional["ParseResult"] = None,
    ):
        self.path = path
        self.line_number = line_number
        self.message = message
        self.result = result
        super().__init__(path, line_number, message)

    def __str__(self) -> str:
        return f"{self.path}:{self.line_number}: {self.message}"


class EmptyOutputError(MassifCombineError):
    """
    Exception raised when there are no headers and no snapshots to write.
    """

    def __str__(self) -> str:
        return "no content to write"


class WriteError(MassifCombineError):
    """
    Exception raised when writing the combined massif file fails.
    """

    def __init__(self, path: AnyPath, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(path, reason)

    def __str__(self) -> str:
        return f"failed to write file: {self.path}: {self.reason}"


class CloseError(WriteError):
    """
    Exception raised when flushing or closing the combined massif file fails.
    """

    def __str__(self) -> str:
        return f"failed to close file: {self.path}: {self.reason}"


class DeletionError(MassifCombineError):
    """
    Exception describing an input file that could not be removed after combining.
    """

    def __init__(self, path: AnyPath, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(path, reason)

    def __str__(self) -> str:
        return f"error removing file: {self.path}: {self.reason}"
