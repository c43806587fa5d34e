"""Exception classes for rfctree.

Provides standardized exceptions for error handling throughout rfctree.
"""

from __future__ import annotations


class RfcTreeError(Exception):
    """Base exception for all rfctree errors.

    Subclass this for specific error categories.
    """

    pass


class ParseError(RfcTreeError):
    """Error during block parsing.

    Parsing is total for any finite input, so this signals a matcher defect
    (a parse() that consumed nothing, or a cursor overrun), not bad input.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize parse error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column offset where error occurred (1-indexed)
            source_file: Path to source file (optional)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file

        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class CursorError(ParseError):
    """Raised when a matcher advances the line cursor past the end of input."""


class RenderError(RfcTreeError):
    """Error during text rendering.

    Raised when the renderer encounters a node it has no rule for, typically
    after a patch produced a shape the parser never emits.
    """

    pass


class SerializationError(RfcTreeError, ValueError):
    """Dynamic tree form could not be validated back into typed nodes."""


class MatcherRegistryError(RfcTreeError, ValueError):
    """Invalid matcher registration (duplicate name, missing capability)."""


class PatchError(RfcTreeError):
    """Error applying a patch operation.

    Any PatchError aborts the remaining operations of the batch. Operations
    applied before the failing one stay applied.
    """

    def __init__(self, message: str, index: int | None = None, path: str | None = None) -> None:
        """Initialize patch error.

        Args:
            message: Description of the failure
            index: Position of the failing operation in the batch
            path: Pointer of the failing operation
        """
        self.index = index
        self.path = path

        location = ""
        if index is not None:
            location = f"operation {index}"
        if path is not None:
            location = f"{location} at {path!r}" if location else f"at {path!r}"
        super().__init__(f"{location}: {message}" if location else message)


class PointerError(PatchError):
    """Malformed pointer, or a pointer that does not resolve."""


class PatchBoundsError(PatchError):
    """Array index out of range or not a valid index token."""


class PatchTestError(PatchError):
    """A ``test`` operation found a value different from the expected one."""
