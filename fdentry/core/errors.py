"""Parse errors raised while tokenizing and indexing entry files."""

from __future__ import annotations

from enum import Enum

# How much of the unparsed input an error message shows
ERROR_CONTEXT_CHARS = 64


class Stage(Enum):
    HEADER = "header"
    ATTRIBUTE = "attribute"
    SECTION = "section"


def render_bytes(data: bytes, limit: int | None = ERROR_CONTEXT_CHARS) -> str:
    """Render raw input for diagnostics.

    Valid UTF-8 is shown as text in backticks, anything else as a ``bytes``
    literal. Output longer than ``limit`` is clipped with a trailing ``...``.
    """
    data = bytes(data)
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        if limit is not None and len(data) > limit:
            return f"{data[:limit]!r}..."
        return repr(data)
    if limit is not None and len(text) > limit:
        return f"`{text[:limit]}...`"
    return f"`{text}`"


class ParseError(ValueError):
    """Base class for every failure raised while reading an entry file."""


class StructuralError(ParseError):
    """Malformed header, attribute line, or a section with no attributes."""

    def __init__(self, stage: Stage, remaining: bytes) -> None:
        self.stage = stage
        self.remaining = bytes(remaining)
        super().__init__(
            f"Error parsing {stage.value}: unexpected input at {render_bytes(self.remaining)}"
        )


class TruncatedInputError(ParseError):
    """Input ended in the middle of a construct that needed more bytes."""

    def __init__(self, remaining: bytes = b"") -> None:
        self.remaining = bytes(remaining)
        super().__init__(f"Incomplete input at {render_bytes(self.remaining)}")


class DecodeError(ParseError):
    """A section name, attribute name, parameter or value is not valid UTF-8."""

    def __init__(self, data: bytes, reason: str) -> None:
        self.data = bytes(data)
        self.reason = reason
        super().__init__(f"Error decoding {render_bytes(self.data)} as UTF-8: {reason}")
