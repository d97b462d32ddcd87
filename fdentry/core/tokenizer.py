"""Byte-level tokenizer for FreeDesktop entry files.

The scanner walks the input once and reports every section as offsets into
the input buffer. ``tokenize`` wraps those offsets in ``memoryview``
slices, so none of the returned records copy the input.

Grammar handled here:
  - everything before the first ``[`` is ignored
  - ``[Title]`` opens a section, which needs at least one attribute line
  - ``name=value`` lines, where ``name`` may read ``base[param]``
  - blank lines and ``#`` comment lines between attribute lines
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, NamedTuple

from fdentry.core.errors import Stage, StructuralError, TruncatedInputError

_WHITESPACE = frozenset(b" \t\r\n")
_OPEN = ord("[")
_HASH = ord("#")


class Span(NamedTuple):
    """Half-open ``[start, stop)`` byte range into a buffer."""

    start: int
    stop: int

    def slice(self, buffer: bytes) -> bytes:
        return buffer[self.start:self.stop]


class ParamSpans(NamedTuple):
    attr_name: Span
    param: Span


class AttrSpans(NamedTuple):
    name: Span
    value: Span
    param: ParamSpans | None


class SectionSpans(NamedTuple):
    title: Span
    attrs: list[AttrSpans]


def _debug(view: memoryview | bytes) -> str:
    try:
        return repr(str(view, "utf-8"))
    except UnicodeDecodeError:
        return repr(bytes(view))


@dataclass
class ParamBytes:
    """Parameter part of an attribute name, e.g. ``GenericName[es]``."""
    attr_name: memoryview
    param: memoryview

    def __repr__(self) -> str:
        return f"ParamBytes(attr_name={_debug(self.attr_name)}, param={_debug(self.param)})"


@dataclass
class AttrBytes:
    """One ``name=value`` line. ``param`` is set when the name carries ``[...]``."""
    name: memoryview
    value: memoryview
    param: ParamBytes | None = None

    def __repr__(self) -> str:
        return (
            f"AttrBytes(name={_debug(self.name)}, value={_debug(self.value)}, "
            f"param={self.param!r})"
        )


@dataclass
class SectionBytes:
    """A section title and its attributes in file order."""
    title: memoryview
    attrs: list[AttrBytes]

    def __repr__(self) -> str:
        return f"SectionBytes(title={_debug(self.title)}, attrs={self.attrs!r})"


def _as_buffer(data: bytes | bytearray | memoryview) -> bytes | bytearray:
    if isinstance(data, (bytes, bytearray)):
        return data
    return bytes(data)


def _skip_lines(buf: bytes | bytearray, pos: int) -> int:
    """Advance past whitespace and ``#`` comment lines."""
    end = len(buf)
    while True:
        while pos < end and buf[pos] in _WHITESPACE:
            pos += 1
        if pos < end and buf[pos] == _HASH:
            newline = buf.find(b"\n", pos)
            pos = end if newline == -1 else newline
            continue
        return pos


def _header(buf: bytes | bytearray, pos: int) -> tuple[Span, int]:
    close = buf.find(b"]", pos + 1)
    if close == -1 or close == pos + 1:
        raise StructuralError(Stage.HEADER, buf[pos:])
    return Span(pos + 1, close), close + 1


def _split_param(buf: bytes | bytearray, name: Span) -> ParamSpans | None:
    """Split ``base[param]``. A missing ``]`` keeps the rest of the name as the param."""
    open_ = buf.find(b"[", name.start, name.stop)
    if open_ == -1:
        return None
    close = buf.find(b"]", open_ + 1, name.stop)
    stop = name.stop if close == -1 else close
    return ParamSpans(Span(name.start, open_), Span(open_ + 1, stop))


def _attribute(buf: bytes | bytearray, pos: int) -> tuple[AttrSpans, int]:
    newline = buf.find(b"\n", pos)
    line_end = len(buf) if newline == -1 else newline
    eq = buf.find(b"=", pos, line_end)
    if eq == -1:
        if newline == -1:
            raise TruncatedInputError(buf[pos:])
        raise StructuralError(Stage.ATTRIBUTE, buf[pos:])
    name = Span(pos, eq)
    attr = AttrSpans(name, Span(eq + 1, line_end), _split_param(buf, name))
    return attr, _skip_lines(buf, line_end)


def _section(buf: bytes | bytearray, pos: int) -> tuple[SectionSpans, int]:
    title, pos = _header(buf, pos)
    pos = _skip_lines(buf, pos)
    end = len(buf)
    attrs: list[AttrSpans] = []
    while pos < end and buf[pos] != _OPEN:
        try:
            attr, pos = _attribute(buf, pos)
        except (StructuralError, TruncatedInputError) as exc:
            # A header whose first line is not an attribute has no attributes at all.
            if attrs:
                raise
            raise StructuralError(Stage.SECTION, buf[pos:]) from exc
        attrs.append(attr)
    if not attrs:
        raise StructuralError(Stage.SECTION, buf[pos:])
    return SectionSpans(title, attrs), pos


def scan_sections(data: bytes | bytearray | memoryview) -> Iterator[SectionSpans]:
    """Yield every section of ``data`` as byte offsets.

    A malformed section raises from the generator, which is then exhausted:
    the error is reported once and no later sections are produced.
    """
    buf = _as_buffer(data)
    pos = buf.find(b"[")
    if pos == -1:
        return
    end = len(buf)
    while pos < end:
        section, pos = _section(buf, pos)
        yield section


def tokenize(data: bytes | bytearray | memoryview) -> Iterator[SectionBytes]:
    """Yield the sections of ``data`` as zero-copy ``memoryview`` records.

    Each call starts a fresh pass over the input. Errors behave as in
    :func:`scan_sections`.
    """
    buf = _as_buffer(data)
    view = memoryview(buf)
    for section in scan_sections(buf):
        attrs = []
        for attr in section.attrs:
            param = None
            if attr.param is not None:
                param = ParamBytes(
                    attr_name=view[attr.param.attr_name.start:attr.param.attr_name.stop],
                    param=view[attr.param.param.start:attr.param.param.stop],
                )
            attrs.append(AttrBytes(
                name=view[attr.name.start:attr.name.stop],
                value=view[attr.value.start:attr.value.stop],
                param=param,
            ))
        yield SectionBytes(title=view[section.title.start:section.title.stop], attrs=attrs)


def tokenize_all(data: bytes | bytearray | memoryview) -> list[SectionBytes]:
    """Collect every section, failing on the first malformed one."""
    return list(tokenize(data))
