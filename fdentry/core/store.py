"""Indexed store over a parsed entry file.

The store owns the raw bytes and a lookup table built from one tokenizer
pass. Names are decoded once so they can be hashed; values and parameter
values stay as ``Span`` offsets into the buffer and are decoded on lookup.
The buffer is immutable ``bytes`` and the table is never modified after
``build`` returns, so a store can be shared freely between threads.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Protocol

from fdentry.core.errors import DecodeError
from fdentry.core.logger import get_logger
from fdentry.core.tokenizer import AttrSpans, SectionSpans, Span, scan_sections

_log = get_logger("store")


class TextLike(Protocol):
    def __str__(self) -> str: ...


Name = str | TextLike


@dataclass(slots=True)
class AttrValue:
    """Plain value plus parameterised variants of one attribute."""
    value: Span | None = None
    params: dict[str, Span] | None = None


SectionMap = dict[str, dict[str, AttrValue]]


def _text(name: Name) -> str:
    return name if isinstance(name, str) else str(name)


def _decode(buffer: bytes, span: Span) -> str:
    raw = span.slice(buffer)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError(raw, exc.reason) from exc


class _IndexBuilder:
    """Accumulates the lookup table before it is handed to the store."""

    def __init__(self, buffer: bytes) -> None:
        self._buffer = buffer
        self.sections: SectionMap = {}
        self.attr_count = 0

    def add_section(self, section: SectionSpans) -> None:
        title = _decode(self._buffer, section.title)
        attrs: dict[str, AttrValue] = {}
        for attr in section.attrs:
            self._add_attr(attrs, attr)
        # A repeated title replaces the earlier section.
        self.sections[title] = attrs

    def _add_attr(self, attrs: dict[str, AttrValue], attr: AttrSpans) -> None:
        # Validate now so lookups can decode without failing.
        _decode(self._buffer, attr.value)
        self.attr_count += 1

        if attr.param is None:
            slot = attrs.setdefault(_decode(self._buffer, attr.name), AttrValue())
            slot.value = attr.value
            return

        name = _decode(self._buffer, attr.param.attr_name)
        key = _decode(self._buffer, attr.param.param)
        slot = attrs.setdefault(name, AttrValue())
        if slot.params is None:
            slot.params = {}
        slot.params[key] = attr.value


class IndexedStore:
    """Owning buffer plus the section/attribute/parameter index built over it."""

    __slots__ = ("_buffer", "_sections")

    def __init__(self, buffer: bytes, sections: SectionMap) -> None:
        self._buffer = buffer
        self._sections = sections

    @classmethod
    def build(cls, data: bytes | bytearray | memoryview) -> IndexedStore:
        """Tokenize and index ``data``.

        Raises a ``ParseError`` subclass if any section is malformed or any
        name or value is not UTF-8. Nothing is returned on failure.
        """
        buffer = bytes(data)
        builder = _IndexBuilder(buffer)
        for section in scan_sections(buffer):
            builder.add_section(section)
        _log.debug(
            "Indexed %d sections, %d attributes from %d bytes",
            len(builder.sections), builder.attr_count, len(buffer),
        )
        return cls(buffer, builder.sections)

    @property
    def buffer(self) -> bytes:
        return self._buffer

    def _resolve(self, span: Span) -> str:
        return span.slice(self._buffer).decode("utf-8")

    def _attr(self, section: Name, attribute: Name) -> AttrValue | None:
        attrs = self._sections.get(_text(section))
        if attrs is None:
            return None
        return attrs.get(_text(attribute))

    def get(self, section: Name, attribute: Name, param: Name | None = None) -> str | None:
        """Return the value of ``attribute``, or of ``attribute[param]`` when given."""
        attr = self._attr(section, attribute)
        if attr is None:
            return None
        if param is None:
            span = attr.value
        elif attr.params is None:
            return None
        else:
            span = attr.params.get(_text(param))
        return None if span is None else self._resolve(span)

    def has_section(self, name: Name) -> bool:
        return _text(name) in self._sections

    def has_attribute(self, section: Name, name: Name) -> bool:
        return self._attr(section, name) is not None

    def has_parameter(self, section: Name, attribute: Name, param: Name) -> bool:
        attr = self._attr(section, attribute)
        return attr is not None and attr.params is not None and _text(param) in attr.params

    def section_names(self) -> Iterator[str]:
        return iter(self._sections)

    def attribute_names(self, section: Name) -> Iterator[str] | None:
        attrs = self._sections.get(_text(section))
        return None if attrs is None else iter(attrs)

    def parameter_keys(self, section: Name, attribute: Name) -> Iterator[str] | None:
        attr = self._attr(section, attribute)
        if attr is None or attr.params is None:
            return None
        return iter(attr.params)

    def __contains__(self, section: Name) -> bool:
        return self.has_section(section)

    def __len__(self) -> int:
        return len(self._sections)

    def __repr__(self) -> str:
        return f"IndexedStore(sections={sorted(self._sections)!r}, size={len(self._buffer)})"
