"""Query façade over an ``IndexedStore``.

    entry = Entry.parse_file("/usr/lib/systemd/system/sshd.service")
    entry.section("Service").attr("ExecStart")
    entry.section("Desktop Entry").attr_with_param("Name", "de")
"""

from __future__ import annotations

import os
from typing import Iterator

from fdentry.core.logger import get_logger
from fdentry.core.store import IndexedStore, Name

_log = get_logger("entry")


class Entry:
    """A parsed entry file."""

    __slots__ = ("_store",)

    def __init__(self, store: IndexedStore) -> None:
        self._store = store

    @classmethod
    def parse(cls, data: bytes | bytearray | memoryview | str) -> Entry:
        if isinstance(data, str):
            data = data.encode("utf-8")
        return cls(IndexedStore.build(data))

    @classmethod
    def parse_file(cls, path: str | os.PathLike[str]) -> Entry:
        """Read ``path`` to completion and parse it. ``OSError`` propagates."""
        with open(path, "rb") as f:
            data = f.read()
        _log.debug("Read %d bytes from %s", len(data), path)
        return cls.parse(data)

    @property
    def store(self) -> IndexedStore:
        return self._store

    def section(self, name: Name) -> AttrSelector:
        return AttrSelector(str(name), self)

    def sections(self) -> Iterator[AttrSelector]:
        for name in self._store.section_names():
            yield AttrSelector(name, self)

    def section_names(self) -> Iterator[str]:
        return self._store.section_names()

    def has_section(self, name: Name) -> bool:
        return self._store.has_section(name)

    def __contains__(self, name: Name) -> bool:
        return self._store.has_section(name)

    def __len__(self) -> int:
        return len(self._store)

    def __repr__(self) -> str:
        return f"Entry({sorted(self._store.section_names())!r})"


class AttrSelector:
    """Attribute lookups scoped to one section. A missing section yields ``None``."""

    __slots__ = ("_name", "_entry")

    def __init__(self, name: str, entry: Entry) -> None:
        self._name = name
        self._entry = entry

    @property
    def name(self) -> str:
        return self._name

    def exists(self) -> bool:
        return self._entry.store.has_section(self._name)

    def attr(self, name: Name) -> str | None:
        return self._entry.store.get(self._name, name)

    def attr_with_param(self, name: Name, param: Name) -> str | None:
        return self._entry.store.get(self._name, name, param)

    def has_attr(self, name: Name) -> bool:
        return self._entry.store.has_attribute(self._name, name)

    def attrs(self) -> Iterator[str]:
        return self._entry.store.attribute_names(self._name) or iter(())

    def params(self, name: Name) -> Iterator[str]:
        return self._entry.store.parameter_keys(self._name, name) or iter(())

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"AttrSelector({self._name!r})"


def parse_entry(path: str | os.PathLike[str]) -> Entry:
    """Shorthand for ``Entry.parse_file``."""
    return Entry.parse_file(path)
