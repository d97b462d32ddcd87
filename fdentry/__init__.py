"""Parser for FreeDesktop entry files.

These are the INI-like files behind desktop entries, icon theme indexes and
systemd units::

    from fdentry import Entry

    entry = Entry.parse(b"[Desktop Entry]\\nName=Firefox\\nExec=firefox %u")
    entry.section("Desktop Entry").attr("Exec")  # 'firefox %u'
"""

from fdentry.core.entry import AttrSelector, Entry, parse_entry
from fdentry.core.errors import DecodeError, ParseError, Stage, StructuralError, TruncatedInputError
from fdentry.core.store import IndexedStore
from fdentry.core.tokenizer import (
    AttrBytes,
    ParamBytes,
    SectionBytes,
    scan_sections,
    tokenize,
    tokenize_all,
)

__version__ = "0.1.0"

__all__ = [
    "AttrBytes",
    "AttrSelector",
    "DecodeError",
    "Entry",
    "IndexedStore",
    "ParamBytes",
    "ParseError",
    "SectionBytes",
    "Stage",
    "StructuralError",
    "TruncatedInputError",
    "parse_entry",
    "scan_sections",
    "tokenize",
    "tokenize_all",
]
