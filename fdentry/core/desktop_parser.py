""".desktop file helpers: extracts app metadata (name, icon, exec, categories)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from fdentry.core.config import Config
from fdentry.core.entry import Entry
from fdentry.core.errors import ParseError
from fdentry.core.logger import get_logger

DESKTOP_SECTION = "Desktop Entry"

_log = get_logger("desktop_parser")


@dataclass
class DesktopEntry:
    """Parsed fields from a .desktop file."""
    file_path: str = ""
    name: str = ""
    generic_name: str = ""
    comment: str = ""
    icon: str = ""
    exec_cmd: str = ""
    categories: list[str] = field(default_factory=list)
    no_display: bool = False
    terminal: bool = False
    type: str = "Application"


def _bool(value: str) -> bool:
    return value.lower() == "true"


def desktop_entry_from(entry: Entry, file_path: str = "") -> DesktopEntry | None:
    """Build a DesktopEntry from an already parsed file, or None without a Name."""
    section = entry.section(DESKTOP_SECTION)

    def field_(key: str) -> str:
        return (section.attr(key) or "").strip()

    name = field_("Name")
    if not name:
        return None
    return DesktopEntry(
        file_path=file_path,
        name=name,
        generic_name=field_("GenericName"),
        comment=field_("Comment"),
        icon=field_("Icon"),
        exec_cmd=field_("Exec"),
        categories=[c for c in field_("Categories").split(";") if c],
        no_display=_bool(field_("NoDisplay")),
        terminal=_bool(field_("Terminal")),
        type=field_("Type") or "Application",
    )


def parse_desktop_file(path: str | Path) -> DesktopEntry | None:
    """Parse a single .desktop file and return a DesktopEntry, or None on failure."""
    try:
        entry = Entry.parse_file(path)
    except (OSError, ParseError) as exc:
        _log.warning("Skipping %s: %s", path, exc)
        return None
    return desktop_entry_from(entry, str(path))


def get_all_desktop_entries(dirs: list[Path] | None = None) -> dict[str, DesktopEntry]:
    """Return a dict mapping .desktop filename stem -> DesktopEntry for all visible apps."""
    if dirs is None:
        dirs = Config().applications_dirs()

    entries: dict[str, DesktopEntry] = {}
    for d in dirs:
        if not d.is_dir():
            continue
        for f in sorted(d.iterdir()):
            if not f.suffix == ".desktop":
                continue
            entry = parse_desktop_file(f)
            if entry and entry.type == "Application" and not entry.no_display:
                entries[f.stem] = entry
    _log.debug("Found %d visible applications in %d directories", len(entries), len(dirs))
    return entries
