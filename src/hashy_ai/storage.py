"""
Markdown note storage.

Notes are ``<ULID>.md`` files in a single directory. Metadata lives in an
optional YAML frontmatter block (``icon``, ``title``, ``tags``); the display
title falls back to the filename stem.
"""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Sequence

import yaml

__all__ = [
    "NOTE_EXTENSION",
    "NoteFile",
    "NoteFrontmatter",
    "parse_frontmatter",
    "note_body",
    "update_frontmatter",
    "new_note_id",
    "scan_notes",
    "load_content",
    "save_content",
    "create_note",
    "delete_note",
]

logger = logging.getLogger(__name__)

NOTE_EXTENSION = ".md"
_SEPARATOR = "---"
_CROCKFORD = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"


@dataclass(slots=True)
class NoteFrontmatter:
    icon: Optional[str] = None
    title: Optional[str] = None
    tags: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.icon and not self.title and not self.tags

    def as_dict(self) -> dict[str, Any]:
        """Only non-empty fields are written."""
        data: dict[str, Any] = {}
        if self.icon:
            data["icon"] = self.icon
        if self.title:
            data["title"] = self.title
        if self.tags:
            data["tags"] = list(self.tags)
        return data


@dataclass(frozen=True, slots=True)
class NoteFile:
    """Metadata snapshot of one note file."""

    path: Path
    icon: Optional[str] = None
    display_name: Optional[str] = None
    tags: tuple[str, ...] = ()

    @property
    def name(self) -> str:
        return self.path.stem

    @property
    def title(self) -> str:
        """Frontmatter title when present, else the filename."""
        return self.display_name or self.name


def _split(content: str) -> Optional[tuple[str, str]]:
    """Return ``(yaml, body)`` when *content* opens with a frontmatter block."""
    if not content.startswith(_SEPARATOR):
        return None
    lines = content.split("\n")
    for i in range(1, len(lines)):
        if lines[i].strip() == _SEPARATOR:
            body = "\n".join(lines[i + 1 :])
            if body.startswith("\n"):
                body = body[1:]
            return "\n".join(lines[1:i]), body
    return None


def parse_frontmatter(content: str) -> Optional[NoteFrontmatter]:
    parts = _split(content)
    if parts is None:
        return None
    try:
        data = yaml.safe_load(parts[0])
    except yaml.YAMLError:
        logger.warning("Ignoring malformed frontmatter")
        return None
    if not isinstance(data, dict):
        return None

    tags = data.get("tags")
    return NoteFrontmatter(
        icon=str(data["icon"]) if data.get("icon") is not None else None,
        title=str(data["title"]) if data.get("title") is not None else None,
        tags=[str(t) for t in tags] if isinstance(tags, list) else [],
    )


def note_body(content: str) -> str:
    """Strip the frontmatter block, returning just the markdown body."""
    parts = _split(content)
    return content if parts is None else parts[1]


def update_frontmatter(frontmatter: NoteFrontmatter, content: str) -> str:
    """Insert or replace frontmatter; an empty frontmatter yields the plain body."""
    body = note_body(content)
    if frontmatter.is_empty:
        return body
    encoded = yaml.safe_dump(
        frontmatter.as_dict(), allow_unicode=True, sort_keys=False, default_flow_style=False
    )
    return f"{_SEPARATOR}\n{encoded}{_SEPARATOR}\n\n{body}"


def new_note_id() -> str:
    """A ULID: 48-bit millisecond timestamp + 80 random bits, Crockford base32.

    Lexicographic order of ids follows creation time.
    """
    value = (time.time_ns() // 1_000_000) << 80 | int.from_bytes(os.urandom(10), "big")
    chars = []
    for _ in range(26):
        chars.append(_CROCKFORD[value & 0x1F])
        value >>= 5
    return "".join(reversed(chars))


def _read_metadata(path: Path) -> NoteFile:
    try:
        fm = parse_frontmatter(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Could not read %s: %s", path.name, exc)
        fm = None
    if fm is None:
        return NoteFile(path=path)
    return NoteFile(path=path, icon=fm.icon, display_name=fm.title, tags=tuple(fm.tags))


def scan_notes(directory: Path) -> list[NoteFile]:
    """All notes in *directory*, newest first."""
    paths = sorted(
        (p for p in directory.iterdir() if p.is_file() and p.suffix == NOTE_EXTENSION),
        key=lambda p: p.name,
        reverse=True,
    )
    return [_read_metadata(p) for p in paths]


def load_content(note: NoteFile) -> str:
    return note.path.read_text(encoding="utf-8")


def save_content(content: str, note: NoteFile) -> None:
    note.path.write_text(content, encoding="utf-8")


def create_note(
    directory: Path,
    title: str,
    content: str = "",
    icon: Optional[str] = None,
    tags: Sequence[str] = (),
) -> Path:
    """Create ``<ULID>.md`` in *directory* with *title* in the frontmatter."""
    path = directory / f"{new_note_id()}{NOTE_EXTENSION}"
    frontmatter = NoteFrontmatter(icon=icon, title=title, tags=list(tags))
    path.write_text(update_frontmatter(frontmatter, content), encoding="utf-8")
    logger.info("Created note %s", path.name)
    return path


def delete_note(note: NoteFile) -> None:
    note.path.unlink()
    logger.info("Deleted note %s", note.path.name)
