"""Free-text notes about opponents, keyed by username."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field, replace
from datetime import datetime, timezone
from enum import StrEnum
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

# Failures from reading or writing a notes file that may be missing, corrupt
# or hand-edited into the wrong shape.
_STORE_ERRORS = (OSError, json.JSONDecodeError, KeyError, ValueError, TypeError, AttributeError)


class NoteColor(StrEnum):
    """Color tag shown next to a player."""

    RED = "red"
    YELLOW = "yellow"
    GREEN = "green"
    BLUE = "blue"
    PURPLE = "purple"
    ORANGE = "orange"
    GRAY = "gray"
    BLACK = "black"


@dataclass(frozen=True)
class PlayerNote:
    """A note on one opponent.

    Attributes:
        username: Opponent's screen name; matched case-insensitively.
        note: Free text.
        color: Tag color.
        vpip_pfr: HUD stats as typed by the user, e.g. "24/19".
        created_at: ISO timestamp of the first save.
        updated_at: ISO timestamp of the last save.
    """

    username: str
    note: str = ""
    color: NoteColor = NoteColor.GRAY
    vpip_pfr: str = ""
    created_at: str | None = None
    updated_at: str | None = None

    @property
    def key(self) -> str:
        return self.username.strip().lower()

    def to_dict(self) -> dict[str, str | None]:
        data = asdict(self)
        data["color"] = self.color.value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> PlayerNote:
        if not isinstance(data["username"], str):
            raise TypeError(f"username must be a string, got {data['username']!r}")
        return cls(
            username=data["username"],
            note=data.get("note") or "",
            color=NoteColor(data.get("color") or NoteColor.GRAY),
            vpip_pfr=data.get("vpip_pfr") or "",
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )


class NoteStore(Protocol):
    """Save/fetch/delete contract shared by note backends."""

    def save(self, note: PlayerNote) -> bool: ...

    def fetch_all(self) -> list[PlayerNote]: ...

    def get(self, username: str) -> PlayerNote | None: ...

    def delete(self, username: str) -> bool: ...

    def search(self, prefix: str) -> list[PlayerNote]: ...

    def clear(self) -> bool: ...


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class JsonNoteStore:
    """Notes kept in a local JSON file.

    Read and write failures are logged and reported through the return
    value rather than raised.
    """

    path: Path
    _cache: list[PlayerNote] | None = field(default=None, init=False, repr=False)

    def _load(self) -> list[PlayerNote]:
        if self._cache is not None:
            return self._cache
        if not self.path.exists():
            return []
        with open(self.path, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError(f"expected a list of notes, got {type(data).__name__}")
        self._cache = [PlayerNote.from_dict(n) for n in data]
        return self._cache

    def _dump(self, notes: list[PlayerNote]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump([n.to_dict() for n in notes], f, indent=2)
        self._cache = notes

    def fetch_all(self) -> list[PlayerNote]:
        try:
            return list(self._load())
        except _STORE_ERRORS as e:
            logger.error("Error fetching player notes from %s: %s", self.path, e)
            return []

    def get(self, username: str) -> PlayerNote | None:
        key = username.strip().lower()
        for note in self.fetch_all():
            if note.key == key:
                return note
        return None

    def search(self, prefix: str) -> list[PlayerNote]:
        """Notes whose username starts with ``prefix`` (case-insensitive)."""
        prefix = prefix.strip().lower()
        if not prefix:
            return []
        return [n for n in self.fetch_all() if n.key.startswith(prefix)]

    def save(self, note: PlayerNote) -> bool:
        """Insert or replace the note for ``note.username``."""
        if not note.username.strip():
            logger.warning("Refusing to save a note without a username")
            return False
        try:
            notes = list(self._load())
            existing = next((n for n in notes if n.key == note.key), None)
            now = _now()
            stamped = replace(
                note,
                username=note.username.strip(),
                created_at=existing.created_at if existing else (note.created_at or now),
                updated_at=now,
            )
            self._dump([n for n in notes if n.key != note.key] + [stamped])
        except _STORE_ERRORS as e:
            logger.error("Error saving note for %s: %s", note.username, e)
            return False
        return True

    def delete(self, username: str) -> bool:
        key = username.strip().lower()
        try:
            notes = list(self._load())
            self._dump([n for n in notes if n.key != key])
        except _STORE_ERRORS as e:
            logger.error("Error deleting note for %s: %s", username, e)
            return False
        return True

    def clear(self) -> bool:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            logger.error("Error clearing %s: %s", self.path, e)
            return False
        self._cache = None
        return True


@dataclass(frozen=True)
class MigrationReport:
    found: int
    imported: int
    verified: int

    @property
    def complete(self) -> bool:
        return self.verified >= self.found


def migrate_notes(source: NoteStore, target: NoteStore) -> MigrationReport:
    """Copy every note from ``source`` into ``target``.

    The source is cleared only if all of its notes can be found in the
    target afterwards; otherwise it is left untouched.
    """
    notes = source.fetch_all()
    if not notes:
        return MigrationReport(found=0, imported=0, verified=0)

    imported = 0
    for note in notes:
        if target.save(note):
            imported += 1
        else:
            logger.warning("Could not import note for %s", note.username)

    target_keys = {n.key for n in target.fetch_all()}
    verified = sum(1 for n in notes if n.key in target_keys)
    report = MigrationReport(found=len(notes), imported=imported, verified=verified)

    if report.complete:
        source.clear()
        logger.info("Imported %d player notes", imported)
    else:
        logger.warning(
            "Only %d of %d notes verified, keeping the source notes", verified, len(notes)
        )
    return report
