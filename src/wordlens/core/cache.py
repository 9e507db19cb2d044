# src/wordlens/core/cache.py
"""
Persistent definition cache.

Two JSON files:
  cache file    {word: {definitions: [...], phonetic, origin, synonyms, antonyms}}
  unknown file  {word: true}   words known to have no definition

Keys are always the lowercase word. Entries are never rewritten once stored.
"""

import json
import logging
import os
import tempfile
import threading
import time
from dataclasses import dataclass, field, replace
from pathlib import Path


logger = logging.getLogger(__name__)


@dataclass
class Definition:
    part_of_speech: str
    text: str
    example: str | None = None
    synonyms: list[str] = field(default_factory=list)
    antonyms: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "partOfSpeech": self.part_of_speech,
            "definition": self.text,
            "example": self.example or "",
            "synonyms": list(self.synonyms),
            "antonyms": list(self.antonyms),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Definition":
        return cls(
            part_of_speech=str(data.get("partOfSpeech") or ""),
            text=str(data.get("definition") or ""),
            example=data.get("example") or None,
            synonyms=[str(s) for s in data.get("synonyms") or []],
            antonyms=[str(a) for a in data.get("antonyms") or []],
        )


@dataclass
class CacheEntry:
    word: str
    definitions: list[Definition] = field(default_factory=list)
    phonetic: str | None = None
    origin: str | None = None
    synonyms: list[str] = field(default_factory=list)
    antonyms: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "definitions": [d.to_dict() for d in self.definitions],
            "phonetic": self.phonetic or "",
            "origin": self.origin or "",
            "synonyms": list(self.synonyms),
            "antonyms": list(self.antonyms),
        }

    @classmethod
    def from_dict(cls, word: str, data: dict) -> "CacheEntry":
        return cls(
            word=word,
            definitions=[Definition.from_dict(d) for d in data.get("definitions") or []],
            phonetic=data.get("phonetic") or None,
            origin=data.get("origin") or None,
            synonyms=[str(s) for s in data.get("synonyms") or []],
            antonyms=[str(a) for a in data.get("antonyms") or []],
        )


class UnknownMarker:
    """Returned by CacheStore.get for words known to have no definition."""

    def __repr__(self) -> str:
        return "UNKNOWN"


UNKNOWN = UnknownMarker()


def normalize_key(word: str) -> str:
    return word.strip().lower()


def write_json_atomic(path: Path, data) -> None:
    """Write JSON to a temp file next to path, then rename it into place."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def quarantine(path: Path) -> Path:
    """Move an unreadable file aside so it is not overwritten."""
    stamp = time.strftime("%Y%m%d-%H%M%S")
    target = path.with_name(f"{path.name}.corrupt-{stamp}")
    n = 1
    while target.exists():
        target = path.with_name(f"{path.name}.corrupt-{stamp}-{n}")
        n += 1
    os.replace(path, target)
    return target


class CacheStore:
    """Word → CacheEntry map with a negative cache, persisted as JSON."""

    def __init__(
        self,
        cache_path: str | Path,
        unknown_path: str | Path | None = None,
        autosave: bool = True,
    ):
        self.cache_path = Path(cache_path)
        self.unknown_path = Path(unknown_path) if unknown_path else None
        self.autosave = autosave
        self._entries: dict[str, CacheEntry] = {}
        self._unknown: set[str] = set()
        self._lock = threading.RLock()
        self._write_lock = threading.Lock()
        self._version = 0   # bumped by every mutation
        self._written = -1  # version last written to disk

    @classmethod
    def open(cls, cache_dir: str | Path, autosave: bool = True) -> "CacheStore":
        cache_dir = Path(cache_dir)
        store = cls(
            cache_dir / "definitions_cache.json",
            cache_dir / "unknown_words.json",
            autosave=autosave,
        )
        store.load()
        return store

    # === Loading / persistence ===

    def _read(self, path: Path) -> dict | None:
        if not path.exists():
            return None
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError(f"expected a JSON object, got {type(data).__name__}")
            return data
        except (OSError, UnicodeDecodeError, ValueError) as e:
            self._recover(path, e)
            return None

    def _recover(self, path: Path, error: Exception) -> None:
        try:
            moved = quarantine(path)
            logger.warning("Unreadable cache file %s (%s); moved to %s", path, error, moved)
        except OSError as move_error:
            logger.error("Unreadable cache file %s (%s); could not move it aside: %s", path, error, move_error)

    def load(self) -> None:
        with self._lock:
            self._version += 1
            self._entries = {}
            self._unknown = set()

            data = self._read(self.cache_path)
            if data:
                try:
                    self._entries = {
                        normalize_key(word): CacheEntry.from_dict(normalize_key(word), entry)
                        for word, entry in data.items()
                    }
                except (AttributeError, TypeError, ValueError) as e:
                    self._entries = {}
                    self._recover(self.cache_path, e)

            if self.unknown_path is not None:
                data = self._read(self.unknown_path)
                if data:
                    self._unknown = {
                        normalize_key(word) for word, flag in data.items()
                        if flag and normalize_key(word) not in self._entries
                    }

            logger.debug("Loaded %d cached entries, %d unknown words", len(self._entries), len(self._unknown))

    def persist(self) -> None:
        """Write a snapshot of the store; lookups are not blocked while writing."""
        with self._lock:
            version = self._version
            entries = {word: entry.to_dict() for word, entry in sorted(self._entries.items())}
            unknown = {word: True for word in sorted(self._unknown)}

        with self._write_lock:
            # A newer snapshot is already on disk
            if version <= self._written:
                return
            write_json_atomic(self.cache_path, entries)
            if self.unknown_path is not None:
                write_json_atomic(self.unknown_path, unknown)
            self._written = version

    def _changed(self) -> None:
        if self.autosave:
            self.persist()

    # === Access ===

    def get(self, word: str) -> CacheEntry | UnknownMarker | None:
        key = normalize_key(word)
        with self._lock:
            if key in self._entries:
                return self._entries[key]
            if key in self._unknown:
                return UNKNOWN
            return None

    def put(self, word: str, entry: CacheEntry) -> bool:
        """Store a copy of entry. Existing entries are kept; returns True if added."""
        key = normalize_key(word)
        with self._lock:
            if key in self._entries:
                return False
            self._entries[key] = replace(entry, word=key)
            self._unknown.discard(key)
            self._version += 1
        self._changed()
        return True

    def mark_unknown(self, word: str) -> bool:
        key = normalize_key(word)
        with self._lock:
            if key in self._entries or key in self._unknown:
                return False
            self._unknown.add(key)
            self._version += 1
        self._changed()
        return True

    def clear_unknown(self, word: str) -> bool:
        key = normalize_key(word)
        with self._lock:
            if key not in self._unknown:
                return False
            self._unknown.discard(key)
            self._version += 1
        self._changed()
        return True

    def is_unknown(self, word: str) -> bool:
        with self._lock:
            return normalize_key(word) in self._unknown

    def unknown_words(self) -> list[str]:
        with self._lock:
            return sorted(self._unknown)

    def stats(self) -> dict:
        with self._lock:
            return {
                "entries": len(self._entries),
                "unknown": len(self._unknown),
                "cache_path": str(self.cache_path),
                "unknown_path": str(self.unknown_path) if self.unknown_path else None,
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, word: str) -> bool:
        with self._lock:
            return normalize_key(word) in self._entries
