"""In-memory line model for the file being viewed.

Lines are kept as raw bytes with their line terminators stripped. The store
only grows while loading; the viewer never edits it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from .errors import SourceOpenError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LineRecord:
    chars: bytes

    @property
    def size(self) -> int:
        return len(self.chars)

    def __len__(self) -> int:
        return len(self.chars)


class LineStore:
    """Append-only, randomly indexable sequence of ``LineRecord``."""

    def __init__(self, lines: Iterable[bytes] = ()) -> None:
        self._rows: list[LineRecord] = []
        for line in lines:
            self.append(line)

    def append(self, chars: bytes) -> LineRecord:
        record = LineRecord(bytes(chars))
        self._rows.append(record)
        return record

    def __len__(self) -> int:
        return len(self._rows)

    def __getitem__(self, index: int) -> LineRecord:
        return self._rows[index]

    def __iter__(self) -> Iterator[LineRecord]:
        return iter(self._rows)

    @property
    def line_count(self) -> int:
        return len(self._rows)

    def line_length(self, row: int) -> int:
        """Length of ``row``; rows outside the store count as empty."""
        if 0 <= row < len(self._rows):
            return self._rows[row].size
        return 0


def split_lines(data: bytes) -> list[bytes]:
    """Split file content the way ``getline`` would see it.

    Each line loses all trailing ``\\r``/``\\n`` bytes. A trailing newline does
    not produce an extra empty line, but an unterminated last line is kept.
    """
    if not data:
        return []
    parts = data.split(b"\n")
    if parts[-1] == b"":
        parts.pop()
    return [part.rstrip(b"\r\n") for part in parts]


def read_source(path: Path) -> bytes:
    """Return the raw bytes of ``path``."""
    path = Path(path)
    if path.is_dir():
        raise SourceOpenError(path, "is a directory")
    try:
        return path.read_bytes()
    except OSError as exc:
        raise SourceOpenError(path, exc.strerror or str(exc)) from exc


def load_lines(path: Path) -> LineStore:
    """Read ``path`` into a new ``LineStore``."""
    data = read_source(path)
    store = LineStore(split_lines(data))
    logger.info("loaded %d lines (%d bytes) from %s", store.line_count, len(data), path)
    return store
