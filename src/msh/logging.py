"""Shell audit log.

The shell reports every recoverable failure with the same one-line
message, so an operator cannot tell from the terminal *why* a command
failed.  The audit log keeps that detail: which path each command
resolved to, which pid ran it and how it exited, and what exactly was
wrong when something failed.

- **LogLevel** — severities, comparable with ``<`` for filtering.
- **LogEntry** — one immutable record (level, message, source).
- **Logger** — a bounded ring of recent entries.  ``flush`` appends
  the pending entries to a file and empties the ring.

The ring holds at most ``capacity`` entries; when it is full the oldest
entry is discarded and counted in ``dropped``.  A shell that runs for
hours therefore keeps a fixed amount of log in memory whether or not a
log file is configured.

Nothing in the log is written to stdout or stderr.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path

DEFAULT_CAPACITY = 1000


class LogLevel(IntEnum):
    """How serious an event is."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LogEntry:
    """A single audit record.

    Attributes:
        level: The severity of this event.
        message: What happened, with the detail the terminal hides.
        source: The component that logged it (e.g. "executor").

    """

    level: LogLevel
    message: str
    source: str

    def __str__(self) -> str:
        """Format as ``[LEVEL] source: message``."""
        return f"[{self.level.name}] {self.source}: {self.message}"


class Logger:
    """Bounded buffer of recent audit entries."""

    def __init__(self, *, capacity: int = DEFAULT_CAPACITY) -> None:
        """Create an empty log that keeps at most *capacity* entries."""
        self._entries: deque[LogEntry] = deque(maxlen=capacity)
        self._dropped = 0

    @property
    def entries(self) -> list[LogEntry]:
        """Return the pending entries, oldest first."""
        return list(self._entries)

    @property
    def dropped(self) -> int:
        """Return how many entries were discarded because the log was full."""
        return self._dropped

    def log(self, level: LogLevel, message: str, *, source: str) -> None:
        """Record an event, evicting the oldest entry if the log is full."""
        if len(self._entries) == self._entries.maxlen:
            self._dropped += 1
        self._entries.append(LogEntry(level=level, message=message, source=source))

    def filter(
        self,
        *,
        min_level: LogLevel = LogLevel.DEBUG,
        source: str | None = None,
    ) -> list[LogEntry]:
        """Return pending entries at or above *min_level*, optionally from one *source*."""
        return [
            e
            for e in self._entries
            if e.level >= min_level and (source is None or e.source == source)
        ]

    def flush(self, path: str | Path, *, min_level: LogLevel = LogLevel.DEBUG) -> None:
        """Append pending entries to *path* and empty the log.

        Entries below *min_level* are discarded without being written.
        If entries were dropped since the last flush, a line saying how
        many comes first.

        Raises:
            OSError: If the file cannot be opened for appending.  The
                pending entries are kept.

        """
        with Path(path).open("a", encoding="utf-8") as handle:
            if self._dropped:
                handle.write(f"[WARNING] log: {self._dropped} entries dropped\n")
            handle.writelines(f"{entry}\n" for entry in self.filter(min_level=min_level))
        self._entries.clear()
        self._dropped = 0
