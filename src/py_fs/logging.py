"""Operation log — an audit trail of the calls made on a filesystem backend.

When a test fails against the emulator it helps to see the exact
sequence of calls that led there, and which of them failed with what.
Each call a backend records becomes one structured entry:

- **LogLevel** — severity levels ordered for filtering (DEBUG < ERROR).
- **LogEntry** — one call: the operation, its path, the backend, and
  for a failed call the ``ErrorKind`` it failed with.
- **Logger** — an append-only record of entries with queries over it.

Backends log DEBUG for queries, INFO for successful mutations, and
WARNING for failed calls.  File content never reaches the log: an entry
holds the path a call was made on, not its data.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from py_fs.errors import ErrorKind


class LogLevel(IntEnum):
    """Severity levels for log entries.

    Using IntEnum means levels compare with ``<`` / ``>`` naturally,
    which makes minimum-level filtering trivial.
    """

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LogEntry:
    """One recorded filesystem call.

    Attributes:
        level: The severity of this event.
        operation: The backend method that ran (e.g. "rename").
        source: The backend that ran it ("fake" or "os").
        path: The first path argument of the call, if it took one.
        kind: How the call failed, or None if it succeeded.
        detail: The error text of a failed call.

    """

    level: LogLevel
    operation: str
    source: str
    path: str | None = None
    kind: ErrorKind | None = None
    detail: str = ""

    @property
    def failed(self) -> bool:
        """Return True if the call raised."""
        return self.kind is not None

    @property
    def message(self) -> str:
        """Describe the call as ``operation path``, plus how it failed."""
        text = self.operation if self.path is None else f"{self.operation} {self.path}"
        if self.kind is None:
            return text
        return f"{text}: failed ({self.kind}) {self.detail}".rstrip()

    def __str__(self) -> str:
        """Format as ``[LEVEL] source: message``."""
        return f"[{self.level.name}] {self.source}: {self.message}"


class Logger:
    """Append-only record of filesystem calls."""

    def __init__(self) -> None:
        """Create an empty logger."""
        self._entries: list[LogEntry] = []

    @property
    def entries(self) -> list[LogEntry]:
        """Return all log entries in chronological order."""
        return list(self._entries)

    def record(
        self,
        level: LogLevel,
        operation: str,
        *,
        source: str,
        path: str | None = None,
        kind: ErrorKind | None = None,
        detail: str = "",
    ) -> LogEntry:
        """Append the entry for one call and return it."""
        entry = LogEntry(
            level=level,
            operation=operation,
            source=source,
            path=path,
            kind=kind,
            detail=detail,
        )
        self._entries.append(entry)
        return entry

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
        operation: str | None = None,
        kind: ErrorKind | None = None,
    ) -> list[LogEntry]:
        """Return the entries matching every given criterion.

        Args:
            min_level: Keep entries at or above this level.
            source: Keep entries from this backend.
            operation: Keep calls of this operation.
            kind: Keep calls that failed with this kind.

        """
        return [
            e
            for e in self._entries
            if (min_level is None or e.level >= min_level)
            and (source is None or e.source == source)
            and (operation is None or e.operation == operation)
            and (kind is None or e.kind is kind)
        ]

    def failures(self) -> list[LogEntry]:
        """Return the entries of calls that raised."""
        return [e for e in self._entries if e.failed]

    def clear(self) -> None:
        """Forget every recorded call."""
        self._entries.clear()
