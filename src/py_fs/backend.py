"""Plumbing shared by the filesystem backends.

Every public operation of a backend is wrapped by ``operation()``, which
gives the backend one choke-point for two cross-cutting concerns:

- **Exclusion** — the wrapped call runs inside ``self._guard()``.  The
  emulator returns its lock there; the OS backend needs none.
- **Audit** — if the backend was given a ``Logger``, the call is
  recorded: at the operation's level on success, at WARNING with the
  failure kind on error.  The error itself is re-raised unchanged.
"""

from __future__ import annotations

import contextlib
import functools
from collections.abc import Callable
from typing import Any, Concatenate, ParamSpec, TypeVar

from py_fs.errors import ErrorKind, error_kind, fs_error
from py_fs.logging import Logger, LogLevel
from py_fs.paths import CURRENT_DIR, PARENT_DIR

P = ParamSpec("P")
R = TypeVar("R")
B = TypeVar("B", bound="Backend")


class Backend:
    """Base class holding the optional logger of a backend."""

    source = "backend"

    def __init__(self, *, logger: Logger | None = None) -> None:
        """Create a backend, optionally recording calls to *logger*."""
        self._logger = logger

    @property
    def logger(self) -> Logger | None:
        """Return the logger calls are recorded to, if any."""
        return self._logger

    def _guard(self) -> contextlib.AbstractContextManager[Any]:
        return contextlib.nullcontext()

    def _record(self, level: LogLevel, name: str, args: tuple[Any, ...], exc: OSError | None = None) -> None:
        if self._logger is None:
            return
        self._logger.record(
            level,
            name,
            source=self.source,
            path=str(args[0]) if args else None,
            kind=None if exc is None else error_kind(exc),
            detail="" if exc is None else str(exc),
        )


def operation(
    level: LogLevel,
) -> Callable[[Callable[Concatenate[B, P], R]], Callable[Concatenate[B, P], R]]:
    """Wrap a backend method with its guard and audit logging."""

    def decorator(method: Callable[Concatenate[B, P], R]) -> Callable[Concatenate[B, P], R]:
        name = method.__name__

        @functools.wraps(method)
        def wrapper(self: B, *args: P.args, **kwargs: P.kwargs) -> R:
            with self._guard():
                try:
                    result = method(self, *args, **kwargs)
                except OSError as exc:
                    self._record(LogLevel.WARNING, name, args, exc)
                    raise
                self._record(level, name, args)
                return result

        return wrapper

    return decorator


def refuse_dot_removal(last: str, path: str) -> None:
    """Refuse to remove a directory named through ``.`` or ``..``.

    ``rmdir("d/.")`` and ``rmdir("d/..")`` fail on Linux instead of
    removing ``d`` or its parent; both backends apply the same rule to
    recursive removal too.

    Raises:
        OSError: (EINVAL) for ``.``; (ENOTEMPTY) for ``..``.

    """
    if last == CURRENT_DIR:
        raise fs_error(ErrorKind.INVALID_INPUT, path)
    if last == PARENT_DIR:
        raise fs_error(ErrorKind.DIRECTORY_NOT_EMPTY, path)
