"""
Stack capture for faultline error values.

A stack trace is captured once per failure chain link and never mutated
afterwards. Wrappers reuse the stack of the error they wrap instead of
capturing a second one, so the reported site is always the original
failure, not the place where it was annotated.

Manifesto:
    - **Capture once:** A chain of wrappers shares one stack
    - **Caller first:** Frames belonging to the error machinery are skipped
    - **Never fail:** An unresolvable frame degrades, it does not raise
    - **No frame objects kept:** Only names and locations are stored

Architecture:
    ::

        capture(skip)            from_traceback(tb)
             │                          │
             ▼                          ▼
        ┌─────────────────────────────────────────┐
        │ StackTrace (frozen, innermost first)     │
        │   frames: tuple[Frame, ...]              │
        └─────────────────────────────────────────┘
                          ▲
                          │ stack_of(err)
        TracedError.stack_trace() │ raised exception.__traceback__

Examples:
    >>> def where():
    ...     return capture()
    >>> where()[0].name
    'where'

Tags:
    stack-trace, diagnostics, capture, faultline-core

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import inspect
import linecache
from collections.abc import Iterator
from dataclasses import dataclass
from types import FrameType, TracebackType
from typing import Any

UNKNOWN_FILE = "<unknown>"


@dataclass(frozen=True)
class Frame:
    """One call-site: function name and source location."""

    name: str
    filename: str
    lineno: int

    @classmethod
    def from_frame(cls, frame: FrameType, lineno: int | None = None) -> Frame:
        code = frame.f_code
        return cls(
            name=code.co_name or "<anonymous>",
            filename=code.co_filename or UNKNOWN_FILE,
            lineno=(lineno if lineno is not None else frame.f_lineno) or 0,
        )

    @property
    def line(self) -> str | None:
        """Source text of the frame, if the file can still be read."""
        if self.filename == UNKNOWN_FILE or self.lineno <= 0:
            return None
        text = linecache.getline(self.filename, self.lineno).strip()
        return text or None

    def format(self) -> str:
        return f"    {self.filename}:{self.lineno} in {self.name}"

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "filename": self.filename, "lineno": self.lineno}


@dataclass(frozen=True)
class StackTrace:
    """Immutable, ordered call-stack snapshot. ``frames[0]`` is the call site."""

    frames: tuple[Frame, ...] = ()

    def __len__(self) -> int:
        return len(self.frames)

    def __iter__(self) -> Iterator[Frame]:
        return iter(self.frames)

    def __getitem__(self, index: int) -> Frame:
        return self.frames[index]

    def __bool__(self) -> bool:
        return bool(self.frames)

    def format_lines(self) -> list[str]:
        """One line per frame, innermost first."""
        return [frame.format() for frame in self.frames]

    def to_list(self) -> list[dict[str, Any]]:
        return [frame.to_dict() for frame in self.frames]


def capture(skip: int = 0, limit: int | None = None) -> StackTrace:
    """Snapshot the current call stack.

    Args:
        skip: Number of inner frames to drop. With ``skip=0`` the first frame
            is the function that called ``capture``.
        limit: Maximum number of frames to keep (None for all).
    """
    current = inspect.currentframe()
    if current is None:
        # interpreter without frame introspection
        return StackTrace()

    try:
        frame = current.f_back
        for _ in range(skip):
            if frame is None:
                break
            frame = frame.f_back

        frames: list[Frame] = []
        while frame is not None and (limit is None or len(frames) < limit):
            frames.append(Frame.from_frame(frame))
            frame = frame.f_back
    finally:
        del current

    return StackTrace(tuple(frames))


def from_traceback(tb: TracebackType | None, limit: int | None = None) -> StackTrace:
    """Convert a traceback into a StackTrace, innermost (raise site) first."""
    frames: list[Frame] = []
    while tb is not None:
        frames.append(Frame.from_frame(tb.tb_frame, tb.tb_lineno))
        tb = tb.tb_next
    frames.reverse()
    if limit is not None:
        frames = frames[:limit]
    return StackTrace(tuple(frames))


class TracedError(Exception):
    """Base for faultline error values that can report a stack trace."""

    def stack_trace(self) -> StackTrace | None:
        raise NotImplementedError


def stack_of(err: BaseException | None) -> StackTrace | None:
    """Return the stack an error exposes, or None if it carries none.

    faultline values answer through ``stack_trace()``; any other exception
    exposes a stack only once it has been raised.
    """
    if err is None:
        return None
    if isinstance(err, TracedError):
        return err.stack_trace()
    if isinstance(err, BaseException) and err.__traceback__ is not None:
        return from_traceback(err.__traceback__)
    return None


__all__ = [
    "Frame",
    "StackTrace",
    "TracedError",
    "capture",
    "from_traceback",
    "stack_of",
]
