"""Default stack-trace formatter.

This module renders crash stack traces into text for the ``stacktrace``
metadata entry. Encoders accept any ``stacktrace -> str`` callable in
its place.
"""

from __future__ import annotations

import traceback
from collections.abc import Sequence
from types import TracebackType
from typing import Callable

StacktraceFormatter = Callable[[object], str]


def format_stacktrace(stacktrace: object) -> str:
    """Format a stack trace as text.

    Args:
        stacktrace: Traceback object, StackSummary, list of FrameSummary or
            ``(filename, lineno, name, line)`` tuples, pre-rendered frame
            strings, or None. Any other frame list renders one ``str(frame)``
            per line.

    Returns:
        Multi-line stack trace text, empty when no frames are given.
    """
    if stacktrace is None:
        return ""
    if isinstance(stacktrace, str):
        return stacktrace
    if isinstance(stacktrace, TracebackType):
        return "".join(traceback.format_tb(stacktrace))
    if isinstance(stacktrace, Sequence):
        return _format_frames(stacktrace)
    return str(stacktrace)


def _format_frames(frames: Sequence[object]) -> str:
    if frames and all(_is_summary_frame(frame) for frame in frames):
        summary = traceback.StackSummary.from_list(list(frames))  # type: ignore[arg-type]
        return "".join(summary.format())
    return "\n".join(_frame_text(frame) for frame in frames)


def _is_summary_frame(frame: object) -> bool:
    if isinstance(frame, traceback.FrameSummary):
        return True
    return isinstance(frame, tuple) and len(frame) == 4


def _frame_text(frame: object) -> str:
    if isinstance(frame, str):
        return frame.rstrip("\n")
    return str(frame)
