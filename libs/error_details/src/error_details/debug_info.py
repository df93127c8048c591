"""Build ``google.rpc.DebugInfo`` payloads from error values.

Only a stack trace that is already attached to an error is extracted. An
error exposes one by implementing ``StackTracer``; ``TracedError`` and
``with_stack`` attach the creation-site stack to an error so it can be
reported later.
"""

from __future__ import annotations

import inspect
import logging
import traceback
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from google.rpc import error_details_pb2

from .config import ErrorDetailsSettings, get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StackFrame:
    """One call-stack frame with full positional detail."""

    function: str
    filename: str
    lineno: int

    @classmethod
    def from_frame_summary(cls, summary: traceback.FrameSummary) -> StackFrame:
        return cls(
            function=summary.name,
            filename=summary.filename,
            lineno=summary.lineno or 0,
        )

    def format(self) -> str:
        """Render as ``function`` then ``file:line`` on a tab-indented line."""
        return f"{self.function}\n\t{self.filename}:{self.lineno}"


@runtime_checkable
class StackTracer(Protocol):
    """Capability of an error value that carries its own stack trace."""

    def stack_trace(self) -> Sequence[StackFrame]:
        """Return the attached frames, innermost first."""
        ...


def _capture_stack(skip: int) -> tuple[StackFrame, ...]:
    # Drop this helper's own frame plus ``skip`` callers, innermost first.
    summaries = traceback.extract_stack()[: -(skip + 1)]
    return tuple(StackFrame.from_frame_summary(s) for s in reversed(summaries))


def _has_stack_trace(err: BaseException) -> bool:
    # Protocol isinstance only checks the attribute exists, not that it is callable.
    return isinstance(err, StackTracer) and callable(getattr(err, "stack_trace", None))


class TracedError(Exception):
    """Exception that records the call stack where it was created.

    Subclass ``__init__`` frames chained through ``super().__init__`` are
    skipped, so the innermost frame is always the creation site.
    """

    def __init__(self, *args: object) -> None:
        super().__init__(*args)
        skip = 0
        frame = inspect.currentframe()
        while (
            frame is not None
            and frame.f_code.co_name == "__init__"
            and frame.f_locals.get("self") is self
        ):
            skip += 1
            frame = frame.f_back
        del frame
        self._stack = _capture_stack(skip=skip)

    def stack_trace(self) -> Sequence[StackFrame]:
        return self._stack


def with_stack(err: BaseException) -> BaseException:
    """Attach the caller's stack to ``err``.

    Errors that already carry a stack trace are returned unchanged. Any other
    error is wrapped in a ``TracedError`` with the same message, chained via
    ``__cause__``.

    Args:
        err: Error value to annotate.

    Returns:
        An error implementing ``StackTracer``.
    """
    if _has_stack_trace(err):
        return err
    traced = TracedError(str(err))
    traced.__cause__ = err
    traced._stack = _capture_stack(skip=1)
    return traced


class DebugInfo:
    """Stack entries and message detail extracted from one error value."""

    __slots__ = ("_stack_entries", "_detail")

    def __init__(self, stack_entries: Sequence[str] = (), detail: str = "") -> None:
        self._stack_entries = tuple(stack_entries)
        self._detail = detail

    @classmethod
    def from_error(
        cls,
        err: BaseException,
        *,
        max_stack_entries: int | None = None,
    ) -> DebugInfo:
        """Extract debug info from an error value.

        The stack is read only when ``err`` implements ``StackTracer``;
        otherwise the stack entries are empty. The detail is always the
        error's message.

        Args:
            err: Error to inspect.
            max_stack_entries: Optional cap on captured entries, keeping the
                innermost frames.

        Returns:
            Debug info for ``err``.
        """
        stack_entries: list[str] = []
        if _has_stack_trace(err):
            try:
                frames = list(err.stack_trace())
                if max_stack_entries is not None:
                    frames = frames[:max_stack_entries]
                stack_entries = [
                    frame.format() if isinstance(frame, StackFrame) else str(frame)
                    for frame in frames
                ]
            except Exception:
                logger.warning(
                    "error_details.debug_info.stack_unavailable error_type=%s",
                    type(err).__name__,
                    exc_info=True,
                )
                stack_entries = []
        return cls(stack_entries=stack_entries, detail=str(err))

    @property
    def stack_entries(self) -> tuple[str, ...]:
        return self._stack_entries

    @property
    def detail(self) -> str:
        return self._detail

    def __repr__(self) -> str:
        return (
            f"DebugInfo(stack_entries={len(self._stack_entries)} entries, "
            f"detail={self._detail!r})"
        )

    def serialize(self) -> error_details_pb2.DebugInfo:
        """Convert to the protobuf ``DebugInfo`` message."""
        return error_details_pb2.DebugInfo(
            stack_entries=list(self._stack_entries),
            detail=self._detail,
        )


def build_debug_info(
    err: BaseException,
    settings: ErrorDetailsSettings | None = None,
) -> DebugInfo | None:
    """Build debug info for ``err`` if the settings allow it.

    Args:
        err: Error to inspect.
        settings: Settings to apply. Defaults to ``get_settings()``.

    Returns:
        Debug info, or ``None`` when debug info is disabled.
    """
    settings = settings or get_settings()
    if not settings.include_debug_info:
        logger.debug(
            "error_details.debug_info.disabled error_type=%s", type(err).__name__
        )
        return None
    return DebugInfo.from_error(err, max_stack_entries=settings.max_stack_entries)
