"""Termination signal handling: stop what was started, then abort the launch."""

from __future__ import annotations

import signal
from collections.abc import Callable
from contextlib import AbstractContextManager
from types import FrameType
from typing import Any

from ll_common.errors import LaunchInterrupted

DEFAULT_SIGNALS: tuple[signal.Signals, ...] = tuple(
    sig
    for sig in (
        signal.SIGINT,
        signal.SIGTERM,
        getattr(signal, "SIGHUP", None),
    )
    if sig is not None
)


class TerminationGuard(AbstractContextManager["TerminationGuard"]):
    """Install handlers that run ``on_signal`` once and raise LaunchInterrupted.

    ``on_signal`` is expected to perform a best-effort reverse-order stop of
    the containers started so far. Previous handlers are restored on exit.
    """

    def __init__(
        self,
        on_signal: Callable[[], None],
        *,
        signals: tuple[signal.Signals, ...] = DEFAULT_SIGNALS,
    ) -> None:
        self._on_signal = on_signal
        self._signals = signals
        self._previous: dict[signal.Signals, Any] = {}
        self._fired = False

    @property
    def fired(self) -> bool:
        return self._fired

    def __enter__(self) -> "TerminationGuard":
        for sig in self._signals:
            self._previous[sig] = signal.getsignal(sig)
            signal.signal(sig, self._handle)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        for sig, handler in self._previous.items():
            if handler is not None:
                signal.signal(sig, handler)
        self._previous.clear()

    def _handle(self, signum: int, frame: FrameType | None) -> None:
        _ = frame
        if self._fired:
            return
        self._fired = True
        self._on_signal()
        raise LaunchInterrupted(
            f"Received {signal.Signals(signum).name}; cleanup completed",
            context={"signal": signum},
        )
