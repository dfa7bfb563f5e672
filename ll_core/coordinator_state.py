"""Launch lifecycle state machine primitives."""

from __future__ import annotations

from enum import Enum
from typing import Callable, List, Optional, Tuple


class LaunchState(str, Enum):
    """Launch phases, in the order a successful run passes through them."""

    INIT = "init"
    NETWORK_READY = "network_ready"
    BACKEND_CONFIGURED = "backend_configured"
    BACKEND_VERIFIED = "backend_verified"
    UI_LAUNCHED = "ui_launched"
    CONNECTIVITY_VERIFIED = "connectivity_verified"
    DONE = "done"
    FAILED = "failed"


# Happy path; each state may only advance to the one after it.
LAUNCH_ORDER: Tuple[LaunchState, ...] = (
    LaunchState.INIT,
    LaunchState.NETWORK_READY,
    LaunchState.BACKEND_CONFIGURED,
    LaunchState.BACKEND_VERIFIED,
    LaunchState.UI_LAUNCHED,
    LaunchState.CONNECTIVITY_VERIFIED,
    LaunchState.DONE,
)

TransitionCallback = Callable[[LaunchState, Optional[str]], None]


def next_state(state: LaunchState) -> Optional[LaunchState]:
    """Successor of ``state`` on the happy path, None for terminal states."""
    if state not in LAUNCH_ORDER or state == LaunchState.DONE:
        return None
    return LAUNCH_ORDER[LAUNCH_ORDER.index(state) + 1]


class LaunchStateMachine:
    """Forward-only launch tracker; FAILED is reachable from any non-terminal state."""

    def __init__(self) -> None:
        self.history: List[Tuple[LaunchState, Optional[str]]] = [(LaunchState.INIT, None)]
        self._callbacks: List[TransitionCallback] = []

    @property
    def state(self) -> LaunchState:
        return self.history[-1][0]

    @property
    def reason(self) -> Optional[str]:
        return self.history[-1][1]

    @property
    def last_completed(self) -> LaunchState:
        """Furthest happy-path state reached, even after a failure."""
        return [state for state, _ in self.history if state != LaunchState.FAILED][-1]

    def is_terminal(self) -> bool:
        return self.state in (LaunchState.DONE, LaunchState.FAILED)

    def register_callback(self, callback: TransitionCallback) -> None:
        """Register a callback invoked after every transition."""
        self._callbacks.append(callback)

    def transition(self, new_state: LaunchState, reason: Optional[str] = None) -> LaunchState:
        """Move to ``new_state``; raise ValueError when it skips or rewinds a phase."""
        if self.is_terminal():
            raise ValueError(f"Launch already finished in {self.state.value}")
        if new_state != LaunchState.FAILED and new_state != next_state(self.state):
            raise ValueError(f"Invalid transition {self.state.value} -> {new_state.value}")
        self.history.append((new_state, reason))
        for callback in list(self._callbacks):
            callback(new_state, reason)
        return new_state

    def snapshot(self) -> Tuple[LaunchState, Optional[str]]:
        return self.history[-1]
