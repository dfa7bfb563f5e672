import os
import signal

import pytest

from ll_common.api import LaunchInterrupted
from ll_core.api import TerminationGuard

pytestmark = pytest.mark.unit_core


def test_signal_runs_cleanup_once_and_raises():
    calls = []

    with pytest.raises(LaunchInterrupted):
        with TerminationGuard(lambda: calls.append("cleanup"), signals=(signal.SIGTERM,)):
            os.kill(os.getpid(), signal.SIGTERM)

    assert calls == ["cleanup"]


def test_previous_handlers_are_restored():
    previous = signal.getsignal(signal.SIGTERM)

    with TerminationGuard(lambda: None, signals=(signal.SIGTERM,)) as guard:
        assert signal.getsignal(signal.SIGTERM) != previous
        assert not guard.fired

    assert signal.getsignal(signal.SIGTERM) == previous
