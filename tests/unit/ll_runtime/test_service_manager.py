import subprocess

import pytest

from ll_runtime import service_manager as sm
from ll_runtime.api import InitSystem, ServiceManager

pytestmark = pytest.mark.unit_runtime


@pytest.fixture
def commands(monkeypatch):
    seen = []
    codes = {}

    def _run(cmd, **kwargs):
        seen.append(cmd)
        key = " ".join(cmd)
        return subprocess.CompletedProcess(cmd, codes.get(key, 1), stdout="", stderr="")

    monkeypatch.setattr(subprocess, "run", _run)
    return seen, codes


def test_systemd_start_uses_sudo_and_resolved_unit(tmp_path, commands):
    seen, codes = commands
    codes["systemctl status ollama"] = 3
    codes["sudo systemctl start ollama"] = 0

    manager = ServiceManager(tmp_path, init_system=InitSystem.SYSTEMD)

    assert manager.start("ollama")
    assert ["sudo", "systemctl", "start", "ollama"] in seen


def test_manual_start_when_no_init_system(tmp_path, monkeypatch):
    launched = []

    class _Popen:
        def __init__(self, cmd, **kwargs):
            launched.append((cmd, kwargs))

    monkeypatch.setattr(sm.shutil, "which", lambda name: f"/usr/local/bin/{name}")
    monkeypatch.setattr(sm.subprocess, "Popen", _Popen)

    manager = ServiceManager(tmp_path, init_system=InitSystem.NONE)

    assert manager.start("ollama")
    cmd, kwargs = launched[0]
    assert cmd == ["/usr/local/bin/ollama", "serve"]
    assert kwargs["start_new_session"] is True
    assert manager.log_path("ollama").exists()


def test_manual_start_without_binary_fails(tmp_path, monkeypatch):
    monkeypatch.setattr(sm.shutil, "which", lambda name: None)

    assert not ServiceManager(tmp_path, init_system=InitSystem.NONE).start("ollama")


def test_stop_falls_back_to_pkill(tmp_path, commands):
    seen, codes = commands
    codes["pgrep -x ollama"] = 0
    codes["pkill -TERM -f ollama serve"] = 0

    assert ServiceManager(tmp_path, init_system=InitSystem.NONE).stop("ollama")
    assert seen[-1] == ["pkill", "-TERM", "-f", "ollama serve"]
