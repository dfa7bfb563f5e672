import logging

import pytest

from ll_common.api import configure_logging, parse_bool_env

pytestmark = pytest.mark.unit_common


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.parametrize(
    "raw, expected",
    [("1", True), ("Yes", True), ("on", True), ("0", False), ("nope", False), (None, None)],
)
def test_parse_bool_env(raw, expected):
    assert parse_bool_env(raw) is expected


def test_default_level_is_warning(restore_root_logger, monkeypatch):
    monkeypatch.delenv("LL_LOG_LEVEL", raising=False)

    configure_logging(force=True)

    assert restore_root_logger.level == logging.WARNING


def test_verbose_and_debug_flags(restore_root_logger, monkeypatch):
    monkeypatch.delenv("LL_LOG_LEVEL", raising=False)

    configure_logging(verbose=True, force=True)
    assert restore_root_logger.level == logging.INFO

    configure_logging(debug=True, force=True)
    assert restore_root_logger.level == logging.DEBUG


def test_env_level_and_log_file(restore_root_logger, monkeypatch, tmp_path):
    log_file = tmp_path / "launcher.log"
    monkeypatch.setenv("LL_LOG_LEVEL", "error")
    monkeypatch.setenv("LL_LOG_FILE", str(log_file))

    configure_logging(force=True)

    assert restore_root_logger.level == logging.ERROR
    assert any(isinstance(h, logging.FileHandler) for h in restore_root_logger.handlers)
    for handler in restore_root_logger.handlers:
        if isinstance(handler, logging.FileHandler):
            handler.close()


def test_read_bool_env_uses_given_mapping():
    from ll_common.api import read_bool_env

    assert read_bool_env("LL_USE_SUDO", {"LL_USE_SUDO": "true"}) is True
    assert read_bool_env("LL_USE_SUDO", {}) is None


def test_explicit_arguments_beat_environment(monkeypatch):
    from ll_common.api import resolve_settings

    monkeypatch.setenv("LL_LOG_JSON", "1")
    monkeypatch.setenv("LL_LOG_LEVEL", "debug")

    settings = resolve_settings(level="error", json=False)

    assert settings.level == logging.ERROR
    assert settings.json is False


def test_launch_context_is_bound_only_inside_block():
    import structlog

    from ll_common.api import launch_log_context

    with launch_log_context(backend="localai"):
        assert structlog.contextvars.get_contextvars()["backend"] == "localai"
    assert "backend" not in structlog.contextvars.get_contextvars()
