import pytest

from ll_core.api import BackendKind
from ll_ui.flows.backend_menu import backend_menu_table, choose_backend
from ll_ui.tui.system.headless import HeadlessUI

pytestmark = pytest.mark.unit_ui


def test_menu_lists_every_backend():
    table = backend_menu_table()

    assert [row[1] for row in table.rows] == [k.value for k in BackendKind]


@pytest.mark.parametrize(
    "answer, expected",
    [("1", BackendKind.LOCAL_PROCESS), ("lmstudio", BackendKind.REMOTE_OPENAI_COMPATIBLE)],
)
def test_choice_by_number_or_name(answer, expected):
    ui = HeadlessUI(next_form_response=answer)

    assert choose_backend(ui, require_tty=False) == expected
    assert ui.recorded_prompts == ["Backend"]


def test_non_tty_is_rejected(monkeypatch):
    monkeypatch.setattr("sys.stdin.isatty", lambda: False)

    with pytest.raises(ValueError):
        choose_backend(HeadlessUI())
