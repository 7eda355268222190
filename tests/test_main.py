import runpy

import pytest

import main as entry
import tools.mcp_server as server_module


@pytest.fixture(autouse=True)
def _no_dotenv(monkeypatch):
    monkeypatch.setattr(entry, "load_dotenv", lambda: None)


def test_startup_failure_exits_with_status_1(monkeypatch, caplog) -> None:
    def _boom():
        raise RuntimeError("stdio unavailable")

    monkeypatch.setattr(server_module, "run_server", _boom)

    with pytest.raises(SystemExit) as excinfo:
        entry.main()

    assert excinfo.value.code == 1
    assert "Fatal error running server: stdio unavailable" in caplog.text


def test_keyboard_interrupt_exits_cleanly(monkeypatch) -> None:
    def _interrupt():
        raise KeyboardInterrupt

    monkeypatch.setattr(server_module, "run_server", _interrupt)

    entry.main()


def test_module_entry_point_delegates_to_main(monkeypatch) -> None:
    calls = []
    monkeypatch.setattr(entry, "main", lambda: calls.append("main"))

    runpy.run_module("tools.mcp_server", run_name="__main__")

    assert calls == ["main"]
