"""
Tests for logging setup: level resolution and per-tool record tagging.
"""

import logging
from pathlib import Path

import pytest

from idt.core.observability.logging_config import (
    NO_TOOL,
    ToolContextFilter,
    current_tool,
    resolve_level,
    setup_logging,
    tool_context,
)
from idt.core.services.tool_install.orchestration.orchestrator import run_installers
from idt.installers.mock import MockInstaller


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for h in root.handlers:
        if h not in handlers:
            h.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class _Collect(logging.Handler):
    def __init__(self):
        super().__init__(logging.DEBUG)
        self.addFilter(ToolContextFilter())
        self.records: list[logging.LogRecord] = []

    def emit(self, record):
        self.records.append(record)


# ── Level resolution ─────────────────────────────────────────────────


class TestResolveLevel:
    def test_flags_win(self, monkeypatch):
        monkeypatch.setenv("IDT_LOG_LEVEL", "ERROR")
        assert resolve_level(debug=True, quiet=True) == "DEBUG"
        assert resolve_level(verbose=True) == "INFO"
        assert resolve_level(quiet=True) == "ERROR"

    def test_env_then_default(self, monkeypatch):
        monkeypatch.setenv("IDT_LOG_LEVEL", "INFO")
        assert resolve_level() == "INFO"
        monkeypatch.delenv("IDT_LOG_LEVEL")
        assert resolve_level() == "WARNING"


# ── Tool context ─────────────────────────────────────────────────────


class TestToolContext:
    def test_binds_and_restores(self):
        assert current_tool() == NO_TOOL
        with tool_context("deno"):
            assert current_tool() == "deno"
            with tool_context("ruff"):
                assert current_tool() == "ruff"
            assert current_tool() == "deno"
        assert current_tool() == NO_TOOL

    def test_console_line_carries_tool(self, capsys, monkeypatch):
        monkeypatch.delenv("IDT_LOG_FILE", raising=False)
        setup_logging("INFO")
        log = logging.getLogger("idt.test")
        with tool_context("shellcheck"):
            log.info("fetching")
        log.info("done")

        err = capsys.readouterr().err
        assert "[shellcheck] fetching" in err
        assert f"[{NO_TOOL}] done" in err

    def test_warning_console_is_bare(self, capsys, monkeypatch):
        monkeypatch.delenv("IDT_LOG_FILE", raising=False)
        setup_logging("WARNING")
        with tool_context("x"):
            logging.getLogger("idt.test").warning("careful")
        assert capsys.readouterr().err == "careful\n"

    def test_file_handler(self, tmp_path: Path, monkeypatch):
        log_file = tmp_path / "idt.log"
        monkeypatch.setenv("IDT_LOG_FILE", str(log_file))
        monkeypatch.setenv("IDT_LOG_FILE_LEVEL", "DEBUG")
        setup_logging("ERROR")
        with tool_context("taplo"):
            logging.getLogger("idt.test").debug("building")
        for h in logging.getLogger().handlers:
            h.flush()
        assert "[taplo] idt.test" in log_file.read_text()
        assert logging.getLogger().level == logging.DEBUG

    def test_worker_threads_tag_their_own_tool(self):
        class Chatty(MockInstaller):
            def install(self):
                logging.getLogger("idt.test").info("installing %s", self.bin_name)
                return super().install()

        collector = _Collect()
        root = logging.getLogger()
        root.addHandler(collector)
        root.setLevel(logging.DEBUG)

        names = [f"tool{i}" for i in range(6)]
        run_installers([Chatty(n, delay=0.05) for n in names])

        mine = [r for r in collector.records if r.name == "idt.test"]
        assert sorted(r.tool for r in mine) == names
        for r in mine:
            assert r.getMessage() == f"installing {r.tool}"
