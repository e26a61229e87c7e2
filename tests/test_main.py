import subprocess
import sys
from unittest.mock import MagicMock

import pytest

import main


def test_build_command_runs_frontend_with_current_interpreter():
    command = main.build_command(["--server.port", "8600"])

    assert command[:4] == [sys.executable, "-m", "streamlit", "run"]
    assert command[4].endswith("frontend/app.py") or command[4].endswith("frontend\\app.py")
    assert command[5:] == ["--server.port", "8600"]


def test_main_passes_flags_through(monkeypatch):
    run_mock = MagicMock()
    monkeypatch.setattr(main.subprocess, "run", run_mock)

    main.main(["--server.headless", "true"])

    command = run_mock.call_args[0][0]
    assert command[-2:] == ["--server.headless", "true"]
    assert run_mock.call_args[1] == {"check": True}


def test_main_exits_with_streamlit_status(monkeypatch):
    monkeypatch.setattr(
        main.subprocess, "run",
        MagicMock(side_effect=subprocess.CalledProcessError(3, ["streamlit"])),
    )

    with pytest.raises(SystemExit) as excinfo:
        main.main([])

    assert excinfo.value.code == 3
