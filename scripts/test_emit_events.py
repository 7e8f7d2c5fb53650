"""
Tests for the emit_events command-line script.
"""

import io
import json
import sys
from types import SimpleNamespace

import pytest

from scripts.emit_events import main
from sse_stream.test_utils import StubSink


def test_main_writes_each_message_count_times(monkeypatch: pytest.MonkeyPatch):
    """Test that --count repeats the message built from the arguments."""
    stdout = io.TextIOWrapper(io.BytesIO(), encoding="utf-8")
    monkeypatch.setattr(sys, "stdout", stdout)
    monkeypatch.setattr(
        sys,
        "argv",
        [
            "emit_events.py",
            "--event",
            "ping",
            "--id",
            "7",
            "--count",
            "2",
            "abc",
            "1337",
        ],
    )

    main()

    assert stdout.buffer.getvalue() == b"event:ping\ndata:abc\ndata:1337\nid:7\n\n" * 2


def test_main_without_arguments_writes_empty_message(
    monkeypatch: pytest.MonkeyPatch,
):
    """Test that no arguments produce a single message terminator."""
    stdout = io.TextIOWrapper(io.BytesIO(), encoding="utf-8")
    monkeypatch.setattr(sys, "stdout", stdout)
    monkeypatch.setattr(sys, "argv", ["emit_events.py"])

    main()

    assert stdout.buffer.getvalue() == b"\n"


def test_main_reports_write_errors(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
):
    """Test that a failing stdout exits with status 1 and a JSON error."""
    failing_stdout = SimpleNamespace(buffer=StubSink(fail_writes=True))
    monkeypatch.setattr(sys, "stdout", failing_stdout)
    monkeypatch.setattr(sys, "argv", ["emit_events.py", "--retry", "3000", "abc"])

    with pytest.raises(SystemExit) as exc_info:
        main()

    assert exc_info.value.code == 1
    expected = {"error": "Error writing events: Simulated sink write failure"}
    assert json.dumps(expected, indent=2) in capsys.readouterr().err
