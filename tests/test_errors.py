"""Error tracker behaviour."""

from __future__ import annotations

import pytest

from componentlens.errors import ErrorTracker


def test_record_keeps_report_details() -> None:
    tracker = ErrorTracker()
    report = tracker.record(FileNotFoundError("no such file"), "read_component", file_path="a.tsx")

    assert report.operation == "read_component"
    assert report.file_path == "a.tsx"
    assert report.severity == "medium"
    assert report.recoverable is True
    assert tracker.reports() == [report]


def test_unknown_severity_is_rejected() -> None:
    with pytest.raises(ValueError):
        ErrorTracker().record(RuntimeError("boom"), "scan", severity="fatal")


def test_critical_errors_are_reraised() -> None:
    tracker = ErrorTracker()
    with pytest.raises(RuntimeError):
        tracker.record(RuntimeError("boom"), "scan", severity="critical")

    assert tracker.summary()["critical"] == 1
    assert tracker.summary()["unrecoverable"] == 1


def test_message_based_recoverability() -> None:
    tracker = ErrorTracker()
    report = tracker.record(RuntimeError("Parse error near line 3"), "extract_props", severity="low")

    assert report.recoverable is True


def test_tracker_is_bounded() -> None:
    tracker = ErrorTracker(max_errors=3)
    for index in range(5):
        tracker.record(ValueError(f"bad {index}"), "extract", severity="low")

    messages = [report.message for report in tracker.reports()]
    assert messages == ["bad 2", "bad 3", "bad 4"]


def test_summary_and_clear() -> None:
    tracker = ErrorTracker()
    tracker.record(OSError("denied"), "scan_directory", severity="low")
    tracker.record(KeyError("x"), "analyze", severity="high")

    summary = tracker.summary()
    assert summary["total"] == 2
    assert summary["low"] == 1
    assert summary["high"] == 1
    assert summary["recoverable"] == 1
    assert tracker.has_errors("high")

    tracker.clear()
    assert not tracker.has_errors()
