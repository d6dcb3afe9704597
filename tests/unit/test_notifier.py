"""Tests for the Notifier dispatcher and its sinks."""

from __future__ import annotations

import io
import logging

import pytest
from rich.console import Console

from focusloop.models.intervals import IntervalKind
from focusloop.models.notifications import BREAK_COMPLETE, WORK_COMPLETE, Notification
from focusloop.notify import default_notifier
from focusloop.notify.dispatcher import Notifier
from focusloop.notify.sinks import NotificationSink, NotificationUnavailableError
from focusloop.notify.sinks import desktop as desktop_module
from focusloop.notify.sinks.bell import TerminalBellSink
from focusloop.notify.sinks.desktop import DesktopSink, build_command

from conftest import RecordingSink


class FailingSink:
    @property
    def sink_name(self) -> str:
        return "failing"

    def deliver(self, notification: Notification) -> None:
        raise OSError("daemon not running")


class TestDispatch:
    def test_all_sinks_receive(self):
        a, b = RecordingSink(name="a"), RecordingSink(name="b")
        notifier = Notifier()
        notifier.register_sink(a)
        notifier.register_sink(b)
        assert notifier.dispatch(WORK_COMPLETE) == ["a", "b"]
        assert a.received == b.received == [WORK_COMPLETE]

    def test_duplicate_registration_ignored(self):
        sink = RecordingSink()
        notifier = Notifier()
        notifier.register_sink(sink)
        notifier.register_sink(sink)
        assert len(notifier.registered_sinks) == 1

    def test_unregister(self):
        sink = RecordingSink()
        notifier = Notifier()
        notifier.register_sink(sink)
        notifier.unregister_sink(sink)
        notifier.unregister_sink(sink)
        assert notifier.dispatch(WORK_COMPLETE) == []

    def test_failing_sink_logged_and_others_still_delivered(self, caplog: pytest.LogCaptureFixture):
        good = RecordingSink()
        notifier = Notifier()
        notifier.register_sink(FailingSink())
        notifier.register_sink(good)

        with caplog.at_level(logging.WARNING, logger="focusloop"):
            delivered = notifier.dispatch(BREAK_COMPLETE)

        assert delivered == ["recording"]
        assert good.received == [BREAK_COMPLETE]
        assert "failing" in caplog.text
        assert "daemon not running" in caplog.text

    def test_disabled_delivers_nothing(self):
        sink = RecordingSink()
        notifier = Notifier(enabled=False)
        notifier.register_sink(sink)
        assert notifier.notify_work_complete() == []
        assert sink.received == []

    def test_no_sinks(self):
        assert Notifier().notify_break_complete() == []

    @pytest.mark.parametrize(
        "kind,expected", [(IntervalKind.WORK, WORK_COMPLETE), (IntervalKind.BREAK, BREAK_COMPLETE)]
    )
    def test_notify_complete_by_kind(self, kind: IntervalKind, expected: Notification):
        sink = RecordingSink()
        notifier = Notifier()
        notifier.register_sink(sink)
        notifier.notify_complete(kind)
        assert sink.received == [expected]


class TestNotificationText:
    def test_work_complete(self):
        assert WORK_COMPLETE.title == "Work Complete"
        assert WORK_COMPLETE.message == "Time for a break!"

    def test_break_complete(self):
        assert BREAK_COMPLETE.title == "Break Complete"
        assert BREAK_COMPLETE.message == "Ready for another session?"


class TestDesktopSink:
    def test_linux_command(self):
        assert build_command(WORK_COMPLETE, "Linux") == [
            "notify-send",
            "Work Complete",
            "Time for a break!",
        ]

    def test_macos_command_quotes(self):
        note = Notification(title='Say "hi"', message="a\\b", kind=IntervalKind.WORK)
        cmd = build_command(note, "Darwin")
        assert cmd[:2] == ["osascript", "-e"]
        assert 'display notification "a\\\\b" with title "Say \\"hi\\""' in cmd[2]

    def test_unsupported_platform(self):
        with pytest.raises(NotificationUnavailableError):
            build_command(WORK_COMPLETE, "Windows")

    def test_missing_binary(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr(desktop_module.shutil, "which", lambda name: None)
        with pytest.raises(NotificationUnavailableError, match="notify-send"):
            DesktopSink(system="Linux").deliver(WORK_COMPLETE)

    def test_launches_without_waiting(self, monkeypatch: pytest.MonkeyPatch):
        launched: list[list[str]] = []

        class FakePopen:
            def __init__(self, cmd, **kwargs):
                launched.append(cmd)

            def wait(self):
                raise AssertionError("desktop notifications must not be awaited")

        monkeypatch.setattr(desktop_module.shutil, "which", lambda name: f"/usr/bin/{name}")
        monkeypatch.setattr(desktop_module.subprocess, "Popen", FakePopen)
        DesktopSink(system="Linux").deliver(BREAK_COMPLETE)
        assert launched == [["notify-send", "Break Complete", "Ready for another session?"]]


class TestBellAndDefaults:
    def test_bell_writes_bel(self):
        buf = io.StringIO()
        console = Console(file=buf, force_terminal=True)
        TerminalBellSink(console).deliver(WORK_COMPLETE)
        assert "\a" in buf.getvalue()

    def test_sinks_satisfy_protocol(self):
        assert isinstance(DesktopSink(system="Linux"), NotificationSink)
        assert isinstance(TerminalBellSink(Console(file=io.StringIO())), NotificationSink)

    def test_default_notifier(self):
        notifier = default_notifier(enabled=False, console=Console(file=io.StringIO()))
        assert [s.sink_name for s in notifier.registered_sinks] == ["desktop", "bell"]
        assert notifier.enabled is False
