"""Tests for CancelToken and InterruptListener."""

from __future__ import annotations

import signal
import threading

import pytest

from focusloop.core.cancellation import CancelToken, InterruptListener


class TestCancelToken:
    def test_starts_uncancelled(self):
        token = CancelToken()
        assert token.cancelled is False
        assert token.wait(0.001) is False

    def test_cancel_is_observed_by_wait(self):
        token = CancelToken()
        token.cancel()
        assert token.cancelled is True
        assert token.wait(10) is True

    def test_cancel_is_idempotent(self):
        token = CancelToken()
        token.cancel()
        token.cancel()
        assert token.cancelled is True

    def test_cancel_from_another_thread_wakes_waiter(self):
        token = CancelToken()
        timer = threading.Timer(0.01, token.cancel)
        timer.start()
        try:
            assert token.wait(5) is True
        finally:
            timer.cancel()


class TestInterruptListener:
    def test_sigint_cancels_instead_of_raising(self):
        token = CancelToken()
        with InterruptListener(token) as listener:
            assert listener.installed
            signal.raise_signal(signal.SIGINT)
        assert token.cancelled is True

    def test_repeated_signals_are_harmless(self):
        token = CancelToken()
        with InterruptListener(token):
            signal.raise_signal(signal.SIGINT)
            signal.raise_signal(signal.SIGINT)
        assert token.cancelled is True

    def test_previous_handler_restored(self):
        before = signal.getsignal(signal.SIGINT)
        with InterruptListener(CancelToken()):
            assert signal.getsignal(signal.SIGINT) != before
        assert signal.getsignal(signal.SIGINT) == before

    def test_restored_after_exception(self):
        before = signal.getsignal(signal.SIGTERM)
        with pytest.raises(ValueError):
            with InterruptListener(CancelToken()):
                raise ValueError("boom")
        assert signal.getsignal(signal.SIGTERM) == before

    def test_off_main_thread_installs_nothing(self):
        results: dict[str, bool] = {}

        def worker():
            with InterruptListener(CancelToken()) as listener:
                results["installed"] = listener.installed

        thread = threading.Thread(target=worker)
        thread.start()
        thread.join(5)
        assert results == {"installed": False}
