"""Unit tests for cancellation tokens and the SIGINT bridge."""

from __future__ import annotations

import signal
import threading

import pytest

from termfx.cancellation import CancellationToken, EffectOutcome, cancel_on_interrupt

pytestmark = [pytest.mark.unit]


class TestCancellationToken:
    """Test CancellationToken."""

    def test_initially_not_cancelled(self):
        """Test a new token is not cancelled."""
        assert not CancellationToken().cancelled

    def test_cancel_and_reset(self):
        """Test cancelling and clearing the flag."""
        token = CancellationToken()
        token.cancel()
        assert token.cancelled
        token.reset()
        assert not token.cancelled

    def test_cancel_from_other_thread(self):
        """Test the flag is visible across threads."""
        token = CancellationToken()
        thread = threading.Thread(target=token.cancel)
        thread.start()
        thread.join()
        assert token.cancelled

    def test_outcome_values(self):
        """Test outcome string values."""
        assert EffectOutcome.COMPLETED == "completed"
        assert EffectOutcome.CANCELLED == "cancelled"


class TestCancelOnInterrupt:
    """Test the SIGINT to cancellation bridge."""

    def test_sigint_cancels_token(self):
        """Test SIGINT inside the block sets the token instead of raising."""
        token = CancellationToken()
        with cancel_on_interrupt(token):
            signal.raise_signal(signal.SIGINT)
        assert token.cancelled

    def test_restores_previous_handler(self):
        """Test the previous SIGINT handler is put back."""
        before = signal.getsignal(signal.SIGINT)
        with cancel_on_interrupt(CancellationToken()):
            assert signal.getsignal(signal.SIGINT) is not before
        assert signal.getsignal(signal.SIGINT) is before

    def test_restores_handler_on_error(self):
        """Test the handler is restored when the block raises."""
        before = signal.getsignal(signal.SIGINT)
        with pytest.raises(ValueError), cancel_on_interrupt(CancellationToken()):
            msg = "boom"
            raise ValueError(msg)
        assert signal.getsignal(signal.SIGINT) is before

    def test_worker_thread_leaves_handler_alone(self):
        """Test no handler is installed off the main thread."""
        before = signal.getsignal(signal.SIGINT)
        seen = []

        def worker():
            token = CancellationToken()
            with cancel_on_interrupt(token) as yielded:
                seen.append(yielded is token)
                seen.append(signal.getsignal(signal.SIGINT) is before)

        thread = threading.Thread(target=worker)
        thread.start()
        thread.join()
        assert seen == [True, True]
