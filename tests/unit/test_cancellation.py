"""Tests for cancellation tokens."""

import pytest
from unittest.mock import patch

from neo_identity.core.cancellation import CancellationToken, bounded_timeout, ensure_not_cancelled
from neo_identity.core.exceptions import OperationCancelledError


class TestCancellationToken:
    """Test cancel flag and deadline handling."""

    def test_fresh_token_is_not_cancelled(self):
        token = CancellationToken()

        assert not token.is_cancellation_requested
        assert token.remaining() is None
        token.raise_if_cancelled("anything")

    def test_cancel_sets_flag(self):
        token = CancellationToken()
        token.cancel()

        assert token.is_cancellation_requested
        with pytest.raises(OperationCancelledError) as exc_info:
            token.raise_if_cancelled("find_by_id")
        assert exc_info.value.operation == "find_by_id"

    def test_cancelled_factory(self):
        assert CancellationToken.cancelled().is_cancellation_requested

    def test_deadline_passes(self):
        with patch("neo_identity.core.cancellation.time.monotonic", return_value=100.0):
            token = CancellationToken.with_timeout(5)
        assert token.deadline == 105.0

        with patch("neo_identity.core.cancellation.time.monotonic", return_value=103.0):
            assert not token.is_cancellation_requested
            assert token.remaining() == pytest.approx(2.0)

        with patch("neo_identity.core.cancellation.time.monotonic", return_value=106.0):
            assert token.is_cancellation_requested
            assert token.remaining() == 0.0
            with pytest.raises(OperationCancelledError, match="deadline exceeded"):
                token.raise_if_cancelled()


class TestHelpers:
    """Test module level helpers."""

    def test_missing_token_never_cancels(self):
        ensure_not_cancelled(None, "op")

    def test_ensure_not_cancelled_raises(self, cancelled_token):
        with pytest.raises(OperationCancelledError):
            ensure_not_cancelled(cancelled_token, "op")

    def test_bounded_timeout_without_token(self):
        assert bounded_timeout(None, 10.0) == 10.0
        assert bounded_timeout(None, None) is None

    def test_bounded_timeout_takes_smaller(self):
        token = CancellationToken()
        with patch.object(token, "remaining", return_value=3.0):
            assert bounded_timeout(token, 10.0) == 3.0
            assert bounded_timeout(token, 1.0) == 1.0
            assert bounded_timeout(token, None) == 3.0
