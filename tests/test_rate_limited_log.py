"""
Tests for the rate limiting cache implementation.

These tests verify that repeated warnings are emitted once per interval.
"""
import threading
from unittest.mock import patch, MagicMock

from cachetools import TTLCache

from contractkit_sdk import _rate_limited_log
from contractkit_sdk._rate_limited_log import rate_limited_log


class TestRateLimitedLog:
    """Tests for rate_limited_log."""

    def test_rate_limited_log_with_ttlcache(self):
        """Repeated messages are suppressed, new keys go through."""
        mock_cache = {}
        mock_lock = MagicMock()
        mock_logger = MagicMock()

        with patch('contractkit_sdk._rate_limited_log._log_cache', mock_cache), \
             patch('contractkit_sdk._rate_limited_log._log_cache_lock', mock_lock), \
             patch('contractkit_sdk._rate_limited_log.logger', mock_logger):

            # First log should go through
            assert rate_limited_log("Test message", level="warning")
            mock_logger.warning.assert_called_once_with("Test message")
            mock_lock.__enter__.assert_called()
            assert "warning:Test message" in mock_cache

            mock_logger.reset_mock()

            # Second immediate log should be suppressed
            assert not rate_limited_log("Test message", level="warning")
            mock_logger.warning.assert_not_called()

            # Different level should go through
            assert rate_limited_log("Test message", level="error")
            mock_logger.error.assert_called_once_with("Test message")
            assert "error:Test message" in mock_cache

    def test_explicit_key_groups_messages(self):
        mock_logger = MagicMock()
        assert rate_limited_log("oracle down (timeout)", key="oracle", logger_instance=mock_logger)
        assert not rate_limited_log("oracle down (500)", key="oracle", logger_instance=mock_logger)
        mock_logger.warning.assert_called_once_with("oracle down (timeout)")

    def test_unknown_level_falls_back_to_warning(self):
        mock_logger = MagicMock(spec=["warning"])
        rate_limited_log("odd level", level="loud", logger_instance=mock_logger)
        mock_logger.warning.assert_called_once_with("odd level")

    def test_entries_expire(self):
        """Entries leave the TTL cache after the interval."""
        now = [1000.0]
        cache = TTLCache(maxsize=10, ttl=60, timer=lambda: now[0])
        mock_logger = MagicMock()

        with patch('contractkit_sdk._rate_limited_log._log_cache', cache):
            assert rate_limited_log("again", logger_instance=mock_logger)
            assert not rate_limited_log("again", logger_instance=mock_logger)
            now[0] += 61
            assert rate_limited_log("again", logger_instance=mock_logger)

        assert mock_logger.warning.call_count == 2

    def test_clear(self):
        mock_logger = MagicMock()
        rate_limited_log("once", logger_instance=mock_logger)
        _rate_limited_log.clear()
        rate_limited_log("once", logger_instance=mock_logger)
        assert mock_logger.warning.call_count == 2

    def test_concurrent_callers_log_once(self):
        mock_logger = MagicMock()
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            rate_limited_log("contended", logger_instance=mock_logger)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        mock_logger.warning.assert_called_once_with("contended")
