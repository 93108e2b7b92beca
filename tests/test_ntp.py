"""
Tests for chetutils.timesync.ntp.

These tests verify:
1. Request packet layout
2. Transmit timestamp decoding
3. Error wrapping and the local-time fallback
"""

import logging
from datetime import datetime, timezone

import pytest

from chetutils.timesync import ntp


def _reply(seconds, fraction=0):
    """48-byte reply carrying the given transmit timestamp."""
    packet = bytearray(ntp.PACKET_SIZE)
    packet[40:44] = seconds.to_bytes(4, "big")
    packet[44:48] = fraction.to_bytes(4, "big")
    return bytes(packet)


# Seconds between 1900-01-01 and 1970-01-01
UNIX_EPOCH_NTP_SECONDS = 2208988800


# =============================================================================
# PACKET TESTS
# =============================================================================

class TestPackets:
    """Test request building and reply parsing."""

    def test_build_request(self):
        """48 bytes, client mode header, rest zero."""
        request = ntp.build_request()

        assert len(request) == 48
        assert request[0] == 0x1B
        assert request[1:] == bytes(47)

    def test_parse_unix_epoch(self):
        """The Unix epoch decodes exactly."""
        parsed = ntp.parse_response(_reply(UNIX_EPOCH_NTP_SECONDS))

        assert parsed == datetime(1970, 1, 1, tzinfo=timezone.utc)

    def test_parse_fraction_to_milliseconds(self):
        """Half a second of fraction becomes 500 ms."""
        parsed = ntp.parse_response(_reply(UNIX_EPOCH_NTP_SECONDS, 0x80000000))

        assert parsed == datetime(1970, 1, 1, 0, 0, 0, 500000, tzinfo=timezone.utc)

    def test_parse_short_reply(self):
        """Replies under 48 bytes are rejected."""
        with pytest.raises(ntp.NtpError):
            ntp.parse_response(bytes(20))


# =============================================================================
# QUERY TESTS
# =============================================================================

class TestQueries:
    """Test network time queries with a stubbed exchange."""

    def test_get_network_time_local_naive(self, monkeypatch):
        """The reply converts to naive local time."""
        monkeypatch.setattr(ntp, "_exchange", lambda *args: _reply(UNIX_EPOCH_NTP_SECONDS))

        result = ntp.get_network_time("example.invalid")

        expected = datetime(1970, 1, 1, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
        assert result.tzinfo is None
        assert result == expected

    def test_get_network_time_wraps_os_error(self, monkeypatch):
        """Socket failures surface as NtpError."""
        def fail(*args):
            raise TimeoutError("timed out")

        monkeypatch.setattr(ntp, "_exchange", fail)

        with pytest.raises(ntp.NtpError, match="example.invalid"):
            ntp.get_network_time("example.invalid")

    def test_fallback_to_local(self, monkeypatch, caplog):
        """A failed query returns the supplied local time and warns."""
        def fail(*args):
            raise OSError("unreachable")

        monkeypatch.setattr(ntp, "_exchange", fail)
        local = datetime(2025, 1, 1, 12, 0)

        with caplog.at_level(logging.WARNING, logger="chetutils"):
            result = ntp.get_network_time_or_local("example.invalid", now=local)

        assert result == local
        assert "falling back to local time" in caplog.text

    def test_fallback_not_used_on_success(self, monkeypatch):
        """A good reply wins over the local time."""
        monkeypatch.setattr(ntp, "_exchange", lambda *args: _reply(UNIX_EPOCH_NTP_SECONDS))

        result = ntp.get_network_time_or_local("example.invalid", now=datetime(2025, 1, 1))

        assert result.year in (1969, 1970)
