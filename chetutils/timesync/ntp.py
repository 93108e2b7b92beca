"""
Minimal SNTP client.

Sends the fixed 48-byte client request (LI=0, VN=3, Mode=3) over UDP and
reads the server's transmit timestamp from bytes 40-47 of the reply: a
32-bit count of seconds since 1900-01-01 UTC followed by a 32-bit binary
fraction.
"""

from __future__ import annotations

import logging
import socket
from datetime import datetime, timedelta, timezone
from typing import Optional

from ..config import NTP_PORT, NTP_SERVER, NTP_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

PACKET_SIZE = 48
CLIENT_MODE_HEADER = 0x1B
TRANSMIT_TIMESTAMP_OFFSET = 40
NTP_EPOCH = datetime(1900, 1, 1, tzinfo=timezone.utc)


class NtpError(Exception):
    """Raised when the network time could not be obtained."""
    pass


def build_request() -> bytes:
    """48-byte SNTP client request."""
    packet = bytearray(PACKET_SIZE)
    packet[0] = CLIENT_MODE_HEADER
    return bytes(packet)


def parse_response(data: bytes) -> datetime:
    """
    Transmit timestamp of an SNTP reply, as an aware UTC datetime,
    truncated to whole milliseconds.

    Raises:
        NtpError: If the reply is shorter than 48 bytes.
    """
    if len(data) < PACKET_SIZE:
        raise NtpError(f"Short NTP reply: {len(data)} bytes")
    seconds = int.from_bytes(data[TRANSMIT_TIMESTAMP_OFFSET:TRANSMIT_TIMESTAMP_OFFSET + 4], "big")
    fraction = int.from_bytes(data[TRANSMIT_TIMESTAMP_OFFSET + 4:PACKET_SIZE], "big")
    milliseconds = seconds * 1000 + (fraction * 1000) // 0x100000000
    return NTP_EPOCH + timedelta(milliseconds=milliseconds)


def _exchange(request: bytes, server: str, port: int, timeout: float) -> bytes:
    address = socket.getaddrinfo(server, port, socket.AF_INET, socket.SOCK_DGRAM)[0][4]
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.settimeout(timeout)
        sock.connect(address)
        sock.send(request)
        return sock.recv(PACKET_SIZE)


def get_network_time(server: str = NTP_SERVER, port: int = NTP_PORT,
                     timeout: float = NTP_TIMEOUT_SECONDS) -> datetime:
    """
    Query `server` and return its time as a naive local datetime.

    Raises:
        NtpError: On resolution failure, timeout or a malformed reply.
    """
    logger.debug(f"Querying network time from {server}:{port}")
    try:
        reply = _exchange(build_request(), server, port, timeout)
    except OSError as e:
        raise NtpError(f"NTP query to {server} failed: {e}") from e
    return parse_response(reply).astimezone().replace(tzinfo=None)


def get_network_time_or_local(server: str = NTP_SERVER, port: int = NTP_PORT,
                              timeout: float = NTP_TIMEOUT_SECONDS,
                              now: Optional[datetime] = None) -> datetime:
    """Network time, or the local clock when the query fails."""
    try:
        return get_network_time(server, port, timeout)
    except NtpError as e:
        logger.warning(f"{e}; falling back to local time")
        return now if now is not None else datetime.now()
