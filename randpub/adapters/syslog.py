from __future__ import annotations
import asyncio, logging
from datetime import datetime
from typing import Callable, Optional

log = logging.getLogger(__name__)

FACILITY_LOCAL0 = 16
SEVERITY_INFO = 6

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

def format_syslog_message(message: str, *, priority: int, hostname: str, ts: datetime) -> str:
    """Simplified BSD syslog line: <PRI>MMM dd HH:mm:ss HOSTNAME: MESSAGE"""
    # month names spelled out so the output does not follow the process locale
    stamp = f"{_MONTHS[ts.month - 1]} {ts:%d %H:%M:%S}"
    return f"<{priority}>{stamp} {hostname}: {message}"

class SyslogSender:
    def __init__(
        self,
        host: str = "localhost",
        port: int = 514,
        *,
        hostname: str = "randpub",
        facility: int = FACILITY_LOCAL0,
        severity: int = SEVERITY_INFO,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._host = host
        self._port = port
        self._hostname = hostname
        self._priority = facility * 8 + severity
        self._clock = clock or datetime.now
        self._transport: Optional[asyncio.DatagramTransport] = None

    @property
    def priority(self) -> int:
        return self._priority

    async def open(self) -> None:
        """Create the UDP endpoint; errors propagate, the sender is useless without it."""
        if self._transport is not None:
            return
        loop = asyncio.get_running_loop()
        transport, _ = await loop.create_datagram_endpoint(
            asyncio.DatagramProtocol, remote_addr=(self._host, self._port)
        )
        self._transport = transport
        log.info("Syslog sender ready for %s:%d", self._host, self._port)

    async def close(self) -> None:
        transport, self._transport = self._transport, None
        if transport is not None and not transport.is_closing():
            transport.close()

    def receive(self, value: str) -> None:
        transport = self._transport
        if transport is None:
            raise RuntimeError("syslog sender is not open")
        line = format_syslog_message(
            value, priority=self._priority, hostname=self._hostname, ts=self._clock()
        )
        try:
            transport.sendto(line.encode("utf-8"))
        except OSError as exc:
            log.warning("Failed to send string %r to syslog: %s", value, exc)
            return
        log.info("Sent string %r to syslog", value)
