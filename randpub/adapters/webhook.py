from __future__ import annotations
import httpx
import logging
from datetime import datetime, timezone
from typing import Optional

log = logging.getLogger(__name__)

class WebhookForwarder:
    def __init__(
        self,
        url: Optional[str],
        *,
        timeout: float = 2.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._transport = transport

    async def open(self) -> None:
        return

    async def close(self) -> None:
        return

    async def receive(self, value: str) -> None:
        if not self._url:
            return
        ts = datetime.now(timezone.utc).isoformat()
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as cli:
                r = await cli.post(self._url, json={"value": value, "ts": ts})
                r.raise_for_status()
        except httpx.HTTPError as exc:
            # best-effort; no retries
            log.warning("Failed to forward string %r to %s: %s", value, self._url, exc)
