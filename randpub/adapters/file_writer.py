from __future__ import annotations
import asyncio, logging, os
from datetime import datetime
from typing import Callable, Optional

log = logging.getLogger(__name__)

Clock = Callable[[], datetime]

def filename_for(ts: datetime) -> str:
    """string_YYYYMMDD_HHMMSS_mmm.txt"""
    return f"string_{ts:%Y%m%d_%H%M%S}_{ts.microsecond // 1000:03d}.txt"

class FileStringWriter:
    def __init__(self, output_dir: str, *, clock: Optional[Clock] = None) -> None:
        self._dir = output_dir
        self._clock = clock or datetime.now

    @property
    def output_dir(self) -> str:
        return self._dir

    async def open(self) -> None:
        def _mkdir() -> bool:
            if os.path.isdir(self._dir):
                return False
            os.makedirs(self._dir, exist_ok=True)
            return True
        if await asyncio.to_thread(_mkdir):
            log.info("Created output directory: %s", self._dir)
        else:
            log.info("Output directory already exists: %s", self._dir)

    async def close(self) -> None:
        return

    async def receive(self, value: str) -> None:
        name = filename_for(self._clock())
        path = os.path.join(self._dir, name)

        def _write() -> None:
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(value)

        try:
            await asyncio.to_thread(_write)
        except OSError as exc:
            # best-effort; the next value gets a fresh file
            log.warning("Failed to write string %r to file: %s", value, exc)
            return
        log.info("Wrote string %r to file: %s", value, name)
