"""randpub entry: start the random string producer and attach the enabled consumers."""
from __future__ import annotations
import asyncio, logging
import contextlib
import signal
from typing import Any, List

try:
    import uvloop as _uvloop  # type: ignore
    _uvloop.install()
except Exception:
    pass

import uvicorn

from .config import Config
from .producer import RandomStringProducer
from .streaming import StreamHub
from .http_api import make_app
from .adapters.file_writer import FileStringWriter
from .adapters.syslog import SyslogSender
from .adapters.webhook import WebhookForwarder

logger = logging.getLogger(__name__)

def build_consumers(cfg: Config) -> List[Any]:
    """Adapters enabled by the config, not yet opened."""
    consumers: List[Any] = []
    if cfg.file_writer:
        consumers.append(FileStringWriter(cfg.output_dir))
    if cfg.syslog:
        consumers.append(SyslogSender(cfg.syslog_host, cfg.syslog_port, hostname=cfg.syslog_hostname))
    if cfg.webhook_url:
        consumers.append(WebhookForwarder(cfg.webhook_url))
    return consumers

async def main() -> None:
    cfg = Config.load()
    logging.basicConfig(level=cfg.log_level)

    producer = RandomStringProducer(**cfg.producer_kwargs())
    hub = StreamHub()
    consumers = build_consumers(cfg)

    opened: List[Any] = []
    tasks: List[asyncio.Task] = []
    try:
        for c in consumers:
            await c.open()
            opened.append(c)
        for sub in (hub, *opened):
            producer.subscribe(sub)
        await producer.start()

        if cfg.http_api:
            app = make_app(producer, hub, opened)
            # Uvicorn inside this process
            config = uvicorn.Config(app=app, host=cfg.http_host, port=cfg.http_port, log_level="info", loop="asyncio")
            server = uvicorn.Server(config)
            tasks.append(asyncio.create_task(server.serve(), name="http_api"))

        stop = asyncio.Event()
        for sig in (signal.SIGINT, signal.SIGTERM):
            with contextlib.suppress(NotImplementedError):
                asyncio.get_running_loop().add_signal_handler(sig, stop.set)
        await stop.wait()
        logger.info("Shutdown requested")
    finally:
        for t in tasks:
            t.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        for c in opened:
            producer.unsubscribe(c)
        await producer.stop()
        for c in opened:
            try:
                await c.close()
            except Exception:
                logger.exception("Error closing %s", type(c).__name__)

def run() -> None:
    asyncio.run(main())

if __name__ == "__main__":
    run()
