import asyncio
import random
import threading
from typing import Callable, List

from randpub.producer import RandomStringProducer


class Recorder:
    """Plain synchronous subscriber keeping every value it was handed."""

    def __init__(self) -> None:
        self.values: List[str] = []
        self._lock = threading.Lock()

    def receive(self, value: str) -> None:
        with self._lock:
            self.values.append(value)

    @property
    def count(self) -> int:
        with self._lock:
            return len(self.values)


async def wait_until(pred: Callable[[], bool], timeout: float = 2.0, step: float = 0.005) -> None:
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not pred():
        if loop.time() > deadline:
            raise AssertionError("condition not met within %.2fs" % timeout)
        await asyncio.sleep(step)


def make_producer(**overrides) -> RandomStringProducer:
    # tens of milliseconds between rounds keeps the timing tests quick
    opts = dict(min_interval=0.01, max_interval=0.03, stop_timeout=1.0, rng=random.Random(1234))
    opts.update(overrides)
    return RandomStringProducer(**opts)
