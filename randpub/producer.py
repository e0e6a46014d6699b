"""Random string producer: one background task generating values and fanning them out."""

from __future__ import annotations

import asyncio
import inspect
import logging
import random
import secrets
import string
from typing import Literal, Optional

from .registry import Subscriber, SubscriberRegistry

RunState = Literal["idle", "running", "stopping", "stopped"]

ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits

log = logging.getLogger(__name__)


class RandomStringProducer:
    """
    Generates alphanumeric strings at random intervals and notifies subscribers.

    • Each round notifies a snapshot of the registry taken when the round starts.
    • A subscriber raising never reaches other subscribers or the loop.
    • stop() wakes the inter-round wait immediately and waits at most
      stop_timeout for the task to finish, then cancels it.
    • start() after a completed stop() runs a fresh task; start() while
      running raises RuntimeError.
    """

    def __init__(
        self,
        *,
        min_length: int = 8,
        max_length: int = 16,
        min_interval: float = 1.0,
        max_interval: float = 5.0,
        stop_timeout: float = 1.0,
        rng: Optional[random.Random] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if min_length < 1 or max_length < min_length:
            raise ValueError(f"invalid length bounds: [{min_length}, {max_length}]")
        if min_interval < 0 or max_interval < min_interval:
            raise ValueError(f"invalid interval bounds: [{min_interval}, {max_interval}]")
        if stop_timeout <= 0:
            raise ValueError("stop_timeout must be > 0")

        self._min_length = min_length
        self._max_length = max_length
        self._min_interval = min_interval
        self._max_interval = max_interval
        self._stop_timeout = stop_timeout
        self._rng = rng if rng is not None else secrets.SystemRandom()
        self._log = logger if logger is not None else log

        self._registry = SubscriberRegistry()
        self._state: RunState = "idle"
        self._task: Optional[asyncio.Task] = None
        self._stop: Optional[asyncio.Event] = None
        self._stop_deadline = 0.0

    # ── Public API ───────────────────────────────────────────────────────────

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def subscriber_count(self) -> int:
        return len(self._registry)

    async def start(self) -> None:
        """Spawn the generation loop on the running event loop."""
        if self._state in ("running", "stopping"):
            raise RuntimeError(f"producer is already {self._state}")
        if self._state == "stopped":
            self._state = "idle"

        stop = asyncio.Event()
        self._task = asyncio.create_task(self._run(stop), name="random_string_producer")
        self._stop = stop
        self._state = "running"
        self._log.info("Random string producer started")

    async def stop(self) -> None:
        """Signal the loop, wait (bounded) for it to exit, then clear the registry.

        A second caller arriving while a stop is in progress waits on the same
        task, within what is left of the first caller's timeout.
        """
        task, stop = self._task, self._stop
        loop = asyncio.get_running_loop()
        try:
            if self._state == "stopping" and task is not None:
                await self._join(task, max(0.0, self._stop_deadline - loop.time()))
                return
            if self._state != "running" or task is None or stop is None:
                return
            self._state = "stopping"
            self._stop_deadline = loop.time() + self._stop_timeout
            stop.set()
            try:
                if not await self._join(task, self._stop_timeout):
                    self._log.warning(
                        "Producer loop did not exit within %.3fs; cancelling it", self._stop_timeout
                    )
                    task.cancel()
            finally:
                self._task = None
                self._state = "stopped"
        finally:
            self._registry.clear()
        self._log.info("Random string producer stopped")

    def subscribe(self, subscriber: Optional[Subscriber]) -> None:
        if subscriber is None:
            return
        self._registry.add(subscriber)
        self._log.info("Added subscriber: %s", type(subscriber).__name__)

    def unsubscribe(self, subscriber: Optional[Subscriber]) -> None:
        if subscriber is None:
            return
        if self._registry.remove(subscriber):
            self._log.info("Removed subscriber: %s", type(subscriber).__name__)

    def generate_value(self) -> str:
        """Random alphanumeric string with a length in [min_length, max_length]."""
        length = self._rng.randint(self._min_length, self._max_length)
        return "".join(self._rng.choice(ALPHABET) for _ in range(length))

    # ── Internals ───────────────────────────────────────────────────────────

    async def _join(self, task: asyncio.Task, timeout: float) -> bool:
        """Wait up to timeout for the loop task; False if it is still running."""
        try:
            await asyncio.wait_for(asyncio.shield(task), timeout=timeout)
        except asyncio.TimeoutError:
            return False
        except asyncio.CancelledError:
            # Only swallow the loop's own cancellation, not ours
            if not task.cancelled():
                raise
        except Exception:
            self._log.exception("Producer loop exited with an error")
        return True

    async def _run(self, stop: asyncio.Event) -> None:
        while not stop.is_set():
            try:
                value = self.generate_value()
                self._log.info("Generated string: %s", value)
                await self._notify(value, stop)
            except Exception:
                # generation or snapshot failure: skip this round
                self._log.exception("Error in string generation loop")

            if await self._wait(stop, self._next_delay()):
                break
        self._log.info("String generation loop terminated")

    async def _notify(self, value: str, stop: asyncio.Event) -> None:
        for subscriber in self._registry.snapshot():
            if stop.is_set():
                return
            try:
                res = subscriber.receive(value)
                # coroutines, futures and tasks alike
                if inspect.isawaitable(res):
                    await res
            except Exception:
                self._log.exception("Error notifying subscriber %s", type(subscriber).__name__)

    def _next_delay(self) -> float:
        try:
            return self._rng.uniform(self._min_interval, self._max_interval)
        except Exception:
            self._log.exception("Failed to draw wait interval, using %.3fs", self._max_interval)
            return self._max_interval

    async def _wait(self, stop: asyncio.Event, delay: float) -> bool:
        """Wait up to delay seconds for the stop signal; True once it is set."""
        try:
            await asyncio.wait_for(stop.wait(), timeout=delay)
            return True
        except asyncio.TimeoutError:
            return False
        except Exception:
            self._log.exception("Unexpected error while waiting for the next round")
            return stop.is_set()
