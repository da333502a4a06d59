"""
Worker process supervisor.

The parent process forks one worker per logical CPU, each running a full
copy of the HTTP listener on a socket bound by the parent. The parent only
watches the workers: any worker that exits, for whatever reason, is
replaced by exactly one new worker in the same slot.

With the default policy the replacement is immediate and unbounded, so a
worker that crashes on startup (e.g. an unreachable MONGO_URI) is reforked
forever. `RestartPolicy` adds an optional exponential backoff and a cap on
the total number of restarts.
"""
from dataclasses import dataclass
from multiprocessing.connection import wait
from typing import Callable, Optional
from settings import Settings
import multiprocessing
import logging
import signal
import time
import os

logger = logging.getLogger(__name__)


@dataclass
class RestartPolicy:
    backoff: float = 0.0  # Delay before the first restart of a slot
    factor: float = 2.0
    max_backoff: float = 30.0
    max_restarts: Optional[int] = None  # Across all slots, None means no cap

    @classmethod
    def from_settings(cls, settings: Settings) -> "RestartPolicy":
        return cls(
            backoff=settings.RESTART_BACKOFF,
            factor=settings.RESTART_BACKOFF_FACTOR,
            max_backoff=settings.RESTART_BACKOFF_MAX,
            max_restarts=settings.MAX_RESTARTS,
        )

    def delay(self, attempt: int) -> float:
        """
        Seconds to wait before the `attempt`-th consecutive restart of a slot
        """
        if self.backoff <= 0:
            return 0.0
        return min(self.max_backoff, self.backoff * self.factor ** (attempt - 1))

    def exhausted(self, restarts: int) -> bool:
        return self.max_restarts is not None and restarts >= self.max_restarts


class Supervisor:
    def __init__(
        self,
        settings: Settings,
        target: Callable,
        sockets: list = (),
        context=None,
        policy: Optional[RestartPolicy] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.settings = settings
        self.target = target
        self.sockets = list(sockets)
        self.context = context or multiprocessing.get_context("spawn")
        self.policy = policy or RestartPolicy.from_settings(settings)
        self.sleep = sleep
        self.clock = clock

        # Detected once, a later change in CPU count is not picked up
        self.worker_count = settings.WORKERS or os.cpu_count() or 1

        self.workers: dict = {}
        self.started_at: dict[int, float] = {}
        self.attempts: dict[int, int] = {}
        self.restarts = 0
        self.should_exit = False

    def spawn(self, slot: int):
        process = self.context.Process(
            target=self.target,
            args=(self.settings, self.sockets),
            name=f"worker-{slot}",
        )
        process.start()
        self.workers[slot] = process
        self.started_at[slot] = self.clock()
        logger.info("Worker %d started (pid %s)", slot, process.pid)
        return process

    def start(self):
        logger.info(
            "Supervisor %d starting %d workers", os.getpid(), self.worker_count
        )
        for slot in range(self.worker_count):
            self.spawn(slot)

    def alive(self) -> int:
        return sum(1 for process in self.workers.values() if process.is_alive())

    def reap(self) -> list[int]:
        """
        Replace every exited worker, returns the slots that were respawned
        """
        respawned = []
        for slot, process in list(self.workers.items()):
            if process.is_alive():
                continue
            process.join()
            del self.workers[slot]
            logger.warning(
                "Worker %d (pid %s) exited with code %s",
                slot,
                process.pid,
                process.exitcode,
            )
            if self.should_exit:
                continue
            if self.policy.exhausted(self.restarts):
                logger.error(
                    "Restart limit of %d reached, worker %d not replaced",
                    self.policy.max_restarts,
                    slot,
                )
                continue

            # A worker that outlived the longest backoff starts a fresh series
            if self.clock() - self.started_at[slot] >= self.policy.max_backoff:
                self.attempts[slot] = 0
            self.attempts[slot] = self.attempts.get(slot, 0) + 1

            delay = self.policy.delay(self.attempts[slot])
            if delay:
                logger.info("Restarting worker %d in %.1fs", slot, delay)
                self.sleep(delay)
                # Shutdown may have been requested while waiting
                if self.should_exit:
                    continue
            self.restarts += 1
            self.spawn(slot)
            respawned.append(slot)
        return respawned

    def handle_exit(self, sig, frame):
        logger.info("Received %s, shutting down", signal.Signals(sig).name)
        self.should_exit = True

    def run(self):
        signal.signal(signal.SIGINT, self.handle_exit)
        signal.signal(signal.SIGTERM, self.handle_exit)
        self.start()
        try:
            while not self.should_exit and self.workers:
                wait([process.sentinel for process in self.workers.values()], timeout=0.5)
                self.reap()
        finally:
            self.stop()

    def stop(self):
        for process in self.workers.values():
            process.terminate()
        for process in self.workers.values():
            process.join()
        self.workers.clear()
        logger.info("Supervisor %d stopped", os.getpid())
