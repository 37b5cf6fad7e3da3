"""
Execution engines for fitting units. Both hand back concurrent.futures.Future objects, so the
Trainer's completion barrier is the same whether units run on a thread pool or inline.
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, TypeVar

from bayes_framework.utils.registry import Registry

logger = logging.getLogger(__name__)

R = TypeVar("R")

ENGINE_REGISTRY: Registry[type["ExecutionEngine"]] = Registry("execution engine")


class ExecutionEngine(ABC):
    """Runs submitted callables and reports their outcome through a Future."""

    name: str = "base"

    @abstractmethod
    def submit(self, fn: Callable[..., R], *args: Any, **kwargs: Any) -> Future[R]:
        pass

    def shutdown(self, wait: bool = True, cancel_futures: bool = False) -> None:
        """Release worker resources. No-op for engines without workers."""

    def __enter__(self) -> ExecutionEngine:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        # Leaving on an error must not block on units that are still running.
        if exc_type is None:
            self.shutdown(wait=True)
        else:
            self.shutdown(wait=False, cancel_futures=True)


@ENGINE_REGISTRY.register("serial")
class SerialEngine(ExecutionEngine):
    """Runs each unit immediately on the calling thread; the returned Future is already done."""

    name = "serial"

    def submit(self, fn: Callable[..., R], *args: Any, **kwargs: Any) -> Future[R]:
        future: Future[R] = Future()
        future.set_running_or_notify_cancel()
        try:
            result = fn(*args, **kwargs)
        except Exception as exc:
            future.set_exception(exc)
        else:
            future.set_result(result)
        return future


@ENGINE_REGISTRY.register("threads")
class ThreadPoolEngine(ExecutionEngine):
    """Worker pool backed by ThreadPoolExecutor."""

    name = "threads"

    def __init__(self, max_workers: int | None = None) -> None:
        if max_workers is not None and max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self.max_workers = max_workers or min(32, (os.cpu_count() or 1) + 4)
        self._executor = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="nb-fit")
        logger.debug("Thread pool engine with %d workers", self.max_workers)

    def submit(self, fn: Callable[..., R], *args: Any, **kwargs: Any) -> Future[R]:
        return self._executor.submit(fn, *args, **kwargs)

    def shutdown(self, wait: bool = True, cancel_futures: bool = False) -> None:
        self._executor.shutdown(wait=wait, cancel_futures=cancel_futures)


def get_engine(name: str, **kwargs: Any) -> ExecutionEngine:
    """Build an engine by registered name ("serial" or "threads")."""
    engine_cls = ENGINE_REGISTRY.get(name)
    if engine_cls is SerialEngine:
        return SerialEngine()
    return engine_cls(**kwargs)
