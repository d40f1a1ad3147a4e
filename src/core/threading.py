"""
Threading helpers for validation pipelines.

This module provides the two capabilities the validation engine depends on:
an executor that runs trigger predicates off the GUI thread, and a dispatcher
that marshals the final commit back onto the GUI (owner) thread.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import Executor, Future
from typing import Any

from PySide6.QtCore import QObject, Qt, QThreadPool, Signal, Slot

logger = logging.getLogger(__name__)

OwnerThreadRunner = Callable[[Callable[[], None]], None]


def run_immediately(fn: Callable[[], None]) -> None:
    """Owner-thread runner for headless use: calls ``fn`` on the current thread."""
    fn()


class OwnerThreadDispatcher(QObject):
    """
    Runs callables on the thread this object lives on.

    Create it on the GUI thread. Calls made from the GUI thread run
    synchronously; calls from worker threads are queued to the GUI event loop.

    Signals:
        _invoke(object): Carries the callable to run
    """

    _invoke = Signal(object)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("OwnerThreadDispatcher")
        self._invoke.connect(self._run, Qt.ConnectionType.AutoConnection)

    def __call__(self, fn: Callable[[], None]) -> None:
        self._invoke.emit(fn)

    @Slot(object)
    def _run(self, fn: Callable[[], None]) -> None:
        fn()


class QtPredicateExecutor(Executor):
    """
    ``concurrent.futures`` executor backed by a QThreadPool.

    Predicates are plain callables; results and exceptions are delivered
    through standard futures so the engine can chain on them without
    touching Qt.
    """

    def __init__(self, pool: QThreadPool | None = None) -> None:
        self._pool = pool or QThreadPool.globalInstance()
        self._shutdown = False

    def submit(self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Future[Any]:
        if self._shutdown:
            raise RuntimeError("cannot schedule new predicates after shutdown")

        future: Future[Any] = Future()

        def run() -> None:
            if not future.set_running_or_notify_cancel():
                return
            try:
                result = fn(*args, **kwargs)
            except BaseException as exc:
                # SystemExit and KeyboardInterrupt must still resolve the future
                future.set_exception(exc)
            else:
                future.set_result(result)

        self._pool.start(run)
        return future

    def shutdown(self, wait: bool = True, *, cancel_futures: bool = False) -> None:
        self._shutdown = True
        if wait:
            self._pool.waitForDone()


_default_executor: QtPredicateExecutor | None = None


def get_predicate_executor() -> QtPredicateExecutor:
    """
    Get the shared predicate executor.

    Returns:
        Executor running on the global QThreadPool
    """
    global _default_executor
    if _default_executor is None:
        _default_executor = QtPredicateExecutor()
        logger.debug("Predicate executor created on the global thread pool")
    return _default_executor
