"""A fixed-size pool of worker threads that run queued tasks."""

from __future__ import annotations

import threading
from collections import deque
from collections.abc import Callable
from typing import Any

from cooperutil.logger import LogLevel, error, log

Task = Callable[[], Any]


class ThreadPool:
    """Run tasks on ``thread_num`` worker threads in the order they were added.

    Worker threads are named after the pool followed by their index. Stopping
    the pool lets each worker finish the task it is running; tasks still
    queued at that point are not run.
    """

    def __init__(self, thread_num: int, name: str) -> None:
        if thread_num <= 0:
            raise ValueError("thread_num must be positive")
        self._name = name
        self._tasks: deque[Task] = deque()
        self._cond = threading.Condition()
        self._stopped = False
        self._threads = [
            threading.Thread(
                target=self._work, name=f"{name}{index}", daemon=True
            )
            for index in range(thread_num)
        ]
        for thread in self._threads:
            thread.start()

    def add_task(self, task: Task) -> None:
        """Queue ``task`` to be called with no arguments by a worker."""
        if not callable(task):
            raise TypeError("task must be callable")
        log(LogLevel.TRACE, "add task into threadPool")
        with self._cond:
            self._tasks.append(task)
            self._cond.notify()

    def name(self) -> str:
        """The name of the pool."""
        return self._name

    def task_count(self) -> int:
        """Number of tasks waiting to be run."""
        with self._cond:
            return len(self._tasks)

    def stop(self) -> None:
        """Stop the workers and wait for them to finish; safe to call twice."""
        with self._cond:
            if self._stopped:
                return
            self._stopped = True
            self._cond.notify_all()
        current = threading.current_thread()
        for thread in self._threads:
            if thread is not current:
                thread.join()

    def _work(self) -> None:
        while True:
            with self._cond:
                while not self._stopped and not self._tasks:
                    self._cond.wait()
                if self._stopped:
                    return
                task = self._tasks.popleft()
            log(LogLevel.TRACE, "get a new task!")
            try:
                task()
            except Exception as exc:  # keep the worker alive
                error("task in thread pool ", self._name, " failed: ", repr(exc))

    def __enter__(self) -> ThreadPool:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()