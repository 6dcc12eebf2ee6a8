"""CPU-bound 변환 작업용 제한(bounded) 워커 풀.

요청 핸들러는 변환을 직접 실행하지 않고 TransformRunner.run()에 위임한다.

- 실제 처리: ThreadPoolExecutor (Pillow C 확장은 처리 중 GIL을 릴리즈)
- 입장 제한: BoundedSemaphore. 실행 중 + 대기 중 작업이 queue_limit에 도달하면
  새 작업은 기다리지 않고 바로 TransformQueueFull(503)로 거절한다.
"""

import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from typing import TypeVar

from loguru import logger

from core.exceptions import TransformQueueFull

T = TypeVar("T")


class TransformRunner:
    def __init__(self, workers: int = 4, queue_limit: int = 16):
        if workers < 1:
            raise ValueError("workers must be >= 1")
        self.workers = workers
        self.queue_limit = max(queue_limit, workers)
        self._pool = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="transform")
        self._slots = threading.BoundedSemaphore(self.queue_limit)

    def run(self, func: Callable[..., T], *args, **kwargs) -> T:
        """작업을 풀에 넣고 결과를 기다린다. 작업에서 난 예외는 그대로 전파된다."""
        if not self._slots.acquire(blocking=False):
            logger.warning(f"Transform queue full ({self.queue_limit}), rejecting")
            raise TransformQueueFull
        try:
            future = self._pool.submit(func, *args, **kwargs)
            return future.result()
        finally:
            self._slots.release()

    def shutdown(self):
        self._pool.shutdown(wait=True)
