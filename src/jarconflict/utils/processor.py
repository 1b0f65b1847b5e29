import logging
import multiprocessing
from multiprocessing.pool import Pool
from typing import Callable, Iterable, Iterator, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')
R = TypeVar('R')


class Processor:
    """Worker pool used to scan archives in parallel.

    The pool is closed and joined on normal exit; if the with-block raises,
    outstanding work is abandoned and the pool is terminated.
    """

    def __init__(self, concurrency: int | None = None):
        if concurrency is None:
            concurrency = multiprocessing.cpu_count()
        if concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {concurrency}")

        self._concurrency = concurrency
        self._pool: Pool | None = Pool(self._concurrency)
        logger.debug(f"Started worker pool with {self._concurrency} processes")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None:
            self.terminate()
        else:
            self.close()

    def close(self):
        if self._pool is not None:
            self._pool.close()
            self._pool.join()
            self._pool = None

    def terminate(self):
        if self._pool is not None:
            self._pool.terminate()
            self._pool.join()
            self._pool = None

    @property
    def concurrency(self):
        return self._concurrency

    def map_ordered(self, func: Callable[[T], R], items: Iterable[T]) -> Iterator[R]:
        """Apply func to items in worker processes, yielding results in input order.

        An exception raised by func is re-raised here when its result is reached.
        """
        if self._pool is None:
            raise RuntimeError("Processor is closed")
        return self._pool.imap(func, items)
