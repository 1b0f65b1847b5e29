"""cProfile hooks for jarconflict.

When the JARCONFLICT_PROFILE environment variable names a directory, the main
entry point and every worker scan write cProfile statistics into a per-run
subdirectory of it named {timestamp_ms}_{main_pid}.
"""
import cProfile
import functools
import itertools
import os
import time
from pathlib import Path
from typing import Callable, ParamSpec, TypeVar

P = ParamSpec('P')
T = TypeVar('T')

PROFILE_ENV = 'JARCONFLICT_PROFILE'
# Propagates the run directory name from the main process to workers
_SESSION_ENV = '_JARCONFLICT_PROFILE_SESSION'

_sequence = itertools.count()


def get_profile_dir() -> Path | None:
    """Directory for this run's profile files, or None when profiling is off."""
    base = os.environ.get(PROFILE_ENV)
    if not base:
        return None
    session = os.environ.get(_SESSION_ENV) or f"{int(time.time() * 1000)}_{os.getpid()}"
    return Path(base) / session


def _profiled(func: Callable[P, T], prefix: str) -> Callable[P, T]:
    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        profile_dir = get_profile_dir()
        if profile_dir is None:
            return func(*args, **kwargs)

        profile_dir.mkdir(parents=True, exist_ok=True)
        profile_file = profile_dir / f"{prefix}_{os.getpid()}_{next(_sequence)}.prof"

        profiler = cProfile.Profile()
        profiler.enable()
        try:
            return func(*args, **kwargs)
        finally:
            profiler.disable()
            profiler.dump_stats(str(profile_file))

    return wrapper


def profile_main(func: Callable[P, T]) -> Callable[P, T]:
    """Profile the CLI entry point and pin the run directory for workers."""
    profiled = _profiled(func, 'main')

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        if os.environ.get(PROFILE_ENV) and not os.environ.get(_SESSION_ENV):
            os.environ[_SESSION_ENV] = f"{int(time.time() * 1000)}_{os.getpid()}"
        return profiled(*args, **kwargs)

    return wrapper


def profile_worker(func: Callable[P, T]) -> Callable[P, T]:
    """Profile a function executed in a worker process."""
    return _profiled(func, 'worker')
