"""
Opt-in timing of the parser's hot paths.

Set ``BOURNE_PROFILE`` in the environment (and run without ``-O``) to record
per-function call counts, elapsed nanoseconds and bytes processed. When the
variable is absent ``ProfileContext`` is a no-op.
"""

import os
import time
from dataclasses import dataclass
from typing import Any

PROFILE_HOT_PATHS = __debug__ and "BOURNE_PROFILE" in os.environ


@dataclass
class HotPathStats:
    """Accumulated timings for one instrumented function."""

    function_name: str
    call_count: int = 0
    total_time_ns: int = 0
    bytes_processed: int = 0

    def record_call(self, duration_ns: int, nbytes: int = 0) -> None:
        self.call_count += 1
        self.total_time_ns += duration_ns
        self.bytes_processed += nbytes

    @property
    def mean_time_ns(self) -> float:
        if not self.call_count:
            return 0.0
        return self.total_time_ns / self.call_count


_hot_path_stats: dict[str, HotPathStats] = {}


class RecordingProfileContext:
    """Context manager that records the duration of its body."""

    def __init__(self, func_name: str, nbytes: int = 0) -> None:
        self.func_name = func_name
        self.nbytes = nbytes
        self.start_time = 0

    def __enter__(self) -> "RecordingProfileContext":
        self.start_time = time.perf_counter_ns()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        duration = time.perf_counter_ns() - self.start_time
        stats = _hot_path_stats.get(self.func_name)
        if stats is None:
            stats = _hot_path_stats[self.func_name] = HotPathStats(
                self.func_name
            )
        stats.record_call(duration, self.nbytes)


class NullProfileContext:
    """Stand-in used when profiling is disabled."""

    def __init__(self, func_name: str, nbytes: int = 0) -> None:
        pass

    def __enter__(self) -> "NullProfileContext":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        pass


ProfileContext: type[RecordingProfileContext] | type[NullProfileContext] = (
    RecordingProfileContext if PROFILE_HOT_PATHS else NullProfileContext
)


def get_hot_path_stats() -> dict[str, HotPathStats]:
    """Returns a snapshot of the recorded statistics."""
    return _hot_path_stats.copy()


def clear_hot_path_stats() -> None:
    _hot_path_stats.clear()
