"""
RunStats - Counters for a prepare or upload run.
"""

import time
from dataclasses import dataclass, field


@dataclass
class RunStats:
    """
    Statistics for a run.

    Attributes:
        total_to_process: Files queued for this run
        processed: Files completed successfully
        removed: Stale output files deleted before the run
        bytes_written: Total bytes written or uploaded
        start_time: Start timestamp
    """
    total_to_process: int = 0
    processed: int = 0
    removed: int = 0
    bytes_written: int = 0
    start_time: float = field(default_factory=time.time)

    @property
    def elapsed_seconds(self) -> float:
        """Elapsed time in seconds."""
        return time.time() - self.start_time

    @property
    def rate_per_minute(self) -> float:
        """Processing rate in files per minute."""
        if self.elapsed_seconds > 0:
            return self.processed / self.elapsed_seconds * 60
        return 0.0

    @property
    def remaining_count(self) -> int:
        """Remaining to process."""
        return self.total_to_process - self.processed
