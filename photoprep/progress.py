"""
RunProgress - Per-file progress output for prepare and upload runs.
"""

import logging
from typing import Optional

from .run_stats import RunStats


class RunProgress:
    """
    Reports each processed file, either printed (show_files) or logged.
    """

    def __init__(
        self,
        show_files: bool = False,
        log_interval: int = 25,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize progress tracker.

        Args:
            show_files: If True, print each file as it's processed
            log_interval: Log summary progress every N files (when not show_files)
            logger: Optional logger instance
        """
        self.show_files = show_files
        self.log_interval = log_interval
        self.logger = logger or logging.getLogger(__name__)
        self.last_logged = 0

    def on_file_done(self, name: str, detail: str) -> None:
        """Called when a file has been processed or uploaded."""
        if self.show_files:
            print(f"  [OK] {name} -> {detail}")
        else:
            self.logger.debug(f"{name} -> {detail}")

    def on_progress_update(self, stats: RunStats) -> None:
        """Log an overall progress line every log_interval files."""
        if self.show_files or stats.processed - self.last_logged < self.log_interval:
            return
        self.last_logged = stats.processed
        self.logger.info(
            f"Progress: {stats.processed}/{stats.total_to_process} "
            f"({stats.rate_per_minute:.1f}/min, {stats.remaining_count} left)"
        )
