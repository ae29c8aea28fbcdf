"""
Reporter - Human-readable run summaries on stdout.
"""

import logging
import sys
from typing import List, Optional, TextIO

from .config import PrepareConfig, UploadConfig
from .manifest import Manifest
from .photo_record import UploadTarget
from .run_stats import RunStats


class Reporter:
    """
    Prints the summary and next steps after a prepare or upload run.
    """

    def __init__(
        self,
        output: Optional[TextIO] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize reporter.

        Args:
            output: Output stream (default: stdout)
            logger: Optional logger instance
        """
        self.output = output or sys.stdout
        self.logger = logger or logging.getLogger(__name__)

    def _print(self, text: str = "") -> None:
        """Print to output stream."""
        print(text, file=self.output)

    def _format_bytes(self, bytes_val: float) -> str:
        """Format bytes as human-readable string."""
        for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
            if bytes_val < 1024:
                return f"{bytes_val:.1f} {unit}"
            bytes_val /= 1024
        return f"{bytes_val:.1f} PB"

    def _format_duration(self, seconds: float) -> str:
        """Format duration as human-readable string."""
        if seconds < 60:
            return f"{seconds:.1f} seconds"
        elif seconds < 3600:
            return f"{seconds / 60:.1f} minutes"
        else:
            return f"{seconds / 3600:.1f} hours"

    def report_prepare(
        self,
        manifest: Manifest,
        config: PrepareConfig,
        stats: Optional[RunStats] = None
    ) -> None:
        """Summary of a prepare run with suggested next steps."""
        order = 'randomized' if config.randomize_order else 'filename order'
        if config.uses_blob_urls:
            src_mode = f"blob ({config.blob_base_url})"
        else:
            src_mode = 'local public path'

        self.logger.debug(
            f"Prepare summary: {len(manifest)} photos, order={manifest.order}, "
            f"src_mode={manifest.src_mode}"
        )
        self._print(f"Prepared {len(manifest)} images.")
        self._print(f"Processed files: {config.output_dir}")
        self._print(f"Generated data file: {config.manifest_path}")
        self._print(f"Order: {order}")
        self._print(f"Src mode: {src_mode}")
        if stats is not None:
            self._print(
                f"Output size: {self._format_bytes(stats.bytes_written)} "
                f"in {self._format_duration(stats.elapsed_seconds)}"
            )
        self._print()
        self._print("Next:")
        self._print(f"1) Review and edit titles/locations in {config.manifest_path}")
        if config.uses_blob_urls:
            self._print("2) Deploy when ready")
        else:
            self._print(
                f'2) Upload files with: python -m photoprep upload "{config.output_dir}" "photography"'
            )
            self._print(
                "3) Optional: rerun with BLOB_BASE_URL to write Blob URLs directly into the data file"
            )

    def report_upload(
        self,
        targets: List[UploadTarget],
        config: UploadConfig,
        list_hint: str
    ) -> None:
        """Summary of an upload run."""
        self.logger.debug(f"Upload summary: {len(targets)} files under {config.remote_prefix}/")
        self._print()
        self._print(f"Upload complete: {len(targets)} files to '{config.remote_prefix}/'.")
        self._print(f"List files with: {list_hint}")
