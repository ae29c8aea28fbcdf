"""
Publisher - Uploads processed images to an object store.
"""

import logging
from typing import List, Optional

from .config import UploadConfig
from .errors import ConfigurationError
from .object_store import ObjectStore
from .photo_record import UploadTarget
from .progress import RunProgress
from .run_stats import RunStats
from .scanner import OUTPUT_EXTENSIONS, Scanner


class Publisher:
    """
    Uploads every supported file of the input directory, one at a time.

    There is no rollback and no retry: the first failure aborts the run and
    objects uploaded before it stay in the store. Uploads overwrite, so a
    re-run is safe.
    """

    def __init__(
        self,
        config: UploadConfig,
        object_store: ObjectStore,
        logger: Optional[logging.Logger] = None
    ):
        self.config = config
        self.store = object_store
        self.logger = logger or logging.getLogger(__name__)
        self.scanner = Scanner(OUTPUT_EXTENSIONS, self.logger)
        self.stats = RunStats()

    def validate(self) -> None:
        errors = self.config.validate()
        if errors:
            raise ConfigurationError("; ".join(errors))

    def plan(self) -> List[UploadTarget]:
        """Upload targets in natural filename order."""
        files = self.scanner.require_files(self.config.input_dir, what='image')
        cache_max_age = int(self.config.cache_max_age)
        return [
            UploadTarget(
                local_path=str(path),
                remote_path=self.config.remote_path(path.name),
                cache_max_age=cache_max_age,
            )
            for path in files
        ]

    def run(self, progress: Optional[RunProgress] = None) -> List[UploadTarget]:
        """
        Upload all files.

        Returns:
            The targets that were uploaded, in upload order
        """
        self.validate()
        targets = self.plan()

        self.store.resolve()
        self.stats = RunStats(total_to_process=len(targets))

        self.logger.info(
            f"Uploading {len(targets)} files to prefix '{self.config.remote_prefix}/'..."
        )

        for target in targets:
            self.logger.info(f" -> {target.remote_path}")
            self.store.put(
                target.local_path,
                target.remote_path,
                target.cache_max_age,
                self.config.token or None,
            )
            self.stats.processed += 1

            if progress:
                progress.on_file_done(target.local_path, target.remote_path)
                progress.on_progress_update(self.stats)

        self.logger.info(
            f"Uploaded {self.stats.processed} files in {self.stats.elapsed_seconds:.1f}s"
        )
        return targets
