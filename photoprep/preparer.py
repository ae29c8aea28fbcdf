"""
Preparer - Turns a folder of original photographs into resized JPEGs and a manifest.
"""

import logging
import random
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from .config import PrepareConfig
from .errors import ConfigurationError
from .image_processor import ImageProcessor
from .manifest import Manifest
from .naming import SlugAllocator, resolve_src, title_case
from .photo_record import ProcessedPhoto
from .progress import RunProgress
from .run_stats import RunStats
from .scanner import OUTPUT_EXTENSIONS, SOURCE_EXTENSIONS, Scanner, shuffled

OUTPUT_SUFFIX = '.jpg'


def taken_at(path: Path) -> str:
    """Modification date of path as YYYY-MM-DD (UTC)."""
    mtime = path.stat().st_mtime
    return datetime.fromtimestamp(mtime, tz=timezone.utc).date().isoformat()


class Preparer:
    """
    Runs the prepare pipeline.

    Validation happens before any file is touched. After that the run is
    all-or-nothing from the manifest's point of view: any failure aborts,
    images already written stay on disk and the manifest is not written.
    """

    def __init__(
        self,
        config: PrepareConfig,
        image_processor: ImageProcessor,
        rng: Optional[random.Random] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize preparer.

        Args:
            config: Prepare configuration
            image_processor: Backend that converts and measures images
            rng: Random generator for shuffling (seeded from config if omitted)
            logger: Optional logger instance
        """
        self.config = config
        self.image_processor = image_processor
        self.rng = rng if rng is not None else random.Random(config.seed)
        self.logger = logger or logging.getLogger(__name__)
        self.source_scanner = Scanner(SOURCE_EXTENSIONS, self.logger)
        self.output_scanner = Scanner(OUTPUT_EXTENSIONS, self.logger)
        self.stats = RunStats()

    def validate(self) -> None:
        """Check tool availability and configuration before any file is touched."""
        self.image_processor.ensure_available()

        errors = self.config.validate()
        if errors:
            raise ConfigurationError("; ".join(errors))

    def collect_sources(self) -> List[Path]:
        """Supported source files in processing order."""
        files = self.source_scanner.require_files(self.config.source_dir)
        if self.config.randomize_order:
            return shuffled(files, self.rng)
        return files

    def run(self, progress: Optional[RunProgress] = None) -> Manifest:
        """
        Process every source image and write the manifest.

        Returns:
            The manifest that was written
        """
        self.validate()
        sources = self.collect_sources()

        output_dir = Path(self.config.output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        Path(self.config.manifest_path).parent.mkdir(parents=True, exist_ok=True)

        self.stats = RunStats(total_to_process=len(sources))

        if self.config.clean_output:
            self.stats.removed = self.output_scanner.remove_files(self.config.output_dir)
            if self.stats.removed:
                self.logger.info(f"Removed {self.stats.removed} previous output files")

        order = 'randomized' if self.config.randomize_order else 'filename order'
        self.logger.info(f"Preparing {len(sources)} images ({order})")

        manifest = Manifest.create_new(
            randomized=self.config.randomize_order,
            blob_urls=self.config.uses_blob_urls,
        )
        slugs = SlugAllocator()

        for source in sources:
            photo = self._process_source(source, slugs.allocate(source.stem))
            manifest.add_photo(photo)

            self.stats.processed += 1
            if progress:
                progress.on_file_done(source.name, photo.format_status())
                progress.on_progress_update(self.stats)

        manifest.save(self.config.manifest_path)
        self.logger.info(
            f"Prepared {self.stats.processed} images in {self.stats.elapsed_seconds:.1f}s"
        )
        return manifest

    def _process_source(self, source: Path, slug: str) -> ProcessedPhoto:
        """Convert one source image and build its manifest entry."""
        output_name = f"{slug}{OUTPUT_SUFFIX}"
        output_path = Path(self.config.output_dir) / output_name

        self.logger.debug(f"Converting: {source.name} -> {output_path}")
        self.image_processor.convert(
            source,
            output_path,
            int(self.config.jpeg_quality),
            int(self.config.max_edge),
        )

        width, height = self.image_processor.get_dimensions(output_path)
        if output_path.exists():
            self.stats.bytes_written += output_path.stat().st_size

        title = title_case(source.stem)
        return ProcessedPhoto(
            id=slug,
            src=resolve_src(str(output_path), output_name, self.config.blob_base_url),
            alt=f"{title} photograph.",
            width=width,
            height=height,
            title=title,
            taken_at=taken_at(source),
        )
