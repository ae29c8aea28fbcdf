"""
Scanner - Enumerates image files in a directory in a stable order.
"""

import logging
import os
import random
from pathlib import Path
from typing import Iterable, List, Optional

from .errors import PreconditionError
from .naming import natural_key

SOURCE_EXTENSIONS = frozenset({'.jpg', '.jpeg', '.png', '.heic', '.heif', '.webp'})
OUTPUT_EXTENSIONS = frozenset({'.jpg', '.jpeg', '.png', '.webp'})


class Scanner:
    """
    Lists the image files of a single directory.

    Only regular files directly inside the directory are considered, and the
    extension check is case-insensitive.
    """

    def __init__(
        self,
        extensions: Iterable[str] = SOURCE_EXTENSIONS,
        logger: Optional[logging.Logger] = None
    ):
        self.extensions = frozenset(ext.lower() for ext in extensions)
        self.logger = logger or logging.getLogger(__name__)

    def is_supported(self, path: Path) -> bool:
        return path.suffix.lower() in self.extensions

    def list_files(self, directory: str) -> List[Path]:
        """
        List supported files in natural, case-insensitive filename order.

        Raises:
            PreconditionError: If the directory does not exist
        """
        root = Path(directory)
        if not root.is_dir():
            raise PreconditionError(f"Directory not found: {directory}")

        files = [
            Path(entry.path)
            for entry in os.scandir(root)
            if entry.is_file() and self.is_supported(Path(entry.name))
        ]
        files.sort(key=lambda p: natural_key(p.name))

        self.logger.debug(f"Found {len(files)} supported files in {directory}")
        return files

    def require_files(self, directory: str, what: str = 'supported image') -> List[Path]:
        """Like list_files, but an empty result is an error."""
        files = self.list_files(directory)
        if not files:
            raise PreconditionError(f"No {what} files found in {directory}")
        return files

    def remove_files(self, directory: str) -> int:
        """Delete every supported file in directory. Returns the number removed."""
        removed = 0
        for path in self.list_files(directory):
            path.unlink()
            removed += 1
            self.logger.debug(f"Removed stale file: {path}")
        return removed


def shuffled(items: List[Path], rng: Optional[random.Random] = None) -> List[Path]:
    """Return a uniformly shuffled copy (Fisher-Yates via random.shuffle)."""
    result = list(items)
    (rng or random.Random()).shuffle(result)
    return result
