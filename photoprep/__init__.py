"""
Photography asset pipeline for the portfolio site.

Two independent batch commands sharing only the filesystem:
    1. prepare: Resize source photos into the site's image folder and write a manifest
    2. upload:  Push the processed images to blob storage
"""

__version__ = "1.0.0"

from .config import PrepareConfig, UploadConfig, S3Config
from .errors import (
    PipelineError,
    ConfigurationError,
    PreconditionError,
    ToolError,
    DimensionError,
    UploadError,
)
from .image_processor import (
    SipsImageProcessor,
    MagickImageProcessor,
    PillowImageProcessor,
    create_image_processor,
)
from .object_store import BlobCliStore, S3ObjectStore, create_object_store
from .photo_record import ProcessedPhoto, UploadTarget
from .manifest import Manifest
from .scanner import Scanner
from .run_stats import RunStats
from .progress import RunProgress
from .preparer import Preparer
from .publisher import Publisher
from .reporter import Reporter

__all__ = [
    "PrepareConfig",
    "UploadConfig",
    "S3Config",
    "PipelineError",
    "ConfigurationError",
    "PreconditionError",
    "ToolError",
    "DimensionError",
    "UploadError",
    "SipsImageProcessor",
    "MagickImageProcessor",
    "PillowImageProcessor",
    "create_image_processor",
    "BlobCliStore",
    "S3ObjectStore",
    "create_object_store",
    "ProcessedPhoto",
    "UploadTarget",
    "Manifest",
    "Scanner",
    "RunStats",
    "RunProgress",
    "Preparer",
    "Publisher",
    "Reporter",
]
