"""
Configuration for the prepare and upload commands.

Each config is built once (from the environment, then CLI overrides) and
passed explicitly into the Preparer or Publisher.
"""

import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional

from urllib3.util import parse_url
from urllib3.exceptions import LocationParseError


DEFAULT_SOURCE_DIR = str(Path.home() / 'Documents' / 'Photo Portfolio')
DEFAULT_OUTPUT_DIR = 'public/photography/images'
DEFAULT_MANIFEST_PATH = 'src/data/photography.json'
DEFAULT_PREFIX = 'photography'

DEFAULT_MAX_EDGE = 2600
DEFAULT_JPEG_QUALITY = 82
DEFAULT_CACHE_MAX_AGE = 31536000

IMAGE_BACKENDS = ('sips', 'magick', 'pillow')
STORE_BACKENDS = ('vercel', 's3')


def parse_number(value: Optional[str], default: float) -> float:
    """Parse a numeric env value; unparsable input becomes NaN so validate() rejects it."""
    if value is None:
        return float(default)
    value = value.strip()
    if not value:
        return float('nan')
    try:
        return float(value)
    except ValueError:
        return float('nan')


def parse_seed(value: Optional[str]) -> Optional[float]:
    """Unset or blank means no seed; anything else must parse as a whole number."""
    if value is None or not value.strip():
        return None
    try:
        return int(value.strip())
    except ValueError:
        return parse_number(value, 0)


def parse_flag(value: Optional[str]) -> bool:
    """Flags are enabled unless explicitly set to "0"."""
    return value != '0'


def _is_whole(value: float) -> bool:
    return math.isfinite(value) and float(value).is_integer()


def _format_number(value: float) -> str:
    if _is_whole(value):
        return str(int(value))
    return str(value)


def normalize_base_url(value: Optional[str]) -> str:
    """Trim whitespace and trailing slashes from a base URL."""
    return (value or '').strip().rstrip('/')


def is_valid_url(value: str) -> bool:
    """True if value is an absolute URL with both scheme and host."""
    try:
        url = parse_url(value)
    except LocationParseError:
        return False
    return bool(url.scheme) and bool(url.host)


@dataclass
class PrepareConfig:
    """
    Settings for the prepare command.

    Attributes:
        source_dir: Directory holding the original photographs
        output_dir: Directory receiving resized JPEGs
        manifest_path: Manifest file to write (.json or .ts)
        max_edge: Maximum length of the longer edge in pixels
        jpeg_quality: JPEG quality, 1-100
        clean_output: Delete previous output images before writing
        randomize_order: Shuffle the processing order
        blob_base_url: Optional absolute URL used as prefix for src values
        shuffle_seed: Optional seed for a reproducible shuffle
        image_backend: 'sips', 'magick' or 'pillow'
    """
    source_dir: str = DEFAULT_SOURCE_DIR
    output_dir: str = DEFAULT_OUTPUT_DIR
    manifest_path: str = DEFAULT_MANIFEST_PATH
    max_edge: float = DEFAULT_MAX_EDGE
    jpeg_quality: float = DEFAULT_JPEG_QUALITY
    clean_output: bool = True
    randomize_order: bool = True
    blob_base_url: str = ''
    shuffle_seed: Optional[float] = None
    image_backend: str = 'sips'

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'PrepareConfig':
        """Build configuration from environment variables."""
        env = os.environ if environ is None else environ

        return cls(
            max_edge=parse_number(env.get('MAX_EDGE'), DEFAULT_MAX_EDGE),
            jpeg_quality=parse_number(env.get('JPEG_QUALITY'), DEFAULT_JPEG_QUALITY),
            clean_output=parse_flag(env.get('CLEAN_OUTPUT')),
            randomize_order=parse_flag(env.get('RANDOMIZE_ORDER')),
            blob_base_url=normalize_base_url(env.get('BLOB_BASE_URL')),
            shuffle_seed=parse_seed(env.get('SHUFFLE_SEED')),
            image_backend=env.get('IMAGE_BACKEND', 'sips').strip().lower() or 'sips',
        )

    @property
    def uses_blob_urls(self) -> bool:
        return len(self.blob_base_url) > 0

    @property
    def seed(self) -> Optional[int]:
        """Shuffle seed as an int, or None for an entropy-seeded shuffle."""
        if self.shuffle_seed is None or not _is_whole(self.shuffle_seed):
            return None
        return int(self.shuffle_seed)

    def validate(self) -> List[str]:
        """Return a list of configuration errors (empty when valid)."""
        errors = []

        if not _is_whole(self.max_edge) or self.max_edge <= 0:
            errors.append(f"Invalid MAX_EDGE value: {_format_number(self.max_edge)}")

        if not _is_whole(self.jpeg_quality) or not 1 <= self.jpeg_quality <= 100:
            errors.append(f"Invalid JPEG_QUALITY value: {_format_number(self.jpeg_quality)}")

        if self.uses_blob_urls and not is_valid_url(self.blob_base_url):
            errors.append(f"Invalid BLOB_BASE_URL value: {self.blob_base_url}")

        if self.shuffle_seed is not None and not _is_whole(self.shuffle_seed):
            errors.append(f"Invalid SHUFFLE_SEED value: {_format_number(self.shuffle_seed)}")

        if self.image_backend not in IMAGE_BACKENDS:
            errors.append(
                f"Invalid IMAGE_BACKEND value: {self.image_backend} "
                f"(expected one of {', '.join(IMAGE_BACKENDS)})"
            )

        return errors


@dataclass
class S3Config:
    """
    S3-compatible storage settings, used when BLOB_STORE=s3.

    Attributes:
        endpoint: Endpoint URL (None for AWS default)
        bucket: Target bucket
        access_key: Access key id
        secret_key: Secret access key
        region: Region name
        verify_ssl: Verify TLS certificates
    """
    endpoint: Optional[str] = None
    bucket: Optional[str] = None
    access_key: Optional[str] = None
    secret_key: Optional[str] = None
    region: Optional[str] = None
    verify_ssl: bool = True

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'S3Config':
        env = os.environ if environ is None else environ
        return cls(
            endpoint=env.get('S3_ENDPOINT') or None,
            bucket=env.get('S3_BUCKET') or None,
            access_key=env.get('S3_ACCESS_KEY') or None,
            secret_key=env.get('S3_SECRET_KEY') or None,
            region=env.get('S3_REGION') or None,
            verify_ssl=env.get('S3_VERIFY_SSL', '1').strip().lower() not in ('0', 'false', 'no'),
        )

    def validate(self) -> List[str]:
        errors = []
        if not self.bucket:
            errors.append("S3_BUCKET is required for the s3 store")
        if self.endpoint and not is_valid_url(self.endpoint):
            errors.append(f"Invalid S3_ENDPOINT value: {self.endpoint}")
        return errors


@dataclass
class UploadConfig:
    """
    Settings for the upload command.

    Attributes:
        input_dir: Directory of processed images
        prefix: Remote path prefix
        cache_max_age: Cache-Control max-age in seconds
        token: Optional blob read/write token
        store: 'vercel' or 's3'
        s3: S3 settings for the s3 store
    """
    input_dir: str = DEFAULT_OUTPUT_DIR
    prefix: str = DEFAULT_PREFIX
    cache_max_age: float = DEFAULT_CACHE_MAX_AGE
    token: str = ''
    store: str = 'vercel'
    s3: S3Config = field(default_factory=S3Config)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'UploadConfig':
        """Build configuration from environment variables."""
        env = os.environ if environ is None else environ
        return cls(
            cache_max_age=parse_number(env.get('CACHE_MAX_AGE'), DEFAULT_CACHE_MAX_AGE),
            token=(env.get('BLOB_READ_WRITE_TOKEN') or '').strip(),
            store=env.get('BLOB_STORE', 'vercel').strip().lower() or 'vercel',
            s3=S3Config.from_env(env),
        )

    @property
    def remote_prefix(self) -> str:
        return self.prefix.strip('/')

    def remote_path(self, filename: str) -> str:
        """Remote object path for a local filename."""
        if not self.remote_prefix:
            return filename
        return f"{self.remote_prefix}/{filename}"

    def validate(self) -> List[str]:
        """Return a list of configuration errors (empty when valid)."""
        errors = []

        if not _is_whole(self.cache_max_age) or self.cache_max_age < 0:
            errors.append(f"Invalid CACHE_MAX_AGE value: {_format_number(self.cache_max_age)}")

        if self.store not in STORE_BACKENDS:
            errors.append(
                f"Invalid BLOB_STORE value: {self.store} "
                f"(expected one of {', '.join(STORE_BACKENDS)})"
            )
        elif self.store == 's3':
            errors.extend(self.s3.validate())

        return errors
