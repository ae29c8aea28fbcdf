"""
Image processors - resize and re-encode photographs to JPEG.

Three interchangeable backends share the same interface:

    ensure_available()                                   -> None
    convert(source, destination, quality, max_edge)      -> Path
    get_dimensions(path)                                 -> (width, height)

SipsImageProcessor and MagickImageProcessor shell out to external tools via
`sh`; PillowImageProcessor works in-process.
"""

import logging
import re
from pathlib import Path
from typing import Optional, Tuple, Union

from PIL import Image, ImageOps
from sh import Command, CommandNotFound, ErrorReturnCode

from .errors import ConfigurationError, DimensionError, PreconditionError, ToolError


def _decode(data) -> str:
    if data is None:
        return ''
    if isinstance(data, bytes):
        return data.decode('utf-8', errors='replace')
    return str(data)


class ExternalTool:
    """
    Thin wrapper around an `sh` command that converts failures to ToolError.
    """

    def __init__(self, name: str, logger: Optional[logging.Logger] = None):
        self.name = name
        self.logger = logger or logging.getLogger(__name__)

    def __call__(self, *args, **kwargs) -> str:
        self.logger.debug(f"Running: {self.name} {' '.join(str(a) for a in args)}")
        try:
            command = Command(self.name)
            return str(command(*[str(a) for a in args], **kwargs))
        except ErrorReturnCode as e:
            output = '\n'.join(o for o in (_decode(e.stdout), _decode(e.stderr)) if o)
            raise ToolError(self.name, getattr(e, 'exit_code', None), output) from e
        except (CommandNotFound, OSError) as e:
            raise ToolError(self.name, reason=str(e) or 'command not found') from e


class SipsImageProcessor:
    """
    macOS `sips` backend.
    """

    TOOL = 'sips'
    WIDTH_PATTERN = re.compile(r'pixelWidth:\s+(\d+)')
    HEIGHT_PATTERN = re.compile(r'pixelHeight:\s+(\d+)')

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.tool = ExternalTool(self.TOOL, self.logger)

    def ensure_available(self) -> None:
        try:
            self.tool('--help')
        except ToolError as e:
            raise PreconditionError(f"{self.TOOL} is required but not available.") from e

    def convert(self, source: Path, destination: Path, quality: int, max_edge: int) -> Path:
        self.tool(
            '-s', 'format', 'jpeg',
            '-s', 'formatOptions', quality,
            '-Z', max_edge,
            source,
            '--out', destination,
        )
        return Path(destination)

    def get_dimensions(self, path: Path) -> Tuple[int, int]:
        output = self.tool('-g', 'pixelWidth', '-g', 'pixelHeight', path)
        width = self.WIDTH_PATTERN.search(output)
        height = self.HEIGHT_PATTERN.search(output)
        if not width or not height:
            raise DimensionError(self.TOOL, str(path), output)
        return int(width.group(1)), int(height.group(1))


class MagickImageProcessor:
    """
    ImageMagick backend (`convert` + `identify`).
    """

    TOOL = 'convert'
    DIMENSIONS_PATTERN = re.compile(r'^\s*(\d+)\s+(\d+)')

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.tool = ExternalTool(self.TOOL, self.logger)
        self.identify = ExternalTool('identify', self.logger)

    def ensure_available(self) -> None:
        try:
            self.tool('-version')
            self.identify('-version')
        except ToolError as e:
            raise PreconditionError("ImageMagick is required but not available.") from e

    def convert(self, source: Path, destination: Path, quality: int, max_edge: int) -> Path:
        # '>' only ever shrinks; [0] takes the primary frame of multi-image files
        self.tool(
            f"{source}[0]",
            '-auto-orient',
            '-resize', f"{max_edge}x{max_edge}>",
            '-quality', quality,
            f"jpeg:{destination}",
        )
        return Path(destination)

    def get_dimensions(self, path: Path) -> Tuple[int, int]:
        output = self.identify('-format', '%w %h', path)
        match = self.DIMENSIONS_PATTERN.match(output)
        if not match:
            raise DimensionError('identify', str(path), output)
        return int(match.group(1)), int(match.group(2))


class PillowImageProcessor:
    """
    In-process backend using Pillow. HEIC/HEIF input needs a Pillow plugin.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def ensure_available(self) -> None:
        return None

    def convert(self, source: Path, destination: Path, quality: int, max_edge: int) -> Path:
        try:
            with Image.open(source) as img:
                # Bake in the EXIF orientation, as -auto-orient does for magick
                img = ImageOps.exif_transpose(img)
                img = self._convert_color_mode(img)
                img.thumbnail((max_edge, max_edge), Image.Resampling.LANCZOS)
                img.save(destination, format='JPEG', quality=quality, optimize=True)
        except (OSError, ValueError) as e:
            self.logger.error(f"Error converting {source}: {e}")
            raise ToolError('pillow', reason=f"{source}: {e}") from e
        return Path(destination)

    def get_dimensions(self, path: Path) -> Tuple[int, int]:
        try:
            with Image.open(path) as img:
                width, height = img.size
        except OSError as e:
            raise DimensionError('pillow', str(path), str(e)) from e
        return width, height

    def _convert_color_mode(self, img: Image.Image) -> Image.Image:
        """Flatten transparency onto white; JPEG has no alpha channel."""
        if img.mode in ('RGBA', 'LA', 'P'):
            img = img.convert('RGBA')
            background = Image.new('RGB', img.size, (255, 255, 255))
            background.paste(img, mask=img.split()[-1])
            return background
        elif img.mode != 'RGB':
            return img.convert('RGB')
        return img


ImageProcessor = Union[SipsImageProcessor, MagickImageProcessor, PillowImageProcessor]

BACKENDS = {
    'sips': SipsImageProcessor,
    'magick': MagickImageProcessor,
    'pillow': PillowImageProcessor,
}


def create_image_processor(name: str, logger: Optional[logging.Logger] = None) -> ImageProcessor:
    """Instantiate the backend registered under name."""
    try:
        backend = BACKENDS[name]
    except KeyError:
        raise ConfigurationError(f"Unknown image backend: {name}") from None
    return backend(logger=logger)
