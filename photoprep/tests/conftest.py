"""
Pytest fixtures for photoprep tests.
"""

import os
from datetime import datetime

import pytest


def write_image(path, size=(120, 80), color='red', mode='RGB', mtime=None):
    """Write a small real image file with Pillow."""
    from PIL import Image

    fmt = {
        '.png': 'PNG',
        '.webp': 'WEBP',
    }.get(path.suffix.lower(), 'JPEG')
    if fmt == 'JPEG' and mode != 'RGB':
        mode = 'RGB'

    img = Image.new(mode, size, color=color)
    img.save(path, format=fmt)

    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


@pytest.fixture
def make_image():
    """Fixture exposing the write_image helper."""
    return write_image


@pytest.fixture
def source_dir(tmp_path):
    """Source folder with three photos, one ignored text file and a subfolder."""
    src = tmp_path / "originals"
    src.mkdir()
    # 2024-03-05 12:00:00 UTC
    mtime = datetime(2024, 3, 5, 12, 0, 0).timestamp()
    write_image(src / "Beach 10.jpg", size=(300, 200), mtime=mtime)
    write_image(src / "beach 2.JPG", size=(200, 300), mtime=mtime)
    write_image(src / "my_cool-photo.png", size=(150, 150), mode='RGBA', color=(0, 0, 255, 128), mtime=mtime)
    (src / "notes.txt").write_text("not an image")
    (src / "nested").mkdir()
    return src


@pytest.fixture
def site_root(tmp_path, monkeypatch):
    """Run inside a throwaway site checkout so relative output paths land in tmp_path."""
    site = tmp_path / "site"
    site.mkdir()
    monkeypatch.chdir(site)
    return site


@pytest.fixture
def prepare_config(source_dir, site_root):
    """Fixture providing a deterministic prepare configuration using Pillow."""
    from photoprep.config import PrepareConfig

    return PrepareConfig(
        source_dir=str(source_dir),
        output_dir='public/photography/images',
        manifest_path='src/data/photography.json',
        max_edge=100,
        jpeg_quality=80,
        clean_output=True,
        randomize_order=False,
        image_backend='pillow',
    )


@pytest.fixture
def pillow_processor(logger):
    """Fixture providing the in-process image backend."""
    from photoprep.image_processor import PillowImageProcessor
    return PillowImageProcessor(logger=logger)


@pytest.fixture
def processed_dir(tmp_path):
    """Folder of processed images as left behind by a prepare run."""
    out = tmp_path / "processed"
    out.mkdir()
    for name in ("img10.jpg", "img2.jpg", "Img1.webp"):
        (out / name).write_bytes(b"jpeg bytes")
    (out / "manifest.json").write_text("{}")
    return out


@pytest.fixture
def sample_photo():
    """Fixture providing a sample processed photo."""
    from photoprep.photo_record import ProcessedPhoto

    return ProcessedPhoto(
        id='beach',
        src='/photography/images/beach.jpg',
        alt='Beach photograph.',
        width=2600,
        height=1733,
        title='Beach',
        taken_at='2024-03-05',
    )


@pytest.fixture
def sample_manifest(sample_photo):
    """Fixture providing a manifest with three photos."""
    from photoprep.manifest import Manifest
    from photoprep.photo_record import ProcessedPhoto

    manifest = Manifest(created_at=datetime.now().isoformat(timespec='seconds'))
    manifest.add_photo(sample_photo)
    manifest.add_photo(ProcessedPhoto(
        id='beach-2',
        src='/photography/images/beach-2.jpg',
        alt='Beach photograph.',
        width=1733,
        height=2600,
        title='Beach',
        taken_at='2024-03-06',
        note="Tom's favourite",
    ))
    manifest.add_photo(ProcessedPhoto(
        id='city-lights',
        src='/photography/images/city-lights.jpg',
        alt='City Lights photograph.',
        width=2600,
        height=2600,
        title='City Lights',
        taken_at='2024-03-07',
    ))
    return manifest


@pytest.fixture
def logger():
    """Fixture providing a logger."""
    import logging
    return logging.getLogger('test')
