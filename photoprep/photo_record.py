"""
Records produced and consumed by the pipeline.
"""

from dataclasses import dataclass
from typing import Optional

PLACEHOLDER_LOCATION = 'Replace location'


@dataclass
class ProcessedPhoto:
    """
    A single photo entry of the manifest.

    Attributes:
        id: Slug, unique within one manifest
        src: Site-relative path or remote URL of the processed image
        alt: Alt text
        width: Pixel width of the processed image
        height: Pixel height of the processed image
        title: Display title derived from the filename
        taken_at: ISO date (YYYY-MM-DD) from the source file's mtime
        location: Placeholder location, edited by hand afterwards
        note: Optional free-form note
    """
    id: str
    src: str
    alt: str
    width: int
    height: int
    title: str
    taken_at: str
    location: Optional[str] = PLACEHOLDER_LOCATION
    note: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to the camelCase dictionary used by the gallery."""
        data = {
            'id': self.id,
            'src': self.src,
            'alt': self.alt,
            'width': self.width,
            'height': self.height,
            'title': self.title,
            'takenAt': self.taken_at,
        }
        if self.location is not None:
            data['location'] = self.location
        if self.note is not None:
            data['note'] = self.note
        return data

    @classmethod
    def from_dict(cls, data: dict) -> 'ProcessedPhoto':
        """Create from dictionary."""
        return cls(
            id=data['id'],
            src=data['src'],
            alt=data['alt'],
            width=int(data['width']),
            height=int(data['height']),
            title=data['title'],
            taken_at=data['takenAt'],
            location=data.get('location'),
            note=data.get('note'),
        )

    def format_status(self) -> str:
        """Short status line, e.g. 'beach -> /photography/images/beach.jpg (2600x1733)'."""
        return f"{self.id} -> {self.src} ({self.width}x{self.height})"


@dataclass
class UploadTarget:
    """
    A processed file paired with its remote destination.

    Attributes:
        local_path: Path of the file on disk
        remote_path: Destination path in the store ('prefix/filename')
        cache_max_age: Cache-Control max-age in seconds
    """
    local_path: str
    remote_path: str
    cache_max_age: int
