"""
Manifest - Ordered list of processed photos written by the prepare command.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterator, List, Optional, Set

from .photo_record import ProcessedPhoto

ORDER_RANDOMIZED = 'randomized'
ORDER_FILENAME = 'filename'
SRC_MODE_BLOB = 'blob'
SRC_MODE_LOCAL = 'local'

TS_TYPE_NAME = 'PhotographyPhoto'
TS_EXPORT_NAME = 'photographyPhotos'


def ts_escape(value: str) -> str:
    """Escape a value for a single-quoted TypeScript string literal."""
    return value.replace('\\', '\\\\').replace("'", "\\'")


@dataclass
class Manifest:
    """
    Ordered photo manifest. Insertion order is gallery display order.

    Attributes:
        created_at: ISO timestamp when the manifest was generated
        order: 'randomized' or 'filename'
        src_mode: 'blob' or 'local'
        photos: Photo entries in display order
    """
    created_at: str
    order: str = ORDER_FILENAME
    src_mode: str = SRC_MODE_LOCAL
    photos: List[ProcessedPhoto] = field(default_factory=list)
    _ids: Set[str] = field(default_factory=set, init=False, repr=False, compare=False)

    def __post_init__(self):
        self._ids = {photo.id for photo in self.photos}

    def add_photo(self, photo: ProcessedPhoto) -> None:
        """Append a photo. Raises ValueError if its id is already present."""
        if photo.id in self._ids:
            raise ValueError(f"Duplicate photo id: {photo.id}")
        self._ids.add(photo.id)
        self.photos.append(photo)

    def __iter__(self) -> Iterator[ProcessedPhoto]:
        return iter(self.photos)

    def __len__(self) -> int:
        return len(self.photos)

    @property
    def ids(self) -> List[str]:
        return [photo.id for photo in self.photos]

    def get(self, photo_id: str) -> Optional[ProcessedPhoto]:
        for photo in self.photos:
            if photo.id == photo_id:
                return photo
        return None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'generated_at': self.created_at,
            'order': self.order,
            'src_mode': self.src_mode,
            'photos': [photo.to_dict() for photo in self.photos],
        }

    @classmethod
    def from_dict(cls, data) -> 'Manifest':
        """Create from a dictionary, or from a bare list of photo objects."""
        if isinstance(data, list):
            data = {'photos': data}

        manifest = cls(
            created_at=data.get('generated_at', ''),
            order=data.get('order', ORDER_FILENAME),
            src_mode=data.get('src_mode', SRC_MODE_LOCAL),
        )
        for photo_data in data.get('photos', []):
            manifest.add_photo(ProcessedPhoto.from_dict(photo_data))
        return manifest

    def to_typescript(self) -> str:
        """Render as a TypeScript module exporting the typed photo list."""
        entries = []
        for photo in self.photos:
            lines = [
                '  {',
                f"    id: '{ts_escape(photo.id)}',",
                f"    src: '{ts_escape(photo.src)}',",
                f"    alt: '{ts_escape(photo.alt)}',",
                f"    width: {photo.width},",
                f"    height: {photo.height},",
                f"    title: '{ts_escape(photo.title)}',",
                f"    takenAt: '{ts_escape(photo.taken_at)}',",
            ]
            if photo.location is not None:
                lines.append(f"    location: '{ts_escape(photo.location)}',")
            if photo.note is not None:
                lines.append(f"    note: '{ts_escape(photo.note)}',")
            lines.append('  },')
            entries.append('\n'.join(lines))

        rows = ''.join(f"{entry}\n" for entry in entries)
        return (
            f"export type {TS_TYPE_NAME} = {{\n"
            "  id: string;\n"
            "  src: string;\n"
            "  alt: string;\n"
            "  width: number;\n"
            "  height: number;\n"
            "  title: string;\n"
            "  takenAt: string;\n"
            "  location?: string;\n"
            "  note?: string;\n"
            "};\n"
            "\n"
            f"export const {TS_EXPORT_NAME}: {TS_TYPE_NAME}[] = [\n"
            f"{rows}"
            "];\n"
        )

    def save(self, filepath: str) -> None:
        """
        Write the manifest, overwriting any previous file.

        A '.ts' suffix produces a TypeScript module; anything else is JSON.
        """
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)

        if path.suffix.lower() == '.ts':
            content = self.to_typescript()
        else:
            content = json.dumps(self.to_dict(), indent=2, ensure_ascii=False) + '\n'

        path.write_text(content, encoding='utf-8')

    @classmethod
    def load(cls, filepath: str) -> 'Manifest':
        """Load a JSON manifest."""
        with open(filepath, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return cls.from_dict(data)

    @classmethod
    def create_new(cls, randomized: bool = False, blob_urls: bool = False) -> 'Manifest':
        """Create a new empty manifest."""
        return cls(
            created_at=datetime.now().isoformat(timespec='seconds'),
            order=ORDER_RANDOMIZED if randomized else ORDER_FILENAME,
            src_mode=SRC_MODE_BLOB if blob_urls else SRC_MODE_LOCAL,
        )
