"""Tests for Manifest class."""

import json

import pytest

from photoprep.manifest import (
    ORDER_FILENAME,
    ORDER_RANDOMIZED,
    SRC_MODE_BLOB,
    Manifest,
    ts_escape,
)
from photoprep.photo_record import ProcessedPhoto


class TestManifest:
    """Tests for Manifest class."""

    def test_create_new(self):
        """Test creating a new manifest records the run modes."""
        manifest = Manifest.create_new(randomized=True, blob_urls=True)

        assert manifest.order == ORDER_RANDOMIZED
        assert manifest.src_mode == SRC_MODE_BLOB
        assert manifest.created_at
        assert len(manifest) == 0

    def test_preserves_insertion_order(self, sample_manifest):
        """Test photos keep the order they were added in."""
        assert sample_manifest.ids == ['beach', 'beach-2', 'city-lights']

    def test_duplicate_id_rejected(self, sample_manifest, sample_photo):
        """Test ids must be unique."""
        with pytest.raises(ValueError, match='Duplicate photo id: beach'):
            sample_manifest.add_photo(sample_photo)

        assert len(sample_manifest) == 3

    def test_get(self, sample_manifest):
        """Test lookup by id."""
        assert sample_manifest.get('city-lights').title == 'City Lights'
        assert sample_manifest.get('missing') is None

    def test_save_json(self, sample_manifest, tmp_path):
        """Test the JSON form lists photos in order."""
        path = tmp_path / 'data' / 'photography.json'

        sample_manifest.save(str(path))

        data = json.loads(path.read_text(encoding='utf-8'))
        assert data['order'] == ORDER_FILENAME
        assert [p['id'] for p in data['photos']] == ['beach', 'beach-2', 'city-lights']
        assert data['photos'][1]['note'] == "Tom's favourite"
        assert 'note' not in data['photos'][0]

    def test_save_overwrites(self, sample_manifest, tmp_path):
        """Test a second save replaces the previous file entirely."""
        path = tmp_path / 'photography.json'
        path.write_text('stale content that is longer than nothing')

        Manifest.create_new().save(str(path))

        assert json.loads(path.read_text())['photos'] == []

    def test_save_and_load(self, sample_manifest, tmp_path):
        """Test loading a saved manifest keeps entries and order."""
        path = tmp_path / 'photography.json'
        sample_manifest.save(str(path))

        loaded = Manifest.load(str(path))

        assert loaded.ids == sample_manifest.ids
        assert loaded.get('beach-2').note == "Tom's favourite"

    def test_from_bare_list(self):
        """Test a bare list of photo objects is accepted."""
        manifest = Manifest.from_dict([{
            'id': 'a', 'src': '/a.jpg', 'alt': 'A photograph.',
            'width': 1, 'height': 1, 'title': 'A', 'takenAt': '2024-01-01',
        }])

        assert manifest.ids == ['a']

    def test_load_file_not_found(self):
        """Test loading non-existent file raises error."""
        with pytest.raises(FileNotFoundError):
            Manifest.load('/nonexistent/path/photography.json')


class TestTypeScriptOutput:
    """Tests for the TypeScript manifest form."""

    def test_ts_escape(self):
        """Test backslashes and single quotes are escaped."""
        assert ts_escape("it's a \\ path") == "it\\'s a \\\\ path"

    def test_save_ts(self, sample_manifest, tmp_path):
        """Test a .ts path produces a typed module."""
        path = tmp_path / 'photography.ts'

        sample_manifest.save(str(path))

        content = path.read_text(encoding='utf-8')
        assert content.startswith('export type PhotographyPhoto = {\n  id: string;')
        assert 'export const photographyPhotos: PhotographyPhoto[] = [\n  {\n' in content
        assert "    id: 'beach',\n" in content
        assert "    width: 2600,\n" in content
        assert "    location: 'Replace location',\n" in content
        assert "    note: 'Tom\\'s favourite',\n" in content
        assert content.endswith('  },\n];\n')

    def test_empty_ts(self):
        """Test an empty manifest renders an empty array."""
        content = Manifest.create_new().to_typescript()

        assert content.endswith('PhotographyPhoto[] = [\n];\n')

    def test_entry_order(self, sample_manifest):
        """Test entries appear in manifest order."""
        content = sample_manifest.to_typescript()

        assert content.index("id: 'beach'") < content.index("id: 'beach-2'") < content.index("id: 'city-lights'")
