"""Tests for Scanner class."""

import random

import pytest

from photoprep.errors import PreconditionError
from photoprep.scanner import OUTPUT_EXTENSIONS, SOURCE_EXTENSIONS, Scanner, shuffled


class TestScanner:
    """Tests for Scanner class."""

    def test_list_files_filters_and_sorts(self, source_dir, logger):
        """Test only supported regular files are listed, in natural order."""
        scanner = Scanner(SOURCE_EXTENSIONS, logger)

        names = [p.name for p in scanner.list_files(str(source_dir))]

        assert names == ['beach 2.JPG', 'Beach 10.jpg', 'my_cool-photo.png']

    def test_bare_name_before_numbered(self, tmp_path, logger):
        """Test a name without digits sorts before its numbered siblings."""
        for name in ('sunset10.jpg', 'sunset.jpg', 'sunset2.jpg'):
            (tmp_path / name).write_bytes(b'x')

        names = [p.name for p in Scanner(SOURCE_EXTENSIONS, logger).list_files(str(tmp_path))]

        assert names == ['sunset.jpg', 'sunset2.jpg', 'sunset10.jpg']

    def test_output_extensions_exclude_heic(self, tmp_path, logger):
        """Test the output scanner ignores source-only formats."""
        for name in ('a.heic', 'b.HEIF', 'c.jpeg', 'd.webp'):
            (tmp_path / name).write_bytes(b'x')

        scanner = Scanner(OUTPUT_EXTENSIONS, logger)

        assert [p.name for p in scanner.list_files(str(tmp_path))] == ['c.jpeg', 'd.webp']

    def test_missing_directory(self, tmp_path, logger):
        """Test a missing directory is a precondition error."""
        scanner = Scanner(logger=logger)

        with pytest.raises(PreconditionError):
            scanner.list_files(str(tmp_path / 'missing'))

    def test_require_files_empty(self, tmp_path, logger):
        """Test an empty result is a precondition error."""
        (tmp_path / 'readme.txt').write_text('hi')
        scanner = Scanner(logger=logger)

        with pytest.raises(PreconditionError, match='No supported image files found'):
            scanner.require_files(str(tmp_path))

    def test_remove_files(self, tmp_path, logger):
        """Test only supported files are removed."""
        (tmp_path / 'old.jpg').write_bytes(b'x')
        (tmp_path / 'old.PNG').write_bytes(b'x')
        (tmp_path / 'keep.txt').write_text('x')
        scanner = Scanner(OUTPUT_EXTENSIONS, logger)

        removed = scanner.remove_files(str(tmp_path))

        assert removed == 2
        assert sorted(p.name for p in tmp_path.iterdir()) == ['keep.txt']


class TestShuffled:
    """Tests for shuffled."""

    def test_seeded_shuffle_is_reproducible(self):
        """Test a seeded generator gives the same order as random.shuffle."""
        items = list(range(20))
        expected = list(items)
        random.Random(7).shuffle(expected)

        assert shuffled(items, random.Random(7)) == expected

    def test_does_not_mutate_input(self):
        """Test the input list is left untouched."""
        items = [1, 2, 3, 4]

        result = shuffled(items, random.Random(1))

        assert items == [1, 2, 3, 4]
        assert sorted(result) == items

    def test_unseeded_shuffle_varies(self):
        """Test repeated unseeded shuffles produce at least one different order."""
        items = list(range(10))

        orders = {tuple(shuffled(items)) for _ in range(20)}

        assert len(orders) > 1
