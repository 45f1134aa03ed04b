"""Tests for sources.py - CSV discovery and decoding."""

import csv

import pytest

from cachechurn.errors import SourceError
from cachechurn.sources import find_csv_files, read_blocks


def _write_csv(path, rows):
    with open(path, "w", encoding="utf-8", newline="") as f:
        csv.writer(f).writerows(rows)


class TestFindCsvFiles:
    """Tests for input discovery."""

    def test_only_csv_files(self, tmp_path):
        """Other extensions and directories are ignored."""
        (tmp_path / "b.csv").write_text("h\n")
        (tmp_path / "a.csv").write_text("h\n")
        (tmp_path / "notes.txt").write_text("x")
        (tmp_path / "upper.CSV").write_text("h\n")
        (tmp_path / "dir.csv").mkdir()

        paths = find_csv_files(str(tmp_path))

        assert [p.name for p in paths] == ["a.csv", "b.csv"]

    def test_empty_directory(self, tmp_path):
        assert find_csv_files(str(tmp_path)) == []

    def test_missing_directory(self, tmp_path):
        """A missing directory is a fatal source error."""
        with pytest.raises(SourceError):
            find_csv_files(str(tmp_path / "absent"))


class TestReadBlocks:
    """Tests for CSV record decoding."""

    def test_skips_header(self, tmp_path):
        """The header row is not a block."""
        path = tmp_path / "dump.csv"
        _write_csv(path, [["message"], ["first"], ["second"]])

        assert list(read_blocks(path)) == ["first", "second"]

    def test_joins_fields(self, tmp_path):
        """Fields of a record are concatenated without separators."""
        path = tmp_path / "dump.csv"
        _write_csv(path, [["ts", "message"], ["12:00", "body"]])

        assert list(read_blocks(path)) == ["12:00body"]

    def test_quoted_multiline_field(self, tmp_path, evicted_block):
        """A quoted field spanning lines stays one block."""
        block = evicted_block((1, 2, 3), (4, 5, 6))
        path = tmp_path / "dump.csv"
        _write_csv(path, [["message"], [block]])

        blocks = list(read_blocks(path))

        assert blocks == [block]

    def test_header_only(self, tmp_path):
        path = tmp_path / "dump.csv"
        _write_csv(path, [["message"]])

        assert list(read_blocks(path)) == []

    def test_record_larger_than_default_field_limit(self, tmp_path, evicted_block):
        """A section far beyond 128 KiB in one field is read whole."""
        block = evicted_block(*[(i, i, 1_700_000_000 + i) for i in range(2000)])
        path = tmp_path / "dump.csv"
        _write_csv(path, [["message"], [block]])

        blocks = list(read_blocks(path))

        assert len(block) > 131072
        assert blocks == [block]

    def test_undecodable_file(self, tmp_path):
        """Bytes that are not UTF-8 fail with the file named."""
        path = tmp_path / "dump.csv"
        path.write_bytes(b"message\n\xff\xfe broken\n")

        with pytest.raises(SourceError) as excinfo:
            list(read_blocks(path))

        assert "dump.csv" in str(excinfo.value)
