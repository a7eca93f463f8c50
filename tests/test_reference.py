"""Tests for detail references."""

from __future__ import annotations

import base64

import pytest

from tests.conftest import write_php
from hooklocator.core.reference import (
    DetailError,
    FileNotFound,
    InvalidLine,
    InvalidReference,
    build_reference,
    decode_reference,
)


def _encode(raw: str) -> str:
    return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii")


@pytest.fixture
def php_file(tmp_path):
    return write_php(tmp_path / "my plugin" / "main.php", "<?php", "do_action( 'init' );")


class TestRoundTrip:
    @pytest.mark.parametrize("line", [1, 2, 57, 10_000])
    def test_decode_gives_back_file_and_line(self, php_file, line):
        ref = decode_reference(build_reference(php_file, line))
        assert ref.file == php_file
        assert ref.line == line

    def test_reference_is_url_safe(self, php_file):
        ref = build_reference(php_file, 2)
        assert all(c.isalnum() or c in "-_=" for c in ref)

    def test_accepts_string_path(self, php_file):
        assert decode_reference(build_reference(str(php_file), 1)).file == php_file

    @pytest.mark.parametrize("name", [" leading.php", "trailing.php ", " both.php "])
    def test_whitespace_in_path_is_kept(self, tmp_path, name):
        path = write_php(tmp_path / "theme " / name, "<?php")
        ref = decode_reference(build_reference(path, 1))
        assert ref.file == path
        assert str(ref.file).endswith(name)

    def test_whitespace_around_line_is_ignored(self, php_file):
        assert decode_reference(_encode(f"{php_file}| 2 ")).line == 2


class TestTampering:
    @pytest.mark.parametrize("raw", ["no-separator", "a|1|extra", "|||"])
    def test_wrong_part_count(self, raw):
        with pytest.raises(InvalidReference, match="Invalid detail format."):
            decode_reference(_encode(raw))

    @pytest.mark.parametrize("ref", ["!!!not base64!!!", "abc", "zé"])
    def test_not_base64(self, ref):
        with pytest.raises(InvalidReference, match="Invalid detail identifier."):
            decode_reference(ref)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFound, match="File not found or not accessible."):
            decode_reference(build_reference(tmp_path / "deleted.php", 3))

    def test_directory_is_not_a_file(self, tmp_path):
        with pytest.raises(FileNotFound):
            decode_reference(build_reference(tmp_path, 3))

    def test_empty_file_part(self):
        with pytest.raises(FileNotFound):
            decode_reference(_encode("|3"))

    @pytest.mark.parametrize("line", ["0", "-3", "abc", ""])
    def test_bad_line(self, php_file, line):
        with pytest.raises(InvalidLine, match="Invalid line number."):
            decode_reference(_encode(f"{php_file}|{line}"))

    def test_file_checked_before_line(self, tmp_path):
        with pytest.raises(FileNotFound):
            decode_reference(_encode(f"{tmp_path / 'gone.php'}|0"))

    def test_all_failures_share_a_base(self):
        for exc in (InvalidReference, FileNotFound, InvalidLine):
            assert issubclass(exc, DetailError)
