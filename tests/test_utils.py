import os

import pytest

from wget_mirror.errors import DestinationError
from wget_mirror.utils import (
    INDEX_FILENAME,
    filename_for,
    is_child_url,
    normalize_filename,
    parse_start_url,
    prepare_destination,
)


@pytest.mark.parametrize(
    "url,expected",
    [
        ("http://h/a/", "http__h_a_"),
        ("http://h/a/b", "http__h_a_b"),
        ("https://example.com:8080/docs/index.html", "https__example_com8080_docs_index_html"),
        ("http://h/a?x=1&y=2", "http__h_a?x=1&y=2"),
    ],
)
def test_normalize_filename(url, expected):
    assert normalize_filename(url) == expected
    # stable across calls
    assert normalize_filename(url) == normalize_filename(url)


def test_normalize_filename_collapses_punctuation():
    assert normalize_filename("http://h/a.b") == normalize_filename("http://h/a/b")


@pytest.mark.parametrize("url", ["", ":", "::::"])
def test_filename_for_empty_name(url):
    assert filename_for(url) == INDEX_FILENAME


@pytest.mark.parametrize(
    "url,start,expected",
    [
        ("http://h/a", "http://h/a", True),
        ("http://h/a/b", "http://h/a", True),
        ("http://h/a/b/c?q=1", "http://h/a", True),
        ("http://h/ab", "http://h/a", False),
        ("http://h/", "http://h/a", False),
        ("http://h/x", "http://h/a/", False),
        ("http://h/a/b", "http://h/a/", True),
        ("http://h/a", "http://h/a/", False),
        ("https://h/a/b", "http://h/a", False),
        ("http://other/a/b", "http://h/a", False),
        ("http://h:81/a/b", "http://h/a", False),
        ("http://user@h/a/b", "http://h/a", True),
        ("http://h/anything", "http://h", True),
    ],
)
def test_is_child_url(url, start, expected):
    assert is_child_url(url, start) is expected


def test_parse_start_url_accepts_http():
    assert parse_start_url("https://example.com/docs") == "https://example.com/docs"
    assert parse_start_url("  http://h/a/  ") == "http://h/a/"


@pytest.mark.parametrize("bad", ["::::", "badurl", "ftp://h/x", "http://", "http://[::1/x", "/relative/path"])
def test_parse_start_url_rejects(bad):
    with pytest.raises(ValueError, match="invalid start URL"):
        parse_start_url(bad)


def test_prepare_destination_creates_directory(tmp_path):
    target = tmp_path / "nested" / "mirror"
    result = prepare_destination(target)
    assert result == target
    assert target.is_dir()
    umask = os.umask(0)
    os.umask(umask)
    assert target.stat().st_mode & 0o777 == 0o755 & ~umask


def test_prepare_destination_accepts_existing_directory(tmp_path):
    assert prepare_destination(tmp_path) == tmp_path


def test_prepare_destination_rejects_file(tmp_path):
    target = tmp_path / "file"
    target.write_text("x")
    with pytest.raises(DestinationError):
        prepare_destination(target)
