import pytest

from wget_mirror.crawler.resume import load_visited
from wget_mirror.errors import ResumeLoadError
from wget_mirror.utils import filename_for


def test_load_visited_uses_file_names(tmp_path):
    written = filename_for("http://h/a/b")
    (tmp_path / written).write_text("page")
    (tmp_path / "foo.html").write_text("hand placed")

    registry = load_visited(tmp_path)

    assert registry.snapshot() == frozenset({written, "foo"})
    assert registry.claim(written) is True


def test_load_visited_empty_directory(tmp_path):
    assert len(load_visited(tmp_path)) == 0


def test_load_visited_missing_directory(tmp_path):
    with pytest.raises(ResumeLoadError):
        load_visited(tmp_path / "missing")


def test_load_visited_not_a_directory(tmp_path):
    target = tmp_path / "file"
    target.write_text("x")
    with pytest.raises(ResumeLoadError):
        load_visited(target)


@pytest.mark.parametrize(
    "name,key",
    [
        ("foo.html", "foo"),
        ("a.b.c", "a.b"),
        (".hidden", ""),
        ("noext", "noext"),
    ],
)
def test_load_visited_strips_from_last_dot(tmp_path, name, key):
    (tmp_path / name).write_text("x")
    assert load_visited(tmp_path).snapshot() == frozenset({key})
