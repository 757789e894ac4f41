"""Unit tests for core/loader.py"""

import logging

import pytest

from mdpost.core.errors import MalformedDocument, MissingRequiredField
from mdpost.core.loader import discover_files, load_file, load_path
from mdpost.core.utils.ids import content_hash


def test_discover_files_single(tmp_path):
    """discover_files returns a list with one file when given a file path."""
    f = tmp_path / "post.md"
    f.write_text("x")
    assert discover_files(f) == [f]


def test_discover_files_non_md_skipped(tmp_path):
    (tmp_path / "notes.txt").write_text("text")
    assert discover_files(tmp_path) == []
    assert discover_files(tmp_path / "notes.txt") == []


def test_discover_files_recursive_sorted(posts_dir):
    files = discover_files(posts_dir)
    assert [p.name for p in files] == ["es6-modules.md", "broken.md", "hello.md"]


def test_load_file(posts_dir):
    path = posts_dir / "hello.md"
    post = load_file(path)
    assert post.path == path
    assert post.slug == "hello"
    assert post.hash == content_hash(path.read_text(encoding="utf-8"))
    assert post.document.title == "Hello"


def test_load_file_slug_from_front_matter(tmp_path):
    f = tmp_path / "anything.md"
    f.write_text("---\ntitle: T\ndate: 2020-01-01 10:00:00 +0000\nslug: Custom Slug\n---\n")
    assert load_file(f).slug == "custom-slug"


def test_load_file_toc_default(posts_dir):
    assert load_file(posts_dir / "hello.md", toc_default=True).document.toc is True


def test_load_file_parse_error_propagates(tmp_path):
    f = tmp_path / "no-title.md"
    f.write_text("---\ndate: 2020-01-01 10:00:00 +0000\n---\n")
    with pytest.raises(MissingRequiredField):
        load_file(f)


def test_load_file_unreadable(tmp_path):
    f = tmp_path / "latin1.md"
    f.write_bytes(b"---\ntitle: caf\xe9\n---\n")
    with pytest.raises(MalformedDocument, match="cannot read"):
        load_file(f)


def test_load_path_continues_past_failures(posts_dir, caplog):
    """A broken post is reported and the rest of the batch still loads."""
    with caplog.at_level(logging.WARNING, logger="mdpost.core.loader"):
        loaded, failed = load_path(posts_dir)

    assert sorted(p.slug for p in loaded) == ["es6-modules", "hello"]
    assert len(failed) == 1
    assert failed[0].path.name == "broken.md"
    assert isinstance(failed[0].error, MalformedDocument)
    assert "broken.md" in caplog.text


def test_load_path_empty_dir(tmp_path):
    assert load_path(tmp_path) == ([], [])
