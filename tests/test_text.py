import os
import re
from pathlib import Path

import pytest

from mobutil.text import (
    CaptureGroupError,
    format_commit_msg,
    get_string_for_group,
    installed_commit_msg,
    list_display,
    one_or_many,
    prepend_to_path,
    reverse_domain,
    working_dir,
)


def test_list_display_shapes():
    assert list_display(["a"]) == "a"
    assert list_display(["a", "b"]) == "a and b"
    assert list_display(["a", "b", "c"]) == "a, b, and c"
    assert list_display([]) == ""


def test_list_display_non_strings():
    assert list_display([1, 2]) == "1 and 2"


def test_reverse_domain():
    assert reverse_domain("com.example") == "example.com"
    assert reverse_domain(reverse_domain("a.b.c.d")) == "a.b.c.d"
    assert reverse_domain("single") == "single"


def test_prepend_to_path():
    assert prepend_to_path("/opt/bin", "/usr/bin") == "/opt/bin:/usr/bin"


def test_format_commit_msg():
    assert format_commit_msg("fix things") == 'Contains commits up to "fix things"'
    assert format_commit_msg('a"b').endswith('"a\\"b"')


@pytest.fixture
def fake_home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    return tmp_path


def test_installed_commit_msg_absent(fake_home):
    assert installed_commit_msg() is None


def test_installed_commit_msg_present(fake_home):
    target = fake_home / ".cargo-mobile"
    target.mkdir()
    (target / "commit").write_text("abc123 stuff", encoding="utf-8")
    assert installed_commit_msg() == "abc123 stuff"


def test_installed_commit_msg_directory_is_ignored(fake_home):
    (fake_home / ".cargo-mobile" / "commit").mkdir(parents=True)
    assert installed_commit_msg() is None


def test_get_string_for_group():
    m = re.match(r"(?P<a>x)(?P<b>y)?", "x")
    assert get_string_for_group(m, "a", "x") == "x"
    with pytest.raises(CaptureGroupError) as info:
        get_string_for_group(m, "b", "x")
    assert info.value.group == "b"
    with pytest.raises(CaptureGroupError):
        get_string_for_group(m, "missing", "x")


def test_one_or_many():
    assert one_or_many("a") == ["a"]
    assert one_or_many(["a", "b"]) == ["a", "b"]
    assert one_or_many(("a",)) == ["a"]


def test_working_dir_changes_and_restores(tmp_path):
    before = Path.cwd()
    with working_dir(tmp_path) as inside:
        assert Path.cwd().resolve() == tmp_path.resolve()
        assert inside == tmp_path
    assert Path.cwd() == before


def test_working_dir_restores_on_error(tmp_path):
    before = Path.cwd()
    seen = []
    with pytest.raises(RuntimeError):
        with working_dir(tmp_path) as inside:
            seen.append((inside, Path.cwd().resolve()))
            raise RuntimeError("boom")
    assert seen == [(tmp_path, tmp_path.resolve())]
    assert Path.cwd() == before


def test_working_dir_missing(tmp_path):
    before = os.getcwd()
    with pytest.raises(FileNotFoundError):
        with working_dir(tmp_path / "nope"):
            pass
    assert os.getcwd() == before