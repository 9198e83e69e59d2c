import os
from pathlib import Path

import pytest

from mobutil.ln import (
    Clobber,
    ErrorCause,
    LinkCall,
    LinkError,
    LinkType,
    TargetStyle,
    force_symlink,
    force_symlink_relative,
)


@pytest.fixture
def source_file(tmp_path: Path) -> Path:
    src = tmp_path / "source.txt"
    src.write_text("payload")
    return src


@pytest.mark.parametrize(
    "link_type, link_text",
    [(LinkType.HARD, "hard"), (LinkType.SYMBOLIC, "symbolic")],
)
@pytest.mark.parametrize(
    "clobber, clobber_text",
    [
        (Clobber.NEVER, "clobbering disabled"),
        (Clobber.FILE_ONLY, "file clobbering enabled"),
        (Clobber.FILE_OR_DIRECTORY, "file and directory clobbering enabled"),
    ],
)
def test_enum_display_strings(tmp_path, link_type, link_text, clobber, clobber_text):
    with pytest.raises(LinkError) as excinfo:
        LinkCall(link_type, clobber, Path("/"), tmp_path, TargetStyle.DIRECTORY)
    message = str(excinfo.value)
    assert message.startswith(f'Failed to create a {link_text} link from "/" to directory')
    assert f"({clobber_text})" in message
    assert str(TargetStyle.FILE) == "file"
    assert str(TargetStyle.DIRECTORY) == "directory"


def test_directory_style_without_file_name_raises(tmp_path):
    with pytest.raises(LinkError) as excinfo:
        LinkCall(
            LinkType.SYMBOLIC, Clobber.FILE_OR_DIRECTORY, Path("/"), tmp_path, TargetStyle.DIRECTORY
        )
    err = excinfo.value
    assert err.cause is ErrorCause.MISSING_FILE_NAME
    message = str(err)
    assert message.startswith('Failed to create a symbolic link from "/" to directory')
    assert "(file and directory clobbering enabled)" in message
    assert message.endswith("Neither the source nor target contained a file name.")


def test_directory_style_override_uses_source_name(tmp_path, source_file):
    call = LinkCall(
        LinkType.SYMBOLIC, Clobber.NEVER, source_file, tmp_path / "dir", TargetStyle.DIRECTORY
    )
    assert call.target_override == tmp_path / "dir" / source_file.name


def test_force_symlink_file_style(tmp_path, source_file):
    link = tmp_path / "link.txt"
    force_symlink(source_file, link, TargetStyle.FILE)
    assert link.is_symlink()
    assert os.readlink(link) == str(source_file)
    assert link.read_text() == "payload"


def test_force_symlink_replaces_existing_file(tmp_path, source_file):
    link = tmp_path / "link.txt"
    link.write_text("old")
    force_symlink(source_file, link, TargetStyle.FILE)
    assert link.is_symlink()
    assert link.read_text() == "payload"


def test_force_symlink_replaces_existing_directory(tmp_path, source_file):
    target = tmp_path / "occupied"
    target.mkdir()
    (target / "inner.txt").write_text("x")
    force_symlink(source_file, target, TargetStyle.FILE)
    assert target.is_symlink()
    assert target.read_text() == "payload"


def test_force_symlink_directory_style(tmp_path, source_file):
    target_dir = tmp_path / "links"
    target_dir.mkdir()
    force_symlink(source_file, target_dir, TargetStyle.DIRECTORY)
    link = target_dir / source_file.name
    assert link.is_symlink()
    assert link.resolve() == source_file.resolve()


def test_never_clobber_keeps_existing_file(tmp_path, source_file):
    existing = tmp_path / "existing.txt"
    existing.write_text("keep")
    call = LinkCall(LinkType.SYMBOLIC, Clobber.NEVER, source_file, existing, TargetStyle.FILE)
    with pytest.raises(LinkError) as excinfo:
        call.exec()
    assert excinfo.value.cause is ErrorCause.LINK_FAILED
    assert not existing.is_symlink()
    assert existing.read_text() == "keep"


def test_file_only_clobber_replaces_file(tmp_path, source_file):
    existing = tmp_path / "existing.txt"
    existing.write_text("old")
    LinkCall(LinkType.SYMBOLIC, Clobber.FILE_ONLY, source_file, existing, TargetStyle.FILE).exec()
    assert existing.is_symlink()
    assert existing.read_text() == "payload"


def test_hard_link_shares_file(tmp_path, source_file):
    link = tmp_path / "hard.txt"
    LinkCall(LinkType.HARD, Clobber.NEVER, source_file, link, TargetStyle.FILE).exec()
    assert not link.is_symlink()
    assert os.path.samefile(link, source_file)


def test_force_symlink_relative_stores_relative_path(tmp_path):
    src_dir = tmp_path / "src"
    src_dir.mkdir()
    src = src_dir / "file.txt"
    src.write_text("payload")
    dest_dir = tmp_path / "dest"
    dest_dir.mkdir()
    force_symlink_relative(src, dest_dir, TargetStyle.DIRECTORY)
    link = dest_dir / "file.txt"
    assert link.is_symlink()
    assert Path(os.readlink(link)) == Path("..", "src", "file.txt")
    assert link.resolve() == src.resolve()


def test_force_symlink_relative_to_ancestor(tmp_path):
    parent = tmp_path / "a"
    child = parent / "b"
    child.mkdir(parents=True)
    force_symlink_relative(parent, child, TargetStyle.DIRECTORY)
    link = child / "a"
    assert link.is_symlink()
    assert os.readlink(link) == ".."
    assert link.resolve() == parent.resolve()