import pytest
from pathlib import Path
from datetime import datetime, timedelta, timezone
from download_sorter.models import FileDescriptor
from download_sorter.scanning.classifier import ImageInfo, ImageInspector, MediaKind
from download_sorter.scanning.hasher import FileHasher
from download_sorter.exceptions import FileOperationError, ImageDecodeError


class CountingHasher(FileHasher):
    def __init__(self):
        self.calls = 0

    def compute_hash(self, path):
        self.calls += 1
        return super().compute_hash(path)


def test_descriptor_basics(tmp_path):
    d = FileDescriptor(tmp_path / "IMG_1.JPG", datetime(2021, 6, 7, 8, 9))

    assert d.filename == "IMG_1.JPG"
    assert d.extension == ".JPG"
    assert d.folder == tmp_path
    assert d.media_kind == MediaKind.IMAGE
    assert d.day_key == "2021-06-07"
    assert d.color_depth is None
    assert not d.is_logo

def test_descriptor_without_creation_time(tmp_path):
    d = FileDescriptor(tmp_path / "clip.mp4")
    assert d.creation_time is None
    assert d.day_key is None
    assert d.is_video

def test_hash_computed_once(tmp_path):
    p = tmp_path / "a.bin"
    p.write_bytes(b"first")
    d = FileDescriptor(p)
    hasher = CountingHasher()

    h1 = d.ensure_content_hash(hasher)
    p.write_bytes(b"changed afterwards")
    h2 = d.ensure_content_hash(hasher)

    assert h1 == h2
    assert hasher.calls == 1

def test_image_info_only_for_images(tmp_path):
    p = tmp_path / "notes.txt"
    p.write_text("hi")
    d = FileDescriptor(p)
    assert d.ensure_image_info(ImageInspector()) is None
    assert d.image_info is None

def test_logo_flag_follows_color_depth(tmp_path, make_palette_png, make_jpeg):
    logo = FileDescriptor(make_palette_png(tmp_path / "a.png"))
    photo = FileDescriptor(make_jpeg(tmp_path / "c.jpg"))
    inspector = ImageInspector()

    logo.ensure_image_info(inspector)
    photo.ensure_image_info(inspector)

    assert logo.color_depth == 8 and logo.is_logo
    assert photo.color_depth == 24 and not photo.is_logo

    # Derived, not stored: changing the depth changes the flag
    photo.image_info = ImageInfo(16, 16, 4)
    assert photo.is_logo

def test_video_is_never_logo(tmp_path):
    d = FileDescriptor(tmp_path / "d.mp4")
    d.image_info = ImageInfo(1, 1, 8)
    assert d.media_kind == MediaKind.VIDEO
    assert not d.is_logo

def test_decode_failure_leaves_info_unset(tmp_path):
    p = tmp_path / "bad.gif"
    p.write_bytes(b"GIF? no")
    d = FileDescriptor(p)
    with pytest.raises(ImageDecodeError):
        d.ensure_image_info(ImageInspector())
    assert d.image_info is None
    assert not d.is_logo

def test_move_under(tmp_path):
    p = tmp_path / "a.jpg"
    p.write_bytes(b"a")
    (tmp_path / "2021-01-01").mkdir()
    d = FileDescriptor(p)

    d.move_under("2021-01-01")

    assert d.path == tmp_path / "2021-01-01" / "a.jpg"
    assert d.path.read_bytes() == b"a"
    assert not p.exists()

def test_move_under_missing_folder(tmp_path):
    p = tmp_path / "a.jpg"
    p.write_bytes(b"a")
    d = FileDescriptor(p)

    with pytest.raises(FileOperationError):
        d.move_under("logo")

    assert d.path == p
    assert p.exists()

def test_move_refuses_to_overwrite(tmp_path):
    p = tmp_path / "a.jpg"
    p.write_bytes(b"new")
    target_dir = tmp_path / "logo"
    target_dir.mkdir()
    (target_dir / "a.jpg").write_bytes(b"old")
    d = FileDescriptor(p)

    with pytest.raises(FileOperationError):
        d.move_to(target_dir)

    assert d.path == p
    assert (target_dir / "a.jpg").read_bytes() == b"old"

def test_delete(tmp_path):
    p = tmp_path / "dup.jpg"
    p.write_bytes(b"x")
    d = FileDescriptor(p)
    d.delete()
    assert not p.exists()
    with pytest.raises(FileOperationError):
        d.delete()

def test_aware_creation_time_becomes_naive_local(tmp_path):
    aware = datetime(2023, 5, 1, 12, 0, tzinfo=timezone.utc)
    d = FileDescriptor(tmp_path / "a.jpg", aware)

    assert d.creation_time.tzinfo is None
    assert d.creation_time == aware.astimezone().replace(tzinfo=None)
