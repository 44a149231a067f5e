import os
import shutil
import pytest
from pathlib import Path
from datetime import datetime
from download_sorter.main import main, parse_args
from download_sorter import config


def _set_mtime(path, dt):
    ts = dt.timestamp()
    os.utime(path, (ts, ts))

def test_parse_args_defaults(tmp_path):
    args = parse_args([str(tmp_path)])
    assert args.min_files == config.MIN_FILES_PER_FOLDER
    assert args.max_files is None
    assert not args.dry_run

def test_main_sorts_folder(tmp_path, make_palette_png, make_jpeg):
    make_palette_png(tmp_path / "a.png")
    shutil.copyfile(tmp_path / "a.png", tmp_path / "b.png")
    make_jpeg(tmp_path / "c.jpg")
    (tmp_path / "d.mp4").write_bytes(b"video bytes")
    _set_mtime(tmp_path / "c.jpg", datetime(2023, 5, 1, 12, 0))

    report_csv = tmp_path.parent / f"{tmp_path.name}_report.csv"
    rc = main([str(tmp_path), "--min-files", "1", "--report-csv", str(report_csv)])

    assert rc == 0
    assert not (tmp_path / "b.png").exists()
    assert (tmp_path / "logo" / "a.png").exists()
    assert (tmp_path / "video" / "d.mp4").exists()
    assert (tmp_path / "2023-05-01" / "c.jpg").exists()
    assert report_csv.exists()

def test_main_reports_errors_in_exit_code(tmp_path):
    (tmp_path / "broken.png").write_bytes(b"garbage")
    assert main([str(tmp_path), "--no-exif"]) == 1

def test_main_rejects_missing_folder(tmp_path):
    assert main([str(tmp_path / "nope")]) == 1
