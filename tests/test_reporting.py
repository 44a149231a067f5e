import csv
import pytest
from pathlib import Path
from download_sorter.reporting import RunReport, ReportGenerator
from download_sorter.models import FileDescriptor


def test_report_ok_flag():
    report = RunReport()
    assert report.ok
    report.add_error(Path("/downloads/x.jpg"), OSError("boom"))
    assert not report.ok
    assert report.errors == [(Path("/downloads/x.jpg"), "boom")]

def test_write_csv(tmp_path):
    kept = FileDescriptor(tmp_path / "2023-01-01" / "a.jpg")
    kept.content_hash = "abc123"
    report = RunReport(processed=3, kept=1)
    report.placements.append(kept)
    report.duplicates.append((tmp_path / "b.jpg", tmp_path / "a.jpg"))
    report.errors.append((tmp_path / "c.png", "Cannot decode image"))

    output_csv = tmp_path / "report.csv"
    ReportGenerator().write_csv(report, output_csv)

    with open(output_csv, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))

    assert len(rows) == 3
    assert rows[0]["Status"] == "Kept"
    assert rows[0]["Type"] == "image"
    assert rows[0]["Content Hash"] == "abc123"
    assert rows[1]["Status"] == "Duplicate (deleted)"
    assert rows[1]["Kept Original (If Duplicate)"] == str(tmp_path / "a.jpg")
    assert rows[2]["Status"] == "Error"
    assert rows[2]["Notes"] == "Cannot decode image"
