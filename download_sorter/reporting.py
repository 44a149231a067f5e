import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple

from .models import FileDescriptor


@dataclass
class RunReport:
    """Outcome of one post-processing run."""
    processed: int = 0
    kept: int = 0
    duplicates: List[Tuple[Path, Path]] = field(default_factory=list)  # (deleted, kept original)
    errors: List[Tuple[Path, str]] = field(default_factory=list)
    placements: List[FileDescriptor] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def add_error(self, path: Path, error: Exception):
        logging.error(f"{path}: {error}")
        self.errors.append((Path(path), str(error)))


class ReportGenerator:
    HEADERS = [
        "Path",
        "Status",
        "Type",
        "Logo",
        "Content Hash",
        "Kept Original (If Duplicate)",
        "Notes",
    ]

    def log_summary(self, report: RunReport):
        logging.info(f"Processed {report.processed} files: "
                     f"{report.kept} kept, {len(report.duplicates)} duplicates deleted, "
                     f"{len(report.errors)} errors.")
        if not report.ok:
            logging.warning("Some files were not processed cleanly; see errors above.")

    def write_csv(self, report: RunReport, output_csv: Path):
        """
        One row per kept file (at its final location), per deleted duplicate
        and per error.
        """
        logging.info(f"Writing report -> {output_csv}")

        with open(output_csv, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(self.HEADERS)

            for d in report.placements:
                writer.writerow([
                    str(d.path),
                    "Kept",
                    d.media_kind.value,
                    "yes" if d.is_logo else "no",
                    d.content_hash or "",
                    "",
                    "",
                ])

            for deleted, original in report.duplicates:
                writer.writerow([str(deleted), "Duplicate (deleted)", "", "", "", str(original), ""])

            for path, message in report.errors:
                writer.writerow([str(path), "Error", "", "", "", "", message])
