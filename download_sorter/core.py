import logging
from pathlib import Path
from typing import Iterable, List, Optional

from . import config
from .dedup import DedupRegistry
from .exceptions import DownloadSorterError, FileHashError, ImageDecodeError
from .models import FileDescriptor
from .organization.mover import FileMover
from .organization.splitter import FolderSplitter
from .reporting import RunReport
from .scanning.classifier import ImageInspector
from .scanning.hasher import FileHasher


class PostProcessor:
    def __init__(self,
                 min_files: int = config.MIN_FILES_PER_FOLDER,
                 max_files: Optional[int] = config.MAX_FILES_PER_FOLDER,
                 hasher: Optional[FileHasher] = None,
                 inspector: Optional[ImageInspector] = None):
        self.splitter = FolderSplitter(min_files=min_files, max_files=max_files)
        self.hasher = hasher or FileHasher()
        self.inspector = inspector or ImageInspector()

    def run(self,
            descriptors: Iterable[FileDescriptor],
            root: Path,
            dry_run: bool = False) -> RunReport:
        """
        Post-processes a batch of freshly downloaded files.
        1. Hash & Deduplicate (duplicates are deleted)
        2. Classify (image colour depth -> logo)
        3. Plan (logo / video / day folders)
        4. Execute (Move)

        Runs strictly one file at a time. Per-file failures are recorded in
        the returned report and never stop the run.
        """
        report = RunReport()
        registry = DedupRegistry()
        working_set: List[FileDescriptor] = []

        for d in descriptors:
            report.processed += 1
            if self._admit(d, registry, report, dry_run):
                working_set.append(d)

        logging.info(f"{len(registry)} unique files, {len(report.duplicates)} duplicates.")

        if not working_set:
            logging.info("Nothing left to organize.")
            return report

        report.kept = len(working_set)

        # --- Planning & Execution ---
        plan = self.splitter.plan(working_set)
        FileMover(root).execute(plan, report, dry_run=dry_run)

        report.placements.extend(working_set)
        return report

    def _admit(self,
               d: FileDescriptor,
               registry: DedupRegistry,
               report: RunReport,
               dry_run: bool) -> bool:
        """Hash, dedup and classify one file. True if it stays in the working set."""
        try:
            d.ensure_content_hash(self.hasher)
        except FileHashError as e:
            # Left on disk untouched; we know nothing about it
            report.add_error(d.path, e)
            return False

        outcome = registry.register(d)
        if outcome.is_duplicate:
            logging.info(f"Duplicate: {d.filename} == {outcome.original.filename}")
            report.duplicates.append((d.path, outcome.original.path))
            if dry_run:
                logging.info(f"[DRY RUN] Delete {d.path}")
            else:
                try:
                    d.delete()
                except DownloadSorterError as e:
                    report.add_error(d.path, e)
            return False

        try:
            d.ensure_image_info(self.inspector)
        except ImageDecodeError as e:
            # Not a logo then, but it still gets a day folder
            report.add_error(d.path, e)

        return True
