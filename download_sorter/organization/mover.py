import logging
from pathlib import Path
from typing import Set

from tqdm import tqdm

from ..exceptions import DownloadSorterError, FolderCreationError
from ..reporting import RunReport
from .splitter import FolderPlan


class FileMover:
    def __init__(self, root: Path):
        self.root = Path(root)
        self._created: Set[Path] = set()

    def execute(self, plan: FolderPlan, report: RunReport, dry_run: bool = False):
        """
        Applies a FolderPlan under root.

        Each folder is created right before its first file moves in. If a
        folder cannot be created, only its own files are skipped.
        """
        total = sum(len(members) for _, members in plan)
        if not total:
            logging.info("No files need moving.")
            return

        logging.info(f"Moving {total} files into {len(plan)} folders (DryRun={dry_run})...")

        with tqdm(total=total, desc="Organizing") as progress:
            for folder_name, members in plan:
                if dry_run:
                    for d in members:
                        logging.info(f"[DRY RUN] Move {d.path} -> {self.root / folder_name / d.filename}")
                    progress.update(len(members))
                    continue

                try:
                    self.ensure_folder(folder_name)
                except FolderCreationError as e:
                    for d in members:
                        report.add_error(d.path, e)
                    progress.update(len(members))
                    continue

                for d in members:
                    try:
                        if d.folder == self.root:
                            d.move_under(folder_name)
                        else:
                            d.move_to(self.root / folder_name)
                    except DownloadSorterError as e:
                        report.add_error(d.path, e)
                    progress.update(1)

    def ensure_folder(self, folder_name: str) -> Path:
        """Creates root/folder_name if needed. Existing folders are fine."""
        folder = self.root / folder_name
        if folder in self._created:
            return folder
        try:
            folder.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FolderCreationError(f"Cannot create folder {folder}: {e}") from e
        self._created.add(folder)
        return folder
