import os
import logging
from pathlib import Path
from typing import Iterator, List

from ..models import FileDescriptor
from ..metadata.extract import MetadataExtractor


class DiskScanner:
    """
    Turns an already-downloaded folder into FileDescriptors.

    Only the top level is read: subfolders are where earlier runs put their
    output (logo/, video/, day folders) and must not be sorted again.
    """

    def __init__(self, use_exif: bool = True):
        self.metadata = MetadataExtractor(use_exif=use_exif)

    def describe(self, root: Path) -> List[FileDescriptor]:
        descriptors = []
        for path in self.iter_files(root):
            descriptors.append(FileDescriptor(path, self.metadata.get_creation_time(path)))
        logging.info(f"Found {len(descriptors)} files in {root}")
        return descriptors

    def iter_files(self, root: Path) -> Iterator[Path]:
        try:
            with os.scandir(root) as it:
                entries = list(it)
        except (OSError, PermissionError):
            logging.warning(f"Permission denied: {root}")
            return

        # Sort for stable traversal order; first file seen wins in dedup
        entries.sort(key=lambda e: e.name.lower())

        for e in entries:
            if e.name.startswith("._"):
                continue
            if e.is_file(follow_symlinks=False):
                yield Path(e.path)
