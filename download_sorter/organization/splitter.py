import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .. import config
from ..models import FileDescriptor


@dataclass
class FolderPlan:
    """Folder name -> descriptors, in the order folders should be filled."""
    folders: Dict[str, List[FileDescriptor]] = field(default_factory=dict)

    def add(self, folder: str, descriptor: FileDescriptor):
        self.folders.setdefault(folder, []).append(descriptor)

    def __iter__(self) -> Iterator[Tuple[str, List[FileDescriptor]]]:
        return iter(self.folders.items())

    def __len__(self) -> int:
        return len(self.folders)


def sort_key(descriptor: FileDescriptor) -> Tuple[bool, datetime]:
    """Chronological, descriptors without a creation time last."""
    if descriptor.creation_time is None:
        return (True, datetime.max)
    return (False, descriptor.creation_time)


class FolderSplitter:
    def __init__(self,
                 min_files: int = config.MIN_FILES_PER_FOLDER,
                 max_files: Optional[int] = config.MAX_FILES_PER_FOLDER):
        if min_files < 0:
            raise ValueError("min_files must be >= 0")
        if max_files is not None and max_files < 1:
            raise ValueError("max_files must be >= 1")
        self.min_files = min_files
        self.max_files = max_files

    def plan(self, descriptors: Iterable[FileDescriptor]) -> FolderPlan:
        """
        Decides the target subfolder of every descriptor. Nothing is touched on disk.

        1. Logos -> 'logo', videos -> 'video' (no cap).
        2. No creation time -> 'nodate'.
        3. Everything else, oldest first, into day folders. A new folder is
           only opened when the day changes AND the current folder already
           holds min_files; short days get merged into their neighbours.
           With max_files set, a full folder is closed even mid-day.
        """
        plan = FolderPlan()
        dated: List[FileDescriptor] = []

        for d in descriptors:
            if d.is_logo:
                plan.add(config.LOGO_FOLDER, d)
            elif d.is_video:
                plan.add(config.VIDEO_FOLDER, d)
            elif d.creation_time is None:
                plan.add(config.NO_DATE_FOLDER, d)
            else:
                dated.append(d)

        dated.sort(key=sort_key)

        current_folder: Optional[str] = None
        last_key: Optional[str] = None
        count = 0
        day_folders = 0

        for d in dated:
            key = d.day_key
            day_changed = last_key is not None and key != last_key
            full = self.max_files is not None and count >= self.max_files
            if current_folder is None or (day_changed and count >= self.min_files) or full:
                current_folder = self._folder_name(key, plan)
                day_folders += 1
                count = 0

            plan.add(current_folder, d)
            count += 1
            last_key = key

        logging.debug(f"Split {len(dated)} dated files into {day_folders} day folders")
        return plan

    def _folder_name(self, day_key: str, plan: FolderPlan) -> str:
        """Day folders are named after their first file; repeats of a day get _2, _3..."""
        name = day_key
        n = 1
        while name in plan.folders:
            n += 1
            name = f"{day_key}_{n}"
        return name
