import logging
import shutil
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional

from . import config
from .exceptions import FileOperationError
from .scanning.classifier import ImageInfo, ImageInspector, MediaKind, classify, is_logo
from .scanning.hasher import FileHasher


@dataclass
class FileDescriptor:
    """
    A file that has just landed in the local download folder.

    `path` always points at where the file is *now*; it is only rewritten
    after a move succeeded. Hash and image info are filled once through the
    ensure_* calls and never recomputed, even if the bytes change afterwards.
    """
    path: Path
    creation_time: Optional[datetime] = None

    media_kind: MediaKind = field(init=False)
    content_hash: Optional[str] = field(default=None, init=False)
    image_info: Optional[ImageInfo] = field(default=None, init=False)

    def __post_init__(self):
        self.path = Path(self.path)
        if self.creation_time is not None and self.creation_time.tzinfo is not None:
            # Day keys and ordering work on naive local time
            self.creation_time = self.creation_time.astimezone().replace(tzinfo=None)
        self.media_kind = classify(self.path.name)

    # --- Path helpers ---

    @property
    def filename(self) -> str:
        return self.path.name

    @property
    def extension(self) -> str:
        return self.path.suffix

    @property
    def folder(self) -> Path:
        return self.path.parent

    # --- Classification ---

    @property
    def is_image(self) -> bool:
        return self.media_kind is MediaKind.IMAGE

    @property
    def is_video(self) -> bool:
        return self.media_kind is MediaKind.VIDEO

    @property
    def color_depth(self) -> Optional[int]:
        """Bits per pixel, None until image info was computed (or for non-images)."""
        return self.image_info.color_depth if self.image_info else None

    @property
    def is_logo(self) -> bool:
        return is_logo(self.media_kind, self.color_depth)

    @property
    def day_key(self) -> Optional[str]:
        if self.creation_time is None:
            return None
        return self.creation_time.strftime(config.DAY_FOLDER_FORMAT)

    def ensure_content_hash(self, hasher: FileHasher) -> str:
        """Computes the content hash on first call, returns the cached one afterwards."""
        if self.content_hash is None:
            self.content_hash = hasher.compute_hash(self.path)
        return self.content_hash

    def ensure_image_info(self, inspector: ImageInspector) -> Optional[ImageInfo]:
        """
        Decodes the image once and caches its attributes.
        Non-images are left alone and return None.
        ImageDecodeError propagates; nothing is cached in that case.
        """
        if not self.is_image:
            return None
        if self.image_info is None:
            self.image_info = inspector.inspect(self.path)
        return self.image_info

    # --- File operations ---

    def move_to(self, new_folder: Path):
        """
        Moves the file into an existing folder, keeping its name.
        On failure the file and `path` stay where they were.
        """
        new_folder = Path(new_folder)
        target = new_folder / self.filename
        if not new_folder.is_dir():
            raise FileOperationError(f"Target folder does not exist: {new_folder}")
        if target.exists():
            raise FileOperationError(f"Target already exists: {target}")
        try:
            shutil.move(str(self.path), str(target))
        except OSError as e:
            raise FileOperationError(f"Failed to move {self.path} -> {target}: {e}") from e
        logging.debug(f"Moved {self.path} -> {target}")
        self.path = target

    def move_under(self, subfolder: str):
        """Moves the file into `subfolder` of its current folder. The subfolder must exist."""
        self.move_to(self.folder / subfolder)

    def delete(self):
        try:
            self.path.unlink()
        except OSError as e:
            raise FileOperationError(f"Failed to delete {self.path}: {e}") from e
        logging.debug(f"Deleted {self.path}")
