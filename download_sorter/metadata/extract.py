import logging
from pathlib import Path
from datetime import datetime
from typing import Optional

import exifread

from .. import config


class MetadataExtractor:
    """
    Creation time for files that are already on local disk.

    Strategies:
      - Images: EXIF capture date via 'exifread'.
      - Everything else (or no EXIF date): file modification time.
    """

    def __init__(self, use_exif: bool = True):
        self.use_exif = use_exif

    def get_creation_time(self, path: Path) -> Optional[datetime]:
        if self.use_exif and path.suffix.lower() in config.IMAGE_EXTS:
            dt = self.get_exif_datetime(path)
            if dt:
                return dt
        return self._fallback_file_datetime(path)

    def get_exif_datetime(self, path: Path) -> Optional[datetime]:
        try:
            with path.open('rb') as f:
                # details=False speeds up processing significantly
                tags = exifread.process_file(f, details=False)
        except Exception as e:
            logging.warning(f"ExifRead failed for {path}: {e}")
            return None
        return self._parse_exif_date(tags)

    def _parse_exif_date(self, tags) -> Optional[datetime]:
        """Helper to parse standard EXIF date strings from exifread."""
        for tag in config.DATE_TAGS:
            if tag in tags:
                try:
                    # EXIF format is usually "YYYY:MM:DD HH:MM:SS"
                    dt_str = str(tags[tag]).replace(':', '-', 2)
                    return datetime.strptime(dt_str, "%Y-%m-%d %H:%M:%S")
                except ValueError:
                    continue
        return None

    def _fallback_file_datetime(self, path: Path) -> Optional[datetime]:
        try:
            return datetime.fromtimestamp(path.stat().st_mtime)
        except OSError:
            logging.warning(f"Cannot stat {path}; no creation time.")
            return None
