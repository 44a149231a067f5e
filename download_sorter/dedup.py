"""
Content-hash deduplication for a single download run.

"First wins": the first descriptor registered for a hash is kept, every
later one with the same hash is reported as a duplicate of it. The registry
only decides; deleting the duplicate is the caller's job.
"""
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from .models import FileDescriptor


class DedupResult(str, Enum):
    KEPT = "kept"
    DUPLICATE = "duplicate"


@dataclass
class DedupOutcome:
    result: DedupResult
    original: Optional[FileDescriptor] = None  # the kept descriptor, for duplicates

    @property
    def is_duplicate(self) -> bool:
        return self.result is DedupResult.DUPLICATE


class DedupRegistry:
    """
    In-memory hash -> descriptor index. Build one per run and drop it at the end.
    """

    def __init__(self):
        self._by_hash: Dict[str, FileDescriptor] = {}
        # check-then-insert must stay atomic if registration ever goes parallel
        self._lock = threading.Lock()

    def register(self, descriptor: FileDescriptor) -> DedupOutcome:
        key = descriptor.content_hash
        if key is None:
            raise ValueError(f"No content hash computed for {descriptor.path}")

        with self._lock:
            existing = self._by_hash.get(key)
            if existing is None:
                self._by_hash[key] = descriptor
                return DedupOutcome(DedupResult.KEPT)

        return DedupOutcome(DedupResult.DUPLICATE, original=existing)

    def __len__(self) -> int:
        return len(self._by_hash)
