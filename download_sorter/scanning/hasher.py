import hashlib
from pathlib import Path

from .. import config
from ..exceptions import FileHashError


class FileHasher:
    def compute_hash(self, path: Path) -> str:
        """
        Content fingerprint used as the dedup key.

        MD5 over the full file, read in HASH_CHUNK_SIZE chunks so large
        videos never sit in memory. Only the bytes matter: name, timestamps
        and location do not change the result.
        """
        h = hashlib.md5()
        try:
            with open(path, 'rb') as f:
                while chunk := f.read(config.HASH_CHUNK_SIZE):
                    h.update(chunk)
        except OSError as e:
            raise FileHashError(f"Cannot read {path}: {e}") from e
        return h.hexdigest()
