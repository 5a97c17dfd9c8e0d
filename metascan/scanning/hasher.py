import hashlib
from pathlib import Path
from typing import BinaryIO

from .. import config
from ..exceptions import FileHashError
from ..models import FileHashes


class HashComputer:
    def compute_hashes(self, stream: BinaryIO) -> FileHashes:
        """
        Reads the stream to EOF once, feeding every chunk to MD5, SHA-1 and
        SHA-256 together. The whole file is never held in memory.

        Raises FileHashError if the stream cannot be read to the end; no
        partial digests are ever returned.
        """
        md5 = hashlib.md5()
        sha1 = hashlib.sha1()
        sha256 = hashlib.sha256()
        digests = (md5, sha1, sha256)

        try:
            while chunk := stream.read(config.HASH_CHUNK_SIZE):
                for h in digests:
                    h.update(chunk)
        except OSError as e:
            raise FileHashError(f"Read failed while hashing: {e}") from e

        return FileHashes(
            md5=md5.hexdigest(),
            sha1=sha1.hexdigest(),
            sha256=sha256.hexdigest(),
        )

    def hash_file(self, path: Path) -> FileHashes:
        """Opens path and hashes its full content. Used for the report file too."""
        try:
            with open(path, 'rb') as f:
                return self.compute_hashes(f)
        except OSError as e:
            raise FileHashError(f"Cannot open {path} for hashing: {e}") from e
