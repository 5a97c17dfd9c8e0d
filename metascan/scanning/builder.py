import os
import stat
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from ..exceptions import FileHashError, FileProcessingError
from ..metadata.extract import MetadataExtractor
from ..models import FileInfoData
from .hasher import HashComputer


class FileRecordBuilder:
    def __init__(self, on_warning: Optional[Callable[[Path, str], None]] = None):
        self.hasher = HashComputer()
        self.metadata = MetadataExtractor()
        # Called with (path, message) for EXIF decode anomalies
        self.on_warning = on_warning

    def build(self, path: Path) -> Optional[FileInfoData]:
        """
        Stat -> EXIF decode -> rewind -> hash, all on one open handle.

        Returns None for directories. Raises FileProcessingError when the
        file cannot be stat'ed, opened, rewound or read in full. Missing or
        broken EXIF never raises; those fields are just left empty.
        """
        try:
            stat_result = path.stat()
        except OSError as e:
            raise FileProcessingError(f"Error getting info for '{path}': {e}") from e

        if stat.S_ISDIR(stat_result.st_mode):
            return None

        try:
            with path.open('rb') as f:
                result = self.metadata.extract(f, name=str(path))

                # exifread leaves the handle wherever it stopped reading
                try:
                    f.seek(0)
                except OSError as e:
                    raise FileProcessingError(f"Critical error rewinding '{path}' for hash: {e}") from e

                hashes = self.hasher.compute_hashes(f)
        except FileHashError as e:
            raise FileProcessingError(f"Error calculating hashes for '{path}': {e}") from e
        except OSError as e:
            raise FileProcessingError(f"Error reading '{path}': {e}") from e

        if result.warning and self.on_warning:
            self.on_warning(path, result.warning)

        return FileInfoData(
            file_name=path.name,
            file_path=os.path.abspath(path),
            file_size=stat_result.st_size,
            last_modified=self._format_mtime(stat_result.st_mtime),
            permissions=stat.filemode(stat_result.st_mode),
            md5=hashes.md5,
            sha1=hashes.sha1,
            sha256=hashes.sha256,
            **asdict(result.metadata),
        )

    def _format_mtime(self, mtime: float) -> str:
        return datetime.fromtimestamp(mtime).astimezone().isoformat(timespec='seconds')
