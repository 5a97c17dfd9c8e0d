import os
import logging
from pathlib import Path
from typing import Iterator, List, Optional

from tqdm import tqdm

from ..exceptions import MetascanError, ScanError
from ..models import FileInfoData, ScanSummary
from .builder import FileRecordBuilder


class DiskScanner:
    def __init__(self, show_progress: bool = True):
        self.builder = FileRecordBuilder(on_warning=self._record_warning)
        self.show_progress = show_progress
        self.summary = ScanSummary()
        self.warnings: List[str] = []

    def scan(self,
             root: Path,
             recursive: bool = False,
             ext_filter: Optional[str] = None) -> List[FileInfoData]:
        """
        Builds a FileInfoData for every file under root, one at a time.

        Args:
            recursive: Descend into subdirectories (default: root's own files only).
            ext_filter: Only process files whose name ends with this suffix
                        (case-insensitive), e.g. ".jpg".

        Per-file failures are logged and counted in self.summary; they never
        stop the scan.
        """
        if not root.exists():
            raise ScanError(f"Directory not found: '{root}'")
        if not root.is_dir():
            raise ScanError(f"Path '{root}' is not a directory.")

        self.summary = ScanSummary()
        self.warnings = []

        paths = [p for p in self._iter_files(root, recursive) if self._matches(p, ext_filter)]
        logging.info(f"Processing directory: {root} (recursive={recursive}, {len(paths)} candidate files)")

        results: List[FileInfoData] = []
        for path in tqdm(paths, desc="Scanning", disable=not self.show_progress):
            self.summary.attempted += 1
            try:
                record = self.builder.build(path)
            except MetascanError as e:
                logging.error(f"Failed to process '{path}': {e}")
                self.summary.errored += 1
                continue

            if record is not None:
                results.append(record)
                self.summary.processed += 1

        return results

    def _record_warning(self, path: Path, message: str):
        self.warnings.append(message)

    def _matches(self, path: Path, ext_filter: Optional[str]) -> bool:
        if not ext_filter:
            return True
        return path.name.lower().endswith(ext_filter.lower())

    def _iter_files(self, root: Path, recursive: bool) -> Iterator[Path]:
        """Depth-first walker using os.scandir for speed."""
        stack = [root]
        while stack:
            current = stack.pop()

            try:
                with os.scandir(current) as it:
                    entries = list(it)
            except OSError as e:
                logging.warning(f"Error accessing '{current}': {e} (skipping)")
                continue

            # Sort for stable traversal order
            entries.sort(key=lambda e: e.name.lower())

            dirs = []
            files = []
            for e in entries:
                if e.is_dir(follow_symlinks=False):
                    dirs.append(Path(e.path))
                elif e.is_file():
                    files.append(Path(e.path))

            if recursive:
                # Push dirs to stack (reversed so we process A before Z)
                for d in reversed(dirs):
                    stack.append(d)

            for f in files:
                yield f
