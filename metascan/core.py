import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from . import config
from .exceptions import FileHashError
from .models import FileHashes, Manifest, ScanSummary
from .reporting import ManifestWriter, ReportWriter
from .scanning.filesystem import DiskScanner
from .scanning.hasher import HashComputer


def output_paths(output_name: str, output_format: str):
    """(report path, manifest path) for a base name and format."""
    fmt = output_format.lower()
    report = Path(f"{output_name}.{fmt}")
    manifest = Path(f"{output_name}{config.MANIFEST_SUFFIX}.{fmt}")
    return report, manifest


class MetascanApp:
    def __init__(self, show_progress: bool = True):
        self.scanner = DiskScanner(show_progress=show_progress)
        self.hasher = HashComputer()

    def run(self,
            src_root: Path,
            output_name: str = config.DEFAULT_OUTPUT_NAME,
            output_format: str = 'csv',
            recursive: bool = False,
            ext_filter: Optional[str] = None) -> Manifest:
        """
        Executes one scan run.
        1. Scan (stat + EXIF + hashes per file)
        2. Write report
        3. Hash the report and write the manifest
        """
        report_path, manifest_path = output_paths(output_name, output_format)
        report_writer = ReportWriter(output_format)

        # --- Step 1: Scanning ---
        records = self.scanner.scan(src_root, recursive=recursive, ext_filter=ext_filter)
        summary = self.scanner.summary

        # --- Step 2: Report ---
        report_writer.write(records, report_path)

        # --- Step 3: Manifest ---
        manifest = self._build_manifest(report_path, report_writer.output_format, summary)
        ManifestWriter(report_writer.output_format).write(manifest, manifest_path)

        logging.info(
            f"Done. Files attempted: {summary.attempted}. "
            f"Included: {summary.processed}. Errors: {summary.errored}."
        )
        if self.scanner.warnings:
            logging.info(f"{len(self.scanner.warnings)} file(s) had undecodable EXIF blocks.")
        return manifest

    def _build_manifest(self, report_path: Path, output_format: str, summary: ScanSummary) -> Manifest:
        try:
            hashes = self.hasher.hash_file(report_path)
        except FileHashError as e:
            logging.warning(f"Could not compute hashes of output file: {e}")
            hashes = FileHashes()

        return Manifest(
            output_file=str(report_path),
            output_format=output_format,
            total_attempted=summary.attempted,
            total_processed=summary.processed,
            total_with_errors=summary.errored,
            output_file_hashes=hashes,
            generated_at=datetime.now().astimezone().isoformat(timespec='seconds'),
        )
