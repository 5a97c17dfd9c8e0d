import csv
import json
import logging
from pathlib import Path
from typing import Iterable

from . import config
from .exceptions import ReportError
from .models import FileInfoData, Manifest


class ReportWriter:
    """Serializes FileInfoData records as-is to CSV or JSON."""

    def __init__(self, output_format: str = 'csv'):
        fmt = output_format.lower()
        if fmt not in config.OUTPUT_FORMATS:
            raise ReportError(f"Unsupported output format: {output_format}")
        self.output_format = fmt

    def write(self, records: Iterable[FileInfoData], output_path: Path):
        logging.info(f"Writing {self.output_format.upper()} report -> {output_path}")
        try:
            if self.output_format == 'json':
                self._write_json(records, output_path)
            else:
                self._write_csv(records, output_path)
        except OSError as e:
            raise ReportError(f"Cannot write report '{output_path}': {e}") from e

    def _write_csv(self, records: Iterable[FileInfoData], output_path: Path):
        with open(output_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(config.REPORT_FIELDS)
            for record in records:
                writer.writerow(record.as_row())

    def _write_json(self, records: Iterable[FileInfoData], output_path: Path):
        rows = [record.as_report_dict() for record in records]
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(rows, f, indent=2, ensure_ascii=False)
            f.write("\n")


class ManifestWriter:
    """Writes the one-row summary of a run next to its report."""

    def __init__(self, output_format: str = 'csv'):
        self.output_format = output_format.lower()

    def write(self, manifest: Manifest, output_path: Path):
        try:
            if self.output_format == 'json':
                with open(output_path, "w", encoding="utf-8") as f:
                    json.dump(manifest.as_dict(), f, indent=2)
                    f.write("\n")
            else:
                with open(output_path, "w", newline="", encoding="utf-8") as f:
                    writer = csv.writer(f)
                    writer.writerow(config.MANIFEST_CSV_FIELDS)
                    writer.writerow(manifest.as_row())
        except OSError as e:
            raise ReportError(f"Cannot write manifest '{output_path}': {e}") from e
        logging.info(f"Manifest written -> {output_path}")
