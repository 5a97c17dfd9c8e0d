from dataclasses import dataclass, fields, asdict
from typing import Any, Dict, List

from . import config


@dataclass(frozen=True)
class FileHashes:
    md5: str = ""
    sha1: str = ""
    sha256: str = ""


@dataclass(frozen=True)
class ExifMetadata:
    """
    Camera and positional fields decoded from a file's EXIF block.
    Every field is a display string; absent values are "".
    """
    make: str = ""
    model: str = ""
    date_time: str = ""
    image_width: str = ""
    image_height: str = ""
    iso: str = ""
    aperture: str = ""
    exposure_time: str = ""
    focal_length: str = ""
    orientation: str = ""

    gps_latitude: str = ""
    gps_longitude: str = ""
    gps_altitude: str = ""
    gps_date: str = ""
    gps_time: str = ""
    google_maps_link: str = ""


@dataclass(frozen=True)
class FileInfoData:
    """
    Represents one file processed during a scan.
    Field order matches config.REPORT_FIELDS.
    """
    file_name: str
    file_path: str
    file_size: int
    last_modified: str      # ISO-8601, local offset
    permissions: str        # e.g. -rw-r--r--

    md5: str
    sha1: str
    sha256: str

    # Camera metadata
    make: str = ""
    model: str = ""
    date_time: str = ""
    image_width: str = ""
    image_height: str = ""
    iso: str = ""
    aperture: str = ""
    exposure_time: str = ""
    focal_length: str = ""
    orientation: str = ""

    # Positional metadata
    gps_latitude: str = ""
    gps_longitude: str = ""
    gps_altitude: str = ""
    gps_date: str = ""
    gps_time: str = ""
    google_maps_link: str = ""

    def as_row(self) -> List[Any]:
        """Values in report column order."""
        return [getattr(self, f.name) for f in fields(self)]

    def as_report_dict(self) -> Dict[str, Any]:
        """Values keyed by report column name."""
        return dict(zip(config.REPORT_FIELDS, self.as_row()))


@dataclass
class ScanSummary:
    attempted: int = 0
    processed: int = 0
    errored: int = 0


@dataclass(frozen=True)
class Manifest:
    output_file: str
    output_format: str
    total_attempted: int
    total_processed: int
    total_with_errors: int
    output_file_hashes: FileHashes
    generated_at: str

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def as_row(self) -> List[Any]:
        h = self.output_file_hashes
        return [
            self.output_file,
            self.output_format,
            self.total_attempted,
            self.total_processed,
            self.total_with_errors,
            h.md5,
            h.sha1,
            h.sha256,
            self.generated_at,
        ]
