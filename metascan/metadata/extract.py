import logging
import struct
from dataclasses import dataclass, field
from enum import Enum
from typing import BinaryIO, Optional

from exifread.core.exceptions import ExifNotFound, InvalidExif

from .. import config
from ..models import ExifMetadata
from .block import ExifBlock, Field
from .gps import GPSResolver
from .rational import format_rational


class AbsenceReason(Enum):
    """Decode failures that just mean "this file has no EXIF"."""
    MISSING_MARKER = 'missing_marker'
    UNSUPPORTED_FORMAT = 'unsupported_format'
    TRUNCATED_VALUE = 'truncated_value'
    INVALID_POINTER = 'invalid_pointer'
    END_OF_STREAM = 'end_of_stream'


# Checked in order; the first matching exception type wins.
EXPECTED_ABSENCE = [
    (ExifNotFound, AbsenceReason.MISSING_MARKER),
    (InvalidExif, AbsenceReason.UNSUPPORTED_FORMAT),
    (struct.error, AbsenceReason.TRUNCATED_VALUE),
    (IndexError, AbsenceReason.INVALID_POINTER),
    (EOFError, AbsenceReason.END_OF_STREAM),
]


def classify_decode_error(error: BaseException) -> Optional[AbsenceReason]:
    """
    Maps a decode exception to an expected-absence category.
    Returns None for anything that is a genuine decode anomaly.
    """
    for exc_type, reason in EXPECTED_ABSENCE:
        if isinstance(error, exc_type):
            return reason
    return None


@dataclass(frozen=True)
class ExtractionResult:
    metadata: ExifMetadata = field(default_factory=ExifMetadata)
    absence: Optional[AbsenceReason] = None
    warning: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.absence is None and self.warning is None


class MetadataExtractor:
    """
    Pulls the fixed camera/GPS field set out of an image's EXIF block.

    Never raises for metadata problems: missing or unsupported blocks come
    back as an absence, anything else as a warning with empty fields.
    OSError from the stream is not a metadata problem and propagates.
    """

    def __init__(self):
        self.gps = GPSResolver()
        # exifread logs "File format not recognized" for every non-image file
        logging.getLogger("exifread").setLevel(logging.ERROR)

    def extract(self, stream: BinaryIO, name: str = "<stream>") -> ExtractionResult:
        try:
            block = ExifBlock.decode(stream)
        except OSError:
            raise
        except Exception as e:
            reason = classify_decode_error(e)
            if reason is not None:
                logging.debug(f"No EXIF in {name} ({reason.value}): {e}")
                return ExtractionResult(absence=reason)
            warning = f"Could not decode EXIF in {name}: {type(e).__name__}: {e}"
            logging.warning(warning)
            return ExtractionResult(warning=warning)

        if not block:
            return ExtractionResult(absence=AbsenceReason.MISSING_MARKER)

        return ExtractionResult(metadata=self.read_fields(block))

    def read_fields(self, block: ExifBlock) -> ExifMetadata:
        """Builds display strings for every field present in the block."""
        # Capture time: DateTimeOriginal, else generic DateTime
        date_time = block.get_string(Field.DATE_TIME_ORIGINAL)
        if date_time is None:
            date_time = block.get_string(Field.DATE_TIME)

        gps = self.gps.resolve(block)

        return ExifMetadata(
            make=block.get_string(Field.MAKE) or "",
            model=block.get_string(Field.MODEL) or "",
            date_time=date_time or "",
            image_width=self._int_string(block, Field.PIXEL_X_DIMENSION),
            image_height=self._int_string(block, Field.PIXEL_Y_DIMENSION),
            iso=self._int_string(block, Field.ISO_SPEED_RATINGS),
            aperture=self._rational_string(block, Field.F_NUMBER, as_decimal=True,
                                           prefix=config.APERTURE_PREFIX),
            exposure_time=self._rational_string(block, Field.EXPOSURE_TIME, as_decimal=False),
            focal_length=self._rational_string(block, Field.FOCAL_LENGTH, as_decimal=True),
            orientation=self._orientation(block),
            gps_latitude=gps.latitude,
            gps_longitude=gps.longitude,
            gps_altitude=gps.altitude,
            gps_date=gps.date,
            gps_time=gps.time,
            google_maps_link=gps.maps_link,
        )

    # --- Field helpers ---

    def _int_string(self, block: ExifBlock, fld: Field) -> str:
        val = block.get_int(fld)
        return str(val) if val is not None else ""

    def _rational_string(self, block: ExifBlock, fld: Field, as_decimal: bool, prefix: str = "") -> str:
        val = block.get_rational(fld)
        if val is None:
            return ""
        return format_rational(val, as_decimal, prefix, is_exposure=(fld is Field.EXPOSURE_TIME))

    def _orientation(self, block: ExifBlock) -> str:
        code = block.get_int(Field.ORIENTATION)
        if code is None:
            return ""
        if code == 1:
            return config.ORIENTATION_NORMAL
        return str(code)
