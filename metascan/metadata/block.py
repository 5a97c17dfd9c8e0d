"""
Typed access to a decoded EXIF tag table.

exifread hands back a flat dict of "<IFD> <TagName>" -> IfdTag. ExifBlock
wraps that dict so callers ask for a well-known Field and get back an
Optional of the right type, instead of poking at raw tag objects.
"""
import math
from enum import Enum
from typing import Any, BinaryIO, Mapping, Optional, Sequence, Tuple

import exifread

from .. import config
from ..exceptions import GPSCoordinateError
from .rational import Rational


class Field(Enum):
    MAKE = 'make'
    MODEL = 'model'
    DATE_TIME_ORIGINAL = 'date_time_original'
    DATE_TIME = 'date_time'
    PIXEL_X_DIMENSION = 'pixel_x_dimension'
    PIXEL_Y_DIMENSION = 'pixel_y_dimension'
    ISO_SPEED_RATINGS = 'iso_speed_ratings'
    ORIENTATION = 'orientation'
    F_NUMBER = 'f_number'
    EXPOSURE_TIME = 'exposure_time'
    FOCAL_LENGTH = 'focal_length'
    GPS_LATITUDE = 'gps_latitude'
    GPS_LATITUDE_REF = 'gps_latitude_ref'
    GPS_LONGITUDE = 'gps_longitude'
    GPS_LONGITUDE_REF = 'gps_longitude_ref'
    GPS_ALTITUDE = 'gps_altitude'
    GPS_ALTITUDE_REF = 'gps_altitude_ref'
    GPS_DATE_STAMP = 'gps_date_stamp'
    GPS_TIME_STAMP = 'gps_time_stamp'

    @property
    def tag_name(self) -> str:
        return config.TAG_NAMES[self.value]


def _as_rational(value: Any) -> Optional[Rational]:
    # ints carry numerator/denominator too, but they are not fractions
    if isinstance(value, int):
        return None
    num = getattr(value, 'numerator', getattr(value, 'num', None))
    den = getattr(value, 'denominator', getattr(value, 'den', None))
    if num is None or den is None:
        return None
    return Rational(int(num), int(den))


class ExifBlock:
    def __init__(self, tags: Mapping[str, Any]):
        self.tags = tags

    @classmethod
    def decode(cls, stream: BinaryIO) -> "ExifBlock":
        """
        Parses the EXIF block from stream. exifread seeks to the start itself.
        Library errors are left to propagate; the extractor classifies them.
        """
        # details=False skips MakerNotes and thumbnails, neither is needed
        tags = exifread.process_file(stream, details=False)
        return cls(tags or {})

    def __bool__(self) -> bool:
        return bool(self.tags)

    def has(self, field: Field) -> bool:
        return field.tag_name in self.tags

    def _values(self, field: Field) -> Optional[Sequence[Any]]:
        tag = self.tags.get(field.tag_name)
        if tag is None:
            return None
        values = getattr(tag, 'values', None)
        # ASCII tags carry a str; numeric accessors cannot use them
        if values is None or isinstance(values, (str, bytes)):
            return None
        return values

    def _value_at(self, field: Field, index: int) -> Any:
        values = self._values(field)
        if values is None or index >= len(values):
            return None
        return values[index]

    # --- Typed accessors ---

    def get_string(self, field: Field) -> Optional[str]:
        tag = self.tags.get(field.tag_name)
        if tag is None:
            return None
        return str(tag.printable).strip().strip('"')

    def get_rational(self, field: Field, index: int = 0) -> Optional[Rational]:
        return _as_rational(self._value_at(field, index))

    def get_int(self, field: Field, index: int = 0) -> Optional[int]:
        """
        Native integer first; otherwise a fraction that is exactly n/1.
        Anything else counts as not present.
        """
        value = self._value_at(field, index)
        if value is None:
            return None
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        rational = _as_rational(value)
        if rational is not None and rational.den == 1:
            return rational.num
        return None

    # --- Coordinates ---

    def _degrees(self, field: Field) -> float:
        tag = self.tags.get(field.tag_name)
        if tag is None:
            raise GPSCoordinateError(f"{field.tag_name} not present")

        values = getattr(tag, 'values', None)
        if isinstance(values, str):
            # Some phones write decimal degrees as a string
            try:
                return float(values.strip())
            except ValueError:
                raise GPSCoordinateError(f"Cannot parse {field.tag_name}: {values!r}")

        if not values:
            raise GPSCoordinateError(f"{field.tag_name} is empty")

        parts = []
        for value in list(values)[:3]:
            rational = _as_rational(value)
            if rational is None:
                raise GPSCoordinateError(f"Malformed {field.tag_name}")
            if not rational.is_valid:
                raise GPSCoordinateError(f"Zero denominator in {field.tag_name}")
            parts.append(rational.to_float())

        while len(parts) < 3:
            parts.append(0.0)
        degrees, minutes, seconds = parts
        return degrees + minutes / 60.0 + seconds / 3600.0

    def lat_long(self) -> Tuple[float, float]:
        """
        Resolves signed decimal latitude/longitude from the GPS IFD.
        Raises GPSCoordinateError when any piece is missing or malformed.
        """
        lat = self._degrees(Field.GPS_LATITUDE)
        long = self._degrees(Field.GPS_LONGITUDE)

        lat_ref = self.get_string(Field.GPS_LATITUDE_REF)
        long_ref = self.get_string(Field.GPS_LONGITUDE_REF)
        if lat_ref is None or long_ref is None:
            raise GPSCoordinateError("GPS reference tags not present")

        if lat_ref.upper() == 'S':
            lat = -lat
        if long_ref.upper() == 'W':
            long = -long

        if not (math.isfinite(lat) and math.isfinite(long)):
            raise GPSCoordinateError("Non-finite GPS coordinates")
        if abs(lat) > 90 or abs(long) > 180:
            raise GPSCoordinateError(f"GPS coordinates out of range: {lat}, {long}")
        return lat, long
