import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote_plus

from .. import config
from ..exceptions import GPSCoordinateError
from .block import ExifBlock, Field


@dataclass(frozen=True)
class GPSFields:
    latitude: str = ""
    longitude: str = ""
    altitude: str = ""
    date: str = ""
    time: str = ""
    maps_link: str = ""


def build_maps_link(latitude: str, longitude: str) -> str:
    """Map URL for a coordinate pair; empty unless both are present."""
    if not latitude or not longitude:
        return ""
    return config.MAPS_URL_TEMPLATE.format(lat=quote_plus(latitude), long=quote_plus(longitude))


class GPSResolver:
    """
    Derives display strings for the GPS IFD.

    Latitude/longitude gate everything else: if they do not resolve,
    altitude, date, time and the map link all stay empty.
    """

    def resolve(self, block: ExifBlock) -> GPSFields:
        try:
            lat, long = block.lat_long()
        except GPSCoordinateError as e:
            logging.debug(f"No usable GPS coordinates: {e}")
            return GPSFields()

        latitude = f"{lat:.{config.COORDINATE_PRECISION}f}"
        longitude = f"{long:.{config.COORDINATE_PRECISION}f}"

        return GPSFields(
            latitude=latitude,
            longitude=longitude,
            altitude=self._altitude(block) or "",
            date=block.get_string(Field.GPS_DATE_STAMP) or "",
            time=self._time(block) or "",
            maps_link=build_maps_link(latitude, longitude),
        )

    def _altitude(self, block: ExifBlock) -> Optional[str]:
        altitude = block.get_rational(Field.GPS_ALTITUDE)
        if altitude is None or not altitude.is_valid:
            return None

        suffix = ""
        if block.get_int(Field.GPS_ALTITUDE_REF) == 1:
            suffix = config.BELOW_SEA_LEVEL_SUFFIX
        return f"{altitude.to_float():.{config.ALTITUDE_PRECISION}f}{suffix}"

    def _time(self, block: ExifBlock) -> Optional[str]:
        """HH:MM:SS from the three GPSTimeStamp fractions, or None unless all three resolve."""
        parts = []
        for i in range(3):
            part = block.get_rational(Field.GPS_TIME_STAMP, i)
            if part is None or not part.is_valid:
                return None
            if part.is_integer:
                parts.append(part.num // part.den)
            else:
                parts.append(int(part.to_float()))

        hours, minutes, seconds = parts
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
