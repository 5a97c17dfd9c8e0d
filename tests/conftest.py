from collections import namedtuple

import piexif
import pytest
from PIL import Image

from metascan.metadata.block import ExifBlock

# Stand-in for exifread's Ratio; allows a zero denominator
Frac = namedtuple("Frac", "numerator denominator")


class FakeTag:
    """Minimal IfdTag look-alike: printable + values."""

    def __init__(self, values):
        self.values = values
        self.printable = values if isinstance(values, str) else str(values)


@pytest.fixture
def ratio():
    return Frac


@pytest.fixture
def make_block():
    """Returns a factory: {Field: str | list} -> ExifBlock."""
    def _make(fields):
        return ExifBlock({f.tag_name: FakeTag(v) for f, v in fields.items()})
    return _make


@pytest.fixture
def make_jpeg(tmp_path):
    """
    Returns a factory writing a small JPEG with the given piexif dict.
    Rationals are (num, den) tuples, so zero denominators can be written.
    """
    def _make(name="photo.jpg", zeroth=None, exif=None, gps=None):
        path = tmp_path / name
        exif_bytes = piexif.dump({
            "0th": zeroth or {},
            "Exif": exif or {},
            "GPS": gps or {},
        })
        with Image.new("RGB", (16, 12), color="white") as im:
            im.save(path, "JPEG", exif=exif_bytes)
        return path
    return _make
