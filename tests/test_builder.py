import dataclasses
import hashlib
import io
import stat
from datetime import datetime
from pathlib import Path

import piexif
import pytest

from metascan.exceptions import FileProcessingError
from metascan.metadata.extract import ExtractionResult
from metascan.models import FileInfoData
from metascan.scanning.builder import FileRecordBuilder

CAMERA_AND_GPS_FIELDS = [
    "make", "model", "date_time", "image_width", "image_height", "iso",
    "aperture", "exposure_time", "focal_length", "orientation",
    "gps_latitude", "gps_longitude", "gps_altitude", "gps_date", "gps_time",
    "google_maps_link",
]

GPS_NORTH_EAST = {
    piexif.GPSIFD.GPSLatitudeRef: "N",
    piexif.GPSIFD.GPSLatitude: ((48, 1), (51, 1), (2964, 100)),
    piexif.GPSIFD.GPSLongitudeRef: "E",
    piexif.GPSIFD.GPSLongitude: ((2, 1), (17, 1), (4020, 100)),
}


def test_plain_text_file(tmp_path):
    p = tmp_path / "notes.txt"
    data = b"no metadata in here\n"
    p.write_bytes(data)

    rec = FileRecordBuilder().build(p)

    assert rec.file_name == "notes.txt"
    assert rec.file_path == str(p.absolute())
    assert rec.file_size == len(data)
    assert rec.md5 == hashlib.md5(data).hexdigest()
    assert rec.sha1 == hashlib.sha1(data).hexdigest()
    assert rec.sha256 == hashlib.sha256(data).hexdigest()
    for name in CAMERA_AND_GPS_FIELDS:
        assert getattr(rec, name) == "", name


def test_filesystem_attributes(tmp_path):
    p = tmp_path / "a.bin"
    p.write_bytes(b"abc")
    p.chmod(0o640)

    rec = FileRecordBuilder().build(p)

    assert rec.permissions == "-rw-r-----"
    assert rec.permissions == stat.filemode(p.stat().st_mode)
    parsed = datetime.fromisoformat(rec.last_modified)
    assert parsed.tzinfo is not None
    assert int(parsed.timestamp()) == int(p.stat().st_mtime)


def test_directory_returns_none(tmp_path):
    assert FileRecordBuilder().build(tmp_path) is None


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileProcessingError):
        FileRecordBuilder().build(tmp_path / "gone.jpg")


def test_record_is_immutable(tmp_path):
    p = tmp_path / "x.txt"
    p.write_text("x")
    rec = FileRecordBuilder().build(p)
    with pytest.raises(dataclasses.FrozenInstanceError):
        rec.md5 = "tampered"


class FlakySeekFile(io.BytesIO):
    """Seeks normally until fail_seek is set."""
    fail_seek = False

    def seek(self, *args):
        if self.fail_seek:
            raise OSError("seek failed")
        return super().seek(*args)


def test_rewind_failure_is_fatal(monkeypatch, tmp_path):
    p = tmp_path / "x.txt"
    p.write_text("x")
    monkeypatch.setattr(Path, "open", lambda self, *a, **k: FlakySeekFile(b"x"))

    builder = FileRecordBuilder()

    def extract_then_break_seek(f, name="<stream>"):
        f.fail_seek = True
        return ExtractionResult()

    monkeypatch.setattr(builder.metadata, "extract", extract_then_break_seek)
    with pytest.raises(FileProcessingError, match="rewinding"):
        builder.build(p)


def test_decode_anomaly_still_hashes(monkeypatch, tmp_path):
    import exifread

    p = tmp_path / "odd.jpg"
    p.write_bytes(b"\xff\xd8garbage")

    def fake_process_file(fh, **kwargs):
        fh.read(4)
        raise ValueError("unexpected tag layout")

    monkeypatch.setattr(exifread, "process_file", fake_process_file)
    seen = []
    rec = FileRecordBuilder(on_warning=lambda path, msg: seen.append((path, msg))).build(p)

    assert rec.sha256 == hashlib.sha256(b"\xff\xd8garbage").hexdigest()
    assert rec.make == ""
    assert len(seen) == 1 and seen[0][0] == p


def test_datetime_fallback_when_original_missing(make_jpeg):
    path = make_jpeg(zeroth={piexif.ImageIFD.DateTime: "2018:06:15 12:30:45"})
    rec = FileRecordBuilder().build(path)
    assert rec.date_time == "2018:06:15 12:30:45"


def test_gps_with_zero_denominator_altitude(make_jpeg):
    gps = dict(GPS_NORTH_EAST)
    gps[piexif.GPSIFD.GPSAltitudeRef] = 0
    gps[piexif.GPSIFD.GPSAltitude] = (120, 0)
    path = make_jpeg(gps=gps)

    rec = FileRecordBuilder().build(path)

    assert rec.gps_latitude == "48.858233"
    assert rec.gps_longitude == "2.294500"
    assert rec.google_maps_link == "https://www.google.com/maps?q=48.858233,2.294500"
    assert rec.gps_altitude == ""


def test_full_gps_block(make_jpeg):
    gps = dict(GPS_NORTH_EAST)
    gps[piexif.GPSIFD.GPSLatitudeRef] = "S"
    gps[piexif.GPSIFD.GPSAltitudeRef] = 1
    gps[piexif.GPSIFD.GPSAltitude] = (1525, 100)
    gps[piexif.GPSIFD.GPSDateStamp] = "2024:02:29"
    gps[piexif.GPSIFD.GPSTimeStamp] = ((7, 1), (8, 1), (95, 10))
    path = make_jpeg(gps=gps)

    rec = FileRecordBuilder().build(path)

    assert rec.gps_latitude == "-48.858233"
    assert rec.gps_altitude == "15.25 (Below Sea Level)"
    assert rec.gps_date == "2024:02:29"
    assert rec.gps_time == "07:08:09"
    assert rec.google_maps_link == "https://www.google.com/maps?q=-48.858233,2.294500"


def test_gps_time_with_zero_denominator_part(make_jpeg):
    gps = dict(GPS_NORTH_EAST)
    gps[piexif.GPSIFD.GPSTimeStamp] = ((7, 1), (8, 0), (9, 1))
    rec = FileRecordBuilder().build(make_jpeg(gps=gps))
    assert rec.gps_latitude != ""
    assert rec.gps_time == ""


def test_record_has_full_field_set(tmp_path):
    p = tmp_path / "x.txt"
    p.write_text("x")
    rec = FileRecordBuilder().build(p)
    assert len(rec.as_row()) == len(dataclasses.fields(FileInfoData)) == 24


def test_file_path_is_normalized(monkeypatch, tmp_path):
    (tmp_path / "a").mkdir()
    (tmp_path / "b").mkdir()
    (tmp_path / "b" / "f.txt").write_text("f")
    monkeypatch.chdir(tmp_path / "a")

    rec = FileRecordBuilder().build(Path("../b/f.txt"))

    assert rec.file_path == str(tmp_path / "b" / "f.txt")
    assert ".." not in rec.file_path
