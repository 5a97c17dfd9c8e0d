"""
Configuration constants for metascan.
"""

# --- EXIF Tag Names ---
# Keys as exifread names them ("<IFD> <TagName>")
TAG_NAMES = {
    'make': 'Image Make',
    'model': 'Image Model',
    'date_time_original': 'EXIF DateTimeOriginal',
    'date_time': 'Image DateTime',
    'pixel_x_dimension': 'EXIF ExifImageWidth',
    'pixel_y_dimension': 'EXIF ExifImageLength',
    'iso_speed_ratings': 'EXIF ISOSpeedRatings',
    'orientation': 'Image Orientation',
    'f_number': 'EXIF FNumber',
    'exposure_time': 'EXIF ExposureTime',
    'focal_length': 'EXIF FocalLength',
    'gps_latitude': 'GPS GPSLatitude',
    'gps_latitude_ref': 'GPS GPSLatitudeRef',
    'gps_longitude': 'GPS GPSLongitude',
    'gps_longitude_ref': 'GPS GPSLongitudeRef',
    'gps_altitude': 'GPS GPSAltitude',
    'gps_altitude_ref': 'GPS GPSAltitudeRef',
    'gps_date_stamp': 'GPS GPSDate',
    'gps_time_stamp': 'GPS GPSTimeStamp',
}

# --- Metadata Formatting ---
ORIENTATION_NORMAL = 'Normal'
APERTURE_PREFIX = 'f/'
DEFAULT_DECIMAL_PRECISION = 2
COORDINATE_PRECISION = 6
ALTITUDE_PRECISION = 2
BELOW_SEA_LEVEL_SUFFIX = ' (Below Sea Level)'

# Exposure time gains a digit each time it drops below a threshold
EXPOSURE_PRECISION_STEPS = [
    (0.1, 3),
    (0.01, 4),
    (0.001, 5),
]

MAPS_URL_TEMPLATE = "https://www.google.com/maps?q={lat},{long}"

# --- Hashing ---
HASH_CHUNK_SIZE = 64 * 1024  # 64 KB chunks for reading

# --- Reporting ---
REPORT_FIELDS = [
    "FileName", "FilePath", "FileSize", "LastModified", "Permissions",
    "MD5", "SHA1", "SHA256",
    "Make", "Model", "DateTime", "ImageWidth", "ImageHeight", "ISO",
    "Aperture", "ExposureTime", "FocalLength", "Orientation",
    "GPSLatitude", "GPSLongitude", "GPSAltitude", "GPSDate", "GPSTime",
    "GoogleMapsLink",
]

MANIFEST_CSV_FIELDS = [
    "OutputFile", "OutputFormat", "TotalAttempted", "TotalProcessed", "TotalWithErrors",
    "MD5", "SHA1", "SHA256", "GeneratedAt",
]

OUTPUT_FORMATS = ('csv', 'json')
DEFAULT_OUTPUT_NAME = "file_metadata_report"
MANIFEST_SUFFIX = "-manifest"
