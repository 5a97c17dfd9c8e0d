"""
Custom exception hierarchy for metascan.

Per-file failures are raised as FileProcessingError (or FileHashError) and
caught by the scanner, which counts them and moves on to the next file.
"""


class MetascanError(Exception):
    """Base exception for all metascan errors."""
    pass


class FileHashError(MetascanError):
    """Raised when a stream cannot be read in full for hashing."""
    pass


class MetadataExtractionError(MetascanError):
    """Raised when an embedded metadata block is present but cannot be decoded."""
    pass


class FileProcessingError(MetascanError):
    """Raised when a single file cannot be opened, rewound or hashed."""
    pass


class ScanError(MetascanError):
    """Raised when the scan root is missing or is not a directory."""
    pass


class ReportError(MetascanError):
    """Raised when the report or manifest cannot be written."""
    pass


class GPSCoordinateError(MetadataExtractionError):
    """Raised when GPS latitude/longitude tags are missing or malformed."""
    pass
