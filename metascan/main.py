import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from . import config
from .core import MetascanApp
from .exceptions import MetascanError, ScanError


def setup_logging(verbose: bool, log_file: Optional[Path] = None):
    """Sets up logging to the console and, optionally, a log file."""
    log_level = logging.DEBUG if verbose else logging.INFO

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=handlers,
    )

    # Turn down exifread's own chatter (it logs "File format not recognized")
    logging.getLogger("exifread").setLevel(logging.ERROR)


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="metascan: file metadata, EXIF and hash report")

    p.add_argument("--dir", type=Path, default=Path("."), help="Directory to process")
    p.add_argument("--output", default=config.DEFAULT_OUTPUT_NAME,
                   help="Base name of the output file (no extension)")
    p.add_argument("-r", "--recursive", action="store_true", help="Process subdirectories recursively")
    p.add_argument("--ext", default="", help="Only process files with this extension (e.g. .jpg)")
    p.add_argument("--format", choices=config.OUTPUT_FORMATS, default="csv", type=str.lower,
                   help="Output format")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    p.add_argument("--log-file", type=Path, default=None, help="Also write the log to this file")
    p.add_argument("--no-progress", action="store_true", help="Hide the progress bar")

    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.verbose, args.log_file)

    logging.info("=== metascan started ===")

    app = MetascanApp(show_progress=not args.no_progress)
    try:
        app.run(
            src_root=args.dir,
            output_name=args.output,
            output_format=args.format,
            recursive=args.recursive,
            ext_filter=args.ext or None,
        )
    except ScanError as e:
        logging.error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        logging.warning("Operation cancelled by user.")
        sys.exit(1)
    except MetascanError:
        logging.exception("Fatal error during scan.")
        sys.exit(1)


if __name__ == "__main__":
    main()
