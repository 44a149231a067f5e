import argparse
import logging
import sys
from pathlib import Path

from . import config
from .core import PostProcessor
from .reporting import ReportGenerator
from .scanning.filesystem import DiskScanner


def setup_logging(root: Path, verbose: bool):
    """Sets up logging to both console and a file in the processed folder."""
    log_level = logging.DEBUG if verbose else logging.INFO
    log_file = root / config.LOG_FILE_NAME

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.FileHandler(log_file, encoding='utf-8'),
            logging.StreamHandler(sys.stdout)
        ]
    )

    # Silence chatty libraries
    logging.getLogger("exifread").setLevel(logging.ERROR)
    logging.getLogger("PIL").setLevel(logging.WARNING)


def parse_args(argv=None):
    p = argparse.ArgumentParser(
        description="Download Sorter: dedup, classify and split a folder of downloaded media")

    p.add_argument("folder", type=Path, help="Folder the files were downloaded into")

    p.add_argument("--min-files", type=int, default=config.MIN_FILES_PER_FOLDER,
                   help="Minimum files in a day folder before a new day starts a new folder")
    p.add_argument("--max-files", type=int, default=config.MAX_FILES_PER_FOLDER,
                   help="Close a day folder once it holds this many files (default: no cap)")
    p.add_argument("--no-exif", action="store_true",
                   help="Use file modification time only, ignore EXIF dates")
    p.add_argument("--dry-run", action="store_true", help="Simulate actions without modifying disk")
    p.add_argument("--report-csv", type=Path, default=None, help="Write a CSV report of the run")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    return p.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    root = args.folder.resolve()

    if not root.is_dir():
        print(f"Not a folder: {root}", file=sys.stderr)
        return 1

    setup_logging(root, args.verbose)

    logging.info("=== Download Sorter Started ===")
    logging.info(f"Folder: {root}")

    try:
        descriptors = DiskScanner(use_exif=not args.no_exif).describe(root)
        # The log file lives in root too; it is not part of the download
        descriptors = [d for d in descriptors if d.filename != config.LOG_FILE_NAME]

        processor = PostProcessor(min_files=args.min_files, max_files=args.max_files)
        report = processor.run(descriptors, root, dry_run=args.dry_run)

        reporter = ReportGenerator()
        reporter.log_summary(report)
        if args.report_csv:
            reporter.write_csv(report, args.report_csv)
    except KeyboardInterrupt:
        logging.warning("Operation cancelled by user.")
        return 1
    except Exception:
        logging.exception("Fatal error during post-processing.")
        return 1

    return 0 if report.ok else 1


if __name__ == "__main__":
    sys.exit(main())
