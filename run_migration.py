# run_migration.py
import asyncio
import argparse
import logging
import sys
from pathlib import Path

# Import RichHandler here for centralized logging
from rich.logging import RichHandler

from catalog_migration.main import main as run_migration
from catalog_migration.delegates import WooCommerceAPIError


def configure_logging(log_file_path: Path) -> None:
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(levelname)-8s - %(name)-25s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    file_handler = logging.FileHandler(log_file_path)
    file_handler.setLevel(logging.DEBUG) # Log all debug messages to file
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    rich_handler = RichHandler(
        level=logging.INFO,
        show_time=True,
        show_level=True,
        show_path=False,
    )
    root_logger.addHandler(rich_handler)

    # httpx logs every request at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Migrate the WooCommerce catalog into the storefront data store.",
        formatter_class=argparse.RawTextHelpFormatter
    )
    modes = parser.add_mutually_exclusive_group(required=True)
    modes.add_argument('--test', dest='mode', action='store_const', const='test',
                       help="Migrate categories and the first 5 products.")
    modes.add_argument('--full', dest='mode', action='store_const', const='full',
                       help="Migrate categories and every published product.")
    modes.add_argument('--categories-only', dest='mode', action='store_const', const='categories-only',
                       help="Only migrate categories.")
    modes.add_argument('--fetch-samples', dest='mode', action='store_const', const='fetch-samples',
                       help="Save every published product as raw JSON for offline analysis.")
    modes.add_argument('--analyze', dest='mode', action='store_const', const='analyze',
                       help="Report how well specs parse from the saved samples.")
    parser.add_argument('--log-file', type=Path, default=Path("migration.log"),
                        help="Where to write the DEBUG log (default: migration.log).")
    return parser


def run(argv=None) -> int:
    """Runs the migration and returns the process exit status."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file)

    logging.info("=" * 60)
    logging.info("WooCommerce Migration Starting...")
    logging.info("Mode: %s", args.mode)
    logging.info("=" * 60)

    exit_code = 0
    try:
        asyncio.run(run_migration(args.mode))
    except KeyboardInterrupt:
        logging.warning("Migration interrupted by user.")
        exit_code = 1
    except WooCommerceAPIError as e:
        logging.critical("Migration failed: %s", e)
        exit_code = 1
    except Exception as e:
        logging.critical("An unexpected error occurred: %s", e, exc_info=True)
        exit_code = 1
    finally:
        logging.info("=" * 60)
        logging.info("Migration execution finished.")
    return exit_code


if __name__ == "__main__":
    sys.exit(run())
