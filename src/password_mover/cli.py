"""
Command-line interface for the password mover application.

This module is responsible for:
- Parsing command-line arguments using argparse
- Configuring logging based on verbosity level
- Loading or interactively creating the path configuration
- Orchestrating the overall workflow
"""

import argparse
import logging
import sys
from pathlib import Path

from . import __version__, PRODUCT_NAME, PRODUCT_DESCRIPTION
from .config import DEFAULT_CONFIG_FILE, ConfigError, obtain_config
from .console import enable_colors, print_heading, print_notice
from .mover import MissingExtensionError, process_directory

logger = logging.getLogger(__name__)


def positive_int(value: str) -> int:
    """argparse type for integers >= 1."""
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="password-mover",
        description=f"""
{PRODUCT_NAME} - {PRODUCT_DESCRIPTION}

Move password files into one folder.

Scans the configured source folder (recursively) for files named
password.txt or passwords.txt, in any letter case, and moves them into
the configured destination folder under unique timestamped names.
        """.strip(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  # First run: prompts for the paths and writes {DEFAULT_CONFIG_FILE}
  %(prog)s

  # Use a different config file
  %(prog)s --config other.conf

  # Limit the top-level pass to 4 threads, with INFO logging
  %(prog)s --workers 4 -v

Config file format:
  Path="C:\\Users\\me"
  DestPath="D:\\Collected"
        """
    )

    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=Path(DEFAULT_CONFIG_FILE),
        metavar="FILE",
        help=f"Path config file (default: {DEFAULT_CONFIG_FILE} in the working directory)"
    )
    parser.add_argument(
        "-w", "--workers",
        type=positive_int,
        default=None,
        metavar="N",
        help="Maximum threads for moving top-level files (default: automatic)"
    )

    # Verbosity
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase output verbosity (-v for INFO, -vv for DEBUG)"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=__version__
    )

    return parser


def setup_logging(verbosity: int) -> None:
    """Configure logging based on verbosity level."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )


def main(argv: list = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    enable_colors()

    logger.info(f"{PRODUCT_NAME} v{__version__}")
    logger.debug(f"Arguments: {args}")

    try:
        config, fresh = obtain_config(args.config)

        print_heading("Moving password files...")
        if fresh:
            print_notice(f"Using the updated path: {config.source_path}")
        else:
            print_notice(f"Using the path from the config file: {config.source_path}")

        logger.info(f"Source: {config.source_path}")
        logger.info(f"Destination: {config.dest_path}")

        if not process_directory(
            config.source_path,
            config.dest_path,
            max_workers=args.workers
        ):
            return 1

        return 0

    except ConfigError as e:
        print(f"\nError: {e}", file=sys.stderr)
        logger.error(f"Config error: {e}")
        return 1

    except MissingExtensionError as e:
        print(f"\nError: {e}", file=sys.stderr)
        logger.error(f"Precondition failed: {e}")
        return 1

    except EOFError:
        print("\nError: no input available for the path prompts.", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\n\nOperation cancelled by user.", file=sys.stderr)
        return 130

    except Exception as e:
        print(f"\nUnexpected error: {e}", file=sys.stderr)
        logger.exception("Unexpected error")
        return 1


if __name__ == "__main__":
    sys.exit(main())
