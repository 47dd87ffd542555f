#!/usr/bin/env python
"""
Tree Extraction Tool - Main Script

Reads a file holding one or more phylogenetic trees (Newick, Nexus or NeXML)
and writes every tree to its own Newick file. This script serves as the
command-line interface to the tree extraction pipeline.
"""

import sys
import argparse
import logging
from treeextract import formats
from treeextract.pipeline import ExtractionRequest, TreeExtractionPipeline


# Set up logging
def setup_logging(log_level, log_file=None):
    """Configure logging system based on specified log level and optional log file."""
    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {log_level}")

    # Basic configuration for console logging
    logging.basicConfig(
        level=numeric_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Add file handler if log_file is specified
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)

        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        file_handler.setFormatter(formatter)

        logging.getLogger().addHandler(file_handler)

        logging.info(f"Logging to file: {log_file}")


class UsageErrorParser(argparse.ArgumentParser):
    """Argument parser that reports usage errors with the full option list and status 1."""

    def error(self, message):
        sys.stderr.write(f"{self.prog}: error: {message}\n\n")
        self.print_help(sys.stderr)
        self.exit(1)


def build_arg_parser():
    """Build the command line option schema."""
    parser = UsageErrorParser(
        description="Extract every tree in a tree file into its own Newick file",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    parser.add_argument(
        "--input", "-i",
        help="Path to the input tree file"
    )

    parser.add_argument(
        "--format", "-f",
        help="Format of the input data (see --list-formats)"
    )

    parser.add_argument(
        "--prefix", "-p",
        default="tree",
        help="Prefix for the names of unnamed trees"
    )

    parser.add_argument(
        "--output-dir", "-o",
        default=".",
        help="Directory the tree files are written to"
    )

    parser.add_argument(
        "--list-formats",
        action="store_true",
        help="List the supported input formats and exit"
    )

    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error", "critical"],
        default="warning",
        help="Set logging level"
    )

    parser.add_argument(
        "--log-file",
        help="Path to output log file"
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version="%(prog)s 0.1.0"
    )

    return parser


def main(argv=None):
    """Main function."""
    # Parse command line arguments
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.list_formats:
        print(formats.describe_formats())
        return 0

    if args.input is None:
        parser.error("required option, --input, missing")
    if args.format is None:
        parser.error("required option, --format, missing")

    logger = logging.getLogger(__name__)

    try:
        # Set up logging
        setup_logging(args.log_level, args.log_file)
    except OSError as e:
        print(f"cannot open log file: {e}", file=sys.stderr)
        return 1

    request = ExtractionRequest(
        input_path=args.input,
        format_id=args.format,
        name_prefix=args.prefix,
        output_dir=args.output_dir,
    )
    pipeline = TreeExtractionPipeline(config={'parser': {'suppress_rooting': True}})

    try:
        result = pipeline.extract(request)
    except Exception as e:
        logger.error(f"Error during tree extraction: {str(e)}")
        logger.error("Exception details:", exc_info=True)
        print(f"unexpected error during tree extraction: {e!r}", file=sys.stderr)
        return 1

    if not result.ok:
        print(result.error.message, file=sys.stderr)

    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
