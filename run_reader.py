#!/usr/bin/env python3
"""
Command-line entry point for the ACE3 addon function reader.

Reads ``<root>/addons/<prefix>/functions/fn*.sqf`` and prints (or writes)
the extracted functions as JSON, ordered by addon prefix.

Usage:
    python run_reader.py --root-dir /path/to/ACE3
    python run_reader.py --root-dir /path/to/ACE3 --only-comments --output-file out/docs.json
    python run_reader.py --root-dir /path/to/ACE3 --config reader.yml --report-dir output/run_reports
"""

import argparse
import json
import logging
import os
import sys
import time
from dataclasses import replace
from typing import List, Optional

from core.reader_config import ConfigValidationError, load_reader_config
from core.run_artifacts import build_run_report, write_json_output, write_run_report
from core.structured_logging import configure_structured_logging, phase_scope, set_run_id
from extraction.errors import ReaderError
from extraction.extractor import read_sync

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="ACE3 addon function documentation reader",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python run_reader.py --root-dir ./ACE3\n"
            "  python run_reader.py --root-dir ./ACE3 --only-comments --output-file out/docs.json\n"
        ),
    )

    parser.add_argument(
        "--root-dir",
        required=True,
        help="Project root containing the 'addons' directory.",
    )
    parser.add_argument(
        "--only-comments",
        action="store_true",
        default=None,
        help="Extract only the header comment of each function file.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Optional YAML/JSON reader config file.",
    )
    parser.add_argument(
        "--output-file",
        default=None,
        help="Write the JSON mapping here instead of stdout.",
    )
    parser.add_argument(
        "--report-dir",
        default=None,
        help="If set, write a JSON run report into this directory.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug logging.",
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point. Returns the process exit code."""
    args = parse_args(argv)
    configure_structured_logging(logging.DEBUG if args.verbose else logging.INFO)
    run_id = set_run_id()

    try:
        config = load_reader_config(args.config)
        if args.only_comments is not None:
            config = replace(config, only_comments=args.only_comments)

        logger.info(f"Root directory : {os.path.abspath(args.root_dir)}")
        logger.info(f"Mode           : {'comments' if config.only_comments else 'full'}")

        t0 = time.time()
        result = read_sync(args.root_dir, config)
        logger.info("Read completed in %.2fs", time.time() - t0)

        with phase_scope("output"):
            payload = result.to_dict()
            if args.output_file:
                path = write_json_output(payload, args.output_file)
                logger.info(f"Wrote {len(payload)} addons to {path}")
            else:
                json.dump(payload, sys.stdout, indent=2, ensure_ascii=False)
                sys.stdout.write("\n")

            if args.report_dir:
                report = build_run_report(result, config, args.root_dir)
                path = write_run_report(report, run_id, args.report_dir)
                logger.info(f"Run report written to {path}")

    except ConfigValidationError as e:
        logger.error(f"Config error: {e}")
        return 1
    except ReaderError as e:
        logger.error(f"Read failed: {e}")
        return 1
    except OSError as e:
        logger.error(f"Output error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
