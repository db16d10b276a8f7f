#!/usr/bin/env python3

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from time import perf_counter

from src.apexdoc.extractor import extract_files_concurrently, list_apex_files
from src.apexdoc.io import dump_docs, write_docs_json
from src.utils.common import add_common_args, setup_logging
from src.utils.config import get_apexdoc_config

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    config = get_apexdoc_config()
    parser = argparse.ArgumentParser(description="Extract ApexDoc comments from Apex sources")
    add_common_args(parser, log_level=config.log_level)
    parser.add_argument("path", help="Apex source file or directory to scan")
    parser.add_argument("--out", help="Write JSON results to this path instead of stdout")
    parser.add_argument(
        "--parallel-files",
        type=int,
        default=config.parallel_files,
        help="Number of files to process in parallel",
    )
    parser.add_argument(
        "--address-only",
        action="store_true",
        help="Report comment locations only, without decoding the comment bodies",
    )
    parser.add_argument(
        "--multi-param",
        action="store_true",
        default=config.multi_param,
        help="Keep every @param entry instead of only the last one",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable the progress bar",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    root = Path(args.path)
    if not root.exists():
        logger.error("Path does not exist: %s", root)
        return 2

    files = list_apex_files(root)
    logger.info("Found %d Apex files to process", len(files))

    start = perf_counter()
    results = extract_files_concurrently(
        files,
        root,
        max(1, args.parallel_files),
        address_only=args.address_only,
        multi_param=args.multi_param,
        disable_progress=True if args.no_progress else None,
    )
    documented = sum(r["documented_count"] for r in results)
    declarations = sum(r["declaration_count"] for r in results)
    logger.info(
        "Processed %d files in %.2fs: %d of %d declarations documented",
        len(results),
        perf_counter() - start,
        documented,
        declarations,
    )

    if args.out:
        write_docs_json(Path(args.out), results)
        logger.info("Wrote %s", args.out)
    else:
        dump_docs(results, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
