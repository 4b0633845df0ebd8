#!/usr/bin/env python3
"""
XML to JSON Converter - Main Entry Point
========================================
Converts XML files, including Alteryx .yxmd workflows, into JSON.

Alteryx workflows are detected automatically and converted into a structured
description (metadata, tools, connections, properties, constants). Any other
XML document is mapped element by element.

Usage:
    python convert.py <file.xml>                       # JSON to stdout
    python convert.py a.xml b.yxmd --output-dir ./out  # one .json per file
    python convert.py <file.xml> --format minified --no-attributes
    python convert.py *.xml --detect-only
"""

import argparse
import logging
import sys
import time
from pathlib import Path

from xml_json_converter.config import OUTPUT_FORMATS, load_config
from xml_json_converter.converter import ConversionOptions, OutputFormat, XmlJsonConverter
from xml_json_converter.detector import detect_file_type
from xml_json_converter.utils import configure_logging, format_size, print_banner, print_summary

logger = logging.getLogger("xml_json_converter.cli")


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert XML files and Alteryx .yxmd workflows to JSON"
    )
    parser.add_argument(
        "files",
        nargs="+",
        help="XML files to convert",
    )
    parser.add_argument(
        "--output-dir", "-o",
        default=None,
        help="Directory to write <name>.json files to. Required for more than "
             "one input file; a single file is printed to stdout without it.",
    )
    parser.add_argument(
        "--format", "-f",
        choices=OUTPUT_FORMATS,
        default=None,
        help="JSON layout: pretty (2-space indent), compact (1-space indent) "
             "or minified. Default: from config, else pretty",
    )
    parser.add_argument(
        "--no-attributes",
        action="store_true",
        help="Drop element attributes when mapping generic XML.",
    )
    parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Disable the conversion cache.",
    )
    parser.add_argument(
        "--detect-only",
        action="store_true",
        help="Only report the detected file type of each input and exit.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Optional YAML config file with cache and output defaults.",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser


def _build_options(args, converter: XmlJsonConverter) -> ConversionOptions:
    options = converter.default_options()
    if args.format:
        options.output_format = OutputFormat(args.format)
    if args.no_attributes:
        options.preserve_attributes = False
    if args.no_cache:
        options.use_cache = False
    return options


def main(argv=None) -> int:
    args = build_arg_parser().parse_args(argv)
    configure_logging(args.verbose)

    paths = [Path(p) for p in args.files]
    missing = [p for p in paths if not p.exists()]
    if missing:
        for p in missing:
            print(f"  File not found: {p}", file=sys.stderr)
        return 1

    # ── Detect-only mode ─────────────────────────────────────────────
    if args.detect_only:
        for p in paths:
            print(f"{p}\t{detect_file_type(p.read_text(encoding='utf-8-sig'))}")
        return 0

    to_stdout = args.output_dir is None and len(paths) == 1
    output_dir = None
    if not to_stdout:
        output_dir = Path(args.output_dir or "./output")
        output_dir.mkdir(parents=True, exist_ok=True)

    converter = XmlJsonConverter(config=load_config(args.config))
    options = _build_options(args, converter)

    if not to_stdout:
        print_banner()

    results = []
    for path in paths:
        t0 = time.time()
        result = converter.convert_with_result(path.read_text(encoding="utf-8-sig"), options)
        elapsed = time.time() - t0

        if not result.ok:
            logger.warning(f"{path.name}: {result.error}")
            results.append({
                "file": path.name,
                "type": "-",
                "status": "Failed",
                "time": f"{elapsed:.2f}s",
                "size": "-",
                "error": result.error,
            })
            continue

        if to_stdout:
            print(result.output)
        else:
            output_file = output_dir / f"{path.stem}.json"
            output_file.write_text(result.output, encoding="utf-8")
            logger.info(f"Written to: {output_file}")

        results.append({
            "file": path.name,
            "type": result.file_type,
            "status": "Success",
            "time": f"{elapsed:.2f}s",
            "size": format_size(result.output_size),
        })

    if not to_stdout:
        print_summary(results)

    return 0 if all(r["status"] == "Success" for r in results) else 1


if __name__ == "__main__":
    sys.exit(main())
