"""
Utility functions for the converter CLI.
"""

import logging
import sys


def configure_logging(verbose: bool = False):
    """Send log records to stderr so JSON written to stdout stays clean."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def print_banner():
    """Print the application banner."""
    print(file=sys.stderr)
    print("=" * 60, file=sys.stderr)
    print("  XML -> JSON Converter", file=sys.stderr)
    print("=" * 60, file=sys.stderr)
    print(file=sys.stderr)


def format_size(num_chars: int) -> str:
    if num_chars < 1024:
        return f"{num_chars} B"
    return f"{num_chars / 1024:.1f} KB"


def print_summary(results: list):
    """Print a summary table of conversion results."""
    out = sys.stderr
    print("\n" + "=" * 78, file=out)
    print("CONVERSION SUMMARY", file=out)
    print("=" * 78, file=out)
    print(f"{'File':<30} {'Type':<18} {'Status':<12} {'Time':<9} {'Size':<8}", file=out)
    print("-" * 78, file=out)
    for r in results:
        name = r["file"][:29]
        print(f"{name:<30} {r['type']:<18} {r['status']:<12} {r['time']:<9} {r['size']:<8}",
              file=out)
        if r.get("error"):
            print(f"    {r['error'][:74]}", file=out)
    print("-" * 78, file=out)
    success = sum(1 for r in results if r["status"] == "Success")
    failed = len(results) - success
    print(f"Total: {len(results)} files | {success} success | {failed} failed", file=out)
    print(file=out)
