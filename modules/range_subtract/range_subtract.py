#!/usr/bin/env python3
"""
range_subtract.py

Subtract a TSV of ranges from one base range and write what is left
(e.g. free time = working hours - meetings).

The base range is given on the command line; an omitted --begin/--end leaves
that side unbounded. When a removed range includes its end, the remainder
after it starts at end + delta (--delta, default 1 for numbers, 1s for time).
"""

import argparse

# --------------------------------------------------
# Ensure imports from bin/ work
# --------------------------------------------------
import os
import sys

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
BIN_DIR = os.path.abspath(os.path.join(SCRIPT_DIR, "../../bin"))
sys.path.insert(0, BIN_DIR)

from intervals import close_ranges, subtract
from range_checks import Range
from range_io import VALUE_TYPES, load_ranges, parse_bound, parse_delta, write_ranges


DEFAULT_VALUE_TYPE = "float"


# --------------------------------------------------
# CLI
# --------------------------------------------------
def parse_args():
    p = argparse.ArgumentParser(
        description="Subtract ranges from a base range and report the remaining ranges"
    )
    p.add_argument("--ranges", required=True, help="TSV of ranges to remove (begin, end, exclude_end)")
    p.add_argument("--begin", default=None, help="Base range begin (omit for beginless)")
    p.add_argument("--end", default=None, help="Base range end (omit for endless)")
    p.add_argument("--exclude_end", action="store_true", help="Base range excludes its end")
    p.add_argument("--out_prefix", required=True)
    p.add_argument("--value_type", choices=VALUE_TYPES, default=DEFAULT_VALUE_TYPE)
    p.add_argument(
        "--delta",
        default=None,
        help="Step to the next value after an included end "
             "(number for int/float, e.g. '1s' for time; default: 1 / 1s)",
    )
    p.add_argument(
        "--closed",
        action="store_true",
        help="Convert remaining ranges that exclude their end to closed ranges (same delta)",
    )
    return p.parse_args()


# --------------------------------------------------
# main
# --------------------------------------------------
def main():
    args = parse_args()

    base = Range(
        parse_bound(args.begin, args.value_type),
        parse_bound(args.end, args.value_type),
        args.exclude_end,
    )
    delta = parse_delta(args.delta, args.value_type)

    to_remove = load_ranges(args.ranges, args.value_type)

    remaining = subtract(base, to_remove, delta=delta)

    if args.closed:
        remaining, dropped = close_ranges(remaining, delta)
        for r in dropped:
            print(f"[range_subtract] dropped {r}: empty once closed", file=sys.stderr)

    out_tsv = f"{args.out_prefix}.subtract.tsv"
    write_ranges(remaining, out_tsv)

    print(
        f"[range_subtract] base={base}, removed={len(to_remove)}, "
        f"remaining={len(remaining)}, written {out_tsv}",
        file=sys.stderr,
    )


if __name__ == "__main__":
    main()
