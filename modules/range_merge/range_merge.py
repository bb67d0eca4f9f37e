#!/usr/bin/env python3
"""
range_merge.py

Merge a TSV of ranges into the minimal sorted list of non-overlapping ranges
covering the same points.

Ranges that only touch at an excluded end ([1, 3) and [3, 5]) are not merged.
Optionally converts the result to closed ranges and draws input vs merged bars.
"""

import argparse

import numpy as np
import matplotlib.pyplot as plt
import matplotlib.dates as mdates
import pandas as pd

# --------------------------------------------------
# Ensure imports from bin/ work
# --------------------------------------------------
import os
import sys

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
BIN_DIR = os.path.abspath(os.path.join(SCRIPT_DIR, "../../bin"))
sys.path.insert(0, BIN_DIR)

from intervals import close_ranges, merge
from range_io import VALUE_TYPES, load_ranges, parse_delta, write_ranges


# --------------------------------------------------
# constants
# --------------------------------------------------
DEFAULT_VALUE_TYPE = "float"
UNBOUNDED_PAD_FRACTION = 0.05


# --------------------------------------------------
# CLI
# --------------------------------------------------
def parse_args():
    p = argparse.ArgumentParser(
        description="Merge overlapping ranges (closed, half-open, beginless or endless)"
    )
    p.add_argument("--ranges", required=True, help="Range TSV (begin, end, exclude_end)")
    p.add_argument("--out_prefix", required=True)
    p.add_argument("--value_type", choices=VALUE_TYPES, default=DEFAULT_VALUE_TYPE)
    p.add_argument(
        "--closed",
        action="store_true",
        help="Convert merged ranges that exclude their end to closed ranges",
    )
    p.add_argument(
        "--delta",
        default=None,
        help="Step removed from an excluded end by --closed "
             "(number for int/float, e.g. '1s' for time; default: 1 / 1s)",
    )
    p.add_argument("--png", action="store_true", help="Also plot input vs merged ranges")
    return p.parse_args()


# --------------------------------------------------
# plotting
# --------------------------------------------------
def _to_axis(value):
    if isinstance(value, pd.Timestamp):
        return mdates.date2num(value.to_pydatetime())
    return float(value)


def _axis_extent(ranges):
    """
    Finite [lo, hi] covering every present bound, padded so unbounded sides show.
    """
    bounds = np.array(
        [_to_axis(v) for r in ranges for v in (r.begin, r.end) if v is not None],
        dtype=float,
    )
    if bounds.size == 0:
        return 0.0, 1.0
    lo, hi = bounds.min(), bounds.max()
    pad = (hi - lo) * UNBOUNDED_PAD_FRACTION or 1.0
    return lo - pad, hi + pad


def _bars(ranges, lo, hi):
    bars = []
    for r in ranges:
        s = lo if r.begin is None else _to_axis(r.begin)
        e = hi if r.end is None else _to_axis(r.end)
        bars.append((s, e - s))
    return bars


def plot_ranges(out_prefix, ranges, merged, is_time):
    out_png = f"{out_prefix}.merged.png"
    lo, hi = _axis_extent(ranges)

    fig, ax = plt.subplots(figsize=(7, 0.4 * (len(ranges) + len(merged)) + 1.5))

    y = 0
    for s, w in _bars(merged, lo, hi):
        ax.broken_barh([(s, w)], (y, 0.8), color="tab:orange")
        y += 1
    y_split = y
    for s, w in _bars(ranges, lo, hi):
        ax.broken_barh([(s, w)], (y, 0.8), color="tab:blue")
        y += 1

    ax.axhline(y_split - 0.1, linestyle="--", color="black", linewidth=0.8)
    ax.set_yticks([y_split / 2, y_split + (y - y_split) / 2])
    ax.set_yticklabels(["merged", "input"])
    ax.set_xlim(lo, hi)
    if is_time:
        ax.xaxis_date()
        fig.autofmt_xdate()
    ax.set_title(f"Range merge: {len(ranges)} -> {len(merged)}")
    fig.tight_layout()
    fig.savefig(out_png, dpi=200)
    plt.close(fig)

    return out_png


# --------------------------------------------------
# main
# --------------------------------------------------
def main():
    args = parse_args()

    ranges = load_ranges(args.ranges, args.value_type)
    if not ranges:
        raise RuntimeError("No ranges loaded")

    merged = merge(ranges)

    if args.closed:
        delta = parse_delta(args.delta, args.value_type)
        merged, dropped = close_ranges(merged, delta)
        for r in dropped:
            print(f"[range_merge] dropped {r}: empty once closed", file=sys.stderr)

    out_tsv = f"{args.out_prefix}.merged.tsv"
    write_ranges(merged, out_tsv)

    print(
        f"[range_merge] input={len(ranges)}, merged={len(merged)}, written {out_tsv}",
        file=sys.stderr,
    )

    if args.png:
        png = plot_ranges(args.out_prefix, ranges, merged, args.value_type == "time")
        print(f"[range_merge] written {png}", file=sys.stderr)


if __name__ == "__main__":
    main()
