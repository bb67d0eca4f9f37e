#!/usr/bin/env python3
"""
TSV I/O for ranges.

Format (tab-separated, with header):
  begin <tab> end <tab> exclude_end
- empty begin/end = unbounded on that side
- exclude_end: true/false, 1/0, yes/no (empty = false)
- extra columns are ignored
"""

from typing import List, Optional

import pandas as pd

from range_checks import Range

VALUE_TYPES = ("int", "float", "time")

DEFAULT_DELTAS = {
    "int": "1",
    "float": "1",
    "time": "1s",
}

REQUIRED_COLS = ("begin", "end")

_TRUE = {"true", "t", "1", "yes", "y"}
_FALSE = {"false", "f", "0", "no", "n", ""}


def _is_blank(cell) -> bool:
    return cell is None or pd.isna(cell) or str(cell).strip() == ""


def parse_bound(cell, value_type: str):
    """
    Convert one begin/end cell; blank -> None (unbounded).
    """
    if value_type not in VALUE_TYPES:
        raise ValueError(f"value_type must be one of {VALUE_TYPES}, got {value_type!r}")
    if _is_blank(cell):
        return None

    text = str(cell).strip()
    if value_type == "int":
        if "." not in text:
            return int(text)
        # pandas writes int columns with missing cells as floats ("4.0")
        value = float(text)
        if not value.is_integer():
            raise ValueError(f"int bound must be integral, got {cell!r}")
        return int(value)
    if value_type == "float":
        return float(text)
    return pd.Timestamp(text)


def parse_flag(cell) -> bool:
    if _is_blank(cell):
        return False
    text = str(cell).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"exclude_end must be a boolean, got {cell!r}")


def parse_delta(text: Optional[str], value_type: str):
    """
    Fixed step for the given value type: number for int/float, Timedelta for time.
    """
    if value_type not in VALUE_TYPES:
        raise ValueError(f"value_type must be one of {VALUE_TYPES}, got {value_type!r}")
    if text is None:
        text = DEFAULT_DELTAS[value_type]

    if value_type == "int":
        return int(text)
    if value_type == "float":
        return float(text)
    return pd.Timedelta(text)


def load_ranges(path: str, value_type: str = "float") -> List[Range]:
    df = pd.read_csv(path, sep="\t", dtype=str, keep_default_na=False)

    missing = [c for c in REQUIRED_COLS if c not in df.columns]
    if missing:
        raise ValueError(
            f"range file {path} must contain columns {list(REQUIRED_COLS)}, "
            f"found {list(df.columns)}"
        )
    flags = df["exclude_end"] if "exclude_end" in df.columns else [""] * len(df)

    return [
        Range(parse_bound(b, value_type), parse_bound(e, value_type), parse_flag(x))
        for b, e, x in zip(df["begin"], df["end"], flags)
    ]


def ranges_to_frame(ranges: List[Range]) -> pd.DataFrame:
    return pd.DataFrame(
        [(r.begin, r.end, r.exclude_end, str(r)) for r in ranges],
        columns=["begin", "end", "exclude_end", "range"],
    )


def write_ranges(ranges: List[Range], path: str) -> pd.DataFrame:
    df = ranges_to_frame(ranges)
    df.to_csv(path, sep="\t", index=False)
    return df
