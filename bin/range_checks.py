#!/usr/bin/env python3
"""
Range value type and the predicates shared by merge/subtract.

Conventions:
- A range is [begin, end] or [begin, end) depending on exclude_end.
- begin=None means beginless (no lower bound), end=None means endless.
- A missing begin sorts and compares below every bound.
"""

from dataclasses import dataclass
from typing import Any, Optional


class InvalidRangeError(ValueError):
    """Raised for a range whose begin is greater than its end."""


@dataclass(frozen=True)
class Range:
    begin: Optional[Any]
    end: Optional[Any]
    exclude_end: bool = False

    def __post_init__(self):
        if self.begin is not None and self.end is not None and self.begin > self.end:
            raise InvalidRangeError(
                f"begin must not be greater than end, got begin={self.begin!r} end={self.end!r}"
            )

    def __str__(self):
        lo = "(-inf" if self.begin is None else f"[{self.begin}"
        if self.end is None:
            hi = "+inf)"
        else:
            hi = f"{self.end})" if self.exclude_end else f"{self.end}]"
        return f"{lo}, {hi}"

    def __contains__(self, value):
        if self.begin is not None and value < self.begin:
            return False
        if self.end is None:
            return True
        return value < self.end if self.exclude_end else value <= self.end


def is_endless(r: Range) -> bool:
    return r.end is None


def is_beginless(r: Range) -> bool:
    return r.begin is None


def begin_key(r: Range):
    """
    Sort key ordering ranges by begin, beginless first.
    """
    return (r.begin is not None, r.begin)


def begins_before(a: Range, b: Range) -> bool:
    """
    True when a.begin < b.begin, treating a missing begin as -inf.
    """
    if b.begin is None:
        return False
    return a.begin is None or a.begin < b.begin


def _begin_le(value, bound) -> bool:
    # value is a begin (None = -inf), bound is a present end
    return value is None or value <= bound


def overlaps(a: Range, b: Range) -> bool:
    """
    Check whether a and b share at least one point.

    Examples:
      [1, 4] and [2, 6] -> True
      [1, 4] and [5, 7] -> False
      [1, 3) and [3, 5] -> False (3 is excluded from the first)
    """
    if a == b:
        return True

    if is_endless(a) or is_endless(b):
        return _endless_range_overlaps(a, b)

    if a.end == b.begin or b.end == a.begin:
        # touching ranges only overlap through an included end point
        return (a.end == b.begin and not a.exclude_end) or (
            b.end == a.begin and not b.exclude_end
        )

    return _begin_le(a.begin, b.end) and _begin_le(b.begin, a.end)


def _endless_range_overlaps(a: Range, b: Range) -> bool:
    # at least one of a, b is endless
    if is_endless(a) and is_endless(b):
        return True
    if is_endless(a):
        return _begin_le(a.begin, b.end) and not b.exclude_end
    return _begin_le(b.begin, a.end) and not a.exclude_end
