#!/usr/bin/env python3
"""
Interval algebra over Range values: merge, subtract, closed-range normalization.

Ranges may be closed [s, e], half-open [s, e), beginless or endless.
Inputs are never modified; every operation returns new Range values.

Delta
-----
Subtracting a closed range [s, e] leaves a remainder that starts right after e,
and closing [s, e) needs the value right before e. What "right after/before"
means depends on the element type, so both operations take a delta:
  Fixed(step)      -> v + step / v - step  (ints, floats, datetime + timedelta)
  Transform(func)  -> func(v) in both directions
A bare value is taken as Fixed, a callable as Transform.
"""

from typing import Any, Callable, Iterable, List, NamedTuple, Tuple, Union

from range_checks import Range, begin_key, begins_before, is_endless, overlaps


class Fixed(NamedTuple):
    step: Any

    def forward(self, value):
        return value + self.step

    def backward(self, value):
        return value - self.step


class Transform(NamedTuple):
    func: Callable[[Any], Any]

    def forward(self, value):
        return self.func(value)

    def backward(self, value):
        return self.func(value)


Delta = Union[Fixed, Transform]


def as_delta(delta) -> Delta:
    if isinstance(delta, (Fixed, Transform)):
        return delta
    if callable(delta):
        return Transform(delta)
    return Fixed(delta)


# --------------------------------------------------
# merge
# --------------------------------------------------
def merge(ranges: Iterable[Range]) -> List[Range]:
    """
    Merge overlapping ranges into a sorted list of non-overlapping ranges.

    Ranges that only touch at an excluded end are kept apart:
      merge([[1, 5], [2, 6]])   -> [[1, 6]]
      merge([[1, 5], [2, +inf)]) -> [[1, +inf)]
      merge([[1, 3), [3, 5]])   -> [[1, 3), [3, 5]]
    """
    merged: List[Range] = []
    for r in sorted(ranges, key=begin_key):
        if not merged or not overlaps(r, merged[-1]):
            merged.append(r)
        else:
            merged[-1] = _union(merged[-1], r)
    return merged


def _union(a: Range, b: Range) -> Range:
    # a.begin <= b.begin and overlaps(a, b)
    return Range(a.begin, _union_end(a, b), _union_excludes_end(a, b))


def _union_end(a: Range, b: Range):
    if is_endless(a) or is_endless(b):
        return None
    return a.end if a.end > b.end else b.end


def _union_excludes_end(a: Range, b: Range) -> bool:
    if a.exclude_end and b.exclude_end:
        return True

    if is_endless(a) or is_endless(b):
        # An endless side keeps its own exclude_end only against a bounded side;
        # two endless ranges that don't both exclude give an unflagged result.
        return (a.exclude_end and is_endless(a) and not is_endless(b)) or (
            b.exclude_end and is_endless(b) and not is_endless(a)
        )

    return (a.exclude_end and b.end < a.end) or (b.exclude_end and a.end < b.end)


# --------------------------------------------------
# subtract
# --------------------------------------------------
def subtract(base: Range, to_remove: Iterable[Range], delta=1) -> List[Range]:
    """
    Remove every range in to_remove from base, returning what is left, ascending.

    Examples (delta=1):
      subtract([1, 20], [[2, 3], [4, 6], [7, 12]])  -> [[1, 2), [13, 20]]
      subtract([1, 20], [[2, 3], [4, 6), [7, 12]])  -> [[1, 2), [6, 7), [13, 20]]
      subtract([1, +inf), [[10, +inf)])             -> [[1, 10)]
      subtract([10, +inf), [[1, +inf)])             -> []
    """
    delta = as_delta(delta)
    result: List[Range] = [base]
    for r in sorted(to_remove, key=begin_key):
        if result and overlaps(result[-1], r):
            result.extend(_split(result.pop(), r, delta))
    return result


def _split(a: Range, b: Range, delta: Delta) -> List[Range]:
    """
    Subtract b from a (they overlap): zero, one or two ranges.
    """
    if a == b:
        return []

    out: List[Range] = []
    if begins_before(a, b):
        out.append(Range(a.begin, b.begin, True))

    # b runs to +inf: nothing of a survives past b.begin
    if is_endless(b):
        return out

    next_begin = b.end if b.exclude_end else delta.forward(b.end)
    if is_endless(a) or next_begin < a.end:
        out.append(Range(next_begin, a.end, a.exclude_end))
    return out


# --------------------------------------------------
# closed ranges
# --------------------------------------------------
def to_closed_range(r: Range, delta=1) -> Range:
    """
    Return r with its end included: [s, e) -> [s, delta.backward(e)].

    Closed ranges are returned as-is. An endless range has no end to move and
    just drops the exclude_end flag.
    """
    if not r.exclude_end:
        return r
    if is_endless(r):
        return Range(r.begin, None, False)
    return Range(r.begin, as_delta(delta).backward(r.end), False)


def close_ranges(ranges: Iterable[Range], delta=1) -> Tuple[List[Range], List[Range]]:
    """
    Apply to_closed_range to each range, treating ranges too narrow to close as empty.

    A half-open range narrower than delta ([1.5, 2) with delta=1) holds no value
    that survives closing; it is left out of the result.

    Returns (closed ranges, dropped input ranges).
    """
    delta = as_delta(delta)
    kept: List[Range] = []
    dropped: List[Range] = []
    for r in ranges:
        if not r.exclude_end or is_endless(r):
            kept.append(to_closed_range(r, delta))
            continue
        end = delta.backward(r.end)
        if r.begin is not None and end < r.begin:
            dropped.append(r)
        else:
            kept.append(Range(r.begin, end, False))
    return kept, dropped
