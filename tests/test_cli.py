from __future__ import annotations

import sys

import pandas as pd
import pytest

import range_merge
import range_subtract
from range_checks import Range
from range_io import load_ranges


def run(module, monkeypatch, *argv: str) -> None:
    monkeypatch.setattr(sys, "argv", [module.__name__ + ".py", *argv])
    module.main()


@pytest.fixture
def merge_input(tmp_path):
    path = tmp_path / "ranges.tsv"
    path.write_text(
        "begin\tend\texclude_end\n"
        "10\t14\ttrue\n"
        "13\t20\ttrue\n"
        "20\t25\tfalse\n"
        "26\t\tfalse\n"
        "28\t\ttrue\n"
    )
    return str(path)


def test_range_merge_writes_merged_tsv(tmp_path, monkeypatch, capsys, merge_input) -> None:
    prefix = str(tmp_path / "sample")

    run(range_merge, monkeypatch, "--ranges", merge_input, "--value_type", "int", "--out_prefix", prefix)

    assert load_ranges(f"{prefix}.merged.tsv", "int") == [
        Range(10, 20, True),
        Range(20, 25),
        Range(26, None),
    ]
    assert "[range_merge] input=5, merged=3" in capsys.readouterr().err


def test_range_merge_closed(tmp_path, monkeypatch, merge_input) -> None:
    prefix = str(tmp_path / "sample")

    run(
        range_merge, monkeypatch,
        "--ranges", merge_input, "--value_type", "int", "--closed", "--out_prefix", prefix,
    )

    assert load_ranges(f"{prefix}.merged.tsv", "int") == [
        Range(10, 19),
        Range(20, 25),
        Range(26, None),
    ]


def test_range_merge_png(tmp_path, monkeypatch, merge_input) -> None:
    prefix = str(tmp_path / "sample")

    run(range_merge, monkeypatch, "--ranges", merge_input, "--png", "--out_prefix", prefix)

    assert (tmp_path / "sample.merged.png").stat().st_size > 0


def test_range_merge_png_time(tmp_path, monkeypatch) -> None:
    path = tmp_path / "busy.tsv"
    path.write_text(
        "begin\tend\texclude_end\n"
        "2021-01-01 09:00\t2021-01-01 10:00\ttrue\n"
        "2021-01-01 09:30\t2021-01-01 11:00\ttrue\n"
        "2021-01-01 15:00\t\tfalse\n"
    )
    prefix = str(tmp_path / "busy")

    run(
        range_merge, monkeypatch,
        "--ranges", str(path), "--value_type", "time", "--png", "--out_prefix", prefix,
    )

    df = pd.read_csv(f"{prefix}.merged.tsv", sep="\t")
    assert len(df) == 2
    assert (tmp_path / "busy.merged.png").exists()


def test_range_merge_empty_input(tmp_path, monkeypatch) -> None:
    path = tmp_path / "empty.tsv"
    path.write_text("begin\tend\texclude_end\n")

    with pytest.raises(RuntimeError, match="No ranges loaded"):
        run(range_merge, monkeypatch, "--ranges", str(path), "--out_prefix", str(tmp_path / "x"))


def test_range_subtract_writes_remaining_tsv(tmp_path, monkeypatch, capsys) -> None:
    path = tmp_path / "remove.tsv"
    path.write_text(
        "begin\tend\texclude_end\n"
        "7\t12\tfalse\n"
        "2\t3\tfalse\n"
        "4\t6\ttrue\n"
    )
    prefix = str(tmp_path / "gaps")

    run(
        range_subtract, monkeypatch,
        "--ranges", str(path), "--begin", "1", "--end", "20",
        "--value_type", "int", "--out_prefix", prefix,
    )

    assert load_ranges(f"{prefix}.subtract.tsv", "int") == [
        Range(1, 2, True),
        Range(6, 7, True),
        Range(13, 20),
    ]
    err = capsys.readouterr().err
    assert "[range_subtract] base=[1, 20], removed=3, remaining=3" in err


def test_range_subtract_endless_base_closed_output(tmp_path, monkeypatch) -> None:
    path = tmp_path / "remove.tsv"
    path.write_text("begin\tend\texclude_end\n10\t\tfalse\n")
    prefix = str(tmp_path / "gaps")

    run(
        range_subtract, monkeypatch,
        "--ranges", str(path), "--begin", "1", "--value_type", "int", "--closed", "--out_prefix", prefix,
    )

    assert load_ranges(f"{prefix}.subtract.tsv", "int") == [Range(1, 9)]


def test_range_subtract_time(tmp_path, monkeypatch) -> None:
    path = tmp_path / "meetings.tsv"
    path.write_text(
        "begin\tend\texclude_end\n"
        "2021-01-01 10:00\t2021-01-01 11:00\tfalse\n"
    )
    prefix = str(tmp_path / "free")

    run(
        range_subtract, monkeypatch,
        "--ranges", str(path),
        "--begin", "2021-01-01 09:00", "--end", "2021-01-01 17:00",
        "--value_type", "time", "--delta", "1min", "--out_prefix", prefix,
    )

    assert load_ranges(f"{prefix}.subtract.tsv", "time") == [
        Range(pd.Timestamp("2021-01-01 09:00"), pd.Timestamp("2021-01-01 10:00"), True),
        Range(pd.Timestamp("2021-01-01 11:01"), pd.Timestamp("2021-01-01 17:00")),
    ]


def test_range_subtract_closed_drops_remainder_narrower_than_delta(tmp_path, monkeypatch, capsys) -> None:
    path = tmp_path / "remove.tsv"
    path.write_text("begin\tend\texclude_end\n2\t3\tfalse\n")
    prefix = str(tmp_path / "gaps")

    run(
        range_subtract, monkeypatch,
        "--ranges", str(path), "--begin", "1.5", "--end", "20", "--closed", "--out_prefix", prefix,
    )

    assert load_ranges(f"{prefix}.subtract.tsv", "float") == [Range(4.0, 20.0)]
    err = capsys.readouterr().err
    assert "[range_subtract] dropped [1.5, 2.0): empty once closed" in err
    assert "remaining=1" in err


def test_range_merge_closed_drops_range_narrower_than_delta(tmp_path, monkeypatch, capsys) -> None:
    path = tmp_path / "ranges.tsv"
    path.write_text("begin\tend\texclude_end\n1.0\t1.1\ttrue\n3\t5\ttrue\n")
    prefix = str(tmp_path / "sample")

    run(
        range_merge, monkeypatch,
        "--ranges", str(path), "--closed", "--delta", "0.25", "--out_prefix", prefix,
    )

    assert load_ranges(f"{prefix}.merged.tsv", "float") == [Range(3.0, 4.75)]
    assert "[range_merge] dropped [1.0, 1.1): empty once closed" in capsys.readouterr().err


def test_range_subtract_empty_removals_keeps_base(tmp_path, monkeypatch, capsys) -> None:
    path = tmp_path / "meetings.tsv"
    path.write_text("begin\tend\texclude_end\n")
    prefix = str(tmp_path / "free")

    run(
        range_subtract, monkeypatch,
        "--ranges", str(path), "--begin", "9", "--end", "17", "--value_type", "int", "--out_prefix", prefix,
    )

    assert load_ranges(f"{prefix}.subtract.tsv", "int") == [Range(9, 17)]
    assert "removed=0, remaining=1" in capsys.readouterr().err
