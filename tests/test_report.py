"""Tests for benchstats.report."""

import io

import pandas as pd
import pytest

from benchstats.errors import EmptyStatGroupError, ReportWriteError
from benchstats.report import (
    export_summary_csv,
    format_stat_group_map,
    summary_frame,
    write_stat_group_map,
)
from benchstats.stat_group import StatGroup


def _group(*values) -> StatGroup:
    g = StatGroup()
    g.push_many(values)
    return g


class _FailingStream:
    """Accepts *ok_writes* writes, then fails like a closed pipe."""

    def __init__(self, ok_writes: int):
        self.ok_writes = ok_writes
        self.written = []

    def write(self, text):
        if len(self.written) >= self.ok_writes:
            raise BrokenPipeError(32, "Broken pipe")
        self.written.append(text)
        return len(text)


# ---------------------------------------------------------------------------
# write_stat_group_map
# ---------------------------------------------------------------------------


def test_labels_sorted_and_padded():
    groups = {"b": _group(1, 2, 3), "a": _group(2, 4, 6)}
    assert groups["b"].std_dev == 1
    assert groups["a"].std_dev == 2
    lines = format_stat_group_map(groups).splitlines()
    assert lines == ["a:", groups["a"].render(), "b:", groups["b"].render()]


def test_labels_padded_to_longest():
    groups = {"select": _group(1), "a": _group(2), "insert": _group(3)}
    lines = format_stat_group_map(groups).splitlines()
    assert lines[0::2] == ["a     :", "insert:", "select:"]


def test_order_independent_of_insertion():
    first = {"z": _group(1), "m": _group(2), "a": _group(3)}
    second = dict(reversed(list(first.items())))
    assert format_stat_group_map(first) == format_stat_group_map(second)


def test_empty_map_writes_nothing():
    out = io.StringIO()
    write_stat_group_map(out, {})
    assert out.getvalue() == ""


def test_label_write_failure_stops_rendering():
    stream = _FailingStream(ok_writes=2)
    groups = {"a": _group(1), "b": _group(2), "c": _group(3)}
    with pytest.raises(ReportWriteError) as exc_info:
        write_stat_group_map(stream, groups)
    assert isinstance(exc_info.value.__cause__, BrokenPipeError)
    assert stream.written == ["a:\n", groups["a"].render() + "\n"]


def test_summary_write_failure_propagates():
    stream = _FailingStream(ok_writes=1)
    with pytest.raises(ReportWriteError):
        write_stat_group_map(stream, {"a": _group(1), "b": _group(2)})
    assert stream.written == ["a:\n"]


def test_empty_group_in_map_raises():
    with pytest.raises(EmptyStatGroupError):
        format_stat_group_map({"a": StatGroup()})


# ---------------------------------------------------------------------------
# summary_frame / export_summary_csv
# ---------------------------------------------------------------------------


def test_summary_frame_rows_sorted():
    df = summary_frame({"write": _group(10, 20, 30), "read": _group(5)})
    assert list(df.columns) == ["label", "min", "max", "mean", "sum", "count", "std_dev"]
    assert list(df["label"]) == ["read", "write"]
    write_row = df.set_index("label").loc["write"]
    assert write_row["mean"] == 20
    assert write_row["std_dev"] == 10
    assert write_row["count"] == 3


def test_summary_frame_empty():
    df = summary_frame({})
    assert df.empty
    assert "label" in df.columns


def test_export_summary_csv(tmp_path):
    path = tmp_path / "nested" / "summary.csv"
    result = export_summary_csv({"read": _group(1, 3)}, path)
    assert result == path
    df = pd.read_csv(path)
    assert list(df["label"]) == ["read"]
    assert df.loc[0, "sum"] == 4
    assert df.loc[0, "count"] == 2
