"""Render collections of named StatGroups as text, tables and CSV."""
from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Mapping, TextIO

import pandas as pd

from benchstats.errors import ReportWriteError
from benchstats.stat_group import StatGroup

logger = logging.getLogger(__name__)


def write_stat_group_map(stream: TextIO, groups: Mapping[str, StatGroup]) -> None:
    """Write one block per label, sorted by label and padded to equal width.

    Raises ReportWriteError on the first write the stream rejects; no further
    blocks are written.
    """
    labels = sorted(groups)
    width = max((len(label) for label in labels), default=0)
    logger.debug("Rendering report for %d stat groups", len(labels))
    for label in labels:
        try:
            stream.write(f"{label.ljust(width)}:\n")
        except OSError as exc:
            logger.warning("Failed to write report label %r: %s", label, exc)
            raise ReportWriteError(f"failed to write label {label!r}: {exc}") from exc
        groups[label].write(stream)


def format_stat_group_map(groups: Mapping[str, StatGroup]) -> str:
    buffer = io.StringIO()
    write_stat_group_map(buffer, groups)
    return buffer.getvalue()


def summary_frame(groups: Mapping[str, StatGroup]) -> pd.DataFrame:
    rows = [{"label": label, **groups[label].to_dict()} for label in sorted(groups)]
    return pd.DataFrame(rows, columns=["label", "min", "max", "mean", "sum", "count", "std_dev"])


def export_summary_csv(groups: Mapping[str, StatGroup], path: Path) -> Path:
    df = summary_frame(groups)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)
    logger.info("Wrote summary for %d stat groups to %s", len(df), path)
    return path
