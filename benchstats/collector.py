"""Route samples from a benchmark run into per-label StatGroups."""
from __future__ import annotations

import logging
from typing import Dict, Optional, TextIO

from benchstats.report import write_stat_group_map
from benchstats.sample import Sample, SamplePool
from benchstats.stat_group import StatGroup

logger = logging.getLogger(__name__)

DEFAULT_ALL_LABEL = "all queries"


class SampleCollector:
    """Consume samples, aggregate them by label and recycle them.

    Every accepted value lands in its own label's group and in the
    ``all_label`` group.  A collector is single-consumer: give each worker
    thread its own and combine them with :meth:`merge` once they finish.
    """

    def __init__(
        self,
        pool: Optional[SamplePool] = None,
        warm_only: bool = False,
        all_label: str = DEFAULT_ALL_LABEL,
    ) -> None:
        self.pool = pool
        self.warm_only = warm_only
        self.all_label = all_label
        self.groups: Dict[str, StatGroup] = {}
        self.skipped = 0

    def process(self, sample: Sample) -> None:
        try:
            if self.warm_only and not sample.is_warm:
                self.skipped += 1
                return
            self._group(sample.label_text).push(sample.value)
            self._group(self.all_label).push(sample.value)
        finally:
            if self.pool is not None:
                self.pool.release(sample)

    def merge(self, other: "SampleCollector") -> None:
        for label, group in other.groups.items():
            self._group(label).merge(group)
        self.skipped += other.skipped

    def write_report(self, stream: TextIO) -> None:
        write_stat_group_map(stream, self.groups)

    def _group(self, label: str) -> StatGroup:
        group = self.groups.get(label)
        if group is None:
            logger.debug("New stat group %r", label)
            group = self.groups[label] = StatGroup()
        return group
