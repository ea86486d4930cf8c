"""Configuration for pools, collectors and report output."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

import yaml

from benchstats.collector import DEFAULT_ALL_LABEL, SampleCollector
from benchstats.logging_utils import setup_logging
from benchstats.report import export_summary_csv
from benchstats.sample import DEFAULT_LABEL_CAPACITY, SamplePool
from benchstats.stat_group import StatGroup

ENV_PREFIX = "BENCHSTATS_"


def _parse_bool(raw: str) -> bool:
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    raise ValueError(f"not a boolean: {raw!r}")


def _parse_optional_int(raw: str) -> Optional[int]:
    return None if raw.strip().lower() in {"", "none"} else int(raw)


def _parse_optional_path(raw: str) -> Optional[Path]:
    return Path(raw).expanduser() if raw.strip() else None


_ENV_PARSERS: Dict[str, Callable[[str], Any]] = {
    "label_capacity": int,
    "pool_max_size": _parse_optional_int,
    "warm_only": _parse_bool,
    "all_label": str,
    "log_level": str,
    "summary_csv": _parse_optional_path,
}


@dataclass
class StatsConfig:
    label_capacity: int = DEFAULT_LABEL_CAPACITY
    pool_max_size: Optional[int] = None
    warm_only: bool = False
    all_label: str = DEFAULT_ALL_LABEL
    log_level: str = "INFO"
    summary_csv: Optional[Path] = None

    @classmethod
    def from_yaml(cls, path: Path) -> "StatsConfig":
        data = yaml.safe_load(path.read_text()) or {}
        if not isinstance(data, dict):
            raise TypeError(f"{path}: expected a mapping at the top level, got {type(data).__name__}")
        if data.get("summary_csv"):
            data["summary_csv"] = Path(data["summary_csv"]).expanduser()
        return cls(**data)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, prefix: str = ENV_PREFIX) -> "StatsConfig":
        """Build a config from ``BENCHSTATS_*`` variables; unset ones keep defaults."""
        if environ is None:
            environ = os.environ
        values: Dict[str, Any] = {}
        for name, parse in _ENV_PARSERS.items():
            raw = environ.get(prefix + name.upper())
            if raw is not None:
                values[name] = parse(raw)
        return cls(**values)

    def build_pool(self) -> SamplePool:
        return SamplePool(label_capacity=self.label_capacity, max_size=self.pool_max_size)

    def build_collector(self, pool: Optional[SamplePool] = None) -> SampleCollector:
        if pool is None:
            pool = self.build_pool()
        return SampleCollector(pool=pool, warm_only=self.warm_only, all_label=self.all_label)

    def apply_logging(self) -> None:
        setup_logging(self.log_level)

    def export_summary(self, groups: Mapping[str, StatGroup]) -> Optional[Path]:
        """Write the summary CSV if ``summary_csv`` is set; return its path."""
        if self.summary_csv is None:
            return None
        return export_summary_csv(groups, self.summary_csv)
