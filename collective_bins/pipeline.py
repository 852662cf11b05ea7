from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from collective_bins.bins import bins_from_file, files_exist, load_bins, parse_thresholds, save_bins
from collective_bins.counts.notation import compress_int_list
from collective_bins.errors import ConfigurationError
from collective_bins.report import plot_bins, write_summary_csv
from collective_bins.types import Bin

logger = logging.getLogger(__name__)

REQUIRED_KEYS = ["counts_file", "job_id", "comm_id", "rank", "bins"]


@dataclass
class BinsJob:
    counts_file: Path
    job_id: int
    comm_id: int
    rank: int
    thresholds: List[int]
    output_dir: str = ""
    strict: bool = False
    force: bool = False
    summary: bool = False
    plot: bool = False

    @property
    def scope(self) -> str:
        return f"job{self.job_id}.comm{self.comm_id}.rank{self.rank}"


@dataclass
class BinsRunResult:
    job: BinsJob
    bins: List[Bin]
    skipped: bool
    written: List[Path] = field(default_factory=list)
    summary_csv: Optional[Path] = None
    plot_png: Optional[Path] = None


def load_config(path: str | Path) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def thresholds_from_value(value: Any) -> List[int]:
    if isinstance(value, (list, tuple)):
        value = ",".join(str(v) for v in value)
    return parse_thresholds(str(value) if value is not None else "")


def job_from_config(cfg: Mapping[str, Any], overrides: Mapping[str, Any] | None = None) -> BinsJob:
    merged: Dict[str, Any] = dict(cfg)
    if overrides:
        merged.update({k: v for k, v in overrides.items() if v is not None})

    missing = [k for k in REQUIRED_KEYS if merged.get(k) in (None, "")]
    if missing:
        raise ConfigurationError(f"missing required settings: {', '.join(missing)}")

    try:
        job_id, comm_id, rank = int(merged["job_id"]), int(merged["comm_id"]), int(merged["rank"])
    except (TypeError, ValueError) as err:
        raise ConfigurationError(f"job_id, comm_id and rank must be integers: {err}") from err

    return BinsJob(
        counts_file=Path(merged["counts_file"]),
        job_id=job_id,
        comm_id=comm_id,
        rank=rank,
        thresholds=thresholds_from_value(merged["bins"]),
        output_dir=str(merged.get("output_dir") or ""),
        strict=bool(merged.get("strict", False)),
        force=bool(merged.get("force", False)),
        summary=bool(merged.get("summary", False)),
        plot=bool(merged.get("plot", False)),
    )


def run_job(job: BinsJob) -> BinsRunResult:
    out_dir = Path(job.output_dir) if job.output_dir else Path(".")
    if job.output_dir:
        out_dir.mkdir(parents=True, exist_ok=True)

    if not job.force and files_exist(job.output_dir, job.job_id, job.comm_id, job.rank, job.thresholds):
        logger.info("Bins for %s already exist (thresholds %s), skipping", job.scope, compress_int_list(job.thresholds))
        bins = load_bins(job.output_dir, job.job_id, job.comm_id, job.rank, job.thresholds)
        result = BinsRunResult(job=job, bins=bins, skipped=True)
    else:
        bins = bins_from_file(job.counts_file, job.thresholds, strict=job.strict)
        written = save_bins(job.output_dir, job.job_id, job.comm_id, job.rank, bins)
        result = BinsRunResult(job=job, bins=bins, skipped=False, written=written)

    if job.summary:
        result.summary_csv = write_summary_csv(bins, out_dir / f"summary.{job.scope}.csv")
    if job.plot:
        result.plot_png = plot_bins(bins, out_dir / f"bins.{job.scope}.png", title=job.scope)
    return result
