from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence

from collective_bins.bins.boundaries import create_bins
from collective_bins.errors import BinsIOError, CountsFormatError
from collective_bins.types import Bin

logger = logging.getLogger(__name__)


def output_filename(job_id: int, comm_id: int, rank: int, b: Bin) -> str:
    return f"bin.job{job_id}.comm{comm_id}.rank{rank}_{b.label}.txt"


def output_path(output_dir: str | Path | None, job_id: int, comm_id: int, rank: int, b: Bin) -> Path:
    name = output_filename(job_id, comm_id, rank, b)
    if not output_dir:
        return Path(name)
    return Path(output_dir) / name


def files_exist(output_dir: str | Path | None, job_id: int, comm_id: int, rank: int, thresholds: Sequence[int]) -> bool:
    """True when every bin file expected for ``thresholds`` is already present."""
    for b in create_bins(thresholds):
        if not output_path(output_dir, job_id, comm_id, rank, b).exists():
            return False
    return True


def save_bins(output_dir: str | Path | None, job_id: int, comm_id: int, rank: int, bins: Sequence[Bin]) -> List[Path]:
    """Write one ``<size>\\n`` file per bin, overwriting existing files."""
    written: List[Path] = []
    for b in bins:
        out = output_path(output_dir, job_id, comm_id, rank, b)
        try:
            with out.open("w", encoding="utf-8") as f:
                f.write(f"{b.size}\n")
        except OSError as err:
            raise BinsIOError(f"unable to write bin to file {out}: {err}", out) from err
        logger.info("%s successfully created", out)
        written.append(out)
    return written


def load_bins(output_dir: str | Path | None, job_id: int, comm_id: int, rank: int, thresholds: Sequence[int]) -> List[Bin]:
    bins = create_bins(thresholds)
    for b in bins:
        path = output_path(output_dir, job_id, comm_id, rank, b)
        try:
            text = path.read_text(encoding="utf-8").strip()
        except OSError as err:
            raise BinsIOError(f"unable to read {path}: {err}", path) from err
        try:
            b.size = int(text)
        except ValueError as err:
            raise CountsFormatError(f"invalid bin total '{text}' in {path}") from err
    return bins
