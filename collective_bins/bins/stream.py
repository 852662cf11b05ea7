from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence, TextIO

from collective_bins.bins.boundaries import create_bins
from collective_bins.bins.classify import classify_counts
from collective_bins.counts.notation import compress_int_list
from collective_bins.counts.reader import read_compact_counters, read_compact_header
from collective_bins.errors import BinsIOError, ConfigurationError
from collective_bins.types import Bin

logger = logging.getLogger(__name__)


def bins_from_reader(reader: TextIO, thresholds: Sequence[int], strict: bool = False) -> List[Bin]:
    """Classify every block of an open count file into bins built from ``thresholds``."""
    bins = create_bins(thresholds)
    logger.info("Successfully initialized %d bins", len(bins))

    n_blocks = 0
    while True:
        header = read_compact_header(reader)
        if header is None:
            break
        counters = read_compact_counters(reader)
        bins = classify_counts(counters, bins, header.num_calls, header.datatype_size, strict=strict)
        n_blocks += 1
    logger.debug("Classified %d count blocks", n_blocks)
    return bins


def bins_from_file(path: str | Path, thresholds: Sequence[int], strict: bool = False) -> List[Bin]:
    if path is None or str(path) in ("", "."):
        raise ConfigurationError(f"undefined counts file (list bins: {compress_int_list(thresholds)})")
    path = Path(path)
    logger.info("Creating bins out of values from %s", path)

    try:
        f = path.open("r", encoding="utf-8")
    except OSError as err:
        raise BinsIOError(f"unable to open {path}: {err}", path) from err
    with f:
        return bins_from_reader(f, thresholds, strict=strict)
