"""
Classification of raw count lines into bins.

Each count line looks like ``"Rank(s) 0-3: 50 150 2000"``: every value is
scaled by the datatype size and the matching bin is credited once per call
and per rank sharing the line. Bin totals are occurrence counts, not bytes.
"""
from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from collective_bins.bins.boundaries import is_partition
from collective_bins.counts.notation import NotationError, expand_rank_list
from collective_bins.errors import ConfigurationError, CountDecodeError, NoMatchingBinError
from collective_bins.types import Bin

RANKS_PREFIX = "Rank(s) "
INT64_MIN = int(np.iinfo(np.int64).min)
INT64_MAX = int(np.iinfo(np.int64).max)
COUNTS_DELIMITER = ": "


def parse_count_line(line: str) -> Tuple[List[int], List[int]]:
    """Split a count line into its rank list and its raw count values."""
    if COUNTS_DELIMITER not in line:
        raise CountDecodeError(f"missing '{COUNTS_DELIMITER}' delimiter in count line '{line.rstrip()}'")
    ranks_descr, counts_str = line.split(COUNTS_DELIMITER, 1)
    if ranks_descr.startswith(RANKS_PREFIX):
        ranks_descr = ranks_descr[len(RANKS_PREFIX):]

    try:
        ranks = expand_rank_list(ranks_descr)
    except NotationError as err:
        raise CountDecodeError(f"unable to decode rank list '{ranks_descr}'") from err
    if len(ranks) == 0:
        raise CountDecodeError(f"invalid number of ranks: {len(ranks)}")

    values: List[int] = []
    for token in counts_str.rstrip("\r\n").split(" "):
        if token == "":
            continue
        try:
            values.append(int(token))
        except ValueError as err:
            raise CountDecodeError(f"invalid count '{token}' for ranks '{ranks_descr}'") from err
        if not INT64_MIN <= values[-1] <= INT64_MAX:
            raise CountDecodeError(f"count '{token}' out of range for ranks '{ranks_descr}'")
    return ranks, values


def find_bin(bins: Sequence[Bin], val: int) -> int:
    """Index of the first bin containing ``val``, or -1."""
    for i, b in enumerate(bins):
        if b.contains(val):
            return i
    return -1


class BinLookup:
    """Maps scaled values to bin indices, -1 meaning no match."""

    def __init__(self, bins: Sequence[Bin]) -> None:
        self.bins = bins
        self.partitioned = is_partition(bins)
        self.edges = np.array([b.max for b in bins[:-1]], dtype=np.int64)

    def indices(self, values: Sequence[int]) -> np.ndarray:
        if self.partitioned:
            # scaled values may exceed int64; anything past the last edge lands in the open bin
            arr = np.array([min(max(int(v), -1), INT64_MAX) for v in values], dtype=np.int64)
            idx = np.searchsorted(self.edges, arr, side="right").astype(np.int64)
            idx[arr < 0] = -1
            return idx
        return np.array([find_bin(self.bins, int(v)) for v in values], dtype=np.int64)


def classify_counts(
    counts: Sequence[str],
    bins: List[Bin],
    num_calls: int,
    datatype_size: int,
    strict: bool = False,
) -> List[Bin]:
    if num_calls == 0:
        raise ConfigurationError(f"invalid number of calls ({num_calls})")
    if datatype_size == 0:
        raise ConfigurationError(f"invalid datatype size ({datatype_size})")

    lookup = BinLookup(bins)
    for line in counts:
        ranks, values = parse_count_line(line)
        scaled = [v * datatype_size for v in values]
        idx = lookup.indices(scaled)

        missed = idx < 0
        if strict and missed.any():
            raise NoMatchingBinError(scaled[int(np.argmax(missed))])

        weight = num_calls * len(ranks)
        hits = np.bincount(idx[~missed], minlength=len(bins))
        for i, n in enumerate(hits):
            if n:
                bins[i].size += int(n) * weight
    return bins
