from __future__ import annotations

from typing import List, Sequence

from collective_bins.errors import ConfigurationError, ThresholdParseError
from collective_bins.types import NO_MAX, Bin


def parse_thresholds(text: str) -> List[int]:
    """Parse a comma-separated threshold list such as ``"1024,65536"``."""
    if text is None or not str(text).strip():
        raise ThresholdParseError("unable to get array of thresholds for bins: empty description")
    out: List[int] = []
    for token in str(text).split(","):
        try:
            out.append(int(token.strip()))
        except ValueError as err:
            raise ThresholdParseError(f"unable to get array of thresholds for bins: invalid threshold '{token}'") from err
    return out


def create_bins(thresholds: Sequence[int]) -> List[Bin]:
    # Ordering is the caller's business: non-increasing thresholds give empty or overlapping bins.
    if len(thresholds) == 0:
        raise ConfigurationError("at least one threshold is required to create bins")
    edges = [0] + [int(t) for t in thresholds] + [NO_MAX]
    return [Bin(min=edges[i], max=edges[i + 1]) for i in range(len(thresholds) + 1)]


def is_partition(bins: Sequence[Bin]) -> bool:
    if not bins or bins[0].min != 0 or not bins[-1].is_unbounded:
        return False
    for cur, nxt in zip(bins, bins[1:]):
        if cur.is_unbounded or cur.max <= cur.min or cur.max != nxt.min:
            return False
    return True
