"""Compressed rank-list notation, e.g. ``"0-3,5,7-9"``."""
from __future__ import annotations

from typing import List, Sequence

__all__ = ["NotationError", "compress_int_list", "expand_rank_list"]


class NotationError(ValueError):
    pass


def _parse_non_negative(token: str, descr: str) -> int:
    try:
        n = int(token)
    except ValueError as err:
        raise NotationError(f"invalid item '{token}' in rank list '{descr}'") from err
    if n < 0:
        raise NotationError(f"negative rank {n} in rank list '{descr}'")
    return n


def expand_rank_list(descr: str) -> List[int]:
    """
    Expand a compressed rank list into explicit integers.

    Examples:
        >>> expand_rank_list("0-3,5")
        [0, 1, 2, 3, 5]
        >>> expand_rank_list("")
        []
    """
    out: List[int] = []
    text = descr.strip()
    if not text:
        return out
    for item in text.split(","):
        item = item.strip()
        if "-" in item:
            lo_s, hi_s = item.split("-", 1)
            lo = _parse_non_negative(lo_s.strip(), descr)
            hi = _parse_non_negative(hi_s.strip(), descr)
            if hi < lo:
                raise NotationError(f"invalid range '{item}' in rank list '{descr}'")
            out.extend(range(lo, hi + 1))
        else:
            out.append(_parse_non_negative(item, descr))
    return out


def compress_int_list(values: Sequence[int]) -> str:
    uniq = sorted(set(int(v) for v in values))
    if not uniq:
        return ""
    parts: List[str] = []
    start = prev = uniq[0]
    for v in uniq[1:]:
        if v == prev + 1:
            prev = v
            continue
        parts.append(str(start) if start == prev else f"{start}-{prev}")
        start = prev = v
    parts.append(str(start) if start == prev else f"{start}-{prev}")
    return ",".join(parts)
