"""
Reader for compact count files written by the collective profiler.

A count file is a sequence of blocks::

    # Raw counters

    Number of ranks: 4
    Datatype size: 8
    Alltoallv calls 0-2,5
    Count: 4 calls - 0-2,5

    BEGINNING DATA
    Rank(s) 0-1,3: 10 0 250
    Rank(s) 2: 4 4 4
    END DATA

The header gives the datatype size and the calls the block stands for; the
data lines are returned verbatim for classification.
"""
from __future__ import annotations

import re
from typing import Iterator, List, Optional, TextIO, Tuple

from collective_bins.counts.notation import NotationError, expand_rank_list
from collective_bins.errors import CountsFormatError
from collective_bins.types import CountsHeader

BEGIN_MARKER = "BEGINNING DATA"
END_MARKER = "END DATA"

_num_ranks_re = re.compile(r"^Number of ranks:\s*(?P<val>-?\d+)\s*$")
_datatype_re = re.compile(r"^Datatype size:\s*(?P<val>-?\d+)\s*$")
_calls_re = re.compile(r"^\w+ calls\s+(?P<calls>[\d,\-\s]*)$")
_count_re = re.compile(r"^Count:\s*(?P<n>\d+)\s+calls\s*-\s*(?P<calls>[\d,\-\s]*)$")


def _calls_from(descr: str, line: str) -> List[int]:
    try:
        return expand_rank_list(descr)
    except NotationError as err:
        raise CountsFormatError(f"invalid call list in header line '{line}'") from err


def read_compact_header(reader: TextIO) -> Optional[CountsHeader]:
    """Return the next block header, or ``None`` once the stream is exhausted."""
    num_ranks: Optional[int] = None
    datatype_size: Optional[int] = None
    seen_content = False

    while True:
        raw = reader.readline()
        if raw == "":
            if seen_content:
                raise CountsFormatError("unexpected end of stream inside a counts header")
            return None
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        seen_content = True

        m = _num_ranks_re.match(line)
        if m:
            num_ranks = int(m.group("val"))
            continue
        m = _datatype_re.match(line)
        if m:
            datatype_size = int(m.group("val"))
            continue

        m = _calls_re.match(line) or _count_re.match(line)
        if m:
            if datatype_size is None:
                raise CountsFormatError(f"call list found before datatype size: '{line}'")
            return CountsHeader(
                num_ranks=num_ranks if num_ranks is not None else 0,
                datatype_size=datatype_size,
                call_ids=_calls_from(m.group("calls"), line),
            )
        raise CountsFormatError(f"unexpected line in counts header: '{line}'")


def read_compact_counters(reader: TextIO) -> List[str]:
    """Return the raw ``Rank(s) ...: ...`` lines of the current block."""
    while True:
        raw = reader.readline()
        if raw == "":
            raise CountsFormatError(f"end of stream before '{BEGIN_MARKER}'")
        line = raw.strip()
        if line == BEGIN_MARKER:
            break
        # the optional "Count: N calls - ..." line trails the call list
        if not line or line.startswith("#") or _count_re.match(line):
            continue
        raise CountsFormatError(f"expected '{BEGIN_MARKER}', got '{line}'")

    counters: List[str] = []
    while True:
        raw = reader.readline()
        if raw == "":
            raise CountsFormatError(f"end of stream before '{END_MARKER}'")
        if raw.strip() == END_MARKER:
            return counters
        if raw.strip():
            counters.append(raw)


def iter_record_batches(reader: TextIO) -> Iterator[Tuple[CountsHeader, List[str]]]:
    while True:
        header = read_compact_header(reader)
        if header is None:
            return
        yield header, read_compact_counters(reader)
