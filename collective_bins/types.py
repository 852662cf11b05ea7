from __future__ import annotations

from dataclasses import dataclass
from typing import List

# Upper bound of the last bin: no max.
NO_MAX = -1


@dataclass
class Bin:
    min: int
    max: int
    size: int = 0

    @property
    def is_unbounded(self) -> bool:
        return self.max == NO_MAX

    @property
    def label(self) -> str:
        if self.is_unbounded:
            return f"{self.min}+"
        return f"{self.min}-{self.max}"

    def contains(self, val: int) -> bool:
        if self.is_unbounded:
            return val >= self.min
        return self.min <= val < self.max


@dataclass(frozen=True)
class CountsHeader:
    num_ranks: int
    datatype_size: int
    call_ids: List[int]

    @property
    def num_calls(self) -> int:
        return len(self.call_ids)
