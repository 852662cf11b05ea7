from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pandas as pd

from collective_bins.types import Bin

COLUMNS = ["min", "max", "label", "size", "fraction"]


def bins_to_frame(bins: Sequence[Bin]) -> pd.DataFrame:
    df = pd.DataFrame(
        {
            "min": [b.min for b in bins],
            "max": [b.max for b in bins],
            "label": [b.label for b in bins],
            "size": [b.size for b in bins],
        }
    )
    total = df["size"].sum()
    df["fraction"] = df["size"] / total if total > 0 else 0.0
    return df[COLUMNS]


def write_summary_csv(bins: Sequence[Bin], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    bins_to_frame(bins).to_csv(path, index=False)
    return path
