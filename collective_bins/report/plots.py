from __future__ import annotations

from pathlib import Path
from typing import Sequence

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt

from collective_bins.types import Bin


def plot_bins(bins: Sequence[Bin], out_path: Path, title: str = "") -> Path:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    labels = [b.label for b in bins]
    sizes = [b.size for b in bins]

    plt.figure(figsize=(6, 4))
    plt.bar(range(len(bins)), sizes)
    plt.xticks(range(len(bins)), labels, rotation=30, ha="right")
    plt.xlabel("Message size (bytes)")
    plt.ylabel("# Occurrences")
    if title:
        plt.title(title)
    plt.grid(axis="y", alpha=0.3)
    plt.tight_layout()
    plt.savefig(out_path, dpi=160)
    plt.close()
    return out_path
