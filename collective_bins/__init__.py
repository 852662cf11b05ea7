from collective_bins.types import NO_MAX, Bin, CountsHeader

__version__ = "0.1.0"

__all__ = ["Bin", "CountsHeader", "NO_MAX", "__version__"]
