from collective_bins.report.plots import plot_bins
from collective_bins.report.tables import bins_to_frame, write_summary_csv

__all__ = ["bins_to_frame", "plot_bins", "write_summary_csv"]
