from collective_bins.bins.boundaries import create_bins, is_partition, parse_thresholds
from collective_bins.bins.classify import BinLookup, classify_counts, find_bin, parse_count_line
from collective_bins.bins.stream import bins_from_file, bins_from_reader
from collective_bins.bins.writer import files_exist, load_bins, output_filename, output_path, save_bins

__all__ = [
    "BinLookup",
    "bins_from_file",
    "bins_from_reader",
    "classify_counts",
    "create_bins",
    "files_exist",
    "find_bin",
    "is_partition",
    "load_bins",
    "output_filename",
    "output_path",
    "parse_count_line",
    "parse_thresholds",
    "save_bins",
]
