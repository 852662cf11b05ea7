from collective_bins.counts.notation import NotationError, compress_int_list, expand_rank_list
from collective_bins.counts.reader import iter_record_batches, read_compact_counters, read_compact_header

__all__ = [
    "NotationError",
    "compress_int_list",
    "expand_rank_list",
    "iter_record_batches",
    "read_compact_counters",
    "read_compact_header",
]
