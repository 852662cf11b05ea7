import io
from pathlib import Path

import pytest

from collective_bins.bins import bins_from_file, bins_from_reader
from collective_bins.errors import BinsIOError, ConfigurationError, CountDecodeError, CountsFormatError, NoMatchingBinError
from collective_bins.types import NO_MAX, Bin

COUNTS = """# Raw counters

Number of ranks: 4
Datatype size: 1
Alltoallv calls 0
Count: 1 calls - 0

BEGINNING DATA
Rank(s) 0-3: 50 150 2000
END DATA

# Raw counters

Number of ranks: 4
Datatype size: 4
Alltoallv calls 1-2
Count: 2 calls - 1-2

BEGINNING DATA
Rank(s) 0,2: 10 30
Rank(s) 1,3: 500 0
END DATA
"""


def test_accumulates_over_every_block() -> None:
    bins = bins_from_reader(io.StringIO(COUNTS), [100, 1000])
    # block 1: weight 4 -> [4, 4, 4]
    # block 2: weight 2*2; 40 -> bin0, 120 -> bin1, 2000 -> bin2, 0 -> bin0
    assert [b.size for b in bins] == [12, 8, 8]


def test_empty_stream_gives_zero_bins() -> None:
    bins = bins_from_reader(io.StringIO(""), [100])
    assert [b.size for b in bins] == [0, 0]


def test_read_error_propagates() -> None:
    broken = COUNTS[: COUNTS.rindex("END DATA")]
    with pytest.raises(CountsFormatError):
        bins_from_reader(io.StringIO(broken), [100, 1000])


def test_zero_datatype_size_block_aborts() -> None:
    bad = COUNTS.replace("Datatype size: 4", "Datatype size: 0")
    with pytest.raises(ConfigurationError):
        bins_from_reader(io.StringIO(bad), [100, 1000])


def test_bins_from_file(tmp_path: Path) -> None:
    path = tmp_path / "counts.rank0.txt"
    path.write_text(COUNTS, encoding="utf-8")
    bins = bins_from_file(path, [100, 1000])
    assert [b.size for b in bins] == [12, 8, 8]


def test_bins_from_missing_file(tmp_path: Path) -> None:
    missing = tmp_path / "nope.txt"
    with pytest.raises(BinsIOError) as exc:
        bins_from_file(missing, [100])
    assert exc.value.path == missing


def test_bins_from_file_requires_path() -> None:
    with pytest.raises(ConfigurationError, match="100,1000"):
        bins_from_file("", [100, 1000])


def test_bins_from_file_rejects_empty_path_object() -> None:
    with pytest.raises(ConfigurationError):
        bins_from_file(Path(""), [100])


def test_decode_error_mid_stream_propagates() -> None:
    bad = COUNTS.replace("Rank(s) 1,3: 500 0", "Rank(s) 0: abc")
    with pytest.raises(CountDecodeError):
        bins_from_reader(io.StringIO(bad), [100, 1000])


def test_strict_unmatched_value_mid_stream_propagates(monkeypatch) -> None:
    monkeypatch.setattr("collective_bins.bins.stream.create_bins", lambda thresholds: [Bin(0, 100), Bin(200, NO_MAX)])
    with pytest.raises(NoMatchingBinError) as exc:
        bins_from_reader(io.StringIO(COUNTS), [100, 200], strict=True)
    assert exc.value.value == 150
