from pathlib import Path

import pytest

from collective_bins.bins import create_bins, files_exist, load_bins, output_filename, output_path, save_bins
from collective_bins.errors import BinsIOError
from collective_bins.types import NO_MAX, Bin


def test_output_filenames() -> None:
    assert output_filename(3, 1, 2, Bin(100, 1000)) == "bin.job3.comm1.rank2_100-1000.txt"
    assert output_filename(3, 1, 2, Bin(1000, NO_MAX)) == "bin.job3.comm1.rank2_1000+.txt"


def test_output_path_defaults_to_current_dir() -> None:
    b = Bin(0, 100)
    assert output_path("", 1, 0, 0, b) == Path("bin.job1.comm0.rank0_0-100.txt")
    assert output_path("/data/out", 1, 0, 0, b) == Path("/data/out/bin.job1.comm0.rank0_0-100.txt")


def test_save_bins_writes_one_file_per_bin(tmp_path: Path) -> None:
    bins = create_bins([100, 1000])
    for b, n in zip(bins, [4, 0, 12]):
        b.size = n
    written = save_bins(tmp_path, 3, 1, 2, bins)

    assert [p.name for p in written] == [
        "bin.job3.comm1.rank2_0-100.txt",
        "bin.job3.comm1.rank2_100-1000.txt",
        "bin.job3.comm1.rank2_1000+.txt",
    ]
    assert [p.read_text(encoding="utf-8") for p in written] == ["4\n", "0\n", "12\n"]


def test_save_bins_overwrites(tmp_path: Path) -> None:
    target = tmp_path / "bin.job3.comm1.rank2_1000+.txt"
    target.write_text("999999\nstale\n", encoding="utf-8")
    bins = create_bins([100, 1000])
    save_bins(tmp_path, 3, 1, 2, bins)
    assert target.read_text(encoding="utf-8") == "0\n"


def test_save_bins_reports_path_on_failure(tmp_path: Path) -> None:
    with pytest.raises(BinsIOError) as exc:
        save_bins(tmp_path / "missing-dir", 3, 1, 2, create_bins([100]))
    assert exc.value.path == tmp_path / "missing-dir" / "bin.job3.comm1.rank2_0-100.txt"


def test_files_exist(tmp_path: Path) -> None:
    assert not files_exist(tmp_path, 3, 1, 2, [100, 1000])
    written = save_bins(tmp_path, 3, 1, 2, create_bins([100, 1000]))
    assert files_exist(tmp_path, 3, 1, 2, [100, 1000])
    assert not files_exist(tmp_path, 3, 1, 2, [100, 1000, 4096])
    assert not files_exist(tmp_path, 4, 1, 2, [100, 1000])

    written[1].unlink()
    assert not files_exist(tmp_path, 3, 1, 2, [100, 1000])


def test_load_bins_round_trip(tmp_path: Path) -> None:
    bins = create_bins([100, 1000])
    bins[2].size = 42
    save_bins(tmp_path, 0, 0, 0, bins)
    loaded = load_bins(tmp_path, 0, 0, 0, [100, 1000])
    assert loaded == bins
