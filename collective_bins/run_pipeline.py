#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

os.environ.setdefault("MPLCONFIGDIR", "/tmp/mplconfig")

from collective_bins.errors import BinsError
from collective_bins.pipeline import job_from_config, load_config, run_job


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Classify profiler message-size counts into bins")
    p.add_argument(
        "--config",
        type=str,
        default=str(Path(__file__).with_name("config.yaml")),
        help="Path to YAML config",
    )
    p.add_argument("--counts-file", type=str, default=None, help="Compact count file to classify")
    p.add_argument("--job-id", type=int, default=None)
    p.add_argument("--comm-id", type=int, default=None)
    p.add_argument("--rank", type=int, default=None)
    p.add_argument("--bins", type=str, default=None, help="Comma-separated thresholds, e.g. 1024,65536")
    p.add_argument("--output-dir", type=str, default=None, help="Where to write bin files")
    p.add_argument("--strict", action="store_true", default=None, help="Fail on values matching no bin")
    p.add_argument("--force", action="store_true", default=None, help="Recompute even if bin files exist")
    p.add_argument("--summary", action="store_true", default=None, help="Also write a summary CSV")
    p.add_argument("--plot", action="store_true", default=None, help="Also write a bar plot of the bins")
    p.add_argument("--log", default=None, help="Optional path for a processing log file.")
    return p.parse_args(argv)


HANDLER_PREFIX = "collective_bins."


def setup_logging(log_path: str | None) -> None:
    logger = logging.getLogger()
    logger.setLevel(logging.INFO)
    # repeated calls replace the handlers installed by a previous call
    for h in [h for h in logger.handlers if (h.get_name() or "").startswith(HANDLER_PREFIX)]:
        logger.removeHandler(h)
        h.close()
    fmt = logging.Formatter(fmt="%(asctime)s %(levelname)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S")

    ch = logging.StreamHandler()
    ch.set_name(HANDLER_PREFIX + "console")
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    if log_path:
        os.makedirs(os.path.dirname(os.path.abspath(log_path)), exist_ok=True)
        fh = logging.FileHandler(log_path)
        fh.set_name(HANDLER_PREFIX + "file")
        fh.setFormatter(fmt)
        logger.addHandler(fh)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log)

    cfg = load_config(args.config) if os.path.isfile(args.config) else {}
    overrides = {
        "counts_file": args.counts_file,
        "job_id": args.job_id,
        "comm_id": args.comm_id,
        "rank": args.rank,
        "bins": args.bins,
        "output_dir": args.output_dir,
        "strict": args.strict,
        "force": args.force,
        "summary": args.summary,
        "plot": args.plot,
    }
    try:
        job = job_from_config(cfg, overrides)
        res = run_job(job)
    except BinsError as err:
        logging.error("%s", err)
        return 1

    state = "skipped (existing files)" if res.skipped else f"{len(res.written)} files written"
    print(f"Scope {job.scope}: {state}")
    for b in res.bins:
        print(f"  {b.label:>20} {b.size}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
