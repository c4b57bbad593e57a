#!/usr/bin/env python
"""A standalone script to benchmark RingDeque against built-in containers.

Reads the `[benchmark]` and `[general]` tables of the user configuration
(see `ringdeque.config`), times every workload against every subject, and
prints a report table.

Point RINGDEQUE_CONFIG at a TOML file to use settings other than the
per-user defaults.

Usage:
    python scripts/run_benchmark.py
"""

import sys
from pathlib import Path

from loguru import logger

from ringdeque.benchmark import run_benchmark
from ringdeque.config import Settings
from ringdeque.logging_config import setup_logging


def main() -> int:
    """Runs the benchmark and prints the report.

    Returns:
        0 on success, 1 if the configured benchmark parameters are invalid.
    """
    settings = Settings.get_instance()
    setup_logging(
        console_level=settings.general.log_level_console,
        file_level=settings.general.log_level_file,
        log_dir=Path(settings.general.log_directory).expanduser(),
    )

    print("--- RingDeque Benchmark ---")
    print(
        f"{settings.benchmark.operations} operations x "
        f"{settings.benchmark.rounds} rounds per subject and workload."
    )
    print("-" * 27)

    try:
        report = run_benchmark(settings.benchmark)
    except ValueError as e:
        logger.error(f"Invalid benchmark settings: {e}")
        return 1

    print(report.to_string(index=False, float_format=lambda v: f"{v:.1f}"))
    print("-" * 27)
    print("Benchmark completed successfully.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
