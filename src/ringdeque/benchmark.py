"""Timing harness comparing RingDeque with Python's built-in containers.

Every subject is wrapped in a `DequeAdapter` exposing the same four
end operations, so a workload can drive any of them. Results are
reported per operation, in nanoseconds, as a pandas DataFrame.
"""

import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Final

import numpy as np
import pandas as pd
from loguru import logger

from ringdeque.config import BenchmarkSettings
from ringdeque.deque import RingDeque

REPORT_COLUMNS: Final[list[str]] = [
    "subject",
    "workload",
    "operations",
    "rounds",
    "mean_ns",
    "p50_ns",
    "p99_ns",
    "resizes",
]


@dataclass(frozen=True)
class DequeAdapter:
    """Uniform view over one container instance."""

    container: Any
    push_back: Callable[[Any], None]
    push_front: Callable[[Any], None]
    pop_front: Callable[[], Any]
    pop_back: Callable[[], Any]


def _ring_deque_adapter() -> DequeAdapter:
    dq: RingDeque[int] = RingDeque()
    return DequeAdapter(dq, dq.push_back, dq.push_front, dq.pop_front, dq.pop_back)


def _collections_deque_adapter() -> DequeAdapter:
    dq: deque[int] = deque()
    return DequeAdapter(dq, dq.append, dq.appendleft, dq.popleft, dq.pop)


def _list_adapter() -> DequeAdapter:
    items: list[int] = []
    return DequeAdapter(
        items,
        items.append,
        lambda value: items.insert(0, value),
        lambda: items.pop(0),
        items.pop,
    )


SUBJECTS: Final[dict[str, Callable[[], DequeAdapter]]] = {
    "ringdeque": _ring_deque_adapter,
    "collections.deque": _collections_deque_adapter,
    "list": _list_adapter,
}


def _fifo(adapter: DequeAdapter, operations: int) -> int:
    half = operations // 2
    for i in range(half):
        adapter.push_back(i)
    for _ in range(half):
        adapter.pop_front()
    return 2 * half


def _lifo(adapter: DequeAdapter, operations: int) -> int:
    half = operations // 2
    for i in range(half):
        adapter.push_back(i)
    for _ in range(half):
        adapter.pop_back()
    return 2 * half


def _mixed(adapter: DequeAdapter, operations: int) -> int:
    half = operations // 2
    for i in range(half):
        if i & 1:
            adapter.push_front(i)
        else:
            adapter.push_back(i)
    for i in range(half):
        if i & 1:
            adapter.pop_back()
        else:
            adapter.pop_front()
    return 2 * half


WORKLOADS: Final[dict[str, Callable[[DequeAdapter, int], int]]] = {
    "fifo": _fifo,
    "lifo": _lifo,
    "mixed": _mixed,
}


def _validate(settings: BenchmarkSettings) -> None:
    if not isinstance(settings.operations, int) or settings.operations < 2:
        err_msg = "Operations must be an integer of at least 2."
        raise ValueError(err_msg)
    if not isinstance(settings.rounds, int) or settings.rounds <= 0:
        err_msg = "Rounds must be a positive integer."
        raise ValueError(err_msg)
    unknown_subjects = set(settings.subjects) - SUBJECTS.keys()
    if unknown_subjects:
        err_msg = f"Unknown benchmark subjects: {sorted(unknown_subjects)}"
        raise ValueError(err_msg)
    unknown_workloads = set(settings.workloads) - WORKLOADS.keys()
    if unknown_workloads:
        err_msg = f"Unknown benchmark workloads: {sorted(unknown_workloads)}"
        raise ValueError(err_msg)


def time_workload(
    subject: str, workload: str, operations: int, rounds: int
) -> tuple[list[float], int]:
    """Runs one workload against one subject `rounds` times.

    Each round uses a fresh container. Workloads pair every push with a pop,
    so an odd `operations` runs one operation fewer; timings are divided by
    the count actually performed.

    Returns:
        The per-operation time of every round in nanoseconds, and the number
        of buffer resizes seen in the last round (0 for subjects that do not
        report them).
    """
    factory = SUBJECTS[subject]
    run = WORKLOADS[workload]
    per_op_ns: list[float] = []
    resizes = 0
    for _ in range(rounds):
        adapter = factory()
        start = time.perf_counter_ns()
        performed = run(adapter, operations)
        elapsed = time.perf_counter_ns() - start
        per_op_ns.append(elapsed / performed)
        resizes = getattr(adapter.container, "resizes", 0)
    return per_op_ns, resizes


def run_benchmark(settings: BenchmarkSettings) -> pd.DataFrame:
    """Times every configured workload against every configured subject.

    Args:
        settings: Operations per round, number of rounds, and which
            subjects and workloads to include.

    Returns:
        One row per (subject, workload) with the columns in REPORT_COLUMNS.

    Raises:
        ValueError: If the settings name an unknown subject or workload, or
            the operation or round counts are out of range.
    """
    _validate(settings)
    rows = []
    for workload in settings.workloads:
        for subject in settings.subjects:
            logger.debug(f"Timing '{workload}' on '{subject}'...")
            samples, resizes = time_workload(
                subject, workload, settings.operations, settings.rounds
            )
            rows.append(
                {
                    "subject": subject,
                    "workload": workload,
                    "operations": settings.operations,
                    "rounds": settings.rounds,
                    "mean_ns": float(np.mean(samples)),
                    "p50_ns": float(np.percentile(samples, 50)),
                    "p99_ns": float(np.percentile(samples, 99)),
                    "resizes": resizes,
                }
            )
            logger.info(
                f"{workload:>6} | {subject:<18} | "
                f"mean {rows[-1]['mean_ns']:.1f} ns/op"
            )
    return pd.DataFrame(rows, columns=REPORT_COLUMNS)
