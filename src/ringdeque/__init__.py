# src/ringdeque/__init__.py
"""RingDeque: a double-ended queue backed by a single ring buffer.

Pushes and pops at both ends run in amortized constant time. The buffer
capacity is always a power of two; it doubles when full and halves when
less than a quarter occupied.

Key modules:
- `deque`: The `RingDeque` container.
- `errors`: Exceptions raised by the container.
- `benchmark`: Timing harness comparing `RingDeque` with built-in containers.
- `config` / `logging_config`: Settings and loguru setup for the harness.
"""

import importlib.metadata

from ringdeque.deque import RingDeque
from ringdeque.errors import DequeAllocationError

try:
    __version__: str = importlib.metadata.version("ringdeque")
except importlib.metadata.PackageNotFoundError:
    # Running from a source checkout that was never installed.
    __version__ = "0.0.0-dev"

__all__ = ["DequeAllocationError", "RingDeque", "__version__"]
