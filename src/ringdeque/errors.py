class DequeAllocationError(MemoryError):
    """Raised when a RingDeque cannot allocate a resized buffer.

    Subclasses `MemoryError` so callers that already guard against memory
    exhaustion keep working, while still letting them tell a failed deque
    resize apart from other allocation failures.
    """

    def __init__(self, requested_slots: int) -> None:
        """Initializes the error.

        Args:
            requested_slots: The buffer size that could not be allocated.
        """
        self.requested_slots = requested_slots
        super().__init__(
            f"Could not allocate a deque buffer of {requested_slots} slots."
        )
