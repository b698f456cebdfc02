# =============================================================================
# Batch Flusher
# =============================================================================
# Collects staged items and hands them to a flush callback once a size
# threshold is reached, or when explicitly flushed at end of input.
# =============================================================================

from typing import Callable, Generic, List, TypeVar

__all__ = ["BatchFlusher"]

T = TypeVar("T")


class BatchFlusher(Generic[T]):
    """
    Sequence consumer with periodic flush.

    Items are kept in staging order. A flush hands the whole pending batch to
    the callback and resets the batch only if the callback returns normally;
    if it raises, the batch is left untouched and the error propagates.

    Not thread-safe: one flusher belongs to one consumer.

    Example:
        >>> batches = []
        >>> flusher = BatchFlusher(batches.append, threshold=2)
        >>> for item in "abc":
        ...     flusher.stage(item)
        >>> flusher.flush()
        >>> batches
        [['a', 'b'], ['c']]
    """

    def __init__(self, flush: Callable[[List[T]], None], threshold: int):
        if threshold < 1:
            raise ValueError(f"Batch threshold must be at least 1, got {threshold}")
        self._flush = flush
        self.threshold = threshold
        self._pending: List[T] = []

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def stage(self, item: T) -> None:
        """Add an item and flush as soon as the batch reaches the threshold."""
        self._pending.append(item)
        if len(self._pending) >= self.threshold:
            self.flush()

    def flush(self) -> None:
        """Flush pending items; an empty batch is never handed to the callback."""
        if not self._pending:
            return
        self._flush(list(self._pending))
        self._pending = []
