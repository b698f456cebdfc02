# =============================================================================
# Variant Storage Errors
# =============================================================================
# Error taxonomy raised while converting and persisting variants.
# =============================================================================

__all__ = [
    "VariantLoadError",
    "MalformedRecordError",
    "UnsupportedStatisticsStateError",
    "BulkWriteError",
    "WriterStateError",
]


class VariantLoadError(Exception):
    """Base class for errors raised by the variant loader."""


class MalformedRecordError(VariantLoadError):
    """A variant record lacks the fields its storage key is derived from."""


class UnsupportedStatisticsStateError(VariantLoadError):
    """Statistics were requested but the source entry cannot provide them."""


class BulkWriteError(VariantLoadError):
    """
    MongoDB rejected or failed to acknowledge a bulk flush.

    The driver exception is available as ``__cause__``. The writer that
    raised it is unusable afterwards.
    """

    def __init__(self, message: str, *, pending: int):
        super().__init__(message)
        self.pending = pending


class WriterStateError(VariantLoadError):
    """A writer was used after a failed flush."""
