# =============================================================================
# Variant Storage Library
# =============================================================================
# MongoDB storage layer for variants: document converters and the batched
# upsert-merge writer.
# =============================================================================

"""
Variant storage library.

This library provides:
- build_storage_id / build_document: Storage id and insert-only document fields
- build_accumulation: $addToSet payload for one source entry
- BatchFlusher: Generic threshold-based batch consumer
- VariantMongoWriter: Batched, idempotent upsert-merge writer
- Error taxonomy (VariantLoadError and subclasses)
"""

from .errors import (
    VariantLoadError,
    MalformedRecordError,
    UnsupportedStatisticsStateError,
    BulkWriteError,
    WriterStateError,
)
from .document import (
    VariantDocument,
    build_storage_id,
    build_chunk_ids,
    build_document,
)
from .source_entry import convert_source_entry, compress_samples
from .stats import convert_cohort_stats
from .accumulator import build_accumulation
from .batching import BatchFlusher
from .writer import VariantMongoWriter, VariantMutationBuilder, WriterState

__all__ = [
    # Errors
    "VariantLoadError",
    "MalformedRecordError",
    "UnsupportedStatisticsStateError",
    "BulkWriteError",
    "WriterStateError",
    # Document builder
    "VariantDocument",
    "build_storage_id",
    "build_chunk_ids",
    "build_document",
    # Accumulation
    "convert_source_entry",
    "compress_samples",
    "convert_cohort_stats",
    "build_accumulation",
    # Writer
    "BatchFlusher",
    "VariantMongoWriter",
    "VariantMutationBuilder",
    "WriterState",
]
