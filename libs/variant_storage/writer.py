# =============================================================================
# Variant MongoDB Writer
# =============================================================================
# Batched, idempotent upsert-merge writer. Each variant observation of the
# file being loaded becomes one upsert that creates the variant document on
# first sight and otherwise only unions new sub-entries into its arrays.
# =============================================================================

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List

from pymongo import UpdateOne
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from libs.models import Variant, VariantLoaderSettings

from .accumulator import build_accumulation
from .batching import BatchFlusher
from .document import build_document
from .errors import BulkWriteError, WriterStateError

__all__ = [
    "PROGRESS_INTERVAL",
    "WriterState",
    "VariantMutationBuilder",
    "VariantMongoWriter",
]

logger = logging.getLogger(__name__)

PROGRESS_INTERVAL = 1000


class WriterState(str, Enum):
    """Lifecycle of a VariantMongoWriter."""

    IDLE = "idle"
    ACCUMULATING = "accumulating"
    FLUSHING = "flushing"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class VariantMutationBuilder:
    """
    Turns a variant into the upserts for the source file being loaded.

    Attributes:
        file_id: Only source entries of this file produce mutations
        include_stats: Whether cohort statistics are accumulated
        include_samples: Whether compressed genotypes are stored
    """

    file_id: str
    include_stats: bool = False
    include_samples: bool = False

    def __call__(self, variant: Variant) -> List[UpdateOne]:
        # Annotation is produced by a later stage and must not be persisted here
        variant.annotation = None
        document = build_document(variant)

        mutations = []
        for entry in variant.source_entries.values():
            if entry.file_id != self.file_id:
                continue
            update: Dict[str, Any] = {
                "$addToSet": build_accumulation(
                    variant,
                    entry,
                    include_stats=self.include_stats,
                    include_samples=self.include_samples,
                ),
                # _id, chr and start are set from the filter on insert
                "$setOnInsert": document.insert_fields,
            }
            # chr and start are required by the shard key even though _id is unique
            mutations.append(UpdateOne(document.match_filter, update, upsert=True))
        return mutations


class VariantMongoWriter:
    """
    Writes variants of one source file into the variants collection.

    Mutations are staged and sent as unordered bulk writes of ``bulk_size``
    upserts; whatever is left when the input of a ``write`` call ends is
    flushed before the call returns. Flush failures are not retried: the
    writer moves to FAILED, raises BulkWriteError and must be discarded.
    Re-running the whole load is safe because every mutation is an
    idempotent upsert.

    The collection handle is borrowed; the writer never opens or closes
    clients. Instances are not thread-safe.

    Example:
        >>> writer = VariantMongoWriter(collection, file_id="1", bulk_size=1000)
        >>> writer.write(variants)
    """

    def __init__(
        self,
        collection: Collection,
        *,
        file_id: str,
        include_stats: bool = False,
        include_samples: bool = False,
        bulk_size: int = 1000,
    ):
        self._collection = collection
        self._build_mutations = VariantMutationBuilder(
            file_id=file_id,
            include_stats=include_stats,
            include_samples=include_samples,
        )
        self._batch: BatchFlusher[UpdateOne] = BatchFlusher(self._execute_bulk, bulk_size)
        self.state = WriterState.IDLE
        self.records_written = 0
        self.mutations_written = 0
        self.flush_count = 0

    @classmethod
    def from_settings(
        cls, collection: Collection, settings: VariantLoaderSettings
    ) -> "VariantMongoWriter":
        return cls(
            collection,
            file_id=settings.file_id,
            include_stats=settings.include_stats,
            include_samples=settings.include_samples,
            bulk_size=settings.bulk_size,
        )

    @property
    def file_id(self) -> str:
        return self._build_mutations.file_id

    @property
    def bulk_size(self) -> int:
        return self._batch.threshold

    @property
    def pending_count(self) -> int:
        return self._batch.pending_count

    def write(self, variants: Iterable[Variant]) -> None:
        """
        Upsert every observation of the configured file found in ``variants``.

        Returns once all resulting mutations are acknowledged by MongoDB.

        Raises:
            MalformedRecordError: If a variant has no chromosome or start
            UnsupportedStatisticsStateError: If stats are requested but unusable
            BulkWriteError: If a bulk flush fails
            WriterStateError: If the writer already failed
        """
        if self.state == WriterState.FAILED:
            raise WriterStateError(
                f"Writer for file {self.file_id} failed earlier and must be discarded"
            )

        self.state = WriterState.ACCUMULATING
        try:
            for variant in variants:
                for mutation in self._build_mutations(variant):
                    self._batch.stage(mutation)

                self.records_written += 1
                if self.records_written % PROGRESS_INTERVAL == 0:
                    logger.info(f"Num variants written {self.records_written}")

            self._batch.flush()
        except Exception:
            self.state = WriterState.FAILED
            raise

        self.state = WriterState.DONE

    def _execute_bulk(self, requests: List[UpdateOne]) -> None:
        self.state = WriterState.FLUSHING
        logger.debug(f"Execute bulk. Bulk size: {len(requests)}")
        try:
            result = self._collection.bulk_write(requests, ordered=False)
        except PyMongoError as e:
            raise BulkWriteError(
                f"Bulk write of {len(requests)} variant upserts failed for file "
                f"{self.file_id}: {e}",
                pending=len(requests),
            ) from e

        self.flush_count += 1
        self.mutations_written += len(requests)
        logger.debug(
            f"Bulk acknowledged: upserted={result.upserted_count}, "
            f"matched={result.matched_count}"
        )
        self.state = WriterState.ACCUMULATING
