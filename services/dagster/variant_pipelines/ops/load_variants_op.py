# =============================================================================
# Load Variants Op - Parsed variants to MongoDB
# =============================================================================
# Upserts the variants of one source file into the variants collection using
# the batched upsert-merge writer.
# =============================================================================

from typing import Any, Dict, List

from dagster import op, OpExecutionContext, Config, In, Nothing, Out
from pydantic import Field
from pymongo.collection import Collection

from libs.models import Variant, VariantLoaderSettings
from libs.variant_storage import VariantMongoWriter


__all__ = ["LoadVariantsConfig", "load_variants", "_load_variants"]


class LoadVariantsConfig(Config):
    """Run config for loading the variants of one source file."""

    file_id: str = Field(..., description="Source file whose entries are loaded")
    include_stats: bool = Field(False, description="Accumulate cohort statistics")
    include_samples: bool = Field(False, description="Store compressed sample genotypes")
    bulk_size: int = Field(1000, description="Upserts per bulk write")
    collection: str = Field("variants", description="Target variants collection")

    def to_settings(self) -> VariantLoaderSettings:
        return VariantLoaderSettings(
            file_id=self.file_id,
            include_stats=self.include_stats,
            include_samples=self.include_samples,
            bulk_size=self.bulk_size,
            collection=self.collection,
        )


def _validate_variants(variants: Any) -> List[Variant]:
    # Dagster wraps config-provided inputs in {"value": ...}
    if isinstance(variants, dict) and "value" in variants:
        variants = variants["value"]

    if not isinstance(variants, list):
        raise ValueError(f"Expected a list of variants, got {type(variants).__name__}")

    return [
        variant if isinstance(variant, Variant) else Variant.model_validate(variant)
        for variant in variants
    ]


def _load_variants(
    collection: Collection,
    variants: Any,
    settings: VariantLoaderSettings,
    log,
) -> Dict[str, Any]:
    """
    Core logic for writing variants to MongoDB.

    This function is extracted for easier unit testing without Dagster context.
    Every record is validated before the first write so that a malformed input
    list fails the step without touching the collection.

    Args:
        collection: Target variants collection
        variants: List of Variant models or dicts
        settings: Loader options for the source file
        log: Logger instance (context.log)

    Returns:
        Load summary dict with file_id, collection, records_written,
        mutations_written and flush_count

    Raises:
        pydantic.ValidationError: If a record does not match the Variant model
        VariantLoadError: If the writer fails (see libs.variant_storage.errors)
    """
    validated = _validate_variants(variants)
    log.info(
        f"Loading {len(validated)} variant(s) of file {settings.file_id} "
        f"into collection '{settings.collection}' (bulk size {settings.bulk_size})"
    )

    writer = VariantMongoWriter.from_settings(collection, settings)
    writer.write(validated)

    log.info(
        f"Loaded file {settings.file_id}: {writer.mutations_written} upsert(s) "
        f"in {writer.flush_count} bulk write(s)"
    )
    return {
        "file_id": settings.file_id,
        "collection": settings.collection,
        "records_written": writer.records_written,
        "mutations_written": writer.mutations_written,
        "flush_count": writer.flush_count,
    }


@op(
    ins={
        "variants": In(dagster_type=list),
        "indexes_ready": In(Nothing),
    },
    out={"load_summary": Out(dagster_type=dict)},
    required_resource_keys={"mongodb"},
)
def load_variants(
    context: OpExecutionContext, config: LoadVariantsConfig, variants: list
) -> dict:
    """
    Upsert the variants of one source file into MongoDB.

    Failures are not retried here; re-running the step is safe because every
    write is an idempotent upsert.

    Args:
        context: Dagster op execution context
        config: Loader options (file id, stats/samples inclusion, bulk size)
        variants: Parsed variant records delivered by the upstream stage

    Returns:
        Load summary dict (see _load_variants)
    """
    settings = config.to_settings()
    return _load_variants(
        collection=context.resources.mongodb.get_variants_collection(settings.collection),
        variants=variants,
        settings=settings,
        log=context.log,
    )
