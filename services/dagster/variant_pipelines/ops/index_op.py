# =============================================================================
# Index Op - Variants collection indexes
# =============================================================================
# Ensures the query indexes of the variants collection exist.
# =============================================================================

from typing import List

from dagster import op, OpExecutionContext, Config, Out, Nothing
from pydantic import Field


__all__ = ["IndexConfig", "create_variant_indexes", "_create_variant_indexes"]


class IndexConfig(Config):
    """Run config for index creation."""

    collection: str = Field("variants", description="Variants collection to index")


def _create_variant_indexes(mongodb, collection: str, log) -> List[str]:
    """
    Core logic for index creation.

    Args:
        mongodb: MongoDBResource instance
        collection: Variants collection name
        log: Logger instance (context.log)

    Returns:
        Names of the ensured indexes
    """
    log.info(f"Ensuring indexes on collection '{collection}'")
    names = mongodb.ensure_variant_indexes(collection)
    log.info(f"Indexes ready: {', '.join(names)}")
    return names


@op(out=Out(Nothing), required_resource_keys={"mongodb"})
def create_variant_indexes(context: OpExecutionContext, config: IndexConfig) -> None:
    """
    Create the chromosome/start/end, chunk, id, file and stats indexes.

    Loading does not depend on these indexes; they only serve downstream
    queries.
    """
    _create_variant_indexes(
        mongodb=context.resources.mongodb,
        collection=config.collection,
        log=context.log,
    )
