"""Variant loading job (op-based)."""

from dagster import job

from ..ops import create_variant_indexes, load_variants


@job(
    name="load_variants_job",
    description="Ensures variants collection indexes, then upserts the variants of one source file into MongoDB",
)
def load_variants_job():
    """
    Load the variants of one source file.

    Pipeline flow:
    1. create_variant_indexes: Ensures query indexes on the variants collection
    2. load_variants: Upserts the variants, merging them into existing documents

    The variants list and the loader options are passed via run config.
    """
    load_variants(indexes_ready=create_variant_indexes())
