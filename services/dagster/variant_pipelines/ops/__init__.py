"""Dagster Ops - Reusable Computation Units."""

from .index_op import create_variant_indexes
from .load_variants_op import load_variants

__all__ = [
    "create_variant_indexes",
    "load_variants",
]
