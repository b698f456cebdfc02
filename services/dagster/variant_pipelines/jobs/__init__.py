"""Dagster Jobs - Executable Workflows."""

from .load_variants_job import load_variants_job

__all__ = ["load_variants_job"]
