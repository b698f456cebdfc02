# =============================================================================
# Sub-Entry Accumulator
# =============================================================================
# Builds the $addToSet payload merging one source entry (plus its statistics
# and the variant's external ids) into an existing variant document.
# =============================================================================

from typing import Any, Dict

from libs.models import Variant, VariantSourceEntry

from . import fields
from .errors import UnsupportedStatisticsStateError
from .source_entry import convert_source_entry
from .stats import convert_cohort_stats

__all__ = ["build_accumulation", "check_stats_state"]


def check_stats_state(variant: Variant, entry: VariantSourceEntry) -> None:
    """
    Ensure the statistics of ``entry`` can be stored for ``variant``.

    Raises:
        UnsupportedStatisticsStateError: If no statistics were computed, or a
            cohort was computed against different alleles
    """
    if entry.cohort_stats is None:
        raise UnsupportedStatisticsStateError(
            f"Statistics requested but none were computed for file "
            f"{entry.file_id} (study {entry.study_id})"
        )

    for cohort_id, stats in entry.cohort_stats.items():
        if stats.ref_allele is not None and stats.ref_allele != variant.reference:
            raise UnsupportedStatisticsStateError(
                f"Cohort '{cohort_id}' statistics use reference allele "
                f"'{stats.ref_allele}', variant has '{variant.reference}'"
            )
        if stats.alt_allele is not None and stats.alt_allele != variant.alternate:
            raise UnsupportedStatisticsStateError(
                f"Cohort '{cohort_id}' statistics use alternate allele "
                f"'{stats.alt_allele}', variant has '{variant.alternate}'"
            )


def build_accumulation(
    variant: Variant,
    entry: VariantSourceEntry,
    *,
    include_stats: bool = False,
    include_samples: bool = False,
) -> Dict[str, Any]:
    """
    Build the $addToSet document for one source entry.

    List payloads are wrapped in ``$each`` so their elements are unioned into
    the array instead of being appended as a single nested array.

    Args:
        variant: Variant the entry belongs to (supplies external ids)
        entry: Source entry of the file being loaded
        include_stats: Whether to accumulate cohort statistics
        include_samples: Whether the file entry carries compressed genotypes

    Returns:
        $addToSet payload keyed by "files" and, optionally, "st" and "ids"

    Raises:
        UnsupportedStatisticsStateError: If statistics are requested but unusable
    """
    add_to_set: Dict[str, Any] = {
        fields.FILES_FIELD: convert_source_entry(entry, include_samples=include_samples),
    }

    if include_stats:
        check_stats_state(variant, entry)
        add_to_set[fields.STATS_FIELD] = {
            "$each": convert_cohort_stats(
                entry.cohort_stats, entry.study_id, entry.file_id
            )
        }

    if variant.ids:
        add_to_set[fields.IDS_FIELD] = {"$each": list(variant.ids)}

    return add_to_set
