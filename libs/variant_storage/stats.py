# =============================================================================
# Cohort Statistics Converter
# =============================================================================
# Converts per-cohort VariantStats into the elements appended to a variant
# document's "st" array.
# =============================================================================

from typing import Any, Dict, List, Mapping

from libs.models import VariantStats

from . import fields
from .source_entry import normalize_genotype

__all__ = ["convert_stats", "convert_cohort_stats"]


def convert_stats(
    stats: VariantStats, *, cohort_id: str, study_id: str, file_id: str
) -> Dict[str, Any]:
    """Convert the statistics of one cohort, tagged with study and file ids."""
    return {
        fields.COHORT_ID_FIELD: cohort_id,
        fields.STUDY_ID_FIELD: study_id,
        fields.FILE_ID_FIELD: file_id,
        fields.MAF_FIELD: stats.maf,
        fields.MGF_FIELD: stats.mgf,
        fields.MAF_ALLELE_FIELD: stats.maf_allele,
        fields.MGF_GENOTYPE_FIELD: stats.mgf_genotype,
        fields.MISSING_ALLELES_FIELD: stats.missing_alleles,
        fields.MISSING_GENOTYPES_FIELD: stats.missing_genotypes,
        fields.NUM_GENOTYPES_FIELD: {
            normalize_genotype(genotype): count
            for genotype, count in stats.genotype_counts.items()
        },
    }


def convert_cohort_stats(
    cohort_stats: Mapping[str, VariantStats], study_id: str, file_id: str
) -> List[Dict[str, Any]]:
    """
    Convert the statistics of every cohort of a source entry.

    Cohorts are emitted in mapping order.
    """
    return [
        convert_stats(stats, cohort_id=cohort_id, study_id=study_id, file_id=file_id)
        for cohort_id, stats in cohort_stats.items()
    ]
