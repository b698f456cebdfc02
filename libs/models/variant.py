# =============================================================================
# Variant Models Module
# =============================================================================
# Defines the in-memory representation of a parsed variant observation:
# - VariantType: Variant classification
# - VariantStats: Per-cohort allele/genotype statistics
# - VariantSourceEntry: How a variant was observed in one source file
# - Variant: One genomic variant plus its per-file source entries
# =============================================================================

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, model_validator

__all__ = [
    "SV_THRESHOLD",
    "VariantType",
    "VariantStats",
    "VariantSourceEntry",
    "Variant",
    "infer_variant_type",
]


SV_THRESHOLD = 50
"""Alleles of this many bases or more are treated as structural variation."""

EMPTY_ALLELES = frozenset({"", "-"})


# =============================================================================
# Variant Type Enum
# =============================================================================


class VariantType(str, Enum):
    """
    Classification of a variant by the shape of its alleles.

    Values:
        SNV: Single nucleotide variant
        MNV: Multi nucleotide variant (same-length alleles longer than 1)
        INDEL: Insertion/deletion shorter than SV_THRESHOLD
        SV: Structural variant
        NO_VARIATION: Reference-only site (alternate ".")
    """

    SNV = "SNV"
    MNV = "MNV"
    INDEL = "INDEL"
    SV = "SV"
    NO_VARIATION = "NO_VARIATION"


def _allele_length(allele: str) -> int:
    return 0 if allele in EMPTY_ALLELES else len(allele)


def infer_variant_type(reference: str, alternate: str) -> VariantType:
    """
    Classify a variant from its reference and alternate alleles.

    Args:
        reference: Reference allele ("" or "-" for none)
        alternate: Alternate allele ("" or "-" for none, "." for no variation)

    Returns:
        The inferred VariantType
    """
    if alternate == ".":
        return VariantType.NO_VARIATION

    ref_len = _allele_length(reference)
    alt_len = _allele_length(alternate)

    if ref_len == alt_len:
        return VariantType.SNV if ref_len == 1 else VariantType.MNV

    if max(ref_len, alt_len) < SV_THRESHOLD:
        return VariantType.INDEL
    return VariantType.SV


# =============================================================================
# Statistics
# =============================================================================


class VariantStats(BaseModel):
    """
    Allele and genotype statistics of a variant within one cohort.

    Attributes:
        ref_allele: Reference allele the statistics were computed against
        alt_allele: Alternate allele the statistics were computed against
        maf: Minor allele frequency
        mgf: Minor genotype frequency
        maf_allele: Allele with the minor frequency
        mgf_genotype: Genotype with the minor frequency
        missing_alleles: Number of missing alleles
        missing_genotypes: Number of missing genotypes
        genotype_counts: Number of samples per genotype (e.g. {"0/1": 12})
    """

    ref_allele: str | None = None
    alt_allele: str | None = None
    maf: float = Field(-1.0, description="Minor allele frequency")
    mgf: float = Field(-1.0, description="Minor genotype frequency")
    maf_allele: str | None = None
    mgf_genotype: str | None = None
    missing_alleles: int = Field(0, ge=0)
    missing_genotypes: int = Field(0, ge=0)
    genotype_counts: dict[str, int] = Field(default_factory=dict)


# =============================================================================
# Source Entry
# =============================================================================


class VariantSourceEntry(BaseModel):
    """
    Observation of a variant in a single source file of a study.

    Attributes:
        file_id: Identifier of the source file
        study_id: Identifier of the study the file belongs to
        format: Sample data format (e.g. "GT:DP")
        attributes: File-level INFO attributes
        samples_data: Sample name -> format field -> value, in file order
        cohort_stats: Cohort id -> statistics; None when never computed
    """

    file_id: str = Field(..., min_length=1)
    study_id: str = Field(..., min_length=1)
    format: str | None = None
    attributes: dict[str, str] = Field(default_factory=dict)
    samples_data: dict[str, dict[str, str]] = Field(default_factory=dict)
    cohort_stats: dict[str, VariantStats] | None = None


# =============================================================================
# Variant
# =============================================================================


class Variant(BaseModel):
    """
    A genomic variant as produced by the upstream parsing stage.

    ``chromosome`` and ``start`` are optional at the model level so that
    incomplete records can still be handed over; storage key derivation
    rejects them.

    Attributes:
        chromosome: Chromosome name (e.g. "20")
        start: 1-based start position
        end: End position (derived from the alleles when absent)
        reference: Reference allele ("" or "-" for none)
        alternate: Alternate allele ("" or "-" for none)
        ids: External identifiers (e.g. dbSNP rs ids)
        type: Variant type (inferred from the alleles when absent)
        source_entries: File id -> source entry
        annotation: Annotation payload attached by a later stage
    """

    chromosome: str | None = None
    start: int | None = None
    end: int | None = None
    reference: str = ""
    alternate: str = ""
    ids: list[str] = Field(default_factory=list)
    type: VariantType | None = None
    source_entries: dict[str, VariantSourceEntry] = Field(default_factory=dict)
    annotation: dict[str, Any] | None = None

    @model_validator(mode="after")
    def validate_source_entry_keys(self) -> "Variant":
        for key, entry in self.source_entries.items():
            if key != entry.file_id:
                raise ValueError(
                    f"Source entry stored under '{key}' belongs to file '{entry.file_id}'"
                )
        return self

    @property
    def length(self) -> int:
        return max(_allele_length(self.reference), _allele_length(self.alternate))

    @property
    def resolved_end(self) -> int | None:
        if self.end is not None:
            return self.end
        if self.start is None:
            return None
        return self.start + max(self.length, 1) - 1

    @property
    def resolved_type(self) -> VariantType:
        return self.type or infer_variant_type(self.reference, self.alternate)

    def add_source_entry(self, entry: VariantSourceEntry) -> None:
        """Attach (or replace) the source entry for ``entry.file_id``."""
        self.source_entries[entry.file_id] = entry
