# =============================================================================
# Variant Document Builder
# =============================================================================
# Derives the storage id of a variant and the document fields that are only
# written when the document is first created.
# =============================================================================

import hashlib
from dataclasses import dataclass
from typing import Any, Dict, List

from libs.models import SV_THRESHOLD, Variant, VariantType

from . import fields
from .errors import MalformedRecordError

__all__ = [
    "CHUNK_SIZE_SMALL",
    "CHUNK_SIZE_BIG",
    "VariantDocument",
    "build_storage_id",
    "build_chunk_ids",
    "build_document",
]

CHUNK_SIZE_SMALL = 1000
CHUNK_SIZE_BIG = 10000


@dataclass(frozen=True)
class VariantDocument:
    """
    Storage representation of a variant, split by how each part is written.

    Attributes:
        storage_id: Document ``_id``
        shard_fields: Fields repeated in the upsert filter (chr, start)
        insert_fields: Intrinsic fields, applied with $setOnInsert only
    """

    storage_id: str
    shard_fields: Dict[str, Any]
    insert_fields: Dict[str, Any]

    @property
    def match_filter(self) -> Dict[str, Any]:
        return {fields.ID_FIELD: self.storage_id, **self.shard_fields}


def _allele_key(allele: str) -> str:
    if allele in ("", "-"):
        return ""
    if len(allele) < SV_THRESHOLD:
        return allele
    return hashlib.sha1(allele.encode("utf-8")).hexdigest()


def build_storage_id(chromosome: str, start: int, reference: str, alternate: str) -> str:
    """
    Build the storage id shared by every observation of a variant.

    Format: ``<chromosome>_<start>_<reference>_<alternate>``. Empty alleles
    ("" or "-") contribute nothing and alleles of SV_THRESHOLD bases or more
    are replaced by their SHA-1 hex digest.

    Example:
        >>> build_storage_id("20", 60343, "G", "A")
        '20_60343_G_A'
    """
    return "_".join(
        [chromosome, str(start), _allele_key(reference), _allele_key(alternate)]
    )


def build_chunk_ids(chromosome: str, start: int) -> List[str]:
    """Return the small and big genomic chunk ids covering ``start``."""
    return [
        f"{chromosome}_{start // size}_{size // 1000}k"
        for size in (CHUNK_SIZE_SMALL, CHUNK_SIZE_BIG)
    ]


def _build_hgvs(variant: Variant, variant_type: VariantType) -> List[Dict[str, str]]:
    # Only substitutions have an unambiguous genomic name without normalization
    if variant_type != VariantType.SNV:
        return []
    name = f"{variant.chromosome}:g.{variant.start}{variant.reference}>{variant.alternate}"
    return [{"type": "genomic", "name": name}]


def build_document(variant: Variant) -> VariantDocument:
    """
    Build the storage representation of a variant.

    Args:
        variant: Parsed variant record

    Returns:
        VariantDocument with storage id, shard fields and insert-only fields

    Raises:
        MalformedRecordError: If chromosome or start is missing
    """
    if not variant.chromosome:
        raise MalformedRecordError(
            f"Variant at start={variant.start} has no chromosome"
        )
    if variant.start is None:
        raise MalformedRecordError(
            f"Variant on chromosome {variant.chromosome} has no start position"
        )

    variant_type = variant.resolved_type
    storage_id = build_storage_id(
        variant.chromosome, variant.start, variant.reference, variant.alternate
    )

    insert_fields: Dict[str, Any] = {
        fields.END_FIELD: variant.resolved_end,
        fields.LENGTH_FIELD: variant.length,
        fields.REFERENCE_FIELD: variant.reference,
        fields.ALTERNATE_FIELD: variant.alternate,
        fields.TYPE_FIELD: variant_type.value,
        fields.AT_FIELD: {
            fields.CHUNK_IDS_FIELD: build_chunk_ids(variant.chromosome, variant.start)
        },
    }
    hgvs = _build_hgvs(variant, variant_type)
    if hgvs:
        insert_fields[fields.HGVS_FIELD] = hgvs

    return VariantDocument(
        storage_id=storage_id,
        shard_fields={
            fields.CHROMOSOME_FIELD: variant.chromosome,
            fields.START_FIELD: variant.start,
        },
        insert_fields=insert_fields,
    )
