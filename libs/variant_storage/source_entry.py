# =============================================================================
# Source Entry Converter
# =============================================================================
# Converts a VariantSourceEntry into the element appended to a variant
# document's "files" array.
# =============================================================================

from collections import Counter
from typing import Any, Dict, List, Mapping

from libs.models import VariantSourceEntry

from . import fields

__all__ = [
    "escape_key",
    "normalize_genotype",
    "compress_samples",
    "convert_source_entry",
]

GENOTYPE_KEY = "GT"


def escape_key(key: str) -> str:
    """Make an attribute name usable as a MongoDB field name."""
    escaped = key.replace(".", "§")
    if escaped.startswith("$"):
        escaped = "¤" + escaped[1:]
    return escaped


def normalize_genotype(genotype: str) -> str:
    """
    Rewrite missing alleles so the genotype can be used as a field name.

    Example:
        >>> normalize_genotype("./.")
        '-1/-1'
    """
    out: List[str] = []
    allele = ""
    for char in genotype:
        if char in "/|":
            out.append("-1" if allele == "." else allele)
            out.append(char)
            allele = ""
        else:
            allele += char
    out.append("-1" if allele == "." else allele)
    return "".join(out)


def compress_samples(samples_data: Mapping[str, Mapping[str, str]]) -> Dict[str, Any]:
    """
    Compress sample genotypes by position.

    The most frequent genotype is stored once under "def"; every other
    genotype maps to the sorted indexes (file order) of the samples carrying
    it. Samples without a GT field are left out.

    Returns:
        Compressed genotype dict, empty when no sample has a genotype
    """
    by_genotype: Dict[str, List[int]] = {}
    for index, sample in enumerate(samples_data.values()):
        genotype = sample.get(GENOTYPE_KEY)
        if genotype is None:
            continue
        by_genotype.setdefault(normalize_genotype(genotype), []).append(index)

    if not by_genotype:
        return {}

    counts = Counter({gt: len(indexes) for gt, indexes in by_genotype.items()})
    default_genotype = counts.most_common(1)[0][0]

    compressed: Dict[str, Any] = {fields.DEFAULT_GENOTYPE_FIELD: default_genotype}
    for genotype, indexes in by_genotype.items():
        if genotype != default_genotype:
            compressed[genotype] = indexes
    return compressed


def convert_source_entry(
    entry: VariantSourceEntry, *, include_samples: bool = False
) -> Dict[str, Any]:
    """
    Convert a source entry into its storage form.

    Keys are always emitted in the same order so that re-converting an
    unchanged entry yields an identical document.

    Args:
        entry: Source entry of the file being loaded
        include_samples: Whether to add the format and compressed genotypes

    Returns:
        Dict with "fid", "sid", "attrs" and, optionally, "fm" and "samp"
    """
    document: Dict[str, Any] = {
        fields.FILE_ID_FIELD: entry.file_id,
        fields.STUDY_ID_FIELD: entry.study_id,
        fields.ATTRIBUTES_FIELD: {
            escape_key(key): value for key, value in entry.attributes.items()
        },
    }

    if include_samples:
        if entry.format:
            document[fields.FORMAT_FIELD] = entry.format
        samples = compress_samples(entry.samples_data)
        if samples:
            document[fields.SAMPLES_FIELD] = samples

    return document
