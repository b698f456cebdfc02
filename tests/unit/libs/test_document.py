"""Unit tests for storage id derivation and the variant document builder."""

import hashlib

import pytest

from libs.models import Variant, VariantSourceEntry
from libs.variant_storage import (
    MalformedRecordError,
    build_chunk_ids,
    build_document,
    build_storage_id,
)


class TestBuildStorageId:
    """Test build_storage_id function."""

    def test_snv(self):
        assert build_storage_id("20", 60343, "G", "A") == "20_60343_G_A"

    def test_empty_alleles(self):
        assert build_storage_id("1", 1000, "-", "T") == "1_1000__T"
        assert build_storage_id("1", 1000, "T", "") == "1_1000_T_"

    def test_long_alleles_are_hashed(self):
        long_alt = "A" * 50
        expected = hashlib.sha1(long_alt.encode("utf-8")).hexdigest()
        assert build_storage_id("X", 5, "C", long_alt) == f"X_5_C_{expected}"

    def test_alleles_below_threshold_kept(self):
        allele = "A" * 49
        assert build_storage_id("X", 5, allele, "C") == f"X_5_{allele}_C"

    def test_same_variant_from_different_files_shares_key(self, variant_factory):
        from_file_1 = variant_factory(file_id="1", study_id="1")
        from_file_2 = variant_factory(file_id="2", study_id="9", ids=["rs1"])

        assert (
            build_document(from_file_1).storage_id
            == build_document(from_file_2).storage_id
        )

    def test_distinct_variants_get_distinct_keys(self):
        keys = {
            build_storage_id("1", 10, "A", "T"),
            build_storage_id("1", 10, "A", "G"),
            build_storage_id("1", 11, "A", "T"),
            build_storage_id("2", 10, "A", "T"),
            build_storage_id("1", 10, "AT", "T"),
        }
        assert len(keys) == 5


class TestBuildChunkIds:
    """Test chunk id generation."""

    def test_small_and_big_chunks(self):
        assert build_chunk_ids("20", 60343) == ["20_60_1k", "20_6_10k"]

    def test_start_of_chromosome(self):
        assert build_chunk_ids("1", 999) == ["1_0_1k", "1_0_10k"]


class TestBuildDocument:
    """Test build_document function."""

    def test_snv_document(self, snv):
        document = build_document(snv)

        assert document.storage_id == "20_60343_G_A"
        assert document.shard_fields == {"chr": "20", "start": 60343}
        assert document.match_filter == {"_id": "20_60343_G_A", "chr": "20", "start": 60343}
        assert document.insert_fields == {
            "end": 60343,
            "len": 1,
            "ref": "G",
            "alt": "A",
            "type": "SNV",
            "_at": {"chunkIds": ["20_60_1k", "20_6_10k"]},
            "hgvs": [{"type": "genomic", "name": "20:g.60343G>A"}],
        }

    def test_indel_has_no_hgvs(self):
        variant = Variant(chromosome="1", start=100, reference="A", alternate="ATT")
        document = build_document(variant)
        assert "hgvs" not in document.insert_fields
        assert document.insert_fields["type"] == "INDEL"
        assert document.insert_fields["end"] == 102

    def test_insert_fields_exclude_accumulated_arrays(self, variant_factory):
        variant = variant_factory(ids=["rs1"])
        variant.annotation = {"ct": []}
        insert_fields = build_document(variant).insert_fields

        for field in ("_id", "chr", "start", "files", "st", "ids", "annot"):
            assert field not in insert_fields

    def test_builder_does_not_modify_variant(self, snv):
        before = snv.model_dump()
        build_document(snv)
        assert snv.model_dump() == before

    @pytest.mark.parametrize("chromosome", [None, ""])
    def test_missing_chromosome(self, chromosome):
        variant = Variant(chromosome=chromosome, start=1, reference="A", alternate="T")
        with pytest.raises(MalformedRecordError, match="no chromosome"):
            build_document(variant)

    def test_missing_start(self):
        variant = Variant(
            chromosome="1",
            reference="A",
            alternate="T",
            source_entries={"1": VariantSourceEntry(file_id="1", study_id="1")},
        )
        with pytest.raises(MalformedRecordError, match="no start"):
            build_document(variant)
