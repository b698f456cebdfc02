"""
Shared pytest fixtures for variant loader tests.

Provides reusable variant records and an in-memory variants collection.
"""

from types import SimpleNamespace

import mongomock
import pytest

from libs.models import Variant, VariantSourceEntry, VariantStats


# =============================================================================
# Collection Fixtures
# =============================================================================


class BulkReplayCollection:
    """
    Collection proxy that records bulk writes and replays them on mongomock.

    Each UpdateOne is applied with update_one so the test exercises the same
    $setOnInsert/$addToSet semantics MongoDB applies inside a bulk write.
    """

    def __init__(self, collection):
        self._collection = collection
        self.bulk_calls = []

    def __getattr__(self, name):
        return getattr(self._collection, name)

    def bulk_write(self, requests, ordered=True):
        requests = list(requests)
        self.bulk_calls.append({"requests": requests, "ordered": ordered})

        upserted = matched = modified = 0
        for request in requests:
            result = self._collection.update_one(
                request._filter, request._doc, upsert=request._upsert
            )
            if result.upserted_id is not None:
                upserted += 1
            matched += result.matched_count
            modified += result.modified_count

        return SimpleNamespace(
            upserted_count=upserted,
            matched_count=matched,
            modified_count=modified,
        )

    @property
    def batch_sizes(self):
        return [len(call["requests"]) for call in self.bulk_calls]


@pytest.fixture
def mongomock_client():
    """In-memory MongoDB client for tests."""
    return mongomock.MongoClient()


@pytest.fixture
def variants_collection(mongomock_client):
    """Variants collection recording every bulk write."""
    return BulkReplayCollection(mongomock_client["variants"]["variants"])


# =============================================================================
# Variant Fixtures
# =============================================================================


def make_variant(
    chromosome="20",
    start=60343,
    reference="G",
    alternate="A",
    *,
    file_id="1",
    study_id="1",
    ids=None,
    **entry_kwargs,
) -> Variant:
    """Build a variant with a single source entry."""
    entry = VariantSourceEntry(file_id=file_id, study_id=study_id, **entry_kwargs)
    return Variant(
        chromosome=chromosome,
        start=start,
        reference=reference,
        alternate=alternate,
        ids=ids or [],
        source_entries={file_id: entry},
    )


@pytest.fixture
def variant_factory():
    """Factory building variants with a single source entry."""
    return make_variant


@pytest.fixture
def snv():
    """The 20:60343 G/A variant observed in file 1 of study 1."""
    return make_variant()


@pytest.fixture
def cohort_stats():
    """Statistics of the ALL cohort computed against G/A."""
    return {
        "ALL": VariantStats(
            ref_allele="G",
            alt_allele="A",
            maf=0.25,
            mgf=0.0,
            maf_allele="A",
            mgf_genotype="1/1",
            missing_alleles=0,
            missing_genotypes=0,
            genotype_counts={"0/0": 2, "0/1": 2, "1/1": 0},
        )
    }


@pytest.fixture
def valid_variant_dict():
    """Variant record as delivered by the upstream stage."""
    return {
        "chromosome": "20",
        "start": 60343,
        "reference": "G",
        "alternate": "A",
        "ids": ["rs527639301"],
        "source_entries": {
            "1": {
                "file_id": "1",
                "study_id": "1",
                "format": "GT",
                "attributes": {"AC": "1", "AN": "4"},
                "samples_data": {
                    "HG00096": {"GT": "0|0"},
                    "HG00097": {"GT": "0|1"},
                },
            }
        },
    }
