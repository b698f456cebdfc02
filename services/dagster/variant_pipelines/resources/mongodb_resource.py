"""MongoDB Resource - Variant store operations."""

from __future__ import annotations

from functools import cached_property
from typing import Any, ClassVar, Dict, List, Tuple

from dagster import ConfigurableResource
from pydantic import Field
from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from libs.variant_storage import fields

__all__ = ["MongoDBResource"]


class MongoDBResource(ConfigurableResource):
    """
    Dagster resource for the MongoDB variant store.

    Owns the client; writers borrow collection handles from it and never
    manage connections themselves.
    """

    connection_string: str = Field(..., description="MongoDB connection URI")
    database: str = Field("variants", description="MongoDB database name")
    variants_collection: str = Field(
        "variants", description="Default collection holding variant documents"
    )

    VARIANT_INDEXES: ClassVar[List[Tuple[List[Tuple[str, int]], Dict[str, Any]]]] = [
        (
            [
                (fields.CHROMOSOME_FIELD, ASCENDING),
                (fields.START_FIELD, ASCENDING),
                (fields.END_FIELD, ASCENDING),
            ],
            {},
        ),
        ([(f"{fields.AT_FIELD}.{fields.CHUNK_IDS_FIELD}", ASCENDING)], {}),
        ([(fields.IDS_FIELD, ASCENDING)], {}),
        ([(f"{fields.FILES_FIELD}.{fields.STUDY_ID_FIELD}", ASCENDING)], {}),
        ([(f"{fields.FILES_FIELD}.{fields.FILE_ID_FIELD}", ASCENDING)], {}),
        ([(f"{fields.STATS_FIELD}.{fields.MAF_FIELD}", ASCENDING)], {"sparse": True}),
        ([(f"{fields.STATS_FIELD}.{fields.MGF_FIELD}", ASCENDING)], {"sparse": True}),
    ]

    @cached_property
    def _client(self) -> MongoClient:
        return MongoClient(self.connection_string)

    def _get_db(self) -> Database:
        return self._client[self.database]

    def get_variants_collection(self, name: str | None = None) -> Collection:
        """
        Return the variants collection handle.

        Args:
            name: Collection name; defaults to ``variants_collection``
        """
        return self._get_db()[name or self.variants_collection]

    def ensure_variant_indexes(self, name: str | None = None) -> List[str]:
        """
        Create the query indexes of the variants collection.

        Index creation is idempotent; existing indexes are left alone.
        Loading does not depend on these indexes, only downstream queries do.

        Returns:
            Names of the ensured indexes
        """
        collection = self.get_variants_collection(name)
        return [
            collection.create_index(keys, background=True, **options)
            for keys, options in self.VARIANT_INDEXES
        ]

    def get_variant(self, storage_id: str, name: str | None = None) -> Dict | None:
        """
        Load a variant document by storage id.
        """
        return self.get_variants_collection(name).find_one({fields.ID_FIELD: storage_id})

    def count_variants(self, name: str | None = None) -> int:
        """
        Count the variant documents of the collection.
        """
        return self.get_variants_collection(name).count_documents({})
