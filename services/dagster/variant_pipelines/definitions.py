"""Dagster Definitions - Repository Configuration.

Defines jobs and resources for the variant loading pipeline.
"""

from dagster import Definitions, EnvVar

from .jobs import load_variants_job
from .resources import MongoDBResource


# =============================================================================
# Definitions
# =============================================================================

defs = Definitions(
    jobs=[
        load_variants_job,
    ],
    resources={
        "mongodb": MongoDBResource(
            connection_string=EnvVar("MONGO_CONNECTION_STRING"),
            database="variants",
            variants_collection="variants",
        ),
    },
)
