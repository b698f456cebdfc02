"""Dagster Resources - External Service Connections."""

from .mongodb_resource import MongoDBResource

__all__ = [
    "MongoDBResource",
]
