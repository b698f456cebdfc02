# =============================================================================
# Configuration Models Module
# =============================================================================
# Provides Pydantic Settings models for the variant loader:
# - MongoSettings: MongoDB variant store configuration
# - VariantLoaderSettings: Per-file loading options for the upsert writer
# =============================================================================

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

__all__ = [
    "MongoSettings",
    "VariantLoaderSettings",
]


# =============================================================================
# MongoDB Settings (Variant Store)
# =============================================================================

class MongoSettings(BaseSettings):
    """
    Configuration for MongoDB (variant store).

    Maps environment variables with prefix "MONGO_":
    - MONGO_HOST → host
    - MONGO_PORT → port
    - MONGO_INITDB_ROOT_USERNAME → username
    - MONGO_INITDB_ROOT_PASSWORD → password
    - MONGO_DATABASE → database
    - MONGO_AUTH_SOURCE → auth_source

    Attributes:
        host: MongoDB host (default: "mongodb")
        port: MongoDB port (default: 27017)
        username: MongoDB username (maps from MONGO_INITDB_ROOT_USERNAME)
        password: MongoDB password (maps from MONGO_INITDB_ROOT_PASSWORD)
        database: Database name (default: "variants")
        auth_source: Authentication source (default: "admin")
    """

    host: str = Field("mongodb", validation_alias="MONGO_HOST", description="MongoDB host")
    port: int = Field(27017, validation_alias="MONGO_PORT", description="MongoDB port")
    username: str = Field(..., validation_alias="MONGO_INITDB_ROOT_USERNAME", description="MongoDB username (maps from MONGO_INITDB_ROOT_USERNAME)")
    password: str = Field(..., validation_alias="MONGO_INITDB_ROOT_PASSWORD", description="MongoDB password (maps from MONGO_INITDB_ROOT_PASSWORD)")
    database: str = Field("variants", validation_alias="MONGO_DATABASE", description="Database name")
    auth_source: str = Field("admin", validation_alias="MONGO_AUTH_SOURCE", description="Authentication source")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",  # Ignore unrelated env vars from shared .env files
    )

    @property
    def connection_string(self) -> str:
        """
        Build MongoDB connection URI.

        Format: mongodb://[username]:[password]@[host]:[port]/[database]?authSource=[auth_source]

        Returns:
            MongoDB connection URI string
        """
        return (
            f"mongodb://{self.username}:{self.password}@"
            f"{self.host}:{self.port}/{self.database}?authSource={self.auth_source}"
        )


# =============================================================================
# Variant Loader Settings
# =============================================================================

class VariantLoaderSettings(BaseSettings):
    """
    Options for loading the variants of one source file.

    Maps environment variables with prefix "VARIANT_":
    - VARIANT_LOAD_FILE_ID → file_id
    - VARIANT_LOAD_INCLUDE_STATS → include_stats
    - VARIANT_LOAD_INCLUDE_SAMPLES → include_samples
    - VARIANT_LOAD_BULK_SIZE → bulk_size
    - VARIANT_COLLECTION → collection

    Attributes:
        file_id: Source file whose entries are loaded; entries of other files are skipped
        include_stats: Whether per-cohort statistics are accumulated (default: False)
        include_samples: Whether compressed sample genotypes are stored (default: False)
        bulk_size: Number of upserts per bulk write (default: 1000)
        collection: Target variants collection (default: "variants")
    """

    file_id: str = Field(..., min_length=1, validation_alias="VARIANT_LOAD_FILE_ID", description="Source file id to load")
    include_stats: bool = Field(False, validation_alias="VARIANT_LOAD_INCLUDE_STATS", description="Accumulate cohort statistics")
    include_samples: bool = Field(False, validation_alias="VARIANT_LOAD_INCLUDE_SAMPLES", description="Store compressed sample genotypes")
    bulk_size: int = Field(1000, ge=1, validation_alias="VARIANT_LOAD_BULK_SIZE", description="Upserts per bulk write")
    collection: str = Field("variants", validation_alias="VARIANT_COLLECTION", description="Target variants collection")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",  # Ignore unrelated env vars from shared .env files
        populate_by_name=True,
    )
