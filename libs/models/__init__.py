# =============================================================================
# Data Models Library
# =============================================================================
# Pydantic models and settings for the variant loader.
# =============================================================================

"""
Data models for the variant loader.

This library provides:
- Variant: Parsed variant record with per-file source entries
- VariantSourceEntry / VariantStats: Per-file observation and cohort statistics
- Configuration models
"""

__version__ = "0.1.0"

# Variant models
from .variant import (
    SV_THRESHOLD,
    VariantType,
    VariantStats,
    VariantSourceEntry,
    Variant,
    infer_variant_type,
)

# Configuration models
from .config import (
    MongoSettings,
    VariantLoaderSettings,
)

__all__ = [
    # Variant models
    "SV_THRESHOLD",
    "VariantType",
    "VariantStats",
    "VariantSourceEntry",
    "Variant",
    "infer_variant_type",
    # Configuration models
    "MongoSettings",
    "VariantLoaderSettings",
]
