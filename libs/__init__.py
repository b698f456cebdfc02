# =============================================================================
# Variant Loader Shared Libraries
# =============================================================================
# This package contains shared libraries for the variant loading pipeline.
# See individual sub-packages for detailed documentation.
# =============================================================================

"""
Variant loader shared libraries.

Sub-packages:
- models: Pydantic data models and settings
- variant_storage: MongoDB document converters and the batched upsert writer
"""

__version__ = "0.1.0"
