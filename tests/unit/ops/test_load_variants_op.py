# =============================================================================
# Unit Tests: Load Variants Op
# =============================================================================

import pytest
from unittest.mock import Mock
from dagster import build_op_context
from pydantic import ValidationError

from libs.models import Variant, VariantLoaderSettings
from libs.variant_storage import MalformedRecordError
from services.dagster.variant_pipelines.ops.load_variants_op import (
    LoadVariantsConfig,
    _load_variants,
    load_variants,
)


# =============================================================================
# Test: Core Logic (_load_variants)
# =============================================================================


def test_load_variants_success(variants_collection, valid_variant_dict):
    mock_log = Mock()

    summary = _load_variants(
        collection=variants_collection,
        variants=[valid_variant_dict],
        settings=VariantLoaderSettings(file_id="1", include_samples=True, bulk_size=10),
        log=mock_log,
    )

    assert summary == {
        "file_id": "1",
        "collection": "variants",
        "records_written": 1,
        "mutations_written": 1,
        "flush_count": 1,
    }

    document = variants_collection.find_one({"_id": "20_60343_G_A"})
    assert document["ids"] == ["rs527639301"]
    assert document["files"][0]["samp"] == {"def": "0|0", "0|1": [1]}

    log_calls = [str(call) for call in mock_log.info.call_args_list]
    assert any("Loading 1 variant(s) of file 1" in call for call in log_calls)
    assert any("1 upsert(s) in 1 bulk write(s)" in call for call in log_calls)


def test_load_variants_accepts_models_and_wrapped_input(variants_collection, valid_variant_dict):
    summary = _load_variants(
        collection=variants_collection,
        variants={"value": [Variant(**valid_variant_dict)]},
        settings=VariantLoaderSettings(file_id="1"),
        log=Mock(),
    )
    assert summary["mutations_written"] == 1


def test_load_variants_validates_before_writing(variants_collection, valid_variant_dict):
    invalid = {**valid_variant_dict, "start": "not-a-position"}

    with pytest.raises(ValidationError):
        _load_variants(
            collection=variants_collection,
            variants=[valid_variant_dict, invalid],
            settings=VariantLoaderSettings(file_id="1", bulk_size=1),
            log=Mock(),
        )

    assert variants_collection.bulk_calls == []


def test_load_variants_rejects_non_list(variants_collection):
    with pytest.raises(ValueError, match="Expected a list of variants"):
        _load_variants(
            collection=variants_collection,
            variants="20:60343:G:A",
            settings=VariantLoaderSettings(file_id="1"),
            log=Mock(),
        )


def test_load_variants_propagates_malformed_records(variants_collection, valid_variant_dict):
    malformed = {**valid_variant_dict, "chromosome": None}

    with pytest.raises(MalformedRecordError):
        _load_variants(
            collection=variants_collection,
            variants=[malformed],
            settings=VariantLoaderSettings(file_id="1"),
            log=Mock(),
        )


# =============================================================================
# Test: Op wiring
# =============================================================================


def test_load_variants_config_to_settings():
    settings = LoadVariantsConfig(file_id="4", include_stats=True, bulk_size=50).to_settings()
    assert settings.file_id == "4"
    assert settings.include_stats is True
    assert settings.include_samples is False
    assert settings.bulk_size == 50
    assert settings.collection == "variants"


def test_load_variants_op(variants_collection, valid_variant_dict):
    mock_mongodb = Mock()
    mock_mongodb.get_variants_collection.return_value = variants_collection
    context = build_op_context(resources={"mongodb": mock_mongodb})

    summary = load_variants(
        context,
        config=LoadVariantsConfig(file_id="1", bulk_size=10, collection="variants_test"),
        variants=[valid_variant_dict],
    )

    mock_mongodb.get_variants_collection.assert_called_once_with("variants_test")
    assert summary["collection"] == "variants_test"
    assert summary["mutations_written"] == 1
    assert variants_collection.count_documents({}) == 1
