"""
Tests for JSON Schema Contract Validators

Комплексное тестирование JSON Schema валидаторов:
- Валидность самих схем
- Валидация правильных данных
- Детекция нарушений required полей и типов
- Интеграция с Pydantic моделями и конфигурацией
"""

from decimal import Decimal

import pytest
from jsonschema import ValidationError

from token_input.core.contracts import (
    ASSET_CONTRACT,
    TOKEN_INPUT_CONFIG_CONTRACT,
    AssetRecordValidator,
    ContractValidator,
    SchemaLoader,
    TokenInputConfigValidator,
    asset_from_record,
    validate_asset_record,
    validate_token_input_config,
)
from token_input.panel import TokenInputConfig


@pytest.fixture
def valid_asset_record():
    """Валидная запись актива (формат token list)."""
    return {
        "chainId": 101,
        "address": "4k3Dyjzvzp8eMZWUXbBCjEvwSkkk59S5iCNLY3QrkX6R",
        "programId": "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA",
        "logoURI": "https://example.invalid/ray.png",
        "symbol": "RAY",
        "name": "Raydium",
        "decimals": 6,
        "tags": [],
        "type": "raydium",
        "extensions": {},
    }


# =============================================================================
# SCHEMAS
# =============================================================================


class TestSchemaLoader:
    def test_schemas_load(self) -> None:
        loader = SchemaLoader()
        assert loader.load_schema("asset")["title"] == "Asset"
        assert loader.load_schema("token_input_config")["title"] == "TokenInputConfig"

    def test_schema_cached(self) -> None:
        loader = SchemaLoader()
        assert loader.load_schema("asset") is loader.load_schema("asset")

    def test_missing_schema(self) -> None:
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("does_not_exist")

    def test_missing_schema_dir(self, tmp_path) -> None:
        with pytest.raises(RuntimeError, match="schemas missing"):
            SchemaLoader(tmp_path / "absent")

    def test_invalid_schema_rejected(self, tmp_path) -> None:
        (tmp_path / "broken.json").write_text('{"type": 42}', encoding="utf-8")
        with pytest.raises(ValueError, match="broken"):
            SchemaLoader(tmp_path).load_schema("broken")

    def test_validator_by_contract_name(self, valid_asset_record) -> None:
        assert ContractValidator(ASSET_CONTRACT).is_valid(valid_asset_record)
        assert TokenInputConfigValidator().contract_name == TOKEN_INPUT_CONFIG_CONTRACT


# =============================================================================
# ASSET RECORD
# =============================================================================


class TestAssetRecord:
    def test_valid_record(self, valid_asset_record) -> None:
        validate_asset_record(valid_asset_record)
        assert AssetRecordValidator().is_valid(valid_asset_record)

    def test_missing_decimals(self, valid_asset_record) -> None:
        del valid_asset_record["decimals"]
        with pytest.raises(ValidationError):
            validate_asset_record(valid_asset_record)

    def test_negative_decimals(self, valid_asset_record) -> None:
        valid_asset_record["decimals"] = -1
        assert not AssetRecordValidator().is_valid(valid_asset_record)

    def test_null_type_allowed(self, valid_asset_record) -> None:
        valid_asset_record["type"] = None
        validate_asset_record(valid_asset_record)

    def test_tags_must_be_strings(self, valid_asset_record) -> None:
        valid_asset_record["tags"] = [1]
        errors = list(AssetRecordValidator().iter_errors(valid_asset_record))
        assert len(errors) == 1

    def test_asset_from_record(self, valid_asset_record) -> None:
        valid_asset_record["tags"] = ["hasFreeze"]
        valid_asset_record["userAdded"] = True
        asset = asset_from_record(valid_asset_record)
        assert asset.symbol == "RAY"
        assert asset.decimals == 6
        assert asset.has_freeze_authority
        assert asset.user_added is True

    def test_asset_from_invalid_record(self) -> None:
        with pytest.raises(ValidationError):
            asset_from_record({"address": "A"})

    def test_record_round_trip_through_model(self, valid_asset_record) -> None:
        asset = asset_from_record(valid_asset_record)
        validate_asset_record(asset.to_record())


# =============================================================================
# CONFIG
# =============================================================================


class TestTokenInputConfigContract:
    def test_empty_mapping_valid(self) -> None:
        validate_token_input_config({})

    def test_unknown_key_rejected(self) -> None:
        with pytest.raises(ValidationError):
            validate_token_input_config({"decimalSeparator": ","})

    def test_digit_separator_rejected(self) -> None:
        assert not TokenInputConfigValidator().is_valid({"decimal_separator": "1"})

    def test_negative_reserve_rejected(self) -> None:
        with pytest.raises(ValidationError):
            validate_token_input_config({"reserve_amount": "-1"})

    def test_config_from_mapping(self) -> None:
        config = TokenInputConfig.from_mapping(
            {
                "decimal_separator": ",",
                "native_address": "NativeMint",
                "reserve_amount": "0.05",
                "context": "liquidity",
                "hide_balance": True,
                "max_multiplier": 0.5,
                "force_balance_amount": "10",
                "disable_click_balance": True,
                "show_user_added_as_trusted": False,
            }
        )
        assert config.decimal_separator == ","
        assert config.reserve_policy.native_address == "NativeMint"
        assert config.reserve_policy.reserve_amount == Decimal("0.05")
        assert config.context == "liquidity"
        assert config.hide_balance is True
        assert config.max_multiplier == Decimal("0.5")
        assert config.force_balance_amount == Decimal("10")
        assert config.disable_click_balance is True
        assert config.show_user_added_as_trusted is False

    def test_config_from_empty_mapping_uses_defaults(self) -> None:
        assert TokenInputConfig.from_mapping({}) == TokenInputConfig()

    def test_config_from_invalid_mapping(self) -> None:
        with pytest.raises(ValidationError):
            TokenInputConfig.from_mapping({"hide_balance": "yes"})

    def test_direct_config_validation(self) -> None:
        with pytest.raises(ValueError, match="max_multiplier"):
            TokenInputConfig(max_multiplier=Decimal("-1"))
        with pytest.raises(ValueError, match="single character"):
            TokenInputConfig(decimal_separator="")
