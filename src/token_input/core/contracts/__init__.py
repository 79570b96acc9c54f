"""
Contract Validation Module

Модуль для валидации JSON контрактов: записи активов и конфигурация.
"""

from .validators import (
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

__all__ = [
    # Contract names
    "ASSET_CONTRACT",
    "TOKEN_INPUT_CONFIG_CONTRACT",
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "AssetRecordValidator",
    "TokenInputConfigValidator",
    # Functions
    "validate_asset_record",
    "validate_token_input_config",
    "asset_from_record",
]
