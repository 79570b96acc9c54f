"""
Контракты внешних данных: записи реестра активов и mapping конфигурации.

Каждый контракт — JSON Schema (Draft 2020-12) в schema/ рядом с модулем,
схемы устанавливаются вместе с пакетом. Схема проверяется на meta-уровне
один раз при первой загрузке.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator, Mapping

import jsonschema
from jsonschema import Draft202012Validator

from token_input.core.domain.asset import Asset

SCHEMA_DIR = Path(__file__).parent / "schema"

ASSET_CONTRACT = "asset"
TOKEN_INPUT_CONFIG_CONTRACT = "token_input_config"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """Читает и кэширует схемы контрактов по имени (без .json)."""

    def __init__(self, schema_dir: Path = SCHEMA_DIR):
        if not schema_dir.is_dir():
            raise RuntimeError(f"Contract schemas missing from the package: {schema_dir}")
        self._schema_dir = schema_dir
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Raises:
            FileNotFoundError: нет файла schema/<schema_name>.json
            ValueError: файл не является корректной Draft 2020-12 схемой
        """
        cached = self._schemas.get(schema_name)
        if cached is not None:
            return cached

        path = self._schema_dir / f"{schema_name}.json"
        if not path.is_file():
            raise FileNotFoundError(f"No contract named '{schema_name}' in {self._schema_dir}")

        schema = json.loads(path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Contract '{schema_name}' is not a valid schema: {e.message}")

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Проверка mapping против одного контракта.

    Подклассы задают только contract_name.
    """

    contract_name: str = ""

    def __init__(self, contract_name: str = ""):
        self.contract_name = contract_name or self.contract_name
        self.schema = _SCHEMA_LOADER.load_schema(self.contract_name)
        self._validator = Draft202012Validator(self.schema)

    def validate(self, data: Mapping[str, Any]) -> None:
        """Raises jsonschema.ValidationError на первом нарушении."""
        self._validator.validate(data)

    def is_valid(self, data: Mapping[str, Any]) -> bool:
        return self._validator.is_valid(data)

    def iter_errors(self, data: Mapping[str, Any]) -> Iterator[jsonschema.ValidationError]:
        return self._validator.iter_errors(data)


class AssetRecordValidator(ContractValidator):
    """Запись актива в формате token list (address, decimals, tags, type, userAdded)."""

    contract_name = ASSET_CONTRACT


class TokenInputConfigValidator(ContractValidator):
    contract_name = TOKEN_INPUT_CONFIG_CONTRACT


# =============================================================================
# ENTRY POINTS
# =============================================================================


def validate_asset_record(data: Mapping[str, Any]) -> None:
    AssetRecordValidator().validate(data)


def validate_token_input_config(data: Mapping[str, Any]) -> None:
    TokenInputConfigValidator().validate(data)


def asset_from_record(data: Mapping[str, Any]) -> Asset:
    """
    Запись реестра → Asset.

    Контракт проверяется до построения модели: запись без decimals
    отклоняется как jsonschema.ValidationError, а не как ошибка pydantic.
    """
    validate_asset_record(data)
    return Asset.model_validate(dict(data))
