"""
Asset — Модель fungible-актива

Immutable Pydantic модель записи актива из реестра.
Совместима с JSON Schema (core/contracts/schema/asset.json).

Запись никогда не мутирует: "добавить как доверенный" создаёт новую
запись с user_added=True через as_user_added().
"""

from typing import Final, Optional

from pydantic import BaseModel, Field, field_validator


# =============================================================================
# КЛАССИФИКАЦИОННЫЕ КОНСТАНТЫ
# =============================================================================

# Тег: актив без верифицированных метаданных
TAG_UNKNOWN: Final[str] = "unknown"

# Тег: у эмитента есть freeze authority
TAG_HAS_FREEZE: Final[str] = "hasFreeze"

# Значение type для неклассифицированного актива
TYPE_UNKNOWN: Final[str] = "unknown"


# =============================================================================
# ASSET MODEL
# =============================================================================


class Asset(BaseModel):
    """
    Запись fungible-актива.

    Идентифицируется уникальным address. decimals задаёт точность
    (число знаков дробной части минимальной единицы).
    """

    address: str = Field(..., min_length=1, description="Уникальный адрес актива")
    decimals: int = Field(..., ge=0, description="Число знаков дробной части")
    symbol: str = Field(default="", description="Тикер актива")
    name: Optional[str] = Field(default=None, description="Отображаемое имя")
    tags: frozenset[str] = Field(
        default_factory=frozenset, description="Классификационные теги"
    )
    type: Optional[str] = Field(
        default=None, description="Классификация актива (nullable)"
    )
    user_added: bool = Field(
        default=False,
        alias="userAdded",
        description="Актив добавлен пользователем как доверенный",
    )

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("tags", mode="before")
    @classmethod
    def coerce_tags(cls, v):
        """Теги приходят списком из JSON, храним как frozenset"""
        if v is None:
            return frozenset()
        return frozenset(v)

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    @property
    def lacks_classification(self) -> bool:
        """Нет type, type == "unknown" или тег "unknown"."""
        return (
            not self.type
            or self.type == TYPE_UNKNOWN
            or TAG_UNKNOWN in self.tags
        )

    @property
    def has_freeze_authority(self) -> bool:
        return TAG_HAS_FREEZE in self.tags

    def as_user_added(self) -> "Asset":
        """Новая запись с user_added=True (исходная не меняется)."""
        return self.model_copy(update={"user_added": True})

    def to_record(self) -> dict:
        """Сериализация в JSON-совместимый dict (camelCase aliases)."""
        data = self.model_dump(by_alias=True)
        data["tags"] = sorted(self.tags)
        return data
