"""GATE 1: Freeze Risk — у эмитента есть freeze authority

- Второй gate в цепочке (после GATE 0 или после подтверждения unknown)
- Freeze risk: тег "hasFreeze" И адрес не в whitelist
- Подтверждение требуется только в контексте "swap"
- Вне swap-контекста актив проходит, но с warning в лог

Интеграция:
- Whitelist передаётся как read-only provider
"""

import logging
from dataclasses import dataclass
from typing import Final

from token_input.core.domain.asset import Asset
from token_input.core.domain.providers import WhitelistProvider

logger = logging.getLogger(__name__)

# Контекст, в котором freeze-risk требует подтверждения
SWAP_CONTEXT: Final[str] = "swap"


@dataclass(frozen=True)
class Gate01Result:
    """Результат GATE 1."""

    confirmation_required: bool
    reason: str

    # Диагностика
    address: str
    is_freeze_risk: bool
    is_whitelisted: bool
    context: str

    # Детали
    details: str


class Gate01FreezeRisk:
    """GATE 1: Freeze Risk.

    Порядок проверок:
    1. Нет тега hasFreeze → PASS
    2. Адрес в whitelist → PASS
    3. Контекст swap → требуется подтверждение
    4. Другой контекст → PASS с warning
    """

    def __init__(self, whitelist: WhitelistProvider, context: str = SWAP_CONTEXT):
        self.whitelist = whitelist
        self.context = context

    def is_freeze_risk(self, asset: Asset) -> bool:
        return asset.has_freeze_authority and not self.whitelist.contains(asset.address)

    def evaluate(self, asset: Asset) -> Gate01Result:
        if not asset.has_freeze_authority:
            return Gate01Result(
                confirmation_required=False,
                reason="",
                address=asset.address,
                is_freeze_risk=False,
                is_whitelisted=False,
                context=self.context,
                details="PASS: no freeze authority",
            )

        if self.whitelist.contains(asset.address):
            return Gate01Result(
                confirmation_required=False,
                reason="",
                address=asset.address,
                is_freeze_risk=False,
                is_whitelisted=True,
                context=self.context,
                details="PASS: freeze authority, whitelisted",
            )

        if self.context == SWAP_CONTEXT:
            return Gate01Result(
                confirmation_required=True,
                reason="freeze_risk",
                address=asset.address,
                is_freeze_risk=True,
                is_whitelisted=False,
                context=self.context,
                details=f"Freeze authority in '{self.context}' context: confirmation required",
            )

        logger.warning(
            "Asset %s (%s) has freeze authority, committed without confirmation in '%s' context",
            asset.address,
            asset.symbol,
            self.context,
        )
        return Gate01Result(
            confirmation_required=False,
            reason="",
            address=asset.address,
            is_freeze_risk=True,
            is_whitelisted=False,
            context=self.context,
            details=f"PASS: freeze authority outside '{SWAP_CONTEXT}' context",
        )
