"""GATE 0: Unknown Token — актив без верифицированной классификации

- Первый gate в цепочке выбора актива
- Требует подтверждения, если актив не классифицирован:
  * type отсутствует
  * type == "unknown"
  * тег "unknown"
- Исключение: актив уже зарегистрирован в реестре как user_added И
  настройка "показывать user-added как доверенные" включена

Интеграция:
- Читает реестр (lookup по address), не пишет в него
- Persist выполняет state machine после подтверждения
"""

import logging
from dataclasses import dataclass

from token_input.core.domain.asset import Asset
from token_input.core.domain.providers import AssetRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Gate00Result:
    """Результат GATE 0."""

    confirmation_required: bool
    reason: str

    # Диагностика
    address: str
    lacks_classification: bool
    registered_user_added: bool
    show_user_added_as_trusted: bool

    # Детали
    details: str


class Gate00UnknownToken:
    """GATE 0: Unknown Token.

    Порядок проверок:
    1. Классификация актива (type / tags) → классифицирован → PASS
    2. Запись в реестре с user_added → доверенный при включённой настройке → PASS
    3. Иначе → требуется подтверждение
    """

    def __init__(self, registry: AssetRegistry):
        self.registry = registry

    def evaluate(self, asset: Asset, show_user_added_as_trusted: bool) -> Gate00Result:
        """Оценка GATE 0.

        Args:
            asset: актив-кандидат
            show_user_added_as_trusted: настройка хоста

        Returns:
            Gate00Result с решением о необходимости подтверждения
        """
        lacks_classification = asset.lacks_classification

        # 1. Классифицированный актив
        if not lacks_classification:
            return self._result(
                asset,
                confirmation_required=False,
                reason="",
                lacks_classification=False,
                registered_user_added=False,
                show_user_added_as_trusted=show_user_added_as_trusted,
                details=f"PASS: type={asset.type}",
            )

        # 2. Доверенный user-added
        registered = self.registry.lookup(asset.address)
        registered_user_added = registered is not None and registered.user_added

        if registered_user_added and show_user_added_as_trusted:
            return self._result(
                asset,
                confirmation_required=False,
                reason="",
                lacks_classification=True,
                registered_user_added=True,
                show_user_added_as_trusted=True,
                details="PASS: unknown asset previously added by user",
            )

        # 3. Требуется подтверждение
        if registered_user_added:
            reason = "unknown_token_user_added_hidden"
            details = "Unknown asset is user-added, but user-added assets are not trusted"
        else:
            reason = "unknown_token"
            details = f"Unknown asset: type={asset.type}, tags={sorted(asset.tags)}"

        return self._result(
            asset,
            confirmation_required=True,
            reason=reason,
            lacks_classification=True,
            registered_user_added=registered_user_added,
            show_user_added_as_trusted=show_user_added_as_trusted,
            details=details,
        )

    def _result(self, asset: Asset, **kwargs) -> Gate00Result:
        result = Gate00Result(address=asset.address, **kwargs)
        logger.debug("GATE 0 %s: %s", asset.address, result.details)
        return result
