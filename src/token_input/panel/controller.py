"""TokenInputController — логика поля ввода суммы и выбора актива.

Связывает конфигурацию, read-only провайдеры и четыре компонента:
- AmountNormalizer: сырой ввод → каноническая сумма
- BalanceQuantizer: MAX / 50% с резервом нативного актива
- PriceValuation: display-стоимость
- TokenSelectionWorkflow: gates подтверждения выбора актива

Сигналы хосту: on_amount_change(amount), on_token_committed(asset), on_focus().
Балансы и цены читаются из провайдеров в момент вычисления (снапшот).
"""

import logging
from decimal import Decimal
from typing import Callable, Optional, Union

from token_input.core.domain.asset import Asset
from token_input.core.domain.providers import (
    AssetRegistry,
    BalanceProvider,
    PriceProvider,
    SelectionSurface,
    WhitelistProvider,
)
from token_input.core.math.amount_normalizer import AmountNormalizer
from token_input.core.math.balance_quantizer import BalanceQuantizer, QuickFillAmounts
from token_input.core.math.decimal_safeguards import round_half_up, to_plain_string
from token_input.core.math.price_valuation import valuate
from token_input.panel.config import TokenInputConfig
from token_input.selection.state_machine import (
    SelectionTransitionResult,
    TokenSelectionWorkflow,
)

logger = logging.getLogger(__name__)

# Знаков в строке баланса
BALANCE_LABEL_DECIMALS = 6

AmountListener = Callable[[str], None]
TokenListener = Callable[[Asset], None]
FocusListener = Callable[[], None]


class TokenInputController:
    """Контроллер поля ввода.

    Хранит текущую сумму и текущий актив; всё остальное вычисляется
    заново из снапшотов провайдеров при каждом обращении.
    """

    def __init__(
        self,
        registry: AssetRegistry,
        balances: BalanceProvider,
        prices: PriceProvider,
        whitelist: WhitelistProvider,
        config: Optional[TokenInputConfig] = None,
        surface: Optional[SelectionSurface] = None,
        token: Union[Asset, str, None] = None,
        value: str = "",
        on_amount_change: Optional[AmountListener] = None,
        on_token_committed: Optional[TokenListener] = None,
        on_focus: Optional[FocusListener] = None,
    ):
        """
        Args:
            registry: реестр активов
            balances: провайдер балансов
            prices: провайдер цен
            whitelist: whitelist freeze-предупреждений
            config: конфигурация (default TokenInputConfig())
            surface: поверхность выбора актива
            token: начальный актив или его address (резолвится через registry)
            value: начальная сумма (каноническая)
            on_amount_change / on_token_committed / on_focus: сигналы хосту
        """
        self.config = config or TokenInputConfig()
        self.registry = registry
        self.balances = balances
        self.prices = prices

        self.on_amount_change = on_amount_change
        self.on_token_committed = on_token_committed
        self.on_focus = on_focus

        self.normalizer = AmountNormalizer(self.config.decimal_separator)
        self.quantizer = BalanceQuantizer(
            reserve_policy=self.config.reserve_policy,
            max_multiplier=self.config.max_multiplier,
            hide_balance=self.config.hide_balance,
        )
        self.workflow = TokenSelectionWorkflow(
            registry=registry,
            whitelist=whitelist,
            context=self.config.context,
            show_user_added_as_trusted=self.config.show_user_added_as_trusted,
            surface=surface,
            on_token_committed=self._handle_token_committed,
        )

        self._token = registry.lookup(token) if isinstance(token, str) else token
        self._value = value
        self._preselected_address: Optional[str] = None

    # -------------------------------------------------------------------------
    # Snapshot
    # -------------------------------------------------------------------------

    @property
    def token(self) -> Optional[Asset]:
        return self._token

    @property
    def decimals(self) -> Optional[int]:
        return self._token.decimals if self._token is not None else None

    @property
    def value(self) -> str:
        return self._value

    @property
    def display_amount(self) -> str:
        """Текущая сумма, усечённая до точности актива."""
        return self.normalizer.clamp(self._value, self.decimals) or ""

    @property
    def display_text(self) -> str:
        """display_amount в locale-форме (с настроенным разделителем)."""
        return self.normalizer.to_display(self.display_amount)

    @property
    def balance(self) -> Optional[Decimal]:
        if self._token is None:
            return None
        return self.balances.get_balance(self._token.address)

    @property
    def unit_price(self) -> Optional[Decimal]:
        if self._token is None:
            return None
        address = self._token.address
        return self.prices.get_prices([address]).get(address)

    @property
    def quick_fill(self) -> QuickFillAmounts:
        return self.quantizer.quick_fill(
            self.balance, self._token, self.config.force_balance_amount
        )

    @property
    def max_string(self) -> Optional[str]:
        return self.quick_fill.max_amount

    @property
    def total_value(self) -> str:
        return valuate(self.display_amount, self.unit_price)

    @property
    def balance_label(self) -> str:
        """Баланс с 6 знаками и тикером: "12.500000 SOL"."""
        amount = self.balance if self.balance is not None else Decimal(0)
        text = to_plain_string(round_half_up(amount, BALANCE_LABEL_DECIMALS))
        symbol = self._token.symbol if self._token is not None else ""
        return f"{text} {symbol}".strip()

    # -------------------------------------------------------------------------
    # Ввод суммы
    # -------------------------------------------------------------------------

    def handle_change(self, raw: Optional[str]) -> str:
        """Сырой ввод → нормализованная сумма → on_amount_change."""
        normalized = self.normalizer.normalize(raw, self.decimals)
        self._set_value(normalized)
        return normalized

    def handle_focus(self) -> None:
        """Фокус: сумма "0" очищается, затем on_focus."""
        if self.display_amount == "0":
            self._set_value("")
        if self.on_focus is not None:
            self.on_focus()

    def set_value(self, value: str) -> None:
        """Значение от хоста (controlled input), без сигнала."""
        self._value = value

    def click_max(self) -> Optional[str]:
        if self.config.disable_click_balance:
            return None
        amount = self.quick_fill.max_amount
        if amount is None:
            return None
        self.handle_focus()
        self._set_value(amount)
        return amount

    def click_half(self) -> Optional[str]:
        amount = self.quick_fill.half_amount
        if amount is None:
            return None
        self.handle_focus()
        self._set_value(amount)
        return amount

    # -------------------------------------------------------------------------
    # Выбор актива
    # -------------------------------------------------------------------------

    def open_selector(self) -> SelectionTransitionResult:
        return self.workflow.open_selector()

    def close_selector(self) -> SelectionTransitionResult:
        return self.workflow.close_selector()

    def select_token(self, asset: Asset) -> SelectionTransitionResult:
        return self.workflow.select_token(asset)

    def confirm_unknown(self) -> SelectionTransitionResult:
        return self.workflow.confirm_unknown()

    def cancel_unknown(self) -> SelectionTransitionResult:
        return self.workflow.cancel_unknown()

    def confirm_freeze(self) -> SelectionTransitionResult:
        return self.workflow.confirm_freeze()

    def cancel_freeze(self) -> SelectionTransitionResult:
        return self.workflow.cancel_freeze()

    def preselect(self, asset: Optional[Asset]) -> Optional[SelectionTransitionResult]:
        """
        Актив, заданный хостом (например, из deep link).

        Проходит те же gates, что и ручной выбор. Повтор с тем же
        address игнорируется.
        """
        if asset is None or asset.address == self._preselected_address:
            return None
        self._preselected_address = asset.address
        return self.workflow.select_token(asset)

    # -------------------------------------------------------------------------
    # Внутреннее
    # -------------------------------------------------------------------------

    def _set_value(self, value: str) -> None:
        self._value = value
        if self.on_amount_change is not None:
            self.on_amount_change(value)

    def _handle_token_committed(self, asset: Asset) -> None:
        self._token = asset
        if self.on_token_committed is not None:
            self.on_token_committed(asset)

        clamped = self.normalizer.clamp(self._value, asset.decimals)
        if clamped != self._value:
            logger.info(
                "Amount %s clamped to %s for %s (decimals=%s)",
                self._value,
                clamped,
                asset.symbol,
                asset.decimals,
            )
            self._set_value(clamped or "")
