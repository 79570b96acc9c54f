"""
Balance Quantizer — quick-fill суммы "max" и "half" из баланса

Вычисляет суммы для кнопок MAX / 50%:
- max = floor(balance * multiplier, decimals), trailing zeros удалены
- half = max с multiplier 0.5
- Для нативного актива сети применяется резерв на комиссии

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Результат никогда не превышает balance * multiplier (floor, не round)
2. Результат никогда не отрицательный
3. Резерв применяется только к нативному активу ReservePolicy
4. Если headroom (balance_max - candidate) >= reserve, кандидат не меняется
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Final, Optional

from token_input.core.domain.asset import Asset
from token_input.core.domain.reserve import ReservePolicy
from token_input.core.math.decimal_safeguards import (
    DEFAULT_DECIMALS,
    DecimalLike,
    exact_multiply,
    exact_subtract,
    floor_to_decimals,
    to_canonical_string,
    to_decimal,
)

logger = logging.getLogger(__name__)

# Множитель для кнопки MAX
MAX_MULTIPLIER: Final[Decimal] = Decimal(1)

# Множитель для кнопки 50%
HALF_MULTIPLIER: Final[Decimal] = Decimal("0.5")


# =============================================================================
# MAX
# =============================================================================


def compute_max(
    balance: DecimalLike,
    multiplier: DecimalLike = MAX_MULTIPLIER,
    decimals: Optional[int] = None,
    hide_balance: bool = False,
) -> Optional[str]:
    """
    Максимальная сумма из баланса.

    Args:
        balance: Баланс (absent → 0)
        multiplier: Множитель (absent или 0 → 1)
        decimals: Точность актива (None → DEFAULT_DECIMALS)
        hide_balance: Вызывающий скрывает баланс → None

    Returns:
        Каноническая строка или None при hide_balance

    Examples:
        >>> compute_max("12.345678", 1, 6)
        '12.345678'
        >>> compute_max("10", "0.5", 0)
        '5'
    """
    if hide_balance:
        return None

    balance_dec = to_decimal(balance) or Decimal(0)
    multiplier_dec = to_decimal(multiplier)
    if multiplier_dec is None or multiplier_dec.is_zero():
        multiplier_dec = MAX_MULTIPLIER
    precision = DEFAULT_DECIMALS if decimals is None else decimals

    floored = floor_to_decimals(exact_multiply(balance_dec, multiplier_dec), precision)
    return to_canonical_string(floored)


# =============================================================================
# RESERVE
# =============================================================================


def apply_reserve(
    candidate: str,
    asset: Optional[Asset],
    balance_max: Optional[str],
    reserve_policy: ReservePolicy,
) -> str:
    """
    Применение резерва нативного актива к quick-fill кандидату.

    Алгоритм:
    1. Актив не нативный → candidate без изменений
    2. headroom = balance_max - candidate; headroom >= reserve → без изменений
    3. Иначе max(candidate - reserve, 0), trailing zeros удалены

    Args:
        candidate: Сумма-кандидат (каноническая строка)
        asset: Текущий актив
        balance_max: Max из баланса (None — баланс скрыт, резерв не применяется)
        reserve_policy: Политика резерва

    Returns:
        Скорректированная каноническая строка (никогда не отрицательная)

    Examples:
        >>> policy = ReservePolicy(native_address="SOL", reserve_amount="0.01")
        >>> sol = Asset(address="SOL", decimals=9)
        >>> apply_reserve("5", sol, "5", policy)
        '4.99'
        >>> apply_reserve("3", sol, "5", policy)
        '3'
    """
    if asset is None or not reserve_policy.applies_to(asset.address):
        return candidate

    max_dec = to_decimal(balance_max)
    candidate_dec = to_decimal(candidate)
    if max_dec is None or candidate_dec is None:
        return candidate

    reserve = reserve_policy.reserve_amount
    headroom = exact_subtract(max_dec, candidate_dec)
    if headroom >= reserve:
        return candidate

    adjusted = exact_subtract(candidate_dec, reserve)
    if adjusted < 0:
        adjusted = Decimal(0)

    result = to_canonical_string(floor_to_decimals(adjusted, asset.decimals))
    logger.debug(
        "Native reserve applied: candidate=%s, balance_max=%s, reserve=%s, result=%s",
        candidate,
        balance_max,
        reserve,
        result,
    )
    return result


# =============================================================================
# QUICK-FILL
# =============================================================================


def compute_half(
    balance: DecimalLike,
    asset: Asset,
    balance_max: Optional[str],
    reserve_policy: ReservePolicy,
) -> str:
    """50% баланса с учётом резерва."""
    half = compute_max(balance, HALF_MULTIPLIER, asset.decimals) or "0"
    return apply_reserve(half, asset, balance_max, reserve_policy)


def compute_quick_max(
    balance: DecimalLike,
    asset: Asset,
    balance_max: Optional[str],
    reserve_policy: ReservePolicy,
) -> str:
    """100% баланса с учётом резерва."""
    full = compute_max(balance, MAX_MULTIPLIER, asset.decimals) or "0"
    return apply_reserve(full, asset, balance_max, reserve_policy)


@dataclass(frozen=True)
class QuickFillAmounts:
    """Кандидаты quick-fill для текущего актива."""

    balance_max: Optional[str]
    max_amount: Optional[str]
    half_amount: Optional[str]


@dataclass(frozen=True)
class BalanceQuantizer:
    """
    Quantizer, привязанный к политике резерва и флагу hide_balance.

    max_multiplier применяется только к balance_max (строка баланса и
    базис для headroom); half всегда считается от полного баланса.
    """

    reserve_policy: ReservePolicy = field(default_factory=ReservePolicy)
    max_multiplier: Decimal = MAX_MULTIPLIER
    hide_balance: bool = False

    def balance_max(self, balance: DecimalLike, decimals: Optional[int]) -> Optional[str]:
        return compute_max(balance, self.max_multiplier, decimals, self.hide_balance)

    def quick_fill(
        self,
        balance: DecimalLike,
        asset: Optional[Asset],
        force_balance_amount: DecimalLike = None,
    ) -> QuickFillAmounts:
        """
        Кандидаты MAX / 50%.

        force_balance_amount заменяет баланс кошелька (например, когда
        хост задаёт доступную сумму сам) и тоже усекается до decimals актива.

        Returns:
            QuickFillAmounts; max/half = None если суммы нет
            (баланс скрыт и force не задан, или актив не выбран)
        """
        if asset is None:
            return QuickFillAmounts(balance_max=None, max_amount=None, half_amount=None)

        balance_max = self.balance_max(balance, asset.decimals)

        forced = to_decimal(force_balance_amount)
        if forced is not None:
            max_string = to_canonical_string(floor_to_decimals(forced, asset.decimals))
            source = forced
        else:
            max_string = balance_max
            source = to_decimal(balance) or Decimal(0)

        if max_string is None:
            return QuickFillAmounts(balance_max=balance_max, max_amount=None, half_amount=None)

        return QuickFillAmounts(
            balance_max=balance_max,
            max_amount=apply_reserve(max_string, asset, balance_max, self.reserve_policy),
            half_amount=compute_half(source, asset, balance_max, self.reserve_policy),
        )
