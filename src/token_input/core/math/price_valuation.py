"""
Price Valuation — display-стоимость суммы

value = unit_price * amount, без floor: округление делает форматирование
на стороне display. Произведение точное при любой длине операндов.
"""

from typing import Optional

from token_input.core.math.decimal_safeguards import (
    DecimalLike,
    exact_multiply,
    to_canonical_string,
    to_decimal,
)


def valuate(amount: Optional[str], unit_price: DecimalLike) -> str:
    """
    Стоимость суммы по цене за единицу.

    Args:
        amount: Нормализованная сумма ("" / None — отсутствует)
        unit_price: Цена за единицу (None — цена не загружена)

    Returns:
        Decimal-строка или "" если сумма/цена отсутствуют

    Examples:
        >>> valuate("2.5", "1.2")
        '3'
        >>> valuate("", "1.2")
        ''
    """
    if not amount:
        return ""

    price_dec = to_decimal(unit_price)
    amount_dec = to_decimal(amount)
    if price_dec is None or amount_dec is None:
        return ""

    return to_canonical_string(exact_multiply(price_dec, amount_dec))
