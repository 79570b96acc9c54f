"""
Decimal Safeguards — безопасные примитивы для arbitrary-precision сумм

Модуль обеспечивает точную арифметику для сумм, балансов и цен:
- Санитизация входов (str/int/Decimal/None) в Decimal без float-ошибок
- Квантование до заданного числа знаков (floor / round toward zero)
- Каноническое строковое представление (без экспоненты, без trailing zeros)
- Валидация decimals и символа разделителя

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Float никогда не попадает в Decimal напрямую (только через str())
2. Невалидный вход превращается в None (absent), а не в exception
3. Каноническая строка никогда не содержит экспоненту ("1E-7" → "0.0000001")
4. Квантование никогда не округляет вверх
5. Точность контекста подбирается по операндам: суммы любой длины
   квантуются и перемножаются без потери цифр
"""

from decimal import (
    ROUND_DOWN,
    ROUND_FLOOR,
    ROUND_HALF_UP,
    Decimal,
    InvalidOperation,
    localcontext,
)
from typing import Final, Optional, Union

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Канонический разделитель дробной части
CANONICAL_SEPARATOR: Final[str] = "."

# Точность по умолчанию, если decimals актива неизвестен
DEFAULT_DECIMALS: Final[int] = 6

DecimalLike = Union[str, int, float, Decimal, None]


# =============================================================================
# САНИТИЗАЦИЯ
# =============================================================================


def to_decimal(value: DecimalLike) -> Optional[Decimal]:
    """
    Преобразование входа в Decimal.

    Args:
        value: str / int / float / Decimal / None

    Returns:
        Decimal или None, если значение отсутствует или невалидно
        (пустая строка, мусор, NaN, Inf)

    Examples:
        >>> to_decimal("12.5")
        Decimal('12.5')
        >>> to_decimal(0.1)
        Decimal('0.1')
        >>> to_decimal("") is None
        True
    """
    if value is None:
        return None

    if isinstance(value, bool):
        return None

    if isinstance(value, Decimal):
        result = value
    else:
        # float идёт через str(), иначе Decimal(0.1) = 0.1000000000000000055...
        text = str(value).strip()
        if not text:
            return None
        try:
            result = Decimal(text)
        except InvalidOperation:
            return None

    if not result.is_finite():
        return None

    return result


def is_absent_or_zero(value: DecimalLike) -> bool:
    """True если значение отсутствует, невалидно или равно нулю."""
    dec = to_decimal(value)
    return dec is None or dec.is_zero()


# =============================================================================
# КВАНТОВАНИЕ
# =============================================================================


def _quantum(decimals: int) -> Decimal:
    return Decimal(1).scaleb(-decimals)


def _quantize(value: Decimal, decimals: int, rounding: str) -> Decimal:
    # Контекст по умолчанию держит 28 цифр: quantize большой суммы
    # с высоким decimals иначе даёт InvalidOperation
    validate_decimals(decimals)
    integer_digits = max(value.adjusted() + 1, 1)
    with localcontext() as ctx:
        ctx.prec = max(integer_digits + decimals + 1, ctx.prec)
        return value.quantize(_quantum(decimals), rounding=rounding)


def floor_to_decimals(value: Decimal, decimals: int) -> Decimal:
    """
    Floor (к минус бесконечности) до decimals знаков.

    Используется для вычисления max-сумм из баланса: результат
    никогда не превышает исходное значение.

    Args:
        value: Исходное значение
        decimals: Число знаков после разделителя (>= 0)

    Returns:
        Квантованное значение с ровно decimals знаками
    """
    return _quantize(value, decimals, ROUND_FLOOR)


def truncate_to_decimals(value: Decimal, decimals: int) -> Decimal:
    """
    Усечение (round toward zero) до decimals знаков.

    Для неотрицательных сумм совпадает с floor_to_decimals.
    """
    return _quantize(value, decimals, ROUND_DOWN)


def round_half_up(value: Decimal, decimals: int) -> Decimal:
    """Округление half-up до decimals знаков (только для display)."""
    return _quantize(value, decimals, ROUND_HALF_UP)


def decimal_places(value: Decimal) -> int:
    """
    Количество значащих знаков после разделителя.

    Trailing zeros не учитываются: "1.500" → 1. Считается по цифрам
    коэффициента, без normalize() (он округляет до точности контекста).

    Examples:
        >>> decimal_places(Decimal("1.2300"))
        2
        >>> decimal_places(Decimal("100"))
        0
    """
    if value.is_zero():
        return 0
    _, digits, exponent = value.as_tuple()
    if not isinstance(exponent, int) or exponent >= 0:
        return 0
    places = -exponent
    trailing_zeros = len(digits) - len("".join(map(str, digits)).rstrip("0"))
    return max(0, places - trailing_zeros)


# =============================================================================
# ТОЧНАЯ АРИФМЕТИКА
# =============================================================================


def exact_multiply(left: Decimal, right: Decimal) -> Decimal:
    """
    Произведение без округления.

    Точность контекста = сумма цифр коэффициентов: результат
    всегда помещается целиком.

    Examples:
        >>> exact_multiply(Decimal("9" * 29), Decimal("0.5"))
        Decimal('49999999999999999999999999999.5')
    """
    with localcontext() as ctx:
        ctx.prec = max(len(left.as_tuple().digits) + len(right.as_tuple().digits), ctx.prec)
        return left * right


def exact_subtract(left: Decimal, right: Decimal) -> Decimal:
    """Разность без округления (точность по разрядам обоих операндов)."""
    lowest = min(left.as_tuple().exponent, right.as_tuple().exponent, 0)
    highest = max(left.adjusted(), right.adjusted(), 0)
    with localcontext() as ctx:
        ctx.prec = max(highest - lowest + 2, ctx.prec)
        return left - right


# =============================================================================
# КАНОНИЧЕСКОЕ ПРЕДСТАВЛЕНИЕ
# =============================================================================


def to_plain_string(value: Decimal) -> str:
    """
    Строка без экспоненты и без групповых разделителей.

    Examples:
        >>> to_plain_string(Decimal("1E-7"))
        '0.0000001'
        >>> to_plain_string(Decimal("-0"))
        '0'
    """
    if value.is_zero():
        # Убираем знак у -0 и -0.00
        value = abs(value)
    return format(value, "f")


def trim_trailing_zeros(text: Optional[str]) -> Optional[str]:
    """
    Удаление trailing zeros в дробной части.

    Examples:
        >>> trim_trailing_zeros("12.3400")
        '12.34'
        >>> trim_trailing_zeros("5.000")
        '5'
        >>> trim_trailing_zeros("100")
        '100'
    """
    if text is None:
        return None
    if CANONICAL_SEPARATOR not in text:
        return text
    trimmed = text.rstrip("0")
    if trimmed.endswith(CANONICAL_SEPARATOR):
        trimmed = trimmed[:-1]
    if trimmed in ("", "-"):
        return "0"
    return trimmed


def to_canonical_string(value: Decimal) -> str:
    """Plain string + trim trailing zeros."""
    return trim_trailing_zeros(to_plain_string(value)) or "0"


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_decimals(decimals: int) -> None:
    """
    Проверка корректности decimals.

    Raises:
        ValueError: Если decimals не целое неотрицательное число
    """
    if isinstance(decimals, bool) or not isinstance(decimals, int):
        raise ValueError(f"decimals must be an int, got {decimals!r}")
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")


def validate_separator(separator: str) -> None:
    """
    Проверка символа разделителя дробной части.

    Raises:
        ValueError: Если разделитель не один символ или является цифрой
    """
    if not isinstance(separator, str) or len(separator) != 1:
        raise ValueError(f"separator must be a single character, got {separator!r}")
    if separator.isdigit():
        raise ValueError(f"separator cannot be a digit, got {separator!r}")
