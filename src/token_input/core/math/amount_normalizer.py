"""
Amount Normalizer — нормализация свободного ввода суммы

Превращает сырую строку из поля ввода в каноническую decimal-строку,
ограниченную точностью актива (decimals):
- Удаляются все символы, кроме цифр и разделителя дробной части
- Разделитель конфигурируется (поддержка локалей с ",")
- Лишние разделители отбрасываются (сохраняются первые два сегмента)
- Дробная часть усекается до decimals знаков (никогда не округляется)
- Одиночный разделитель превращается в "0." (ввод с ведущей точки)

ИНВАРИАНТЫ:
1. Результат содержит не более decimals знаков после "."
2. normalize(normalize(x, d), d) == normalize(x, d) при разделителе "."
3. Для других разделителей идемпотентность выполняется в locale-форме:
   normalize(to_locale_string(normalize(x, d)), d) == normalize(x, d)
"""

from dataclasses import dataclass
from typing import Final, Optional

from token_input.core.math.decimal_safeguards import (
    CANONICAL_SEPARATOR,
    decimal_places,
    to_decimal,
    to_plain_string,
    truncate_to_decimals,
    validate_decimals,
    validate_separator,
)

_ASCII_DIGITS: Final[str] = "0123456789"


def normalize_amount(
    raw: Optional[str],
    decimals: Optional[int],
    separator: str = CANONICAL_SEPARATOR,
) -> str:
    """
    Нормализация сырого ввода суммы.

    Args:
        raw: Строка из поля ввода (может содержать мусор)
        decimals: Точность актива; None — актив не выбран, усечение не применяется
        separator: Символ разделителя дробной части

    Returns:
        Каноническая строка с "." или "" если цифр нет

    Examples:
        >>> normalize_amount("1,234,56", 2, ",")
        '1.23'
        >>> normalize_amount("abc", 6)
        ''
        >>> normalize_amount(",", 2, ",")
        '0.'
    """
    validate_separator(separator)
    if decimals is not None:
        validate_decimals(decimals)

    if not raw:
        return ""

    # Только ASCII 0-9: str.isdigit() пропускает "٣" и "²"
    stripped = "".join(ch for ch in raw if ch in _ASCII_DIGITS or ch == separator)
    if not stripped:
        return ""

    if stripped == separator:
        return "0" + CANONICAL_SEPARATOR

    segments = stripped.split(separator)
    if len(segments) > 2:
        segments = segments[:2]

    if len(segments) == 1:
        return segments[0]

    integer_part, fraction_part = segments
    if decimals is not None and len(fraction_part) > decimals:
        fraction_part = fraction_part[:decimals]

    # ".." или ".5" при decimals=0: цифр не осталось
    if not integer_part and not fraction_part:
        return "0" + CANONICAL_SEPARATOR

    return integer_part + CANONICAL_SEPARATOR + fraction_part


def clamp_to_decimals(value: Optional[str], decimals: Optional[int]) -> Optional[str]:
    """
    Усечение уже нормализованной суммы до decimals знаков.

    Используется при смене актива, когда новая точность меньше текущей.
    Значение с "висящим" разделителем ("12.") пропускается без изменений:
    пользователь ещё вводит дробную часть.

    Args:
        value: Каноническая сумма (или None / "")
        decimals: Точность нового актива; None — без изменений

    Returns:
        Исходное значение или усечённое до decimals знаков
    """
    if not value or decimals is None:
        return value
    if value.endswith(CANONICAL_SEPARATOR):
        return value

    validate_decimals(decimals)
    dec = to_decimal(value)
    if dec is None:
        return value
    if decimal_places(dec) <= decimals:
        return value

    return to_plain_string(truncate_to_decimals(dec, decimals))


def to_locale_string(amount: Optional[str], separator: str = CANONICAL_SEPARATOR) -> str:
    """
    Обратное преобразование канонической суммы в locale-форму для display.

    Examples:
        >>> to_locale_string("1.5", ",")
        '1,5'
    """
    validate_separator(separator)
    if not amount:
        return ""
    if separator == CANONICAL_SEPARATOR:
        return amount
    return amount.replace(CANONICAL_SEPARATOR, separator)


@dataclass(frozen=True)
class AmountNormalizer:
    """
    Нормализатор, привязанный к разделителю локали.

    Разделитель передаётся явно (конфигурация), а не определяется
    из окружения.
    """

    separator: str = CANONICAL_SEPARATOR

    def __post_init__(self) -> None:
        validate_separator(self.separator)

    def normalize(self, raw: Optional[str], decimals: Optional[int]) -> str:
        return normalize_amount(raw, decimals, self.separator)

    def clamp(self, value: Optional[str], decimals: Optional[int]) -> Optional[str]:
        return clamp_to_decimals(value, decimals)

    def to_display(self, amount: Optional[str]) -> str:
        return to_locale_string(amount, self.separator)
