"""
Core math modules для token_input

Decimal-примитивы и вычисления сумм с гарантией точности.
"""

# Decimal Safeguards
from token_input.core.math.decimal_safeguards import (
    # Constants
    CANONICAL_SEPARATOR,
    DEFAULT_DECIMALS,
    # Sanitization
    is_absent_or_zero,
    to_decimal,
    # Quantization
    decimal_places,
    floor_to_decimals,
    round_half_up,
    truncate_to_decimals,
    # Exact arithmetic
    exact_multiply,
    exact_subtract,
    # Canonical form
    to_canonical_string,
    to_plain_string,
    trim_trailing_zeros,
    # Validation
    validate_decimals,
    validate_separator,
)

# Amount Normalizer
from token_input.core.math.amount_normalizer import (
    AmountNormalizer,
    clamp_to_decimals,
    normalize_amount,
    to_locale_string,
)

# Balance Quantizer
from token_input.core.math.balance_quantizer import (
    HALF_MULTIPLIER,
    MAX_MULTIPLIER,
    BalanceQuantizer,
    QuickFillAmounts,
    apply_reserve,
    compute_half,
    compute_max,
    compute_quick_max,
)

# Price Valuation
from token_input.core.math.price_valuation import valuate

__all__ = [
    # Decimal Safeguards — Constants
    "CANONICAL_SEPARATOR",
    "DEFAULT_DECIMALS",
    # Decimal Safeguards — Sanitization
    "is_absent_or_zero",
    "to_decimal",
    # Decimal Safeguards — Quantization
    "decimal_places",
    "floor_to_decimals",
    "round_half_up",
    "truncate_to_decimals",
    # Decimal Safeguards — Exact arithmetic
    "exact_multiply",
    "exact_subtract",
    # Decimal Safeguards — Canonical form
    "to_canonical_string",
    "to_plain_string",
    "trim_trailing_zeros",
    # Decimal Safeguards — Validation
    "validate_decimals",
    "validate_separator",
    # Amount Normalizer
    "AmountNormalizer",
    "clamp_to_decimals",
    "normalize_amount",
    "to_locale_string",
    # Balance Quantizer
    "HALF_MULTIPLIER",
    "MAX_MULTIPLIER",
    "BalanceQuantizer",
    "QuickFillAmounts",
    "apply_reserve",
    "compute_half",
    "compute_max",
    "compute_quick_max",
    # Price Valuation
    "valuate",
]
