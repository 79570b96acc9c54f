"""Gates — классификационные гейты выбора актива.

- GATE 0: Unknown Token (нет верифицированной классификации)
- GATE 1: Freeze Risk (freeze authority вне whitelist)
"""

from .gate_00_unknown_token import Gate00UnknownToken, Gate00Result
from .gate_01_freeze_risk import Gate01FreezeRisk, Gate01Result, SWAP_CONTEXT

__all__ = [
    "Gate00UnknownToken",
    "Gate00Result",
    "Gate01FreezeRisk",
    "Gate01Result",
    "SWAP_CONTEXT",
]
