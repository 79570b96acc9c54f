"""Gatekeeper — гейты допуска актива к выбору.

- Фиксированный порядок: GATE 0 (unknown) → GATE 1 (freeze risk)
- Gate только классифицирует; переходы выполняет selection state machine
"""

from .gates import (
    SWAP_CONTEXT,
    Gate00Result,
    Gate00UnknownToken,
    Gate01FreezeRisk,
    Gate01Result,
)

__all__ = [
    "Gate00UnknownToken",
    "Gate00Result",
    "Gate01FreezeRisk",
    "Gate01Result",
    "SWAP_CONTEXT",
]
