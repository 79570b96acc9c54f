"""
ReservePolicy — политика резерва нативного актива

Нативный актив сети оплачивает комиссии. Quick-fill суммы (max / half)
для этого актива должны оставлять reserve_amount нетронутым.
"""

from decimal import Decimal
from typing import Final

from pydantic import BaseModel, Field


# Mint wrapped SOL (нативный актив сети по умолчанию)
NATIVE_SOL_ADDRESS: Final[str] = "So11111111111111111111111111111111111111112"

# Резерв SOL на комиссии по умолчанию
DEFAULT_SOL_RESERVE: Final[Decimal] = Decimal("0.01")


class ReservePolicy(BaseModel):
    """
    Политика резерва.

    Применяется только к активу с адресом native_address.
    """

    native_address: str = Field(
        default=NATIVE_SOL_ADDRESS, min_length=1, description="Адрес нативного актива"
    )
    reserve_amount: Decimal = Field(
        default=DEFAULT_SOL_RESERVE, ge=0, description="Неприкосновенный резерв"
    )

    model_config = {"frozen": True}

    def applies_to(self, address: str | None) -> bool:
        return address is not None and address == self.native_address
