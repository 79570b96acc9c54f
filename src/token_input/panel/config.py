"""Конфигурация TokenInputController.

Явная конфигурация вместо ambient-состояния: разделитель локали,
политика резерва, контекст, флаги отображения баланса.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Mapping, Optional

from token_input.core.contracts.validators import validate_token_input_config
from token_input.core.domain.reserve import ReservePolicy
from token_input.core.math.balance_quantizer import MAX_MULTIPLIER
from token_input.core.math.decimal_safeguards import (
    CANONICAL_SEPARATOR,
    to_decimal,
    validate_separator,
)
from token_input.gatekeeper.gates.gate_01_freeze_risk import SWAP_CONTEXT


@dataclass(frozen=True)
class TokenInputConfig:
    """Конфигурация контроллера ввода.

    force_balance_amount заменяет баланс кошелька для MAX / 50%.
    disable_click_balance блокирует только MAX.
    """

    decimal_separator: str = CANONICAL_SEPARATOR
    reserve_policy: ReservePolicy = field(default_factory=ReservePolicy)
    context: str = SWAP_CONTEXT
    hide_balance: bool = False
    max_multiplier: Decimal = MAX_MULTIPLIER
    force_balance_amount: Optional[Decimal] = None
    disable_click_balance: bool = False
    show_user_added_as_trusted: bool = True

    def __post_init__(self) -> None:
        validate_separator(self.decimal_separator)
        if self.max_multiplier < 0:
            raise ValueError(f"max_multiplier must be non-negative, got {self.max_multiplier}")
        if self.force_balance_amount is not None and self.force_balance_amount < 0:
            raise ValueError(
                f"force_balance_amount must be non-negative, got {self.force_balance_amount}"
            )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "TokenInputConfig":
        """
        Конфигурация из plain mapping (например, распарсенный JSON).

        Raises:
            ValidationError: Если mapping не соответствует token_input_config.json
        """
        payload = dict(data)
        validate_token_input_config(payload)

        policy_kwargs = {}
        if "native_address" in payload:
            policy_kwargs["native_address"] = payload["native_address"]
        if "reserve_amount" in payload:
            policy_kwargs["reserve_amount"] = to_decimal(payload["reserve_amount"])

        kwargs: dict[str, Any] = {"reserve_policy": ReservePolicy(**policy_kwargs)}
        for name in (
            "decimal_separator",
            "context",
            "hide_balance",
            "disable_click_balance",
            "show_user_added_as_trusted",
        ):
            if name in payload:
                kwargs[name] = payload[name]
        if "max_multiplier" in payload:
            kwargs["max_multiplier"] = to_decimal(payload["max_multiplier"])
        if payload.get("force_balance_amount") is not None:
            kwargs["force_balance_amount"] = to_decimal(payload["force_balance_amount"])

        return cls(**kwargs)
