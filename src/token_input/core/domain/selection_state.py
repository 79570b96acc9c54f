"""
SelectionState — снапшот состояния выбора актива

Immutable Pydantic модель. Хранит фазу workflow, текущий актив и
единственный слот pending-актива, ожидающего подтверждения.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from .asset import Asset


class SelectionPhase(str, Enum):
    """
    Фаза workflow выбора актива.

    COMMITTED терминальна для одного цикла выбора и сразу становится
    новым IDLE baseline.
    """

    IDLE = "IDLE"
    SELECTING = "SELECTING"
    PENDING_UNKNOWN_CONFIRM = "PENDING_UNKNOWN_CONFIRM"
    PENDING_FREEZE_CONFIRM = "PENDING_FREEZE_CONFIRM"
    COMMITTED = "COMMITTED"


class SelectionState(BaseModel):
    """
    Снапшот состояния выбора.

    Инварианты:
    - не более одного pending слота заполнено
    - pending_unknown_token задан тогда и только тогда, когда фаза
      PENDING_UNKNOWN_CONFIRM (аналогично для freeze)
    """

    phase: SelectionPhase = Field(
        default=SelectionPhase.IDLE, description="Текущая фаза workflow"
    )
    current_token: Optional[Asset] = Field(
        default=None, description="Последний подтверждённый актив"
    )
    pending_unknown_token: Optional[Asset] = Field(
        default=None, description="Актив, ожидающий подтверждения unknown"
    )
    pending_freeze_token: Optional[Asset] = Field(
        default=None, description="Актив, ожидающий подтверждения freeze"
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_pending_slots(self) -> "SelectionState":
        if self.pending_unknown_token is not None and self.pending_freeze_token is not None:
            raise ValueError("only one pending token can be set at a time")

        unknown_phase = self.phase == SelectionPhase.PENDING_UNKNOWN_CONFIRM
        if unknown_phase != (self.pending_unknown_token is not None):
            raise ValueError(
                f"pending_unknown_token must be set only in {SelectionPhase.PENDING_UNKNOWN_CONFIRM.value}"
            )

        freeze_phase = self.phase == SelectionPhase.PENDING_FREEZE_CONFIRM
        if freeze_phase != (self.pending_freeze_token is not None):
            raise ValueError(
                f"pending_freeze_token must be set only in {SelectionPhase.PENDING_FREEZE_CONFIRM.value}"
            )

        return self

    @property
    def pending_token(self) -> Optional[Asset]:
        if self.pending_unknown_token is not None:
            return self.pending_unknown_token
        return self.pending_freeze_token

    @property
    def is_pending(self) -> bool:
        return self.pending_token is not None
