"""Selection — state machine выбора актива с шагами подтверждения.

- Unknown актив всегда проходит через PENDING_UNKNOWN_CONFIRM
- Freeze-risk актив в swap-контексте проходит через PENDING_FREEZE_CONFIRM
- Единственный pending слот, явные события
"""

from .state_machine import (
    SelectionTransitionResult,
    SelectionWorkflowError,
    TokenCommittedListener,
    TokenSelectionWorkflow,
)

__all__ = [
    "TokenSelectionWorkflow",
    "SelectionTransitionResult",
    "SelectionWorkflowError",
    "TokenCommittedListener",
]
