"""Panel — контроллер поля ввода суммы и выбора актива."""

from .config import TokenInputConfig
from .controller import BALANCE_LABEL_DECIMALS, TokenInputController

__all__ = [
    "TokenInputConfig",
    "TokenInputController",
    "BALANCE_LABEL_DECIMALS",
]
