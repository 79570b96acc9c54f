"""Token Selection State Machine — подтверждение выбора актива.

Переходы:
- IDLE → SELECTING (open_selector)
- IDLE/SELECTING → PENDING_UNKNOWN_CONFIRM | PENDING_FREEZE_CONFIRM | COMMITTED (select_token)
- PENDING_UNKNOWN_CONFIRM → PENDING_FREEZE_CONFIRM | COMMITTED (confirm_unknown)
- PENDING_UNKNOWN_CONFIRM → SELECTING (cancel_unknown)
- PENDING_FREEZE_CONFIRM → COMMITTED (confirm_freeze)
- PENDING_FREEZE_CONFIRM → IDLE (cancel_freeze)

COMMITTED сразу становится новым IDLE baseline с current_token.
on_token_committed вызывается только из _commit и ровно один раз на commit.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from token_input.core.domain.asset import Asset
from token_input.core.domain.providers import (
    AssetRegistry,
    NullSelectionSurface,
    SelectionSurface,
    WhitelistProvider,
)
from token_input.core.domain.selection_state import SelectionPhase, SelectionState
from token_input.gatekeeper.gates.gate_00_unknown_token import Gate00UnknownToken
from token_input.gatekeeper.gates.gate_01_freeze_risk import SWAP_CONTEXT, Gate01FreezeRisk

logger = logging.getLogger(__name__)

TokenCommittedListener = Callable[[Asset], None]


class SelectionWorkflowError(Exception):
    """
    Событие недопустимо в текущей фазе.

    Состояние при этом не меняется. Это структурная защита: актив не
    может попасть в COMMITTED в обход обязательного подтверждения.
    """
    pass


@dataclass(frozen=True)
class SelectionTransitionResult:
    """Результат перехода workflow."""

    new_phase: SelectionPhase
    previous_phase: SelectionPhase
    transition_occurred: bool
    transition_reason: str

    # Актив, отправленный в on_token_committed (только для COMMITTED)
    committed_token: Optional[Asset]

    # Актив в pending слоте после перехода
    pending_token: Optional[Asset]

    # Для отладки
    details: str

    @property
    def committed(self) -> bool:
        return self.new_phase == SelectionPhase.COMMITTED


class TokenSelectionWorkflow:
    """Token Selection State Machine.

    Политика повторного select_token во время pending: supersede-and-discard.
    Pending актив отбрасывается (без persist, без commit), новый актив
    проходит gates с нуля.
    """

    def __init__(
        self,
        registry: AssetRegistry,
        whitelist: WhitelistProvider,
        context: str = SWAP_CONTEXT,
        show_user_added_as_trusted: bool = True,
        surface: Optional[SelectionSurface] = None,
        on_token_committed: Optional[TokenCommittedListener] = None,
    ):
        """
        Args:
            registry: реестр активов (lookup + register_user_token)
            whitelist: адреса, освобождённые от freeze-предупреждения
            context: контекст хоста ("swap" включает freeze-подтверждение)
            show_user_added_as_trusted: user-added активы не считаются unknown
            surface: поверхность выбора (open/close/reset_search)
            on_token_committed: получатель подтверждённого актива
        """
        self.registry = registry
        self.context = context
        self.show_user_added_as_trusted = show_user_added_as_trusted
        self.surface = surface or NullSelectionSurface()
        self.on_token_committed = on_token_committed

        self._unknown_gate = Gate00UnknownToken(registry)
        self._freeze_gate = Gate01FreezeRisk(whitelist, context)

        self._state = SelectionState()

    # -------------------------------------------------------------------------
    # Snapshot
    # -------------------------------------------------------------------------

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def phase(self) -> SelectionPhase:
        return self._state.phase

    @property
    def current_token(self) -> Optional[Asset]:
        return self._state.current_token

    # -------------------------------------------------------------------------
    # Классификация
    # -------------------------------------------------------------------------

    def is_unknown(self, asset: Asset) -> bool:
        return self._unknown_gate.evaluate(asset, self.show_user_added_as_trusted).confirmation_required

    def is_freeze_risk(self, asset: Asset) -> bool:
        return self._freeze_gate.is_freeze_risk(asset)

    # -------------------------------------------------------------------------
    # События
    # -------------------------------------------------------------------------

    def open_selector(self) -> SelectionTransitionResult:
        """IDLE → SELECTING."""
        previous = self.phase
        if previous == SelectionPhase.SELECTING:
            return self._no_transition("already_selecting")
        self._require(previous, (SelectionPhase.IDLE,), "open_selector")

        self.surface.open()
        return self._move(
            SelectionState(phase=SelectionPhase.SELECTING, current_token=self.current_token),
            previous,
            reason="selector_opened",
            details="Selection surface opened",
        )

    def close_selector(self) -> SelectionTransitionResult:
        """SELECTING → IDLE без выбора."""
        previous = self.phase
        if previous == SelectionPhase.IDLE:
            return self._no_transition("already_idle")
        self._require(previous, (SelectionPhase.SELECTING,), "close_selector")

        self.surface.close()
        return self._move(
            SelectionState(current_token=self.current_token),
            previous,
            reason="selector_closed",
            details="Selection surface closed without a choice",
        )

    def select_token(self, asset: Asset) -> SelectionTransitionResult:
        """Выбор актива: GATE 0 → GATE 1 → commit."""
        previous = self.phase
        superseded = self._state.pending_token
        if superseded is not None:
            logger.warning(
                "Pending token %s discarded, superseded by %s", superseded.address, asset.address
            )

        # GATE 0: unknown
        gate00 = self._unknown_gate.evaluate(asset, self.show_user_added_as_trusted)
        if gate00.confirmation_required:
            return self._move(
                SelectionState(
                    phase=SelectionPhase.PENDING_UNKNOWN_CONFIRM,
                    current_token=self.current_token,
                    pending_unknown_token=asset,
                ),
                previous,
                reason="superseded_pending" if superseded is not None else gate00.reason,
                details=gate00.details,
            )

        # GATE 1: freeze risk
        gate01 = self._freeze_gate.evaluate(asset)
        if gate01.confirmation_required:
            return self._move(
                SelectionState(
                    phase=SelectionPhase.PENDING_FREEZE_CONFIRM,
                    current_token=self.current_token,
                    pending_freeze_token=asset,
                ),
                previous,
                reason="superseded_pending" if superseded is not None else gate01.reason,
                details=gate01.details,
            )

        return self._commit(
            asset,
            previous,
            reason="superseded_pending" if superseded is not None else "direct_commit",
        )

    def confirm_unknown(self) -> SelectionTransitionResult:
        """Пользователь подтвердил unknown актив: persist, затем GATE 1."""
        previous = self.phase
        self._require(previous, (SelectionPhase.PENDING_UNKNOWN_CONFIRM,), "confirm_unknown")

        asset = self._state.pending_unknown_token
        trusted = asset.as_user_added()
        self.registry.register_user_token(trusted, persist=True)

        gate01 = self._freeze_gate.evaluate(trusted)
        if gate01.confirmation_required:
            return self._move(
                SelectionState(
                    phase=SelectionPhase.PENDING_FREEZE_CONFIRM,
                    current_token=self.current_token,
                    pending_freeze_token=trusted,
                ),
                previous,
                reason="unknown_confirmed_freeze_risk",
                details=gate01.details,
            )

        return self._commit(trusted, previous, reason="unknown_confirmed")

    def cancel_unknown(self) -> SelectionTransitionResult:
        """Отказ от unknown актива; поверхность выбора остаётся открытой."""
        previous = self.phase
        self._require(previous, (SelectionPhase.PENDING_UNKNOWN_CONFIRM,), "cancel_unknown")

        return self._move(
            SelectionState(phase=SelectionPhase.SELECTING, current_token=self.current_token),
            previous,
            reason="unknown_cancelled",
            details="Unknown asset rejected, back to selection",
        )

    def confirm_freeze(self) -> SelectionTransitionResult:
        previous = self.phase
        self._require(previous, (SelectionPhase.PENDING_FREEZE_CONFIRM,), "confirm_freeze")

        return self._commit(self._state.pending_freeze_token, previous, reason="freeze_confirmed")

    def cancel_freeze(self) -> SelectionTransitionResult:
        """Отказ от freeze-risk актива: IDLE, сброс поиска, поверхность закрыта."""
        previous = self.phase
        self._require(previous, (SelectionPhase.PENDING_FREEZE_CONFIRM,), "cancel_freeze")

        self.surface.reset_search()
        self.surface.close()
        return self._move(
            SelectionState(current_token=self.current_token),
            previous,
            reason="freeze_cancelled",
            details="Freeze-risk asset rejected, search reset",
        )

    # -------------------------------------------------------------------------
    # Внутреннее
    # -------------------------------------------------------------------------

    def _commit(
        self, asset: Asset, previous: SelectionPhase, reason: str
    ) -> SelectionTransitionResult:
        # Состояние обновляется до уведомления: listener видит IDLE baseline
        self._state = SelectionState(current_token=asset)
        self.surface.close()

        logger.info("Token committed: %s (%s), reason=%s", asset.address, asset.symbol, reason)
        if self.on_token_committed is not None:
            self.on_token_committed(asset)

        return SelectionTransitionResult(
            new_phase=SelectionPhase.COMMITTED,
            previous_phase=previous,
            transition_occurred=True,
            transition_reason=reason,
            committed_token=asset,
            pending_token=None,
            details=f"Committed {asset.address}",
        )

    def _move(
        self, new_state: SelectionState, previous: SelectionPhase, reason: str, details: str
    ) -> SelectionTransitionResult:
        self._state = new_state
        logger.info("Selection %s → %s: %s", previous.value, new_state.phase.value, reason)
        return SelectionTransitionResult(
            new_phase=new_state.phase,
            previous_phase=previous,
            transition_occurred=True,
            transition_reason=reason,
            committed_token=None,
            pending_token=new_state.pending_token,
            details=details,
        )

    def _no_transition(self, reason: str) -> SelectionTransitionResult:
        return SelectionTransitionResult(
            new_phase=self.phase,
            previous_phase=self.phase,
            transition_occurred=False,
            transition_reason=reason,
            committed_token=None,
            pending_token=self._state.pending_token,
            details=f"State={self.phase.value}",
        )

    @staticmethod
    def _require(phase: SelectionPhase, allowed: tuple, event: str) -> None:
        if phase not in allowed:
            names = ", ".join(p.value for p in allowed)
            raise SelectionWorkflowError(
                f"{event} is not allowed in {phase.value} (expected: {names})"
            )
