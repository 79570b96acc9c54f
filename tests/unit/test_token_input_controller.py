"""
Тесты для TokenInputController

Покрывает:
- Ввод суммы и сигнал on_amount_change
- Focus handling ("0" очищается)
- MAX / 50% с резервом, disable_click_balance, force_balance_amount, hide_balance
- Display: clamp, locale-форма, стоимость, строка баланса
- Выбор актива через workflow и re-clamp суммы
- preselect (актив от хоста)
"""

from decimal import Decimal

import pytest

from token_input.core.domain import (
    NATIVE_SOL_ADDRESS,
    TAG_HAS_FREEZE,
    Asset,
    InMemoryAssetRegistry,
    NullSelectionSurface,
    SelectionPhase,
    SnapshotBalanceProvider,
    SnapshotPriceProvider,
    StaticWhitelist,
)
from token_input.panel import TokenInputConfig, TokenInputController


@pytest.fixture
def sol():
    return Asset(address=NATIVE_SOL_ADDRESS, decimals=9, symbol="SOL", type="raydium")


@pytest.fixture
def usdc():
    return Asset(address="USDC111", decimals=6, symbol="USDC", type="raydium")


@pytest.fixture
def bonk():
    """Актив с малой точностью для проверки re-clamp."""
    return Asset(address="Bonk111", decimals=2, symbol="BONK", type="raydium")


@pytest.fixture
def registry(sol, usdc, bonk):
    return InMemoryAssetRegistry([sol, usdc, bonk])


@pytest.fixture
def balances(sol, usdc):
    return SnapshotBalanceProvider({sol.address: "5", usdc.address: "100.123456"})


@pytest.fixture
def prices(sol, usdc):
    return SnapshotPriceProvider({sol.address: "150.5", usdc.address: "1"})


class Recorder:
    """Фиксирует сигналы хосту."""

    def __init__(self):
        self.amounts = []
        self.tokens = []
        self.focus_count = 0

    def on_amount_change(self, value):
        self.amounts.append(value)

    def on_token_committed(self, asset):
        self.tokens.append(asset)

    def on_focus(self):
        self.focus_count += 1


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def make_controller(registry, balances, prices, recorder):
    def _make(config=None, token=None, value=""):
        return TokenInputController(
            registry=registry,
            balances=balances,
            prices=prices,
            whitelist=StaticWhitelist(),
            config=config,
            surface=NullSelectionSurface(),
            token=token,
            value=value,
            on_amount_change=recorder.on_amount_change,
            on_token_committed=recorder.on_token_committed,
            on_focus=recorder.on_focus,
        )

    return _make


# =============================================================================
# ВВОД СУММЫ
# =============================================================================


class TestAmountInput:
    def test_handle_change_normalizes(self, make_controller, recorder, usdc):
        controller = make_controller(token=usdc)

        assert controller.handle_change("1,000.1234567") == "1000.123456"
        assert recorder.amounts == ["1000.123456"]
        assert controller.value == "1000.123456"

    def test_handle_change_comma_locale(self, make_controller, usdc):
        controller = make_controller(config=TokenInputConfig(decimal_separator=","), token=usdc)

        assert controller.handle_change("12,5") == "12.5"
        assert controller.display_text == "12,5"

    def test_handle_change_without_token_keeps_precision(self, make_controller):
        controller = make_controller()
        assert controller.handle_change("1.123456789") == "1.123456789"

    def test_token_resolved_by_address(self, make_controller, usdc):
        controller = make_controller(token=usdc.address)
        assert controller.token == usdc

    def test_focus_clears_zero(self, make_controller, recorder, usdc):
        controller = make_controller(token=usdc, value="0")
        controller.handle_focus()

        assert recorder.amounts == [""]
        assert recorder.focus_count == 1

    def test_focus_keeps_non_zero(self, make_controller, recorder, usdc):
        controller = make_controller(token=usdc, value="0.5")
        controller.handle_focus()

        assert recorder.amounts == []
        assert recorder.focus_count == 1


# =============================================================================
# QUICK-FILL
# =============================================================================


class TestQuickFill:
    def test_click_max_native_reserves_fee(self, make_controller, recorder, sol):
        controller = make_controller(token=sol)

        assert controller.click_max() == "4.99"
        assert recorder.amounts == ["4.99"]
        assert recorder.focus_count == 1

    def test_click_half_native(self, make_controller, sol):
        controller = make_controller(token=sol)
        assert controller.click_half() == "2.5"

    def test_click_max_non_native(self, make_controller, usdc):
        controller = make_controller(token=usdc)
        assert controller.click_max() == "100.123456"

    def test_click_max_from_zero_clears_then_fills(self, make_controller, recorder, usdc):
        controller = make_controller(token=usdc, value="0")
        controller.click_max()

        assert recorder.amounts == ["", "100.123456"]

    def test_disable_click_balance_blocks_max_only(self, make_controller, recorder, usdc):
        controller = make_controller(config=TokenInputConfig(disable_click_balance=True), token=usdc)

        assert controller.click_max() is None
        assert recorder.amounts == []
        assert controller.click_half() == "50.061728"

    def test_hidden_balance_disables_quick_fill(self, make_controller, recorder, usdc):
        controller = make_controller(config=TokenInputConfig(hide_balance=True), token=usdc)

        assert controller.max_string is None
        assert controller.click_max() is None
        assert controller.click_half() is None
        assert recorder.focus_count == 0

    def test_forced_balance(self, make_controller, usdc):
        config = TokenInputConfig(force_balance_amount=Decimal("10.50"))
        controller = make_controller(config=config, token=usdc)

        assert controller.max_string == "10.5"
        assert controller.click_half() == "5.25"

    def test_forced_balance_never_exceeds_token_precision(self, make_controller, recorder, usdc):
        config = TokenInputConfig(force_balance_amount=Decimal("1.123456789"))
        controller = make_controller(config=config, token=usdc)

        assert controller.click_max() == "1.123456"
        assert recorder.amounts == ["1.123456"]

    def test_no_token_no_quick_fill(self, make_controller):
        controller = make_controller()
        assert controller.click_max() is None


# =============================================================================
# DISPLAY
# =============================================================================


class TestDisplay:
    def test_display_amount_clamped_to_token(self, make_controller, bonk):
        controller = make_controller(token=bonk, value="1.23456")
        assert controller.display_amount == "1.23"

    def test_total_value(self, make_controller, sol):
        controller = make_controller(token=sol, value="2")
        assert controller.total_value == "301"

    def test_total_value_without_price(self, make_controller, bonk):
        controller = make_controller(token=bonk, value="2")
        assert controller.total_value == ""

    def test_total_value_without_amount(self, make_controller, sol):
        controller = make_controller(token=sol)
        assert controller.total_value == ""

    def test_balance_label(self, make_controller, usdc):
        controller = make_controller(token=usdc)
        assert controller.balance_label == "100.123456 USDC"

    def test_balance_label_absent_balance(self, make_controller, bonk):
        controller = make_controller(token=bonk)
        assert controller.balance_label == "0.000000 BONK"

    @pytest.mark.parametrize(
        "balance, expected",
        [
            ("123456789012345678901234.5", "123456789012345678901234.500000 W18"),
            ("1.123456789012345678", "1.123457 W18"),
            ("99999999999999999999999.9999996", "100000000000000000000000.000000 W18"),
        ],
    )
    def test_balance_label_large_and_high_precision(self, make_controller, balances, balance, expected):
        wei = Asset(address="Wei18", decimals=18, symbol="W18", type="erc20")
        balances.update(wei.address, balance)
        controller = make_controller(token=wei)

        assert controller.balance_label == expected

    def test_max_for_large_high_precision_balance(self, make_controller, balances):
        wei = Asset(address="Wei18", decimals=18, symbol="W18", type="erc20")
        balances.update(wei.address, "12345678901.123456789012345678")
        controller = make_controller(token=wei)

        assert controller.click_max() == "12345678901.123456789012345678"
        assert controller.total_value == ""


# =============================================================================
# ВЫБОР АКТИВА
# =============================================================================


class TestTokenSelection:
    def test_select_verified_commits_and_signals(self, make_controller, recorder, usdc):
        controller = make_controller()
        controller.open_selector()
        result = controller.select_token(usdc)

        assert result.committed
        assert controller.token == usdc
        assert recorder.tokens == [usdc]

    def test_commit_reclamps_amount(self, make_controller, recorder, usdc, bonk):
        controller = make_controller(token=usdc, value="1.123456")
        controller.select_token(bonk)

        assert controller.value == "1.12"
        assert recorder.tokens == [bonk]
        assert recorder.amounts == ["1.12"]

    def test_commit_keeps_amount_within_precision(self, make_controller, recorder, usdc, sol):
        controller = make_controller(token=usdc, value="1.5")
        controller.select_token(sol)

        assert controller.value == "1.5"
        assert recorder.amounts == []

    def test_unknown_token_requires_confirmation(self, make_controller, registry, recorder):
        unknown = Asset(address="Unk111", decimals=6, symbol="UNK")
        controller = make_controller()

        controller.select_token(unknown)
        assert controller.workflow.phase == SelectionPhase.PENDING_UNKNOWN_CONFIRM
        assert recorder.tokens == []

        controller.confirm_unknown()
        assert recorder.tokens == [unknown.as_user_added()]
        assert registry.lookup(unknown.address).user_added

    def test_freeze_cancel(self, make_controller, recorder):
        freeze = Asset(address="Frz111", decimals=6, type="raydium", tags=[TAG_HAS_FREEZE])
        controller = make_controller()

        controller.select_token(freeze)
        controller.cancel_freeze()

        assert controller.token is None
        assert recorder.tokens == []

    def test_preselect_runs_gates_once(self, make_controller, recorder):
        unknown = Asset(address="DeepLink111", decimals=6)
        controller = make_controller()

        first = controller.preselect(unknown)
        second = controller.preselect(unknown)

        assert first.new_phase == SelectionPhase.PENDING_UNKNOWN_CONFIRM
        assert second is None

    def test_preselect_none(self, make_controller):
        assert make_controller().preselect(None) is None
