"""Unit тесты для GATE 0: Unknown Token.

Coverage:
- Классифицированный актив проходит
- type отсутствует / "unknown" / тег "unknown" → подтверждение
- user-added в реестре + настройка → доверенный
- user-added без настройки → подтверждение
- user_added на самом кандидате не учитывается (только запись реестра)
"""

import pytest

from token_input.core.domain import Asset, InMemoryAssetRegistry
from token_input.gatekeeper.gates.gate_00_unknown_token import Gate00UnknownToken


@pytest.fixture
def registry():
    return InMemoryAssetRegistry()


@pytest.fixture
def gate00(registry):
    """Fixture для GATE 0."""
    return Gate00UnknownToken(registry)


@pytest.fixture
def bare_asset():
    """Актив без type и без тегов."""
    return Asset(address="Bare111", decimals=6, symbol="BARE")


# =============================================================================
# PASS SCENARIOS
# =============================================================================


def test_gate00_pass_classified(gate00):
    """PASS: type задан, тегов unknown нет."""
    asset = Asset(address="Ray111", decimals=6, type="raydium")
    result = gate00.evaluate(asset, show_user_added_as_trusted=True)

    assert result.confirmation_required is False
    assert result.reason == ""
    assert result.lacks_classification is False
    assert "PASS" in result.details


def test_gate00_pass_trusted_user_added(gate00, registry, bare_asset):
    """PASS: unknown, но ранее добавлен пользователем и настройка включена."""
    registry.register_user_token(bare_asset, persist=True)
    result = gate00.evaluate(bare_asset, show_user_added_as_trusted=True)

    assert result.confirmation_required is False
    assert result.registered_user_added is True


# =============================================================================
# CONFIRMATION SCENARIOS
# =============================================================================


@pytest.mark.parametrize(
    "asset",
    [
        Asset(address="A", decimals=6),
        Asset(address="B", decimals=6, type="unknown"),
        Asset(address="C", decimals=6, type="raydium", tags=["unknown"]),
    ],
)
def test_gate00_unknown_requires_confirmation(gate00, asset):
    result = gate00.evaluate(asset, show_user_added_as_trusted=True)

    assert result.confirmation_required is True
    assert result.reason == "unknown_token"
    assert result.address == asset.address


def test_gate00_user_added_but_setting_disabled(gate00, registry, bare_asset):
    registry.register_user_token(bare_asset, persist=True)
    result = gate00.evaluate(bare_asset, show_user_added_as_trusted=False)

    assert result.confirmation_required is True
    assert result.reason == "unknown_token_user_added_hidden"


def test_gate00_candidate_flag_not_trusted(gate00, bare_asset):
    """user_added на кандидате без записи в реестре не делает его доверенным."""
    result = gate00.evaluate(bare_asset.as_user_added(), show_user_added_as_trusted=True)

    assert result.confirmation_required is True
    assert result.registered_user_added is False


def test_gate00_registry_record_not_user_added(gate00, bare_asset):
    gate = Gate00UnknownToken(InMemoryAssetRegistry([bare_asset]))
    result = gate.evaluate(bare_asset, show_user_added_as_trusted=True)

    assert result.confirmation_required is True
