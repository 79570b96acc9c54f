"""Unit тесты для GATE 1: Freeze Risk.

Coverage:
- Без тега hasFreeze → PASS
- hasFreeze + whitelist → PASS
- hasFreeze в swap-контексте → подтверждение
- hasFreeze вне swap → PASS с warning
"""

import logging

import pytest

from token_input.core.domain import TAG_HAS_FREEZE, Asset, StaticWhitelist
from token_input.gatekeeper.gates.gate_01_freeze_risk import SWAP_CONTEXT, Gate01FreezeRisk


@pytest.fixture
def freeze_asset():
    return Asset(address="Frz111", decimals=6, symbol="FRZ", type="raydium", tags=[TAG_HAS_FREEZE])


@pytest.fixture
def whitelist():
    return StaticWhitelist(["WhiteFrz111"])


def test_gate01_pass_no_freeze(whitelist):
    gate = Gate01FreezeRisk(whitelist)
    result = gate.evaluate(Asset(address="Ray111", decimals=6, type="raydium"))

    assert result.confirmation_required is False
    assert result.is_freeze_risk is False


def test_gate01_pass_whitelisted(whitelist):
    gate = Gate01FreezeRisk(whitelist)
    asset = Asset(address="WhiteFrz111", decimals=6, type="raydium", tags=[TAG_HAS_FREEZE])
    result = gate.evaluate(asset)

    assert result.confirmation_required is False
    assert result.is_whitelisted is True
    assert gate.is_freeze_risk(asset) is False


def test_gate01_swap_requires_confirmation(whitelist, freeze_asset):
    gate = Gate01FreezeRisk(whitelist, SWAP_CONTEXT)
    result = gate.evaluate(freeze_asset)

    assert result.confirmation_required is True
    assert result.reason == "freeze_risk"
    assert result.is_freeze_risk is True
    assert result.context == "swap"


def test_gate01_other_context_passes_with_warning(whitelist, freeze_asset, caplog):
    gate = Gate01FreezeRisk(whitelist, context="liquidity")

    with caplog.at_level(logging.WARNING):
        result = gate.evaluate(freeze_asset)

    assert result.confirmation_required is False
    assert result.is_freeze_risk is True
    assert "freeze authority" in caplog.text


def test_gate01_warning_uses_lazy_arguments(whitelist, freeze_asset, caplog):
    gate = Gate01FreezeRisk(whitelist, context="liquidity")

    with caplog.at_level(logging.WARNING):
        gate.evaluate(freeze_asset)

    record = caplog.records[-1]
    assert record.args == ("Frz111", "FRZ", "liquidity")
    assert record.getMessage() == (
        "Asset Frz111 (FRZ) has freeze authority, committed without confirmation in 'liquidity' context"
    )
