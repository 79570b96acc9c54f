"""
Domain models and collaborator contracts.

Contains immutable entities (Asset, ReservePolicy, SelectionState) and the
read-only service protocols the core consumes.
"""

from token_input.core.domain.asset import (
    TAG_HAS_FREEZE,
    TAG_UNKNOWN,
    TYPE_UNKNOWN,
    Asset,
)
from token_input.core.domain.providers import (
    AssetRegistry,
    BalanceProvider,
    InMemoryAssetRegistry,
    NullSelectionSurface,
    PriceProvider,
    SelectionSurface,
    SnapshotBalanceProvider,
    SnapshotPriceProvider,
    StaticWhitelist,
    WhitelistProvider,
)
from token_input.core.domain.reserve import (
    DEFAULT_SOL_RESERVE,
    NATIVE_SOL_ADDRESS,
    ReservePolicy,
)
from token_input.core.domain.selection_state import SelectionPhase, SelectionState

__all__ = [
    # Asset model
    "Asset",
    "TAG_HAS_FREEZE",
    "TAG_UNKNOWN",
    "TYPE_UNKNOWN",
    # Reserve policy
    "ReservePolicy",
    "NATIVE_SOL_ADDRESS",
    "DEFAULT_SOL_RESERVE",
    # Selection state
    "SelectionPhase",
    "SelectionState",
    # Collaborator protocols
    "AssetRegistry",
    "BalanceProvider",
    "PriceProvider",
    "WhitelistProvider",
    "SelectionSurface",
    # In-memory adapters
    "InMemoryAssetRegistry",
    "SnapshotBalanceProvider",
    "SnapshotPriceProvider",
    "StaticWhitelist",
    "NullSelectionSurface",
]
