"""
Providers — контракты внешних коллабораторов

Ядро не хранит ambient/global state: реестр активов, балансы, цены,
whitelist и поверхность выбора передаются явно как read-only сервисы.

Балансы и цены обновляются асинхронно снаружи; ядро читает снапшот
в момент вычисления. Нерезолвленное значение — None (absent).

In-memory адаптеры используются хостом для простых сценариев и тестами.
"""

import logging
from decimal import Decimal
from typing import Dict, Iterable, Mapping, Optional, Protocol, runtime_checkable

from token_input.core.math.decimal_safeguards import DecimalLike, to_decimal

from .asset import Asset

logger = logging.getLogger(__name__)


# =============================================================================
# PROTOCOLS
# =============================================================================


@runtime_checkable
class AssetRegistry(Protocol):
    """Реестр активов (владелец записей Asset)."""

    def lookup(self, address: str) -> Optional[Asset]:
        ...

    def register_user_token(self, asset: Asset, persist: bool) -> None:
        """Идемпотентный upsert по address."""
        ...


@runtime_checkable
class BalanceProvider(Protocol):
    def get_balance(self, address: str) -> Optional[Decimal]:
        ...


@runtime_checkable
class PriceProvider(Protocol):
    def get_prices(self, addresses: Iterable[str]) -> Mapping[str, Optional[Decimal]]:
        ...


@runtime_checkable
class WhitelistProvider(Protocol):
    def contains(self, address: str) -> bool:
        ...


@runtime_checkable
class SelectionSurface(Protocol):
    """Поверхность выбора актива (диалог со списком и поиском)."""

    def open(self) -> None:
        ...

    def close(self) -> None:
        ...

    def reset_search(self) -> None:
        ...


# =============================================================================
# IN-MEMORY ADAPTERS
# =============================================================================


class InMemoryAssetRegistry:
    """
    Реестр активов в памяти.

    persisted_addresses — адреса, для которых запрошено сохранение
    в пользовательское хранилище (persist=True).
    """

    def __init__(self, assets: Optional[Iterable[Asset]] = None):
        self._assets: Dict[str, Asset] = {}
        self.persisted_addresses: set[str] = set()
        for asset in assets or ():
            self._assets[asset.address] = asset

    def lookup(self, address: str) -> Optional[Asset]:
        return self._assets.get(address)

    def register_user_token(self, asset: Asset, persist: bool) -> None:
        record = asset if asset.user_added else asset.as_user_added()
        self._assets[record.address] = record
        if persist:
            self.persisted_addresses.add(record.address)
        logger.info(
            "User token registered: %s (%s), persist=%s", record.address, record.symbol, persist
        )

    def __contains__(self, address: str) -> bool:
        return address in self._assets

    def __len__(self) -> int:
        return len(self._assets)


class SnapshotBalanceProvider:
    """Балансы из снапшота address → amount."""

    def __init__(self, balances: Optional[Mapping[str, DecimalLike]] = None):
        self._balances: Dict[str, Optional[Decimal]] = {}
        for address, amount in (balances or {}).items():
            self.update(address, amount)

    def update(self, address: str, amount: DecimalLike) -> None:
        self._balances[address] = to_decimal(amount)

    def get_balance(self, address: str) -> Optional[Decimal]:
        return self._balances.get(address)


class SnapshotPriceProvider:
    """Цены из снапшота address → unit price."""

    def __init__(self, prices: Optional[Mapping[str, DecimalLike]] = None):
        self._prices: Dict[str, Optional[Decimal]] = {}
        for address, price in (prices or {}).items():
            self.update(address, price)

    def update(self, address: str, price: DecimalLike) -> None:
        self._prices[address] = to_decimal(price)

    def get_prices(self, addresses: Iterable[str]) -> Mapping[str, Optional[Decimal]]:
        return {address: self._prices.get(address) for address in addresses}


class StaticWhitelist:
    """Фиксированный набор адресов, освобождённых от freeze-предупреждения."""

    def __init__(self, addresses: Optional[Iterable[str]] = None):
        self._addresses = frozenset(addresses or ())

    def contains(self, address: str) -> bool:
        return address in self._addresses


class NullSelectionSurface:
    """Поверхность без UI: только фиксирует, открыта ли она."""

    def __init__(self):
        self.is_open = False
        self.search_resets = 0

    def open(self) -> None:
        self.is_open = True

    def close(self) -> None:
        self.is_open = False

    def reset_search(self) -> None:
        self.search_resets += 1
