"""In-memory serialized ledger the factory runs on.

Stands in for the platform underneath the factory:
1. Clock - integer Unix seconds, advanced explicitly
2. Assets - registered asset ids with integer balances per holder
3. Instances - offering instances keyed by deterministic identifier
4. Transactions - every mutating call runs as one atomic unit

Balances are integers (smallest asset units). Never negative.
Creating an instance at an occupied identifier fails, it never overwrites.
"""

from __future__ import annotations

import logging
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator

from .errors import IdentifierCollision, InsufficientBalance, InvalidArgument, UnknownAsset
from .events import EventLog
from .identifiers import derive_identifier
from .offerings import Offering, OfferingTemplate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssetInfo:
    """A registered asset."""

    asset_id: str
    symbol: str


class Chain:
    """Serialized state machine holding assets, balances and instances.

    State changes made inside ``transaction()`` become visible together on
    commit, or are discarded together when the block raises. Events
    emitted inside a transaction reach the EventLog only on commit. Mutators
    called outside a transaction take the same lock, so they never interleave
    with an open transaction on another thread.
    """

    event_log: EventLog
    assets: dict[str, AssetInfo]
    balances: dict[str, dict[str, int]]
    instances: dict[str, Offering]
    _timestamp: int
    _lock: threading.RLock
    _depth: int
    _pending_events: list[tuple[str, dict[str, Any]]]

    def __init__(
        self,
        timestamp: int | None = None,
        event_log: EventLog | None = None,
    ) -> None:
        self._timestamp = int(time.time()) if timestamp is None else timestamp
        self.event_log = event_log if event_log is not None else EventLog()
        # {asset_id: AssetInfo}
        self.assets = {}
        # {asset_id: {holder: amount}}
        self.balances = {}
        # {identifier: Offering}
        self.instances = {}
        self._lock = threading.RLock()
        self._depth = 0
        self._pending_events = []

    # ===== CLOCK =====

    @property
    def timestamp(self) -> int:
        """Current chain time in Unix seconds."""
        return self._timestamp

    def advance_time(self, seconds: int) -> int:
        """Move the clock forward and return the new timestamp."""
        if seconds < 0:
            raise InvalidArgument("Chain time cannot move backwards", seconds=seconds)
        with self._lock:
            self._timestamp += seconds
            return self._timestamp

    # ===== TRANSACTIONS =====

    @contextmanager
    def transaction(self) -> Iterator["Chain"]:
        """Run the enclosed block as one atomic, serialized unit.

        Nested transactions join the outermost one.
        """
        with self._lock:
            if self._depth > 0:
                self._depth += 1
                try:
                    yield self
                finally:
                    self._depth -= 1
                return

            snapshot = self._snapshot()
            self._depth = 1
            try:
                yield self
            except BaseException:
                self._restore(snapshot)
                self._pending_events = []
                logger.debug("Transaction reverted")
                raise
            finally:
                self._depth = 0
            pending, self._pending_events = self._pending_events, []
            for event_type, data in pending:
                self.event_log.log(event_type, {"block_time": self._timestamp, **data})

    def _snapshot(self) -> tuple[dict[str, AssetInfo], dict[str, dict[str, int]], dict[str, Offering]]:
        return (
            dict(self.assets),
            {asset_id: dict(holders) for asset_id, holders in self.balances.items()},
            dict(self.instances),
        )

    def _restore(
        self,
        snapshot: tuple[dict[str, AssetInfo], dict[str, dict[str, int]], dict[str, Offering]],
    ) -> None:
        self.assets, self.balances, self.instances = snapshot

    def emit(self, event_type: str, data: dict[str, Any]) -> None:
        """Queue an event. Outside a transaction it is published at once."""
        with self._lock:
            if self._depth == 0:
                self.event_log.log(event_type, {"block_time": self._timestamp, **data})
            else:
                self._pending_events.append((event_type, data))

    # ===== ASSETS =====

    def create_asset(self, asset_id: str, symbol: str = "") -> AssetInfo:
        """Register a new asset with zero supply."""
        if not asset_id:
            raise InvalidArgument("asset_id must be non-empty")
        with self._lock:
            if asset_id in self.assets:
                raise IdentifierCollision(f"Asset '{asset_id}' already exists", asset_id=asset_id)
            info = AssetInfo(asset_id=asset_id, symbol=symbol or asset_id)
            self.assets[asset_id] = info
            self.balances[asset_id] = {}
            return info

    def asset_exists(self, asset_id: str) -> bool:
        return asset_id in self.assets

    def require_asset(self, asset_id: str) -> AssetInfo:
        """Existence probe. Raises UnknownAsset for unregistered ids."""
        info = self.assets.get(asset_id)
        if info is None:
            raise UnknownAsset(f"Asset '{asset_id}' does not exist", asset_id=asset_id)
        return info

    def total_supply(self, asset_id: str) -> int:
        self.require_asset(asset_id)
        return sum(self.balances[asset_id].values())

    def balance_of(self, asset_id: str, holder: str) -> int:
        """Balance of holder in asset_id. Unknown holders have 0."""
        self.require_asset(asset_id)
        return self.balances[asset_id].get(holder, 0)

    def mint(self, asset_id: str, holder: str, amount: int) -> None:
        """Credit newly issued units to holder."""
        with self._lock:
            self.require_asset(asset_id)
            if amount <= 0:
                raise InvalidArgument("Mint amount must be positive", amount=amount)
            holders = self.balances[asset_id]
            holders[holder] = holders.get(holder, 0) + amount

    def can_transfer(self, asset_id: str, sender: str, amount: int) -> bool:
        return self.balance_of(asset_id, sender) >= amount

    def transfer(self, asset_id: str, sender: str, recipient: str, amount: int) -> bool:
        """Move amount of asset_id from sender to recipient.

        Returns False for non-positive amounts or insufficient balance.
        Auto-creates the recipient's balance entry.
        """
        if amount <= 0:
            return False
        with self._lock:
            if not self.can_transfer(asset_id, sender, amount):
                return False
            holders = self.balances[asset_id]
            holders[sender] -= amount
            holders[recipient] = holders.get(recipient, 0) + amount
            return True

    def transfer_or_raise(self, asset_id: str, sender: str, recipient: str, amount: int) -> None:
        """Like transfer, but raises InsufficientBalance on failure."""
        with self._lock:
            if self.transfer(asset_id, sender, recipient, amount):
                return
            raise InsufficientBalance(
                f"Cannot transfer {amount} of '{asset_id}' from '{sender}'",
                asset_id=asset_id,
                sender=sender,
                amount=amount,
                balance=self.balance_of(asset_id, sender),
            )

    # ===== INSTANCES =====

    def create_instance(self, deployer: str, template: OfferingTemplate, salt: bytes) -> Offering:
        """Materialize template at its deterministic identifier.

        Raises:
            IdentifierCollision: an instance already lives at the identifier
        """
        target = derive_identifier(template.code_hash, salt, deployer)
        with self._lock:
            if target in self.instances:
                raise IdentifierCollision(
                    f"An instance already exists at {target}",
                    identifier=target,
                    template=template.name,
                )
            instance = template.instantiate(target, deployer)
            self.instances[target] = instance
        logger.debug("Created %s instance at %s", template.name, target)
        return instance

    def get_instance(self, identifier: str) -> Offering | None:
        return self.instances.get(identifier)

    def instance_exists(self, identifier: str) -> bool:
        return identifier in self.instances
