"""Offering factory - creates, catalogs and sweeps.

The factory owns three things: the administrator capability (``Ownable``),
the registry of created offerings, and its own account on the chain. All
mutating operations run inside a single chain transaction, so a failure at
any step leaves the chain, the registry and the event log unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .access import Ownable
from .chain import Chain
from .constants import TRANCHE_PRIVATE, TRANCHE_PUBLIC
from .errors import InvalidArgument, NothingToRecover
from .events import ADMIN_ASSET_RECOVERED, NEW_OFFERING_CREATED, OWNERSHIP_TRANSFERRED
from .identifiers import derive_identifier, offering_salt
from .offerings import Offering, OfferingTemplate
from .registry import OfferingRecord, OfferingRegistry
from .window import WindowSpec, validate_window

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreationResult:
    """Outcome of a successful create_ifo call."""

    index: int
    record: OfferingRecord

    @property
    def public_instance(self) -> str | None:
        return self.record.public_instance

    @property
    def private_instance(self) -> str | None:
        return self.record.private_instance

    def to_dict(self) -> dict[str, Any]:
        return {"index": self.index, **self.record.to_dict()}


class OfferingFactory:
    """Creates public/private offering pairs at deterministic identifiers.

    Usage:
        factory = OfferingFactory(chain, address, owner="admin", templates=templates)
        result = factory.create_ifo("admin", "LP", "CAKE", start, end, ...)
        factory.get_offering_records(10, 0)
    """

    chain: Chain
    address: str
    access: Ownable
    registry: OfferingRegistry
    templates: dict[str, OfferingTemplate]

    def __init__(
        self,
        chain: Chain,
        address: str,
        owner: str,
        templates: dict[str, OfferingTemplate],
    ) -> None:
        missing = [t for t in (TRANCHE_PUBLIC, TRANCHE_PRIVATE) if t not in templates]
        if missing:
            raise ValueError(f"Missing offering templates: {missing}")
        if templates[TRANCHE_PUBLIC].code_hash == templates[TRANCHE_PRIVATE].code_hash:
            raise ValueError("Public and private templates must have distinct code hashes")
        self.chain = chain
        self.address = address
        self.access = Ownable(owner)
        self.registry = OfferingRegistry()
        self.templates = dict(templates)
        self.access.on_ownership_transferred(self._emit_ownership_transferred)

    @property
    def owner(self) -> str | None:
        return self.access.owner

    # ===== CREATION =====

    def create_ifo(
        self,
        caller: str,
        asset_a: str,
        asset_b: str,
        start_time: int,
        end_time: int,
        private_start_time: int,
        private_end_time: int,
        admin: str,
        is_public: bool,
        is_private: bool,
    ) -> CreationResult:
        """Create the requested tranches and record them.

        Both tranches share the salt (asset_a, asset_b, start_time); their
        templates differ, so their identifiers differ. Repeating a request
        with the same salt and tranche fails with IdentifierCollision.

        Raises:
            Unauthorized, UnknownAsset, DuplicateAsset, NoTrancheSelected,
            WindowTooFar, InvertedWindow, WindowNotFuture,
            IdentifierCollision, InvalidArgument
        """
        with self.chain.transaction():
            self.access.require_owner(caller)
            self.chain.require_asset(asset_a)
            self.chain.require_asset(asset_b)

            spec = WindowSpec(
                asset_a=asset_a,
                asset_b=asset_b,
                start_time=start_time,
                end_time=end_time,
                private_start_time=private_start_time,
                private_end_time=private_end_time,
                is_public=is_public,
                is_private=is_private,
            )
            validate_window(spec, self.chain.timestamp)
            if not admin:
                raise InvalidArgument("Offering admin must be a non-empty identity")

            salt = offering_salt(asset_a, asset_b, start_time)
            public_instance: str | None = None
            private_instance: str | None = None
            for tranche, window_start, window_end in spec.requested_windows():
                instance = self._deploy(tranche, salt)
                instance.initialize(
                    self.address, asset_a, asset_b, window_start, window_end, admin
                )
                if tranche == TRANCHE_PUBLIC:
                    public_instance = instance.address
                else:
                    private_instance = instance.address

            record = OfferingRecord(
                public_instance=public_instance,
                private_instance=private_instance,
            )
            index = self.registry.append(record)
            self.chain.emit(NEW_OFFERING_CREATED, {
                "index": index,
                "public_instance": public_instance,
                "private_instance": private_instance,
            })

        logger.info(
            "Created offering #%d (public=%s, private=%s) for %s/%s",
            index, public_instance, private_instance, asset_a, asset_b,
        )
        return CreationResult(index=index, record=record)

    def _deploy(self, tranche: str, salt: bytes) -> Offering:
        return self.chain.create_instance(self.address, self.templates[tranche], salt)

    def predict_offering_address(
        self, asset_a: str, asset_b: str, start_time: int, tranche: str
    ) -> str:
        """Identifier create_ifo would use for this tranche. Pure."""
        template = self.templates.get(tranche)
        if template is None:
            raise InvalidArgument(f"Unknown tranche '{tranche}'", tranche=tranche)
        salt = offering_salt(asset_a, asset_b, start_time)
        return derive_identifier(template.code_hash, salt, self.address)

    # ===== REGISTRY READS =====

    def get_offering_records(self, count: int, offset: int) -> list[OfferingRecord]:
        """Up to count records starting at offset, clamped to the registry."""
        return self.registry.page(count, offset)

    def offering_count(self) -> int:
        return len(self.registry)

    # ===== RECOVERY =====

    def recover_wrong_tokens(self, caller: str, asset_id: str) -> int:
        """Sweep the factory's whole balance of asset_id to the owner.

        Returns:
            Amount transferred

        Raises:
            Unauthorized, UnknownAsset, NothingToRecover
        """
        with self.chain.transaction():
            self.access.require_owner(caller)
            balance = self.chain.balance_of(asset_id, self.address)
            if balance == 0:
                raise NothingToRecover(
                    f"Factory holds no '{asset_id}'",
                    asset_id=asset_id,
                )
            self.chain.transfer_or_raise(asset_id, self.address, caller, balance)
            self.chain.emit(ADMIN_ASSET_RECOVERED, {
                "asset_id": asset_id,
                "amount": balance,
            })

        logger.info("Recovered %d of '%s' to '%s'", balance, asset_id, caller)
        return balance

    # ===== OWNERSHIP =====

    def transfer_ownership(self, caller: str, new_owner: str) -> None:
        with self.chain.transaction():
            self.access.transfer_ownership(caller, new_owner)

    def renounce_ownership(self, caller: str) -> None:
        with self.chain.transaction():
            self.access.renounce_ownership(caller)

    def _emit_ownership_transferred(self, previous: str | None, new_owner: str | None) -> None:
        self.chain.emit(OWNERSHIP_TRANSFERRED, {
            "previous_owner": previous,
            "new_owner": new_owner,
        })
