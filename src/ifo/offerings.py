"""Offering templates: the sub-systems the factory instantiates.

Only instantiation, addressing and the one-time ``initialize`` contract live
here. Fundraising, allow-list verification and claim accounting belong to
the offerings themselves and are out of scope.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from .constants import TRANCHE_PRIVATE, TRANCHE_PUBLIC
from .errors import AlreadyInitialized, Unauthorized
from .identifiers import code_hash


class Offering:
    """Base offering instance.

    Created by a factory at a deterministic identifier and initialized by
    that same factory exactly once. Initialization hands ownership to the
    offering's administrator.
    """

    tranche: ClassVar[str] = ""
    requires_allow_list: ClassVar[bool] = False

    address: str
    factory: str
    owner: str
    is_initialized: bool
    asset_a: str | None
    asset_b: str | None
    start_time: int | None
    end_time: int | None

    def __init__(self, address: str, factory: str) -> None:
        self.address = address
        self.factory = factory
        self.owner = factory
        self.is_initialized = False
        self.asset_a = None
        self.asset_b = None
        self.start_time = None
        self.end_time = None

    def initialize(
        self,
        caller: str,
        asset_a: str,
        asset_b: str,
        start_time: int,
        end_time: int,
        admin: str,
    ) -> None:
        """One-time setup, callable only by the creating factory.

        Raises:
            Unauthorized: caller is not the creating factory
            AlreadyInitialized: initialize already ran on this instance
        """
        if caller != self.factory:
            raise Unauthorized(
                f"Only factory '{self.factory}' may initialize {self.address}",
                caller=caller,
            )
        if self.is_initialized:
            raise AlreadyInitialized(
                f"Offering {self.address} is already initialized",
                address=self.address,
            )
        self.is_initialized = True
        self.asset_a = asset_a
        self.asset_b = asset_b
        self.start_time = start_time
        self.end_time = end_time
        self.owner = admin

    def to_dict(self) -> dict[str, Any]:
        return {
            "address": self.address,
            "tranche": self.tranche,
            "factory": self.factory,
            "owner": self.owner,
            "is_initialized": self.is_initialized,
            "requires_allow_list": self.requires_allow_list,
            "asset_a": self.asset_a,
            "asset_b": self.asset_b,
            "start_time": self.start_time,
            "end_time": self.end_time,
        }


class PublicOffering(Offering):
    """Open tranche: anyone may participate."""

    tranche = TRANCHE_PUBLIC


class PrivateOffering(Offering):
    """Allow-listed tranche."""

    tranche = TRANCHE_PRIVATE
    requires_allow_list = True


@dataclass(frozen=True)
class OfferingTemplate:
    """Content-addressed blueprint for an offering.

    The code hash is derived from name and version, so bumping the version
    moves every future instance to a new identifier.
    """

    name: str
    version: str
    offering_cls: type[Offering]

    @property
    def code_hash(self) -> bytes:
        return code_hash(f"{self.name}@{self.version}".encode("utf-8"))

    def instantiate(self, address: str, factory: str) -> Offering:
        return self.offering_cls(address, factory)


OFFERING_CLASSES: dict[str, type[Offering]] = {
    TRANCHE_PUBLIC: PublicOffering,
    TRANCHE_PRIVATE: PrivateOffering,
}


def build_template(tranche: str, name: str, version: str) -> OfferingTemplate:
    """Create the template for a tranche from its configured name/version."""
    if tranche not in OFFERING_CLASSES:
        raise ValueError(f"Unknown tranche '{tranche}'")
    return OfferingTemplate(name=name, version=version, offering_cls=OFFERING_CLASSES[tranche])
