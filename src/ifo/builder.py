"""Wire a chain, templates and factory together from configuration."""

from __future__ import annotations

import logging

from ..config_schema import AppConfig
from .chain import Chain
from .constants import TRANCHE_PRIVATE, TRANCHE_PUBLIC
from .events import EventLog
from .factory import OfferingFactory
from .identifiers import address_for
from .interface import FactoryInterface
from .offerings import OfferingTemplate, build_template

logger = logging.getLogger(__name__)


def build_templates(config: AppConfig) -> dict[str, OfferingTemplate]:
    """Offering templates for both tranches from config."""
    return {
        TRANCHE_PUBLIC: build_template(
            TRANCHE_PUBLIC, config.templates.public.name, config.templates.public.version
        ),
        TRANCHE_PRIVATE: build_template(
            TRANCHE_PRIVATE, config.templates.private.name, config.templates.private.version
        ),
    }


def build_factory(config: AppConfig, chain: Chain | None = None) -> OfferingFactory:
    """Create an OfferingFactory on chain (a new one when None).

    Args:
        config: Validated application config
        chain: Existing chain to deploy on

    Returns:
        Configured factory owned by config.factory.owner
    """
    if chain is None:
        event_log = EventLog(
            output_file=config.logging.output_file,
            default_recent=config.logging.default_recent,
        )
        chain = Chain(timestamp=config.chain.start_timestamp, event_log=event_log)
    address = address_for(config.factory.address_label)
    factory = OfferingFactory(
        chain=chain,
        address=address,
        owner=config.factory.owner,
        templates=build_templates(config),
    )
    logger.info("Factory %s ready, owner '%s'", address, config.factory.owner)
    return factory


def build_interface(config: AppConfig, chain: Chain | None = None) -> FactoryInterface:
    """Factory wrapped in the dict-in / dict-out interface."""
    return FactoryInterface(
        build_factory(config, chain),
        default_count=config.queries.default_count,
    )
