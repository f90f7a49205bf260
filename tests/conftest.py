"""Pytest fixtures for IFO factory tests.

Common fixtures: a chain at a fixed time with two assets, a factory owned
by "admin" on that chain, and the dict-level interface over it.
"""

from __future__ import annotations

from dotenv import load_dotenv

# Load environment variables from .env before any tests run
load_dotenv()

import pytest

from src.config_schema import AppConfig
from src.ifo.builder import build_interface, build_templates
from src.ifo.chain import Chain
from src.ifo.events import EventLog
from src.ifo.factory import OfferingFactory
from src.ifo.identifiers import address_for
from src.ifo.interface import FactoryInterface

from tests.testing_utils import ADMIN, DAY, HOUR, LP, NOW, OFFERING_ADMIN, TOKEN


@pytest.fixture
def app_config() -> AppConfig:
    """Default config with a fixed chain start time."""
    return AppConfig.model_validate({"chain": {"start_timestamp": NOW}})


@pytest.fixture
def event_log() -> EventLog:
    return EventLog()


@pytest.fixture
def chain(event_log: EventLog) -> Chain:
    """Chain at NOW with LP and TOKEN registered."""
    chain = Chain(timestamp=NOW, event_log=event_log)
    chain.create_asset(LP, "CAKE-BNB LP")
    chain.create_asset(TOKEN, "Offering Token")
    return chain


@pytest.fixture
def factory(chain: Chain, app_config: AppConfig) -> OfferingFactory:
    """Factory owned by ADMIN on the shared chain."""
    return OfferingFactory(
        chain=chain,
        address=address_for("ifo_factory"),
        owner=ADMIN,
        templates=build_templates(app_config),
    )


@pytest.fixture
def interface(chain: Chain, app_config: AppConfig) -> FactoryInterface:
    """Dict-level interface over a factory on the shared chain."""
    return build_interface(app_config, chain)


@pytest.fixture
def create_args() -> dict[str, object]:
    """Valid keyword arguments for a public-only create_ifo call."""
    return {
        "caller": ADMIN,
        "asset_a": LP,
        "asset_b": TOKEN,
        "start_time": NOW + HOUR,
        "end_time": NOW + DAY,
        "private_start_time": NOW + HOUR,
        "private_end_time": NOW + 12 * HOUR,
        "admin": OFFERING_ADMIN,
        "is_public": True,
        "is_private": False,
    }

