"""Tests for recover_wrong_tokens."""

import pytest

from src.ifo.chain import Chain
from src.ifo.errors import NothingToRecover, Unauthorized, UnknownAsset
from src.ifo.events import ADMIN_ASSET_RECOVERED
from src.ifo.factory import OfferingFactory

from tests.testing_utils import ADMIN, OUTSIDER, TOKEN


@pytest.fixture
def funded_factory(factory: OfferingFactory, chain: Chain) -> OfferingFactory:
    """Factory holding 250 TOKEN sent by mistake."""
    chain.mint(TOKEN, "someone", 250)
    chain.transfer(TOKEN, "someone", factory.address, 250)
    return factory


class TestRecoverWrongTokens:
    """Tests for sweeping stray assets to the administrator."""

    def test_recovers_full_balance(
        self, funded_factory: OfferingFactory, chain: Chain
    ) -> None:
        amount = funded_factory.recover_wrong_tokens(ADMIN, TOKEN)

        assert amount == 250
        assert chain.balance_of(TOKEN, funded_factory.address) == 0
        assert chain.balance_of(TOKEN, ADMIN) == 250

    def test_emits_event(self, funded_factory: OfferingFactory, chain: Chain) -> None:
        funded_factory.recover_wrong_tokens(ADMIN, TOKEN)
        events = chain.event_log.events(ADMIN_ASSET_RECOVERED)
        assert len(events) == 1
        assert events[0]["asset_id"] == TOKEN
        assert events[0]["amount"] == 250

    def test_zero_balance(self, factory: OfferingFactory, chain: Chain) -> None:
        with pytest.raises(NothingToRecover):
            factory.recover_wrong_tokens(ADMIN, TOKEN)
        assert chain.event_log.events(ADMIN_ASSET_RECOVERED) == []

    def test_second_recovery_has_nothing_left(self, funded_factory: OfferingFactory) -> None:
        funded_factory.recover_wrong_tokens(ADMIN, TOKEN)
        with pytest.raises(NothingToRecover):
            funded_factory.recover_wrong_tokens(ADMIN, TOKEN)

    def test_non_admin(self, funded_factory: OfferingFactory, chain: Chain) -> None:
        with pytest.raises(Unauthorized):
            funded_factory.recover_wrong_tokens(OUTSIDER, TOKEN)
        assert chain.balance_of(TOKEN, funded_factory.address) == 250
        assert chain.balance_of(TOKEN, OUTSIDER) == 0

    def test_unknown_asset(self, factory: OfferingFactory) -> None:
        with pytest.raises(UnknownAsset):
            factory.recover_wrong_tokens(ADMIN, "NOPE")
