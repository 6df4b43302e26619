import random

import pytest
from solders.pubkey import Pubkey

from relay_router.providers.base import ProviderIdentity
from relay_router.providers.table import PROFILES
from relay_router.tips import (
    LAMPORTS_PER_SOL,
    TipAccountPool,
    lamports_to_sol,
    sol_to_lamports,
)


class BrokenRng:
    def choice(self, seq):
        raise IndexError("no entropy")


class FailingRandom(random.Random):
    def choice(self, seq):
        raise RuntimeError("no entropy")


class TestTipAccountPool:

    @pytest.mark.unit
    def test_accepts_strings_and_pubkeys(self):
        key = Pubkey.new_unique()
        pool = TipAccountPool([key, "D2L6yPZ2FmmmTKPgzaMKdhu6EWZcTpLy1Vhx8uvZe7NZ"])
        assert len(pool) == 2
        assert key in pool
        assert Pubkey.from_string("D2L6yPZ2FmmmTKPgzaMKdhu6EWZcTpLy1Vhx8uvZe7NZ") in pool

    @pytest.mark.unit
    def test_choice_is_always_a_member(self):
        pool = PROFILES[ProviderIdentity.JITO].tip_accounts
        rng = random.Random(7)
        for _ in range(100):
            assert pool.choose(rng) in pool

    @pytest.mark.unit
    def test_single_entry_pool(self):
        key = Pubkey.new_unique()
        pool = TipAccountPool([key])
        assert all(pool.choose() == key for _ in range(10))

    @pytest.mark.unit
    def test_choice_covers_the_pool(self):
        keys = [Pubkey.new_unique() for _ in range(3)]
        pool = TipAccountPool(keys)
        rng = random.Random(1)
        seen = {pool.choose(rng) for _ in range(200)}
        assert seen == set(keys)

    @pytest.mark.error
    def test_rng_failure_falls_back_to_first(self):
        keys = [Pubkey.new_unique() for _ in range(3)]
        pool = TipAccountPool(keys)
        assert pool.choose(BrokenRng()) == keys[0]

    @pytest.mark.error
    def test_any_rng_error_falls_back_to_first(self):
        keys = [Pubkey.new_unique() for _ in range(3)]
        pool = TipAccountPool(keys)
        assert pool.choose(FailingRandom()) == keys[0]

    @pytest.mark.error
    def test_empty_pool_rejected(self):
        with pytest.raises(ValueError):
            TipAccountPool([])

    @pytest.mark.error
    def test_invalid_address_rejected(self):
        with pytest.raises(ValueError):
            TipAccountPool(["not-a-pubkey"])


class TestProviderTips:

    @pytest.mark.unit
    @pytest.mark.parametrize("identity", list(ProviderIdentity))
    def test_pools_are_non_empty_and_minimums_positive(self, identity):
        profile = PROFILES[identity]
        assert len(profile.tip_accounts) >= 1
        assert profile.min_tip > 0
        if profile.min_bundle_tip is not None:
            assert profile.min_bundle_tip > 0

    @pytest.mark.unit
    def test_published_minimums(self):
        assert PROFILES[ProviderIdentity.JITO].min_tip == 1_000
        assert PROFILES[ProviderIdentity.JITO].min_bundle_tip == 10_000
        assert PROFILES[ProviderIdentity.NODEONE].min_tip == 2_000_000
        assert PROFILES[ProviderIdentity.EVERSTAKE].min_tip == 500_000
        assert PROFILES[ProviderIdentity.ASTRALANE].min_bundle_tip == 3_000_000


@pytest.mark.unit
def test_sol_conversion():
    assert sol_to_lamports(0.001) == 1_000_000
    assert lamports_to_sol(LAMPORTS_PER_SOL) == 1.0
    assert lamports_to_sol(1_000) == 0.000001
