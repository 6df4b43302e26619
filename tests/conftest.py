import os
import sys
from pathlib import Path

import aiohttp
import pytest
import pytest_asyncio
from solders.hash import Hash
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.system_program import TransferParams, transfer

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from relay_router.builder import Blockhash  # noqa: E402
from relay_router.providers.base import ProviderIdentity  # noqa: E402
from relay_router.providers.http import HttpRelayProvider  # noqa: E402
from relay_router.providers.table import PROFILES  # noqa: E402
from relay_router.regions import Region  # noqa: E402

# Keep the developer's shell from leaking credentials into tests
for _profile in PROFILES.values():
    if _profile.credential_env:
        os.environ.pop(_profile.credential_env, None)


class FixedTipSource:
    """Tip source with one known address, for checking built instructions."""

    def __init__(self, address=None, min_tip=5_000, min_bundle_tip=50_000):
        self.address = address or Pubkey.new_unique()
        self.min_tip = min_tip
        self.min_bundle_tip = min_bundle_tip

    def __str__(self):
        return "Fixed"

    def select_tip_address(self):
        return self.address

    def min_tip_amount(self, for_bundle=False):
        return self.min_bundle_tip if for_bundle else self.min_tip


@pytest.fixture
def payer():
    return Keypair()


@pytest.fixture
def blockhash():
    return Blockhash(Hash.new_unique())


@pytest.fixture
def tip_source():
    return FixedTipSource()


@pytest.fixture
def transfer_ix(payer):
    return transfer(
        TransferParams(from_pubkey=payer.pubkey(), to_pubkey=Pubkey.new_unique(), lamports=1_000)
    )


@pytest.fixture
def memo_ix():
    return Instruction(Pubkey.new_unique(), b"hello", [])


@pytest_asyncio.fixture
async def session():
    async with aiohttp.ClientSession() as s:
        yield s


@pytest.fixture
def make_provider(session):
    def _make(identity, region=Region.FRANKFURT, credential="", timeout=30.0):
        return HttpRelayProvider(
            PROFILES[ProviderIdentity(identity) if isinstance(identity, str) else identity],
            region,
            session,
            credential=credential,
            timeout=timeout,
        )

    return _make
