from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Sequence, Union

from solders.address_lookup_table_account import AddressLookupTableAccount
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from ..builder import FeeSpec, HashSource, build_legacy_transaction, build_v0_transaction
from ..encoding import SignedTransaction
from ..envelope import BundleEnvelope, TxEnvelope
from ..errors import UnsupportedOperation


class ProviderIdentity(Enum):
    ASTRALANE = "Astralane"
    BLOCKRAZOR = "Blockrazor"
    HELIUS = "Helius"
    JITO = "Jito"
    NODEONE = "NodeOne"
    TEMPORAL = "Temporal"
    ZEROSLOT = "ZeroSlot"
    FLASHBLOCK = "FlashBlock"
    NEXTBLOCK = "NextBlock"
    EVERSTAKE = "EverStake"
    STELLIUM = "Stellium"

    @classmethod
    def parse(cls, value: str) -> "ProviderIdentity":
        wanted = value.strip().lower()
        for identity in cls:
            if identity.value.lower() == wanted or identity.name.lower() == wanted:
                return identity
        raise ValueError(f"Unknown provider: {value}")


class RelayProvider(ABC):
    """
    Send contract every relay satisfies.

    Subclasses supply identity, endpoint, tip selection and the two send
    operations; transaction building is shared and never looks at which
    provider it is building for.
    """

    identity: ProviderIdentity
    endpoint: str

    def __str__(self) -> str:
        return self.identity.value

    @abstractmethod
    def select_tip_address(self) -> Pubkey:
        ...

    @abstractmethod
    def min_tip_amount(self, for_bundle: bool = False) -> int:
        ...

    @abstractmethod
    async def send_encoded_transaction(self, payload: str) -> Optional[str]:
        """Deliver one base64 transaction. Returns the provider acknowledgment, if any."""

    async def send_bundle(self, payloads: Sequence[str]) -> list[str]:
        """Deliver a group of base64 transactions. Returns one acknowledgment per input."""
        raise UnsupportedOperation("Bundles are not supported", provider=str(self))

    def build_tx(
        self,
        instructions: Sequence[Instruction],
        signers: Union[Keypair, Sequence[Keypair]],
        hash_source: HashSource,
        fee: Optional[FeeSpec] = None,
        for_bundle: bool = False,
    ) -> TxEnvelope:
        tx = build_legacy_transaction(instructions, signers, hash_source, self, fee, for_bundle)
        return TxEnvelope(tx, self)

    def build_v0_tx(
        self,
        instructions: Sequence[Instruction],
        signers: Union[Keypair, Sequence[Keypair]],
        hash_source: HashSource,
        fee: Optional[FeeSpec] = None,
        lookup_tables: Sequence[AddressLookupTableAccount] = (),
        for_bundle: bool = False,
    ) -> TxEnvelope:
        tx = build_v0_transaction(
            instructions, signers, hash_source, self, fee, lookup_tables, for_bundle
        )
        return TxEnvelope(tx, self)

    def build_bundle(self, transactions: Sequence[SignedTransaction]) -> BundleEnvelope:
        return BundleEnvelope(list(transactions), self)
