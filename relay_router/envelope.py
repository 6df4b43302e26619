import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Sequence, Union

from solders.signature import Signature

from .encoding import SignedTransaction, encode_transaction

if TYPE_CHECKING:
    from .providers.base import RelayProvider

logger = logging.getLogger(__name__)


@dataclass
class TxEnvelope:
    transaction: SignedTransaction
    provider: "RelayProvider"

    @property
    def signature(self) -> Signature:
        return self.transaction.signature

    async def send(self) -> Signature:
        """Encode and hand the transaction to its provider; returns the transaction's own signature."""
        payload = encode_transaction(self.transaction)
        ack = await self.provider.send_encoded_transaction(payload)
        logger.info(f"{self.provider} accepted {self.signature} (ack={ack})")
        return self.signature


@dataclass
class BundleEnvelope:
    transactions: list[SignedTransaction]
    provider: "RelayProvider"

    @property
    def signatures(self) -> list[Signature]:
        return [tx.signature for tx in self.transactions]

    async def send(self) -> list[Signature]:
        payloads = [encode_transaction(tx) for tx in self.transactions]
        acks = await self.provider.send_bundle(payloads)
        logger.info(f"{self.provider} accepted bundle of {len(payloads)} (acks={acks})")
        return self.signatures


@dataclass
class SendOutcome:
    provider: str
    signature: Optional[Union[Signature, list[Signature]]] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def broadcast(envelopes: Sequence[Union[TxEnvelope, BundleEnvelope]]) -> list[SendOutcome]:
    """Send every envelope concurrently; one outcome per envelope, in input order."""
    results = await asyncio.gather(*(e.send() for e in envelopes), return_exceptions=True)

    outcomes = []
    for envelope, result in zip(envelopes, results):
        if isinstance(result, Exception):
            logger.warning(f"{envelope.provider} send failed: {result}")
            outcomes.append(SendOutcome(str(envelope.provider), error=result))
        elif isinstance(result, BaseException):
            raise result
        else:
            outcomes.append(SendOutcome(str(envelope.provider), signature=result))
    return outcomes
