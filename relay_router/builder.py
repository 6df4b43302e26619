"""
Transaction assembly.

Instruction order is fixed, several relays reject or misprice transactions
otherwise:

    [advance nonce] [cu limit] [cu price] [tip transfer] payload...
"""

import logging
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence, Union

from solders.address_lookup_table_account import AddressLookupTableAccount
from solders.compute_budget import set_compute_unit_limit, set_compute_unit_price
from solders.hash import Hash
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.message import Message, MessageV0
from solders.pubkey import Pubkey
from solders.system_program import (
    AdvanceNonceAccountParams,
    TransferParams,
    advance_nonce_account,
    transfer,
)
from solders.transaction import Transaction, VersionedTransaction

from .encoding import SignedTransaction, TxVersion
from .errors import ConstructionError
from .tips import lamports_to_sol

logger = logging.getLogger(__name__)

PACKET_DATA_SIZE = 1232
U32_MAX = 2**32 - 1
U64_MAX = 2**64 - 1


@dataclass(frozen=True)
class Blockhash:
    hash: Hash


@dataclass(frozen=True)
class DurableNonce:
    account: Pubkey
    authority: Pubkey
    hash: Hash  # current value stored in the nonce account


HashSource = Union[Blockhash, DurableNonce]


def _in_range(value, upper: int) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= upper


@dataclass(frozen=True)
class FeeSpec:
    tip: Optional[int] = None                  # None -> provider minimum, 0 -> no tip
    compute_unit_limit: Optional[int] = None
    compute_unit_price: Optional[int] = None   # micro-lamports per CU

    def __post_init__(self):
        if self.tip is not None and not _in_range(self.tip, U64_MAX):
            raise ConstructionError(f"Invalid tip amount: {self.tip!r}")
        if self.compute_unit_limit is not None and not _in_range(self.compute_unit_limit, U32_MAX):
            raise ConstructionError(f"Invalid compute unit limit: {self.compute_unit_limit!r}")
        if self.compute_unit_price is not None and not _in_range(self.compute_unit_price, U64_MAX):
            raise ConstructionError(f"Invalid compute unit price: {self.compute_unit_price!r}")


class TipSource(Protocol):
    def select_tip_address(self) -> Pubkey: ...

    def min_tip_amount(self, for_bundle: bool = False) -> int: ...


def assemble_instructions(
    payload: Sequence[Instruction],
    payer: Pubkey,
    hash_source: HashSource,
    tip_source: TipSource,
    fee: Optional[FeeSpec] = None,
    for_bundle: bool = False,
) -> list[Instruction]:
    fee = fee or FeeSpec()
    instructions: list[Instruction] = []

    if isinstance(hash_source, DurableNonce):
        instructions.append(
            advance_nonce_account(
                AdvanceNonceAccountParams(
                    nonce_pubkey=hash_source.account,
                    authorized_pubkey=hash_source.authority,
                )
            )
        )

    if fee.compute_unit_limit is not None:
        instructions.append(set_compute_unit_limit(fee.compute_unit_limit))
    if fee.compute_unit_price is not None:
        instructions.append(set_compute_unit_price(fee.compute_unit_price))

    if fee.tip != 0:
        tip_address = tip_source.select_tip_address()
        tip_amount = fee.tip if fee.tip is not None else tip_source.min_tip_amount(for_bundle)
        logger.info(
            f"Build tx with tip: {lamports_to_sol(tip_amount)} SOL at {tip_source} "
            f"tip address: {tip_address}"
        )
        instructions.append(
            transfer(TransferParams(from_pubkey=payer, to_pubkey=tip_address, lamports=tip_amount))
        )

    instructions.extend(payload)
    return instructions


def _normalize_signers(signers: Union[Keypair, Sequence[Keypair]]) -> list[Keypair]:
    if isinstance(signers, Keypair):
        return [signers]
    unique: dict[Pubkey, Keypair] = {}
    for signer in signers:
        unique.setdefault(signer.pubkey(), signer)
    if not unique:
        raise ConstructionError("At least one signer (the fee payer) is required")
    return list(unique.values())


def _check_signers(message: Union[Message, MessageV0], signers: list[Keypair]) -> None:
    required = list(message.account_keys[: message.header.num_required_signatures])
    provided = {s.pubkey() for s in signers}
    missing = [str(k) for k in required if k not in provided]
    if missing:
        raise ConstructionError(f"Missing signatures for: {', '.join(missing)}")
    extra = [str(k) for k in provided if k not in required]
    if extra:
        raise ConstructionError(f"Unexpected signers: {', '.join(extra)}")


def _check_size(tx: SignedTransaction) -> SignedTransaction:
    size = len(bytes(tx))
    if size > PACKET_DATA_SIZE:
        raise ConstructionError(
            f"Transaction too large: {size} bytes (max {PACKET_DATA_SIZE})"
        )
    return tx


def build_legacy_transaction(
    payload: Sequence[Instruction],
    signers: Union[Keypair, Sequence[Keypair]],
    hash_source: HashSource,
    tip_source: TipSource,
    fee: Optional[FeeSpec] = None,
    for_bundle: bool = False,
) -> SignedTransaction:
    """
    Assemble, compile and sign a legacy transaction.

    Args:
        payload: Caller instructions, kept in order after the fee instructions
        signers: Fee payer first, then any other required signers
        hash_source: Recent blockhash or durable nonce; its hash signs the message
        tip_source: Provider supplying the tip address and minimum tip
        fee: Tip and compute budget settings
        for_bundle: Use the provider's bundle minimum when no tip is given

    Raises:
        ConstructionError: If compilation or signing fails, or the result is oversize
    """
    keypairs = _normalize_signers(signers)
    payer = keypairs[0].pubkey()
    instructions = assemble_instructions(payload, payer, hash_source, tip_source, fee, for_bundle)

    try:
        message = Message.new_with_blockhash(instructions, payer, hash_source.hash)
    except Exception as e:
        raise ConstructionError(f"Message compilation failed: {e}", original_error=e) from e

    _check_signers(message, keypairs)
    try:
        tx = Transaction.new_unsigned(message)
        tx.sign(keypairs, hash_source.hash)
    except Exception as e:
        raise ConstructionError(f"Signing failed: {e}", original_error=e) from e

    return _check_size(SignedTransaction(TxVersion.LEGACY, tx))


def build_v0_transaction(
    payload: Sequence[Instruction],
    signers: Union[Keypair, Sequence[Keypair]],
    hash_source: HashSource,
    tip_source: TipSource,
    fee: Optional[FeeSpec] = None,
    lookup_tables: Sequence[AddressLookupTableAccount] = (),
    for_bundle: bool = False,
) -> SignedTransaction:
    """Same as :func:`build_legacy_transaction`, compiled as a v0 message against ``lookup_tables``."""
    keypairs = _normalize_signers(signers)
    payer = keypairs[0].pubkey()
    instructions = assemble_instructions(payload, payer, hash_source, tip_source, fee, for_bundle)

    try:
        message = MessageV0.try_compile(payer, instructions, list(lookup_tables), hash_source.hash)
    except Exception as e:
        raise ConstructionError(f"V0 message compilation failed: {e}", original_error=e) from e

    _check_signers(message, keypairs)
    try:
        tx = VersionedTransaction(message, keypairs)
    except Exception as e:
        raise ConstructionError(f"Signing failed: {e}", original_error=e) from e

    return _check_size(SignedTransaction(TxVersion.V0, tx))
