"""
Wire encoding for signed transactions.

A transaction is serialized to its canonical binary form with ``bytes(tx)``
and then to base64 (the form every relay accepts) or base58.
"""

import base64
import binascii
from dataclasses import dataclass
from enum import Enum
from typing import Union

import base58
from solders.errors import BincodeError
from solders.signature import Signature
from solders.transaction import Transaction, VersionedTransaction

from .errors import SerializationError

SUPPORTED_ENCODINGS = ("base64", "base58")


class TxVersion(Enum):
    LEGACY = "legacy"
    V0 = "v0"


@dataclass(frozen=True)
class SignedTransaction:
    version: TxVersion
    transaction: Union[Transaction, VersionedTransaction]

    @property
    def signature(self) -> Signature:
        """First signature; the transaction's identifier."""
        return self.transaction.signatures[0]

    def __bytes__(self) -> bytes:
        return bytes(self.transaction)

    @classmethod
    def from_bytes(cls, raw: bytes, version: TxVersion = TxVersion.LEGACY) -> "SignedTransaction":
        try:
            if version is TxVersion.LEGACY:
                tx = Transaction.from_bytes(raw)
            else:
                tx = VersionedTransaction.from_bytes(raw)
        except (BincodeError, ValueError, TypeError) as e:
            raise SerializationError(
                f"Could not deserialize {version.value} transaction: {e}", original_error=e
            ) from e
        return cls(version, tx)


def encode_transaction(tx: SignedTransaction, encoding: str = "base64") -> str:
    """Serialize and encode a signed transaction for transport."""
    try:
        raw = bytes(tx)
    except (BincodeError, ValueError, TypeError) as e:
        raise SerializationError(f"Could not serialize transaction: {e}", original_error=e) from e

    if encoding == "base64":
        return base64.b64encode(raw).decode("ascii")
    elif encoding == "base58":
        return base58.b58encode(raw).decode("ascii")
    raise SerializationError(f"Unsupported encoding: {encoding}")


def decode_transaction(
    text: str,
    version: TxVersion = TxVersion.LEGACY,
    encoding: str = "base64",
) -> SignedTransaction:
    """Reverse of :func:`encode_transaction`."""
    try:
        if encoding == "base64":
            raw = base64.b64decode(text, validate=True)
        elif encoding == "base58":
            raw = base58.b58decode(text)
        else:
            raise SerializationError(f"Unsupported encoding: {encoding}")
    except (binascii.Error, ValueError) as e:
        raise SerializationError(f"Invalid {encoding} payload: {e}", original_error=e) from e

    return SignedTransaction.from_bytes(raw, version)
