#!/usr/bin/env python3
"""
Send a SOL transfer through a relay provider, tip and compute budget included.
The recent blockhash is fetched from a regular RPC node; the transaction itself
goes to the relay endpoint for the configured region.
"""

import getpass
import os

import anyio
import base58
from solana.rpc.async_api import AsyncClient
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.system_program import TransferParams, transfer

from relay_router.builder import Blockhash, FeeSpec
from relay_router.client import RelayClient
from relay_router.config import RelayConfig, configure_logging
from relay_router.errors import RelayError
from relay_router.providers.base import ProviderIdentity

RPC_URL = os.getenv("JSON_RPC_URL", "https://api.mainnet-beta.solana.com")


def load_keypair() -> Keypair:
    private_key_input = getpass.getpass("Enter your wallet private key (base58 encoded): ").strip()
    if not private_key_input:
        raise ValueError("Private key is required")
    try:
        return Keypair.from_bytes(base58.b58decode(private_key_input))
    except ValueError as e:
        raise ValueError(f"Invalid private key: {e}")


async def latest_blockhash() -> Blockhash:
    async with AsyncClient(RPC_URL) as rpc:
        resp = await rpc.get_latest_blockhash()
        return Blockhash(resp.value.blockhash)


async def main():
    config = RelayConfig.from_env()
    configure_logging(config.log_level)

    keypair = load_keypair()
    to_address = "2aDCackvygC59makgc7ndifFGft1ru35qJXsqbfVeiJr"
    amount = 1_000_000  # 0.001 SOL

    transfer_ix = transfer(
        TransferParams(
            from_pubkey=keypair.pubkey(),
            to_pubkey=Pubkey.from_string(to_address),
            lamports=amount,
        )
    )
    hash_source = await latest_blockhash()
    fee = FeeSpec(compute_unit_limit=10_000, compute_unit_price=100_000)

    async with RelayClient(config) as client:
        jito = client.provider(ProviderIdentity.JITO)
        print(f"From: {keypair.pubkey()}")
        print(f"To: {to_address}")
        print(f"Relay: {jito.identity.value} @ {jito.endpoint}")

        envelope = jito.build_tx([transfer_ix], keypair, hash_source, fee)
        try:
            signature = await envelope.send()
        except RelayError as e:
            print(f"Error: {e}")
            return

    print(f"Signature: {signature}")
    print(f"Explorer: https://explorer.solana.com/tx/{signature}")


if __name__ == "__main__":
    anyio.run(main)
