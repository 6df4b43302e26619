import pytest
from solders.address_lookup_table_account import AddressLookupTableAccount
from solders.compute_budget import set_compute_unit_limit, set_compute_unit_price
from solders.hash import Hash
from solders.instruction import AccountMeta, Instruction
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.system_program import (
    AdvanceNonceAccountParams,
    TransferParams,
    advance_nonce_account,
    transfer,
)

from conftest import FixedTipSource
from relay_router.builder import (
    PACKET_DATA_SIZE,
    Blockhash,
    DurableNonce,
    FeeSpec,
    assemble_instructions,
    build_legacy_transaction,
    build_v0_transaction,
)
from relay_router.encoding import TxVersion
from relay_router.errors import ConstructionError
from relay_router.providers.base import ProviderIdentity
from relay_router.providers.http import HttpRelayProvider
from relay_router.providers.table import PROFILES
from relay_router.regions import Region


def program_ids(signed):
    message = signed.transaction.message
    return [message.account_keys[ix.program_id_index] for ix in message.instructions]


def instruction_data(signed):
    return [bytes(ix.data) for ix in signed.transaction.message.instructions]


class TestAssembleInstructions:

    @pytest.mark.unit
    def test_nonce_budget_and_no_tip(self, payer, tip_source, transfer_ix):
        nonce = DurableNonce(Pubkey.new_unique(), payer.pubkey(), Hash.new_unique())
        fee = FeeSpec(tip=0, compute_unit_limit=200_000, compute_unit_price=1_000)

        ixs = assemble_instructions([transfer_ix], payer.pubkey(), nonce, tip_source, fee)

        assert ixs == [
            advance_nonce_account(
                AdvanceNonceAccountParams(
                    nonce_pubkey=nonce.account, authorized_pubkey=payer.pubkey()
                )
            ),
            set_compute_unit_limit(200_000),
            set_compute_unit_price(1_000),
            transfer_ix,
        ]

    @pytest.mark.unit
    def test_default_tip_uses_provider_minimum(self, payer, blockhash, tip_source, memo_ix):
        ixs = assemble_instructions([memo_ix], payer.pubkey(), blockhash, tip_source)

        assert ixs == [
            transfer(
                TransferParams(
                    from_pubkey=payer.pubkey(),
                    to_pubkey=tip_source.address,
                    lamports=tip_source.min_tip,
                )
            ),
            memo_ix,
        ]

    @pytest.mark.unit
    def test_bundle_minimum(self, payer, blockhash, tip_source, memo_ix):
        ixs = assemble_instructions(
            [memo_ix], payer.pubkey(), blockhash, tip_source, for_bundle=True
        )
        assert ixs[0] == transfer(
            TransferParams(
                from_pubkey=payer.pubkey(),
                to_pubkey=tip_source.address,
                lamports=tip_source.min_bundle_tip,
            )
        )

    @pytest.mark.unit
    def test_explicit_tip_overrides_minimum(self, payer, blockhash, tip_source, memo_ix):
        fee = FeeSpec(tip=123_456, compute_unit_price=5)
        ixs = assemble_instructions([memo_ix], payer.pubkey(), blockhash, tip_source, fee)

        assert ixs == [
            set_compute_unit_price(5),
            transfer(
                TransferParams(
                    from_pubkey=payer.pubkey(), to_pubkey=tip_source.address, lamports=123_456
                )
            ),
            memo_ix,
        ]

    @pytest.mark.unit
    def test_payload_order_is_kept(self, payer, blockhash, tip_source):
        payload = [Instruction(Pubkey.new_unique(), bytes([i]), []) for i in range(4)]
        ixs = assemble_instructions(payload, payer.pubkey(), blockhash, tip_source, FeeSpec(tip=0))
        assert ixs == payload


class TestFeeSpec:

    @pytest.mark.error
    @pytest.mark.parametrize("kwargs", [
        {"tip": -1},
        {"tip": 2**64},
        {"compute_unit_limit": 2**32},
        {"compute_unit_limit": -5},
        {"compute_unit_price": 2**64},
        {"tip": 1.5},
        {"tip": True},
        {"compute_unit_limit": 2.5},
        {"compute_unit_price": 100.0},
        {"compute_unit_price": "1000"},
    ])
    def test_out_of_range(self, kwargs):
        with pytest.raises(ConstructionError):
            FeeSpec(**kwargs)

    @pytest.mark.error
    def test_float_tip_fails_before_build(self, payer, blockhash, tip_source, memo_ix):
        with pytest.raises(ConstructionError, match="Invalid tip amount"):
            build_legacy_transaction([memo_ix], payer, blockhash, tip_source, FeeSpec(tip=1.5))

    @pytest.mark.unit
    def test_bounds_accepted(self):
        FeeSpec(tip=2**64 - 1, compute_unit_limit=2**32 - 1, compute_unit_price=0)


class TestBuildLegacy:

    @pytest.mark.unit
    def test_signed_and_ordered(self, payer, blockhash, tip_source, memo_ix):
        fee = FeeSpec(compute_unit_limit=10_000, compute_unit_price=100)
        signed = build_legacy_transaction([memo_ix], payer, blockhash, tip_source, fee)

        assert signed.version is TxVersion.LEGACY
        assert signed.transaction.message.recent_blockhash == blockhash.hash
        assert signed.signature == signed.transaction.signatures[0]
        assert signed.transaction.verify() is None

        limit, price = set_compute_unit_limit(10_000), set_compute_unit_price(100)
        tip = transfer(
            TransferParams(
                from_pubkey=payer.pubkey(), to_pubkey=tip_source.address, lamports=5_000
            )
        )
        assert program_ids(signed) == [
            limit.program_id, price.program_id, tip.program_id, memo_ix.program_id,
        ]
        assert instruction_data(signed) == [
            bytes(limit.data), bytes(price.data), bytes(tip.data), bytes(memo_ix.data),
        ]

    @pytest.mark.unit
    def test_durable_nonce_hash_signs_message(self, payer, tip_source, memo_ix):
        nonce = DurableNonce(Pubkey.new_unique(), payer.pubkey(), Hash.new_unique())
        signed = build_legacy_transaction([memo_ix], payer, nonce, tip_source, FeeSpec(tip=0))

        assert signed.transaction.message.recent_blockhash == nonce.hash
        ids = program_ids(signed)
        assert ids[0] == advance_nonce_account(
            AdvanceNonceAccountParams(nonce_pubkey=nonce.account, authorized_pubkey=payer.pubkey())
        ).program_id
        assert ids[-1] == memo_ix.program_id

    @pytest.mark.unit
    def test_multiple_signers(self, payer, blockhash, tip_source):
        other = Keypair()
        ix = Instruction(
            Pubkey.new_unique(), b"x", [AccountMeta(other.pubkey(), is_signer=True, is_writable=False)]
        )
        signed = build_legacy_transaction([ix], [payer, other, payer], blockhash, tip_source)

        assert len(signed.transaction.signatures) == 2
        assert signed.transaction.message.account_keys[0] == payer.pubkey()

    @pytest.mark.error
    def test_missing_signer(self, payer, blockhash, tip_source):
        other = Keypair()
        ix = Instruction(
            Pubkey.new_unique(), b"x", [AccountMeta(other.pubkey(), is_signer=True, is_writable=False)]
        )
        with pytest.raises(ConstructionError, match="Missing signatures"):
            build_legacy_transaction([ix], payer, blockhash, tip_source)

    @pytest.mark.error
    def test_unexpected_signer(self, payer, blockhash, tip_source, memo_ix):
        with pytest.raises(ConstructionError, match="Unexpected signers"):
            build_legacy_transaction([memo_ix], [payer, Keypair()], blockhash, tip_source)

    @pytest.mark.error
    def test_no_signers(self, blockhash, tip_source, memo_ix):
        with pytest.raises(ConstructionError):
            build_legacy_transaction([memo_ix], [], blockhash, tip_source)

    @pytest.mark.error
    def test_oversize(self, payer, blockhash, tip_source):
        big = Instruction(Pubkey.new_unique(), bytes(PACKET_DATA_SIZE), [])
        with pytest.raises(ConstructionError, match="too large"):
            build_legacy_transaction([big], payer, blockhash, tip_source)


class TestBuildV0:

    @pytest.mark.unit
    def test_signed_v0(self, payer, blockhash, tip_source, memo_ix):
        signed = build_v0_transaction([memo_ix], payer, blockhash, tip_source)

        assert signed.version is TxVersion.V0
        assert signed.transaction.message.recent_blockhash == blockhash.hash
        assert program_ids(signed)[-1] == memo_ix.program_id
        assert len(signed.transaction.signatures) == 1

    @pytest.mark.unit
    def test_lookup_table_is_used(self, payer, blockhash, tip_source):
        looked_up = Pubkey.new_unique()
        table = AddressLookupTableAccount(key=Pubkey.new_unique(), addresses=[looked_up])
        ix = Instruction(
            Pubkey.new_unique(), b"x", [AccountMeta(looked_up, is_signer=False, is_writable=True)]
        )

        signed = build_v0_transaction(
            [ix], payer, blockhash, tip_source, FeeSpec(tip=0), lookup_tables=[table]
        )

        lookups = signed.transaction.message.address_table_lookups
        assert len(lookups) == 1
        assert lookups[0].account_key == table.key
        assert looked_up not in signed.transaction.message.account_keys


class TestProviderBuild:
    """Build-only paths; no session is needed."""

    @pytest.mark.unit
    def test_helius_default_tip(self, payer, blockhash, memo_ix):
        helius = HttpRelayProvider(PROFILES[ProviderIdentity.HELIUS], Region.FRANKFURT, None)
        envelope = helius.build_tx([memo_ix], payer, blockhash)

        expected_tip = transfer(
            TransferParams(
                from_pubkey=payer.pubkey(),
                to_pubkey=Pubkey.from_string("D2L6yPZ2FmmmTKPgzaMKdhu6EWZcTpLy1Vhx8uvZe7NZ"),
                lamports=1_000_000,
            )
        )
        assert envelope.provider is helius
        assert instruction_data(envelope.transaction) == [bytes(expected_tip.data), b"hello"]
        assert envelope.signature == envelope.transaction.signature

    @pytest.mark.unit
    def test_jito_bundle_tip_goes_to_a_jito_account(self, payer, blockhash, memo_ix):
        jito = HttpRelayProvider(PROFILES[ProviderIdentity.JITO], Region.TOKYO, None)
        envelope = jito.build_v0_tx([memo_ix], payer, blockhash, for_bundle=True)

        message = envelope.transaction.transaction.message
        tip_ix = message.instructions[0]
        recipient = message.account_keys[tip_ix.accounts[1]]
        assert recipient in jito.profile.tip_accounts
        assert bytes(tip_ix.data) == bytes(
            transfer(
                TransferParams(from_pubkey=payer.pubkey(), to_pubkey=recipient, lamports=10_000)
            ).data
        )

    @pytest.mark.unit
    def test_tip_source_is_any_object(self, payer, blockhash, memo_ix):
        source = FixedTipSource(min_tip=42)
        signed = build_legacy_transaction([memo_ix], payer, blockhash, source)
        assert len(signed.transaction.message.instructions) == 2
