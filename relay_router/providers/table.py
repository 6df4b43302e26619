"""
Provider Endpoint Table.

One ``RelayProfile`` per relay: endpoints and their region mapping, tip
accounts, minimum tips, auth placement, wire schema and bundle support.
Adding a provider or a region only touches this table.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from ..regions import EndpointTable, Region
from ..tips import TipAccountPool
from .base import ProviderIdentity
from .schemas import JsonRpcSchema, NextBlockSchema, SubmitModeSchema

Schema = Union[JsonRpcSchema, SubmitModeSchema, NextBlockSchema]


class AuthPlacement(Enum):
    NONE = "none"
    HEADER = "header"   # auth_name is the header name
    QUERY = "query"     # auth_name is the query parameter
    PATH = "path"       # credential appended as a path segment


class BundleMode(Enum):
    NATIVE = "native"            # one request carries the whole bundle
    LOOP = "loop"                # one sendTransaction per bundle member
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class RelayProfile:
    identity: ProviderIdentity
    endpoints: EndpointTable
    tip_accounts: TipAccountPool
    min_tip: int                          # lamports, single transaction
    schema: Schema
    min_bundle_tip: int | None = None     # lamports, defaults to min_tip
    auth: AuthPlacement = AuthPlacement.NONE
    auth_name: str = ""
    credential_env: str | None = None
    tx_path: str = ""
    bundle_path: str | None = None        # defaults to tx_path
    bundle_mode: BundleMode = BundleMode.UNSUPPORTED
    min_bundle_size: int = 1
    max_bundle_size: int | None = None


R = Region

PROFILES: dict[ProviderIdentity, RelayProfile] = {
    ProviderIdentity.ASTRALANE: RelayProfile(
        identity=ProviderIdentity.ASTRALANE,
        endpoints=EndpointTable(
            (
                "http://fr.gateway.astralane.io/iris",
                "http://lax.gateway.astralane.io/iris",
                "http://jp.gateway.astralane.io/iris",
                "http://ny.gateway.astralane.io/iris",
                "http://ams.gateway.astralane.io/iris",
            ),
            {R.FRANKFURT: 0, R.LOS_ANGELES: 1, R.TOKYO: 2, R.NEW_YORK: 3, R.AMSTERDAM: 4},
        ),
        tip_accounts=TipAccountPool([
            "astrazznxsGUhWShqgNtAdfrzP2G83DzcWVJDxwV9bF",
            "astra4uejePWneqNaJKuFFA8oonqCE1sqF6b45kDMZm",
            "astra9xWY93QyfG6yM8zwsKsRodscjQ2uU2HKNL5prk",
            "astraRVUuTHjpwEVvNBeQEgwYx9w9CFyfxjYoobCZhL",
        ]),
        min_tip=10_000,
        min_bundle_tip=3_000_000,
        schema=SubmitModeSchema(),
        auth=AuthPlacement.HEADER,
        auth_name="api-key",
        credential_env="ASTRALANE_AUTH_TOKEN",
        bundle_mode=BundleMode.NATIVE,
    ),
    ProviderIdentity.BLOCKRAZOR: RelayProfile(
        identity=ProviderIdentity.BLOCKRAZOR,
        endpoints=EndpointTable(
            (
                "http://frankfurt.solana.blockrazor.xyz:443/sendTransaction",
                "http://newyork.solana.blockrazor.xyz:443/sendTransaction",
                "http://tokyo.solana.blockrazor.xyz:443/sendTransaction",
                "http://amsterdam.solana.blockrazor.xyz:443/sendTransaction",
            ),
            {R.FRANKFURT: 0, R.NEW_YORK: 1, R.TOKYO: 2, R.AMSTERDAM: 3},
        ),
        tip_accounts=TipAccountPool(["6No2i3aawzHsjtThw81iq1EXPJN6rh8eSJCLaYZfKDTG"]),
        min_tip=1_000_000,
        schema=SubmitModeSchema(),
        auth=AuthPlacement.HEADER,
        auth_name="apikey",
        credential_env="BLOCKRAZOR_KEY",
    ),
    ProviderIdentity.HELIUS: RelayProfile(
        identity=ProviderIdentity.HELIUS,
        endpoints=EndpointTable(
            (
                "http://ewr-sender.helius-rpc.com/fast",
                "http://ams-sender.helius-rpc.com/fast",
                "http://fra-sender.helius-rpc.com/fast",
                "http://lon-sender.helius-rpc.com/fast",
                "http://slc-sender.helius-rpc.com/fast",
                "http://tyo-sender.helius-rpc.com/fast",
                "http://sg-sender.helius-rpc.com/fast",
            ),
            {
                R.NEW_YORK: 0, R.AMSTERDAM: 1, R.FRANKFURT: 2, R.LONDON: 3,
                R.SALT_LAKE_CITY: 4, R.TOKYO: 5, R.SINGAPORE: 6,
            },
        ),
        tip_accounts=TipAccountPool(["D2L6yPZ2FmmmTKPgzaMKdhu6EWZcTpLy1Vhx8uvZe7NZ"]),
        min_tip=1_000_000,
        schema=JsonRpcSchema(options={"skipPreflight": True, "maxRetries": 0}),
        auth=AuthPlacement.HEADER,
        auth_name="api-key",
        credential_env="HELIUS_KEY",
    ),
    ProviderIdentity.JITO: RelayProfile(
        identity=ProviderIdentity.JITO,
        endpoints=EndpointTable(
            (
                "https://ny.mainnet.block-engine.jito.wtf",
                "https://frankfurt.mainnet.block-engine.jito.wtf",
                "https://amsterdam.mainnet.block-engine.jito.wtf",
                "https://london.mainnet.block-engine.jito.wtf",
                "https://slc.mainnet.block-engine.jito.wtf",
                "https://tokyo.mainnet.block-engine.jito.wtf",
                "https://singapore.mainnet.block-engine.jito.wtf",
            ),
            {
                R.NEW_YORK: 0, R.FRANKFURT: 1, R.AMSTERDAM: 2, R.LONDON: 3,
                R.SALT_LAKE_CITY: 4, R.TOKYO: 5, R.SINGAPORE: 6,
            },
        ),
        tip_accounts=TipAccountPool([
            "HFqU5x63VTqvQss8hp11i4wVV8bD44PvwucfZ2bU7gRe",
            "Cw8CFyM9FkoMi7K7Crf6HNQqf4uEMzpKw6QNghXLvLkY",
            "ADaUMid9yfUytqMBgopwjb2DTLSokTSzL1zt6iGPaS49",
            "DfXygSm4jCyNCybVYYK6DwvWqjKee8pbDmJGcLWNDXjh",
            "ADuUkR4vqLUMWXxW9gh6D6L8pMSawimctcNZ5pGwDcEt",
            "DttWaMuVvTiduZRnguLF7jNxTgiMBZ1hyAumKUiL2KRL",
            "3AVi9Tg9Uo68tJfuvoKvqKNWKkC5wPdSSdeBnizKZ6jT",
        ]),
        min_tip=1_000,
        min_bundle_tip=10_000,
        schema=JsonRpcSchema(),
        tx_path="/api/v1/transactions",
        bundle_path="/api/v1/bundles",
        bundle_mode=BundleMode.NATIVE,
        max_bundle_size=5,
    ),
    ProviderIdentity.NODEONE: RelayProfile(
        identity=ProviderIdentity.NODEONE,
        endpoints=EndpointTable(
            ("https://ny.node1.me", "https://fra.node1.me", "https://ams.node1.me"),
            {R.NEW_YORK: 0, R.FRANKFURT: 1, R.AMSTERDAM: 2},
        ),
        tip_accounts=TipAccountPool(["node1UzzTxAAeBTpfZkQPJXBAqixsbdth11ba1NXLBG"]),
        min_tip=2_000_000,
        schema=JsonRpcSchema(),
        auth=AuthPlacement.HEADER,
        auth_name="api-key",
        credential_env="NODEONE_KEY",
    ),
    ProviderIdentity.TEMPORAL: RelayProfile(
        identity=ProviderIdentity.TEMPORAL,
        endpoints=EndpointTable(
            (
                "http://pit1.nozomi.temporal.xyz/",
                "http://tyo1.nozomi.temporal.xyz/",
                "http://sgp1.nozomi.temporal.xyz/",
                "http://ewr1.nozomi.temporal.xyz/",
                "http://ams1.nozomi.temporal.xyz/",
                "http://fra2.nozomi.temporal.xyz/",
            ),
            {
                R.PITTSBURGH: 0, R.TOKYO: 1, R.SINGAPORE: 2, R.NEW_YORK: 3,
                R.AMSTERDAM: 4, R.FRANKFURT: 5,
            },
        ),
        tip_accounts=TipAccountPool([
            "TEMPaMeCRFAS9EKF53Jd6KpHxgL47uWLcpFArU1Fanq",
            "noz3jAjPiHuBPqiSPkkugaJDkJscPuRhYnSpbi8UvC4",
            "noz3str9KXfpKknefHji8L1mPgimezaiUyCHYMDv1GE",
            "noz6uoYCDijhu1V7cutCpwxNiSovEwLdRHPwmgCGDNo",
            "noz9EPNcT7WH6Sou3sr3GGjHQYVkN3DNirpbvDkv9YJ",
            "nozc5yT15LazbLTFVZzoNZCwjh3yUtW86LoUyqsBu4L",
            "nozFrhfnNGoyqwVuwPAW4aaGqempx4PU6g6D9CJMv7Z",
            "nozievPk7HyK1Rqy1MPJwVQ7qQg2QoJGyP71oeDwbsu",
            "noznbgwYnBLDHu8wcQVCEw6kDrXkPdKkydGJGNXGvL7",
            "nozNVWs5N8mgzuD3qigrCG2UoKxZttxzZ85pvAQVrbP",
            "nozpEGbwx4BcGp6pvEdAh1JoC2CQGZdU6HbNP1v2p6P",
            "nozrhjhkCr3zXT3BiT4WCodYCUFeQvcdUkM7MqhKqge",
            "nozrwQtWhEdrA6W8dkbt9gnUaMs52PdAv5byipnadq3",
            "nozUacTVWub3cL4mJmGCYjKZTnE9RbdY5AP46iQgbPJ",
            "nozWCyTPppJjRuw2fpzDhhWbW355fzosWSzrrMYB1Qk",
            "nozWNju6dY353eMkMqURqwQEoM3SFgEKC6psLCSfUne",
            "nozxNBgWohjR75vdspfxR5H9ceC7XXH99xpxhVGt3Bb",
        ]),
        min_tip=1_000_000,
        schema=JsonRpcSchema(options={"skipPreflight": True}),
        auth=AuthPlacement.QUERY,
        auth_name="c",
        credential_env="TEMPORAL_KEY",
        bundle_mode=BundleMode.LOOP,
    ),
    ProviderIdentity.ZEROSLOT: RelayProfile(
        identity=ProviderIdentity.ZEROSLOT,
        endpoints=EndpointTable(
            (
                "https://ny.0slot.trade",
                "https://de.0slot.trade",
                "https://ams.0slot.trade",
                "https://jp.0slot.trade",
                "https://la.0slot.trade",
            ),
            {R.NEW_YORK: 0, R.FRANKFURT: 1, R.AMSTERDAM: 2, R.TOKYO: 3, R.LOS_ANGELES: 4},
        ),
        tip_accounts=TipAccountPool([
            "6fQaVhYZA4w3MBSXjJ81Vf6W1EDYeUPXpgVQ6UQyU1Av",
            "4HiwLEP2Bzqj3hM2ENxJuzhcPCdsafwiet3oGkMkuQY4",
            "7toBU3inhmrARGngC7z6SjyP85HgGMmCTEwGNRAcYnEK",
            "8mR3wB1nh4D6J9RUCugxUpc6ya8w38LPxZ3ZjcBhgzws",
            "6SiVU5WEwqfFapRuYCndomztEwDjvS5xgtEof3PLEGm9",
            "TpdxgNJBWZRL8UXF5mrEsyWxDWx9HQexA9P1eTWQ42p",
            "D8f3WkQu6dCF33cZxuAsrKHrGsqGP2yvAHf8mX6RXnwf",
            "GQPFicsy3P3NXxB5piJohoxACqTvWE9fKpLgdsMduoHE",
            "Ey2JEr8hDkgN8qKJGrLf2yFjRhW7rab99HVxwi5rcvJE",
            "4iUgjMT8q2hNZnLuhpqZ1QtiV8deFPy2ajvvjEpKKgsS",
            "3Rz8uD83QsU8wKvZbgWAPvCNDU6Fy8TSZTMcPm3RB6zt",
        ]),
        min_tip=1_000_000,
        schema=JsonRpcSchema(options={"skipPreflight": True}),
        auth=AuthPlacement.QUERY,
        auth_name="api-key",
        credential_env="ZEROSLOT_KEY",
        bundle_mode=BundleMode.LOOP,
    ),
    ProviderIdentity.FLASHBLOCK: RelayProfile(
        identity=ProviderIdentity.FLASHBLOCK,
        endpoints=EndpointTable(
            (
                "http://ny.flashblock.trade",
                "http://slc.flashblock.trade",
                "http://ams.flashblock.trade",
                "http://fra.flashblock.trade",
                "http://singapore.flashblock.trade",
                "http://london.flashblock.trade",
            ),
            {
                R.NEW_YORK: 0, R.SALT_LAKE_CITY: 1, R.AMSTERDAM: 2, R.FRANKFURT: 3,
                R.SINGAPORE: 4, R.LONDON: 5,
            },
        ),
        tip_accounts=TipAccountPool([
            "FLaShB3iXXTWE1vu9wQsChUKq3HFtpMAhb8kAh1pf1wi",
            "FLashhsorBmM9dLpuq6qATawcpqk1Y2aqaZfkd48iT3W",
            "FLaSHJNm5dWYzEgnHJWWJP5ccu128Mu61NJLxUf7mUXU",
            "FLaSHR4Vv7sttd6TyDF4yR1bJyAxRwWKbohDytEMu3wL",
            "FLASHRzANfcAKDuQ3RXv9hbkBy4WVEKDzoAgxJ56DiE4",
            "FLasHstqx11M8W56zrSEqkCyhMCCpr6ze6Mjdvqope5s",
            "FLAShWTjcweNT4NSotpjpxAkwxUr2we3eXQGhpTVzRwy",
            "FLasHXTqrbNvpWFB6grN47HGZfK6pze9HLNTgbukfPSk",
            "FLAshyAyBcKb39KPxSzXcepiS8iDYUhDGwJcJDPX4g2B",
            "FLAsHZTRcf3Dy1APaz6j74ebdMC6Xx4g6i9YxjyrDybR",
        ]),
        min_tip=1_000_000,
        schema=JsonRpcSchema(tx_method="sendBundle"),
        auth=AuthPlacement.HEADER,
        auth_name="Authorization",
        credential_env="FLASHBLOCK_KEY",
        tx_path="/",
        bundle_mode=BundleMode.NATIVE,
    ),
    ProviderIdentity.NEXTBLOCK: RelayProfile(
        identity=ProviderIdentity.NEXTBLOCK,
        endpoints=EndpointTable(
            (
                "https://frankfurt.nextblock.io",
                "https://amsterdam.nextblock.io",
                "https://london.nextblock.io",
                "https://singapore.nextblock.io",
                "https://tokyo.nextblock.io",
                "https://ny.nextblock.io",
                "https://slc.nextblock.io",
            ),
            {
                R.FRANKFURT: 0, R.AMSTERDAM: 1, R.LONDON: 2, R.SINGAPORE: 3,
                R.TOKYO: 4, R.NEW_YORK: 5, R.SALT_LAKE_CITY: 6,
            },
        ),
        tip_accounts=TipAccountPool([
            "nextBLoCkPMgmG8ZgJtABeScP35qLa2AMCNKntAP7Xc",
            "NEXTbLoCkB51HpLBLojQfpyVAMorm3zzKg7w9NFdqid",
            "nEXTBLockYgngeRmRrjDV31mGSekVPqZoMGhQEZtPVG",
            "neXtBLock1LeC67jYd1QdAa32kbVeubsfPNTJC1V5At",
            "NexTBLockJYZ7QD7p2byrUa6df8ndV2WSd8GkbWqfbb",
            "NeXTBLoCKs9F1y5PJS9CKrFNNLU1keHW71rfh7KgA1X",
            "NextbLoCkVtMGcV47JzewQdvBpLqT9TxQFozQkN98pE",
            "NexTbLoCkWykbLuB1NkjXgFWkX9oAtcoagQegygXXA2",
        ]),
        min_tip=1_000_000,
        schema=NextBlockSchema(),
        auth=AuthPlacement.HEADER,
        auth_name="Authorization",
        credential_env="NEXTBLOCK_TOKEN",
        tx_path="/api/v2/submit",
        bundle_path="/api/v2/submit-batch",
        bundle_mode=BundleMode.NATIVE,
        min_bundle_size=2,
        max_bundle_size=4,
    ),
    ProviderIdentity.EVERSTAKE: RelayProfile(
        identity=ProviderIdentity.EVERSTAKE,
        endpoints=EndpointTable(
            (
                "http://main-swqos.everstake.one",
                "http://fra-swqos.everstake.one",
                "http://ny-swqos.everstake.one",
                "http://tyo-swqos.everstake.one",
                "http://ams-swqos.everstake.one",
            ),
            {R.FRANKFURT: 1, R.NEW_YORK: 2, R.TOKYO: 3, R.AMSTERDAM: 4},
        ),
        tip_accounts=TipAccountPool([
            "J4cL8c22KNLHwheuWxK1SCYBWASWPGhEi6xvcGyf6o3S",
            "EzuhsszPxRUHBwGPXtKoqCB58EiTJ1QiYA2XrhbUEFbr",
            "7wsUm2VDopGDFyXkyhmgUh9V15QkEvnyqbgUPcagLcw2",
            "Cy3WAM9NdjFG3kXCxXmD17WmtJMBKVpoBXabkSm88Xdt",
            "BEEya88mme6JJ4rgshBR23eiDHmygUii9opUHE3qxnqK",
            "Gq21dPAGVuuZucqBQeCkfbbqoEowL1t88igZekJ93CRu",
            "79HFWkNoPhotXuFYi1ksuK5hE7AUnKasafP6c71hS9sM",
            "Cp4pCm5JjDaZ4gXB8eSjNJvQ8eg7uK6awgjveofrSATz",
            "DMHQ51qK2wChtDEUED54cqzbSLMLGvTygQCv5uLTUmZP",
            "GDnz7cAA7hKEFmDyrk6mz3drybHWc3Gn14y9LCsvvtjE",
        ]),
        min_tip=500_000,
        schema=JsonRpcSchema(),
    ),
    ProviderIdentity.STELLIUM: RelayProfile(
        identity=ProviderIdentity.STELLIUM,
        endpoints=EndpointTable(
            (
                "http://ewr1.flashrpc.com",
                "http://fra1.flashrpc.com",
                "http://ams1.flashrpc.com",
                "http://lhr1.flashrpc.com",
                "http://tyo1.flashrpc.com",
            ),
            {R.NEW_YORK: 0, R.FRANKFURT: 1, R.AMSTERDAM: 2, R.LONDON: 3, R.TOKYO: 4},
            default_index=1,
        ),
        tip_accounts=TipAccountPool([
            "ste11JV3MLMM7x7EJUM2sXcJC1H7F4jBLnP9a9PG8PH",
            "ste11MWPjXCRfQryCshzi86SGhuXjF4Lv6xMXD2AoSt",
            "ste11p5x8tJ53H1NbNQsRBg1YNRd4GcVpxtDw8PBpmb",
            "ste11p7e2KLYou5bwtt35H7BM6uMdo4pvioGjJXKFcN",
            "ste11TMV68LMi1BguM4RQujtbNCZvf1sjsASpqgAvSX",
        ]),
        min_tip=1_000_000,
        schema=JsonRpcSchema(nanosecond_ids=True),
        auth=AuthPlacement.PATH,
        credential_env="STELLIUM_API_KEY",
    ),
}
