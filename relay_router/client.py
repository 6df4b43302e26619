import logging
from typing import Optional

import aiohttp
from solders.signature import Signature

from .config import RelayConfig
from .encoding import SignedTransaction
from .envelope import TxEnvelope
from .providers.base import ProviderIdentity
from .providers.http import HttpRelayProvider
from .providers.table import PROFILES

logger = logging.getLogger(__name__)


class RelayClient:
    """
    Entry point holding the configuration and the shared connection pool.

    Usage:
        async with RelayClient(RelayConfig.from_env()) as client:
            jito = client.provider(ProviderIdentity.JITO)
            sig = await jito.build_tx(ixs, payer, Blockhash(hash)).send()
    """

    def __init__(
        self,
        config: Optional[RelayConfig] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.config = config or RelayConfig()
        self._session = session
        self._owns_session = session is None
        self._providers: dict[ProviderIdentity, HttpRelayProvider] = {}

    async def __aenter__(self) -> "RelayClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
            self._providers.clear()
        return self._session

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()

    def provider(self, identity: ProviderIdentity) -> HttpRelayProvider:
        session = self.session
        provider = self._providers.get(identity)
        if provider is None:
            provider = HttpRelayProvider(
                PROFILES[identity],
                self.config.region,
                session,
                credential=self.config.credential_for(identity),
                timeout=self.config.timeout_seconds,
            )
            logger.debug(f"{identity.value} endpoint for {self.config.region.value}: {provider.endpoint}")
            self._providers[identity] = provider
        return provider

    def providers(self) -> list[HttpRelayProvider]:
        return [self.provider(identity) for identity in PROFILES]

    def endpoints(self) -> dict[ProviderIdentity, str]:
        """Resolved endpoint per provider for the configured region."""
        return {
            identity: profile.endpoints.resolve(self.config.region)
            for identity, profile in PROFILES.items()
        }

    async def send_transaction(
        self, identity: ProviderIdentity, transaction: SignedTransaction
    ) -> Signature:
        """Send an already signed transaction through one provider."""
        return await TxEnvelope(transaction, self.provider(identity)).send()
