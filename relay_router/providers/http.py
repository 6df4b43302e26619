import asyncio
import logging
from typing import Any, Optional, Sequence

import aiohttp
from solders.pubkey import Pubkey

from ..errors import (
    BundleDispatchError,
    ConstructionError,
    ProviderRejection,
    ResponseFormatError,
    SendTimeout,
    TransportError,
    UnsupportedOperation,
)
from ..regions import Region
from .base import RelayProvider
from .schemas import load_json, rejection_from_error
from .table import AuthPlacement, BundleMode, RelayProfile

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


class HttpRelayProvider(RelayProvider):
    """
    Relay reached over HTTP POST, configured entirely by a ``RelayProfile``.

    The session is shared with every other provider of the same client and is
    never closed here.
    """

    def __init__(
        self,
        profile: RelayProfile,
        region: Region,
        session: aiohttp.ClientSession,
        credential: str = "",
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self.profile = profile
        self.identity = profile.identity
        self.region = region
        self.endpoint = profile.endpoints.resolve(region)
        self.session = session
        self.credential = credential
        self.timeout = timeout

    def __repr__(self) -> str:
        return f"HttpRelayProvider({self.identity.value}, endpoint={self.endpoint!r})"

    def select_tip_address(self) -> Pubkey:
        return self.profile.tip_accounts.choose()

    def min_tip_amount(self, for_bundle: bool = False) -> int:
        if for_bundle and self.profile.min_bundle_tip is not None:
            return self.profile.min_bundle_tip
        return self.profile.min_tip

    def _url(self, path: str) -> str:
        url = self.endpoint
        if path:
            url = url.rstrip("/") + path
        if self.profile.auth is AuthPlacement.PATH and self.credential:
            url = f"{url.rstrip('/')}/{self.credential}"
        return url

    def _auth(self) -> tuple[dict, dict]:
        headers, params = {}, {}
        if self.credential:
            if self.profile.auth is AuthPlacement.HEADER:
                headers[self.profile.auth_name] = self.credential
            elif self.profile.auth is AuthPlacement.QUERY:
                params[self.profile.auth_name] = self.credential
        return headers, params

    async def _post(self, url: str, body: dict) -> str:
        """One bounded POST. Returns the body text of a 2xx response."""
        headers, params = self._auth()
        provider = str(self)
        try:
            async with self.session.post(
                url,
                json=body,
                headers=headers,
                params=params or None,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                text = await response.text()
                status = response.status
        except asyncio.TimeoutError as e:
            logger.error(f"{provider} request to {url} timed out after {self.timeout}s")
            raise SendTimeout(
                provider=provider, timeout_seconds=self.timeout, endpoint=url, original_error=e
            ) from e
        except UnicodeDecodeError as e:
            raise ResponseFormatError(
                f"Response body could not be decoded: {e}", provider=provider
            ) from e
        except (aiohttp.ClientError, OSError) as e:
            logger.error(f"{provider} send error: {e!r}")
            raise TransportError(
                f"Request failed: {e}", provider=provider, original_error=e, endpoint=url
            ) from e

        logger.debug(f"{provider} response ({status}): {text}")
        if status >= 400:
            raise self._http_rejection(status, text)
        return text

    def _http_rejection(self, status: int, text: str) -> ProviderRejection:
        provider = str(self)
        try:
            body: Any = load_json(text, provider)
        except ResponseFormatError:
            body = None
        if isinstance(body, dict) and body.get("error") is not None:
            return rejection_from_error(body["error"], provider, status=status)
        message = text.strip()[:200] or f"HTTP {status}"
        return ProviderRejection(
            f"Transaction submission failed: HTTP {status}: {message}",
            provider=provider,
            status=status,
        )

    async def send_encoded_transaction(self, payload: str) -> Optional[str]:
        body = self.profile.schema.transaction_body(payload)
        text = await self._post(self._url(self.profile.tx_path), body)
        ack = self.profile.schema.parse_ack(text, str(self))
        logger.info(f"{self} ack: {ack}")
        return ack

    async def send_bundle(self, payloads: Sequence[str]) -> list[str]:
        mode = self.profile.bundle_mode
        if mode is BundleMode.UNSUPPORTED:
            raise UnsupportedOperation("Bundles are not supported", provider=str(self))

        count = len(payloads)
        if count < max(self.profile.min_bundle_size, 1):
            raise ConstructionError(
                f"Bundle requires at least {max(self.profile.min_bundle_size, 1)} transactions, got {count}",
                provider=str(self),
            )
        if self.profile.max_bundle_size is not None and count > self.profile.max_bundle_size:
            raise ConstructionError(
                f"Bundle max {self.profile.max_bundle_size} transactions, got {count}",
                provider=str(self),
            )

        if mode is BundleMode.LOOP:
            return await self._send_looped(payloads)

        path = self.profile.bundle_path if self.profile.bundle_path is not None else self.profile.tx_path
        body = self.profile.schema.bundle_body(payloads)
        text = await self._post(self._url(path), body)
        bundle_id = self.profile.schema.parse_bundle_ack(text, str(self))
        logger.info(f"{self} bundle id: {bundle_id}")
        return [bundle_id] * count

    async def _send_looped(self, payloads: Sequence[str]) -> list[str]:
        results = await asyncio.gather(
            *(self.send_encoded_transaction(p) for p in payloads),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException) and not isinstance(result, Exception):
                raise result
        if any(isinstance(r, Exception) for r in results):
            raise BundleDispatchError(str(self), list(results))
        return list(results)
