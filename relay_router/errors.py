"""
Exception taxonomy for relay submission.

Every failure raised by the builder, the encoder or a provider is one of the
classes below, so callers can tell "never reached the network" from
"provider rejected" from "response was malformed" and decide on retries.
"""

from typing import Any, Optional


class RelayError(Exception):
    """
    Base exception for all relay errors

    Attributes:
        message: Human-readable error message
        provider: Name of the provider involved, if any
        original_error: The underlying exception if any
    """

    retryable = False

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        original_error: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.message = message
        self.provider = provider
        self.original_error = original_error

    def __str__(self) -> str:
        if self.provider:
            return f"[{self.provider}] {self.message}"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(provider={self.provider!r}, message={self.message!r})"


class ConstructionError(RelayError):
    """
    Transaction or bundle could not be built

    Raised when:
    - FeeSpec values are out of range
    - Message compilation fails (lookup tables, account limits)
    - Signing fails or no signer was given
    - The signed transaction exceeds the packet size
    - A bundle has a size the provider does not accept
    """


class SerializationError(RelayError):
    """Encoding or decoding a transaction failed."""


class TransportError(RelayError):
    """
    The request never got a response

    Raised when:
    - Connection or DNS resolution fails
    - The connection drops mid-request
    """

    retryable = True

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        original_error: Optional[BaseException] = None,
        endpoint: Optional[str] = None,
    ):
        super().__init__(message, provider=provider, original_error=original_error)
        self.endpoint = endpoint


class SendTimeout(TransportError):
    """
    The request exceeded its timeout

    Subclasses TransportError on purpose: it is retryable and caught by
    ``except TransportError``, while still distinguishable by type.
    """

    def __init__(
        self,
        provider: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        endpoint: Optional[str] = None,
        original_error: Optional[BaseException] = None,
    ):
        super().__init__(
            f"Request timed out after {timeout_seconds}s",
            provider=provider,
            original_error=original_error,
            endpoint=endpoint,
        )
        self.timeout_seconds = timeout_seconds


class ProviderRejection(RelayError):
    """
    The provider answered with a structured error

    Attributes:
        status: HTTP status of the response
        code: Provider error code (JSON-RPC error code when present)
        data: Extra error payload from the provider
    """

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        status: Optional[int] = None,
        code: Optional[Any] = None,
        data: Optional[Any] = None,
    ):
        super().__init__(message, provider=provider)
        self.status = status
        self.code = code
        self.data = data


class ResponseFormatError(RelayError):
    """The provider's response could not be parsed or had an unexpected shape."""

    def __init__(self, message: str, provider: Optional[str] = None, body: str = ""):
        super().__init__(message, provider=provider)
        self.body = body


class UnsupportedOperation(RelayError):
    """The provider does not implement the requested operation."""


class BundleDispatchError(RelayError):
    """
    One or more transactions of a looped bundle failed

    ``outcomes`` holds one entry per input payload, in input order: the
    provider acknowledgment for a successful send or the exception raised
    for a failed one.
    """

    def __init__(self, provider: Optional[str], outcomes: list):
        failed = sum(1 for o in outcomes if isinstance(o, BaseException))
        super().__init__(
            f"{failed} of {len(outcomes)} bundle transactions failed",
            provider=provider,
        )
        self.outcomes = outcomes

    @property
    def errors(self) -> list:
        return [o for o in self.outcomes if isinstance(o, BaseException)]
