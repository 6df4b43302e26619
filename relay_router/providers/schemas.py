"""
Request bodies and response parsing for the relay wire formats.

Three shapes cover every provider in the table: plain JSON-RPC
``sendTransaction``/``sendBundle``, the ``{"transaction", "mode"}`` submit
body, and NextBlock's ``/api/v2/submit`` body.
"""

import json
import time
from typing import Any, Optional, Sequence

from ..errors import ProviderRejection, ResponseFormatError


def load_json(text: str, provider: str) -> Any:
    try:
        return json.loads(text)
    except ValueError as e:
        raise ResponseFormatError(
            f"Response is not valid JSON: {e}", provider=provider, body=text
        ) from e


def rejection_from_error(error: Any, provider: str, status: Optional[int] = None) -> ProviderRejection:
    if isinstance(error, dict):
        return ProviderRejection(
            f"Transaction submission failed: {error.get('message', 'Unknown error')}",
            provider=provider,
            status=status,
            code=error.get("code"),
            data=error.get("data"),
        )
    return ProviderRejection(
        f"Transaction submission failed: {error}", provider=provider, status=status
    )


def parse_jsonrpc_ack(text: str, provider: str) -> Any:
    result = load_json(text, provider)
    if not isinstance(result, dict):
        raise ResponseFormatError(
            "Invalid response format: expected a JSON object", provider=provider, body=text
        )
    if result.get("error") is not None:
        raise rejection_from_error(result["error"], provider)
    if "result" not in result:
        raise ResponseFormatError(
            "Invalid response format: missing 'result' field", provider=provider, body=text
        )
    return result["result"]


class JsonRpcSchema:
    """Standard Solana JSON-RPC submission."""

    def __init__(
        self,
        tx_method: str = "sendTransaction",
        options: Optional[dict] = None,
        nanosecond_ids: bool = False,
    ):
        self.tx_method = tx_method
        self.options = options or {}
        self.nanosecond_ids = nanosecond_ids

    def _request_id(self):
        return str(time.time_ns()) if self.nanosecond_ids else 1

    def transaction_body(self, payload: str) -> dict:
        # relays that only speak sendBundle get a one-transaction bundle
        tx_param = [payload] if self.tx_method == "sendBundle" else payload
        return {
            "jsonrpc": "2.0",
            "id": self._request_id(),
            "method": self.tx_method,
            "params": [tx_param, {"encoding": "base64", **self.options}],
        }

    def bundle_body(self, payloads: Sequence[str]) -> dict:
        return {
            "jsonrpc": "2.0",
            "id": self._request_id(),
            "method": "sendBundle",
            "params": [list(payloads), {"encoding": "base64"}],
        }

    def parse_ack(self, text: str, provider: str) -> Any:
        return parse_jsonrpc_ack(text, provider)

    parse_bundle_ack = parse_ack


class SubmitModeSchema:
    """``{"transaction": <base64>, "mode": "fast"}`` bodies; bundles go over JSON-RPC."""

    def __init__(self, mode: str = "fast"):
        self.mode = mode

    def transaction_body(self, payload: str) -> dict:
        return {"transaction": payload, "mode": self.mode}

    def bundle_body(self, payloads: Sequence[str]) -> dict:
        return {
            "jsonrpc": "2.0",
            "id": 1,
            "method": "sendBundle",
            "params": [list(payloads)],
        }

    def parse_ack(self, text: str, provider: str) -> Any:
        # these gateways answer with free text as often as with JSON
        try:
            result = json.loads(text)
        except ValueError:
            if text.lstrip().startswith("<"):
                raise ResponseFormatError(
                    "Unexpected markup in response", provider=provider, body=text
                )
            return text.strip() or None
        if isinstance(result, dict):
            if result.get("error") is not None:
                raise rejection_from_error(result["error"], provider)
            if "result" in result:
                return result["result"]
        return text.strip() or None

    def parse_bundle_ack(self, text: str, provider: str) -> Any:
        return parse_jsonrpc_ack(text, provider)


class NextBlockSchema:
    """NextBlock ``/api/v2/submit`` and ``/api/v2/submit-batch``."""

    def __init__(self, front_running_protection: bool = True):
        self.front_running_protection = front_running_protection

    def transaction_body(self, payload: str) -> dict:
        return {
            "transaction": {"content": payload},
            "frontRunningProtection": self.front_running_protection,
        }

    def bundle_body(self, payloads: Sequence[str]) -> dict:
        return {"entries": [{"transaction": {"content": p}} for p in payloads]}

    def parse_ack(self, text: str, provider: str) -> Any:
        result = load_json(text, provider)
        if isinstance(result, dict):
            if isinstance(result.get("signature"), str):
                return result["signature"]
            if isinstance(result.get("message"), str):
                raise ProviderRejection(
                    f"Transaction submission failed: {result['message']}",
                    provider=provider,
                    code=result.get("code"),
                )
        raise ResponseFormatError("Invalid response format from NextBlock", provider=provider, body=text)

    parse_bundle_ack = parse_ack
