"""
Configuration for relay submission.

Built once at startup (usually with ``RelayConfig.from_env()``) and passed to
``RelayClient``; nothing here is read lazily or stored globally.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from .providers.base import ProviderIdentity
from .providers.table import PROFILES
from .regions import Region

logger = logging.getLogger(__name__)

DEFAULT_REGION = Region.FRANKFURT
DEFAULT_TIMEOUT_SECONDS = 30.0
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _get_env_float(environ: Mapping[str, str], key: str, default: float) -> float:
    value = environ.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning(f"Invalid float value for {key}='{value}', using default={default}")
        return default


@dataclass(frozen=True)
class RelayConfig:
    region: Region = DEFAULT_REGION
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    credentials: Mapping[ProviderIdentity, str] = field(default_factory=dict)
    log_level: str = "INFO"

    def credential_for(self, identity: ProviderIdentity) -> str:
        return self.credentials.get(identity, "")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "RelayConfig":
        """
        Read configuration from environment variables.

        RELAY_REGION, RELAY_TIMEOUT_SECONDS, RELAY_LOG_LEVEL, plus one
        credential variable per provider (see ``RelayProfile.credential_env``).
        """
        environ = os.environ if environ is None else environ

        region = Region.parse(environ.get("RELAY_REGION", DEFAULT_REGION.value))
        timeout = _get_env_float(environ, "RELAY_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS)
        if timeout <= 0:
            logger.warning(f"Non-positive RELAY_TIMEOUT_SECONDS={timeout}, using {DEFAULT_TIMEOUT_SECONDS}")
            timeout = DEFAULT_TIMEOUT_SECONDS

        credentials = {}
        for identity, profile in PROFILES.items():
            if profile.credential_env and environ.get(profile.credential_env):
                credentials[identity] = environ[profile.credential_env]

        return cls(
            region=region,
            timeout_seconds=timeout,
            credentials=credentials,
            log_level=environ.get("RELAY_LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(level: str | int = "INFO") -> None:
    """Attach a stream handler to the ``relay_router`` logger."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger("relay_router")
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
