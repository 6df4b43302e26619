import asyncio
import base64
import binascii

import typer

from .client import RelayClient
from .config import RelayConfig, configure_logging
from .encoding import SignedTransaction, TxVersion
from .errors import RelayError
from .providers.base import ProviderIdentity
from .regions import Region

app = typer.Typer(help="Relay transaction router")


def _load_config(region: str | None) -> RelayConfig:
    config = RelayConfig.from_env()
    if region:
        config = RelayConfig(
            region=Region.parse(region),
            timeout_seconds=config.timeout_seconds,
            credentials=config.credentials,
            log_level=config.log_level,
        )
    configure_logging(config.log_level)
    return config


def endpoints(
    region: str = typer.Option(None, help="Region, e.g. NewYork|Frankfurt|Tokyo"),
):
    """Show the endpoint every provider resolves to for a region."""
    config = _load_config(region)
    client = RelayClient(config)
    print(f"region: {config.region.value}")
    for identity, url in client.endpoints().items():
        print(f"  {identity.value:11}  {url}")


def send_raw(
    tx_path: str = typer.Argument(..., help="Path to signed transaction file"),
    provider: str = typer.Option(..., help="Provider name, e.g. jito|helius|temporal"),
    region: str = typer.Option(None, help="Region, e.g. NewYork|Frankfurt|Tokyo"),
    encoding: str = typer.Option("auto", help="auto|base64|raw"),
    version: str = typer.Option("legacy", help="legacy|v0"),
):
    """Submit a signed transaction through one provider."""
    try:
        identity = ProviderIdentity.parse(provider)
        tx_version = TxVersion(version)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)

    config = _load_config(region)

    async def run():
        with open(tx_path, "rb") as f:
            data = f.read().strip()

        if encoding == "base64" or (encoding == "auto" and _looks_b64(data)):
            data = base64.b64decode(data)

        tx = SignedTransaction.from_bytes(data, tx_version)
        async with RelayClient(config) as client:
            return await client.send_transaction(identity, tx)

    try:
        signature = asyncio.run(run())
    except RelayError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    print(signature)


def _looks_b64(data: bytes) -> bool:
    """Check if data looks like base64."""
    try:
        base64.b64decode(data, validate=True)
        return True
    except (binascii.Error, ValueError):
        return False


app.command()(endpoints)
app.command()(send_raw)

if __name__ == "__main__":
    app()
