"""
Command-line interface tools for the Mood NFT service.
"""

import asyncio
import json
from collections.abc import Coroutine
from typing import Any

import httpx
import typer

from .encoder import decode_token_uri
from .errors import InvalidTokenURIError
from .models import TokenMetadata

DEFAULT_BASE_URL = "http://localhost:8000"

app = typer.Typer(help="Mood NFT CLI tools")


# MARK: - Commands


@app.command()
def mint(
    owner: str = typer.Argument(..., help="Identity that receives the new token"),
    base_url: str = typer.Option(
        DEFAULT_BASE_URL, "--url", "-u", help="Base URL of the Mood NFT service"
    ),
) -> None:
    """Mint a new token."""

    async def _mint() -> None:
        async with httpx.AsyncClient() as client:
            response = await client.post(f"{base_url}/tokens", json={"owner": owner})
            response.raise_for_status()
            result = response.json()
            print(f"Minted token {result['token_id']} for {result['owner']}")

    _run_with_error_handling(_mint(), base_url)


@app.command()
def uri(
    token_id: int = typer.Argument(..., help="Token identifier"),
    base_url: str = typer.Option(
        DEFAULT_BASE_URL, "--url", "-u", help="Base URL of the Mood NFT service"
    ),
) -> None:
    """Print the rendered token URI."""

    async def _uri() -> None:
        async with httpx.AsyncClient() as client:
            response = await client.get(f"{base_url}/tokens/{token_id}/uri")
            response.raise_for_status()
            print(response.json()["token_uri"])

    _run_with_error_handling(_uri(), base_url)


@app.command()
def metadata(
    token_id: int = typer.Argument(..., help="Token identifier"),
    base_url: str = typer.Option(
        DEFAULT_BASE_URL, "--url", "-u", help="Base URL of the Mood NFT service"
    ),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output raw JSON"),
) -> None:
    """Show the metadata of a token."""

    async def _metadata() -> None:
        async with httpx.AsyncClient() as client:
            response = await client.get(f"{base_url}/tokens/{token_id}/metadata")
            response.raise_for_status()
            result = response.json()

            if json_output:
                print(json.dumps(result, indent=2))
                return

            print(_format_metadata(TokenMetadata.model_validate(result)))

    _run_with_error_handling(_metadata(), base_url)


@app.command()
def decode(
    token_uri: str = typer.Argument(..., help="A data:application/json token URI"),
) -> None:
    """Decode a token URI locally without contacting the service."""
    try:
        token_metadata = decode_token_uri(token_uri)
    except InvalidTokenURIError as e:
        print(f"Error: {e}")
        raise typer.Exit(1)

    print(json.dumps(token_metadata.model_dump(), indent=2))


# MARK: - Private Helpers


def _format_metadata(token_metadata: TokenMetadata) -> str:
    """Format metadata as a short human-readable summary."""
    traits = ", ".join(
        f"{attribute.trait_type}={attribute.value}"
        for attribute in token_metadata.attributes
    )
    return f"{token_metadata.name} [{traits}] {token_metadata.image}"


def _run_with_error_handling(coro: Coroutine[Any, Any, Any], base_url: str) -> None:
    """Run an async coroutine with standardized error handling."""
    try:
        asyncio.run(coro)
    except KeyboardInterrupt:
        print("\nStopped")
        raise typer.Exit(0)
    except httpx.ConnectError:
        print(f"Error: Could not connect to {base_url}")
        raise typer.Exit(1)
    except httpx.HTTPStatusError as e:
        print(f"Error: HTTP {e.response.status_code}")
        raise typer.Exit(1)
    except Exception as e:
        error_msg = str(e) if str(e) else f"Unknown error of type {type(e).__name__}"
        print(f"Error: {error_msg}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
