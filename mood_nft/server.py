"""
FastAPI server for the Mood NFT service.

This module implements the HTTP API: anyone may mint a token, and every
token's metadata is rendered on request as a self-contained ``data:`` URI
reflecting its current mood.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from . import __version__
from .collection import TokenCollection
from .config import Settings
from .encoder import MetadataEncoder, decode_token_uri
from .errors import (
    InvalidReceiverError,
    MalformedEncodingInputError,
    UnknownIdentifierError,
)
from .models import TokenMetadata
from .registry import MoodRegistry

logger = logging.getLogger(__name__)


# API Request/Response Schemas
class MintRequest(BaseModel):
    """Payload for mint requests."""

    owner: str = Field(..., min_length=1, description="Identity receiving the token")


class MintResponse(BaseModel):
    """Response model for a minted token."""

    token_id: int
    owner: str


class TokenResponse(BaseModel):
    """Ownership and mood of a single token."""

    token_id: int
    owner: str
    mood: str = Field(..., description="Name of the token's current mood")
    mood_recorded: bool = Field(
        ..., description="False when the mood is the unset default"
    )
    owner_balance: int = Field(..., description="Number of tokens held by the owner")


class TokenURIResponse(BaseModel):
    """Response model for the rendered token URI."""

    token_uri: str


class CollectionResponse(BaseModel):
    """Collection-level information."""

    name: str
    symbol: str
    next_id: int


def build_registry(settings: Settings) -> MoodRegistry:
    """Create a registry and its token collection from settings."""
    sad_image_uri, happy_image_uri = settings.resolve_image_uris()
    collection = TokenCollection(settings.collection_name, settings.collection_symbol)
    return MoodRegistry(
        sad_image_uri,
        happy_image_uri,
        collection,
        record_under_next_id=settings.record_under_next_id,
    )


def create_app(registry: MoodRegistry) -> FastAPI:
    """
    Create a FastAPI application around the given registry.

    Args:
        registry: The MoodRegistry instance to use for the application

    Returns:
        Configured FastAPI application
    """
    encoder = MetadataEncoder(registry)
    collection = registry.collection

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info(
            "Serving collection %r (%s)", collection.name, collection.symbol
        )
        yield

    app = FastAPI(
        title="Mood NFT",
        description="Tokens whose metadata reflects their owner's mood",
        version=__version__,
        lifespan=lifespan,
    )

    async def render(token_id: int) -> str:
        try:
            return await encoder.render(token_id, collection.name)
        except UnknownIdentifierError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except MalformedEncodingInputError as e:
            logger.warning("Cannot render token %d: %s", token_id, e)
            raise HTTPException(status_code=422, detail=str(e))

    @app.get("/")
    async def root() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok", "service": "mood-nft"}

    @app.get("/collection")
    async def get_collection() -> CollectionResponse:
        """Get the collection name, symbol and next token identifier."""
        return CollectionResponse(
            name=collection.name, symbol=collection.symbol, next_id=registry.next_id
        )

    @app.post("/tokens", status_code=201)
    async def mint(mint_request: MintRequest) -> MintResponse:
        """
        Mint a new token for the given owner.

        Returns:
            The allocated token identifier and its owner
        """
        try:
            token_id = await registry.allocate(mint_request.owner)
        except InvalidReceiverError as e:
            logger.warning("Rejected mint for %r: %s", mint_request.owner, e)
            raise HTTPException(status_code=400, detail=str(e))
        return MintResponse(token_id=token_id, owner=mint_request.owner)

    @app.get("/tokens/{token_id}")
    async def get_token(token_id: int) -> TokenResponse:
        """
        Get the owner and current mood of a token.

        Convenience lookup built on ``mood_of``; the token URI endpoint is the
        canonical read.
        """
        try:
            mood = await registry.mood_of(token_id)
        except UnknownIdentifierError as e:
            raise HTTPException(status_code=404, detail=str(e))
        owner = collection.owner_of(token_id)
        return TokenResponse(
            token_id=token_id,
            owner=owner,
            mood=mood.name,
            mood_recorded=await registry.has_mood_record(token_id),
            owner_balance=collection.balance_of(owner),
        )

    @app.get("/tokens/{token_id}/uri")
    async def get_token_uri(token_id: int) -> TokenURIResponse:
        """
        Render the token URI.

        Returns:
            The ``data:application/json;base64,`` URI of the token's metadata
        """
        return TokenURIResponse(token_uri=await render(token_id))

    @app.get("/tokens/{token_id}/metadata")
    async def get_token_metadata(token_id: int) -> TokenMetadata:
        """
        Get the token's metadata as plain JSON.

        Convenience view that renders the token URI and decodes it again.
        """
        return decode_token_uri(await render(token_id))

    return app


def create_default_app() -> FastAPI:
    """Build the application from environment settings."""
    return create_app(build_registry(Settings()))


def main() -> None:
    """Main entry point for the server."""
    import uvicorn

    settings = Settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    uvicorn.run(
        "mood_nft.server:create_default_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    main()
