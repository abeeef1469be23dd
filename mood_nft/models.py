"""
Shared data models for the Mood NFT service.

This module defines the core domain models used across multiple layers
of the application (registry, encoder, CLI, API).
"""

from enum import IntEnum

from pydantic import BaseModel, Field


class Mood(IntEnum):
    """Mood attached to a token. Only identity matters, not ordinal value."""

    HAPPY = 0
    SAD = 1


class MetadataAttribute(BaseModel):
    """A single trait entry of a token's metadata."""

    trait_type: str
    value: int


class TokenMetadata(BaseModel):
    """Decoded metadata document for a token."""

    name: str = Field(..., description="Display name of the collection")
    description: str
    attributes: list[MetadataAttribute]
    image: str = Field(..., description="Image URI selected by the token's mood")
