"""
Metadata encoding for the Mood NFT service.

A token URI is a self-contained ``data:`` URI: the token's metadata record
serialized as JSON, base64-encoded and prefixed with its media type. The
document is assembled by plain concatenation in ``serialize_metadata``,
which is the only place interpolated values enter it.
"""

import base64
import binascii
import logging

from pydantic import ValidationError

from .errors import InvalidTokenURIError, MalformedEncodingInputError
from .models import TokenMetadata
from .registry import MoodRegistry

logger = logging.getLogger(__name__)

TOKEN_URI_PREFIX = "data:application/json;base64,"
SVG_URI_PREFIX = "data:image/svg+xml;base64,"

DESCRIPTION = "An NFT that reflects the owners mood."
MOODINESS_TRAIT = "moodiness"
MOODINESS_VALUE = 100


def _check_interpolated(field: str, value: str) -> None:
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        raise MalformedEncodingInputError(field, value) from None
    for char in value:
        if char in ('"', "\\") or ord(char) < 0x20:
            raise MalformedEncodingInputError(field, value)


def serialize_metadata(name: str, image: str) -> str:
    """
    Serialize a metadata record to its JSON text.

    Values are inserted verbatim without escaping, so anything that would
    change the document's structure is rejected instead.

    Raises:
        MalformedEncodingInputError: If ``name`` or ``image`` contains a
            quote, a backslash, a control character or anything that
            cannot be encoded as UTF-8
    """
    _check_interpolated("name", name)
    _check_interpolated("image", image)

    return (
        '{"name":"' + name + '", "description":"' + DESCRIPTION + '", '
        '"attributes": [{"trait_type": "' + MOODINESS_TRAIT + '", '
        '"value": ' + str(MOODINESS_VALUE) + '}], "image":"' + image + '"}'
    )


def encode_token_uri(document: str) -> str:
    """Wrap a serialized metadata document as a ``data:`` URI."""
    payload = base64.b64encode(document.encode("utf-8")).decode("ascii")
    return TOKEN_URI_PREFIX + payload


def decode_token_uri(token_uri: str) -> TokenMetadata:
    """
    Decode a rendered token URI back into its metadata.

    Args:
        token_uri: A URI produced by ``MetadataEncoder.render``

    Returns:
        The validated metadata record

    Raises:
        InvalidTokenURIError: If the URI has a different prefix or its
            payload is not a valid metadata document
    """
    if not token_uri.startswith(TOKEN_URI_PREFIX):
        raise InvalidTokenURIError(
            f"Token URI must start with {TOKEN_URI_PREFIX!r}"
        )

    payload = token_uri[len(TOKEN_URI_PREFIX) :]
    try:
        document = base64.b64decode(payload, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise InvalidTokenURIError(f"Could not decode token URI payload: {e}") from e

    try:
        return TokenMetadata.model_validate_json(document)
    except ValidationError as e:
        raise InvalidTokenURIError(f"Invalid metadata document: {e}") from e


def svg_to_image_uri(svg: str) -> str:
    """Turn SVG markup into a ``data:image/svg+xml;base64,`` image URI."""
    payload = base64.b64encode(svg.encode("utf-8")).decode("ascii")
    return SVG_URI_PREFIX + payload


class MetadataEncoder:
    """Renders token URIs from the registry's current state."""

    def __init__(self, registry: MoodRegistry) -> None:
        self._registry = registry

    async def render(self, token_id: int, collection_name: str) -> str:
        """
        Render the token URI of an allocated token.

        Rendering never changes registry state, so repeated calls return
        identical strings until the token's mood changes.

        Args:
            token_id: Identifier of an allocated token
            collection_name: Display name written to the ``name`` field

        Returns:
            The ``data:application/json;base64,`` token URI

        Raises:
            UnknownIdentifierError: If ``token_id`` was never allocated
            MalformedEncodingInputError: If the name or image reference
                would break the document
        """
        mood = await self._registry.mood_of(token_id)
        image = self._registry.image_uri_for(mood)
        logger.debug("Rendering token %d with mood %s", token_id, mood.name)

        document = serialize_metadata(collection_name, image)
        return encode_token_uri(document)
