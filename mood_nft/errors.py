"""
Exceptions raised by the Mood NFT registry, encoder and token collection.
"""


class MoodNFTError(Exception):
    """Base class for all Mood NFT errors."""


class UnknownIdentifierError(MoodNFTError, LookupError):
    """Raised when a token identifier was never allocated."""

    def __init__(self, token_id: int) -> None:
        super().__init__(f"Unknown identifier: {token_id}")
        self.token_id = token_id


class MalformedEncodingInputError(MoodNFTError, ValueError):
    """Raised when a value would break the structure of the metadata document."""

    def __init__(self, field: str, value: str) -> None:
        super().__init__(
            f"Field {field!r} contains characters that are not allowed "
            f"in the metadata document: {value!r}"
        )
        self.field = field
        self.value = value


class InvalidTokenURIError(MoodNFTError, ValueError):
    """Raised when a token URI cannot be decoded back into metadata."""


class InvalidReceiverError(MoodNFTError, ValueError):
    """Raised when a token is issued to an unusable owner identity."""


class TokenAlreadyIssuedError(MoodNFTError):
    """Raised when a token identifier is issued a second time."""

    def __init__(self, token_id: int) -> None:
        super().__init__(f"Token {token_id} has already been issued")
        self.token_id = token_id
