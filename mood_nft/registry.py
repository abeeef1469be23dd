"""
Mood registry for the Mood NFT service.

This module allocates token identifiers and tracks the mood of every
allocated token. State lives in memory for the lifetime of the process.
"""

import asyncio
import logging

from .collection import TokenCollection
from .errors import UnknownIdentifierError
from .models import Mood

logger = logging.getLogger(__name__)

INITIAL_MOOD = Mood.HAPPY

# Returned for an allocated token that has no mood record. Only reachable
# when the registry runs with ``record_under_next_id=True``.
UNSET_MOOD = Mood.HAPPY


class MoodRegistry:
    """
    In-memory allocator of token identifiers and their moods.

    Identifiers are handed out sequentially starting at 0 and are never
    reused. Every allocation issues the token through the collection and
    records its initial mood; the whole sequence runs under a lock so that
    readers never observe a counter without its matching mood record.

    With ``record_under_next_id=True`` the registry reproduces the legacy
    behavior of recording the initial mood under the post-increment counter
    value instead of the identifier that was just issued. In that mode token
    0 never gets a record and each other token inherits the record written by its
    predecessor's allocation, so the newest record is keyed one past the
    last issued identifier.
    """

    def __init__(
        self,
        sad_image_uri: str,
        happy_image_uri: str,
        collection: TokenCollection,
        *,
        record_under_next_id: bool = False,
    ) -> None:
        self._sad_image_uri = sad_image_uri
        self._happy_image_uri = happy_image_uri
        self._collection = collection
        self._record_under_next_id = record_under_next_id
        self._next_id = 0
        self._moods: dict[int, Mood] = {}
        self._lock = asyncio.Lock()

    @property
    def collection(self) -> TokenCollection:
        return self._collection

    @property
    def sad_image_uri(self) -> str:
        return self._sad_image_uri

    @property
    def happy_image_uri(self) -> str:
        return self._happy_image_uri

    @property
    def next_id(self) -> int:
        """The identifier the next allocation will return."""
        return self._next_id

    @property
    def mood_count(self) -> int:
        """Number of recorded mood entries."""
        return len(self._moods)

    @property
    def record_under_next_id(self) -> bool:
        return self._record_under_next_id

    async def allocate(self, owner: str) -> int:
        """
        Allocate a new token for ``owner`` and record its initial mood.

        Args:
            owner: Identity the token is issued to

        Returns:
            The newly allocated token identifier

        Raises:
            InvalidReceiverError: If the collection rejects the owner; the
                registry is left unchanged
        """
        async with self._lock:
            token_id = self._next_id
            self._collection.issue(owner, token_id)
            self._next_id += 1

            mood_key = self._next_id if self._record_under_next_id else token_id
            self._moods[mood_key] = INITIAL_MOOD

            logger.info("Allocated token %d for %s", token_id, owner)
            return token_id

    async def mood_of(self, token_id: int) -> Mood:
        """
        Get the current mood of an allocated token.

        Args:
            token_id: Identifier to look up

        Returns:
            The recorded mood, or ``UNSET_MOOD`` for an allocated token
            without a record

        Raises:
            UnknownIdentifierError: If ``token_id`` was never allocated
        """
        async with self._lock:
            if token_id < 0 or token_id >= self._next_id:
                raise UnknownIdentifierError(token_id)
            return self._moods.get(token_id, UNSET_MOOD)

    async def has_mood_record(self, token_id: int) -> bool:
        """Whether a mood was explicitly recorded under ``token_id``."""
        async with self._lock:
            return token_id in self._moods

    def image_uri_for(self, mood: Mood) -> str:
        """
        Select the image reference for a mood.

        Anything other than HAPPY falls back to the sad image, so a newly
        added Mood variant renders sad until it is given its own branch here.
        """
        if mood == Mood.HAPPY:
            return self._happy_image_uri
        return self._sad_image_uri
