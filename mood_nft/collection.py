"""
In-memory token collection.

Stands in for the token-standard library the registry delegates to: it owns
the collection name and symbol and keeps the owner of every issued token.
Transfers and approvals are not supported.
"""

import logging
from collections import Counter

from .errors import InvalidReceiverError, TokenAlreadyIssuedError, UnknownIdentifierError

logger = logging.getLogger(__name__)


class TokenCollection:
    """Ownership ledger for a named token collection."""

    def __init__(self, name: str, symbol: str) -> None:
        self._name = name
        self._symbol = symbol
        self._owners: dict[int, str] = {}
        self._balances: Counter[str] = Counter()

    @property
    def name(self) -> str:
        return self._name

    @property
    def symbol(self) -> str:
        return self._symbol

    def issue(self, owner: str, token_id: int) -> None:
        """
        Bind a new token identifier to its owner.

        Args:
            owner: Identity of the receiving owner
            token_id: Identifier to issue

        Raises:
            InvalidReceiverError: If the owner identity is empty
            TokenAlreadyIssuedError: If the identifier already has an owner
        """
        if not owner or not owner.strip():
            raise InvalidReceiverError("Cannot issue a token to an empty owner")
        if token_id in self._owners:
            raise TokenAlreadyIssuedError(token_id)

        self._owners[token_id] = owner
        self._balances[owner] += 1
        logger.debug("Issued token %d to %s", token_id, owner)

    def owner_of(self, token_id: int) -> str:
        try:
            return self._owners[token_id]
        except KeyError:
            raise UnknownIdentifierError(token_id) from None

    def balance_of(self, owner: str) -> int:
        return self._balances[owner]

    def __len__(self) -> int:
        return len(self._owners)
