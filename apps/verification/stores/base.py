"""
Code store contract.

Issuer and verifier only ever talk to a CodeStore, so the OTP rules can be
exercised against the in-memory store in tests and run on the database in
production.
"""

from abc import ABC
from abc import abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import NamedTuple


class CodeKey(NamedTuple):
    identifier: str
    channel: str
    purpose: str


@dataclass(frozen=True)
class CodeRecord:
    identifier: str
    channel: str
    purpose: str
    code_hash: str
    issued_at: datetime
    expires_at: datetime
    consumed: bool = False
    attempts: int = 0
    subject: str = ''
    version: int = 1

    @property
    def key(self) -> CodeKey:
        return CodeKey(self.identifier, self.channel, self.purpose)

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at


class CodeStore(ABC):
    """Keyed storage with an atomic compare-and-swap write."""

    @abstractmethod
    def get(self, key: CodeKey) -> CodeRecord | None:
        """Return the record stored under key, if any."""

    @abstractmethod
    def compare_and_swap(self, key: CodeKey, expected_version: int | None, record: CodeRecord) -> bool:
        """
        Write record under key only if the stored version still equals
        expected_version (None means the key must be absent).

        Returns:
            bool: False when another writer got there first
        """

    @abstractmethod
    def purge(self, now: datetime) -> int:
        """Delete records expired before now and return how many were removed."""
