import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime

from django.conf import settings
from django.utils import timezone

from apps.verification.identifiers import mask_identifier
from apps.verification.identifiers import normalize_identifier
from apps.verification.results import VerifyFailure
from apps.verification.results import VerifyResult
from apps.verification.services.codes import code_matches
from apps.verification.stores import CodeKey
from apps.verification.stores import CodeStore
from apps.verification.stores import DatabaseCodeStore

logger = logging.getLogger(__name__)


class CodeVerifier:
    """
    Checks a submitted code against the live record for its key.

    Every state change (attempt counter, consumption) is written with a
    compare-and-swap on the version that was read, so for any code at most
    one caller ever sees success.
    """

    def __init__(self, store: CodeStore = None, max_attempts: int = None, clock: Callable[[], datetime] = None):
        self.store = store if store is not None else DatabaseCodeStore()
        self.max_attempts = max_attempts if max_attempts is not None else settings.OTP_MAX_ATTEMPTS
        self.clock = clock or timezone.now

    def verify(
        self, identifier: str, channel: str, purpose: str, submitted: str, expected_subject: str | None = None
    ) -> VerifyResult:
        """
        When expected_subject is given, a code issued for another subject
        reads as NOT_FOUND and is left untouched.

        Raises:
            InvalidIdentifierError: identifier does not normalize for channel
        """
        identifier = normalize_identifier(identifier, channel)
        key = CodeKey(identifier, str(channel), str(purpose))

        for attempt in range(2):
            result = self._attempt(key, submitted, expected_subject)
            if result is not None:
                return result
            logger.info(f'Lost compare-and-swap verifying code for {mask_identifier(identifier)}, attempt {attempt + 1}')

        logger.warning(f'Giving up verifying code for {mask_identifier(identifier)} after concurrent writes')
        return VerifyResult.failure(VerifyFailure.CONCURRENT_MODIFICATION)

    def _attempt(self, key: CodeKey, submitted: str, expected_subject: str | None) -> VerifyResult | None:
        """One read-evaluate-swap round; None means the swap lost."""
        record = self.store.get(key)
        now = self.clock()

        if record is None:
            return VerifyResult.failure(VerifyFailure.NOT_FOUND)
        if expected_subject is not None and record.subject != str(expected_subject):
            return VerifyResult.failure(VerifyFailure.NOT_FOUND)
        if record.consumed:
            return VerifyResult.failure(VerifyFailure.ALREADY_CONSUMED)
        if record.is_expired(now):
            return VerifyResult.failure(VerifyFailure.EXPIRED)
        if record.attempts >= self.max_attempts:
            return VerifyResult.failure(VerifyFailure.ATTEMPTS_EXCEEDED)

        if not code_matches(record.code_hash, submitted):
            failed = replace(record, attempts=record.attempts + 1, version=record.version + 1)
            if not self.store.compare_and_swap(key, record.version, failed):
                return None

            remaining = max(0, self.max_attempts - failed.attempts)
            logger.warning(
                f'Invalid code for {mask_identifier(key.identifier)} ({key.channel}:{key.purpose}), '
                f'{remaining} attempts left'
            )
            return VerifyResult.failure(VerifyFailure.INVALID_CODE, attempts_remaining=remaining)

        consumed = replace(record, consumed=True, version=record.version + 1)
        if not self.store.compare_and_swap(key, record.version, consumed):
            return None

        logger.info(f'Verified {key.channel}:{key.purpose} code for {mask_identifier(key.identifier)}')
        return VerifyResult.verified(key.identifier, record.subject)
