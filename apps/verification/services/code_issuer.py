import logging
import math
from collections.abc import Callable
from datetime import datetime
from datetime import timedelta

from django.conf import settings
from django.utils import timezone

from apps.shared.exceptions import ConcurrentModificationError
from apps.verification.delivery import CeleryCodeDelivery
from apps.verification.delivery import CodeDelivery
from apps.verification.identifiers import mask_identifier
from apps.verification.identifiers import normalize_identifier
from apps.verification.results import DeliveryOutcome
from apps.verification.results import IssueResult
from apps.verification.services.codes import generate_code
from apps.verification.services.codes import hash_code
from apps.verification.stores import CodeKey
from apps.verification.stores import CodeRecord
from apps.verification.stores import CodeStore
from apps.verification.stores import DatabaseCodeStore

logger = logging.getLogger(__name__)


class CodeIssuer:
    """
    Creates the live code for a key, superseding any previous one, and hands
    the plain value to the delivery collaborator. The value never leaves
    through the return value.
    """

    def __init__(
        self,
        store: CodeStore = None,
        delivery: CodeDelivery = None,
        ttl_seconds: int = None,
        cooldown_seconds: int = None,
        clock: Callable[[], datetime] = None,
    ):
        self.store = store if store is not None else DatabaseCodeStore()
        self.delivery = delivery or CeleryCodeDelivery()
        self.ttl = timedelta(seconds=ttl_seconds if ttl_seconds is not None else settings.OTP_TTL_SECONDS)
        self.cooldown_seconds = (
            cooldown_seconds if cooldown_seconds is not None else settings.OTP_RESEND_COOLDOWN_SECONDS
        )
        self.clock = clock or timezone.now

    def issue(self, identifier: str, channel: str, purpose: str, subject: str = '') -> IssueResult:
        """
        Issue a fresh code for (identifier, channel, purpose).

        Returns:
            IssueResult: rate limited, stored, or stored with a failed delivery

        Raises:
            InvalidIdentifierError: identifier does not normalize for channel
            ConcurrentModificationError: lost the write twice in a row
        """
        identifier = normalize_identifier(identifier, channel)
        key = CodeKey(identifier, str(channel), str(purpose))

        for attempt in range(2):
            existing = self.store.get(key)
            now = self.clock()

            retry_after = self._cooldown_remaining(existing, now)
            if retry_after:
                logger.warning(
                    f'Code request for {mask_identifier(identifier)} ({key.channel}:{key.purpose}) '
                    f'rate limited, retry in {retry_after}s'
                )
                return IssueResult.rate_limited(retry_after)

            code = generate_code()
            record = CodeRecord(
                identifier=identifier,
                channel=key.channel,
                purpose=key.purpose,
                code_hash=hash_code(code),
                issued_at=now,
                expires_at=now + self.ttl,
                subject=str(subject or ''),
                version=existing.version + 1 if existing else 1,
            )

            if self.store.compare_and_swap(key, existing.version if existing else None, record):
                break

            logger.info(f'Concurrent code issue for {mask_identifier(identifier)}, attempt {attempt + 1}')
        else:
            raise ConcurrentModificationError('Verification code', mask_identifier(identifier))

        logger.info(f'Issued {key.channel}:{key.purpose} code for {mask_identifier(identifier)}')

        outcome = self._deliver(identifier, key.channel, code)
        return IssueResult.stored(outcome)

    def _cooldown_remaining(self, existing: CodeRecord | None, now: datetime) -> int:
        if not existing or existing.consumed or existing.is_expired(now) or self.cooldown_seconds <= 0:
            return 0

        elapsed = (now - existing.issued_at).total_seconds()
        if elapsed >= self.cooldown_seconds:
            return 0
        return max(1, math.ceil(self.cooldown_seconds - elapsed))

    def _deliver(self, identifier: str, channel: str, code: str) -> DeliveryOutcome:
        try:
            outcome = self.delivery.send(identifier, channel, code)
        except Exception as e:
            logger.exception(f'Delivery collaborator raised for {mask_identifier(identifier)}: {e}')
            outcome = DeliveryOutcome.failed(str(e))

        if not outcome.delivered:
            logger.error(
                f'Code delivery over {channel} failed for {mask_identifier(identifier)}: {outcome.error}. '
                'The stored code remains valid.'
            )
        return outcome
