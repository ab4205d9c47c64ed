"""
Explicit outcomes for code issuance and verification.

Business outcomes (rate limiting, wrong or stale codes) are values on these
results. Transport failures stay separate: the store raises
ServiceUnavailableError, and delivery problems come back as a failed
DeliveryOutcome on an otherwise successful issue.
"""

from dataclasses import dataclass
from dataclasses import replace
from enum import Enum
from typing import Any


class IssueFailure(str, Enum):
    RATE_LIMITED = 'rate_limited'
    DELIVERY_FAILED = 'delivery_failed'


class VerifyFailure(str, Enum):
    NOT_FOUND = 'not_found'
    ALREADY_CONSUMED = 'already_consumed'
    EXPIRED = 'expired'
    ATTEMPTS_EXCEEDED = 'attempts_exceeded'
    INVALID_CODE = 'invalid_code'
    CONCURRENT_MODIFICATION = 'concurrent_modification'


@dataclass(frozen=True)
class DeliveryOutcome:
    delivered: bool
    error: str = ''

    @classmethod
    def ok(cls) -> 'DeliveryOutcome':
        return cls(delivered=True)

    @classmethod
    def failed(cls, error: str) -> 'DeliveryOutcome':
        return cls(delivered=False, error=error)


@dataclass(frozen=True)
class IssueResult:
    issued: bool
    reason: IssueFailure | None = None
    retry_after_seconds: int | None = None
    delivery: DeliveryOutcome | None = None

    @classmethod
    def rate_limited(cls, retry_after_seconds: int) -> 'IssueResult':
        return cls(issued=False, reason=IssueFailure.RATE_LIMITED, retry_after_seconds=retry_after_seconds)

    @classmethod
    def stored(cls, delivery: DeliveryOutcome) -> 'IssueResult':
        reason = None if delivery.delivered else IssueFailure.DELIVERY_FAILED
        return cls(issued=True, reason=reason, delivery=delivery)

    @property
    def delivery_failed(self) -> bool:
        return self.reason == IssueFailure.DELIVERY_FAILED

    def to_dict(self) -> dict[str, Any]:
        data = {'issued': self.issued, 'delivery_failed': self.delivery_failed}
        if self.reason:
            data['reason'] = self.reason.value
        if self.retry_after_seconds is not None:
            data['retry_after_seconds'] = self.retry_after_seconds
        return data


@dataclass(frozen=True)
class VerifyResult:
    success: bool
    reason: VerifyFailure | None = None
    identifier: str = ''
    subject: str = ''
    attempts_remaining: int | None = None
    token: str | None = None
    refresh: str | None = None

    @classmethod
    def failure(cls, reason: VerifyFailure, attempts_remaining: int | None = None) -> 'VerifyResult':
        return cls(success=False, reason=reason, attempts_remaining=attempts_remaining)

    @classmethod
    def verified(cls, identifier: str, subject: str = '') -> 'VerifyResult':
        return cls(success=True, identifier=identifier, subject=subject)

    def with_session(self, token: str, refresh: str) -> 'VerifyResult':
        return replace(self, token=token, refresh=refresh)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {'success': self.success}
        if self.reason:
            data['reason'] = self.reason.value
        if self.attempts_remaining is not None:
            data['attempts_remaining'] = self.attempts_remaining
        if self.token:
            data['token'] = self.token
            data['refresh'] = self.refresh
        return data
