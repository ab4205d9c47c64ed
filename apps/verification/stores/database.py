import logging
from datetime import datetime

from django.db import IntegrityError
from django.db import transaction
from django.utils import timezone

from apps.shared.decorators.database import handle_db_errors
from apps.verification.models import VerificationCode
from apps.verification.stores.base import CodeKey
from apps.verification.stores.base import CodeRecord
from apps.verification.stores.base import CodeStore

logger = logging.getLogger(__name__)


class DatabaseCodeStore(CodeStore):
    """
    ORM-backed store. The swap is a conditional UPDATE on the row version,
    so concurrent writers on the same key cannot both succeed.
    """

    @staticmethod
    def _lookup(key: CodeKey) -> dict:
        return {'identifier': key.identifier, 'channel': key.channel, 'purpose': key.purpose}

    @staticmethod
    def _to_record(row: VerificationCode) -> CodeRecord:
        return CodeRecord(
            identifier=row.identifier,
            channel=row.channel,
            purpose=row.purpose,
            code_hash=row.code_hash,
            issued_at=row.issued_at,
            expires_at=row.expires_at,
            consumed=row.consumed,
            attempts=row.attempts,
            subject=row.subject,
            version=row.version,
        )

    @staticmethod
    def _to_fields(record: CodeRecord) -> dict:
        return {
            'code_hash': record.code_hash,
            'issued_at': record.issued_at,
            'expires_at': record.expires_at,
            'consumed': record.consumed,
            'attempts': record.attempts,
            'subject': record.subject,
            'version': record.version,
        }

    @handle_db_errors(operation_type='read', model_name='VerificationCode')
    def get(self, key: CodeKey) -> CodeRecord | None:
        row = VerificationCode.objects.filter(**self._lookup(key)).first()
        return self._to_record(row) if row else None

    @handle_db_errors(operation_type='update', model_name='VerificationCode')
    def compare_and_swap(self, key: CodeKey, expected_version: int | None, record: CodeRecord) -> bool:
        if expected_version is None:
            try:
                with transaction.atomic():
                    VerificationCode.objects.create(**self._lookup(key), **self._to_fields(record))
            except IntegrityError:
                logger.debug(f'Insert lost against a concurrent writer for {key.channel}:{key.purpose}')
                return False
            return True

        updated = VerificationCode.objects.filter(**self._lookup(key), version=expected_version).update(
            **self._to_fields(record), updated_at=timezone.now()
        )
        return updated == 1

    @handle_db_errors(operation_type='delete', model_name='VerificationCode')
    def purge(self, now: datetime) -> int:
        deleted, _ = VerificationCode.objects.filter(expires_at__lt=now).delete()
        return deleted
