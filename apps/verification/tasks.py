import logging

from django.conf import settings
from django.core.mail import send_mail
from django.utils import timezone

from apps.verification.identifiers import mask_identifier
from apps.verification.stores import DatabaseCodeStore
from apps.verification.whatsapp import WhatsAppClient
from settings.celery import app

logger = logging.getLogger(__name__)


def _ttl_minutes() -> int:
    return max(1, settings.OTP_TTL_SECONDS // 60)


@app.task(bind=True)
def send_code_email_task(self, email: str, code: str):
    """
    Send a login code by email.

    Args:
        email: Normalized recipient address
        code: 6-digit verification code
    """
    try:
        message = f"""Seu código de acesso: {code}

O código expira em {_ttl_minutes()} minutos.
Se você não pediu este código, ignore este email.

-- Amigo Secreto"""

        send_mail(
            subject=f'{settings.EMAIL_SUBJECT_PREFIX}Seu código de acesso',
            message=message,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[email],
            fail_silently=False,
        )

        logger.info(f'Login code email sent to {mask_identifier(email)}')
        return {'status': 'success', 'channel': 'email'}

    except Exception as e:
        logger.exception(f'Failed to send login code email to {mask_identifier(email)}: {e}')
        raise self.retry(countdown=60, max_retries=3, exc=e)


@app.task(bind=True)
def send_code_whatsapp_task(self, number: str, code: str):
    """Send a phone confirmation code over WhatsApp."""
    try:
        message = (
            f'Amigo Secreto: seu código de confirmação é {code}. '
            f'Ele expira em {_ttl_minutes()} minutos.'
        )
        WhatsAppClient().send_text(number, message)
        return {'status': 'success', 'channel': 'whatsapp'}

    except Exception as e:
        logger.exception(f'Failed to send WhatsApp code to {mask_identifier(number)}: {e}')
        raise self.retry(countdown=30, max_retries=3, exc=e)


@app.task
def purge_expired_codes_task():
    """Delete verification codes whose expiry has passed."""
    removed = DatabaseCodeStore().purge(timezone.now())
    logger.info(f'Purged {removed} expired verification codes')
    return {'status': 'success', 'purged': removed}
