import logging

from django.conf import settings

from apps.events.models import Event
from apps.verification.exceptions import WhatsAppDeliveryError
from apps.verification.identifiers import mask_identifier
from apps.verification.whatsapp import WhatsAppClient
from settings.celery import app

logger = logging.getLogger(__name__)


@app.task
def send_gift_suggestion_reminder_task(event_id: int):
    """
    Remind every participant with a WhatsApp number to leave a gift suggestion.

    One failed recipient does not stop the others; failures are counted and logged.
    """
    event = Event.objects.get(pk=event_id)
    link = f'{settings.FRONTEND_URL.rstrip("/")}/events/{event.event_uuid}/gift'
    client = WhatsAppClient()

    sent, failed = 0, 0
    for participant in event.participants.with_whatsapp():
        message = (
            f'Olá {participant.name}! Deixe sua sugestão de presente para o amigo secreto '
            f'"{event.title}" (R$ {event.min_value} a R$ {event.max_value}): {link}'
        )
        try:
            client.send_text(participant.whatsapp_number, message)
            sent += 1
        except WhatsAppDeliveryError as e:
            failed += 1
            logger.warning(f'Reminder to {mask_identifier(participant.whatsapp_number)} failed: {e}')

    logger.info(f'Gift suggestion reminder for event {event.event_uuid}: {sent} sent, {failed} failed')
    return {'status': 'success', 'sent': sent, 'failed': failed}
