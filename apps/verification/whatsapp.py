import logging

import requests
from django.conf import settings

from apps.verification.exceptions import WhatsAppDeliveryError
from apps.verification.identifiers import mask_identifier

logger = logging.getLogger(__name__)


class WhatsAppClient:
    """Thin client for the HTTP WhatsApp messaging gateway."""

    def __init__(self, api_url: str = None, token: str = None, timeout: int = None, country_code: str = None):
        self.api_url = api_url if api_url is not None else settings.WHATSAPP_API_URL
        self.token = token if token is not None else settings.WHATSAPP_API_TOKEN
        self.timeout = timeout or settings.WHATSAPP_TIMEOUT_SECONDS
        self.country_code = country_code if country_code is not None else settings.WHATSAPP_COUNTRY_CODE

    def send_text(self, number: str, message: str) -> dict:
        """
        Send a text message to a normalized local number.

        Raises:
            WhatsAppDeliveryError: gateway not configured, unreachable, or refused the message
        """
        if not self.api_url:
            raise WhatsAppDeliveryError('WhatsApp gateway is not configured')

        payload = {'to': f'{self.country_code}{number}', 'type': 'text', 'text': {'body': message}}
        headers = {'Authorization': f'Bearer {self.token}', 'Content-Type': 'application/json'}

        try:
            response = requests.post(self.api_url, json=payload, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f'WhatsApp gateway unreachable for {mask_identifier(number)}: {e}')
            raise WhatsAppDeliveryError(f'WhatsApp gateway unreachable: {e}') from e

        if response.status_code >= 400:
            logger.warning(
                f'WhatsApp gateway rejected message to {mask_identifier(number)}: '
                f'{response.status_code} {response.text[:200]}'
            )
            raise WhatsAppDeliveryError(
                f'WhatsApp gateway returned {response.status_code}',
                context={'status_code': response.status_code},
            )

        logger.info(f'WhatsApp message accepted for {mask_identifier(number)}')
        return response.json() if response.content else {}
