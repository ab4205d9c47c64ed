import logging
from abc import ABC
from abc import abstractmethod

from kombu.exceptions import OperationalError

from apps.verification.choices import Channel
from apps.verification.identifiers import mask_identifier
from apps.verification.results import DeliveryOutcome

logger = logging.getLogger(__name__)


class CodeDelivery(ABC):
    """Hands a freshly issued plain code to its recipient."""

    @abstractmethod
    def send(self, identifier: str, channel: str, code: str) -> DeliveryOutcome:
        pass


class CeleryCodeDelivery(CodeDelivery):
    """
    Queues delivery on the Celery worker. A successful outcome means the
    message was accepted by the broker; worker-side failures are retried
    there.
    """

    def send(self, identifier: str, channel: str, code: str) -> DeliveryOutcome:
        from apps.verification.tasks import send_code_email_task
        from apps.verification.tasks import send_code_whatsapp_task

        task = send_code_email_task if channel == Channel.EMAIL else send_code_whatsapp_task

        try:
            task.delay(identifier, code)
        except OperationalError as e:
            logger.error(f'Could not queue {channel} code for {mask_identifier(identifier)}: {e}')
            return DeliveryOutcome.failed(f'broker unavailable: {e}')

        return DeliveryOutcome.ok()


class RecordingCodeDelivery(CodeDelivery):
    """Keeps sent codes in memory instead of delivering them."""

    def __init__(self, fail_with: str = ''):
        self.sent: list[tuple[str, str, str]] = []
        self.fail_with = fail_with

    def send(self, identifier: str, channel: str, code: str) -> DeliveryOutcome:
        if self.fail_with:
            return DeliveryOutcome.failed(self.fail_with)
        self.sent.append((identifier, str(channel), code))
        return DeliveryOutcome.ok()

    def last_code(self) -> str:
        return self.sent[-1][2]
