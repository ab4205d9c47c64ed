import logging
from typing import Any

from django.db import transaction
from kombu.exceptions import OperationalError

from apps.events.dal.event_dal import EventDAL
from apps.events.dal.participant_dal import ParticipantDAL
from apps.events.exceptions import EventPermissionError
from apps.events.exceptions import EventValidationError
from apps.events.models import Event
from apps.shared.exceptions import ServiceUnavailableError
from apps.shared.utils.paginator import ServicePaginator

logger = logging.getLogger(__name__)


class EventService:
    """Service for event business logic operations"""

    def __init__(self, dal: EventDAL = None, participant_dal: ParticipantDAL = None, paginator: ServicePaginator = None):
        self.dal = dal or EventDAL()
        self.participant_dal = participant_dal or ParticipantDAL()
        self.paginator = paginator or ServicePaginator()

    def create_event(self, user, validated_data: dict[str, Any]) -> Event:
        self._validate_value_range(validated_data.get('min_value', 0), validated_data.get('max_value', 0))

        event = self.dal.create_event({**validated_data, 'organizer': user})

        logger.info(f'Event {event.event_uuid} created by user {user.id}')
        return self.dal.get_event_by_uuid(event.event_uuid)

    def list_events(self, user, page=1, page_size=None) -> dict[str, Any]:
        queryset = self.dal.get_organizer_events_queryset(user.id)
        result = self.paginator.paginate(queryset, page, page_size)
        return {'events': result['items'], 'pagination': result['pagination']}

    def get_event(self, event_uuid, user) -> Event:
        """
        Raises:
            EventNotFoundError: unknown UUID
            EventPermissionError: user is not the organizer
        """
        event = self.dal.get_event_by_uuid(event_uuid)
        self.check_organizer(event, user, 'access')
        return event

    def get_public_event(self, event_uuid) -> Event:
        return self.dal.get_event_by_uuid(event_uuid)

    @transaction.atomic
    def update_event(self, event_uuid, user, validated_data: dict[str, Any]) -> Event:
        event = self.dal.get_event_by_uuid(event_uuid)
        self.check_organizer(event, user, 'modify')

        self._validate_value_range(
            validated_data.get('min_value', event.min_value),
            validated_data.get('max_value', event.max_value),
        )

        if validated_data:
            self.dal.update_event(event, validated_data)
            logger.info(f'Event {event_uuid} updated: {sorted(validated_data)}')

        return self.dal.get_event_by_uuid(event_uuid)

    @transaction.atomic
    def delete_event(self, event_uuid, user) -> bool:
        event = self.dal.get_event_by_uuid(event_uuid)
        self.check_organizer(event, user, 'delete')

        result = self.dal.delete_event(event)
        logger.info(f'Event {event_uuid} deleted by user {user.id}')
        return result

    def send_gift_suggestion_reminder(self, event_uuid, user) -> int:
        """
        Queue a WhatsApp reminder to every participant with a number.

        Returns:
            int: number of participants the reminder was queued for
        """
        from apps.events.tasks import send_gift_suggestion_reminder_task

        event = self.get_event(event_uuid, user)
        recipients = self.participant_dal.get_event_participants(event).with_whatsapp().count()

        if not recipients:
            logger.info(f'No participant of event {event_uuid} has a WhatsApp number, reminder skipped')
            return 0

        try:
            send_gift_suggestion_reminder_task.delay(event.id)
        except OperationalError as e:
            logger.error(f'Could not queue gift suggestion reminder for event {event_uuid}: {e}')
            raise ServiceUnavailableError('Reminder queue is unavailable', error_code='reminder_queue_unavailable') from e

        logger.info(f'Gift suggestion reminder queued for {recipients} participants of event {event_uuid}')
        return recipients

    @staticmethod
    def check_organizer(event: Event, user, action: str) -> None:
        if event.organizer_id != getattr(user, 'id', None):
            logger.warning(f'User {getattr(user, "id", None)} denied {action} on event {event.event_uuid}')
            raise EventPermissionError(action=action, event_id=str(event.event_uuid))

    @staticmethod
    def _validate_value_range(min_value, max_value) -> None:
        if min_value is None or max_value is None:
            return
        if min_value > max_value:
            raise EventValidationError(
                'Minimum gift value cannot be greater than the maximum',
                field_errors={'min_value': ['Must be less than or equal to max_value']},
            )
