import logging
from typing import Any

from django.db import transaction
from django.utils import timezone

from apps.events.dal.event_dal import EventDAL
from apps.events.dal.participant_dal import ParticipantDAL
from apps.events.exceptions import EventLockedError
from apps.events.exceptions import ParticipantNotConfirmedError
from apps.events.exceptions import WhatsAppNumberInUseError
from apps.events.models import Event
from apps.events.models import Participant
from apps.verification.choices import Channel
from apps.verification.identifiers import normalize_identifier

logger = logging.getLogger(__name__)


class ParticipantService:
    """
    Roster mutations for an event.

    Every mutation takes the event row lock, refuses to run once the draw
    has been performed, and bumps the event's roster version so a draw that
    read the roster earlier cannot commit against a changed one.
    """

    def __init__(self, dal: EventDAL = None, participant_dal: ParticipantDAL = None, clock=None):
        self.dal = dal or EventDAL()
        self.participant_dal = participant_dal or ParticipantDAL()
        self.clock = clock or timezone.now

    def list_participants(self, event: Event, confirmed: bool | None = None) -> list[Participant]:
        return list(self.participant_dal.get_event_participants(event, confirmed))

    def get_participant(self, event: Event, participant_id) -> Participant:
        return self.participant_dal.get_participant(event, participant_id)

    def ensure_number_available(self, event: Event, whatsapp_number: str, participant_id=None) -> None:
        if self.participant_dal.is_number_taken(event, whatsapp_number, exclude_id=participant_id):
            raise WhatsAppNumberInUseError()

    @transaction.atomic
    def add_participant(self, event: Event, name: str, whatsapp_number: str | None = None) -> Participant:
        event = self._lock_roster(event)

        data = {'event': event, 'name': name.strip()}
        if whatsapp_number:
            data['whatsapp_number'] = self._normalize_number(event, whatsapp_number)

        participant = self.participant_dal.create_participant(data)
        self.dal.bump_roster_version(event)

        logger.info(f'Added participant {participant.id} to event {event.event_uuid}')
        return participant

    @transaction.atomic
    def remove_participant(self, event: Event, participant_id) -> None:
        event = self._lock_roster(event)
        participant = self.participant_dal.get_participant(event, participant_id)

        self.participant_dal.delete_participant(participant)
        self.dal.bump_roster_version(event)

        logger.info(f'Removed participant {participant_id} from event {event.event_uuid}')

    @transaction.atomic
    def set_confirmed(
        self, event: Event, participant_id, confirmed: bool, whatsapp_number: str | None = None
    ) -> Participant:
        event = self._lock_roster(event)
        participant = self.participant_dal.get_participant(event, participant_id)

        fields = self._confirmation_fields(participant, confirmed)
        if whatsapp_number:
            fields['whatsapp_number'] = self._normalize_number(event, whatsapp_number, participant.pk)

        participant = self.participant_dal.update_participant(participant, fields)
        self.dal.bump_roster_version(event)

        logger.info(f'Participant {participant.id} of event {event.event_uuid} confirmed={confirmed}')
        return participant

    @transaction.atomic
    def update_participant(self, event: Event, participant_id, data: dict[str, Any]) -> Participant:
        """Organizer edit of name, WhatsApp number and confirmation flag."""
        event = self._lock_roster(event)
        participant = self.participant_dal.get_participant(event, participant_id)

        fields = {}
        if 'name' in data:
            fields['name'] = data['name'].strip()
        if 'whatsapp_number' in data:
            raw = data['whatsapp_number']
            fields['whatsapp_number'] = self._normalize_number(event, raw, participant.pk) if raw else ''
        if 'confirmed' in data:
            fields.update(self._confirmation_fields(participant, data['confirmed']))

        if not fields:
            return participant

        participant = self.participant_dal.update_participant(participant, fields)
        self.dal.bump_roster_version(event)

        logger.info(f'Updated participant {participant.id} of event {event.event_uuid}: {sorted(fields)}')
        return participant

    @transaction.atomic
    def update_gift_suggestion(self, event: Event, participant_id, text: str) -> Participant:
        """Allowed before and after the draw; does not change the roster."""
        participant = self.participant_dal.get_participant(event, participant_id)

        if not participant.confirmed:
            logger.warning(f'Gift suggestion refused for unconfirmed participant {participant.id}')
            raise ParticipantNotConfirmedError()

        participant = self.participant_dal.update_participant(participant, {'gift_suggestion': text.strip()})
        logger.info(f'Gift suggestion updated for participant {participant.id}')
        return participant

    def _lock_roster(self, event: Event) -> Event:
        locked = self.dal.get_event_for_update(event.event_uuid)
        if locked.draw_performed:
            logger.warning(f'Roster change refused, event {locked.event_uuid} is already drawn')
            raise EventLockedError(str(locked.event_uuid))
        return locked

    def _normalize_number(self, event: Event, raw: str, participant_id=None) -> str:
        number = normalize_identifier(raw, Channel.WHATSAPP)
        self.ensure_number_available(event, number, participant_id)
        return number

    def _confirmation_fields(self, participant: Participant, confirmed: bool) -> dict[str, Any]:
        if confirmed == participant.confirmed:
            return {'confirmed': confirmed}
        return {'confirmed': confirmed, 'confirmed_at': self.clock() if confirmed else None}
