from typing import Any

from django.db.models import QuerySet

from apps.events.exceptions import ParticipantNotFoundError
from apps.events.models import Event
from apps.events.models import Participant
from apps.shared.decorators.database import handle_db_errors


class ParticipantDAL:
    """Data Access Layer for event participants"""

    def get_event_participants(self, event: Event, confirmed: bool | None = None) -> QuerySet[Participant]:
        queryset = Participant.objects.for_event(event)
        if confirmed is True:
            queryset = queryset.confirmed()
        elif confirmed is False:
            queryset = queryset.unconfirmed()
        return queryset

    @handle_db_errors(operation_type='read', model_name='Participant')
    def get_participant(self, event: Event, participant_id) -> Participant:
        """
        Raises:
            ParticipantNotFoundError: participant missing or belongs to another event
        """
        participant = Participant.objects.for_event(event).filter(pk=participant_id).first()
        if participant is None:
            raise ParticipantNotFoundError(str(participant_id))
        return participant

    @handle_db_errors(operation_type='read', model_name='Participant')
    def is_number_taken(self, event: Event, whatsapp_number: str, exclude_id: int | None = None) -> bool:
        queryset = Participant.objects.for_event(event).filter(whatsapp_number=whatsapp_number)
        if exclude_id is not None:
            queryset = queryset.exclude(pk=exclude_id)
        return queryset.exists()

    @handle_db_errors(operation_type='create', model_name='Participant')
    def create_participant(self, participant_data: dict[str, Any]) -> Participant:
        return Participant.objects.create(**participant_data)

    @handle_db_errors(operation_type='update', model_name='Participant')
    def update_participant(self, participant: Participant, fields: dict[str, Any]) -> Participant:
        for field, value in fields.items():
            setattr(participant, field, value)
        participant.save(update_fields=[*fields.keys(), 'updated_at'])
        return participant

    @handle_db_errors(operation_type='delete', model_name='Participant')
    def delete_participant(self, participant: Participant) -> None:
        participant.delete()
