from datetime import datetime
from typing import Any

from django.db.models import F
from django.db.models import QuerySet
from django.utils import timezone

from apps.events.exceptions import EventNotFoundError
from apps.events.models import Event
from apps.shared.decorators.database import handle_db_errors


class EventDAL:
    """Data Access Layer for Event model operations only"""

    @handle_db_errors(operation_type='create', model_name='Event')
    def create_event(self, event_data: dict[str, Any]) -> Event:
        return Event.objects.create(**event_data)

    @handle_db_errors(operation_type='read', model_name='Event')
    def get_event_by_uuid(self, event_uuid) -> Event:
        """
        Raises:
            EventNotFoundError: no event with this UUID
        """
        event = Event.objects.with_counts().filter(event_uuid=event_uuid).first()
        if event is None:
            raise EventNotFoundError(str(event_uuid))
        return event

    @handle_db_errors(operation_type='read', model_name='Event')
    def get_event_for_update(self, event_uuid) -> Event:
        """Fetch the event row under a row lock; callers must be inside transaction.atomic."""
        event = Event.objects.select_for_update().filter(event_uuid=event_uuid).first()
        if event is None:
            raise EventNotFoundError(str(event_uuid))
        return event

    def get_organizer_events_queryset(self, user_id: int) -> QuerySet[Event]:
        return Event.objects.for_organizer(user_id).with_counts().newest_first()

    @handle_db_errors(operation_type='update', model_name='Event')
    def update_event(self, event: Event, validated_data: dict[str, Any]) -> Event:
        for field, value in validated_data.items():
            setattr(event, field, value)
        event.save(update_fields=[*validated_data.keys(), 'updated_at'])
        return event

    @handle_db_errors(operation_type='delete', model_name='Event')
    def delete_event(self, event: Event) -> bool:
        event.delete()
        return True

    @handle_db_errors(operation_type='update', model_name='Event')
    def bump_roster_version(self, event: Event) -> None:
        Event.objects.filter(pk=event.pk).update(roster_version=F('roster_version') + 1, updated_at=timezone.now())

    @handle_db_errors(operation_type='update', model_name='Event')
    def mark_drawn(self, event: Event, expected_roster_version: int, draw_date: datetime) -> bool:
        """
        Flip the draw latch only if the event is still undrawn and its roster
        has not changed since it was read.
        """
        updated = Event.objects.filter(
            pk=event.pk,
            draw_performed=False,
            roster_version=expected_roster_version,
        ).update(draw_performed=True, draw_date=draw_date, updated_at=draw_date)
        return updated == 1
