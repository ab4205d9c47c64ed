from django.db.models import QuerySet

from apps.events.models import DrawPair
from apps.events.models import Event
from apps.shared.decorators.database import handle_db_errors


class DrawPairDAL:
    @handle_db_errors(operation_type='create', model_name='DrawPair')
    def create_pairs(self, event: Event, assignment: dict[int, int]) -> list[DrawPair]:
        DrawPair.objects.bulk_create(
            [DrawPair(event=event, giver_id=giver, receiver_id=receiver) for giver, receiver in assignment.items()]
        )
        return list(self.get_pairs(event))

    def get_pairs(self, event: Event) -> QuerySet[DrawPair]:
        return DrawPair.objects.filter(event=event).select_related('giver', 'receiver')
