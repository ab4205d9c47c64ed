from apps.events.models.draw_pair import DrawPair
from apps.events.models.event import Event
from apps.events.models.participant import Participant

__all__ = [
    'DrawPair',
    'Event',
    'Participant',
]
