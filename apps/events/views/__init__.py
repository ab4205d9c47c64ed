from apps.events.views.draw_views import DrawAPIView
from apps.events.views.event_views import BaseEventAPIView
from apps.events.views.event_views import EventDetailAPIView
from apps.events.views.event_views import EventListCreateAPIView
from apps.events.views.event_views import SuggestionReminderAPIView
from apps.events.views.participant_views import ParticipantDetailAPIView
from apps.events.views.participant_views import ParticipantListCreateAPIView
from apps.events.views.public_views import GiftSuggestionAPIView
from apps.events.views.public_views import PublicEventAPIView
from apps.events.views.public_views import PublicParticipantListAPIView
from apps.events.views.public_views import SendWhatsAppCodeAPIView
from apps.events.views.public_views import VerifyWhatsAppCodeAPIView

__all__ = [
    'BaseEventAPIView',
    'DrawAPIView',
    'EventDetailAPIView',
    'EventListCreateAPIView',
    'GiftSuggestionAPIView',
    'ParticipantDetailAPIView',
    'ParticipantListCreateAPIView',
    'PublicEventAPIView',
    'PublicParticipantListAPIView',
    'SendWhatsAppCodeAPIView',
    'SuggestionReminderAPIView',
    'VerifyWhatsAppCodeAPIView',
]
