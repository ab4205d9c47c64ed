from django.urls import path

from apps.events.views import DrawAPIView
from apps.events.views import EventDetailAPIView
from apps.events.views import EventListCreateAPIView
from apps.events.views import GiftSuggestionAPIView
from apps.events.views import ParticipantDetailAPIView
from apps.events.views import ParticipantListCreateAPIView
from apps.events.views import PublicEventAPIView
from apps.events.views import PublicParticipantListAPIView
from apps.events.views import SendWhatsAppCodeAPIView
from apps.events.views import SuggestionReminderAPIView
from apps.events.views import VerifyWhatsAppCodeAPIView

app_name = 'events'


urlpatterns = [
    # Organizer event CRUD
    path('', EventListCreateAPIView.as_view(), name='event-list'),  # GET, POST
    path('<uuid:event_uuid>/', EventDetailAPIView.as_view(), name='event-detail'),  # GET, PUT, DELETE
    # Roster management
    path(
        '<uuid:event_uuid>/participants/',
        ParticipantListCreateAPIView.as_view(),
        name='event-participants',
    ),  # GET, POST
    path(
        '<uuid:event_uuid>/participants/send-suggestions-reminder/',
        SuggestionReminderAPIView.as_view(),
        name='event-suggestions-reminder',
    ),  # POST
    path(
        '<uuid:event_uuid>/participants/<int:participant_id>/',
        ParticipantDetailAPIView.as_view(),
        name='event-participant-detail',
    ),  # PUT, DELETE
    # Draw
    path('<uuid:event_uuid>/draw/', DrawAPIView.as_view(), name='event-draw'),  # POST, GET
    # Public participant pages
    path('<uuid:event_uuid>/public/', PublicEventAPIView.as_view(), name='public-event'),  # GET
    path(
        '<uuid:event_uuid>/public/participants/',
        PublicParticipantListAPIView.as_view(),
        name='public-participants',
    ),  # GET
    path(
        '<uuid:event_uuid>/public/participants/<int:participant_id>/send-whatsapp-code/',
        SendWhatsAppCodeAPIView.as_view(),
        name='public-send-whatsapp-code',
    ),  # POST
    path(
        '<uuid:event_uuid>/public/participants/<int:participant_id>/verify-whatsapp-code/',
        VerifyWhatsAppCodeAPIView.as_view(),
        name='public-verify-whatsapp-code',
    ),  # POST
    path(
        '<uuid:event_uuid>/public/participants/<int:participant_id>/gift-suggestion/',
        GiftSuggestionAPIView.as_view(),
        name='public-gift-suggestion',
    ),  # PUT
]
