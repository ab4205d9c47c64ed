from apps.events.services.draw_service import DrawResult
from apps.events.services.draw_service import DrawService
from apps.events.services.event_service import EventService
from apps.events.services.participant_service import ParticipantService
from apps.events.services.phone_confirmation_service import PhoneConfirmationService

__all__ = [
    'DrawResult',
    'DrawService',
    'EventService',
    'ParticipantService',
    'PhoneConfirmationService',
]
