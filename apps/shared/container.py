from collections.abc import Callable

from apps.accounts.services import PasswordlessService
from apps.events.dal.draw_pair_dal import DrawPairDAL
from apps.events.dal.event_dal import EventDAL
from apps.events.dal.participant_dal import ParticipantDAL
from apps.events.services import DrawService
from apps.events.services import EventService
from apps.events.services import ParticipantService
from apps.events.services import PhoneConfirmationService
from apps.verification.delivery import CeleryCodeDelivery
from apps.verification.services import CodeIssuer
from apps.verification.services import CodeVerifier
from apps.verification.stores import DatabaseCodeStore


class Container:
    """
    Simple DI Container for managing service dependencies.

    Views ask the container for services; tests override the factories to
    swap in-memory stores or recording delivery.
    """

    def __init__(self):
        self._dal_factories = {}
        self._service_factories = {}
        self._setup_default_factories()

    def _setup_default_factories(self):
        self._dal_factories = {
            'event_dal': EventDAL,
            'participant_dal': ParticipantDAL,
            'draw_pair_dal': DrawPairDAL,
        }

        self._service_factories = {
            'code_store': DatabaseCodeStore,
            'code_delivery': CeleryCodeDelivery,
        }

    def code_issuer(self) -> CodeIssuer:
        return CodeIssuer(
            store=self._service_factories['code_store'](),
            delivery=self._service_factories['code_delivery'](),
        )

    def code_verifier(self) -> CodeVerifier:
        return CodeVerifier(store=self._service_factories['code_store']())

    def passwordless_service(self) -> PasswordlessService:
        return PasswordlessService(issuer=self.code_issuer(), verifier=self.code_verifier())

    def event_service(self) -> EventService:
        return EventService(
            dal=self._dal_factories['event_dal'](),
            participant_dal=self._dal_factories['participant_dal'](),
        )

    def participant_service(self) -> ParticipantService:
        return ParticipantService(
            dal=self._dal_factories['event_dal'](),
            participant_dal=self._dal_factories['participant_dal'](),
        )

    def phone_confirmation_service(self) -> PhoneConfirmationService:
        return PhoneConfirmationService(
            dal=self._dal_factories['event_dal'](),
            participant_service=self.participant_service(),
            issuer=self.code_issuer(),
            verifier=self.code_verifier(),
        )

    def draw_service(self) -> DrawService:
        return DrawService(
            dal=self._dal_factories['event_dal'](),
            participant_dal=self._dal_factories['participant_dal'](),
            pair_dal=self._dal_factories['draw_pair_dal'](),
        )

    # Override methods for testing
    def override_code_store(self, factory: Callable):
        self._service_factories['code_store'] = factory

    def override_code_delivery(self, factory: Callable):
        self._service_factories['code_delivery'] = factory

    def reset_to_defaults(self):
        """Reset all factories to defaults - useful for test cleanup"""
        self._setup_default_factories()


# Global container instance
_container = Container()


def get_container() -> Container:
    return _container


def get_passwordless_service() -> PasswordlessService:
    return get_container().passwordless_service()


def get_event_service() -> EventService:
    return get_container().event_service()


def get_participant_service() -> ParticipantService:
    return get_container().participant_service()


def get_phone_confirmation_service() -> PhoneConfirmationService:
    return get_container().phone_confirmation_service()


def get_draw_service() -> DrawService:
    return get_container().draw_service()
