import logging

from apps.events.dal.event_dal import EventDAL
from apps.events.exceptions import EventLockedError
from apps.events.exceptions import ParticipantAlreadyConfirmedError
from apps.events.models import Event
from apps.events.models import Participant
from apps.events.services.participant_service import ParticipantService
from apps.verification.choices import Channel
from apps.verification.choices import Purpose
from apps.verification.identifiers import normalize_identifier
from apps.verification.results import IssueResult
from apps.verification.results import VerifyResult
from apps.verification.services import CodeIssuer
from apps.verification.services import CodeVerifier

logger = logging.getLogger(__name__)


class PhoneConfirmationService:
    """
    Participant self-confirmation: a WhatsApp code proves the number, and a
    successful verification confirms the participant on the roster.
    """

    def __init__(
        self,
        dal: EventDAL = None,
        participant_service: ParticipantService = None,
        issuer: CodeIssuer = None,
        verifier: CodeVerifier = None,
    ):
        self.dal = dal or EventDAL()
        self.participant_service = participant_service or ParticipantService(dal=self.dal)
        self.issuer = issuer or CodeIssuer()
        self.verifier = verifier or CodeVerifier()

    def send_code(self, event_uuid, participant_id, raw_whatsapp: str) -> IssueResult:
        """
        Raises:
            EventLockedError: the draw has been performed
            ParticipantAlreadyConfirmedError: nothing left to confirm
            InvalidIdentifierError: malformed number
            WhatsAppNumberInUseError: another participant holds the number
        """
        event, participant = self._load_unconfirmed(event_uuid, participant_id)

        number = normalize_identifier(raw_whatsapp, Channel.WHATSAPP)
        self.participant_service.ensure_number_available(event, number, participant.pk)

        result = self.issuer.issue(number, Channel.WHATSAPP, Purpose.PHONE_VERIFY, subject=participant.pk)
        logger.info(f'Phone confirmation code requested for participant {participant.id}: issued={result.issued}')
        return result

    def verify_code(self, event_uuid, participant_id, raw_whatsapp: str, code: str) -> VerifyResult:
        event, participant = self._load_unconfirmed(event_uuid, participant_id)

        result = self.verifier.verify(
            raw_whatsapp,
            Channel.WHATSAPP,
            Purpose.PHONE_VERIFY,
            code,
            expected_subject=str(participant.pk),
        )
        if not result.success:
            logger.warning(f'Phone confirmation failed for participant {participant.id}: {result.reason.value}')
            return result

        self.participant_service.set_confirmed(event, participant.pk, True, whatsapp_number=result.identifier)
        return result

    def _load_unconfirmed(self, event_uuid, participant_id) -> tuple[Event, Participant]:
        event = self.dal.get_event_by_uuid(event_uuid)
        if event.draw_performed:
            raise EventLockedError(str(event_uuid))

        participant = self.participant_service.get_participant(event, participant_id)
        if participant.confirmed:
            raise ParticipantAlreadyConfirmedError()

        return event, participant
