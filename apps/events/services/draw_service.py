import logging
import secrets
from dataclasses import dataclass
from datetime import datetime
from random import Random

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from apps.events.dal.draw_pair_dal import DrawPairDAL
from apps.events.dal.event_dal import EventDAL
from apps.events.dal.participant_dal import ParticipantDAL
from apps.events.exceptions import DrawAlreadyPerformedError
from apps.events.exceptions import DrawNotPerformedError
from apps.events.exceptions import InsufficientParticipantsError
from apps.events.exceptions import NotAllConfirmedError
from apps.events.models import DrawPair
from apps.events.services.derangement import generate_derangement
from apps.events.services.derangement import validate_derangement
from apps.events.services.event_service import EventService
from apps.shared.exceptions import ConcurrentModificationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DrawResult:
    pairs: list[DrawPair]
    draw_date: datetime


class DrawService:
    """
    Runs an event's secret friend draw exactly once.

    The event row is locked for the precondition checks, the assignment and
    the writes. The latch itself is flipped with a conditional update on the
    roster version that was read, and the pairs are written in the same
    transaction, so a failure leaves neither behind.
    """

    def __init__(
        self,
        dal: EventDAL = None,
        participant_dal: ParticipantDAL = None,
        pair_dal: DrawPairDAL = None,
        rng: Random = None,
        max_attempts: int = None,
        clock=None,
    ):
        self.dal = dal or EventDAL()
        self.participant_dal = participant_dal or ParticipantDAL()
        self.pair_dal = pair_dal or DrawPairDAL()
        self.rng = rng or secrets.SystemRandom()
        self.max_attempts = max_attempts if max_attempts is not None else settings.DRAW_MAX_SHUFFLE_ATTEMPTS
        self.clock = clock or timezone.now

    def perform_draw(self, event_uuid, user=None) -> DrawResult:
        """
        Raises:
            DrawAlreadyPerformedError: the latch is already set
            InsufficientParticipantsError: fewer than two participants
            NotAllConfirmedError: someone has not confirmed yet
            ConcurrentModificationError: the roster changed under the draw twice
        """
        for attempt in range(2):
            try:
                return self._draw_once(event_uuid, user)
            except ConcurrentModificationError:
                if attempt:
                    logger.error(f'Draw for event {event_uuid} lost against roster changes twice')
                    raise
                logger.info(f'Roster of event {event_uuid} changed during the draw, retrying')

    @transaction.atomic
    def _draw_once(self, event_uuid, user) -> DrawResult:
        event = self.dal.get_event_for_update(event_uuid)
        if user is not None:
            EventService.check_organizer(event, user, 'draw')

        if event.draw_performed:
            logger.warning(f'Second draw refused for event {event_uuid}')
            raise DrawAlreadyPerformedError(str(event_uuid))

        participants = list(self.participant_dal.get_event_participants(event))
        if len(participants) < 2:
            raise InsufficientParticipantsError(len(participants))

        pending = [p.pk for p in participants if not p.confirmed]
        if pending:
            raise NotAllConfirmedError(pending)

        ids = [p.pk for p in participants]
        assignment = generate_derangement(ids, rng=self.rng, max_attempts=self.max_attempts)
        validate_derangement(ids, assignment)

        draw_date = self.clock()
        if not self.dal.mark_drawn(event, event.roster_version, draw_date):
            current = self.dal.get_event_by_uuid(event_uuid)
            if current.draw_performed:
                raise DrawAlreadyPerformedError(str(event_uuid))
            raise ConcurrentModificationError('Event roster', str(event_uuid))

        pairs = self.pair_dal.create_pairs(event, assignment)

        logger.info(f'Draw performed for event {event_uuid} with {len(pairs)} participants')
        return DrawResult(pairs=pairs, draw_date=draw_date)

    def get_draw_results(self, event_uuid, user=None) -> DrawResult:
        event = self.dal.get_event_by_uuid(event_uuid)
        if user is not None:
            EventService.check_organizer(event, user, 'view_draw')

        if not event.draw_performed:
            raise DrawNotPerformedError(str(event_uuid))

        return DrawResult(pairs=list(self.pair_dal.get_pairs(event)), draw_date=event.draw_date)
