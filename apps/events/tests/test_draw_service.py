import random
from unittest.mock import patch

from django.db.models import F
from django.test import TestCase

from apps.accounts.tests.factories import UserFactory
from apps.events.dal.event_dal import EventDAL
from apps.events.exceptions import DrawAlreadyPerformedError
from apps.events.exceptions import DrawNotPerformedError
from apps.events.exceptions import EventPermissionError
from apps.events.exceptions import InsufficientParticipantsError
from apps.events.exceptions import NotAllConfirmedError
from apps.events.models import DrawPair
from apps.events.models import Event
from apps.events.services import DrawService
from apps.events.tests.factories import ConfirmedParticipantFactory
from apps.events.tests.factories import EventFactory
from apps.events.tests.factories import ParticipantFactory
from apps.shared.exceptions import ConcurrentModificationError

original_mark_drawn = EventDAL.mark_drawn


def bump_roster(event):
    Event.objects.filter(pk=event.pk).update(roster_version=F('roster_version') + 1)


class DrawServiceTest(TestCase):
    def setUp(self):
        self.event = EventFactory()
        self.organizer = self.event.organizer
        self.participants = ConfirmedParticipantFactory.create_batch(5, event=self.event)
        self.service = DrawService(rng=random.Random(7))

    def test_draw_assigns_every_participant_once(self):
        result = self.service.perform_draw(self.event.event_uuid, user=self.organizer)

        ids = {p.pk for p in self.participants}
        self.assertEqual({pair.giver_id for pair in result.pairs}, ids)
        self.assertEqual({pair.receiver_id for pair in result.pairs}, ids)
        self.assertTrue(all(pair.giver_id != pair.receiver_id for pair in result.pairs))
        self.assertEqual(DrawPair.objects.filter(event=self.event).count(), 5)

    def test_draw_sets_the_latch(self):
        result = self.service.perform_draw(self.event.event_uuid, user=self.organizer)

        self.event.refresh_from_db()
        self.assertTrue(self.event.draw_performed)
        self.assertEqual(self.event.draw_date, result.draw_date)

    def test_second_draw_is_refused_and_pairs_are_kept(self):
        first = self.service.perform_draw(self.event.event_uuid, user=self.organizer)
        pairs_before = {(p.giver_id, p.receiver_id) for p in first.pairs}

        with self.assertRaises(DrawAlreadyPerformedError):
            DrawService(rng=random.Random(99)).perform_draw(self.event.event_uuid, user=self.organizer)

        pairs_after = set(DrawPair.objects.filter(event=self.event).values_list('giver_id', 'receiver_id'))
        self.assertEqual(pairs_before, pairs_after)

    def test_fewer_than_two_participants(self):
        event = EventFactory()
        ConfirmedParticipantFactory(event=event)

        with self.assertRaises(InsufficientParticipantsError):
            self.service.perform_draw(event.event_uuid, user=event.organizer)

        event.refresh_from_db()
        self.assertFalse(event.draw_performed)

    def test_empty_roster(self):
        event = EventFactory()

        with self.assertRaises(InsufficientParticipantsError) as ctx:
            self.service.perform_draw(event.event_uuid, user=event.organizer)

        self.assertEqual(ctx.exception.context['participant_count'], 0)

    def test_unconfirmed_participant_blocks_the_draw(self):
        pending = ParticipantFactory(event=self.event)

        with self.assertRaises(NotAllConfirmedError) as ctx:
            self.service.perform_draw(self.event.event_uuid, user=self.organizer)

        self.assertEqual(ctx.exception.context['pending_participant_ids'], [pending.pk])
        self.assertFalse(DrawPair.objects.exists())

    def test_only_the_organizer_can_draw(self):
        with self.assertRaises(EventPermissionError):
            self.service.perform_draw(self.event.event_uuid, user=UserFactory())

        self.event.refresh_from_db()
        self.assertFalse(self.event.draw_performed)

    def test_results_before_the_draw(self):
        with self.assertRaises(DrawNotPerformedError):
            self.service.get_draw_results(self.event.event_uuid, user=self.organizer)

    def test_results_match_the_draw(self):
        drawn = self.service.perform_draw(self.event.event_uuid, user=self.organizer)

        result = self.service.get_draw_results(self.event.event_uuid, user=self.organizer)

        self.assertEqual(
            {(p.giver_id, p.receiver_id) for p in result.pairs},
            {(p.giver_id, p.receiver_id) for p in drawn.pairs},
        )
        self.assertEqual(result.draw_date, drawn.draw_date)

    def test_results_are_organizer_only(self):
        self.service.perform_draw(self.event.event_uuid, user=self.organizer)

        with self.assertRaises(EventPermissionError):
            self.service.get_draw_results(self.event.event_uuid, user=UserFactory())


class DrawConcurrencyTest(TestCase):
    def setUp(self):
        self.event = EventFactory()
        ConfirmedParticipantFactory.create_batch(3, event=self.event)
        self.service = DrawService(rng=random.Random(3))

    def test_roster_change_during_draw_is_retried_once(self):
        calls = []

        def change_roster_first_time(dal, event, expected_version, draw_date):
            calls.append(expected_version)
            if len(calls) == 1:
                bump_roster(event)
            return original_mark_drawn(dal, event, expected_version, draw_date)

        with patch.object(EventDAL, 'mark_drawn', autospec=True, side_effect=change_roster_first_time):
            result = self.service.perform_draw(self.event.event_uuid)

        self.assertEqual(len(calls), 2)
        self.assertEqual(len(result.pairs), 3)
        self.event.refresh_from_db()
        self.assertTrue(self.event.draw_performed)

    def test_roster_changing_every_time_gives_up(self):
        def always_change_roster(dal, event, expected_version, draw_date):
            bump_roster(event)
            return original_mark_drawn(dal, event, expected_version, draw_date)

        with (
            patch.object(EventDAL, 'mark_drawn', autospec=True, side_effect=always_change_roster) as mark_drawn,
            self.assertRaises(ConcurrentModificationError),
        ):
            self.service.perform_draw(self.event.event_uuid)

        self.assertEqual(mark_drawn.call_count, 2)
        self.event.refresh_from_db()
        self.assertFalse(self.event.draw_performed)
        self.assertFalse(DrawPair.objects.exists())

    def test_latch_set_by_another_draw_is_reported_as_already_performed(self):
        stale = Event.objects.get(pk=self.event.pk)
        Event.objects.filter(pk=self.event.pk).update(draw_performed=True)

        with patch.object(EventDAL, 'get_event_for_update', return_value=stale):
            with self.assertRaises(DrawAlreadyPerformedError):
                self.service.perform_draw(self.event.event_uuid)

        self.assertFalse(DrawPair.objects.exists())
