from django.test import TestCase

from apps.events.exceptions import EventLockedError
from apps.events.exceptions import ParticipantNotConfirmedError
from apps.events.exceptions import ParticipantNotFoundError
from apps.events.exceptions import WhatsAppNumberInUseError
from apps.events.models import Event
from apps.events.services import ParticipantService
from apps.events.tests.factories import ConfirmedParticipantFactory
from apps.events.tests.factories import EventFactory
from apps.events.tests.factories import ParticipantFactory
from apps.verification.exceptions import InvalidIdentifierError


class ParticipantServiceTest(TestCase):
    def setUp(self):
        self.event = EventFactory()
        self.service = ParticipantService()

    def roster_version(self):
        return Event.objects.get(pk=self.event.pk).roster_version

    def test_add_participant_normalizes_number_and_bumps_version(self):
        version = self.roster_version()

        participant = self.service.add_participant(self.event, '  Bia ', '(11) 98765-4321')

        self.assertEqual(participant.name, 'Bia')
        self.assertEqual(participant.whatsapp_number, '11987654321')
        self.assertFalse(participant.confirmed)
        self.assertEqual(self.roster_version(), version + 1)

    def test_add_participant_without_number(self):
        participant = self.service.add_participant(self.event, 'Caio')

        self.assertEqual(participant.whatsapp_number, '')

    def test_malformed_number_is_rejected(self):
        with self.assertRaises(InvalidIdentifierError):
            self.service.add_participant(self.event, 'Caio', '123')

    def test_number_is_unique_within_the_event(self):
        ConfirmedParticipantFactory(event=self.event, whatsapp_number='11987654321')

        with self.assertRaises(WhatsAppNumberInUseError):
            self.service.add_participant(self.event, 'Caio', '11 98765 4321')

    def test_same_number_is_fine_in_another_event(self):
        ConfirmedParticipantFactory(whatsapp_number='11987654321')

        participant = self.service.add_participant(self.event, 'Caio', '11987654321')

        self.assertEqual(participant.whatsapp_number, '11987654321')

    def test_list_filters_by_confirmation(self):
        confirmed = ConfirmedParticipantFactory(event=self.event)
        pending = ParticipantFactory(event=self.event)

        self.assertEqual(self.service.list_participants(self.event, confirmed=True), [confirmed])
        self.assertEqual(self.service.list_participants(self.event, confirmed=False), [pending])
        self.assertEqual(len(self.service.list_participants(self.event)), 2)

    def test_participant_of_another_event_is_not_found(self):
        other = ParticipantFactory()

        with self.assertRaises(ParticipantNotFoundError):
            self.service.get_participant(self.event, other.pk)

    def test_set_confirmed_stamps_confirmation_time(self):
        participant = ParticipantFactory(event=self.event)

        updated = self.service.set_confirmed(self.event, participant.pk, True, whatsapp_number='11912345678')

        self.assertTrue(updated.confirmed)
        self.assertIsNotNone(updated.confirmed_at)
        self.assertEqual(updated.whatsapp_number, '11912345678')

    def test_unconfirming_clears_confirmation_time(self):
        participant = ConfirmedParticipantFactory(event=self.event)

        updated = self.service.update_participant(self.event, participant.pk, {'confirmed': False})

        self.assertFalse(updated.confirmed)
        self.assertIsNone(updated.confirmed_at)

    def test_empty_update_leaves_roster_version_alone(self):
        participant = ParticipantFactory(event=self.event)
        version = self.roster_version()

        self.service.update_participant(self.event, participant.pk, {})

        self.assertEqual(self.roster_version(), version)

    def test_remove_participant(self):
        participant = ParticipantFactory(event=self.event)
        version = self.roster_version()

        self.service.remove_participant(self.event, participant.pk)

        self.assertFalse(self.event.participants.exists())
        self.assertEqual(self.roster_version(), version + 1)

    def test_gift_suggestion_requires_confirmation(self):
        participant = ParticipantFactory(event=self.event)

        with self.assertRaises(ParticipantNotConfirmedError):
            self.service.update_gift_suggestion(self.event, participant.pk, 'Livro')

    def test_gift_suggestion_for_confirmed_participant(self):
        participant = ConfirmedParticipantFactory(event=self.event)

        updated = self.service.update_gift_suggestion(self.event, participant.pk, '  Um livro de receitas ')

        self.assertEqual(updated.gift_suggestion, 'Um livro de receitas')


class RosterLockTest(TestCase):
    """Once the draw is performed the roster is frozen"""

    def setUp(self):
        self.event = EventFactory(draw_performed=True)
        self.participant = ConfirmedParticipantFactory(event=self.event)
        self.service = ParticipantService()

    def test_add_is_refused(self):
        with self.assertRaises(EventLockedError):
            self.service.add_participant(self.event, 'Late')

        self.assertEqual(self.event.participants.count(), 1)

    def test_remove_is_refused(self):
        with self.assertRaises(EventLockedError):
            self.service.remove_participant(self.event, self.participant.pk)

        self.assertTrue(self.event.participants.filter(pk=self.participant.pk).exists())

    def test_update_is_refused(self):
        with self.assertRaises(EventLockedError):
            self.service.update_participant(self.event, self.participant.pk, {'name': 'Renamed'})

    def test_confirmation_change_is_refused(self):
        with self.assertRaises(EventLockedError):
            self.service.set_confirmed(self.event, self.participant.pk, False)

    def test_stale_event_instance_still_sees_the_lock(self):
        event = EventFactory()
        stale = Event.objects.get(pk=event.pk)
        Event.objects.filter(pk=event.pk).update(draw_performed=True)

        with self.assertRaises(EventLockedError):
            self.service.add_participant(stale, 'Late')

    def test_gift_suggestion_still_allowed(self):
        updated = self.service.update_gift_suggestion(self.event, self.participant.pk, 'Chocolate')

        self.assertEqual(updated.gift_suggestion, 'Chocolate')
