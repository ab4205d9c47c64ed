from django.test import TestCase

from apps.events.exceptions import EventLockedError
from apps.events.exceptions import ParticipantAlreadyConfirmedError
from apps.events.exceptions import WhatsAppNumberInUseError
from apps.events.services import PhoneConfirmationService
from apps.events.tests.factories import ConfirmedParticipantFactory
from apps.events.tests.factories import EventFactory
from apps.events.tests.factories import ParticipantFactory
from apps.verification.choices import Channel
from apps.verification.delivery import RecordingCodeDelivery
from apps.verification.results import VerifyFailure
from apps.verification.services import CodeIssuer
from apps.verification.services import CodeVerifier
from apps.verification.stores import InMemoryCodeStore
from apps.verification.tests.utils import FakeClock
from apps.verification.tests.utils import wrong_code

NUMBER = '(11) 98765-4321'


class PhoneConfirmationServiceTest(TestCase):
    def setUp(self):
        self.event = EventFactory()
        self.participant = ParticipantFactory(event=self.event)

        self.store = InMemoryCodeStore()
        self.delivery = RecordingCodeDelivery()
        self.service = PhoneConfirmationService(
            issuer=CodeIssuer(store=self.store, delivery=self.delivery),
            verifier=CodeVerifier(store=self.store),
        )

    def send(self, participant=None, number=NUMBER):
        participant = participant or self.participant
        return self.service.send_code(self.event.event_uuid, participant.pk, number)

    def verify(self, code, participant=None, number=NUMBER):
        participant = participant or self.participant
        return self.service.verify_code(self.event.event_uuid, participant.pk, number, code)

    def test_code_goes_to_the_normalized_number(self):
        result = self.send()

        self.assertTrue(result.issued)
        identifier, channel, _ = self.delivery.sent[0]
        self.assertEqual(identifier, '11987654321')
        self.assertEqual(channel, Channel.WHATSAPP.value)

    def test_correct_code_confirms_participant(self):
        self.send()

        result = self.verify(self.delivery.last_code())

        self.assertTrue(result.success)
        self.participant.refresh_from_db()
        self.assertTrue(self.participant.confirmed)
        self.assertIsNotNone(self.participant.confirmed_at)
        self.assertEqual(self.participant.whatsapp_number, '11987654321')

    def test_wrong_code_leaves_participant_unconfirmed(self):
        self.send()

        result = self.verify(wrong_code(self.delivery.last_code()))

        self.assertFalse(result.success)
        self.assertEqual(result.reason, VerifyFailure.INVALID_CODE)
        self.participant.refresh_from_db()
        self.assertFalse(self.participant.confirmed)

    def test_code_is_bound_to_the_participant_it_was_sent_for(self):
        other = ParticipantFactory(event=self.event)
        self.send()

        result = self.verify(self.delivery.last_code(), participant=other)

        self.assertEqual(result.reason, VerifyFailure.NOT_FOUND)
        other.refresh_from_db()
        self.assertFalse(other.confirmed)

        # The code was not spent by the mismatched attempt
        self.assertTrue(self.verify(self.delivery.last_code()).success)

    def test_second_request_within_cooldown_is_rate_limited(self):
        self.send()

        result = self.send()

        self.assertFalse(result.issued)
        self.assertGreater(result.retry_after_seconds, 0)
        self.assertEqual(len(self.delivery.sent), 1)

    def test_already_confirmed_participant(self):
        confirmed = ConfirmedParticipantFactory(event=self.event)

        with self.assertRaises(ParticipantAlreadyConfirmedError):
            self.send(participant=confirmed)

    def test_number_held_by_another_participant(self):
        ConfirmedParticipantFactory(event=self.event, whatsapp_number='11987654321')

        with self.assertRaises(WhatsAppNumberInUseError):
            self.send()

        self.assertEqual(self.delivery.sent, [])

    def test_drawn_event_is_locked(self):
        self.event.draw_performed = True
        self.event.save(update_fields=['draw_performed'])

        with self.assertRaises(EventLockedError):
            self.send()


class SharedNumberAcrossEventsTest(TestCase):
    """One live phone code per number, whichever event asked for it"""

    def setUp(self):
        self.first = ParticipantFactory(event=EventFactory())
        self.second = ParticipantFactory(event=EventFactory())

        self.clock = FakeClock()
        self.store = InMemoryCodeStore()
        self.delivery = RecordingCodeDelivery()
        self.service = PhoneConfirmationService(
            issuer=CodeIssuer(store=self.store, delivery=self.delivery, cooldown_seconds=30, clock=self.clock),
            verifier=CodeVerifier(store=self.store, clock=self.clock),
        )

    def send(self, participant):
        return self.service.send_code(participant.event.event_uuid, participant.pk, NUMBER)

    def verify(self, participant, code):
        return self.service.verify_code(participant.event.event_uuid, participant.pk, NUMBER, code)

    def test_cooldown_is_shared_between_events(self):
        self.send(self.first)

        result = self.send(self.second)

        self.assertFalse(result.issued)
        self.assertEqual(len(self.delivery.sent), 1)
        self.assertTrue(self.verify(self.first, self.delivery.last_code()).success)

    def test_later_event_supersedes_the_earlier_code(self):
        self.send(self.first)
        first_code = self.delivery.last_code()
        self.clock.advance(31)

        self.assertTrue(self.send(self.second).issued)

        self.assertEqual(self.verify(self.first, first_code).reason, VerifyFailure.NOT_FOUND)
        self.assertTrue(self.verify(self.second, self.delivery.last_code()).success)
