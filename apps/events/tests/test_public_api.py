from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient

from apps.events.tests.factories import ConfirmedParticipantFactory
from apps.events.tests.factories import EventFactory
from apps.events.tests.factories import ParticipantFactory
from apps.shared.container import get_container
from apps.verification.delivery import RecordingCodeDelivery
from apps.verification.tests.utils import wrong_code

NUMBER = '(11) 98765-4321'


class PublicEventApiTest(TestCase):
    """Participant pages reached without logging in"""

    def setUp(self):
        self.client = APIClient()
        self.event = EventFactory()
        self.participant = ParticipantFactory(event=self.event, name='Bia')

        self.delivery = RecordingCodeDelivery()
        get_container().override_code_delivery(lambda: self.delivery)
        self.addCleanup(get_container().reset_to_defaults)

    def url(self, name, participant=None):
        kwargs = {'event_uuid': self.event.event_uuid}
        if participant is not None:
            kwargs['participant_id'] = participant.pk
        return reverse(f'events:{name}', kwargs=kwargs)

    def send_code(self, number=NUMBER):
        return self.client.post(
            self.url('public-send-whatsapp-code', self.participant), {'whatsapp_number': number}, format='json'
        )

    def verify_code(self, code, number=NUMBER):
        return self.client.post(
            self.url('public-verify-whatsapp-code', self.participant),
            {'whatsapp_number': number, 'code': code},
            format='json',
        )

    def test_public_event_hides_organizer_data(self):
        response = self.client.get(self.url('public-event'))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['title'], self.event.title)
        self.assertNotIn('organizer', response.data)
        self.assertFalse(response.data['draw_performed'])

    def test_public_participants_hide_numbers(self):
        ConfirmedParticipantFactory(event=self.event)

        response = self.client.get(self.url('public-participants'))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['count'], 2)
        self.assertNotIn('whatsapp_number', response.data['participants'][0])

    def test_public_participants_filtered(self):
        ConfirmedParticipantFactory(event=self.event)

        response = self.client.get(self.url('public-participants'), {'confirmed': 'false'})

        self.assertEqual(response.data['count'], 1)
        self.assertEqual(response.data['participants'][0]['name'], 'Bia')

    def test_unknown_event_is_404(self):
        response = self.client.get(
            reverse('events:public-event', kwargs={'event_uuid': '00000000-0000-0000-0000-000000000000'})
        )

        self.assertEqual(response.status_code, 404)

    def test_whatsapp_confirmation_flow(self):
        response = self.send_code()
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data, {'issued': True, 'delivery_failed': False})

        response = self.verify_code(self.delivery.last_code())

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.data['success'])
        self.assertTrue(response.data['participant']['confirmed'])
        self.participant.refresh_from_db()
        self.assertEqual(self.participant.whatsapp_number, '11987654321')

    def test_resend_within_cooldown_is_429(self):
        self.send_code()

        response = self.send_code()

        self.assertEqual(response.status_code, 429)
        self.assertIn('Retry-After', response)

    def test_wrong_code_reports_remaining_attempts(self):
        self.send_code()

        response = self.verify_code(wrong_code(self.delivery.last_code()))

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data, {'success': False, 'reason': 'invalid_code', 'attempts_remaining': 4})

    def test_verify_without_a_code(self):
        response = self.verify_code('123456')

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['reason'], 'not_found')

    def test_delivery_failure_is_reported(self):
        self.delivery.fail_with = 'gateway down'

        response = self.send_code()

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.data['delivery_failed'])

    def test_confirmed_participant_cannot_ask_again(self):
        self.send_code()
        self.verify_code(self.delivery.last_code())

        response = self.send_code()

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.data['error_code'], 'participant_confirmation_failed')

    def test_gift_suggestion_needs_confirmation(self):
        response = self.client.put(
            self.url('public-gift-suggestion', self.participant), {'gift_suggestion': 'Livro'}, format='json'
        )

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.data['error_code'], 'participant_suggestion_failed')

    def test_gift_suggestion_after_the_draw(self):
        confirmed = ConfirmedParticipantFactory(event=self.event)
        self.event.draw_performed = True
        self.event.save(update_fields=['draw_performed'])

        response = self.client.put(
            self.url('public-gift-suggestion', confirmed), {'gift_suggestion': 'Vinho tinto'}, format='json'
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['gift_suggestion'], 'Vinho tinto')
