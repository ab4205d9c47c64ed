from unittest.mock import Mock
from unittest.mock import patch

from django.test import TestCase
from django.test import override_settings

from apps.events.tasks import send_gift_suggestion_reminder_task
from apps.events.tests.factories import ConfirmedParticipantFactory
from apps.events.tests.factories import EventFactory
from apps.events.tests.factories import ParticipantFactory


@override_settings(FRONTEND_URL='https://amigo.test/')
class GiftSuggestionReminderTaskTest(TestCase):
    def setUp(self):
        self.event = EventFactory()
        self.first = ConfirmedParticipantFactory(event=self.event, whatsapp_number='11911111111')
        self.second = ConfirmedParticipantFactory(event=self.event, whatsapp_number='11922222222')
        ParticipantFactory(event=self.event)

    @patch('apps.verification.whatsapp.requests.post')
    def test_messages_every_participant_with_a_number(self, post):
        post.return_value = Mock(status_code=200, content=b'')

        result = send_gift_suggestion_reminder_task(self.event.id)

        self.assertEqual(result, {'status': 'success', 'sent': 2, 'failed': 0})
        recipients = {call.kwargs['json']['to'] for call in post.call_args_list}
        self.assertEqual(recipients, {'5511911111111', '5511922222222'})
        body = post.call_args.kwargs['json']['text']['body']
        self.assertIn(f'https://amigo.test/events/{self.event.event_uuid}/gift', body)

    @patch('apps.verification.whatsapp.requests.post')
    def test_one_failure_does_not_stop_the_rest(self, post):
        post.side_effect = [Mock(status_code=500, text='boom'), Mock(status_code=200, content=b'')]

        result = send_gift_suggestion_reminder_task(self.event.id)

        self.assertEqual(result, {'status': 'success', 'sent': 1, 'failed': 1})
