from datetime import date
from datetime import timedelta
from decimal import Decimal

import factory
from django.utils import timezone

from apps.accounts.tests.factories import UserFactory
from apps.events.models import Event
from apps.events.models import Participant


class EventFactory(factory.django.DjangoModelFactory):
    """Secret friend event a week from now"""

    class Meta:
        model = Event

    organizer = factory.SubFactory(UserFactory)
    title = factory.Faker('sentence', nb_words=3)
    description = factory.Faker('paragraph', nb_sentences=2)
    date = factory.LazyFunction(lambda: date.today() + timedelta(days=7))
    min_value = Decimal('20.00')
    max_value = Decimal('50.00')


class ParticipantFactory(factory.django.DjangoModelFactory):
    """Participant still waiting to confirm their number"""

    class Meta:
        model = Participant

    event = factory.SubFactory(EventFactory)
    name = factory.Faker('first_name')
    whatsapp_number = ''
    confirmed = False


class ConfirmedParticipantFactory(ParticipantFactory):
    whatsapp_number = factory.Sequence(lambda n: f'119{n:08d}')
    confirmed = True
    confirmed_at = factory.LazyFunction(timezone.now)
