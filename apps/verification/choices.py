from django.db import models
from django.utils.translation import gettext_lazy as _


class Channel(models.TextChoices):
    EMAIL = 'email', _('Email')
    WHATSAPP = 'whatsapp', _('WhatsApp')


class Purpose(models.TextChoices):
    LOGIN = 'login', _('Organizer login')
    PHONE_VERIFY = 'phone-verify', _('Participant phone verification')
