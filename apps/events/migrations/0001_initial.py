import uuid

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations
from django.db import models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Event',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                (
                    'event_uuid',
                    models.UUIDField(db_index=True, default=uuid.uuid4, editable=False, unique=True, verbose_name='Event UUID'),
                ),
                ('title', models.CharField(max_length=200, verbose_name='Title')),
                ('description', models.TextField(blank=True, default='', verbose_name='Description')),
                ('date', models.DateField(verbose_name='Event Date')),
                (
                    'min_value',
                    models.DecimalField(
                        decimal_places=2,
                        default=0,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(0)],
                        verbose_name='Minimum Gift Value',
                    ),
                ),
                (
                    'max_value',
                    models.DecimalField(
                        decimal_places=2,
                        default=0,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(0)],
                        verbose_name='Maximum Gift Value',
                    ),
                ),
                ('draw_performed', models.BooleanField(default=False, verbose_name='Draw Performed')),
                ('draw_date', models.DateTimeField(blank=True, null=True, verbose_name='Draw Date')),
                ('roster_version', models.PositiveIntegerField(default=0, verbose_name='Roster Version')),
                (
                    'organizer',
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name='organized_events',
                        to=settings.AUTH_USER_MODEL,
                        verbose_name='Organizer',
                    ),
                ),
            ],
            options={
                'verbose_name': 'Event',
                'verbose_name_plural': 'Events',
                'db_table': 'events_event',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['organizer', '-created_at'], name='event_organizer_created_idx')],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(min_value__gte=0), name='event_min_value_non_negative'),
                    models.CheckConstraint(
                        condition=models.Q(min_value__lte=models.F('max_value')),
                        name='event_min_value_lte_max_value',
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name='Participant',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('name', models.CharField(max_length=100, verbose_name='Name')),
                (
                    'whatsapp_number',
                    models.CharField(
                        blank=True,
                        default='',
                        help_text='Normalized digits: area code and number',
                        max_length=11,
                        verbose_name='WhatsApp Number',
                    ),
                ),
                ('confirmed', models.BooleanField(default=False, verbose_name='Confirmed')),
                ('confirmed_at', models.DateTimeField(blank=True, null=True, verbose_name='Confirmed At')),
                (
                    'gift_suggestion',
                    models.TextField(blank=True, default='', max_length=500, verbose_name='Gift Suggestion'),
                ),
                (
                    'event',
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name='participants',
                        to='events.event',
                        verbose_name='Event',
                    ),
                ),
            ],
            options={
                'verbose_name': 'Participant',
                'verbose_name_plural': 'Participants',
                'db_table': 'events_participant',
                'ordering': ['name', 'id'],
                'indexes': [models.Index(fields=['event', 'confirmed'], name='participant_event_conf_idx')],
                'constraints': [
                    models.UniqueConstraint(
                        condition=models.Q(('whatsapp_number', ''), _negated=True),
                        fields=('event', 'whatsapp_number'),
                        name='unique_participant_whatsapp_per_event',
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name='DrawPair',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                (
                    'event',
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name='draw_pairs',
                        to='events.event',
                        verbose_name='Event',
                    ),
                ),
                (
                    'giver',
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name='gives_to',
                        to='events.participant',
                        verbose_name='Giver',
                    ),
                ),
                (
                    'receiver',
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name='receives_from',
                        to='events.participant',
                        verbose_name='Receiver',
                    ),
                ),
            ],
            options={
                'verbose_name': 'Draw Pair',
                'verbose_name_plural': 'Draw Pairs',
                'db_table': 'events_draw_pair',
                'ordering': ['giver__name', 'giver_id'],
                'constraints': [
                    models.UniqueConstraint(fields=('event', 'giver'), name='unique_draw_giver_per_event'),
                    models.UniqueConstraint(fields=('event', 'receiver'), name='unique_draw_receiver_per_event'),
                    models.CheckConstraint(
                        condition=models.Q(('giver', models.F('receiver')), _negated=True),
                        name='draw_pair_giver_is_not_receiver',
                    ),
                ],
            },
        ),
    ]
