from django.db import migrations
from django.db import models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='VerificationCode',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('identifier', models.CharField(max_length=254, verbose_name='Identifier')),
                (
                    'channel',
                    models.CharField(
                        choices=[('email', 'Email'), ('whatsapp', 'WhatsApp')],
                        max_length=10,
                        verbose_name='Channel',
                    ),
                ),
                (
                    'purpose',
                    models.CharField(
                        choices=[('login', 'Organizer login'), ('phone-verify', 'Participant phone verification')],
                        max_length=20,
                        verbose_name='Purpose',
                    ),
                ),
                ('code_hash', models.CharField(max_length=64, verbose_name='Code Hash')),
                (
                    'subject',
                    models.CharField(
                        blank=True,
                        default='',
                        help_text='Opaque reference the code was issued for, e.g. a participant id',
                        max_length=64,
                        verbose_name='Subject',
                    ),
                ),
                ('issued_at', models.DateTimeField(verbose_name='Issued At')),
                ('expires_at', models.DateTimeField(db_index=True, verbose_name='Expires At')),
                ('consumed', models.BooleanField(default=False, verbose_name='Consumed')),
                ('attempts', models.PositiveSmallIntegerField(default=0, verbose_name='Failed Attempts')),
                ('version', models.PositiveIntegerField(default=1, verbose_name='Version')),
            ],
            options={
                'verbose_name': 'Verification Code',
                'verbose_name_plural': 'Verification Codes',
                'db_table': 'verification_code',
                'constraints': [
                    models.UniqueConstraint(
                        fields=('identifier', 'channel', 'purpose'),
                        name='unique_verification_code_per_key',
                    )
                ],
            },
        ),
    ]
