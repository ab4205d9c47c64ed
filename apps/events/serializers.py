from rest_framework import serializers

from apps.events.models import DrawPair
from apps.events.models import Event
from apps.events.models import Participant
from apps.events.models.participant import GIFT_SUGGESTION_MAX_LENGTH

# =============================================================================
# Events
# =============================================================================


class EventSerializer(serializers.ModelSerializer):
    """Organizer view of an event"""

    participant_count = serializers.SerializerMethodField()
    confirmed_count = serializers.SerializerMethodField()

    class Meta:
        model = Event
        fields = [
            'event_uuid',
            'title',
            'description',
            'date',
            'min_value',
            'max_value',
            'draw_performed',
            'draw_date',
            'participant_count',
            'confirmed_count',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_participant_count(self, obj) -> int:
        count = getattr(obj, 'participant_count', None)
        return count if count is not None else obj.participants.count()

    def get_confirmed_count(self, obj) -> int:
        count = getattr(obj, 'confirmed_count', None)
        return count if count is not None else obj.participants.confirmed().count()


class EventWriteSerializer(serializers.ModelSerializer):
    """Create / update payload"""

    class Meta:
        model = Event
        fields = ['title', 'description', 'date', 'min_value', 'max_value']
        extra_kwargs = {
            'description': {'required': False, 'allow_blank': True},
            'min_value': {'min_value': 0},
            'max_value': {'min_value': 0},
        }

    def validate_title(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Title cannot be blank.')
        return value

    def validate(self, attrs):
        min_value = attrs.get('min_value')
        max_value = attrs.get('max_value')
        if min_value is not None and max_value is not None and min_value > max_value:
            raise serializers.ValidationError({'min_value': 'Must be less than or equal to max_value.'})
        return attrs


class EventListQuerySerializer(serializers.Serializer):
    page = serializers.IntegerField(required=False, min_value=1, default=1)
    page_size = serializers.IntegerField(required=False, min_value=1, max_value=100, default=20)


class PublicEventSerializer(serializers.ModelSerializer):
    """What a participant sees through the shared link"""

    class Meta:
        model = Event
        fields = ['event_uuid', 'title', 'description', 'date', 'min_value', 'max_value', 'draw_performed', 'draw_date']
        read_only_fields = fields


# =============================================================================
# Participants
# =============================================================================


class ParticipantSerializer(serializers.ModelSerializer):
    class Meta:
        model = Participant
        fields = ['id', 'name', 'whatsapp_number', 'confirmed', 'confirmed_at', 'gift_suggestion', 'created_at']
        read_only_fields = fields


class PublicParticipantSerializer(serializers.ModelSerializer):
    class Meta:
        model = Participant
        fields = ['id', 'name', 'confirmed', 'gift_suggestion']
        read_only_fields = fields


class ParticipantCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    whatsapp_number = serializers.CharField(max_length=32, required=False, allow_blank=True)


class ParticipantUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100, required=False)
    whatsapp_number = serializers.CharField(max_length=32, required=False, allow_blank=True)
    confirmed = serializers.BooleanField(required=False)


class ParticipantQuerySerializer(serializers.Serializer):
    confirmed = serializers.BooleanField(required=False, allow_null=True, default=None)


class WhatsAppCodeRequestSerializer(serializers.Serializer):
    whatsapp_number = serializers.CharField(max_length=32)


class WhatsAppCodeVerifySerializer(serializers.Serializer):
    whatsapp_number = serializers.CharField(max_length=32)
    code = serializers.CharField(max_length=12)


class GiftSuggestionSerializer(serializers.Serializer):
    gift_suggestion = serializers.CharField(max_length=GIFT_SUGGESTION_MAX_LENGTH, allow_blank=True)


# =============================================================================
# Draw
# =============================================================================


class DrawPairSerializer(serializers.ModelSerializer):
    giver_id = serializers.IntegerField(read_only=True)
    giver_name = serializers.CharField(source='giver.name', read_only=True)
    receiver_id = serializers.IntegerField(read_only=True)
    receiver_name = serializers.CharField(source='receiver.name', read_only=True)

    class Meta:
        model = DrawPair
        fields = ['giver_id', 'giver_name', 'receiver_id', 'receiver_name']


class DrawResultSerializer(serializers.Serializer):
    draw_date = serializers.DateTimeField()
    pairs = DrawPairSerializer(many=True)
