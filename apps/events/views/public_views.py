import logging

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.response import Response

from apps.events.serializers import GiftSuggestionSerializer
from apps.events.serializers import ParticipantQuerySerializer
from apps.events.serializers import PublicEventSerializer
from apps.events.serializers import PublicParticipantSerializer
from apps.events.serializers import WhatsAppCodeRequestSerializer
from apps.events.serializers import WhatsAppCodeVerifySerializer
from apps.shared.base.base_api_view import PublicAPIView
from apps.shared.container import get_event_service
from apps.shared.container import get_participant_service
from apps.shared.container import get_phone_confirmation_service

logger = logging.getLogger(__name__)


class BasePublicEventAPIView(PublicAPIView):
    """Pages a participant reaches through the link the organizer shares"""

    def get_service(self):
        return get_participant_service()

    def get_event(self, event_uuid):
        return get_event_service().get_public_event(event_uuid)


@extend_schema(tags=['Public'])
class PublicEventAPIView(BasePublicEventAPIView):
    @extend_schema(responses={200: PublicEventSerializer})
    def get(self, request, event_uuid):
        return Response(PublicEventSerializer(self.get_event(event_uuid)).data, status=status.HTTP_200_OK)


@extend_schema(tags=['Public'])
class PublicParticipantListAPIView(BasePublicEventAPIView):
    @extend_schema(parameters=[ParticipantQuerySerializer], responses={200: PublicParticipantSerializer(many=True)})
    def get(self, request, event_uuid):
        query_serializer = ParticipantQuerySerializer(data=request.query_params)
        query_serializer.is_valid(raise_exception=True)

        event = self.get_event(event_uuid)
        participants = self.get_service().list_participants(event, query_serializer.validated_data['confirmed'])

        return Response(
            {'participants': PublicParticipantSerializer(participants, many=True).data, 'count': len(participants)},
            status=status.HTTP_200_OK,
        )


@extend_schema(tags=['Public'])
class SendWhatsAppCodeAPIView(BasePublicEventAPIView):
    """Send a confirmation code to the number a participant claims"""

    def get_service(self):
        return get_phone_confirmation_service()

    @extend_schema(request=WhatsAppCodeRequestSerializer, responses={200: None, 429: None})
    def post(self, request, event_uuid, participant_id):
        serializer = WhatsAppCodeRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = self.get_service().send_code(event_uuid, participant_id, serializer.validated_data['whatsapp_number'])

        response_status = status.HTTP_200_OK if result.issued else status.HTTP_429_TOO_MANY_REQUESTS
        response = Response(result.to_dict(), status=response_status)
        if result.retry_after_seconds:
            response['Retry-After'] = str(result.retry_after_seconds)
        return response


@extend_schema(tags=['Public'])
class VerifyWhatsAppCodeAPIView(BasePublicEventAPIView):
    """Confirm a participant once the WhatsApp code matches"""

    def get_service(self):
        return get_phone_confirmation_service()

    @extend_schema(request=WhatsAppCodeVerifySerializer, responses={200: PublicParticipantSerializer, 400: None})
    def post(self, request, event_uuid, participant_id):
        serializer = WhatsAppCodeVerifySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        service = self.get_service()
        result = service.verify_code(
            event_uuid,
            participant_id,
            serializer.validated_data['whatsapp_number'],
            serializer.validated_data['code'],
        )

        if not result.success:
            return Response(result.to_dict(), status=status.HTTP_400_BAD_REQUEST)

        event = self.get_event(event_uuid)
        participant = get_participant_service().get_participant(event, participant_id)

        data = result.to_dict()
        data['participant'] = PublicParticipantSerializer(participant).data
        return Response(data, status=status.HTTP_200_OK)


@extend_schema(tags=['Public'])
class GiftSuggestionAPIView(BasePublicEventAPIView):
    """Confirmed participants leave a hint for whoever draws them"""

    @extend_schema(request=GiftSuggestionSerializer, responses={200: PublicParticipantSerializer})
    def put(self, request, event_uuid, participant_id):
        serializer = GiftSuggestionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        event = self.get_event(event_uuid)
        participant = self.get_service().update_gift_suggestion(
            event, participant_id, serializer.validated_data['gift_suggestion']
        )
        return Response(PublicParticipantSerializer(participant).data, status=status.HTTP_200_OK)
