import logging

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.response import Response

from apps.events.serializers import ParticipantCreateSerializer
from apps.events.serializers import ParticipantQuerySerializer
from apps.events.serializers import ParticipantSerializer
from apps.events.serializers import ParticipantUpdateSerializer
from apps.events.views.event_views import BaseEventAPIView
from apps.shared.container import get_participant_service

logger = logging.getLogger(__name__)


class BaseParticipantAPIView(BaseEventAPIView):
    """Organizer roster management; the event is resolved and checked first"""

    _participant_service = None

    def get_service(self):
        if self._participant_service is None:
            self._participant_service = get_participant_service()
        return self._participant_service

    def get_event(self, request, event_uuid):
        return self.get_event_service().get_event(event_uuid, request.user)


@extend_schema(tags=['Event Participants'])
class ParticipantListCreateAPIView(BaseParticipantAPIView):
    """List or add participants of an event"""

    @extend_schema(parameters=[ParticipantQuerySerializer], responses={200: ParticipantSerializer(many=True)})
    def get(self, request, event_uuid):
        query_serializer = ParticipantQuerySerializer(data=request.query_params)
        query_serializer.is_valid(raise_exception=True)

        event = self.get_event(request, event_uuid)
        participants = self.get_service().list_participants(event, query_serializer.validated_data['confirmed'])

        return Response(
            {'participants': ParticipantSerializer(participants, many=True).data, 'count': len(participants)},
            status=status.HTTP_200_OK,
        )

    @extend_schema(request=ParticipantCreateSerializer, responses={201: ParticipantSerializer})
    def post(self, request, event_uuid):
        serializer = ParticipantCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        event = self.get_event(request, event_uuid)
        participant = self.get_service().add_participant(
            event,
            name=serializer.validated_data['name'],
            whatsapp_number=serializer.validated_data.get('whatsapp_number'),
        )
        return Response(ParticipantSerializer(participant).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=['Event Participants'])
class ParticipantDetailAPIView(BaseParticipantAPIView):
    """Edit or remove a participant"""

    @extend_schema(request=ParticipantUpdateSerializer, responses={200: ParticipantSerializer})
    def put(self, request, event_uuid, participant_id):
        serializer = ParticipantUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        event = self.get_event(request, event_uuid)
        participant = self.get_service().update_participant(event, participant_id, serializer.validated_data)
        return Response(ParticipantSerializer(participant).data, status=status.HTTP_200_OK)

    @extend_schema(responses={204: None})
    def delete(self, request, event_uuid, participant_id):
        event = self.get_event(request, event_uuid)
        self.get_service().remove_participant(event, participant_id)
        return Response(status=status.HTTP_204_NO_CONTENT)
