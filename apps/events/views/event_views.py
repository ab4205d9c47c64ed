import logging

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.events.serializers import EventListQuerySerializer
from apps.events.serializers import EventSerializer
from apps.events.serializers import EventWriteSerializer
from apps.shared.base.base_api_view import BaseAPIView
from apps.shared.container import get_event_service

logger = logging.getLogger(__name__)


class BaseEventAPIView(BaseAPIView):
    """Base view for organizer event operations"""

    permission_classes = [IsAuthenticated]

    _event_service = None

    def get_service(self):
        return self.get_event_service()

    def get_event_service(self):
        if self._event_service is None:
            self._event_service = get_event_service()
        return self._event_service


@extend_schema(tags=['Events'])
class EventListCreateAPIView(BaseEventAPIView):
    """List the organizer's events or create a new one"""

    @extend_schema(parameters=[EventListQuerySerializer], responses={200: EventSerializer(many=True)})
    def get(self, request):
        query_serializer = EventListQuerySerializer(data=request.query_params)
        query_serializer.is_valid(raise_exception=True)

        events_data = self.get_event_service().list_events(
            user=request.user,
            page=query_serializer.validated_data['page'],
            page_size=query_serializer.validated_data['page_size'],
        )

        response_data = {
            'events': EventSerializer(events_data['events'], many=True).data,
            'pagination': events_data['pagination'],
        }
        return Response(response_data, status=status.HTTP_200_OK)

    @extend_schema(request=EventWriteSerializer, responses={201: EventSerializer})
    def post(self, request):
        serializer = EventWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        event = self.get_event_service().create_event(request.user, serializer.validated_data)
        return Response(EventSerializer(event).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=['Events'])
class EventDetailAPIView(BaseEventAPIView):
    """Retrieve, update or delete an event"""

    @extend_schema(responses={200: EventSerializer})
    def get(self, request, event_uuid):
        event = self.get_event_service().get_event(event_uuid, request.user)
        return Response(EventSerializer(event).data, status=status.HTTP_200_OK)

    @extend_schema(request=EventWriteSerializer, responses={200: EventSerializer})
    def put(self, request, event_uuid):
        serializer = EventWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        event = self.get_event_service().update_event(event_uuid, request.user, serializer.validated_data)
        return Response(EventSerializer(event).data, status=status.HTTP_200_OK)

    @extend_schema(responses={204: None})
    def delete(self, request, event_uuid):
        self.get_event_service().delete_event(event_uuid, request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(tags=['Events'])
class SuggestionReminderAPIView(BaseEventAPIView):
    """Remind participants over WhatsApp to leave a gift suggestion"""

    @extend_schema(request=None, responses={202: None})
    def post(self, request, event_uuid):
        recipients = self.get_event_service().send_gift_suggestion_reminder(event_uuid, request.user)
        return Response({'queued': recipients > 0, 'recipients': recipients}, status=status.HTTP_202_ACCEPTED)
