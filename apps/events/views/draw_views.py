from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.response import Response

from apps.events.serializers import DrawResultSerializer
from apps.events.views.event_views import BaseEventAPIView
from apps.shared.container import get_draw_service


@extend_schema(tags=['Draw'])
class DrawAPIView(BaseEventAPIView):
    """Perform the secret friend draw, or read back its pairs"""

    def get_service(self):
        return get_draw_service()

    @extend_schema(request=None, responses={201: DrawResultSerializer})
    def post(self, request, event_uuid):
        result = self.get_service().perform_draw(event_uuid, user=request.user)
        return Response(DrawResultSerializer(result).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: DrawResultSerializer})
    def get(self, request, event_uuid):
        result = self.get_service().get_draw_results(event_uuid, user=request.user)
        return Response(DrawResultSerializer(result).data, status=status.HTTP_200_OK)
