import logging

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.accounts.serializers import IssueResultSerializer
from apps.accounts.serializers import LoginResponseSerializer
from apps.accounts.serializers import LogoutSerializer
from apps.accounts.serializers import RequestCodeSerializer
from apps.accounts.serializers import UserSerializer
from apps.accounts.serializers import VerifyCodeSerializer
from apps.accounts.services import PasswordlessService
from apps.shared.base.base_api_view import BaseAPIView
from apps.shared.container import get_passwordless_service

logger = logging.getLogger(__name__)


class BaseAuthAPIView(BaseAPIView):
    """Base view for authentication operations"""

    def __init__(self, auth_service=None, **kwargs):
        super().__init__(**kwargs)
        self._auth_service = auth_service

    def get_service(self) -> PasswordlessService:
        return self._auth_service or get_passwordless_service()


@extend_schema(tags=['Authentication'])
class RequestCodeView(BaseAuthAPIView):
    """Email a one-time login code to an organizer"""

    authentication_classes = ()
    permission_classes = [AllowAny]

    @extend_schema(request=RequestCodeSerializer, responses={200: IssueResultSerializer, 429: IssueResultSerializer})
    def post(self, request):
        serializer = RequestCodeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = self.get_service().request_code(serializer.validated_data['email'])

        response_status = status.HTTP_200_OK if result.issued else status.HTTP_429_TOO_MANY_REQUESTS
        response = Response(result.to_dict(), status=response_status)
        if result.retry_after_seconds:
            response['Retry-After'] = str(result.retry_after_seconds)
        return response


@extend_schema(tags=['Authentication'])
class VerifyCodeView(BaseAuthAPIView):
    """Exchange a login code for a JWT session"""

    authentication_classes = ()
    permission_classes = [AllowAny]

    @extend_schema(request=VerifyCodeSerializer, responses={200: LoginResponseSerializer, 400: LoginResponseSerializer})
    def post(self, request):
        serializer = VerifyCodeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        service = self.get_service()
        result = service.verify_code(
            email=serializer.validated_data['email'],
            code=serializer.validated_data['code'],
        )

        if not result.success:
            return Response(result.to_dict(), status=status.HTTP_400_BAD_REQUEST)

        data = result.to_dict()
        data['user'] = UserSerializer(service.get_user(result.identifier)).data
        return Response(data, status=status.HTTP_200_OK)


@extend_schema(tags=['Authentication'])
class LogoutView(BaseAuthAPIView):
    """Logout user and blacklist refresh token"""

    permission_classes = [IsAuthenticated]

    @extend_schema(request=LogoutSerializer, responses={205: None})
    def post(self, request):
        serializer = LogoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        self.get_service().logout(serializer.validated_data['refresh'])

        logger.info(f'User {request.user.id} logged out')
        return Response(status=status.HTTP_205_RESET_CONTENT)
