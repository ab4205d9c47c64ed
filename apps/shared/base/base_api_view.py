from rest_framework.views import APIView
from rest_framework_simplejwt.authentication import JWTAuthentication


class BaseAPIView(APIView):
    """
    Unified base class for the project's API views.

    Features:
    - JWT bearer authentication
    - Service layer integration

    Note: Exception handling is centralized in the DRF exception handler.
    """

    authentication_classes = (JWTAuthentication,)

    def get_service(self):
        """
        Subclasses return the service instance handling their business logic.

        Raises:
            NotImplementedError: If not implemented by subclass
        """
        raise NotImplementedError('Subclasses must implement get_service()')


class PublicAPIView(BaseAPIView):
    """Base class for endpoints reachable without a bearer token."""

    authentication_classes = ()
    permission_classes = ()
