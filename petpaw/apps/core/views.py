import logging

from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from infrastructure.cache import check_cache_connection
from infrastructure.database import check_database_connection

logger = logging.getLogger(__name__)


class HealthCheckView(APIView):
    """Basic liveness endpoint"""

    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request):
        return Response(
            {"status": "healthy", "service": "petpaw"},
            status=status.HTTP_200_OK,
        )


class ReadinessCheckView(APIView):
    """Readiness check - verifies database and cache"""

    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request):
        checks = {
            "database": self._check(check_database_connection),
            "cache": self._check(check_cache_connection),
        }

        all_healthy = all(checks.values())

        return Response(
            {"status": "ready" if all_healthy else "not_ready", "checks": checks},
            status=status.HTTP_200_OK
            if all_healthy
            else status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    def _check(self, probe):
        try:
            return bool(probe())
        except ValueError as e:
            logger.warning(f"Readiness probe {probe.__name__} failed: {e}")
            return False
