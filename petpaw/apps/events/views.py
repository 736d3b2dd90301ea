from rest_framework import viewsets
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response

from .models import TrackingEvent
from .serializers import TrackingEventSerializer
from .services import event_service


class TrackingEventViewSet(viewsets.ReadOnlyModelViewSet):
    """Audit trail of ride and order transitions, staff only"""

    serializer_class = TrackingEventSerializer
    permission_classes = [IsAdminUser]
    queryset = TrackingEvent.objects.all()

    def list(self, request):
        subject_type = request.query_params.get("subject_type")
        subject_id = request.query_params.get("subject_id")
        if subject_type and subject_id:
            events = event_service.get_subject_events(subject_type, subject_id)
        else:
            events = self.get_queryset()[:200]
        serializer = self.get_serializer(events, many=True)
        return Response(serializer.data)
