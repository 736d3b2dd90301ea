from django.urls import path

from .views import TrackingSnapshotView

app_name = "tracking"

urlpatterns = [
    path(
        "tracking/<str:kind>/<uuid:subject_id>",
        TrackingSnapshotView.as_view(),
        name="snapshot",
    ),
]
