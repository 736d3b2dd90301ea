from django.urls import path

from .views import OrderViewSet, UserOrdersView

app_name = "orders"

order_list = OrderViewSet.as_view({"get": "list", "post": "create"})
order_detail = OrderViewSet.as_view({"get": "retrieve"})
order_latest = OrderViewSet.as_view({"get": "latest"})
order_status = OrderViewSet.as_view({"put": "update_status"})

urlpatterns = [
    path("orders", order_list, name="order-list"),
    path("orders/", order_list),
    path("orders/latest", order_latest, name="order-latest"),
    path("orders/user/<int:user_id>", UserOrdersView.as_view(), name="user-orders"),
    path("orders/<uuid:order_id>", order_detail, name="order-detail"),
    path("orders/<uuid:order_id>/update_status", order_status, name="order-update-status"),
]
