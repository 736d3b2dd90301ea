from django.http import Http404
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.accounts.views import ensure_self_or_staff

from . import services
from .models import Order
from .serializers import OrderCreateSerializer, OrderSerializer, OrderStatusSerializer


class OrderViewSet(viewsets.GenericViewSet):
    serializer_class = OrderSerializer
    lookup_url_kwarg = "order_id"

    def get_queryset(self):
        user = self.request.user
        queryset = Order.objects.select_related("rider").prefetch_related("items")
        if user.is_staff:
            return queryset
        if hasattr(user, "rider_profile"):
            return queryset.filter(rider__user=user) | queryset.filter(
                status=Order.STATUS_ACCEPTED, rider__isnull=True
            )
        return queryset.filter(user=user)

    def list(self, request):
        queryset = self.get_queryset()
        if hasattr(request.user, "rider_profile") and not request.user.is_staff:
            # riders browse orders waiting for a rider
            queryset = queryset.filter(status=Order.STATUS_ACCEPTED, rider__isnull=True)
        status_param = request.query_params.get("status")
        if status_param:
            statuses = [s.strip().upper() for s in status_param.split(",") if s.strip()]
            queryset = queryset.filter(status__in=statuses)
        return Response(self.get_serializer(queryset, many=True).data)

    def create(self, request):
        serializer = OrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = services.create_order(
            request.user,
            serializer.validated_data["items"],
            delivery_address=serializer.validated_data.get("delivery_address_id"),
            special_instructions=serializer.validated_data["special_instructions"],
        )
        return Response(self.get_serializer(order).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, order_id=None):
        return Response(self.get_serializer(self.get_object()).data)

    @action(detail=False, methods=["get"])
    def latest(self, request):
        order = Order.objects.filter(user=request.user).order_by("-created_at").first()
        if order is None:
            raise Http404("No orders yet.")
        return Response(self.get_serializer(order).data)

    @action(detail=True, methods=["put"], url_path="update_status")
    def update_status(self, request, order_id=None):
        order = self.get_object()
        serializer = OrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = services.update_order_status(
            order.pk,
            serializer.validated_data["status"],
            request.user,
            rider_id=serializer.validated_data.get("rider_id"),
        )
        return Response(self.get_serializer(order).data)


class UserOrdersView(APIView):
    def get(self, request, user_id):
        ensure_self_or_staff(request, user_id)
        orders = Order.objects.filter(user_id=user_id).prefetch_related("items")
        return Response(OrderSerializer(orders.select_related("rider"), many=True).data)
