from django.contrib.auth import get_user_model
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from . import services
from .serializers import (
    AddressSerializer,
    LoginSerializer,
    SignUpSerializer,
    UserSerializer,
)

User = get_user_model()


def ensure_self_or_staff(request, user_id):
    if request.user.is_staff or str(request.user.pk) == str(user_id):
        return
    raise PermissionDenied("You can only access your own records.")


class SignUpView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = SignUpSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)


class LoginView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user, token = services.login(
            serializer.validated_data["username"],
            serializer.validated_data["password"],
            request=request,
        )
        return Response(services.token_response(token, user_id=user.pk))


class UserDetailView(APIView):
    def get(self, request, user_id):
        ensure_self_or_staff(request, user_id)
        user = get_object_or_404(User, pk=user_id)
        return Response(UserSerializer(user).data)


class UserAddressView(APIView):
    def get(self, request, user_id):
        ensure_self_or_staff(request, user_id)
        user = get_object_or_404(User, pk=user_id)
        serializer = AddressSerializer(user.addresses.all(), many=True)
        return Response(serializer.data)

    def post(self, request, user_id):
        ensure_self_or_staff(request, user_id)
        user = get_object_or_404(User, pk=user_id)
        serializer = AddressSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        address = serializer.save(user=user)
        if address.is_default or not user.addresses.exclude(pk=address.pk).exists():
            services.set_default_address(address)
        return Response(AddressSerializer(address).data, status=status.HTTP_201_CREATED)
