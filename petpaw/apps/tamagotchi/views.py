from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.accounts.views import ensure_self_or_staff

from . import services
from .models import VirtualPet
from .serializers import (
    PetActionSerializer,
    StepsSerializer,
    TrophyCreateSerializer,
    TrophySerializer,
    VirtualPetSerializer,
)


class VirtualPetViewSet(viewsets.ModelViewSet):
    serializer_class = VirtualPetSerializer

    def get_queryset(self):
        if self.request.user.is_staff:
            return VirtualPet.objects.all()
        return VirtualPet.objects.filter(user=self.request.user)

    def perform_create(self, serializer):
        pet = serializer.save(user=self.request.user)
        services.check_trophies(pet)

    @action(detail=True, methods=["get", "post"])
    def trophies(self, request, pk=None):
        pet = self.get_object()
        if request.method == "GET":
            return Response(TrophySerializer(pet.trophies.all(), many=True).data)

        serializer = TrophyCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        trophy = services.add_trophy(pet, serializer.validated_data["name"])
        return Response(TrophySerializer(trophy).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["post"], url_path="check-trophies")
    def check_trophies(self, request, pk=None):
        pet = self.get_object()
        unlocked = services.check_trophies(pet)
        return Response(
            {
                "unlocked": TrophySerializer(unlocked, many=True).data,
                "level": pet.level,
                "trophy_count": pet.trophies.count(),
            }
        )

    @action(detail=True, methods=["post"])
    def update_steps(self, request, pk=None):
        serializer = StepsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        pet = services.add_steps(self.get_object(), serializer.validated_data["steps"])
        return Response({"id": pet.pk, "total_steps": pet.total_steps})

    @action(detail=True, methods=["get"])
    def total_steps(self, request, pk=None):
        pet = self.get_object()
        return Response({"id": pet.pk, "total_steps": pet.total_steps})

    @action(detail=True, methods=["post"])
    def act(self, request, pk=None):
        """feed, play, clean or sleep"""
        serializer = PetActionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        pet = services.perform_action(self.get_object(), serializer.validated_data["action"])
        return Response(VirtualPetSerializer(pet).data)


class UserVirtualPetsView(APIView):
    def get(self, request, user_id):
        ensure_self_or_staff(request, user_id)
        pets = VirtualPet.objects.filter(user_id=user_id)
        return Response(VirtualPetSerializer(pets, many=True).data)
