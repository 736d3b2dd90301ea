from django.shortcuts import get_object_or_404
from rest_framework import generics, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.accounts.views import ensure_self_or_staff

from . import services
from .models import DiaryEntry, MedicalRecord, Pet, Prescription, RefillRequest
from .serializers import (
    DiaryEntrySerializer,
    MedicalRecordSerializer,
    PetImageSerializer,
    PetSerializer,
    PrescriptionSerializer,
    RefillDecisionSerializer,
    RefillRequestCreateSerializer,
    RefillRequestSerializer,
)


def owned_pets(user):
    return Pet.objects.all() if user.is_staff else Pet.objects.filter(owner=user)


def get_owned_pet(request, pet_id):
    return get_object_or_404(owned_pets(request.user), pk=pet_id)


class PetViewSet(viewsets.ModelViewSet):
    serializer_class = PetSerializer

    def get_queryset(self):
        return owned_pets(self.request.user)

    def perform_create(self, serializer):
        serializer.save(owner=self.request.user)

    @action(detail=True, methods=["put"], parser_classes=[MultiPartParser, FormParser])
    def image(self, request, pk=None):
        pet = self.get_object()
        serializer = PetImageSerializer(pet, data=request.data)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(PetSerializer(pet).data)


class UserPetsView(APIView):
    def get(self, request, user_id):
        ensure_self_or_staff(request, user_id)
        pets = Pet.objects.filter(owner_id=user_id)
        return Response(PetSerializer(pets, many=True).data)


class PetMedicalRecordsView(generics.ListCreateAPIView):
    serializer_class = MedicalRecordSerializer

    def get_queryset(self):
        return MedicalRecord.objects.filter(pet=get_owned_pet(self.request, self.kwargs["pet_id"]))

    def perform_create(self, serializer):
        serializer.save(pet=get_owned_pet(self.request, self.kwargs["pet_id"]))


class ExpiringMedicalRecordsView(generics.ListAPIView):
    serializer_class = MedicalRecordSerializer

    def get_queryset(self):
        days = self.request.query_params.get("days")
        if days and days.isdigit():
            return services.upcoming_expirations(self.request.user, int(days))
        return services.upcoming_expirations(self.request.user)


class PetPrescriptionsView(generics.ListCreateAPIView):
    serializer_class = PrescriptionSerializer

    def get_queryset(self):
        pet = get_owned_pet(self.request, self.kwargs["pet_id"])
        return Prescription.objects.filter(pet=pet).prefetch_related("refill_requests")

    def perform_create(self, serializer):
        serializer.save(pet=get_owned_pet(self.request, self.kwargs["pet_id"]))


class RefillRequestHistoryView(generics.ListAPIView):
    serializer_class = RefillRequestSerializer

    def get_queryset(self):
        prescription = get_object_or_404(
            Prescription, pk=self.kwargs["prescription_id"], pet__in=owned_pets(self.request.user)
        )
        return prescription.refill_requests.all()


class RefillRequestCreateView(APIView):
    def post(self, request):
        serializer = RefillRequestCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        prescription = serializer.validated_data["prescription_id"]
        if not request.user.is_staff and prescription.pet.owner_id != request.user.pk:
            raise PermissionDenied("You can only refill your own pets' prescriptions.")
        refill = services.request_refill(prescription, serializer.validated_data["note"])
        return Response(RefillRequestSerializer(refill).data, status=status.HTTP_201_CREATED)


class RefillRequestDecisionView(APIView):
    permission_classes = [IsAdminUser]

    def put(self, request, refill_id):
        get_object_or_404(RefillRequest, pk=refill_id)
        serializer = RefillDecisionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        refill = services.decide_refill(
            refill_id, serializer.validated_data["status"], serializer.validated_data["note"]
        )
        return Response(RefillRequestSerializer(refill).data)


class DiaryEntryListView(generics.ListCreateAPIView):
    serializer_class = DiaryEntrySerializer

    def get_queryset(self):
        return DiaryEntry.objects.filter(pet=get_owned_pet(self.request, self.kwargs["pet_id"]))

    def perform_create(self, serializer):
        serializer.save(pet=get_owned_pet(self.request, self.kwargs["pet_id"]))


class DiaryEntryDetailView(generics.RetrieveUpdateDestroyAPIView):
    serializer_class = DiaryEntrySerializer
    lookup_url_kwarg = "entry_id"

    def get_queryset(self):
        return DiaryEntry.objects.filter(pet=get_owned_pet(self.request, self.kwargs["pet_id"]))
