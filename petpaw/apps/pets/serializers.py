from rest_framework import serializers

from .models import DiaryEntry, MedicalRecord, Pet, Prescription, RefillRequest


class PetSerializer(serializers.ModelSerializer):
    class Meta:
        model = Pet
        fields = [
            "id",
            "owner",
            "name",
            "species",
            "breed",
            "sex",
            "birthdate",
            "weight",
            "profile_picture",
            "created_at",
        ]
        read_only_fields = ["id", "owner", "profile_picture", "created_at"]


class PetImageSerializer(serializers.ModelSerializer):
    profile_picture = serializers.FileField()

    class Meta:
        model = Pet
        fields = ["profile_picture"]


class MedicalRecordSerializer(serializers.ModelSerializer):
    status = serializers.SerializerMethodField()
    days_until_expiration = serializers.SerializerMethodField()
    pet_name = serializers.CharField(source="pet.name", read_only=True)

    class Meta:
        model = MedicalRecord
        fields = [
            "id",
            "pet",
            "pet_name",
            "record_type",
            "description",
            "clinic_name",
            "veterinarian",
            "date",
            "expiration_date",
            "status",
            "days_until_expiration",
        ]
        read_only_fields = ["id", "pet"]

    def get_status(self, obj):
        return obj.status()

    def get_days_until_expiration(self, obj):
        return obj.days_until_expiration()


class RefillRequestSerializer(serializers.ModelSerializer):
    class Meta:
        model = RefillRequest
        fields = ["id", "prescription", "status", "note", "processed_at", "created_at"]
        read_only_fields = fields


class PrescriptionSerializer(serializers.ModelSerializer):
    refill_requests = RefillRequestSerializer(many=True, read_only=True)

    class Meta:
        model = Prescription
        fields = [
            "id",
            "pet",
            "medication_name",
            "dosage",
            "instructions",
            "prescribed_by",
            "prescribed_on",
            "refills_remaining",
            "refill_status",
            "refill_requests",
        ]
        read_only_fields = ["id", "pet", "refill_requests"]


class RefillRequestCreateSerializer(serializers.Serializer):
    prescription_id = serializers.PrimaryKeyRelatedField(queryset=Prescription.objects.all())
    note = serializers.CharField(required=False, allow_blank=True, default="")


class RefillDecisionSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=[RefillRequest.STATUS_APPROVED, RefillRequest.STATUS_REJECTED]
    )
    note = serializers.CharField(required=False, allow_blank=True, default="")


class DiaryEntrySerializer(serializers.ModelSerializer):
    class Meta:
        model = DiaryEntry
        fields = ["id", "pet", "date", "activity", "mood", "description", "image", "created_at"]
        read_only_fields = ["id", "pet", "created_at"]
