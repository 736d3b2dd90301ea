from datetime import date, timedelta

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.utils import timezone

from apps.pets.models import MedicalRecord, Prescription, RefillRequest


@pytest.fixture
def prescription(pet):
    return Prescription.objects.create(
        pet=pet,
        medication_name="Apoquel",
        dosage="16mg daily",
        refills_remaining=1,
        refill_status=Prescription.REFILLABLE,
    )


@pytest.mark.parametrize(
    "days_left, expected",
    [
        (-5, "expired"),
        (0, "expired"),
        (1, "expiring soon"),
        (60, "expiring soon"),
        (61, "active"),
        (None, "active"),
    ],
)
def test_medical_record_status(days_left, expected):
    today = date(2026, 3, 1)
    expiration = today + timedelta(days=days_left) if days_left is not None else None
    record = MedicalRecord(description="Rabies", date=today, expiration_date=expiration)
    assert record.status(today) == expected


@pytest.mark.django_db
class TestPets:
    def test_create_and_list(self, api_client, customer):
        response = api_client.post("/api/v1/pets", {"name": "Biscuit", "species": "dog"}, format="json")
        assert response.status_code == 201
        assert response.data["owner"] == customer.pk
        assert [p["name"] for p in api_client.get(f"/api/v1/pets/user/{customer.pk}").data] == ["Biscuit"]

    def test_pets_are_private(self, pet, other_client):
        assert other_client.get(f"/api/v1/pets/{pet.pk}").status_code == 404
        assert other_client.get(f"/api/v1/pets/user/{pet.owner_id}").status_code == 403

    def test_upload_profile_picture(self, pet, api_client, settings, tmp_path):
        settings.MEDIA_ROOT = tmp_path
        upload = SimpleUploadedFile("mochi.jpg", b"\xff\xd8\xff\xe0fake-jpeg", content_type="image/jpeg")
        response = api_client.put(f"/api/v1/pets/{pet.pk}/image", {"profile_picture": upload}, format="multipart")
        assert response.status_code == 200
        assert "mochi" in response.data["profile_picture"]


@pytest.mark.django_db
class TestMedicalRecords:
    def test_records_show_expiry_status(self, pet, api_client):
        soon = timezone.localdate() + timedelta(days=10)
        response = api_client.post(
            f"/api/v1/pets/{pet.pk}/medical-records",
            {"description": "Rabies", "date": "2025-01-01", "expiration_date": soon.isoformat()},
            format="json",
        )
        assert response.status_code == 201
        assert response.data["status"] == "expiring soon"
        assert response.data["days_until_expiration"] == 10

    def test_expiring_records(self, pet, api_client):
        today = timezone.localdate()
        MedicalRecord.objects.create(pet=pet, description="Old", date=today, expiration_date=today - timedelta(days=1))
        MedicalRecord.objects.create(pet=pet, description="Soon", date=today, expiration_date=today + timedelta(days=30))
        MedicalRecord.objects.create(pet=pet, description="Later", date=today, expiration_date=today + timedelta(days=200))

        response = api_client.get("/api/v1/medical-records/expiring")
        assert [r["description"] for r in response.data] == ["Old", "Soon"]
        response = api_client.get("/api/v1/medical-records/expiring", {"days": "365"})
        assert len(response.data) == 3


@pytest.mark.django_db
class TestRefills:
    url = "/api/v1/prescriptions/refill/request"

    def test_request_and_approve(self, prescription, api_client, staff_client):
        response = api_client.post(self.url, {"prescription_id": prescription.pk}, format="json")
        assert response.status_code == 201
        refill_id = response.data["id"]

        response = staff_client.put(f"/api/v1/refill-requests/{refill_id}", {"status": "APPROVED"}, format="json")
        assert response.status_code == 200
        prescription.refresh_from_db()
        assert prescription.refills_remaining == 0
        assert prescription.refill_status == Prescription.NOT_REFILLABLE

        # no refills left
        assert api_client.post(self.url, {"prescription_id": prescription.pk}, format="json").status_code == 400

    def test_one_pending_request_at_a_time(self, prescription, api_client):
        api_client.post(self.url, {"prescription_id": prescription.pk}, format="json")
        assert api_client.post(self.url, {"prescription_id": prescription.pk}, format="json").status_code == 400

    def test_decided_request_cannot_be_decided_again(self, prescription, api_client, staff_client):
        refill_id = api_client.post(self.url, {"prescription_id": prescription.pk}, format="json").data["id"]
        staff_client.put(f"/api/v1/refill-requests/{refill_id}", {"status": "REJECTED"}, format="json")
        response = staff_client.put(f"/api/v1/refill-requests/{refill_id}", {"status": "APPROVED"}, format="json")
        assert response.status_code == 409
        assert RefillRequest.objects.get(pk=refill_id).status == RefillRequest.STATUS_REJECTED

    def test_customers_cannot_decide(self, prescription, api_client):
        refill_id = api_client.post(self.url, {"prescription_id": prescription.pk}, format="json").data["id"]
        response = api_client.put(f"/api/v1/refill-requests/{refill_id}", {"status": "APPROVED"}, format="json")
        assert response.status_code == 403

    def test_refill_history(self, prescription, api_client):
        api_client.post(self.url, {"prescription_id": prescription.pk, "note": "running low"}, format="json")
        response = api_client.get(f"/api/v1/prescriptions/{prescription.pk}/refill-requests")
        assert [r["note"] for r in response.data] == ["running low"]

    def test_other_owners_cannot_request(self, prescription, other_client):
        assert other_client.post(self.url, {"prescription_id": prescription.pk}, format="json").status_code == 403


@pytest.mark.django_db
class TestDiary:
    def test_diary_crud(self, pet, api_client):
        url = f"/api/v1/pet-diary/{pet.pk}"
        response = api_client.post(url, {"date": "2026-05-01", "activity": "Walk", "mood": "happy"}, format="json")
        assert response.status_code == 201
        entry_url = f"{url}/{response.data['id']}"

        assert api_client.patch(entry_url, {"mood": "tired"}, format="json").data["mood"] == "tired"
        assert len(api_client.get(url).data) == 1
        assert api_client.delete(entry_url).status_code == 204
        assert api_client.get(url).data == []

    def test_diary_is_private(self, pet, other_client):
        assert other_client.get(f"/api/v1/pet-diary/{pet.pk}").status_code == 404
