from datetime import date, datetime, time, timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from apps.bookings import services
from apps.bookings.models import (
    Appointment,
    GroomingBooking,
    GroomingDay,
    GroomingService,
    HotelBooking,
    PetHotel,
    VetService,
)
from apps.core.exceptions import SlotUnavailable

FUTURE = timezone.localdate() + timedelta(days=30)


def at(hour, day=FUTURE):
    return timezone.make_aware(datetime.combine(day, time(hour, 0)))


@pytest.fixture
def checkup(db):
    return VetService.objects.create(name="Check-up", price=Decimal("45.00"))


@pytest.fixture
def hotel(db):
    return PetHotel.objects.create(name="Cozy Paws Inn", nightly_rate=Decimal("35.00"))


@pytest.fixture
def bath(db):
    return GroomingService.objects.create(name="Bath", price=Decimal("20.00"), duration_minutes=60)


@pytest.fixture
def haircut(db):
    return GroomingService.objects.create(name="Haircut", price=Decimal("30.00"), duration_minutes=90)


@pytest.mark.django_db
class TestVetAppointments:
    url = "/api/v1/appointments/appointments"

    def test_slots_run_hourly_from_nine_to_nine(self):
        slots = services.appointment_slots(FUTURE)
        assert [s["time"] for s in slots] == [f"{hour:02d}:00" for hour in range(9, 22)]
        assert all(s["available"] for s in slots)

    def test_book_and_list(self, api_client, checkup, pet, customer):
        response = api_client.post(
            self.url,
            {"date_time": at(10).isoformat(), "service_id": checkup.pk, "pet_id": pet.pk},
            format="json",
        )
        assert response.status_code == 201, response.data
        assert response.data["status"] == "PENDING"
        assert response.data["pet_name"] == "Mochi"

        assert len(api_client.get(self.url).data) == 1
        assert len(api_client.get(f"/api/v1/appointments/user/{customer.pk}").data) == 1
        assert len(api_client.get(f"/api/v1/appointments/pet/{pet.pk}").data) == 1

    def test_taken_slot_is_refused(self, api_client, other_client, checkup):
        payload = {"date_time": at(11).isoformat(), "service_id": checkup.pk}
        assert api_client.post(self.url, payload, format="json").status_code == 201

        response = other_client.post(self.url, payload, format="json")
        assert response.status_code == 409
        assert response.data["detail"].code == "slot_unavailable"

    def test_booked_and_available_slots(self, customer, checkup, anonymous_client):
        services.book_appointment(customer, checkup, at(14))
        day = FUTURE.isoformat()

        booked = anonymous_client.get("/api/v1/appointments/booked", {"date": day}).data
        assert [slot["time"] for slot in booked] == ["14:00"]

        available = anonymous_client.get("/api/v1/appointments/available-slots", {"date": day}).data
        assert "14:00" not in [slot["time"] for slot in available]
        assert len(available) == 12

    def test_cancelled_slot_frees_up(self, api_client, customer, checkup):
        appointment = services.book_appointment(customer, checkup, at(15))
        response = api_client.post(f"{self.url}/{appointment.pk}/cancel")
        assert response.status_code == 200
        assert response.data["status"] == "CANCELLED"

        assert services.book_appointment(customer, checkup, at(15)).pk != appointment.pk

    @pytest.mark.parametrize(
        "when",
        [
            lambda: at(8),
            lambda: at(22),
            lambda: at(10) + timedelta(minutes=30),
            lambda: timezone.make_aware(datetime.combine(date(2020, 1, 6), time(10, 0))),
        ],
    )
    def test_time_must_be_a_future_slot(self, api_client, checkup, when):
        payload = {"date_time": when().isoformat(), "service_id": checkup.pk}
        assert api_client.post(self.url, payload, format="json").status_code == 400

    def test_other_users_pet_is_refused(self, other_client, checkup, pet):
        payload = {"date_time": at(10).isoformat(), "service_id": checkup.pk, "pet_id": pet.pk}
        assert other_client.post(self.url, payload, format="json").status_code == 404

    def test_staff_confirm_then_complete(self, staff_client, customer, checkup):
        appointment = services.book_appointment(customer, checkup, at(16))
        url = f"{self.url}/{appointment.pk}/status"
        assert staff_client.put(url, {"status": "COMPLETED"}, format="json").status_code == 409
        assert staff_client.put(url, {"status": "CONFIRMED"}, format="json").status_code == 200
        assert staff_client.put(url, {"status": "COMPLETED"}, format="json").status_code == 200

    def test_customers_cannot_confirm(self, api_client, customer, checkup):
        appointment = services.book_appointment(customer, checkup, at(17))
        url = f"{self.url}/{appointment.pk}/status"
        assert api_client.put(url, {"status": "CONFIRMED"}, format="json").status_code == 403

    def test_date_is_required(self, anonymous_client):
        assert anonymous_client.get("/api/v1/appointments/available-slots").status_code == 400

    def test_services_are_public(self, anonymous_client, checkup):
        response = anonymous_client.get("/api/v1/appointments/services")
        assert [s["name"] for s in response.data] == ["Check-up"]


@pytest.mark.django_db
class TestPetHotel:
    url = "/api/v1/pet-hotels/bookings"

    def payload(self, hotel, pet, nights=3, **extra):
        return {
            "hotel_id": hotel.pk,
            "pet_id": pet.pk,
            "start_date": FUTURE.isoformat(),
            "end_date": (FUTURE + timedelta(days=nights)).isoformat(),
            "pet_size": "small",
            "emergency_contact": "+49 30 1234567",
            **extra,
        }

    def test_price_is_nights_times_rate(self, api_client, hotel, pet):
        response = api_client.post(self.url, self.payload(hotel, pet, dietary_needs="grain free"), format="json")
        assert response.status_code == 201, response.data
        assert response.data["nights"] == 3
        assert Decimal(response.data["total_price"]) == Decimal("105.00")
        assert response.data["hotel"]["name"] == "Cozy Paws Inn"

    def test_check_out_must_follow_check_in(self, api_client, hotel, pet):
        response = api_client.post(self.url, self.payload(hotel, pet, nights=0), format="json")
        assert response.status_code == 400
        assert "end_date" in response.data

    def test_update_reprices(self, api_client, hotel, pet):
        booking_id = api_client.post(self.url, self.payload(hotel, pet), format="json").data["id"]
        response = api_client.put(f"{self.url}/{booking_id}", self.payload(hotel, pet, nights=5), format="json")
        assert response.status_code == 200
        assert Decimal(response.data["total_price"]) == Decimal("175.00")

    def test_delete_cancels(self, api_client, hotel, pet):
        booking_id = api_client.post(self.url, self.payload(hotel, pet), format="json").data["id"]
        assert api_client.delete(f"{self.url}/{booking_id}").status_code == 204

        booking = HotelBooking.objects.get(pk=booking_id)
        assert booking.status == "CANCELLED"
        response = api_client.put(f"{self.url}/{booking_id}", self.payload(hotel, pet), format="json")
        assert response.status_code == 400

    def test_hotels_listing_does_not_swallow_bookings(self, anonymous_client, api_client, hotel):
        assert anonymous_client.get("/api/v1/pet-hotels/").data[0]["id"] == hotel.pk
        assert anonymous_client.get(f"/api/v1/pet-hotels/{hotel.pk}").status_code == 200
        assert api_client.get(self.url).data == []


@pytest.mark.django_db
class TestGrooming:
    url = "/api/v1/pet-grooming/bookings"

    def test_slots_from_ten(self):
        slots = services.grooming_slots(FUTURE)
        assert slots[0] == {"start_time": "10:00", "end_time": "11:00"}
        assert slots[-1]["start_time"] == "21:00"

    def test_long_bookings_must_end_by_closing(self):
        slots = services.grooming_slots(FUTURE, duration=150)
        assert slots[-1]["start_time"] == "19:00"

    def test_booking_sums_services(self, api_client, pet, bath, haircut):
        payload = {
            "pet_id": pet.pk,
            "service_ids": f"{bath.pk},{haircut.pk}",
            "date": FUTURE.isoformat(),
            "start_time": "10:00",
        }
        response = api_client.post(self.url, payload, format="json")
        assert response.status_code == 201, response.data
        assert Decimal(response.data["total_price"]) == Decimal("50.00")
        assert response.data["total_duration"] == 150
        assert response.data["end_time"] == "12:30:00"

    def test_booking_blocks_overlapping_slots(self, customer, pet, bath, haircut):
        services.book_grooming(customer, pet, [bath.pk, haircut.pk], FUTURE, time(10, 0))

        starts = [slot["start_time"] for slot in services.grooming_slots(FUTURE)]
        assert starts[:2] == ["13:00", "14:00"]
        assert "12:00" not in starts

    def test_overlapping_booking_is_refused(self, api_client, customer, pet, bath):
        services.book_grooming(customer, pet, [bath.pk], FUTURE, time(12, 0))
        payload = {"pet_id": pet.pk, "service_ids": [bath.pk], "date": FUTURE.isoformat(), "start_time": "12:00"}
        assert api_client.post(self.url, payload, format="json").status_code == 409

    def test_overlap_is_rechecked_under_the_day_lock(self, monkeypatch, customer, pet, bath, haircut):
        services.book_grooming(customer, pet, [haircut.pk], FUTURE, time(10, 0))
        # a concurrent request that read the slots before this booking committed
        stale = [{"start_time": "11:00", "end_time": "12:00"}]
        monkeypatch.setattr(services, "grooming_slots", lambda day, duration=60: stale)

        with pytest.raises(SlotUnavailable):
            services.book_grooming(customer, pet, [bath.pk], FUTURE, time(11, 0))
        assert GroomingBooking.objects.count() == 1
        assert GroomingDay.objects.filter(date=FUTURE).exists()

    def test_unknown_service(self, api_client, pet, bath):
        payload = {"pet_id": pet.pk, "service_ids": [bath.pk, 999], "date": FUTURE.isoformat(), "start_time": "11:00"}
        assert api_client.post(self.url, payload, format="json").status_code == 400

    def test_available_slots_endpoint_sizes_to_services(self, anonymous_client, haircut):
        response = anonymous_client.get(
            "/api/v1/pet-grooming/available-slots",
            {"date": FUTURE.isoformat(), "service_ids": str(haircut.pk)},
        )
        assert response.status_code == 200
        assert response.data[0] == {"start_time": "10:00", "end_time": "11:30"}

    def test_history(self, api_client, customer, pet, bath):
        services.book_grooming(customer, pet, [bath.pk], FUTURE, time(11, 0))
        response = api_client.get(f"/api/v1/pet-grooming/booking-history/{customer.pk}")
        assert [b["services"][0]["name"] for b in response.data] == ["Bath"]

    def test_cancel(self, api_client, customer, pet, bath):
        booking = services.book_grooming(customer, pet, [bath.pk], FUTURE, time(11, 0))
        assert api_client.post(f"{self.url}/{booking.pk}/cancel").status_code == 200
        assert GroomingBooking.objects.get(pk=booking.pk).status == "CANCELLED"
        assert {"start_time": "11:00", "end_time": "12:00"} in services.grooming_slots(FUTURE)


def test_parse_service_ids():
    assert services.parse_service_ids("1, 2,3") == [1, 2, 3]
    assert services.parse_service_ids([4, "5"]) == [4, 5]
    assert services.parse_service_ids(None) == []


def test_appointment_model_transitions():
    appointment = Appointment(status="PENDING")
    assert appointment.can_transition_to("CONFIRMED")
    assert not appointment.can_transition_to("COMPLETED")
    appointment.status = "CANCELLED"
    assert not appointment.can_transition_to("CONFIRMED")
