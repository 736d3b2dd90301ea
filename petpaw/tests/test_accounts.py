import pytest
from django.contrib.auth import get_user_model

from apps.accounts.models import Address

User = get_user_model()


@pytest.mark.django_db
class TestSignUpAndLogin:
    def test_sign_up_then_log_in(self, anonymous_client):
        response = anonymous_client.post(
            "/api/v1/users/",
            {"username": "carol", "email": "carol@example.com", "password": "long-enough"},
            format="json",
        )
        assert response.status_code == 201
        assert "password" not in response.data

        response = anonymous_client.post(
            "/api/v1/auth/login", {"username": "carol", "password": "long-enough"}, format="json"
        )
        assert response.status_code == 200
        assert response.data["token_type"] == "bearer"
        assert response.data["user_id"] == User.objects.get(username="carol").pk

        anonymous_client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['access_token']}")
        assert anonymous_client.get(f"/api/v1/users/{response.data['user_id']}").status_code == 200

    def test_short_password(self, anonymous_client):
        response = anonymous_client.post(
            "/api/v1/users/", {"username": "dave", "password": "short"}, format="json"
        )
        assert response.status_code == 400
        assert "password" in response.data

    def test_wrong_password(self, anonymous_client, customer):
        response = anonymous_client.post(
            "/api/v1/auth/login", {"username": "alice", "password": "nope"}, format="json"
        )
        assert response.status_code == 401

    def test_other_profiles_are_private(self, api_client, other_customer, staff_client):
        assert api_client.get(f"/api/v1/users/{other_customer.pk}").status_code == 403
        assert staff_client.get(f"/api/v1/users/{other_customer.pk}").status_code == 200


@pytest.mark.django_db
class TestAddresses:
    def url(self, user):
        return f"/api/v1/addresses/user/{user.pk}"

    def test_first_address_becomes_default(self, api_client, customer):
        response = api_client.post(
            self.url(customer),
            {"street": "Kastanienallee 5", "city": "Berlin", "latitude": "52.538", "longitude": "13.409"},
            format="json",
        )
        assert response.status_code == 201
        assert Address.objects.get(pk=response.data["id"]).is_default

    def test_new_default_replaces_old(self, api_client, customer, address):
        response = api_client.post(
            self.url(customer),
            {
                "label": "Work",
                "street": "Friedrichstrasse 10",
                "latitude": "52.507",
                "longitude": "13.390",
                "is_default": True,
            },
            format="json",
        )
        address.refresh_from_db()
        assert not address.is_default
        listed = api_client.get(self.url(customer)).data
        assert [a["label"] for a in listed if a["is_default"]] == ["Work"]

    def test_plain_address_keeps_default(self, api_client, customer, address):
        api_client.post(
            self.url(customer),
            {"street": "Oranienstrasse 3", "latitude": "52.501", "longitude": "13.417"},
            format="json",
        )
        address.refresh_from_db()
        assert address.is_default

    def test_cannot_touch_other_users_addresses(self, other_client, customer, address):
        assert other_client.get(self.url(customer)).status_code == 403
