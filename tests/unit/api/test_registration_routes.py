"""Unit tests for the public registration route."""

import pytest
from fastapi.testclient import TestClient

from eventreg.registry import RegistrationStore


@pytest.mark.unit
class TestCreateRegistration:
    """Tests for POST /registrations."""

    def test_create_individual(self, client: TestClient, store: RegistrationStore) -> None:
        """201 with a PENDING registration and its fee."""
        response = client.post(
            "/api/v1/registrations",
            json={
                "type": "INDIVIDUAL",
                "representative_name": "Budi Santoso",
                "phone_number": "081234567890",
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["error"] is None
        assert data["data"]["total_fee"] == 100_000
        assert data["data"]["total_paid"] == 0
        assert data["data"]["remaining_balance"] == 100_000
        assert data["data"]["status"] == "PENDING"
        assert data["data"]["registration_source"] == "SELF"
        assert store.get_registration(data["data"]["id"]) is not None

    def test_create_family(self, client: TestClient) -> None:
        """Family fee counts the representative and every member."""
        response = client.post(
            "/api/v1/registrations",
            json={
                "type": "FAMILY",
                "representative_name": "Siti Rahma",
                "phone_number": "+62 812-9876-5432",
                "family_members": [
                    {"name": "Andi", "age_category": "YOUTH"},
                    {"name": "Rina", "age_category": "CHILD"},
                ],
            },
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["total_fee"] == 300_000
        assert [m["member_name"] for m in data["family_members"]] == ["Andi", "Rina"]

    def test_create_uses_configured_unit_price(self, client: TestClient, settings) -> None:
        """Fee follows the configured unit price."""
        settings.unit_price = 50_000

        response = client.post(
            "/api/v1/registrations",
            json={
                "type": "INDIVIDUAL",
                "representative_name": "Budi",
                "phone_number": "081234567890",
            },
        )

        assert response.json()["data"]["total_fee"] == 50_000

    def test_create_individual_with_members_rejected(self, client: TestClient) -> None:
        """422 when an individual registration lists members."""
        response = client.post(
            "/api/v1/registrations",
            json={
                "type": "INDIVIDUAL",
                "representative_name": "Budi",
                "phone_number": "081234567890",
                "family_members": [{"name": "Andi"}],
            },
        )

        assert response.status_code == 422
        data = response.json()
        assert data["data"] is None
        assert "family members" in data["error"]

    @pytest.mark.parametrize(
        "payload",
        [
            {"type": "INDIVIDUAL", "phone_number": "081234567890"},
            {"type": "INDIVIDUAL", "representative_name": "Budi", "phone_number": "call me"},
            {"type": "GROUP", "representative_name": "Budi", "phone_number": "081234567890"},
            {
                "type": "INDIVIDUAL",
                "representative_name": "Budi",
                "phone_number": "081234567890",
                "age_category": "SENIOR",
            },
        ],
    )
    def test_create_invalid_payload(self, client: TestClient, payload: dict) -> None:
        """422 on request validation errors."""
        response = client.post("/api/v1/registrations", json=payload)
        assert response.status_code == 422
