"""
Integration tests for the admin API.
"""

from datetime import date

import pytest

DEVICE_A = "abcdef1234567890abcdef1234567890"
DEVICE_B = "99887766554433221100ffeeddccbbaa"

ACTIVATE_URL = "/api/v1/license/activate"
CHECK_URL = "/api/v1/license/check"
ADMIN_URL = "/api/v1/admin"


def issue_and_activate(client, device_id, tier="WEEKLY"):
    response = client.post(
        f"{ADMIN_URL}/licenses/issue", {"device_id": device_id, "tier": tier}, format="json"
    )
    assert response.status_code == 201
    key = response.json()["license_key"]
    response = client.post(
        ACTIVATE_URL, {"license_key": key, "device_id": device_id}, format="json"
    )
    assert response.status_code == 200
    return key


@pytest.mark.django_db
@pytest.mark.integration
class TestAdminAuthentication:
    """Tests for the admin token guard."""

    def test_missing_token(self, api_client):
        """Test requests without a token are refused."""
        response = api_client.get(f"{ADMIN_URL}/licenses")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "MISSING_ADMIN_TOKEN"

    def test_wrong_token(self, api_client):
        """Test requests with an unknown token are refused."""
        api_client.credentials(HTTP_X_ADMIN_TOKEN="nope")

        response = api_client.get(f"{ADMIN_URL}/licenses")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "INVALID_ADMIN_TOKEN"

    def test_bearer_token(self, api_client):
        """Test the token is also accepted as a Bearer credential."""
        api_client.credentials(HTTP_AUTHORIZATION="Bearer test-admin-token")

        response = api_client.get(f"{ADMIN_URL}/licenses")

        assert response.status_code == 200

    def test_no_tokens_configured(self, api_client, settings):
        """Test the admin API is disabled when no token is configured."""
        settings.ADMIN_API_TOKENS = []
        api_client.credentials(HTTP_X_ADMIN_TOKEN="test-admin-token")

        response = api_client.get(f"{ADMIN_URL}/licenses")

        assert response.status_code == 503

    def test_client_api_is_open(self, api_client):
        """Test client endpoints need no token."""
        response = api_client.get("/api/v1/time")

        assert response.status_code == 200


@pytest.mark.django_db
@pytest.mark.integration
class TestIssueLicenseKey:
    """Tests for POST /api/v1/admin/licenses/issue."""

    def test_issue_by_plan_name(self, admin_client):
        """Test a key is generated for the device and plan."""
        response = admin_client.post(
            f"{ADMIN_URL}/licenses/issue", {"device_id": DEVICE_A, "tier": "monthly"}, format="json"
        )

        assert response.status_code == 201
        data = response.json()
        assert data["tier"] == "MONTHLY"
        assert data["tier_code"] == "MNTH"
        assert data["license_key"].startswith("MNTH-ABCDEF12-")
        embedded = data["license_key"].split("-")[2]
        assert data["expiry_date"][:10].replace("-", "") == embedded
        assert data["expiry_date"][10:19] == "T23:59:59"

    def test_issue_with_explicit_expiry(self, admin_client):
        """Test an explicit expiry date is embedded in the key."""
        response = admin_client.post(
            f"{ADMIN_URL}/licenses/issue",
            {"device_id": DEVICE_A, "tier": "WEEK", "expiry_date": "2031-01-15"},
            format="json",
        )

        assert response.status_code == 201
        data = response.json()
        assert "-20310115-" in data["license_key"]
        assert data["expiry_date"].startswith("2031-01-15T23:59:59")

    def test_issue_stores_nothing(self, admin_client):
        """Test issuing a key does not create a ledger record."""
        admin_client.post(
            f"{ADMIN_URL}/licenses/issue", {"device_id": DEVICE_A, "tier": "DAILY"}, format="json"
        )

        response = admin_client.get(f"{ADMIN_URL}/licenses")

        assert response.json()["count"] == 0

    def test_unknown_tier(self, admin_client):
        """Test plans outside the catalogue are refused."""
        response = admin_client.post(
            f"{ADMIN_URL}/licenses/issue", {"device_id": DEVICE_A, "tier": "LIFETIME"}, format="json"
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "UNKNOWN_TIER"

    def test_missing_device(self, admin_client):
        """Test the device identifier is required."""
        response = admin_client.post(
            f"{ADMIN_URL}/licenses/issue", {"tier": "WEEKLY"}, format="json"
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "MALFORMED_INPUT"


@pytest.mark.django_db
@pytest.mark.integration
class TestLicenseBans:
    """Tests for banning and unbanning licenses."""

    def test_ban_and_unban_license(self, admin_client):
        """Test a license ban shows up in status checks and can be lifted."""
        key = issue_and_activate(admin_client, DEVICE_A)

        response = admin_client.post(f"{ADMIN_URL}/licenses/ban", {"license_key": key}, format="json")
        assert response.status_code == 200
        assert response.json()["status"] == "banned"

        check = admin_client.post(CHECK_URL, {"license_key": key}, format="json").json()
        assert check["status"] == "banned"
        assert check["reason"] == "license_banned"

        response = admin_client.post(
            f"{ADMIN_URL}/licenses/unban", {"license_key": key}, format="json"
        )
        assert response.status_code == 200
        assert response.json()["status"] == "active"

    def test_ban_unknown_license(self, admin_client):
        """Test banning a key that was never activated."""
        response = admin_client.post(
            f"{ADMIN_URL}/licenses/ban", {"license_key": "WEEK-ABCDEF12-0000"}, format="json"
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    def test_list_licenses_by_status(self, admin_client):
        """Test the status filter on the license list."""
        banned = issue_and_activate(admin_client, DEVICE_A)
        active = issue_and_activate(admin_client, DEVICE_B)
        admin_client.post(f"{ADMIN_URL}/licenses/ban", {"license_key": banned}, format="json")

        all_licenses = admin_client.get(f"{ADMIN_URL}/licenses").json()
        banned_only = admin_client.get(f"{ADMIN_URL}/licenses", {"status": "banned"}).json()

        assert all_licenses["count"] == 2
        assert [item["license_key"] for item in banned_only["licenses"]] == [banned]
        assert banned_only["licenses"][0]["device_prefix"] == "ABCDEF12"
        assert active not in {item["license_key"] for item in banned_only["licenses"]}

    def test_list_licenses_invalid_status(self, admin_client):
        """Test an unknown status filter."""
        response = admin_client.get(f"{ADMIN_URL}/licenses", {"status": "expired"})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "MALFORMED_INPUT"


@pytest.mark.django_db
@pytest.mark.integration
class TestDeviceBans:
    """Tests for banning and unbanning devices."""

    def test_device_ban_cascades_to_licenses(self, admin_client):
        """Test banning a device prefix bans its licenses and blocks activation."""
        key = issue_and_activate(admin_client, DEVICE_A)
        other = issue_and_activate(admin_client, DEVICE_B)

        response = admin_client.post(
            f"{ADMIN_URL}/devices/ban", {"device_id": "abcdef12"}, format="json"
        )

        assert response.status_code == 200
        data = response.json()
        assert data["newly_added"] is True
        assert data["banned_license_keys"] == [key]
        assert data["message"] == "Device banned: ABCDEF12 | Also banned 1 license(s)"

        activation = admin_client.post(
            ACTIVATE_URL, {"license_key": key, "device_id": DEVICE_A}, format="json"
        )
        assert activation.status_code == 403
        assert activation.json()["error"]["code"] == "DEVICE_BANNED"

        check = admin_client.post(
            CHECK_URL, {"license_key": other, "device_id": DEVICE_B}, format="json"
        ).json()
        assert check["status"] == "active"

    def test_banning_twice_is_idempotent(self, admin_client):
        """Test a repeated ban adds no second registry entry."""
        admin_client.post(f"{ADMIN_URL}/devices/ban", {"device_id": DEVICE_A}, format="json")

        response = admin_client.post(
            f"{ADMIN_URL}/devices/ban", {"device_id": DEVICE_A.upper()}, format="json"
        )

        assert response.json()["newly_added"] is False
        devices = admin_client.get(f"{ADMIN_URL}/devices/banned").json()
        assert devices["count"] == 1
        assert devices["devices"][0]["device_prefix"] == "ABCDEF12"

    def test_unban_device_leaves_licenses_banned(self, admin_client):
        """Test lifting a device ban does not restore its licenses."""
        key = issue_and_activate(admin_client, DEVICE_A)
        admin_client.post(f"{ADMIN_URL}/devices/ban", {"device_id": DEVICE_A}, format="json")

        response = admin_client.post(
            f"{ADMIN_URL}/devices/unban", {"device_id": DEVICE_A}, format="json"
        )

        assert response.status_code == 200
        assert response.json()["removed"] == 1
        assert admin_client.get(f"{ADMIN_URL}/devices/banned").json()["count"] == 0

        check = admin_client.post(
            CHECK_URL, {"license_key": key, "device_id": DEVICE_A}, format="json"
        ).json()
        assert check["status"] == "banned"
        assert check["reason"] == "license_banned"

    def test_ban_device_missing_identifier(self, admin_client):
        """Test the device identifier is required."""
        response = admin_client.post(f"{ADMIN_URL}/devices/ban", {}, format="json")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "MALFORMED_INPUT"
