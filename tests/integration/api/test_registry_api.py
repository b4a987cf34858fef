"""
Integration tests for Registry API endpoints.
"""
import pytest
from django.urls import reverse

from registry.infrastructure.models import AuditLog

ADMIN = "registry-admin"


def _as(api_client, identity):
    api_client.credentials(HTTP_X_CALLER_IDENTITY=identity)
    return api_client


def _grant(api_client, metadata="tier=gold"):
    response = _as(api_client, ADMIN).post(
        reverse("registry:grant-license"), {"metadata": metadata}, format="json"
    )
    assert response.status_code == 201, response.json()
    return response.json()["license_id"]


@pytest.mark.django_db
@pytest.mark.integration
class TestRegistryIssuanceAPI:
    """Integration tests for license issuance."""

    def test_grant_license_success(self, api_client):
        """Test administrator grants a license via API."""
        license_id = _grant(api_client)

        assert license_id == 1
        response = api_client.get(reverse("registry:license-detail", args=[license_id]))
        assert response.status_code == 200
        data = response.json()
        assert data["holder"] == ADMIN
        assert data["metadata"] == "tier=gold"
        assert data["status"] == "valid"
        assert data["is_revoked"] is False

    def test_grant_license_records_audit_log(self, api_client):
        """Test grants are written to the audit trail."""
        license_id = _grant(api_client)

        entry = AuditLog.objects.get(action="LicenseGranted")
        assert entry.aggregate_id == str(license_id)
        assert entry.changes["holder"] == ADMIN

    def test_grant_license_not_admin(self, api_client):
        """Test non-administrators receive 403."""
        response = _as(api_client, "alice").post(
            reverse("registry:grant-license"), {"metadata": "tier=gold"}, format="json"
        )

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "UNAUTHORIZED"

    def test_grant_license_missing_identity(self, api_client):
        """Test mutating requests without a caller identity receive 401."""
        response = api_client.post(
            reverse("registry:grant-license"), {"metadata": "tier=gold"}, format="json"
        )

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "MISSING_CALLER_IDENTITY"

    def test_grant_license_malformed_identity(self, api_client):
        """Test whitespace-padded identities are rejected."""
        response = _as(api_client, " admin ").post(
            reverse("registry:grant-license"), {"metadata": "tier=gold"}, format="json"
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_CALLER_IDENTITY"

    def test_grant_license_empty_metadata(self, api_client):
        """Test empty metadata is reported with its own code."""
        response = _as(api_client, ADMIN).post(
            reverse("registry:grant-license"), {"metadata": ""}, format="json"
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "EMPTY_METADATA"

    def test_grant_license_metadata_too_long(self, api_client):
        """Test metadata over 512 characters is rejected."""
        response = _as(api_client, ADMIN).post(
            reverse("registry:grant-license"), {"metadata": "a" * 513}, format="json"
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_METADATA"

    def test_grant_license_missing_field(self, api_client):
        """Test request validation errors."""
        response = _as(api_client, ADMIN).post(
            reverse("registry:grant-license"), {}, format="json"
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_batch_grant(self, api_client):
        """Test batch grant returns consecutive IDs."""
        _grant(api_client)

        response = _as(api_client, ADMIN).post(
            reverse("registry:batch-grant-licenses"),
            {"metadatas": ["A", "B", "C"]},
            format="json",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["license_ids"] == [2, 3, 4]
        assert data["requested"] == 3
        assert data["issued"] == 3

    def test_batch_grant_over_limit(self, api_client):
        """Test batches above 50 entries are rejected."""
        response = _as(api_client, ADMIN).post(
            reverse("registry:batch-grant-licenses"),
            {"metadatas": [f"m{index}" for index in range(51)]},
            format="json",
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "BATCH_LIMIT_EXCEEDED"
        status = api_client.get(reverse("registry:registry-status")).json()
        assert status["total_issued"] == 0


@pytest.mark.django_db
@pytest.mark.integration
class TestRegistryLifecycleAPI:
    """Integration tests for transfer, revoke and metadata updates."""

    def test_transfer_license(self, api_client):
        """Test the recipient accepts a transfer."""
        license_id = _grant(api_client)

        response = _as(api_client, "alice").post(
            reverse("registry:transfer-license", args=[license_id]),
            {"from_holder": ADMIN, "to_holder": "alice"},
            format="json",
        )

        assert response.status_code == 200
        assert response.json() == {"license_id": license_id, "success": True}
        detail = api_client.get(reverse("registry:license-detail", args=[license_id])).json()
        assert detail["holder"] == "alice"

    def test_transfer_pushed_by_holder(self, api_client):
        """Test the holder cannot push a license to someone else."""
        license_id = _grant(api_client)

        response = _as(api_client, ADMIN).post(
            reverse("registry:transfer-license", args=[license_id]),
            {"from_holder": ADMIN, "to_holder": "alice"},
            format="json",
        )

        assert response.status_code == 403

    def test_update_metadata(self, api_client):
        """Test the holder updates metadata."""
        license_id = _grant(api_client)

        response = _as(api_client, ADMIN).patch(
            reverse("registry:update-license-metadata", args=[license_id]),
            {"metadata": "tier=silver"},
            format="json",
        )

        assert response.status_code == 200
        detail = api_client.get(reverse("registry:license-detail", args=[license_id])).json()
        assert detail["metadata"] == "tier=silver"

    def test_update_metadata_unknown_license(self, api_client):
        """Test updating a license that does not exist."""
        response = _as(api_client, ADMIN).patch(
            reverse("registry:update-license-metadata", args=[42]),
            {"metadata": "tier=silver"},
            format="json",
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "LICENSE_NOT_FOUND"

    def test_revoke_license(self, api_client):
        """Test revocation is permanent."""
        license_id = _grant(api_client)
        url = reverse("registry:revoke-license", args=[license_id])

        response = _as(api_client, ADMIN).post(url)
        assert response.status_code == 200

        status = api_client.get(reverse("registry:license-status", args=[license_id])).json()
        assert status["exists"] is True
        assert status["is_revoked"] is True
        assert status["is_valid"] is False
        assert status["holder"] is None

        again = api_client.post(url)
        assert again.status_code == 409
        assert again.json()["error"]["code"] == "LICENSE_ALREADY_REVOKED"

        transfer = _as(api_client, "alice").post(
            reverse("registry:transfer-license", args=[license_id]),
            {"from_holder": ADMIN, "to_holder": "alice"},
            format="json",
        )
        assert transfer.status_code == 409
        assert transfer.json()["error"]["code"] == "LICENSE_REVOKED"

    def test_revoke_license_id_zero(self, api_client):
        """Test license ID 0 is rejected."""
        response = _as(api_client, ADMIN).post(reverse("registry:revoke-license", args=[0]))

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_LICENSE_ID"


@pytest.mark.django_db
@pytest.mark.integration
class TestRegistryQueryAPI:
    """Integration tests for read-only endpoints."""

    def test_unknown_license_detail(self, api_client):
        """Test unknown licenses return 404."""
        response = api_client.get(reverse("registry:license-detail", args=[7]))

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "LICENSE_NOT_FOUND"

    def test_unknown_license_status(self, api_client):
        """Test status flags of an unknown license are all false."""
        response = api_client.get(reverse("registry:license-status", args=[7]))

        assert response.status_code == 200
        data = response.json()
        assert data["exists"] is False
        assert data["is_id_in_range"] is False

    def test_registry_status(self, api_client):
        """Test registry status reflects the caller role."""
        _grant(api_client)

        as_admin = _as(api_client, ADMIN).get(reverse("registry:registry-status")).json()
        as_alice = _as(api_client, "alice").get(reverse("registry:registry-status")).json()

        assert as_admin == {"total_issued": 1, "is_caller_admin": True}
        assert as_alice == {"total_issued": 1, "is_caller_admin": False}

    def test_registry_status_anonymous(self, api_client):
        """Test reads do not require a caller identity."""
        response = api_client.get(reverse("registry:registry-status"))

        assert response.status_code == 200
        assert response.json()["is_caller_admin"] is False


@pytest.mark.django_db
@pytest.mark.integration
class TestHealthAPI:
    """Integration tests for health endpoints."""

    def test_health(self, client):
        response = client.get("/health/")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_ready(self, client):
        response = client.get("/ready/")
        assert response.status_code == 200
        assert response.json()["checks"]["database"] is True

    def test_metrics(self, client):
        response = client.get("/metrics/")
        assert response.status_code == 200
        assert b"http_requests_total" in response.content
