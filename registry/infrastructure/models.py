"""
OwnershipRecord, LicenseMetadata, LicenseRevocation, RegistryState and AuditLog models.
"""
import uuid

from django.db import models

REGISTRY_STATE_ID = 1


class OwnershipRecord(models.Model):
    """
    Exclusive owner of a license ID.
    The row is deleted when the license is revoked.
    """

    license_id = models.PositiveBigIntegerField(primary_key=True)
    owner = models.CharField(max_length=255, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "ownership_records"
        ordering = ["license_id"]

    def __str__(self):
        return f"#{self.license_id} -> {self.owner}"


class LicenseMetadata(models.Model):
    """
    Metadata blob of an issued license.
    A row exists for every license ever granted.
    """

    license_id = models.PositiveBigIntegerField(primary_key=True)
    metadata = models.CharField(max_length=512)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "license_metadata"
        ordering = ["license_id"]
        verbose_name_plural = "license metadata"

    def __str__(self):
        return f"#{self.license_id}"


class LicenseRevocation(models.Model):
    """
    Revocation marker. Rows are never deleted.
    """

    license_id = models.PositiveBigIntegerField(primary_key=True)
    revoked_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "license_revocations"
        ordering = ["license_id"]

    def __str__(self):
        return f"#{self.license_id} revoked"


class RegistryState(models.Model):
    """
    Singleton row holding the administrator and the last issued license ID.
    """

    id = models.PositiveSmallIntegerField(primary_key=True, default=REGISTRY_STATE_ID, editable=False)
    administrator = models.CharField(max_length=255)
    last_issued_id = models.PositiveBigIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "registry_state"

    def __str__(self):
        return f"Registry administered by {self.administrator} ({self.last_issued_id} issued)"


class AuditLog(models.Model):
    """
    Immutable audit trail of registry events.
    """

    ACTION_CHOICES = [
        ("LicenseGranted", "License Granted"),
        ("LicensesBatchGranted", "Licenses Batch Granted"),
        ("LicenseTransferred", "License Transferred"),
        ("LicenseRevoked", "License Revoked"),
        ("LicenseMetadataUpdated", "License Metadata Updated"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event_id = models.UUIDField(unique=True)
    action = models.CharField(max_length=50, choices=ACTION_CHOICES)
    aggregate_id = models.CharField(max_length=1024)
    changes = models.JSONField(default=dict, help_text="Event payload")
    occurred_at = models.DateTimeField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "audit_logs"
        ordering = ["-occurred_at"]
        indexes = [
            models.Index(fields=["action"], name="audit_logs_action_idx"),
            models.Index(fields=["occurred_at"], name="audit_logs_occurred_idx"),
        ]

    def __str__(self):
        return f"{self.action} - {self.aggregate_id}"
