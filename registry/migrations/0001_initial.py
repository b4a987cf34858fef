import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="AuditLog",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("event_id", models.UUIDField(unique=True)),
                (
                    "action",
                    models.CharField(
                        choices=[
                            ("LicenseGranted", "License Granted"),
                            ("LicensesBatchGranted", "Licenses Batch Granted"),
                            ("LicenseTransferred", "License Transferred"),
                            ("LicenseRevoked", "License Revoked"),
                            ("LicenseMetadataUpdated", "License Metadata Updated"),
                        ],
                        max_length=50,
                    ),
                ),
                ("aggregate_id", models.CharField(max_length=1024)),
                ("changes", models.JSONField(default=dict, help_text="Event payload")),
                ("occurred_at", models.DateTimeField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "db_table": "audit_logs",
                "ordering": ["-occurred_at"],
                "indexes": [
                    models.Index(fields=["action"], name="audit_logs_action_idx"),
                    models.Index(fields=["occurred_at"], name="audit_logs_occurred_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="LicenseMetadata",
            fields=[
                ("license_id", models.PositiveBigIntegerField(primary_key=True, serialize=False)),
                ("metadata", models.CharField(max_length=512)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "license_metadata",
                "ordering": ["license_id"],
                "verbose_name_plural": "license metadata",
            },
        ),
        migrations.CreateModel(
            name="LicenseRevocation",
            fields=[
                ("license_id", models.PositiveBigIntegerField(primary_key=True, serialize=False)),
                ("revoked_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "db_table": "license_revocations",
                "ordering": ["license_id"],
            },
        ),
        migrations.CreateModel(
            name="OwnershipRecord",
            fields=[
                ("license_id", models.PositiveBigIntegerField(primary_key=True, serialize=False)),
                ("owner", models.CharField(db_index=True, max_length=255)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "ownership_records",
                "ordering": ["license_id"],
            },
        ),
        migrations.CreateModel(
            name="RegistryState",
            fields=[
                (
                    "id",
                    models.PositiveSmallIntegerField(
                        default=1, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("administrator", models.CharField(max_length=255)),
                ("last_issued_id", models.PositiveBigIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "registry_state",
            },
        ),
    ]
