"""
Serializers for Registry API endpoints.

Metadata bounds are enforced by the registry itself, so the request
serializers accept any text and leave length checks to the domain.
"""

from rest_framework import serializers


def _metadata_field(**kwargs) -> serializers.CharField:
    return serializers.CharField(allow_blank=True, trim_whitespace=False, **kwargs)


class GrantLicenseRequestSerializer(serializers.Serializer):
    """Serializer for grant license request."""

    metadata = _metadata_field(required=True)


class BatchGrantLicensesRequestSerializer(serializers.Serializer):
    """Serializer for batch grant request."""

    metadatas = serializers.ListField(child=_metadata_field(), allow_empty=True, required=True)


class TransferLicenseRequestSerializer(serializers.Serializer):
    """Serializer for transfer license request."""

    from_holder = serializers.CharField(required=True, max_length=255)
    to_holder = serializers.CharField(required=True, max_length=255)


class UpdateLicenseMetadataRequestSerializer(serializers.Serializer):
    """Serializer for update metadata request."""

    metadata = _metadata_field(required=True)


class GrantLicenseResponseSerializer(serializers.Serializer):
    """Serializer for grant license response."""

    license_id = serializers.IntegerField()


class BatchGrantResponseSerializer(serializers.Serializer):
    """Serializer for batch grant response."""

    license_ids = serializers.ListField(child=serializers.IntegerField())
    requested = serializers.IntegerField()
    issued = serializers.IntegerField()


class LicenseResponseSerializer(serializers.Serializer):
    """Serializer for LicenseDTO."""

    id = serializers.IntegerField()
    holder = serializers.CharField(allow_null=True)
    metadata = serializers.CharField(trim_whitespace=False)
    status = serializers.CharField()
    is_revoked = serializers.BooleanField()


class LicenseStatusResponseSerializer(serializers.Serializer):
    """Serializer for LicenseStatusDTO."""

    license_id = serializers.IntegerField()
    exists = serializers.BooleanField()
    is_valid = serializers.BooleanField()
    is_revoked = serializers.BooleanField()
    is_id_in_range = serializers.BooleanField()
    holder = serializers.CharField(allow_null=True)


class RegistryStatusResponseSerializer(serializers.Serializer):
    """Serializer for RegistryStatusDTO."""

    total_issued = serializers.IntegerField()
    is_caller_admin = serializers.BooleanField()


class OperationResultSerializer(serializers.Serializer):
    """Serializer for holder operation results."""

    license_id = serializers.IntegerField()
    success = serializers.BooleanField()
