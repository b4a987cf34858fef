"""
Registry API views.

Administrators issue licenses through these endpoints; holders revoke
them and update their metadata; recipients accept transfers. The caller
identity comes from CallerIdentityMiddleware.
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.registry.serializers import (
    BatchGrantLicensesRequestSerializer,
    BatchGrantResponseSerializer,
    GrantLicenseRequestSerializer,
    GrantLicenseResponseSerializer,
    LicenseResponseSerializer,
    LicenseStatusResponseSerializer,
    OperationResultSerializer,
    RegistryStatusResponseSerializer,
    TransferLicenseRequestSerializer,
    UpdateLicenseMetadataRequestSerializer,
)
from core.domain.exceptions import LicenseNotFoundError
from core.instrumentation import Status, StatusCode, get_tracer
from registry.application.commands.batch_grant_licenses import BatchGrantLicensesCommand
from registry.application.commands.grant_license import GrantLicenseCommand
from registry.application.commands.revoke_license import RevokeLicenseCommand
from registry.application.commands.transfer_license import TransferLicenseCommand
from registry.application.commands.update_license_metadata import (
    UpdateLicenseMetadataCommand,
)
from registry.application.handlers.license_lifecycle_handlers import (
    BatchGrantLicensesHandler,
    GrantLicenseHandler,
    RevokeLicenseHandler,
    TransferLicenseHandler,
    UpdateLicenseMetadataHandler,
)
from registry.application.handlers.license_query_handlers import (
    GetLicenseHandler,
    GetLicenseStatusHandler,
    GetRegistryStatusHandler,
)
from registry.application.queries.get_license import GetLicenseQuery
from registry.application.queries.get_registry_status import GetRegistryStatusQuery
from registry.infrastructure.container import get_license_registry

tracer = get_tracer(__name__)

CALLER_PARAMETER = OpenApiParameter(
    name="X-Caller-Identity",
    type=str,
    location=OpenApiParameter.HEADER,
    required=True,
    description="Identity of the caller, set by the authenticating gateway",
)

ERROR_RESPONSES = {
    400: {"description": "Invalid input"},
    401: {"description": "Missing caller identity"},
    403: {"description": "Caller not authorized"},
}


def _caller(request: Request):
    return getattr(request, "caller_identity", None)


def _validation_error(serializer) -> Response:
    return Response(
        {"error": {"code": "VALIDATION_ERROR", "message": serializer.errors}},
        status=status.HTTP_400_BAD_REQUEST,
    )


class GrantLicenseView(APIView):
    """View for issuing a single license."""

    @extend_schema(
        operation_id="grant_license",
        summary="Grant License",
        description=(
            "Issue a new license held by the registry administrator. "
            "Metadata must be 1 to 512 characters."
        ),
        tags=["Registry API"],
        parameters=[CALLER_PARAMETER],
        request=GrantLicenseRequestSerializer,
        responses={201: GrantLicenseResponseSerializer, **ERROR_RESPONSES},
    )
    def post(self, request: Request) -> Response:
        """Grant a license."""
        return async_to_sync(self._handle_grant)(request, get_license_registry())

    async def _handle_grant(self, request: Request, registry) -> Response:
        """Async handler for grant license."""
        with tracer.start_as_current_span("grant_license") as span:
            serializer = GrantLicenseRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return _validation_error(serializer)

            command = GrantLicenseCommand(
                caller=_caller(request),
                metadata=serializer.validated_data["metadata"],
            )
            result = await GrantLicenseHandler(registry).handle(command)

            span.set_attribute("license.id", result.license_id)
            span.set_status(Status(StatusCode.OK))
            return Response(
                GrantLicenseResponseSerializer(result).data, status=status.HTTP_201_CREATED
            )


class BatchGrantLicensesView(APIView):
    """View for issuing licenses in a batch."""

    @extend_schema(
        operation_id="batch_grant_licenses",
        summary="Batch Grant Licenses",
        description=(
            "Issue up to 50 licenses in input order. Every entry is validated "
            "before issuance starts. Entries that fail during issuance are "
            "skipped, so 'issued' can be lower than 'requested'."
        ),
        tags=["Registry API"],
        parameters=[CALLER_PARAMETER],
        request=BatchGrantLicensesRequestSerializer,
        responses={201: BatchGrantResponseSerializer, **ERROR_RESPONSES},
    )
    def post(self, request: Request) -> Response:
        """Grant licenses in a batch."""
        return async_to_sync(self._handle_batch_grant)(request, get_license_registry())

    async def _handle_batch_grant(self, request: Request, registry) -> Response:
        """Async handler for batch grant."""
        with tracer.start_as_current_span("batch_grant_licenses") as span:
            serializer = BatchGrantLicensesRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return _validation_error(serializer)

            command = BatchGrantLicensesCommand(
                caller=_caller(request),
                metadatas=serializer.validated_data["metadatas"],
            )
            result = await BatchGrantLicensesHandler(registry).handle(command)

            span.set_attribute("batch.requested", result.requested)
            span.set_attribute("batch.issued", result.issued)
            span.set_status(Status(StatusCode.OK))
            return Response(
                BatchGrantResponseSerializer(result).data, status=status.HTTP_201_CREATED
            )


class LicenseDetailView(APIView):
    """View for reading a license."""

    @extend_schema(
        operation_id="get_license",
        summary="Get License",
        description="Return the holder, metadata and revocation status of a license.",
        tags=["Registry API"],
        responses={200: LicenseResponseSerializer, 404: {"description": "License not found"}},
    )
    def get(self, request: Request, license_id: int) -> Response:
        """Get a license."""
        return async_to_sync(self._handle_get)(license_id, get_license_registry())

    async def _handle_get(self, license_id: int, registry) -> Response:
        """Async handler for get license."""
        result = await GetLicenseHandler(registry).handle(GetLicenseQuery(license_id=license_id))
        if result is None:
            raise LicenseNotFoundError(f"License {license_id} not found")
        return Response(LicenseResponseSerializer(result).data, status=status.HTTP_200_OK)


class LicenseStatusView(APIView):
    """View for the status flags of a license ID."""

    @extend_schema(
        operation_id="get_license_status",
        summary="Get License Status",
        description=(
            "Report whether a license ID exists, is valid, is revoked and lies "
            "within the issued range. Unknown IDs report every flag as false."
        ),
        tags=["Registry API"],
        responses={200: LicenseStatusResponseSerializer},
    )
    def get(self, request: Request, license_id: int) -> Response:
        """Get license status flags."""
        registry = get_license_registry()
        result = async_to_sync(GetLicenseStatusHandler(registry).handle)(
            GetLicenseQuery(license_id=license_id)
        )
        return Response(LicenseStatusResponseSerializer(result).data, status=status.HTTP_200_OK)


class RevokeLicenseView(APIView):
    """View for revoking a license."""

    @extend_schema(
        operation_id="revoke_license",
        summary="Revoke License",
        description="Permanently revoke a license. Only its current holder can revoke it.",
        tags=["Registry API"],
        parameters=[CALLER_PARAMETER],
        request=None,
        responses={
            200: OperationResultSerializer,
            404: {"description": "License not found"},
            409: {"description": "License already revoked"},
            **ERROR_RESPONSES,
        },
    )
    def post(self, request: Request, license_id: int) -> Response:
        """Revoke a license."""
        return async_to_sync(self._handle_revoke)(request, license_id, get_license_registry())

    async def _handle_revoke(self, request: Request, license_id: int, registry) -> Response:
        """Async handler for revoke license."""
        with tracer.start_as_current_span("revoke_license") as span:
            span.set_attribute("license.id", license_id)
            command = RevokeLicenseCommand(caller=_caller(request), license_id=license_id)
            success = await RevokeLicenseHandler(registry).handle(command)
            span.set_status(Status(StatusCode.OK))
            return Response(
                OperationResultSerializer({"license_id": license_id, "success": success}).data,
                status=status.HTTP_200_OK,
            )


class TransferLicenseView(APIView):
    """View for accepting a license transfer."""

    @extend_schema(
        operation_id="transfer_license",
        summary="Transfer License",
        description=(
            "Move a license from its current holder to the caller. The caller "
            "must be 'to_holder' and 'from_holder' must be the current holder."
        ),
        tags=["Registry API"],
        parameters=[CALLER_PARAMETER],
        request=TransferLicenseRequestSerializer,
        responses={
            200: OperationResultSerializer,
            404: {"description": "License not found"},
            409: {"description": "License revoked"},
            **ERROR_RESPONSES,
        },
    )
    def post(self, request: Request, license_id: int) -> Response:
        """Transfer a license."""
        return async_to_sync(self._handle_transfer)(request, license_id, get_license_registry())

    async def _handle_transfer(self, request: Request, license_id: int, registry) -> Response:
        """Async handler for transfer license."""
        with tracer.start_as_current_span("transfer_license") as span:
            span.set_attribute("license.id", license_id)
            serializer = TransferLicenseRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return _validation_error(serializer)

            command = TransferLicenseCommand(
                caller=_caller(request),
                license_id=license_id,
                from_holder=serializer.validated_data["from_holder"],
                to_holder=serializer.validated_data["to_holder"],
            )
            success = await TransferLicenseHandler(registry).handle(command)
            span.set_status(Status(StatusCode.OK))
            return Response(
                OperationResultSerializer({"license_id": license_id, "success": success}).data,
                status=status.HTTP_200_OK,
            )


class UpdateLicenseMetadataView(APIView):
    """View for replacing license metadata."""

    @extend_schema(
        operation_id="update_license_metadata",
        summary="Update License Metadata",
        description="Replace the metadata of a license. Only its current holder can do so.",
        tags=["Registry API"],
        parameters=[CALLER_PARAMETER],
        request=UpdateLicenseMetadataRequestSerializer,
        responses={
            200: OperationResultSerializer,
            404: {"description": "License not found"},
            **ERROR_RESPONSES,
        },
    )
    def patch(self, request: Request, license_id: int) -> Response:
        """Update license metadata."""
        return async_to_sync(self._handle_update)(request, license_id, get_license_registry())

    async def _handle_update(self, request: Request, license_id: int, registry) -> Response:
        """Async handler for metadata update."""
        with tracer.start_as_current_span("update_license_metadata") as span:
            span.set_attribute("license.id", license_id)
            serializer = UpdateLicenseMetadataRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return _validation_error(serializer)

            command = UpdateLicenseMetadataCommand(
                caller=_caller(request),
                license_id=license_id,
                metadata=serializer.validated_data["metadata"],
            )
            success = await UpdateLicenseMetadataHandler(registry).handle(command)
            span.set_status(Status(StatusCode.OK))
            return Response(
                OperationResultSerializer({"license_id": license_id, "success": success}).data,
                status=status.HTTP_200_OK,
            )


class RegistryStatusView(APIView):
    """View for registry-wide status."""

    @extend_schema(
        operation_id="get_registry_status",
        summary="Registry Status",
        description="Return the number of issued licenses and whether the caller is the administrator.",
        tags=["Registry API"],
        parameters=[
            OpenApiParameter(
                name="X-Caller-Identity",
                type=str,
                location=OpenApiParameter.HEADER,
                required=False,
                description="Identity of the caller, set by the authenticating gateway",
            )
        ],
        responses={200: RegistryStatusResponseSerializer},
    )
    def get(self, request: Request) -> Response:
        """Get registry status."""
        registry = get_license_registry()
        result = async_to_sync(GetRegistryStatusHandler(registry).handle)(
            GetRegistryStatusQuery(caller=_caller(request))
        )
        return Response(RegistryStatusResponseSerializer(result).data, status=status.HTTP_200_OK)
