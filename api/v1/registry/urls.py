"""
URL configuration for registry API endpoints.
"""

from django.urls import path

from api.v1.registry import views

app_name = "registry"

urlpatterns = [
    path(
        "licenses/",
        views.GrantLicenseView.as_view(),
        name="grant-license",
    ),
    path(
        "licenses/batch/",
        views.BatchGrantLicensesView.as_view(),
        name="batch-grant-licenses",
    ),
    path(
        "licenses/<int:license_id>/",
        views.LicenseDetailView.as_view(),
        name="license-detail",
    ),
    path(
        "licenses/<int:license_id>/status/",
        views.LicenseStatusView.as_view(),
        name="license-status",
    ),
    path(
        "licenses/<int:license_id>/revoke/",
        views.RevokeLicenseView.as_view(),
        name="revoke-license",
    ),
    path(
        "licenses/<int:license_id>/transfer/",
        views.TransferLicenseView.as_view(),
        name="transfer-license",
    ),
    path(
        "licenses/<int:license_id>/metadata/",
        views.UpdateLicenseMetadataView.as_view(),
        name="update-license-metadata",
    ),
    path(
        "status/",
        views.RegistryStatusView.as_view(),
        name="registry-status",
    ),
]
