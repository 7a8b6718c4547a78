"""
URL configuration for license API endpoints.
"""

from django.urls import path

from api.v1.licenses import views

urlpatterns = [
    path("licenses", views.LicenseCollectionView.as_view(), name="licenses"),
    path("licenses:batch", views.LicenseBatchView.as_view(), name="licenses-batch"),
    path("licenses:stats", views.LicenseStatsView.as_view(), name="licenses-stats"),
    path("licenses:importCsv", views.LicenseImportView.as_view(), name="licenses-import"),
    path("licenses:exportCsv", views.LicenseExportView.as_view(), name="licenses-export"),
    path(
        "licenses:emailStatus",
        views.LicenseEmailStatusView.as_view(),
        name="licenses-email-status",
    ),
    path(
        "licenses/<uuid:license_id>",
        views.LicenseDetailView.as_view(),
        name="license-detail",
    ),
    path(
        "licenses/<uuid:license_id>:resend",
        views.LicenseResendView.as_view(),
        name="license-resend",
    ),
    path(
        "licenses/<uuid:license_id>:email",
        views.LicenseEmailView.as_view(),
        name="license-email",
    ),
]
