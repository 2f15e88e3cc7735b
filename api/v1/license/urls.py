"""
URL configuration for client license API endpoints.
"""

from django.urls import path

from api.v1.license import views

urlpatterns = [
    path(
        "activate",
        views.ActivateLicenseView.as_view(),
        name="activate-license",
    ),
    path(
        "check",
        views.CheckLicenseView.as_view(),
        name="check-license",
    ),
]
