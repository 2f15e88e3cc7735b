"""
URL configuration for admin API endpoints.
"""

from django.urls import path

from api.v1.admin import views

urlpatterns = [
    path(
        "licenses",
        views.ListLicensesView.as_view(),
        name="list-licenses",
    ),
    path(
        "licenses/issue",
        views.IssueLicenseKeyView.as_view(),
        name="issue-license-key",
    ),
    path(
        "licenses/ban",
        views.BanLicenseView.as_view(),
        name="ban-license",
    ),
    path(
        "licenses/unban",
        views.UnbanLicenseView.as_view(),
        name="unban-license",
    ),
    path(
        "devices/ban",
        views.BanDeviceView.as_view(),
        name="ban-device",
    ),
    path(
        "devices/unban",
        views.UnbanDeviceView.as_view(),
        name="unban-device",
    ),
    path(
        "devices/banned",
        views.ListBannedDevicesView.as_view(),
        name="list-banned-devices",
    ),
]
