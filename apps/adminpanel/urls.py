from django.urls import path

from apps.users.models import ROLE_FIELD, ROLE_RECEIVER

from .views import (
    AdminAccountListCreate,
    AdminAccountStatus,
    AdminAccountVerify,
    AdminDonationList,
    AdminDonorList,
    AdminProgressUpdateList,
    AdminProjectList,
    AppSettingsLogoView,
    AppSettingsView,
    admin_approve_donation,
    admin_approve_progress,
    admin_approve_project,
    admin_assign_field_workers,
    admin_flag_donation,
    admin_get_project,
    admin_reject_progress,
    admin_reject_project,
)

urlpatterns = [
    # Projects
    path("admin/projects/", AdminProjectList.as_view(), name="admin-projects"),
    path("admin/projects/<int:pk>/", admin_get_project, name="admin-project-detail"),
    path("admin/projects/<int:pk>/approve/", admin_approve_project, name="admin-project-approve"),
    path("admin/projects/<int:pk>/reject/", admin_reject_project, name="admin-project-reject"),
    path("admin/projects/<int:pk>/assign-field/", admin_assign_field_workers, name="admin-project-assign-field"),

    # Donations (read only for admins)
    path("admin/donations/", AdminDonationList.as_view(), name="admin-donations"),
    path("admin/donations/<int:pk>/approve/", admin_approve_donation, name="admin-donation-approve"),
    path("admin/donations/<int:pk>/flag/", admin_flag_donation, name="admin-donation-flag"),

    # Progress updates
    path("admin/progress-updates/", AdminProgressUpdateList.as_view(), name="admin-progress-updates"),
    path("admin/progress-updates/<int:pk>/approve/", admin_approve_progress, name="admin-progress-approve"),
    path("admin/progress-updates/<int:pk>/reject/", admin_reject_progress, name="admin-progress-reject"),

    # Accounts
    path("admin/field-workers/", AdminAccountListCreate.as_view(role=ROLE_FIELD), name="admin-field-workers"),
    path("admin/field-workers/<int:pk>/verify/", AdminAccountVerify.as_view(role=ROLE_FIELD), name="admin-field-worker-verify"),
    path("admin/field-workers/<int:pk>/status/", AdminAccountStatus.as_view(role=ROLE_FIELD), name="admin-field-worker-status"),
    path("admin/receivers/", AdminAccountListCreate.as_view(role=ROLE_RECEIVER), name="admin-receivers"),
    path("admin/receivers/<int:pk>/verify/", AdminAccountVerify.as_view(role=ROLE_RECEIVER), name="admin-receiver-verify"),
    path("admin/receivers/<int:pk>/status/", AdminAccountStatus.as_view(role=ROLE_RECEIVER), name="admin-receiver-status"),
    path("admin/donors/", AdminDonorList.as_view(), name="admin-donors"),

    # Organisation settings
    path("settings/", AppSettingsView.as_view(), name="app-settings"),
    path("settings/logo/", AppSettingsLogoView.as_view(), name="app-settings-logo"),
]
