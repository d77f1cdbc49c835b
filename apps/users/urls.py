from django.urls import path

from .views import (
    DonorProfileView,
    LoginView,
    MeView,
    PortalCredentialDetailView,
    PortalCredentialListCreateView,
    PortalLoginView,
    RegisterView,
)

urlpatterns = [
    # Authentication & registration
    path("auth/register/", RegisterView.as_view(), name="register"),
    path("auth/login/", LoginView.as_view(), name="login"),
    path("auth/me/", MeView.as_view(), name="me"),
    path("auth/me/profile/", DonorProfileView.as_view(), name="donor-profile"),

    # Portal credentials
    path("portal/login/", PortalLoginView.as_view(), name="portal-login"),
    path("portal/admin/credentials/", PortalCredentialListCreateView.as_view(), name="portal-credentials"),
    path("portal/admin/credentials/<int:pk>/", PortalCredentialDetailView.as_view(), name="portal-credential-detail"),
]
