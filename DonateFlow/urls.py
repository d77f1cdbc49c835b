from django.conf import settings
from django.contrib import admin
from django.http import JsonResponse
from django.urls import include, path, re_path
from django.views.static import serve
from drf_spectacular.views import (
    SpectacularAPIView, SpectacularSwaggerView, SpectacularRedocView
)
from rest_framework_simplejwt.views import TokenRefreshView


def health(request):
    return JsonResponse({"ok": True})


def api_root(request):
    return JsonResponse({"name": "donateflow-api"})


urlpatterns = [
    path("health", health, name="health"),

    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("api/redoc/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),

    path("api/", api_root, name="api-root"),
    path("api/", include("apps.users.urls")),
    path("api/", include("apps.adminpanel.urls")),
    path("api/", include("apps.projects.urls")),
    path("api/", include("apps.donations.urls")),
    path("api/", include("apps.progress.urls")),
    path("api/", include("apps.notifications.urls")),
    path("api/token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),

    path("admin/", admin.site.urls),

    # uploads are public, read-only
    re_path(
        r"^%s(?P<path>.*)$" % settings.MEDIA_URL.lstrip("/"),
        serve,
        {"document_root": settings.MEDIA_ROOT},
        name="uploads",
    ),
]
