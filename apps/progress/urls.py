from django.urls import path

from .views import FieldProgressView, FieldProjectDetailView, FieldProjectListView

urlpatterns = [
    path("field/projects/", FieldProjectListView.as_view(), name="field-projects"),
    path("field/projects/<int:pk>/", FieldProjectDetailView.as_view(), name="field-project-detail"),
    path("field/projects/<int:pk>/progress/", FieldProgressView.as_view(), name="field-project-progress"),
]
