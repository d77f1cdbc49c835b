from django.urls import path

from .views import (
    MyProjectsView,
    ProjectCreateView,
    ProjectDetailView,
    PublicProjectDetailView,
    PublicProjectListView,
)

urlpatterns = [
    # Receiver
    path("projects/", ProjectCreateView.as_view(), name="project-create"),
    path("projects/mine/", MyProjectsView.as_view(), name="projects-mine"),
    path("projects/<int:pk>/", ProjectDetailView.as_view(), name="project-detail"),

    # Public
    path("public/projects/", PublicProjectListView.as_view(), name="public-projects"),
    path("public/projects/<int:pk>/", PublicProjectDetailView.as_view(), name="public-project-detail"),
]
