import logging

from rest_framework import status
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.cores.constants import MAX_PROGRESS_MEDIA_FILES, PROGRESS_MEDIA
from apps.cores.uploads import store_uploads, uploaded_files
from apps.projects.constants import STATUS_APPROVED
from apps.projects.models import Project
from apps.projects.serializers import ProjectSerializer
from apps.users.permissions import HasUserAccount, IsFieldWorker, IsVerifiedAccount

from .models import ProgressUpdate
from .serializers import ProgressUpdateCreateSerializer, ProgressUpdateSerializer

logger = logging.getLogger(__name__)


def get_assigned_project(user, pk):
    project = Project.objects.filter(pk=pk).first()
    if project is None:
        raise NotFound("Project not found")
    if not project.is_assigned(user):
        raise PermissionDenied("Forbidden")
    return project


class FieldProjectListView(APIView):
    """Approved projects the field worker is assigned to."""
    permission_classes = [IsAuthenticated, IsFieldWorker, HasUserAccount]

    def get(self, request):
        projects = Project.objects.filter(
            status=STATUS_APPROVED,
            assigned_field_workers=request.user,
        ).prefetch_related("assigned_field_workers")
        return Response({"projects": ProjectSerializer(projects, many=True).data})


class FieldProjectDetailView(APIView):
    permission_classes = [IsAuthenticated, IsFieldWorker, HasUserAccount]

    def get(self, request, pk):
        project = get_assigned_project(request.user, pk)
        return Response({"project": ProjectSerializer(project).data})


class FieldProgressView(APIView):
    """
    GET: the worker's own updates for a project.
    POST: report progress on one step, with at least one media file
    (multipart field `media`).
    """
    permission_classes = [IsAuthenticated, IsFieldWorker, HasUserAccount]
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def get_permissions(self):
        permissions = super().get_permissions()
        if self.request.method == "POST":
            permissions.append(IsVerifiedAccount())
        return permissions

    def get(self, request, pk):
        project = get_assigned_project(request.user, pk)
        updates = ProgressUpdate.objects.filter(project=project, field_worker=request.user)
        return Response({"updates": ProgressUpdateSerializer(updates, many=True).data})

    def post(self, request, pk):
        serializer = ProgressUpdateCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        project = get_assigned_project(request.user, pk)

        step = project.get_step(data["step_key"])
        if step is None:
            raise ValidationError("Invalid step")

        files = uploaded_files(request, "media")
        if not files:
            raise ValidationError("At least one proof file is required")
        if len(files) > MAX_PROGRESS_MEDIA_FILES:
            raise ValidationError(f"At most {MAX_PROGRESS_MEDIA_FILES} media files are allowed")

        update = ProgressUpdate.objects.create(
            project=project,
            field_worker=request.user,
            step_key=step["key"],
            step_title=step["title"],
            work_status=data["work_status"],
            percent_complete=data["percent_complete"],
            amount_used=data["amount_used"],
            notes=data["notes"],
            media_paths=store_uploads(files, PROGRESS_MEDIA),
        )
        logger.info("Field worker %s reported progress %s on project %s", request.user.id, update.id, project.id)

        return Response({"update": ProgressUpdateSerializer(update).data}, status=status.HTTP_201_CREATED)
