import logging

from django.shortcuts import get_object_or_404
from rest_framework import generics, status
from rest_framework.exceptions import PermissionDenied, ValidationError
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.cores.constants import MAX_VERIFICATION_FILES, RECEIVER_VERIFICATIONS
from apps.cores.uploads import store_uploads, uploaded_files
from apps.progress.models import ProgressUpdate
from apps.progress.serializers import ProgressUpdateSerializer
from apps.users.models import ROLE_ADMIN
from apps.users.permissions import HasUserAccount, IsReceiver, IsVerifiedAccount

from .constants import STATUS_APPROVED
from .models import Project
from .serializers import ProjectCreateSerializer, ProjectSerializer, PublicProjectSerializer

logger = logging.getLogger(__name__)


class ProjectCreateView(APIView):
    """
    A verified receiver submits a funding request with verification files
    (multipart field `verification_files`).
    """
    permission_classes = [IsAuthenticated, IsReceiver, HasUserAccount, IsVerifiedAccount]
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def post(self, request):
        serializer = ProjectCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        files = uploaded_files(request, "verification_files")
        if not files:
            raise ValidationError("Verification images are required")
        if len(files) > MAX_VERIFICATION_FILES:
            raise ValidationError(f"At most {MAX_VERIFICATION_FILES} verification files are allowed")

        project = serializer.save(
            receiver=request.user,
            verification_media_paths=store_uploads(files, RECEIVER_VERIFICATIONS),
        )
        logger.info("Receiver %s submitted project %s", request.user.id, project.id)

        return Response({"project": ProjectSerializer(project).data}, status=status.HTTP_201_CREATED)


class MyProjectsView(APIView):
    permission_classes = [IsAuthenticated, IsReceiver, HasUserAccount]

    def get(self, request):
        projects = Project.objects.filter(receiver=request.user).prefetch_related("assigned_field_workers")
        return Response({"projects": ProjectSerializer(projects, many=True).data})


class ProjectDetailView(APIView):
    """Owner or admin only."""
    permission_classes = [IsAuthenticated, HasUserAccount]

    def get(self, request, pk):
        project = get_object_or_404(Project, pk=pk)
        if request.user.role != ROLE_ADMIN and project.receiver_id != request.user.id:
            raise PermissionDenied("Forbidden")
        return Response({"project": ProjectSerializer(project).data})


# -------- Public --------
class PublicProjectListView(generics.ListAPIView):
    serializer_class = PublicProjectSerializer
    permission_classes = [AllowAny]
    authentication_classes = []
    pagination_class = None
    filterset_fields = ["category", "urgency_level"]

    def get_queryset(self):
        return Project.objects.filter(status=STATUS_APPROVED)

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        return Response({"projects": self.get_serializer(queryset, many=True).data})


class PublicProjectDetailView(APIView):
    """Approved projects only, with their approved progress updates."""
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request, pk):
        project = get_object_or_404(Project, pk=pk, status=STATUS_APPROVED)
        updates = ProgressUpdate.objects.filter(
            project=project,
            approval_status=ProgressUpdate.APPROVAL_APPROVED,
        )
        return Response({
            "project": PublicProjectSerializer(project).data,
            "updates": ProgressUpdateSerializer(updates, many=True).data,
        })
