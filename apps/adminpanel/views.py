import logging
from decimal import Decimal

from django.db import transaction
from django.db.models import Count, DecimalField, Sum, Value
from django.db.models.functions import Coalesce
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError
from rest_framework.generics import ListAPIView, get_object_or_404
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.cores.constants import BRANDING
from apps.cores.exceptions import Conflict
from apps.cores.serializers import DecisionSerializer
from apps.cores.uploads import store_upload
from apps.donations.models import Donation
from apps.donations.serializers import DonationSerializer
from apps.progress.models import ProgressUpdate
from apps.progress.serializers import ProgressUpdateSerializer
from apps.progress.services import approve_progress_update, reject_progress_update
from apps.projects.models import Project
from apps.projects.serializers import ProjectSerializer
from apps.projects.services import approve_project, assign_field_workers, reject_project
from apps.users.models import REGISTRATION_VERIFIED, ROLE_DONOR, ROLE_FIELD, ROLE_RECEIVER, User
from apps.users.permissions import IsAdmin

from .models import DEFAULT_SETTINGS, AppSettings
from .serializers import (
    AccountStatusSerializer,
    AdminAccountCreateSerializer,
    AdminAccountSerializer,
    AppSettingsSerializer,
    AssignFieldWorkersSerializer,
    DonorSummarySerializer,
)
from .services import set_account_active, verify_account

logger = logging.getLogger(__name__)

ADMIN_PERMISSIONS = [IsAuthenticated, IsAdmin]

ACCOUNT_LABELS = {
    ROLE_FIELD: "Field worker",
    ROLE_RECEIVER: "Receiver",
}


def decision_remark(request):
    serializer = DecisionSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data["remark"]


# ---------- Projects ----------
class AdminProjectList(ListAPIView):
    serializer_class = ProjectSerializer
    permission_classes = ADMIN_PERMISSIONS
    pagination_class = None
    filterset_fields = ["status", "category"]

    def get_queryset(self):
        return Project.objects.prefetch_related("assigned_field_workers")

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        return Response({"projects": self.get_serializer(queryset, many=True).data})


@api_view(["GET"])
@permission_classes(ADMIN_PERMISSIONS)
def admin_get_project(request, pk):
    project = get_object_or_404(Project, pk=pk)
    return Response({"project": ProjectSerializer(project).data})


@api_view(["POST"])
@permission_classes(ADMIN_PERMISSIONS)
def admin_approve_project(request, pk):
    remark = decision_remark(request)
    project = get_object_or_404(Project, pk=pk)
    approve_project(project, remark, actor=request.user)
    return Response({"project": ProjectSerializer(project).data})


@api_view(["POST"])
@permission_classes(ADMIN_PERMISSIONS)
def admin_reject_project(request, pk):
    remark = decision_remark(request)
    project = get_object_or_404(Project, pk=pk)
    reject_project(project, remark, actor=request.user)
    return Response({"project": ProjectSerializer(project).data})


@api_view(["POST"])
@permission_classes(ADMIN_PERMISSIONS)
def admin_assign_field_workers(request, pk):
    serializer = AssignFieldWorkersSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    project = get_object_or_404(Project, pk=pk)
    assign_field_workers(project, serializer.validated_data["field_worker_ids"])
    return Response({"project": ProjectSerializer(project).data})


# ---------- Donations ----------
class AdminDonationList(ListAPIView):
    queryset = Donation.objects.all()
    serializer_class = DonationSerializer
    permission_classes = ADMIN_PERMISSIONS
    pagination_class = None
    filterset_fields = ["verification_status", "receiver_status", "project"]

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        return Response({"donations": self.get_serializer(queryset, many=True).data})


@api_view(["POST"])
@permission_classes(ADMIN_PERMISSIONS)
def admin_approve_donation(request, pk):
    # Only the receiver who owns the project can confirm funds
    raise PermissionDenied("Donations are confirmed by receivers. Admin approval is disabled.")


@api_view(["POST"])
@permission_classes(ADMIN_PERMISSIONS)
def admin_flag_donation(request, pk):
    raise PermissionDenied("Donations are confirmed by receivers. Admin flagging is disabled.")


# ---------- Progress updates ----------
class AdminProgressUpdateList(ListAPIView):
    queryset = ProgressUpdate.objects.all()
    serializer_class = ProgressUpdateSerializer
    permission_classes = ADMIN_PERMISSIONS
    pagination_class = None
    filterset_fields = ["approval_status", "project"]

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        return Response({"updates": self.get_serializer(queryset, many=True).data})


@api_view(["POST"])
@permission_classes(ADMIN_PERMISSIONS)
def admin_approve_progress(request, pk):
    remark = decision_remark(request)
    update = get_object_or_404(ProgressUpdate.objects.select_related("project", "field_worker"), pk=pk)
    approve_progress_update(update, remark, actor=request.user)
    return Response({"update": ProgressUpdateSerializer(update).data})


@api_view(["POST"])
@permission_classes(ADMIN_PERMISSIONS)
def admin_reject_progress(request, pk):
    remark = decision_remark(request)
    update = get_object_or_404(ProgressUpdate.objects.select_related("project", "field_worker"), pk=pk)
    reject_progress_update(update, remark, actor=request.user)
    return Response({"update": ProgressUpdateSerializer(update).data})


# ---------- Accounts ----------
def get_account(role, pk):
    user = User.objects.filter(pk=pk, role=role).first()
    if user is None:
        raise NotFound(f"{ACCOUNT_LABELS[role]} not found")
    return user


class AdminAccountListCreate(APIView):
    """
    Field workers or receivers, depending on `role`. Accounts created here
    are verified from the start.
    """
    permission_classes = ADMIN_PERMISSIONS
    role = None

    def get(self, request):
        users = User.objects.filter(role=self.role)
        return Response({"users": AdminAccountSerializer(users, many=True).data})

    def post(self, request):
        serializer = AdminAccountCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        if User.objects.filter(email=data["email"]).exists():
            raise Conflict("Email already in use")

        user = User.objects.create_user(
            data["email"],
            data["password"],
            role=self.role,
            name=data.get("name", ""),
            registration_status=REGISTRATION_VERIFIED,
        )
        logger.info("Admin created %s account %s", self.role, user.id)

        return Response(
            {"user": {"id": user.id, "email": user.email, "role": user.role, "name": user.name}},
            status=status.HTTP_201_CREATED,
        )


class AdminAccountVerify(APIView):
    permission_classes = ADMIN_PERMISSIONS
    role = None

    def post(self, request, pk):
        user = get_account(self.role, pk)
        verify_account(user, actor=request.user)
        return Response({"user": AdminAccountSerializer(user).data})


class AdminAccountStatus(APIView):
    permission_classes = ADMIN_PERMISSIONS
    role = None

    def patch(self, request, pk):
        serializer = AccountStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = get_account(self.role, pk)
        set_account_active(user, serializer.validated_data["is_active"])
        return Response({"user": AdminAccountSerializer(user).data})


class AdminDonorList(APIView):
    permission_classes = ADMIN_PERMISSIONS

    def get(self, request):
        donors = User.objects.filter(role=ROLE_DONOR).annotate(
            donation_count=Count("donations"),
            total_amount=Coalesce(
                Sum("donations__amount"),
                Value(Decimal("0")),
                output_field=DecimalField(max_digits=16, decimal_places=2),
            ),
        )
        return Response({"donors": DonorSummarySerializer(donors, many=True).data})


# ---------- Settings ----------
class AppSettingsView(APIView):
    """
    Public read (defaults when nothing is stored); admin write.
    """
    parser_classes = [JSONParser, FormParser, MultiPartParser]

    def get_permissions(self):
        if self.request.method == "GET":
            return [AllowAny()]
        return [permission() for permission in ADMIN_PERMISSIONS]

    def get(self, request):
        current = AppSettings.current()
        data = AppSettingsSerializer(current).data if current else DEFAULT_SETTINGS
        return Response({"settings": data})

    def put(self, request):
        current = AppSettings.current()
        serializer = AppSettingsSerializer(current, data=request.data)
        serializer.is_valid(raise_exception=True)
        settings_row = serializer.save()

        return Response(
            {"settings": AppSettingsSerializer(settings_row).data},
            status=status.HTTP_200_OK if current else status.HTTP_201_CREATED,
        )

    def delete(self, request):
        AppSettings.objects.all().delete()
        return Response({"ok": True})


class AppSettingsLogoView(APIView):
    permission_classes = ADMIN_PERMISSIONS
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request):
        logo = request.FILES.get("logo")
        if logo is None:
            raise ValidationError("No file uploaded")

        logo_path = store_upload(logo, BRANDING)

        with transaction.atomic():
            current = AppSettings.current()
            created = current is None
            if created:
                current = AppSettings(**{**DEFAULT_SETTINGS, "logo_path": logo_path})
            else:
                current.logo_path = logo_path
            current.save()

        return Response(
            {"settings": AppSettingsSerializer(current).data},
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )
