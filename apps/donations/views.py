import logging

from django.conf import settings

from rest_framework import status
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.cores.constants import DONATION_PROOFS, MAX_PROOF_FILES
from apps.cores.serializers import DecisionSerializer
from apps.cores.uploads import store_uploads, uploaded_files
from apps.projects.constants import STATUS_APPROVED
from apps.projects.models import Project
from apps.users.permissions import HasUserAccount, IsDonor, IsReceiver, IsVerifiedAccount

from .constants import (
    METHOD_NOT_ENABLED_MESSAGES,
    PAYMENT_PAID,
    PROVIDER_PAYPAL,
    RECEIVER_STATUS_CHOICES,
    PaymentMethod,
)
from .models import Donation
from .paypal import PayPalClient
from .serializers import (
    CreateOfflineDonationSerializer,
    DonationSerializer,
    DonationWithProjectSerializer,
    OfflineDonationSerializer,
    PayPalCaptureSerializer,
    PayPalOrderSerializer,
)
from .services import approve_donation, reject_donation

logger = logging.getLogger(__name__)

DONOR_PERMISSIONS = [IsAuthenticated, IsDonor, HasUserAccount]
RECEIVER_PERMISSIONS = [IsAuthenticated, IsReceiver, HasUserAccount, IsVerifiedAccount]


def get_open_project(pk):
    """Donations are only taken for approved projects."""
    project = Project.objects.filter(pk=pk, status=STATUS_APPROVED).first()
    if project is None:
        raise NotFound("Project not found")
    return project


def get_donation(pk, **filters):
    donation = Donation.objects.select_related("project", "donor").filter(pk=pk, **filters).first()
    if donation is None:
        raise NotFound("Donation not found")
    return donation


def check_proof_count(files, missing_message):
    if not files:
        raise ValidationError(missing_message)
    if len(files) > MAX_PROOF_FILES:
        raise ValidationError(f"At most {MAX_PROOF_FILES} proof files are allowed")


# -------- Donor --------
class MyDonationsView(APIView):
    permission_classes = DONOR_PERMISSIONS

    def get(self, request):
        donations = Donation.objects.filter(donor=request.user).select_related("project")
        return Response({"donations": DonationWithProjectSerializer(donations, many=True).data})


class SubmitOfflineDonationView(APIView):
    """
    Donor reports a bank / JazzCash / EasyPaisa transfer with proof files
    (multipart field `proof`). The receiver confirms it later.
    """
    permission_classes = DONOR_PERMISSIONS
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def post(self, request, pk):
        project = get_open_project(pk)

        serializer = OfflineDonationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        method = data["method"]
        if method not in project.configured_methods():
            raise ValidationError(METHOD_NOT_ENABLED_MESSAGES[method])

        files = uploaded_files(request, "proof")
        check_proof_count(files, "Payment proof is required")

        donation = Donation.objects.create(
            project=project,
            donor=request.user,
            amount=data["paid_amount"],
            paid_amount=data["paid_amount"],
            method=method,
            donor_account_name=data["donor_account_name"],
            donor_account_number_or_mobile=data["donor_account_number_or_mobile"],
            transaction_id=data["transaction_id"],
            proof_paths=store_uploads(files, DONATION_PROOFS),
        )
        logger.info("Donation %s submitted offline for project %s", donation.receipt_no, project.id)

        return Response({"donation": DonationSerializer(donation).data}, status=status.HTTP_201_CREATED)


class CreateOfflineDonationView(APIView):
    """Pledge first, proof later through the proof endpoint."""
    permission_classes = DONOR_PERMISSIONS

    def post(self, request, pk):
        project = get_open_project(pk)

        serializer = CreateOfflineDonationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        donation = Donation.objects.create(
            project=project,
            donor=request.user,
            amount=serializer.validated_data["amount"],
            method=serializer.validated_data["method"],
        )
        logger.info("Donation %s created for project %s", donation.receipt_no, project.id)

        return Response({"donation": DonationSerializer(donation).data}, status=status.HTTP_201_CREATED)


class PayPalCreateOrderView(APIView):
    permission_classes = DONOR_PERMISSIONS

    def post(self, request, pk):
        project = get_open_project(pk)

        serializer = PayPalOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        order = PayPalClient().create_order(
            amount=data["amount"],
            project_title=project.title,
            return_url=data["return_url"],
            cancel_url=data["cancel_url"],
            currency=data.get("currency") or settings.PAYPAL_DEFAULT_CURRENCY,
        )

        donation = Donation.objects.create(
            project=project,
            donor=request.user,
            amount=data["amount"],
            method=PaymentMethod.PAYPAL,
            provider_type=PROVIDER_PAYPAL,
            provider_order_id=order["order_id"],
        )

        return Response(
            {
                "donation": DonationSerializer(donation).data,
                "paypal": {"order_id": order["order_id"], "approve_url": order["approve_url"]},
            },
            status=status.HTTP_201_CREATED,
        )


class PayPalCaptureView(APIView):
    """
    Called by the donor's browser after PayPal approval. Capturing a
    donation that is already paid returns it unchanged.
    """
    permission_classes = DONOR_PERMISSIONS

    def post(self, request):
        serializer = PayPalCaptureSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order_id = serializer.validated_data["order_id"]

        donation = get_donation(serializer.validated_data["donation_id"])
        if donation.donor_id != request.user.id:
            raise PermissionDenied("Forbidden")
        if donation.method != PaymentMethod.PAYPAL or donation.provider_order_id != order_id:
            raise ValidationError("Invalid PayPal donation")

        if donation.payment_status != PAYMENT_PAID:
            capture = PayPalClient().capture_order(order_id)
            donation.payment_status = PAYMENT_PAID
            donation.provider_capture_id = capture["capture_id"] or ""
            donation.save(update_fields=["payment_status", "provider_capture_id", "updated_at"])
            logger.info("Donation %s paid via PayPal", donation.receipt_no)

        return Response({"donation": DonationSerializer(donation).data})


class DonationProofView(APIView):
    permission_classes = DONOR_PERMISSIONS
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request, pk):
        donation = get_donation(pk)
        if donation.donor_id != request.user.id:
            raise PermissionDenied("Forbidden")

        files = uploaded_files(request, "proof")
        check_proof_count(files, "Proof upload is required")

        donation.proof_paths = [*donation.proof_paths, *store_uploads(files, DONATION_PROOFS)]
        donation.save(update_fields=["proof_paths", "updated_at"])

        return Response({"donation": DonationSerializer(donation).data})


# -------- Receiver --------
class ReceiverDonationListView(APIView):
    """Donations to the receiver's own projects, filtered by `status` (default pending)."""
    permission_classes = RECEIVER_PERMISSIONS

    def get(self, request):
        receiver_status = request.query_params.get("status", "pending")
        if receiver_status not in dict(RECEIVER_STATUS_CHOICES):
            raise ValidationError("Invalid status")

        donations = Donation.objects.filter(
            project__receiver=request.user,
            receiver_status=receiver_status,
        ).select_related("project")
        return Response({"donations": DonationWithProjectSerializer(donations, many=True).data})


class ReceiverDonationApproveView(APIView):
    permission_classes = RECEIVER_PERMISSIONS

    def post(self, request, pk):
        serializer = DecisionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        donation = approve_donation(get_donation(pk), request.user, serializer.validated_data["remark"])
        return Response({"donation": DonationSerializer(donation).data})


class ReceiverDonationRejectView(APIView):
    permission_classes = RECEIVER_PERMISSIONS

    def post(self, request, pk):
        serializer = DecisionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        donation = reject_donation(get_donation(pk), request.user, serializer.validated_data["remark"])
        return Response({"donation": DonationSerializer(donation).data})
