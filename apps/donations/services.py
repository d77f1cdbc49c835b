import logging
from decimal import Decimal

from django.db import transaction
from django.db.models import F
from django.utils import timezone
from rest_framework.exceptions import PermissionDenied, ValidationError

from apps.donations.constants import (
    RECEIVER_APPROVED,
    RECEIVER_REJECTED,
    VERIFICATION_APPROVED,
    VERIFICATION_FLAGGED,
)
from apps.donations.models import Donation
from apps.notifications.models import DONATION_APPROVED, DONATION_REJECTED
from apps.notifications.services.create_notifications import notify_user
from apps.projects.models import Project

logger = logging.getLogger(__name__)


def format_pkr(amount):
    """
    5000 -> "PKR 5,000", 1250.5 -> "PKR 1,250.5"
    """
    text = f"{Decimal(amount):,.2f}"
    text = text.rstrip("0").rstrip(".")
    return f"PKR {text}"


def _check_owner(donation, receiver):
    if donation.project.receiver_id != receiver.pk:
        raise PermissionDenied("Forbidden")


def approve_donation(donation, receiver, remark=""):
    """
    Receiver confirms the funds arrived.

    The move into "approved" and the project's collected_amount increment
    happen in one transaction, and the status write only matches rows that
    are not approved yet. A repeated or concurrent approval therefore finds
    nothing to update and credits nothing.
    """
    _check_owner(donation, receiver)

    if not donation.proof_paths:
        raise ValidationError("Payment proof is required before approval")

    now = timezone.now()
    with transaction.atomic():
        moved = (
            Donation.objects
            .filter(pk=donation.pk)
            .exclude(receiver_status=RECEIVER_APPROVED)
            .update(
                receiver_status=RECEIVER_APPROVED,
                verification_status=VERIFICATION_APPROVED,
                receiver_remark=remark,
                receiver_action_at=now,
                updated_at=now,
            )
        )
        if moved:
            Project.objects.filter(pk=donation.project_id).update(
                collected_amount=F("collected_amount") + donation.amount,
                updated_at=now,
            )

    donation.refresh_from_db()

    if not moved:
        logger.info("Donation %s already approved, nothing credited", donation.id)
        return donation

    logger.info("Donation %s approved, %s credited to project %s", donation.id, donation.amount, donation.project_id)

    notify_user(
        donation.donor,
        DONATION_APPROVED,
        "Donation Approved",
        f'Your donation for "{donation.project.title}" was approved ({format_pkr(donation.amount)}).',
        entity_type="donation",
        entity_id=donation.id,
        actor=receiver,
        data={"remark": remark} if remark else None,
    )
    return donation


def reject_donation(donation, receiver, remark=""):
    """
    Receiver reports the funds never arrived. No amount changes; a donation
    that was already approved stays approved.
    """
    _check_owner(donation, receiver)

    now = timezone.now()
    moved = (
        Donation.objects
        .filter(pk=donation.pk)
        .exclude(receiver_status=RECEIVER_APPROVED)
        .update(
            receiver_status=RECEIVER_REJECTED,
            verification_status=VERIFICATION_FLAGGED,
            receiver_remark=remark,
            receiver_action_at=now,
            updated_at=now,
        )
    )
    if not moved:
        raise ValidationError("Donation already approved")

    donation.refresh_from_db()
    logger.info("Donation %s rejected by receiver %s", donation.id, receiver.pk)

    notify_user(
        donation.donor,
        DONATION_REJECTED,
        "Donation Rejected",
        f'Your donation for "{donation.project.title}" was rejected.',
        entity_type="donation",
        entity_id=donation.id,
        actor=receiver,
        data={"remark": remark} if remark else None,
    )
    return donation
