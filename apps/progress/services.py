import logging

from django.db import models, transaction
from django.db.models import F, Value
from django.db.models.functions import Greatest
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from apps.notifications.models import PROGRESS_APPROVED, PROGRESS_REJECTED
from apps.notifications.services.create_notifications import notify_user
from apps.progress.models import ProgressUpdate
from apps.projects.models import Project

logger = logging.getLogger(__name__)


def approve_progress_update(update, remark="", actor=None):
    """
    Approve a field report and roll it into the project: spent_amount grows
    by amount_used, progress_percent becomes the larger of the two.

    Only a row that is not approved yet can be moved, in the same
    transaction as the rollup, so approving twice rolls up once.
    """
    now = timezone.now()
    with transaction.atomic():
        moved = (
            ProgressUpdate.objects
            .filter(pk=update.pk)
            .exclude(approval_status=ProgressUpdate.APPROVAL_APPROVED)
            .update(
                approval_status=ProgressUpdate.APPROVAL_APPROVED,
                admin_remark=remark,
                updated_at=now,
            )
        )
        if moved:
            Project.objects.filter(pk=update.project_id).update(
                spent_amount=F("spent_amount") + update.amount_used,
                progress_percent=Greatest(
                    F("progress_percent"),
                    Value(update.percent_complete),
                    output_field=models.PositiveSmallIntegerField(),
                ),
                updated_at=now,
            )

    update.refresh_from_db()

    if not moved:
        logger.info("Progress update %s already approved, project untouched", update.id)
        return update

    logger.info("Progress update %s approved for project %s", update.id, update.project_id)

    notify_user(
        update.field_worker,
        PROGRESS_APPROVED,
        "Progress Update Approved",
        f'Your progress update for "{update.project.title}" was approved.',
        entity_type="progress_update",
        entity_id=update.id,
        actor=actor,
        data={"remark": remark} if remark else None,
    )
    return update


def reject_progress_update(update, remark="", actor=None):
    moved = (
        ProgressUpdate.objects
        .filter(pk=update.pk)
        .exclude(approval_status=ProgressUpdate.APPROVAL_APPROVED)
        .update(
            approval_status=ProgressUpdate.APPROVAL_REJECTED,
            admin_remark=remark,
            updated_at=timezone.now(),
        )
    )
    if not moved:
        raise ValidationError("Progress update already approved")

    update.refresh_from_db()
    logger.info("Progress update %s rejected", update.id)

    notify_user(
        update.field_worker,
        PROGRESS_REJECTED,
        "Progress Update Rejected",
        f'Your progress update for "{update.project.title}" was rejected.',
        entity_type="progress_update",
        entity_id=update.id,
        actor=actor,
        data={"remark": remark} if remark else None,
    )
    return update
