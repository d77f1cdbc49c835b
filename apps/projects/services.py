import logging

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from apps.notifications.models import PROJECT_APPROVED, PROJECT_REJECTED
from apps.notifications.services.create_notifications import notify_user
from apps.projects.constants import STATUS_APPROVED, STATUS_REJECTED
from apps.users.models import ROLE_FIELD, User

logger = logging.getLogger(__name__)

DECISION_FIELDS = ["status", "admin_remark", "approved_at", "rejected_at", "published_at", "updated_at"]


def approve_project(project, remark="", actor=None):
    """
    Publish a request. Approving again re-publishes: timestamps are reset
    and the receiver is notified again.
    """
    now = timezone.now()
    project.status = STATUS_APPROVED
    project.admin_remark = remark
    project.approved_at = now
    project.published_at = now
    project.rejected_at = None

    # only decision fields; rollups are written by the donation/progress services
    project.save(update_fields=DECISION_FIELDS)
    logger.info("Project %s approved", project.id)

    notify_user(
        project.receiver,
        PROJECT_APPROVED,
        "Request Approved",
        f'Your request "{project.title}" has been approved.',
        entity_type="project",
        entity_id=project.id,
        actor=actor,
    )
    return project


def reject_project(project, remark="", actor=None):
    project.status = STATUS_REJECTED
    project.admin_remark = remark
    project.rejected_at = timezone.now()
    project.save(update_fields=DECISION_FIELDS)
    logger.info("Project %s rejected", project.id)

    notify_user(
        project.receiver,
        PROJECT_REJECTED,
        "Request Rejected",
        f'Your request "{project.title}" has been rejected.',
        entity_type="project",
        entity_id=project.id,
        actor=actor,
        data={"remark": remark} if remark else None,
    )
    return project


@transaction.atomic
def assign_field_workers(project, worker_ids):
    """
    Replace the assigned field workers with exactly `worker_ids`.
    Callers wanting to add a worker must send the full list.
    """
    wanted = set(worker_ids)
    workers = list(User.objects.filter(pk__in=wanted, role=ROLE_FIELD))

    missing = wanted - {worker.pk for worker in workers}
    if missing:
        raise ValidationError(
            {"field_worker_ids": f"Unknown field worker: {', '.join(str(pk) for pk in sorted(missing))}"}
        )

    project.assigned_field_workers.set(workers)
    logger.info("Project %s assigned to field workers %s", project.id, sorted(wanted))
    return project
