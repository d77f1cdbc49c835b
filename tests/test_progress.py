from decimal import Decimal
from unittest import mock

import pytest

from apps.notifications.models import PROGRESS_APPROVED, PROGRESS_REJECTED, Notification
from apps.progress.models import ProgressUpdate
from apps.progress.services import approve_progress_update
from apps.projects.constants import STATUS_PENDING
from apps.users.models import ROLE_FIELD

from .helpers import bearer, upload

pytestmark = pytest.mark.django_db


@pytest.fixture
def assigned_project(project, field_worker):
    project.assigned_field_workers.add(field_worker)
    return project


def report(client, project, **overrides):
    payload = {
        "step_key": "step-1",
        "work_status": "ongoing",
        "percent_complete": 40,
        "amount_used": "1000",
        "notes": "Materials bought",
        "media": [upload("site.png")],
    }
    payload.update(overrides)
    return client.post(f"/api/field/projects/{project.id}/progress/", payload, format="multipart")


def make_update(project, worker, percent=40, amount="1000"):
    return ProgressUpdate.objects.create(
        project=project,
        field_worker=worker,
        step_key="step-1",
        step_title="Step 1",
        work_status="ongoing",
        percent_complete=percent,
        amount_used=Decimal(amount),
        media_paths=["/uploads/progress-media/1_site.png"],
    )


def test_field_worker_reports_progress(api_client, field_worker, assigned_project):
    response = report(bearer(api_client, field_worker), assigned_project)

    assert response.status_code == 201
    update = response.json()["update"]
    assert update["step_key"] == "step-1"
    assert update["step_title"] == assigned_project.get_step("step-1")["title"]
    assert update["approval_status"] == "pending"
    assert update["percent_complete"] == 40
    assert update["media_paths"][0].startswith("/uploads/progress-media/")

    assigned_project.refresh_from_db()
    assert assigned_project.progress_percent == 0
    assert assigned_project.spent_amount == Decimal("0")


def test_unknown_step_creates_nothing(api_client, field_worker, assigned_project):
    response = report(bearer(api_client, field_worker), assigned_project, step_key="step-9")

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid step"
    assert not ProgressUpdate.objects.exists()


def test_unassigned_worker_is_forbidden(api_client, field_worker, project):
    response = report(bearer(api_client, field_worker), project)

    assert response.status_code == 403
    assert not ProgressUpdate.objects.exists()


def test_missing_project(api_client, field_worker):
    response = bearer(api_client, field_worker).get("/api/field/projects/999/")

    assert response.status_code == 404
    assert response.json()["message"] == "Project not found"


def test_media_is_required(api_client, field_worker, assigned_project):
    response = report(bearer(api_client, field_worker), assigned_project, media=[])

    assert response.status_code == 400
    assert response.json()["message"] == "At least one proof file is required"


@pytest.mark.parametrize("percent", [101, -1, "half"])
def test_percent_must_be_whole_number_in_range(api_client, field_worker, assigned_project, percent):
    response = report(bearer(api_client, field_worker), assigned_project, percent_complete=percent)

    assert response.status_code == 400
    assert response.json()["message"].startswith("percent_complete:")


def test_unverified_worker_cannot_report(api_client, make_user, project):
    worker = make_user(ROLE_FIELD, verified=False)
    project.assigned_field_workers.add(worker)

    response = report(bearer(api_client, worker), project)

    assert response.status_code == 403
    assert response.json()["message"] == "Account pending admin verification"


def test_field_project_list_shows_assigned_approved_only(
    api_client, field_worker, assigned_project, receiver, make_project
):
    pending = make_project(receiver, status=STATUS_PENDING)
    pending.assigned_field_workers.add(field_worker)
    make_project(receiver)

    response = bearer(api_client, field_worker).get("/api/field/projects/")

    assert response.status_code == 200
    assert [p["id"] for p in response.json()["projects"]] == [assigned_project.id]


def test_worker_sees_own_updates(api_client, field_worker, make_user, assigned_project):
    other = make_user(ROLE_FIELD)
    assigned_project.assigned_field_workers.add(other)
    mine = make_update(assigned_project, field_worker)
    make_update(assigned_project, other)

    response = bearer(api_client, field_worker).get(f"/api/field/projects/{assigned_project.id}/progress/")

    assert response.status_code == 200
    assert [u["id"] for u in response.json()["updates"]] == [mine.id]


def test_approvals_roll_up_into_project(api_client, admin_user, field_worker, assigned_project):
    first = make_update(assigned_project, field_worker, percent=40, amount="1000")
    second = make_update(assigned_project, field_worker, percent=25, amount="500")
    bearer(api_client, admin_user)

    response = api_client.post(f"/api/admin/progress-updates/{first.id}/approve/", {"remark": "ok"}, format="json")
    assert response.status_code == 200
    assert response.json()["update"]["approval_status"] == "approved"

    api_client.post(f"/api/admin/progress-updates/{second.id}/approve/", {}, format="json")

    assigned_project.refresh_from_db()
    assert assigned_project.spent_amount == Decimal("1500")
    # a lower report never pulls the percentage back
    assert assigned_project.progress_percent == 40

    notifs = Notification.objects.filter(recipient=field_worker, notif_type=PROGRESS_APPROVED)
    assert notifs.count() == 2


def test_second_approval_rolls_up_nothing(api_client, admin_user, field_worker, assigned_project):
    update = make_update(assigned_project, field_worker, percent=60, amount="700")
    bearer(api_client, admin_user)

    api_client.post(f"/api/admin/progress-updates/{update.id}/approve/", {}, format="json")
    response = api_client.post(f"/api/admin/progress-updates/{update.id}/approve/", {}, format="json")

    assert response.status_code == 200
    assigned_project.refresh_from_db()
    assert assigned_project.spent_amount == Decimal("700")
    assert assigned_project.progress_percent == 60
    assert Notification.objects.filter(notif_type=PROGRESS_APPROVED).count() == 1


def test_overlapping_approvals_roll_up_once(field_worker, assigned_project):
    update = make_update(assigned_project, field_worker, percent=40, amount="1000")
    # both copies are read before either approval lands
    first = ProgressUpdate.objects.get(pk=update.pk)
    second = ProgressUpdate.objects.get(pk=update.pk)

    approve_progress_update(first)
    approve_progress_update(second)

    assigned_project.refresh_from_db()
    assert assigned_project.spent_amount == Decimal("1000")
    assert assigned_project.progress_percent == 40
    assert second.approval_status == ProgressUpdate.APPROVAL_APPROVED
    assert Notification.objects.filter(notif_type=PROGRESS_APPROVED).count() == 1


def test_reject_leaves_project_untouched(api_client, admin_user, field_worker, assigned_project):
    update = make_update(assigned_project, field_worker)

    response = bearer(api_client, admin_user).post(
        f"/api/admin/progress-updates/{update.id}/reject/", {"remark": "blurry photos"}, format="json"
    )

    assert response.status_code == 200
    body = response.json()["update"]
    assert body["approval_status"] == "rejected"
    assert body["admin_remark"] == "blurry photos"
    assigned_project.refresh_from_db()
    assert assigned_project.spent_amount == Decimal("0")
    assert assigned_project.progress_percent == 0
    assert Notification.objects.filter(recipient=field_worker, notif_type=PROGRESS_REJECTED).exists()


def test_approved_update_cannot_be_rejected(api_client, admin_user, field_worker, assigned_project):
    update = make_update(assigned_project, field_worker)
    bearer(api_client, admin_user)
    api_client.post(f"/api/admin/progress-updates/{update.id}/approve/", {}, format="json")

    response = api_client.post(f"/api/admin/progress-updates/{update.id}/reject/", {}, format="json")

    assert response.status_code == 400
    assert response.json()["message"] == "Progress update already approved"


def test_rollup_survives_notification_failure(api_client, admin_user, field_worker, assigned_project):
    update = make_update(assigned_project, field_worker, percent=30, amount="200")

    with mock.patch.object(Notification.objects, "create", side_effect=RuntimeError("db down")):
        response = bearer(api_client, admin_user).post(
            f"/api/admin/progress-updates/{update.id}/approve/", {}, format="json"
        )

    assert response.status_code == 200
    assigned_project.refresh_from_db()
    assert assigned_project.spent_amount == Decimal("200")
    assert assigned_project.progress_percent == 30
    assert not Notification.objects.exists()
